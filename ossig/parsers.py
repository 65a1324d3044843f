"""
Parsing of the XML documents returned by the service.

Element lookups ignore XML namespaces so that replies from S3-compatible
servers with a different (or no) default namespace parse the same way.
"""

import re
import xml.etree.ElementTree as et
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, List, Optional, Union

Xml = Union[bytes, str]

# fromisoformat before 3.11 only takes 3 or 6 fraction digits
_FRACTION_RE = re.compile(r"\.(\d+)")

_ERROR_FIELDS = {
    'Code': 'code',
    'Message': 'message',
    'Resource': 'resource',
    'RequestId': 'request_id',
    'HostId': 'host_id',
}


@dataclass
class BucketEntry:
    name: str
    creation_date: Optional[datetime] = None


@dataclass
class ObjectEntry:
    key: str
    last_modified: Optional[datetime] = None
    etag: str = ''
    size: int = 0
    storage_class: str = ''


@dataclass
class ObjectListing:
    name: str = ''
    prefix: str = ''
    marker: str = ''
    next_marker: str = ''
    max_keys: Optional[int] = None
    is_truncated: bool = False
    objects: List[ObjectEntry] = field(default_factory=list)
    common_prefixes: List[str] = field(default_factory=list)

    @property
    def keys(self) -> List[str]:
        return [obj.key for obj in self.objects]

    @property
    def resume_marker(self) -> str:
        """Marker for the page after this one: ``NextMarker``, else the last key or prefix listed."""
        if self.next_marker:
            return self.next_marker
        return max(self.keys[-1:] + self.common_prefixes[-1:], default='')


def _local(tag: str) -> str:
    return tag.rsplit('}', 1)[-1]


def _children(node: et.Element, name: str) -> List[et.Element]:
    return [child for child in node if _local(child.tag) == name]


def _child(node: et.Element, name: str) -> Optional[et.Element]:
    found = _children(node, name)
    return found[0] if found else None


def _text(node: et.Element, name: str, default: str = '') -> str:
    child = _child(node, name)
    if child is None or child.text is None:
        return default
    return child.text


def parse_timestamp(value: str) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp such as ``2006-02-03T16:45:09.000Z``."""
    if not value:
        return None
    value = value.strip()
    if value.endswith('Z'):
        value = value[:-1] + '+00:00'
    value = _FRACTION_RE.sub(lambda m: '.' + m.group(1)[:6].ljust(6, '0'), value, count=1)
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def parse_error(xml: Xml) -> Dict[str, str]:
    root = et.fromstring(xml)
    return {attr: _text(root, tag) for tag, attr in _ERROR_FIELDS.items()}


def parse_list_buckets(xml: Xml) -> List[BucketEntry]:
    root = et.fromstring(xml)
    buckets = _child(root, 'Buckets')
    if buckets is None:
        return []
    return [
        BucketEntry(_text(bucket, 'Name'), parse_timestamp(_text(bucket, 'CreationDate')))
        for bucket in _children(buckets, 'Bucket')
    ]


def parse_list_objects(xml: Xml) -> ObjectListing:
    root = et.fromstring(xml)
    max_keys = _text(root, 'MaxKeys')
    listing = ObjectListing(
        name=_text(root, 'Name'),
        prefix=_text(root, 'Prefix'),
        marker=_text(root, 'Marker'),
        next_marker=_text(root, 'NextMarker'),
        max_keys=int(max_keys) if max_keys else None,
        is_truncated=_text(root, 'IsTruncated').lower() == 'true',
    )
    for contents in _children(root, 'Contents'):
        listing.objects.append(ObjectEntry(
            key=_text(contents, 'Key'),
            last_modified=parse_timestamp(_text(contents, 'LastModified')),
            etag=_text(contents, 'ETag'),
            size=int(_text(contents, 'Size', '0')),
            storage_class=_text(contents, 'StorageClass'),
        ))
    for prefix in _children(root, 'CommonPrefixes'):
        listing.common_prefixes.append(_text(prefix, 'Prefix'))
    return listing
