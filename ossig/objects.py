import base64
import hashlib
from typing import Dict, List, Mapping, Optional, Union

from .connection import Connection
from .errors import OSSError
from .parsers import ObjectListing, parse_list_objects

META_PREFIX = 'x-oss-meta-'
DEFAULT_CONTENT_TYPE = 'binary/octet-stream'


class OSSObject:
    def __init__(
            self,
            key: str,
            data: Union[bytes, str] = b'',
            metadata: Optional[Mapping[str, str]] = None,
            content_type: Optional[str] = None,
            last_modified: Optional[str] = None,
            etag: Optional[str] = None,
            bucket: Optional['Bucket'] = None
    ) -> None:
        self.key = key
        self.data = data
        self.metadata = {name.lower(): value for name, value in (metadata or {}).items()}
        self.content_type = content_type
        self.last_modified = last_modified
        self.etag = etag
        self._bucket = bucket

    def __repr__(self) -> str:
        return f"<OSSObject {self.key!r}>"

    def meta_headers(self) -> Dict[str, str]:
        return {META_PREFIX + name: value for name, value in self.metadata.items()}

    def save(self) -> None:
        self._require_bucket().save(self)

    def delete(self) -> None:
        self._require_bucket().delete(self)

    def _require_bucket(self) -> 'Bucket':
        if self._bucket is None:
            raise OSSError(f"Object {self.key!r} has no bucket associated with it")
        return self._bucket


def content_md5(data: bytes) -> str:
    return base64.b64encode(hashlib.md5(data).digest()).decode('ascii')


class Bucket:
    """
    Dictionary-like view of the objects in one bucket.

    ``bucket[key]`` fetches an object, ``key in bucket`` checks for it and
    ``del bucket[key]`` removes it.
    """

    def __init__(self, name: str, connection: Connection) -> None:
        self.name = name
        self._conn = connection

    def __repr__(self) -> str:
        return f"<Bucket {self.name!r}>"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Bucket) and other.name == self.name

    def __hash__(self) -> int:
        return hash(self.name)

    def get(self, key: str, headers: Optional[Mapping[str, str]] = None) -> OSSObject:
        response = self._conn.get(self.name, key, headers=headers)
        metadata = {
            name[len(META_PREFIX):]: value
            for name, value in response.headers.items()
            if name.lower().startswith(META_PREFIX)
        }
        return OSSObject(
            key,
            response.body,
            metadata,
            content_type=response.headers.get('Content-Type'),
            last_modified=response.headers.get('Last-Modified'),
            etag=response.headers.get('ETag'),
            bucket=self,
        )

    def head(self, key: str, headers: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
        return dict(self._conn.head(self.name, key, headers=headers).headers)

    def save(self, obj: OSSObject, headers: Optional[Mapping[str, str]] = None) -> None:
        data = obj.data.encode('utf-8') if isinstance(obj.data, str) else obj.data
        request_headers = {
            'Content-Type': obj.content_type or DEFAULT_CONTENT_TYPE,
            'Content-MD5': content_md5(data),
        }
        request_headers.update(obj.meta_headers())
        request_headers.update(headers or {})
        response = self._conn.put(self.name, obj.key, body=data, headers=request_headers)
        obj.etag = response.headers.get('ETag', obj.etag)
        obj._bucket = self

    def put(
            self,
            key: str,
            data: Union[bytes, str],
            content_type: Optional[str] = None,
            metadata: Optional[Mapping[str, str]] = None,
            headers: Optional[Mapping[str, str]] = None
    ) -> OSSObject:
        obj = OSSObject(key, data, metadata, content_type=content_type, bucket=self)
        self.save(obj, headers)
        return obj

    def delete(self, objects: Union[str, OSSObject, List[Union[str, OSSObject]]]) -> None:
        """Delete a key, an object, or a list of either."""
        if not isinstance(objects, list):
            objects = [objects]
        for obj in objects:
            key = obj.key if isinstance(obj, OSSObject) else obj
            self._conn.delete(self.name, key)

    def listing(
            self,
            prefix: Optional[str] = None,
            marker: Optional[str] = None,
            max_keys: Optional[int] = None,
            delimiter: Optional[str] = None
    ) -> ObjectListing:
        """
        List one page of the bucket.

        ``prefix`` limits the keys returned, ``marker`` starts the listing
        after that key, and ``delimiter`` rolls keys sharing the part up to
        the delimiter into ``common_prefixes``.
        """
        params = {}
        if prefix:
            params['prefix'] = prefix
        if marker:
            params['marker'] = marker
        if max_keys:
            params['max-keys'] = max_keys
        if delimiter:
            params['delimiter'] = delimiter
        response = self._conn.get(self.name, params=params)
        return parse_list_objects(response.body)

    def keys(self, prefix: Optional[str] = None, delimiter: Optional[str] = None) -> List[str]:
        """All keys (and common prefixes), following truncated listings."""
        keys: List[str] = []
        marker = None
        while True:
            page = self.listing(prefix=prefix, marker=marker, delimiter=delimiter)
            keys.extend(page.keys)
            keys.extend(page.common_prefixes)
            if not page.is_truncated or not page.resume_marker:
                return keys
            marker = page.resume_marker

    def __contains__(self, key: str) -> bool:
        return key in self.listing(prefix=key).keys

    def __getitem__(self, key: str) -> OSSObject:
        return self.get(key)

    def __delitem__(self, key: Union[str, OSSObject]) -> None:
        self.delete(key)
