"""
OSS request signing (HMAC-SHA1, "OSS" authorization scheme).

The string to sign is built from the request method, Content-MD5,
Content-Type, Date (or the expiry timestamp for pre-signed URLs), the
sorted ``x-oss-`` headers and the resource path::

    PUT
    c8fdb181845a4ca6b8fec737b3581d76
    text/html
    Thu, 17 Nov 2005 18:49:58 GMT
    x-oss-magic:abracadabra
    x-oss-meta-author:foo@bar.com
    /quotes/nelson

The signature is the base64 encoded HMAC-SHA1 of that string keyed with the
secret access key. It is sent either as an ``Authorization`` header or as
``OSSAccessKeyId``/``Expires``/``Signature`` query parameters.
"""

import base64
import hashlib
import hmac
import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Mapping, Optional, Tuple, Union
from urllib.parse import quote

from requests.structures import CaseInsensitiveDict

from .config import Credentials
from .errors import ConfigurationError

logger = logging.getLogger(__name__)

VENDOR_PREFIX = 'x-oss-'
AUTH_SCHEME = 'OSS'
DATE_FORMAT = '%a, %d %b %Y %H:%M:%S GMT'

Headers = Dict[str, str]


class Method(str, Enum):
    GET = 'GET'
    PUT = 'PUT'
    POST = 'POST'
    DELETE = 'DELETE'
    HEAD = 'HEAD'


def _method_name(method: Union[Method, str]) -> str:
    if isinstance(method, Method):
        return method.value
    return method.upper()


def http_date(timestamp: Optional[float] = None) -> str:
    """RFC-1123 date in GMT, for the ``Date`` header."""
    return time.strftime(DATE_FORMAT, time.gmtime(timestamp))


@dataclass
class SignableRequest:
    method: Union[Method, str]
    path: str
    headers: Mapping[str, str] = field(default_factory=dict)
    expires: Optional[int] = None


def vendor_headers(headers: Mapping[str, str]) -> List[Tuple[str, str]]:
    """
    Extract the ``x-oss-`` headers as sorted ``(lowercased name, value)`` pairs.

    Names are compared case-insensitively; when the same name appears more
    than once the value set last wins.
    """
    found: Dict[str, str] = {}
    for name, value in headers.items():
        lowered = name.lower()
        if lowered.startswith(VENDOR_PREFIX):
            found[lowered] = value
    return sorted(found.items())


def canonical_string(request: SignableRequest) -> str:
    headers = CaseInsensitiveDict(request.headers)
    if request.expires is not None:
        date = str(request.expires)
    else:
        date = headers.get('Date', '')

    parts = [
        _method_name(request.method),
        headers.get('Content-MD5', ''),
        headers.get('Content-Type', ''),
        date,
    ]
    parts.extend(f"{name}:{value}" for name, value in vendor_headers(request.headers))
    parts.append(request.path.split('?', 1)[0])
    return '\n'.join(parts)


def _require_secret(credentials: Credentials) -> str:
    secret = credentials.secret_access_key if credentials is not None else None
    if not secret:
        raise ConfigurationError("Cannot sign request: secret access key is missing or empty")
    return secret


def sign(request: SignableRequest, credentials: Credentials) -> str:
    secret = _require_secret(credentials)
    string_to_sign = canonical_string(request)
    logger.debug("String to sign:\n%s", string_to_sign)
    digest = hmac.new(secret.encode('utf-8'), string_to_sign.encode('utf-8'), hashlib.sha1).digest()
    return base64.b64encode(digest).decode('ascii')


def authorization_header(request: SignableRequest, credentials: Credentials) -> str:
    signature = sign(request, credentials)
    return f"{AUTH_SCHEME} {credentials.access_key_id}:{signature}"


def presigned_params(request: SignableRequest, credentials: Credentials) -> List[Tuple[str, str]]:
    """
    Query parameters granting temporary access to ``request``.

    ``request.expires`` must be set; it takes the place of the date in the
    string to sign. The signature is returned percent-encoded.
    """
    if request.expires is None:
        raise ValueError("Pre-signed requests need an expiry timestamp")
    signature = sign(request, credentials)
    return [
        ('OSSAccessKeyId', credentials.access_key_id),
        ('Expires', str(request.expires)),
        ('Signature', quote(signature, safe='')),
    ]


def presigned_query_string(request: SignableRequest, credentials: Credentials) -> str:
    return '&'.join(f"{name}={value}" for name, value in presigned_params(request, credentials))


class OSSSigner:
    def __init__(self, access_key_id: str, secret_access_key: str) -> None:
        self.credentials = Credentials(access_key_id, secret_access_key)

    def create_headers(
            self,
            method: Union[Method, str],
            path: str,
            headers: Optional[Mapping[str, str]] = None,
            date: Optional[str] = None
    ) -> Headers:
        """Return a copy of ``headers`` with ``Date`` (if missing) and ``Authorization`` set."""
        signed = dict(headers or {})
        if not any(name.lower() == 'date' for name in signed):
            signed['Date'] = date or http_date()
        signed['Authorization'] = authorization_header(
            SignableRequest(method, path, signed), self.credentials
        )
        return signed

    def create_query_string(
            self,
            method: Union[Method, str],
            path: str,
            expires: int,
            headers: Optional[Mapping[str, str]] = None
    ) -> str:
        request = SignableRequest(method, path, dict(headers or {}), expires=int(expires))
        return presigned_query_string(request, self.credentials)
