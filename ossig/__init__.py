"""
OSS client - request signing and a thin object storage client

This package signs requests for Aliyun OSS (and compatible services) with the
HMAC-SHA1 "OSS" scheme, either as an Authorization header or as pre-signed URL
query parameters, and provides bucket and object operations on top of it.
"""

from .config import Config, Credentials
from .connection import Connection
from .errors import (
    AccessDenied,
    ConfigurationError,
    NoSuchBucket,
    NoSuchKey,
    OSSError,
    ResponseError,
    SignatureDoesNotMatch,
)
from .generator import Generator
from .objects import Bucket, OSSObject
from .service import Service
from .signer import (
    Method,
    OSSSigner,
    SignableRequest,
    authorization_header,
    canonical_string,
    presigned_query_string,
    sign,
)
from .transport import RequestsTransport, Response, Transport

__version__ = "0.1.0"
__all__ = [
    "AccessDenied",
    "Bucket",
    "Config",
    "ConfigurationError",
    "Connection",
    "Credentials",
    "Generator",
    "Method",
    "NoSuchBucket",
    "NoSuchKey",
    "OSSError",
    "OSSObject",
    "OSSSigner",
    "RequestsTransport",
    "Response",
    "ResponseError",
    "Service",
    "SignableRequest",
    "SignatureDoesNotMatch",
    "Transport",
    "authorization_header",
    "canonical_string",
    "presigned_query_string",
    "sign",
]
