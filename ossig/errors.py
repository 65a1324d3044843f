from typing import Dict, Optional, Type


class OSSError(Exception):
    """Base class for everything raised by ossig."""


class ConfigurationError(OSSError):
    """Credentials or endpoint settings are missing or invalid."""


class ResponseError(OSSError):
    """The service answered with a non-2xx status."""

    def __init__(
            self,
            status: int,
            code: str = '',
            message: str = '',
            resource: str = '',
            request_id: str = '',
            host_id: str = ''
    ) -> None:
        super().__init__(f"{status} {code}: {message}")
        self.status = status
        self.code = code
        self.message = message
        self.resource = resource
        self.request_id = request_id
        self.host_id = host_id

    def __repr__(self) -> str:
        return f"{type(self).__name__}(status={self.status!r}, code={self.code!r}, resource={self.resource!r})"


class NoSuchBucket(ResponseError):
    pass


class NoSuchKey(ResponseError):
    pass


class AccessDenied(ResponseError):
    pass


class SignatureDoesNotMatch(ResponseError):
    pass


ERRORS_BY_CODE: Dict[str, Type[ResponseError]] = {
    'NoSuchBucket': NoSuchBucket,
    'NoSuchKey': NoSuchKey,
    'AccessDenied': AccessDenied,
    'SignatureDoesNotMatch': SignatureDoesNotMatch,
}


def error_for(status: int, code: Optional[str] = None, **details: str) -> ResponseError:
    cls = ERRORS_BY_CODE.get(code or '', ResponseError)
    return cls(status, code or '', **details)
