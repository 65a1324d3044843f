"""
Credentials and endpoint settings.

Both are frozen dataclasses: once loaded they are shared read-only by the
signer, connections and URL generators.
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .errors import ConfigurationError

DEFAULT_HOST = 'oss.aliyuncs.com'
DEFAULT_TIMEOUT = 60.0

PORTS_BY_SECURITY = {True: 443, False: 80}

ACCESS_KEY_ID_VAR = 'OSS_ACCESS_KEY_ID'
SECRET_ACCESS_KEY_VAR = 'OSS_SECRET_ACCESS_KEY'

_FALSE_VALUES = ('0', 'false', 'no', 'off')


@dataclass(frozen=True)
class Credentials:
    access_key_id: str
    secret_access_key: str

    def __repr__(self) -> str:
        # secret is never shown
        return f"Credentials(access_key_id={self.access_key_id!r})"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'Credentials':
        environ = os.environ if environ is None else environ
        values = []
        for name in (ACCESS_KEY_ID_VAR, SECRET_ACCESS_KEY_VAR):
            value = environ.get(name)
            if not value:
                raise ConfigurationError(f"Environment variable {name} is not set")
            values.append(value)
        return cls(*values)


@dataclass(frozen=True)
class Config:
    credentials: Credentials
    host: str = DEFAULT_HOST
    secure: bool = True
    port: Optional[int] = None
    timeout: float = DEFAULT_TIMEOUT

    @property
    def resolved_port(self) -> int:
        return self.port or PORTS_BY_SECURITY[self.secure]

    @property
    def protocol(self) -> str:
        return 'https' if self.secure else 'http'

    @property
    def base_url(self) -> str:
        return f"{self.protocol}://{self.host}:{self.resolved_port}"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'Config':
        environ = os.environ if environ is None else environ
        credentials = Credentials.from_env(environ)
        secure = environ.get('OSS_SECURE', '1').strip().lower() not in _FALSE_VALUES
        port = None
        raw_port = environ.get('OSS_PORT')
        if raw_port:
            try:
                port = int(raw_port)
            except ValueError:
                raise ConfigurationError(f"OSS_PORT must be an integer, got {raw_port!r}") from None
        return cls(
            credentials,
            host=environ.get('OSS_HOST') or DEFAULT_HOST,
            secure=secure,
            port=port,
        )
