import time
from typing import Mapping, Optional, Union
from urllib.parse import urlencode

from .config import Config
from .connection import Connection
from .signer import Method, SignableRequest, presigned_query_string

DEFAULT_EXPIRES_IN = 60


class Generator:
    """
    Builds pre-signed URLs that grant temporary access without credentials.

    Expiry is either relative to the moment each URL is generated
    (:meth:`set_expires_in`) or an absolute unix timestamp
    (:meth:`set_expires`).
    """

    def __init__(self, config: Config, expires_in: int = DEFAULT_EXPIRES_IN) -> None:
        self.config = config
        self._expires_in: Optional[int] = expires_in
        self._expires: Optional[int] = None

    def set_expires_in(self, expires_in: int) -> None:
        self._expires_in = expires_in
        self._expires = None

    def set_expires(self, expires: Union[int, float]) -> None:
        self._expires = int(expires)
        self._expires_in = None

    def expires(self) -> int:
        if self._expires is not None:
            return self._expires
        return int(time.time() + (self._expires_in or 0))

    def bare_url(self, bucket: str, key: str = '') -> str:
        """Unsigned URL of a bucket or object."""
        return self.config.base_url + Connection.path(bucket, key or None)

    def _generate(
            self,
            method: Method,
            bucket: Optional[str] = None,
            key: Optional[str] = None,
            params: Optional[Mapping[str, Union[str, int]]] = None,
            headers: Optional[Mapping[str, str]] = None
    ) -> str:
        path = Connection.path(bucket, key)
        request = SignableRequest(method, path, dict(headers or {}), expires=self.expires())
        query = presigned_query_string(request, self.config.credentials)
        if params:
            query = urlencode(params) + '&' + query
        return f"{self.config.base_url}{path}?{query}"

    def get(self, bucket: str, key: str, headers: Optional[Mapping[str, str]] = None) -> str:
        return self._generate(Method.GET, bucket, key, headers=headers)

    def put(self, bucket: str, key: str, headers: Optional[Mapping[str, str]] = None) -> str:
        """
        URL for uploading ``key``.

        Any ``Content-Type``, ``Content-MD5`` or ``x-oss-`` headers passed here
        are signed, so the uploader must send exactly the same values.
        """
        return self._generate(Method.PUT, bucket, key, headers=headers)

    def delete(self, bucket: str, key: str) -> str:
        return self._generate(Method.DELETE, bucket, key)

    def list_bucket(self, name: str, params: Optional[Mapping[str, Union[str, int]]] = None) -> str:
        return self._generate(Method.GET, name, params=params)

    def list_buckets(self) -> str:
        return self._generate(Method.GET)

    def create_bucket(self, name: str) -> str:
        return self._generate(Method.PUT, name)

    def delete_bucket(self, name: str) -> str:
        return self._generate(Method.DELETE, name)
