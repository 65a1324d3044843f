"""
Network layer used by :class:`ossig.connection.Connection`.

Connections only talk to a :class:`Transport`; tests hand in their own
implementation instead of patching the HTTP library.
"""

import abc
from dataclasses import dataclass, field
from typing import Mapping, Optional, Union

import requests
from requests.structures import CaseInsensitiveDict

Body = Union[bytes, str, None]


@dataclass
class Response:
    status: int
    headers: CaseInsensitiveDict = field(default_factory=CaseInsensitiveDict)
    body: bytes = b''
    reason: str = ''

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    @property
    def text(self) -> str:
        return self.body.decode('utf-8', errors='replace')


class Transport(abc.ABC):
    @abc.abstractmethod
    def request(
            self,
            method: str,
            url: str,
            headers: Mapping[str, str],
            body: Body = None,
            timeout: Optional[float] = None
    ) -> Response:
        """Send one request and return the complete response."""

    def close(self) -> None:
        pass

    def __enter__(self) -> 'Transport':
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


class RequestsTransport(Transport):
    def __init__(self, session: Optional[requests.Session] = None) -> None:
        self._session = session or requests.Session()

    def request(
            self,
            method: str,
            url: str,
            headers: Mapping[str, str],
            body: Body = None,
            timeout: Optional[float] = None
    ) -> Response:
        reply = self._session.request(method, url, headers=dict(headers), data=body, timeout=timeout)
        return Response(
            status=reply.status_code,
            headers=CaseInsensitiveDict(reply.headers),
            body=reply.content,
            reason=reply.reason or '',
        )

    def close(self) -> None:
        self._session.close()
