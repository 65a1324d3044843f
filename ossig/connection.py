import logging
from typing import Mapping, Optional, Union
from urllib.parse import quote, urlencode
from xml.etree.ElementTree import ParseError

from .config import Config
from .errors import ResponseError, error_for
from .parsers import parse_error
from .signer import Method, SignableRequest, authorization_header, http_date
from .transport import Body, RequestsTransport, Response, Transport

logger = logging.getLogger(__name__)

Params = Mapping[str, Union[str, int]]


class Connection:
    """
    Signs requests with the configured credentials and sends them through a
    :class:`~ossig.transport.Transport`.

    Non-2xx replies are raised as :class:`~ossig.errors.ResponseError` (or the
    subclass matching the error code in the reply body).
    """

    def __init__(self, config: Config, transport: Optional[Transport] = None) -> None:
        self.config = config
        self.transport = transport or RequestsTransport()

    @staticmethod
    def path(bucket: Optional[str] = None, key: Optional[str] = None) -> str:
        if bucket is None:
            return '/'
        path = '/' + bucket
        if key is None:
            return path
        return path + '/' + quote(key)

    def url(self, path: str, params: Optional[Params] = None) -> str:
        url = self.config.base_url + path
        if params:
            url += '?' + urlencode(params)
        return url

    def request(
            self,
            method: Union[Method, str],
            bucket: Optional[str] = None,
            key: Optional[str] = None,
            body: Body = None,
            params: Optional[Params] = None,
            headers: Optional[Mapping[str, str]] = None
    ) -> Response:
        method = Method(method.upper()) if isinstance(method, str) else method
        path = self.path(bucket, key)
        headers = dict(headers or {})
        if isinstance(body, str):
            body = body.encode('utf-8')

        lowered = {name.lower() for name in headers}
        if 'date' not in lowered:
            headers['Date'] = http_date()
        if body is not None and 'content-length' not in lowered:
            headers['Content-Length'] = str(len(body))
        headers['Authorization'] = authorization_header(
            SignableRequest(method, path, headers), self.config.credentials
        )

        response = self.transport.request(
            method.value, self.url(path, params), headers, body, timeout=self.config.timeout
        )
        logger.debug("%s %s -> %d", method.value, path, response.status)
        if not response.ok:
            raise self._error(response)
        return response

    def _error(self, response: Response) -> ResponseError:
        details = {}
        if response.body:
            try:
                details = parse_error(response.body)
            except ParseError:
                details = {'message': response.text}
        code = details.pop('code', '') or response.reason
        error = error_for(response.status, code, **details)
        logger.warning("Request failed: %r", error)
        return error

    def get(self, bucket: Optional[str] = None, key: Optional[str] = None, **kwargs) -> Response:
        return self.request(Method.GET, bucket, key, **kwargs)

    def put(self, bucket: Optional[str] = None, key: Optional[str] = None, **kwargs) -> Response:
        return self.request(Method.PUT, bucket, key, **kwargs)

    def head(self, bucket: Optional[str] = None, key: Optional[str] = None, **kwargs) -> Response:
        return self.request(Method.HEAD, bucket, key, **kwargs)

    def delete(self, bucket: Optional[str] = None, key: Optional[str] = None, **kwargs) -> Response:
        return self.request(Method.DELETE, bucket, key, **kwargs)

    def close(self) -> None:
        self.transport.close()
