import asyncio
import importlib
from logging import getLogger
from typing import Any, Callable, Iterable, Optional, Protocol

from httpx import AsyncClient, Client, Headers, HTTPError, Response

from ._config import Config
from ._utils import FormData, mimeify, parse_content_type, serialize_body
from ._utils._ssl_context import get_httpx_client_kwargs
from ._utils.constants import FALLBACK_TRANSPORTS, HEADER_CONTENT_TYPE, TRANSPORT_EVENTS

logger = getLogger("restchain")


class Transport(Protocol):
    """XHR-like object performing a single network exchange.

    ``open`` and ``set_request_header`` configure the exchange, ``send`` starts
    it without blocking and exactly one of ``on_load`` / ``on_error`` is called
    once it is over.
    """

    status: int
    response: Any
    response_text: str
    on_load: Optional[Callable[[], None]]
    on_error: Optional[Callable[[Any], None]]

    def open(self, method: str, url: str, async_: bool = True) -> None: ...

    def send(self, body: Any = None) -> None: ...

    def set_request_header(self, field: str, value: str) -> None: ...


class HttpxTransport:
    """Transport backed by ``httpx.AsyncClient``."""

    events = TRANSPORT_EVENTS

    def __init__(
        self, client: Optional[AsyncClient] = None, config: Optional[Config] = None
    ) -> None:
        self._logger = getLogger("restchain")
        self._client = client
        self._config = config

        self._method: Optional[str] = None
        self._url: Optional[str] = None
        self._headers: dict[str, str] = {}
        self._task: Optional[asyncio.Task] = None

        self.status = 0
        self.response: Any = None
        self.response_text = ""
        self.response_headers = Headers()

        self.on_load: Optional[Callable[[], None]] = None
        self.on_error: Optional[Callable[[Any], None]] = None

    def open(self, method: str, url: str, async_: bool = True) -> None:
        if not async_:
            raise ValueError(f"{type(self).__name__} only supports asynchronous exchanges")
        self._method = method
        self._url = url

    def set_request_header(self, field: str, value: str) -> None:
        self._headers[field] = value

    def send(self, body: Any = None) -> None:
        if self._method is None or self._url is None:
            raise RuntimeError("open() must be called before send()")

        self._task = asyncio.get_running_loop().create_task(self._exchange(body))

    def _request_kwargs(self, body: Any) -> dict[str, Any]:
        headers = dict(self._headers)
        content_type = next(
            (v for k, v in headers.items() if k.lower() == HEADER_CONTENT_TYPE.lower()),
            None,
        )

        if isinstance(body, FormData):
            # httpx writes its own Content-Type carrying the multipart boundary
            headers = {
                k: v for k, v in headers.items() if k.lower() != HEADER_CONTENT_TYPE.lower()
            }
            return {"headers": headers, "files": body.to_files()}

        mime_type, charset = parse_content_type(content_type)
        return {"headers": headers, "content": serialize_body(body, mime_type, charset)}

    async def _perform(self, kwargs: dict[str, Any]) -> Response:
        if self._client is not None:
            return await self._client.request(self._method, self._url, **kwargs)

        async with AsyncClient(**get_httpx_client_kwargs(self._config)) as client:
            return await client.request(self._method, self._url, **kwargs)

    async def _exchange(self, body: Any) -> None:
        self._logger.debug(f"Request: {self._method} {self._url}")
        self._logger.debug(f"HEADERS: {self._headers}")

        try:
            response = await self._perform(self._request_kwargs(body))
        except HTTPError as e:
            self._logger.debug(f"Transport error: {self._method} {self._url}: {e}")
            self._fail(e)
            return
        except Exception as e:
            self._logger.debug(f"Exchange failed: {self._method} {self._url}: {e!r}")
            self._fail(e)
            return

        self.status = response.status_code
        self.response_headers = response.headers
        self.response_text = response.text
        self.response = self._decode(response)

        self._logger.debug(f"Response: {self.status} {self._method} {self._url}")
        if self.on_load is not None:
            self.on_load()

    def _fail(self, error: Exception) -> None:
        if self.on_error is None:
            raise error
        self.on_error(error)

    def _decode(self, response: Response) -> Any:
        mime_type, _ = parse_content_type(response.headers.get(HEADER_CONTENT_TYPE))
        try:
            return mimeify(response.text, mime_type)
        except ValueError:
            self._logger.debug(f"Could not decode response body as {mime_type}")
            return response.text


class SyncHttpxTransport(HttpxTransport):
    """Transport running a blocking ``httpx.Client`` in a worker thread."""

    def __init__(
        self, client: Optional[Client] = None, config: Optional[Config] = None
    ) -> None:
        super().__init__(config=config)
        self._sync_client = client

    def _perform_blocking(self, kwargs: dict[str, Any]) -> Response:
        if self._sync_client is not None:
            return self._sync_client.request(self._method, self._url, **kwargs)

        with Client(**get_httpx_client_kwargs(self._config)) as client:
            return client.request(self._method, self._url, **kwargs)

    async def _perform(self, kwargs: dict[str, Any]) -> Response:
        return await asyncio.to_thread(self._perform_blocking, kwargs)


def _load_factory(path: str) -> Callable[[], Transport]:
    module_name, _, attribute = path.partition(":")
    return getattr(importlib.import_module(module_name), attribute)


def create_transport(
    native: Optional[Callable[[], Transport]] = None,
    fallbacks: Iterable[str] = FALLBACK_TRANSPORTS,
) -> Optional[Transport]:
    """Build a transport for the current runtime.

    The native factory is tried first, then each ``module:attribute`` entry of
    ``fallbacks`` in order.

    Returns:
        The first transport that could be built, or ``None`` if none could.
    """
    factory = native or HttpxTransport
    try:
        return factory()
    except Exception as e:
        logger.debug(f"Native transport unavailable: {e!r}")

    for path in fallbacks:
        try:
            return _load_factory(path)()
        except Exception as e:
            logger.debug(f"Fallback transport {path} unavailable: {e!r}")

    return None
