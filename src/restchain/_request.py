import asyncio
from logging import getLogger
from typing import Any, Callable, Mapping, Optional, Union

from ._transport import Transport, create_transport
from ._utils import (
    FormData,
    encode_query,
    format_content_type,
    infer_type,
    is_valid_url,
)
from ._utils.constants import (
    DEFAULT_CHARSET,
    DEFAULT_TYPE,
    HEADER_CONTENT_TYPE,
    METHODS,
    MIME_FORM_URLENCODED,
    MIME_MULTIPART,
)
from .models.errors import (
    ConfigurationError,
    HttpStatusFailure,
    TransportFailure,
    TransportUnavailableError,
    UnsupportedOperationError,
)
from .models.request import RequestDescriptor

logger = getLogger("restchain")


def is_success_status(status: int) -> bool:
    return 200 <= status < 400


class Request:
    """Deferred and chainable HTTP request.

    Every mutator validates its input and returns the request, so calls can be
    chained. Invalid URLs and methods are ignored and the previous value is
    kept; use ``set_url`` / ``set_method`` to learn whether a value was
    accepted. Nothing goes on the wire until ``send`` is called.

    Examples:
        ```python
        from restchain import Request

        payload = await (
            Request("POST", "https://api.example.com/users")
            .body({"name": "Ada"})
            .header("X-Request-Id", "42")
            .send()
        )
        ```
    """

    def __init__(
        self,
        method: Optional[str] = None,
        url: Optional[str] = None,
        body: Any = None,
        headers: Optional[Mapping[str, str]] = None,
        query: Optional[Mapping[str, Any]] = None,
        type: Optional[str] = None,
        charset: Optional[str] = None,
        *,
        transport_factory: Optional[Callable[[], Optional[Transport]]] = None,
    ) -> None:
        self._url: Optional[str] = None
        self._method: Optional[str] = None
        self._body: Any = None
        self._headers: dict[str, str] = {}
        self._query: Optional[str] = None
        self._type: Optional[str] = None
        self._charset: str = DEFAULT_CHARSET
        self._response: Optional[dict[str, Any]] = None
        self._transport_factory = transport_factory

        if charset is not None:
            self.charset(charset)
        if method is not None:
            self.set_method(method)
        if url is not None:
            self.set_url(url)
        if body is not None:
            self.body(body)
        # explicit headers override the Content-Type inferred from the body
        if headers is not None:
            self.headers(headers)
        if query is not None:
            self.query(query)
        if type is not None:
            self.type(type)

    # URL

    def set_url(self, url: str) -> bool:
        """Store ``url`` if it is a valid URL.

        Returns:
            bool: ``True`` if the URL was stored, ``False`` if it was ignored.
        """
        if not is_valid_url(url):
            logger.debug(f"Ignoring invalid url: {url!r}")
            return False
        self._url = url
        return True

    def url(self, url: str) -> "Request":
        self.set_url(url)
        return self

    def get_url(self) -> Optional[str]:
        return self._url

    # Method

    def set_method(self, method: str) -> bool:
        """Store ``method`` if it is one of the supported HTTP methods.

        Returns:
            bool: ``True`` if the method was stored, ``False`` if it was ignored.
        """
        if method not in METHODS:
            logger.debug(f"Ignoring invalid method: {method!r}")
            return False
        self._method = method
        return True

    def method(self, method: str) -> "Request":
        self.set_method(method)
        return self

    def get_method(self) -> Optional[str]:
        return self._method

    # Body

    def body(self, body: Any) -> "Request":
        """Set the body, declaring a content type for mappings and strings."""
        self._body = body

        inferred = infer_type(body)
        if inferred is not None:
            self.type(inferred)

        return self

    def get_body(self) -> Any:
        return self._body

    # Headers

    def header(self, field: str, value: str) -> "Request":
        self._headers[field] = value
        return self

    def headers(self, headers: Mapping[str, str]) -> "Request":
        """Replace every explicitly set header with ``headers``."""
        if isinstance(headers, Mapping):
            self._headers = dict(headers)
        else:
            logger.debug(f"Ignoring invalid headers: {headers!r}")
        return self

    def add_headers(self, headers: Mapping[str, str]) -> "Request":
        """Merge ``headers`` into the explicitly set headers."""
        if isinstance(headers, Mapping):
            self._headers.update(headers)
        else:
            logger.debug(f"Ignoring invalid headers: {headers!r}")
        return self

    def get_headers(self) -> dict[str, str]:
        """Headers to send: the synthesized Content-Type overlaid by explicit ones."""
        return {
            HEADER_CONTENT_TYPE: format_content_type(self.get_type(), self._charset),
            **self._headers,
        }

    # Query

    def query(self, params: Mapping[str, Any]) -> "Request":
        """Encode ``params`` into the query string appended on send."""
        self._query = encode_query(params if isinstance(params, Mapping) else None)
        return self

    def get_query(self) -> Optional[str]:
        return self._query

    # Content negotiation

    def type(self, mime_type: str) -> "Request":
        if not isinstance(mime_type, str) or not mime_type:
            logger.debug(f"Ignoring invalid content type: {mime_type!r}")
            return self

        self._type = mime_type
        self._headers[HEADER_CONTENT_TYPE] = format_content_type(
            mime_type, self._charset
        )
        return self

    def get_type(self) -> str:
        return self._type or DEFAULT_TYPE

    def charset(self, charset: str) -> "Request":
        self._charset = charset or DEFAULT_CHARSET
        if self._type is not None:
            self._headers[HEADER_CONTENT_TYPE] = format_content_type(
                self._type, self._charset
            )
        return self

    def get_charset(self) -> str:
        return self._charset

    def form(self, form: Mapping[str, Any]) -> "Request":
        """Send ``form`` as a form, shaped by the current method.

        POST and PUT send a ``multipart/form-data`` body, GET moves the fields
        into the query string.

        Raises:
            UnsupportedOperationError: For any other method.
        """
        method = self._method

        if method in ("POST", "PUT"):
            self.type(MIME_MULTIPART)
            self._body = FormData(form if isinstance(form, Mapping) else None)
        elif method == "GET":
            self.type(MIME_FORM_URLENCODED)
            self.query(form)
        else:
            raise UnsupportedOperationError(method, operation="form")

        return self

    @property
    def response(self) -> Optional[dict[str, Any]]:
        """Outcome of the last settled send: ``{"success": ...}`` or ``{"error": ...}``."""
        return self._response

    # Transmission

    def send(
        self,
        transport: Optional[Transport] = None,
        *,
        transport_factory: Optional[Callable[[], Optional[Transport]]] = None,
    ) -> "asyncio.Future[Any]":
        """Send the request through ``transport``.

        Must be called with a running event loop. When no transport is given
        one is built with ``transport_factory``, falling back to the factory the
        request was created with and then to ``create_transport``.

        Args:
            transport: XHR-like transport to use for this exchange.
            transport_factory: Builds the transport when none is given. May
                return ``None`` when no transport is available.

        Returns:
            asyncio.Future: Resolves with the response payload for statuses in
            ``[200, 400)``. Fails with ``HttpStatusFailure`` for any other
            status, ``TransportFailure`` when the transport reports an error and
            ``TransportUnavailableError`` when no transport could be built.

        Raises:
            ConfigurationError: If the request has no valid URL or method.
        """
        future: asyncio.Future[Any] = asyncio.get_running_loop().create_future()

        if transport is None:
            factory = transport_factory or self._transport_factory or create_transport
            transport = factory()

        if transport is None:
            future.set_exception(TransportUnavailableError())
            return future

        if not self._url or not self._method:
            raise ConfigurationError(self._url, self._method)

        for field, value in self.get_headers().items():
            transport.set_request_header(field, value)

        address = self._url + (self._query or "")

        def on_load() -> None:
            if future.done():
                return

            if hasattr(transport, "response"):
                payload = transport.response
            else:
                payload = transport.response_text

            if is_success_status(transport.status):
                self._response = {"success": payload}
                future.set_result(payload)
            else:
                self._response = {"error": payload}
                future.set_exception(HttpStatusFailure(transport.status, payload))

            logger.debug(f"Settled: {transport.status} {self._method} {address}")

        def on_error(error: Any) -> None:
            if future.done():
                return

            failure = TransportFailure(error)
            if isinstance(error, BaseException):
                failure.__cause__ = error
            future.set_exception(failure)

        transport.on_load = on_load
        transport.on_error = on_error

        logger.debug(f"Request: {self._method} {address}")
        transport.open(self._method, address, True)
        transport.send(self._body)

        return future

    def simple(self) -> dict[str, Callable[..., Any]]:
        """Map the request's chainable capabilities by name.

        Keys are the stored field names without their internal prefix; values
        are the bound chainable methods.
        """
        capabilities: dict[str, Callable[..., Any]] = {}
        for key in vars(self):
            name = key.lstrip("_")
            if callable(getattr(type(self), name, None)):
                capabilities[name] = getattr(self, name)
        return capabilities

    def __repr__(self) -> str:
        return f"Request({self._method!r}, {self._url!r})"


def request(
    descriptor: Union[RequestDescriptor, Mapping[str, Any], None] = None,
    **fields: Any,
) -> Request:
    """Build a ``Request`` from a descriptor object or keyword fields.

    Examples:
        ```python
        from restchain import request

        req = request({"method": "GET", "url": "https://api.example.com/users"})
        ```
    """
    if descriptor is None:
        descriptor = RequestDescriptor(**fields)
    elif not isinstance(descriptor, RequestDescriptor):
        descriptor = RequestDescriptor.model_validate(dict(descriptor, **fields))

    return Request(
        method=descriptor.method,
        url=descriptor.url,
        body=descriptor.body,
        headers=descriptor.headers,
        query=descriptor.query,
        type=descriptor.type,
        charset=descriptor.charset,
    )
