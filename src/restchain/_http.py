from functools import partial
from typing import Any, Callable, Optional

from ._config import Config
from ._request import Request
from ._transport import Transport
from ._utils import join_url
from ._utils.constants import METHODS


class _Verb:
    """Binds one HTTP method to the owner's ``_dispatch``.

    Lives on the class, so every instance shares the same verb table.
    """

    def __init__(self, method: str) -> None:
        if method not in METHODS:
            raise ValueError(f"Unsupported HTTP method: {method}")
        self.method = method

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name

    def __get__(self, instance: Any, owner: Optional[type] = None) -> Any:
        if instance is None:
            return self
        return partial(instance._dispatch, self.method)


class Verbs:
    """Mixin exposing one method per supported HTTP verb.

    Subclasses implement ``_dispatch(method, *args, **kwargs)``.
    """

    get = _Verb("GET")
    post = _Verb("POST")
    put = _Verb("PUT")
    patch = _Verb("PATCH")
    delete = _Verb("DELETE")
    options = _Verb("OPTIONS")
    head = _Verb("HEAD")
    link = _Verb("LINK")

    _dispatch: Callable[..., Any]

    @classmethod
    def verbs(cls) -> dict[str, str]:
        """Attribute name to HTTP method for every verb of the class."""
        return {
            name: attr.method
            for klass in reversed(cls.__mro__)
            for name, attr in vars(klass).items()
            if isinstance(attr, _Verb)
        }


class Http(Verbs):
    """Factory of requests sharing an optional base URL.

    Examples:
        ```python
        from restchain import Http

        http = Http("https://api.example.com")
        users = await http.get("users").query({"page": 2}).send()
        ```
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        transport_factory: Optional[Callable[[], Optional[Transport]]] = None,
        config: Optional[Config] = None,
    ):
        self._config = config or Config()
        self.base_url = base_url or self._config.base_url
        self.transport_factory = transport_factory

    def _dispatch(self, method: str, url: Optional[str] = None, **options: Any) -> Request:
        target = join_url(self.base_url, url) if self.base_url else url
        options.setdefault("charset", self._config.default_charset)
        return Request(
            method, target, transport_factory=self.transport_factory, **options
        )
