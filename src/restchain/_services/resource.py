import asyncio
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Optional

from .._http import Verbs
from .._request import Request
from .._transport import Transport
from .._utils import join_url


@dataclass
class Resource(Verbs):
    """A single REST API resource, addressed as a collection or a singleton.

    ``one`` and ``all`` return new resources; the original is never modified.
    The verb methods (``get``, ``post``, ...) send a request to ``url`` and
    return the send future.

    Examples:
        ```python
        from restchain import Resource

        users = Resource("https://api.example.com/v1", "users")
        everyone = await users.get()
        ada = await users.one("42").get()
        ```
    """

    base_url: str
    slug: str
    collection: bool = True
    name: Optional[str] = None
    entity: bool = False
    transport_factory: Optional[Callable[[], Optional[Transport]]] = field(
        default=None, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        if self.name is None:
            self.name = self.slug

    @property
    def url(self) -> str:
        """Absolute URL of the resource.

        Collections live at ``<base_url>/<name>``; an entity of the collection
        lives at ``<base_url>/<name>/<slug>``. A singleton built directly,
        without ``one``, lives at ``<base_url>/<slug>``.
        """
        if self.collection:
            return join_url(self.base_url, self.name)
        if self.entity:
            return join_url(self.base_url, self.name, self.slug)
        return join_url(self.base_url, self.slug)

    def one(self, id: Any) -> "Resource":
        """Copy of this resource addressing the entity ``id``."""
        return replace(self, slug=str(id), collection=False, entity=True)

    def all(self) -> "Resource":
        """Copy of this resource addressing the whole collection."""
        return replace(self, collection=True, entity=False)

    def copy(self) -> "Resource":
        return replace(self)

    def request(self, method: str, **options: Any) -> Request:
        """Unsent request for ``method`` at this resource's URL.

        Args:
            method: HTTP method.
            **options: ``body``, ``headers``, ``query``, ``type`` or ``charset``.
        """
        return Request(
            method, self.url, transport_factory=self.transport_factory, **options
        )

    def send(self, method: str, **options: Any) -> "asyncio.Future[Any]":
        return self.request(method, **options).send()

    def _dispatch(self, method: str, **options: Any) -> "asyncio.Future[Any]":
        return self.send(method, **options)
