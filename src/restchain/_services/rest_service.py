from logging import getLogger
from typing import Any, Callable, Optional, Protocol, Union

from .._http import Verbs
from .._transport import Transport
from ..models.errors import HttpStatusFailure, RestChainError, TransportFailure
from .resource import Resource


class StateChannel(Protocol):
    """Publisher/subscriber of an external application state tree."""

    def subscribe(self, pattern: str, handler: Callable[[Any], Any]) -> Any: ...

    def update(self, data: Any) -> Any: ...


Relation = Union[str, Callable[[Any], str]]


def _failure_payload(error: RestChainError) -> Any:
    """What a failed exchange publishes: the response body or transport error."""
    if isinstance(error, HttpStatusFailure):
        return error.payload
    if isinstance(error, TransportFailure):
        return error.error
    return error


class RestService(Verbs):
    """Wraps the state of a REST API resource.

    Results of the verb methods are published through the state channel once
    they settle, failures included (the error payload is published), and
    a service created with a parent follows the parent's sub-state.

    Examples:
        ```python
        from restchain import RestService

        users = RestService("users", "https://api.example.com/v1", channel)
        await users.select("42")  # GET https://api.example.com/v1/users/42
        await users.patch(body={"name": "Ada"})  # published through channel.update
        ```
    """

    def __init__(
        self,
        name: str,
        base_url: str,
        channel: StateChannel,
        parent: Optional[Union["RestService", StateChannel]] = None,
        rel: Optional[Relation] = None,
        transport_factory: Optional[Callable[[], Optional[Transport]]] = None,
    ) -> None:
        self._logger = getLogger("restchain")
        self._channel = channel

        self.name = name
        self.parent = parent
        self.resource = Resource(base_url, name, transport_factory=transport_factory)
        self.selected_entity_id: Optional[str] = None

        if parent is not None:
            pattern = self._relation_pattern(rel)
            self._logger.debug(f"Subscribing {name} to parent state at {pattern}")
            parent.subscribe(pattern, self.update)

    def _relation_pattern(self, rel: Optional[Relation]) -> str:
        if callable(rel):
            return rel(self.state)
        return rel or f"$.{self.name}"

    @property
    def state(self) -> Any:
        """Current state held by the channel, if it exposes one."""
        return getattr(self._channel, "state", None)

    def subscribe(self, pattern: str, handler: Callable[[Any], Any]) -> Any:
        return self._channel.subscribe(pattern, handler)

    def update(self, data: Any) -> Any:
        return self._channel.update(data)

    @property
    def addressed(self) -> Resource:
        """The selected entity when there is one, otherwise the collection."""
        if self.selected_entity_id is None:
            return self.resource.all()
        return self.resource.one(self.selected_entity_id)

    async def _dispatch(self, method: str, **options: Any) -> Any:
        target = self.addressed
        try:
            result = await target.send(method, **options)
        except RestChainError as e:
            self._logger.warning(f"{method} {target.url} failed: {e}")
            self.update(_failure_payload(e))
            raise

        self.update(result)
        return result

    async def by(self, id: Any) -> Any:
        """Fetch the entity ``id``.

        Args:
            id: Identifier of the API resource entity.

        Returns:
            The entity payload.
        """
        return await self.resource.one(id).get()

    async def all(self) -> Any:
        """Fetch the whole collection."""
        return await self.resource.all().get()

    async def current(self) -> Any:
        """Fetch the selected entity, or return ``None`` when nothing is selected.

        No request is sent when there is no selection.
        """
        if self.selected_entity_id is None:
            return None
        return await self.by(self.selected_entity_id)

    async def select(self, id: Any) -> Any:
        """Select the entity ``id`` and fetch it."""
        self.selected_entity_id = str(id)
        return await self.current()
