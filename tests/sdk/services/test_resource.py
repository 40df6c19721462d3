from typing import Callable

import pytest

from restchain import HttpStatusFailure, Request, Resource
from tests.utils.stub_transport import StubTransport


@pytest.fixture
def stub_resource() -> Resource:
    return Resource("/v1", "slug")


class TestResource:
    class TestOne:
        def test_makes_a_singleton(self, stub_resource: Resource):
            one = stub_resource.one("slug2")

            assert isinstance(one, Resource)
            assert one.slug == "slug2"
            assert one.collection is False

        def test_leaves_original_untouched(self, stub_resource: Resource):
            stub_resource.one("42")

            assert stub_resource.slug == "slug"
            assert stub_resource.collection is True

        def test_stringifies_ids(self, stub_resource: Resource):
            assert stub_resource.one(42).slug == "42"

    class TestAll:
        def test_makes_a_collection(self, stub_resource: Resource):
            all_ = stub_resource.one("42").all()

            assert isinstance(all_, Resource)
            assert all_.collection is True
            assert all_.slug == "42"

    class TestCopy:
        def test_identical_but_distinct(self, stub_resource: Resource):
            copy = stub_resource.copy()

            assert copy is not stub_resource
            assert copy == stub_resource
            assert (copy.base_url, copy.slug, copy.collection) == ("/v1", "slug", True)

        def test_copies_are_independent(self, stub_resource: Resource):
            first = stub_resource.copy()
            second = stub_resource.copy()

            first.slug = "changed"

            assert second.slug == "slug"
            assert stub_resource.slug == "slug"

        def test_keeps_transport_factory(self, transport_factory: Callable):
            resource = Resource("/v1", "users", transport_factory=transport_factory)

            assert resource.copy().transport_factory is transport_factory
            assert resource.one("1").transport_factory is transport_factory

    class TestUrl:
        def test_collection(self, base_url: str):
            assert Resource(base_url, "users").url == f"{base_url}/users"

        def test_entity_of_collection(self, base_url: str):
            assert Resource(base_url, "users").one("7").url == f"{base_url}/users/7"

        def test_back_to_collection(self, base_url: str):
            assert Resource(base_url, "users").one("7").all().url == f"{base_url}/users"

        def test_standalone_singleton(self, base_url: str):
            assert Resource(base_url, "me", collection=False).url == f"{base_url}/me"

        def test_entity_id_equal_to_collection_name(self, base_url: str):
            users = Resource(base_url, "users")

            assert users.one("users").url == f"{base_url}/users/users"
            assert users.one("users").all().url == f"{base_url}/users"

        def test_no_double_slashes(self):
            resource = Resource("https://api.example.com/v1/", "/users")

            assert resource.one("7").url == "https://api.example.com/v1/users/7"

    class TestVerbs:
        def test_request_is_unsent(self, base_url: str):
            req = Resource(base_url, "users").request("POST", body={"name": "Ada"})

            assert isinstance(req, Request)
            assert req.get_url() == f"{base_url}/users"
            assert req.get_body() == {"name": "Ada"}

        @pytest.mark.anyio
        async def test_get_sends_to_resource_url(
            self,
            base_url: str,
            transport_factory: Callable,
            transports: list[StubTransport],
        ):
            resource = Resource(base_url, "users", transport_factory=transport_factory)

            result = await resource.one("7").get(query={"expand": "roles"})

            assert result == {"id": 1}
            assert transports[0].opened == (
                "GET",
                f"{base_url}/users/7?expand=roles",
                True,
            )

        @pytest.mark.anyio
        async def test_post_sends_body(
            self,
            base_url: str,
            transport_factory: Callable,
            transports: list[StubTransport],
        ):
            resource = Resource(base_url, "users", transport_factory=transport_factory)

            await resource.post(body={"name": "Ada"})

            assert transports[0].opened == ("POST", f"{base_url}/users", True)
            assert transports[0].sent == [{"name": "Ada"}]

        @pytest.mark.anyio
        async def test_failures_propagate(self, base_url: str):
            resource = Resource(
                base_url,
                "users",
                transport_factory=lambda: StubTransport(status=404, response="missing"),
            )

            with pytest.raises(HttpStatusFailure):
                await resource.one("9").delete()
