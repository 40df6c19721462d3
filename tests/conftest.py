import sys
from pathlib import Path
from typing import Callable

import pytest

from tests.utils.stub_transport import StubTransport

# Ensure local source package (src/restchain) is importable before tests collect
_PROJECT_ROOT: Path = Path(__file__).resolve().parents[1]
_SRC_PATH: Path = _PROJECT_ROOT / "src"
if _SRC_PATH.exists():
    sys.path.insert(0, str(_SRC_PATH))


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Clean environment variables before each test."""
    monkeypatch.delenv("RESTCHAIN_BASE_URL", raising=False)
    monkeypatch.delenv("RESTCHAIN_TIMEOUT", raising=False)
    monkeypatch.delenv("RESTCHAIN_USER_AGENT", raising=False)


@pytest.fixture
def base_url() -> str:
    return "https://api.example.com/v1"


@pytest.fixture
def transport() -> StubTransport:
    return StubTransport(status=200, response={"ok": True})


@pytest.fixture
def transports() -> list[StubTransport]:
    """Every transport built by ``transport_factory``, in creation order."""
    return []


@pytest.fixture
def transport_factory(
    transports: list[StubTransport],
) -> Callable[[], StubTransport]:
    def factory() -> StubTransport:
        stub = StubTransport(status=200, response={"id": len(transports) + 1})
        transports.append(stub)
        return stub

    return factory
