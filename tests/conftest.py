from collections.abc import AsyncIterator, Callable, Iterator

import httpx
import pytest

from src.catbox_relay.dependencies import get_http_client
from src.catbox_relay.main import app


class FakeUpstream:
    """Answers outbound requests by URL and records every one it sees."""

    def __init__(self) -> None:
        self.routes: dict[str, Callable[[httpx.Request], httpx.Response]] = {}
        self.requests: list[httpx.Request] = []

    def on(self, url: str, status_code: int = 200, **kwargs) -> None:
        self.routes[url] = lambda request: httpx.Response(status_code, **kwargs)

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get(str(request.url))
        if route is None:
            raise httpx.ConnectError(f"No route to {request.url}", request=request)
        return route(request)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handle))


@pytest.fixture(autouse=True)
def upstream() -> Iterator[FakeUpstream]:
    """Route the app's outbound client through a ``FakeUpstream``."""
    fake = FakeUpstream()

    async def fake_http_client() -> AsyncIterator[httpx.AsyncClient]:
        async with fake.client() as client:
            yield client

    app.dependency_overrides[get_http_client] = fake_http_client
    yield fake
    app.dependency_overrides.clear()
