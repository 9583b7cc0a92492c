from collections.abc import Callable

import httpx
import pytest

from readlist_api.dependencies.books import get_http_client
from readlist_api.main import app

Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture
def mock_http() -> Callable[[Handler], None]:
    """Route the app's outbound HTTP through a ``MockTransport`` handler."""

    def install(handler: Handler) -> None:
        http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        app.dependency_overrides[get_http_client] = lambda: http

    return install
