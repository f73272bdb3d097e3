"""
versionroute — Test Configuration (conftest.py)
=================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── headers: Builds a case-insensitive header reader from a dict
    ├── route_table: Empty RouteTable, isolated from the app-wide one
    ├── scenario_table: The six /hello candidates of the demo app
    └── test_client: HTTPX AsyncClient bound to the real application
"""

import os

# Override settings for testing BEFORE any app imports
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["VERSION_HEADER"] = "api-version"

from typing import Callable, Dict, Optional  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from versionroute.versioning.constraint import VersionConstraint  # noqa: E402
from versionroute.versioning.resolver import RouteTable, VersionedRoute  # noqa: E402


@pytest.fixture
def headers() -> Callable[..., Callable[[str], Optional[str]]]:
    """
    Factory for header readers.

    Usage:
        reader = headers({"API-Version": "3.0.0"})
        reader("api-version")  # "3.0.0"
    """

    def build(values: Optional[Dict[str, str]] = None) -> Callable[[str], Optional[str]]:
        lowered = {name.lower(): value for name, value in (values or {}).items()}
        return lambda name: lowered.get(name.lower())

    return build


@pytest.fixture
def route_table() -> RouteTable:
    return RouteTable()


@pytest.fixture
def scenario_table(route_table: RouteTable) -> RouteTable:
    """
    Candidates for one path, mirroring the demo /api/hello handlers.

    Handler ids are plain strings so assertions read naturally.
    """
    declared = [
        ("range_1_to_2", VersionConstraint.between(min="1.0.0", max="2.0.0")),
        ("min_10", VersionConstraint.between(min="10.0.0")),
        ("max_20", VersionConstraint.between(max="20.0.0")),
        ("exact_3", VersionConstraint.exactly("3.0.0")),
        ("min_4", VersionConstraint.between(min="4.0.0")),
        ("default", None),
    ]
    for handler_id, constraint in declared:
        route_table.add(
            "/hello", "GET",
            VersionedRoute(handler_id=handler_id, method_constraint=constraint, name=handler_id),
        )
    route_table.freeze()
    return route_table


@pytest_asyncio.fixture
async def test_client():
    """
    Provides an async HTTP test client for endpoint testing.

    Uses ASGITransport to route requests directly to the app (no server).

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    from versionroute.main import app
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
