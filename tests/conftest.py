"""Shared test fixtures for typed_apiclient.

Provides the GitHub JSON fixtures, a factory for clients wired to an
:class:`httpx.MockTransport`, and automatic reset of the global output
manager. Fixtures are discovered by pytest and available to every test
module without explicit imports.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Optional

import httpx
import pytest

from typed_apiclient import APIClient, APIClientDelegate, Configuration, SessionConfig
from typed_apiclient.output import reset_output


FIXTURES_DIR = Path(__file__).parent / "fixtures"


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The manager's Rich console keeps a reference to sys.stderr from the
    moment it was created; pytest swaps that stream per test.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# JSON fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def user_json() -> bytes:
    """Raw bytes of the GitHub ``/user`` payload."""
    return (FIXTURES_DIR / "user.json").read_bytes()


@pytest.fixture
def emails_json() -> bytes:
    """Raw bytes of the GitHub ``/user/emails`` payload."""
    return (FIXTURES_DIR / "emails.json").read_bytes()


# ---------------------------------------------------------------------------
# Client factory
# ---------------------------------------------------------------------------


Handler = Callable[[httpx.Request], Any]


@pytest.fixture
def make_client() -> Callable[..., APIClient]:
    """Return a factory building an APIClient on top of an httpx.MockTransport.

    The handler may be a plain function or a coroutine function returning an
    :class:`httpx.Response`. Extra keyword arguments go to
    :class:`~typed_apiclient.models.Configuration`.
    """

    def factory(
        handler: Handler,
        delegate: Optional[APIClientDelegate] = None,
        host: str = "api.github.com",
        **kwargs: Any,
    ) -> APIClient:
        configuration = Configuration(
            host=host,
            session=SessionConfig(transport=httpx.MockTransport(handler)),
            delegate=delegate,
            **kwargs,
        )
        return APIClient(configuration)

    return factory
