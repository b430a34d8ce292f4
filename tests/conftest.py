"""
Shared fixtures: an in-memory list, an authentication strategy and a
request context whose collaborators are mocks.
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock, Mock

import pytest

from listauth.core.config import get_settings
from listauth.core.types.protocols import ValidationResult
from listauth.presentation.graphql.cache_control import CacheControl

ADA = {"id": "1", "name": "Ada"}


class MockList:
    """List descriptor backed by an AsyncMock item lookup."""

    def __init__(self, key: str = "User", item_query_name: str = "User", item=ADA):
        self.key = key
        self.gql_names = SimpleNamespace(
            item_query_name=item_query_name,
            output_type_name=item_query_name,
        )
        self.item_query = AsyncMock(return_value=item)


class MockStrategy:
    """Authentication strategy whose ``validate`` is an AsyncMock."""

    def __init__(
        self,
        auth_type: str = "password",
        result=None,
        fragment: str = "email: String, password: String",
    ):
        self.auth_type = auth_type
        self.fragment = fragment
        self.validate = AsyncMock(
            return_value=result or ValidationResult(success=True, item=ADA)
        )

    def get_input_fragment(self) -> str:
        return self.fragment


class MockContext:
    """Request context with mocked policy and session hooks."""

    def __init__(self, authed_item=None, authed_list_key=None, access=True):
        self.authed_item = authed_item
        self.authed_list_key = authed_list_key
        self.cache_control = CacheControl()
        self.get_list_access_control_for_user = Mock(return_value=access)
        self.start_authed_session = AsyncMock(return_value="token-123")
        self.end_authed_session = AsyncMock(return_value=None)


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Settings are cached per process; isolate tests that change env vars."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def user_list():
    return MockList()


@pytest.fixture
def password_strategy():
    return MockStrategy()


@pytest.fixture
def anonymous_context():
    return MockContext()


@pytest.fixture
def authed_context():
    """Context authenticated as Ada from the User list."""
    return MockContext(authed_item=ADA, authed_list_key="User")


@pytest.fixture
def denied_context():
    """Context authenticated as Ada, but access control denies ``auth``."""
    return MockContext(authed_item=ADA, authed_list_key="User", access=False)
