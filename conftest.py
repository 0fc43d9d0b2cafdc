"""
Pytest configuration and shared fixtures.
"""
import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken


@pytest.fixture
def api_client():
    """Return an API client instance."""
    return APIClient()


@pytest.fixture
def user(db):
    from apps.authentication.tests.factories import UserFactory

    return UserFactory()


@pytest.fixture
def authenticated_client(api_client, user):
    """Return a client carrying a Bearer access token for ``user``."""
    refresh = RefreshToken.for_user(user)
    api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {refresh.access_token}")
    return api_client
