"""
Tests for authentication API endpoints.
"""
from django.urls import reverse

import pytest
from rest_framework import status

from apps.authentication.models import User
from apps.authentication.tests.factories import UserFactory
from apps.workspaces.tests.factories import WorkspaceFactory, WorkspaceMemberFactory


@pytest.mark.django_db
class TestRegistration:
    def test_register_returns_user_and_tokens(self, api_client):
        url = reverse("auth-register")
        data = {"email": "newuser@quest.test", "password": "Secur3Passw0rd!", "name": "New"}
        response = api_client.post(url, data, format="json")

        assert response.status_code == status.HTTP_201_CREATED
        assert User.objects.filter(email="newuser@quest.test").exists()
        assert response.data["user"]["email"] == "newuser@quest.test"
        assert "access" in response.data
        assert "refresh" in response.data

    def test_register_duplicate_email(self, api_client):
        UserFactory(email="existing@quest.test")
        url = reverse("auth-register")
        data = {"email": "existing@quest.test", "password": "Secur3Passw0rd!", "name": "X"}
        response = api_client.post(url, data, format="json")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "error" in response.json()


@pytest.mark.django_db
class TestLogin:
    def test_login_success(self, api_client):
        UserFactory(email="user@quest.test", password="testpass123")
        url = reverse("auth-login")
        response = api_client.post(
            url, {"email": "user@quest.test", "password": "testpass123"}, format="json"
        )

        assert response.status_code == status.HTTP_200_OK
        assert "access" in response.data
        assert "refresh" in response.data

    def test_login_invalid_credentials(self, api_client):
        UserFactory(email="user@quest.test", password="testpass123")
        url = reverse("auth-login")
        response = api_client.post(
            url, {"email": "user@quest.test", "password": "wrong"}, format="json"
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"error": "Invalid credentials"}

    def test_refresh_issues_new_access_token(self, api_client):
        UserFactory(email="user@quest.test", password="testpass123")
        login = api_client.post(
            reverse("auth-login"),
            {"email": "user@quest.test", "password": "testpass123"},
            format="json",
        )
        response = api_client.post(
            reverse("token_refresh"), {"refresh": login.data["refresh"]}, format="json"
        )

        assert response.status_code == status.HTTP_200_OK
        assert "access" in response.data


@pytest.mark.django_db
class TestCurrentUser:
    def test_me_requires_authentication(self, api_client):
        response = api_client.get(reverse("users-me"))
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_me_returns_session_shape(self, authenticated_client, user):
        response = authenticated_client.get(reverse("users-me"))

        assert response.status_code == status.HTTP_200_OK
        assert response.data["id"] == str(user.id)
        assert response.data["email"] == user.email
        assert response.json()["data"]["email"] == user.email

    def test_update_me(self, authenticated_client, user):
        response = authenticated_client.patch(
            reverse("users-me"), {"name": "Renamed"}, format="json"
        )

        assert response.status_code == status.HTTP_200_OK
        user.refresh_from_db()
        assert user.name == "Renamed"


@pytest.mark.django_db
class TestUserSearch:
    def test_lists_only_users_sharing_a_workspace(self, authenticated_client, user):
        workspace = WorkspaceFactory(owner=user)
        teammate = WorkspaceMemberFactory(workspace=workspace, user__name="Grace Hopper").user
        stranger = UserFactory(name="Grace Stranger")

        response = authenticated_client.get(reverse("users-list"), {"search": "Grace"})

        assert response.status_code == status.HTTP_200_OK
        ids = {row["id"] for row in response.data["results"]}
        assert str(teammate.id) in ids
        assert str(stranger.id) not in ids
