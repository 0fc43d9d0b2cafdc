"""
Tests for authentication serializers.
"""
import pytest

from apps.authentication.serializers import (
    UserLoginSerializer,
    UserRegistrationSerializer,
    UserUpdateSerializer,
)
from apps.authentication.tests.factories import UserFactory


@pytest.mark.django_db
class TestUserRegistrationSerializer:
    def test_valid_registration(self):
        serializer = UserRegistrationSerializer(
            data={"email": "New@Quest.test", "password": "Secur3Passw0rd!", "name": "Ada"}
        )
        assert serializer.is_valid(), serializer.errors
        user = serializer.save()
        assert user.email == "new@quest.test"
        assert user.check_password("Secur3Passw0rd!")

    def test_short_password_rejected(self):
        serializer = UserRegistrationSerializer(
            data={"email": "short@quest.test", "password": "abc12", "name": "Ada"}
        )
        assert not serializer.is_valid()
        assert "password" in serializer.errors

    def test_email_taken_case_insensitively(self):
        UserFactory(email="taken@quest.test")
        serializer = UserRegistrationSerializer(
            data={"email": "TAKEN@quest.test", "password": "Secur3Passw0rd!", "name": "Ada"}
        )
        assert not serializer.is_valid()
        assert "email" in serializer.errors


@pytest.mark.django_db
class TestUserLoginSerializer:
    def test_valid_credentials(self):
        user = UserFactory(email="login@quest.test", password="testpass123")
        serializer = UserLoginSerializer(
            data={"email": "LOGIN@quest.test", "password": "testpass123"}
        )
        assert serializer.is_valid(), serializer.errors
        assert serializer.validated_data["user"] == user

    def test_wrong_password(self):
        UserFactory(email="login@quest.test", password="testpass123")
        serializer = UserLoginSerializer(
            data={"email": "login@quest.test", "password": "nope"}
        )
        assert not serializer.is_valid()


@pytest.mark.django_db
class TestUserUpdateSerializer:
    def test_partial_update_keeps_other_fields(self):
        user = UserFactory(name="Before", image="https://cdn.quest.test/a.png")
        serializer = UserUpdateSerializer(user, data={"name": "After"}, partial=True)
        assert serializer.is_valid(), serializer.errors
        serializer.save()
        user.refresh_from_db()
        assert user.name == "After"
        assert user.image == "https://cdn.quest.test/a.png"
