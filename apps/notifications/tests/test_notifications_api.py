from django.urls import reverse

import pytest
from rest_framework import status

from apps.notifications.models import Notification
from apps.notifications.tests.factories import NotificationFactory


@pytest.mark.django_db
class TestNotificationEndpoints:
    def test_requires_authentication(self, api_client):
        response = api_client.get(reverse("notification-list"))
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_list_only_own(self, authenticated_client, user):
        mine = NotificationFactory(recipient=user)
        NotificationFactory()

        response = authenticated_client.get(reverse("notification-list"))

        assert response.status_code == status.HTTP_200_OK
        assert [row["id"] for row in response.json()["data"]] == [str(mine.id)]

    def test_list_unread_only(self, authenticated_client, user):
        NotificationFactory(recipient=user, is_read=True)
        unread = NotificationFactory(recipient=user)

        response = authenticated_client.get(reverse("notification-list"), {"unread": "true"})
        assert [row["id"] for row in response.data] == [str(unread.id)]

    def test_list_capped(self, authenticated_client, user, settings):
        settings.QUEST_NOTIFICATION_LIST_LIMIT = 2
        NotificationFactory.create_batch(3, recipient=user)

        response = authenticated_client.get(reverse("notification-list"))
        assert len(response.data) == 2

    def test_unread_count(self, authenticated_client, user):
        NotificationFactory.create_batch(2, recipient=user)
        NotificationFactory(recipient=user, is_read=True)

        response = authenticated_client.get(reverse("notification-unread-count"))
        assert response.data == {"count": 2}

    def test_mark_read(self, authenticated_client, user):
        notification = NotificationFactory(recipient=user)

        response = authenticated_client.post(
            reverse("notification-mark-read", kwargs={"pk": notification.id})
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data["is_read"] is True
        assert response.data["read_at"] is not None

    def test_mark_read_of_other_user_is_404(self, authenticated_client):
        notification = NotificationFactory()

        response = authenticated_client.post(
            reverse("notification-mark-read", kwargs={"pk": notification.id})
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND
        notification.refresh_from_db()
        assert notification.is_read is False

    def test_mark_all_read(self, authenticated_client, user):
        NotificationFactory.create_batch(2, recipient=user)
        other = NotificationFactory()

        response = authenticated_client.post(reverse("notification-mark-all-read"))

        assert response.data == {"updated": 2}
        other.refresh_from_db()
        assert other.is_read is False

    def test_delete_own(self, authenticated_client, user):
        notification = NotificationFactory(recipient=user)

        response = authenticated_client.delete(
            reverse("notification-detail", kwargs={"pk": notification.id})
        )

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not Notification.objects.exists()

    def test_delete_other_is_404(self, authenticated_client):
        notification = NotificationFactory()

        response = authenticated_client.delete(
            reverse("notification-detail", kwargs={"pk": notification.id})
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert Notification.objects.filter(pk=notification.pk).exists()
