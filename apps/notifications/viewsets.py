"""
Notification endpoints. Every query is scoped to the authenticated
recipient, so other users' notifications answer 404.
"""

import logging

from django.conf import settings
from django.shortcuts import get_object_or_404

from drf_spectacular.utils import (
    OpenApiParameter,
    extend_schema,
    extend_schema_view,
    inline_serializer,
)
from rest_framework import mixins, serializers, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from apps.notifications.models import Notification
from apps.notifications.serializers import NotificationSerializer
from apps.notifications.services import NotificationService

logger = logging.getLogger(__name__)


@extend_schema_view(
    list=extend_schema(
        tags=["Notifications"],
        summary="List user notifications",
        description="Newest first, capped at the configured list limit.",
        parameters=[
            OpenApiParameter(
                name="unread", type=bool, description="Only unread notifications"
            ),
        ],
    ),
    destroy=extend_schema(
        tags=["Notifications"],
        summary="Delete notification",
    ),
)
class NotificationViewSet(
    mixins.ListModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    serializer_class = NotificationSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = None

    def get_queryset(self):
        return Notification.objects.filter(recipient=self.request.user).order_by(
            "-created_at"
        )

    def list(self, request, *args, **kwargs):
        queryset = self.get_queryset()
        if request.query_params.get("unread") in ("true", "1"):
            queryset = queryset.filter(is_read=False)
        notifications = queryset[: settings.QUEST_NOTIFICATION_LIST_LIMIT]
        return Response(NotificationSerializer(notifications, many=True).data)

    @extend_schema(
        tags=["Notifications"],
        summary="Unread notification count",
        responses={
            200: inline_serializer(
                name="UnreadCount", fields={"count": serializers.IntegerField()}
            )
        },
    )
    @action(detail=False, methods=["get"], url_path="unread-count")
    def unread_count(self, request):
        return Response({"count": NotificationService().get_unread_count(request.user)})

    @extend_schema(
        tags=["Notifications"],
        summary="Mark notification as read",
        request=None,
        responses={200: NotificationSerializer},
    )
    @action(detail=True, methods=["post"], url_path="read")
    def mark_read(self, request, pk=None):
        notification = get_object_or_404(self.get_queryset(), pk=pk)
        notification.mark_as_read()
        return Response(NotificationSerializer(notification).data)

    @extend_schema(
        tags=["Notifications"],
        summary="Mark all notifications as read",
        request=None,
        responses={
            200: inline_serializer(
                name="MarkAllRead", fields={"updated": serializers.IntegerField()}
            )
        },
    )
    @action(detail=False, methods=["post"], url_path="read-all")
    def mark_all_read(self, request):
        updated = NotificationService().mark_all_read(request.user)
        logger.info(f"Marked {updated} notifications as read for {request.user.email}")
        return Response({"updated": updated}, status=status.HTTP_200_OK)
