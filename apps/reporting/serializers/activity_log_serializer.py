from rest_framework import serializers

from apps.reporting.models import ActivityLog
from base.serializers import UserBasicSerializer


class ActivityLogSerializer(serializers.ModelSerializer):
    user = UserBasicSerializer(read_only=True)
    action_display = serializers.CharField(source="get_action_display", read_only=True)
    time_ago = serializers.ReadOnlyField()

    class Meta:
        model = ActivityLog
        fields = [
            "id",
            "issue",
            "user",
            "action",
            "action_display",
            "metadata",
            "time_ago",
            "created_at",
        ]
        read_only_fields = fields
