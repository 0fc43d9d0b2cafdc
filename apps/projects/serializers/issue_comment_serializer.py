from rest_framework import serializers

from apps.projects.models import IssueComment
from base.serializers import UserBasicSerializer


class IssueCommentSerializer(serializers.ModelSerializer):
    author = UserBasicSerializer(read_only=True)
    content = serializers.CharField(min_length=1, max_length=10000)
    can_edit = serializers.SerializerMethodField()
    can_delete = serializers.SerializerMethodField()

    class Meta:
        model = IssueComment
        fields = [
            "id",
            "issue",
            "content",
            "author",
            "is_edited",
            "can_edit",
            "can_delete",
            "created_at",
            "updated_at",
        ]
        read_only_fields = [
            "id",
            "issue",
            "author",
            "is_edited",
            "can_edit",
            "can_delete",
            "created_at",
            "updated_at",
        ]

    def get_can_edit(self, obj) -> bool:
        request = self.context.get("request")
        if request and request.user.is_authenticated:
            return obj.can_edit(request.user)
        return False

    def get_can_delete(self, obj) -> bool:
        request = self.context.get("request")
        if request and request.user.is_authenticated:
            return obj.can_delete(request.user)
        return False
