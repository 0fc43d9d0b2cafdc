from django.conf import settings

from rest_framework import serializers

from apps.projects.models import IssueAttachment
from base.serializers import UserBasicSerializer


class IssueAttachmentSerializer(serializers.ModelSerializer):
    uploaded_by = UserBasicSerializer(read_only=True)
    file = serializers.FileField(write_only=True)
    file_url = serializers.ReadOnlyField()

    class Meta:
        model = IssueAttachment
        fields = [
            "id",
            "issue",
            "file",
            "filename",
            "file_size",
            "content_type",
            "file_url",
            "uploaded_by",
            "uploaded_at",
        ]
        read_only_fields = [
            "id",
            "issue",
            "filename",
            "file_size",
            "content_type",
            "file_url",
            "uploaded_by",
            "uploaded_at",
        ]

    def validate_file(self, value):
        max_size = settings.QUEST_ATTACHMENT_MAX_SIZE
        if value.size > max_size:
            raise serializers.ValidationError(
                f"File size cannot exceed {max_size // (1024 * 1024)}MB"
            )
        content_type = getattr(value, "content_type", None) or ""
        if content_type not in IssueAttachment.ALLOWED_CONTENT_TYPES:
            raise serializers.ValidationError(
                f"File type {content_type or 'unknown'} is not allowed"
            )
        return value

    def create(self, validated_data):
        file = validated_data["file"]
        validated_data["filename"] = file.name
        validated_data["file_size"] = file.size
        validated_data["content_type"] = file.content_type
        return super().create(validated_data)
