from rest_framework import serializers

from apps.workspaces.models import Invitation, WorkspaceMember
from base.serializers import UserBasicSerializer, WorkspaceBasicSerializer


class InvitationSerializer(serializers.ModelSerializer):
    invited_by = UserBasicSerializer(read_only=True)
    workspace = WorkspaceBasicSerializer(read_only=True)

    class Meta:
        model = Invitation
        fields = [
            "id",
            "workspace",
            "email",
            "role",
            "status",
            "token",
            "invited_by",
            "expires_at",
            "created_at",
        ]
        read_only_fields = fields


class InvitationCreateSerializer(serializers.Serializer):
    email = serializers.EmailField(error_messages={"invalid": "Invalid email address"})
    role = serializers.ChoiceField(
        choices=WorkspaceMember.ROLE_CHOICES, default="DEVELOPER"
    )


class InvitationRespondSerializer(serializers.Serializer):
    accept = serializers.BooleanField()
