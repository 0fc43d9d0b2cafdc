from rest_framework import serializers

from apps.workspaces.models import Workspace, WorkspaceMember
from base.serializers import UserBasicSerializer


class WorkspaceSerializer(serializers.ModelSerializer):
    owner = UserBasicSerializer(read_only=True)
    member_count = serializers.ReadOnlyField()
    project_count = serializers.ReadOnlyField()
    role = serializers.SerializerMethodField()

    class Meta:
        model = Workspace
        fields = [
            "id",
            "name",
            "slug",
            "description",
            "owner",
            "role",
            "member_count",
            "project_count",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def get_role(self, obj) -> str:
        """Role of the requesting user; owners always report ADMIN."""
        request = self.context.get("request")
        if not request or not request.user.is_authenticated:
            return None
        if obj.owner_id == request.user.id:
            return "ADMIN"
        member = obj.members.filter(user=request.user).first()
        return member.role if member else None


class WorkspaceCreateSerializer(serializers.Serializer):
    name = serializers.CharField(
        min_length=2,
        max_length=50,
        error_messages={
            "min_length": "Name must be at least 2 characters",
            "max_length": "Name must be less than 50 characters",
        },
    )
    slug = serializers.RegexField(
        regex=r"^[a-z0-9-]+$",
        min_length=2,
        max_length=50,
        required=False,
        error_messages={
            "invalid": "Slug can only contain lowercase letters, numbers, and hyphens"
        },
    )
    description = serializers.CharField(
        max_length=1000, required=False, allow_blank=True, default=""
    )


class WorkspaceUpdateSerializer(WorkspaceCreateSerializer):
    name = serializers.CharField(min_length=2, max_length=50, required=False)
    description = serializers.CharField(
        max_length=1000, required=False, allow_blank=True
    )


class WorkspaceMemberSerializer(serializers.ModelSerializer):
    user = UserBasicSerializer(read_only=True)
    is_owner = serializers.SerializerMethodField()

    class Meta:
        model = WorkspaceMember
        fields = ["id", "user", "role", "is_owner", "joined_at"]
        read_only_fields = fields

    def get_is_owner(self, obj) -> bool:
        return obj.workspace.owner_id == obj.user_id


class MemberRoleSerializer(serializers.Serializer):
    role = serializers.ChoiceField(choices=WorkspaceMember.ROLE_CHOICES)
