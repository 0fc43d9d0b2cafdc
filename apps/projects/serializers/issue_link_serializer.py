from drf_spectacular.utils import extend_schema_field
from rest_framework import serializers

from apps.projects.models import IssueLink
from base.serializers import IssueBasicSerializer, UserBasicSerializer


class IssueLinkSerializer(serializers.ModelSerializer):
    """
    A link as seen from one issue. Outgoing links are shown as stored;
    incoming links are flipped so ``issue`` is always the other end and
    ``link_type`` reads from the viewed issue's side.
    """

    issue = serializers.SerializerMethodField()
    direction = serializers.SerializerMethodField()
    link_type = serializers.SerializerMethodField()
    created_by = UserBasicSerializer(read_only=True)

    class Meta:
        model = IssueLink
        fields = ["id", "link_type", "direction", "issue", "created_by", "created_at"]
        read_only_fields = fields

    def _is_incoming(self, obj):
        viewed = self.context.get("issue")
        return viewed is not None and obj.target_issue_id == viewed.id

    def get_direction(self, obj) -> str:
        return "incoming" if self._is_incoming(obj) else "outgoing"

    def get_link_type(self, obj) -> str:
        if self._is_incoming(obj):
            return IssueLink.get_reciprocal_link_type(obj.link_type)
        return obj.link_type

    @extend_schema_field(IssueBasicSerializer)
    def get_issue(self, obj):
        other = obj.source_issue if self._is_incoming(obj) else obj.target_issue
        return IssueBasicSerializer(other).data


class IssueLinkCreateSerializer(serializers.Serializer):
    target_issue_id = serializers.UUIDField()
    link_type = serializers.ChoiceField(choices=IssueLink.LINK_TYPE_CHOICES)
