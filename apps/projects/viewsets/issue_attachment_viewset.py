from django.db import transaction

from drf_spectacular.utils import extend_schema, extend_schema_view
from rest_framework import mixins, viewsets
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.permissions import IsAuthenticated

from apps.logging.services import LoggerService
from apps.projects.models import IssueAttachment
from apps.projects.permissions import IsAuthorOrWorkspaceAdmin
from apps.projects.serializers import IssueAttachmentSerializer
from apps.projects.viewsets.nested import IssueNestedMixin


@extend_schema_view(
    list=extend_schema(
        tags=["Issues"],
        operation_id="issue_attachments_list",
        summary="List Issue Attachments",
    ),
    create=extend_schema(
        tags=["Issues"],
        operation_id="issue_attachments_create",
        summary="Upload Attachment to Issue",
        description=(
            "Multipart upload in the `file` field. Size is limited by "
            "QUEST_ATTACHMENT_MAX_SIZE and only common image, document, "
            "text and archive types are accepted."
        ),
    ),
    destroy=extend_schema(
        tags=["Issues"],
        operation_id="issue_attachments_destroy",
        summary="Delete Attachment",
        description="Uploader, workspace owner or ADMIN.",
    ),
)
class IssueAttachmentViewSet(
    IssueNestedMixin,
    mixins.ListModelMixin,
    mixins.CreateModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    serializer_class = IssueAttachmentSerializer
    permission_classes = [IsAuthenticated, IsAuthorOrWorkspaceAdmin]
    parser_classes = [MultiPartParser, FormParser, JSONParser]
    pagination_class = None

    def get_queryset(self):
        return (
            IssueAttachment.objects.filter(issue=self.get_issue())
            .select_related("uploaded_by", "issue__project__workspace")
            .order_by("-uploaded_at")
        )

    def perform_create(self, serializer):
        issue = self.get_issue()
        attachment = serializer.save(issue=issue, uploaded_by=self.request.user)

        LoggerService.log_info(
            action="attachment_uploaded",
            user=self.request.user,
            ip_address=self.request.META.get("REMOTE_ADDR"),
            details={
                "attachment_id": str(attachment.id),
                "issue_id": str(issue.id),
                "filename": attachment.filename,
                "file_size": attachment.file_size,
            },
        )

    @transaction.atomic
    def perform_destroy(self, instance):
        LoggerService.log_info(
            action="attachment_deleted",
            user=self.request.user,
            ip_address=self.request.META.get("REMOTE_ADDR"),
            details={"attachment_id": str(instance.id), "filename": instance.filename},
        )
        storage, name = instance.file.storage, instance.file.name
        instance.delete()
        if name:
            transaction.on_commit(lambda: storage.delete(name))
