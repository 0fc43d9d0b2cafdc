from drf_spectacular.utils import extend_schema, extend_schema_view
from rest_framework import mixins, status, viewsets
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from apps.logging.services import LoggerService
from apps.projects.models import IssueComment
from apps.projects.permissions import CanAccessProject
from apps.projects.serializers import IssueCommentSerializer
from apps.projects.services import CommentService
from apps.projects.viewsets.nested import IssueNestedMixin


@extend_schema_view(
    list=extend_schema(
        tags=["Issues"],
        operation_id="issue_comments_list",
        summary="List Issue Comments",
        description="Comments of an issue, oldest first.",
    ),
    create=extend_schema(
        tags=["Issues"],
        operation_id="issue_comments_create",
        summary="Add Comment to Issue",
        description="Notifies the reporter and the assignee.",
    ),
    partial_update=extend_schema(
        tags=["Issues"],
        operation_id="issue_comments_partial_update",
        summary="Edit Comment",
        description="Author only.",
    ),
    destroy=extend_schema(
        tags=["Issues"],
        operation_id="issue_comments_destroy",
        summary="Delete Comment",
        description="Author, workspace owner or ADMIN.",
    ),
)
class IssueCommentViewSet(
    IssueNestedMixin,
    mixins.ListModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    serializer_class = IssueCommentSerializer
    permission_classes = [IsAuthenticated, CanAccessProject]
    pagination_class = None

    def get_queryset(self):
        return (
            IssueComment.objects.filter(issue=self.get_issue())
            .select_related("author", "issue__project__workspace")
            .order_by("created_at")
        )

    def create(self, request, *args, **kwargs):
        issue = self.get_issue()
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        comment = CommentService.add_comment(
            request.user, issue, serializer.validated_data["content"]
        )

        LoggerService.log_info(
            action="comment_added",
            user=request.user,
            ip_address=request.META.get("REMOTE_ADDR"),
            details={
                "comment_id": str(comment.id),
                "issue_id": str(issue.id),
                "issue_key": issue.key,
            },
        )
        return Response(
            self.get_serializer(comment).data, status=status.HTTP_201_CREATED
        )

    def partial_update(self, request, *args, **kwargs):
        comment = self.get_object()
        serializer = self.get_serializer(comment, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        content = serializer.validated_data.get("content", comment.content)
        comment = CommentService.edit_comment(request.user, comment, content)
        return Response(self.get_serializer(comment).data)

    def perform_destroy(self, instance):
        LoggerService.log_info(
            action="comment_deleted",
            user=self.request.user,
            ip_address=self.request.META.get("REMOTE_ADDR"),
            details={"comment_id": str(instance.id), "issue_id": str(instance.issue_id)},
        )
        CommentService.delete_comment(self.request.user, instance)
