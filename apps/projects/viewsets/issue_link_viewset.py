from django.db import transaction
from django.db.models import Q

from drf_spectacular.utils import extend_schema, extend_schema_view
from rest_framework import mixins, status, viewsets
from rest_framework.exceptions import NotFound, ValidationError
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from apps.logging.services import LoggerService
from apps.projects.models import Issue, IssueLink
from apps.projects.permissions import CanAccessProject
from apps.projects.serializers import IssueLinkCreateSerializer, IssueLinkSerializer
from apps.projects.viewsets.nested import IssueNestedMixin
from base.exceptions import Conflict


@extend_schema_view(
    list=extend_schema(
        tags=["Issues"],
        operation_id="issue_links_list",
        summary="List Issue Links",
        description=(
            "Outgoing and incoming links of the issue. Incoming links are "
            "shown from this issue's side (BLOCKS becomes IS_BLOCKED_BY)."
        ),
    ),
    create=extend_schema(
        tags=["Issues"],
        operation_id="issue_links_create",
        summary="Link Issues",
        request=IssueLinkCreateSerializer,
        responses={201: IssueLinkSerializer},
    ),
    destroy=extend_schema(
        tags=["Issues"], operation_id="issue_links_destroy", summary="Remove Link"
    ),
)
class IssueLinkViewSet(
    IssueNestedMixin,
    mixins.ListModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    serializer_class = IssueLinkSerializer
    permission_classes = [IsAuthenticated, CanAccessProject]
    pagination_class = None

    def get_queryset(self):
        issue = self.get_issue()
        return (
            IssueLink.objects.filter(Q(source_issue=issue) | Q(target_issue=issue))
            .select_related(
                "source_issue__project__workspace", "target_issue", "created_by"
            )
            .order_by("-created_at")
        )

    def get_serializer_context(self):
        context = super().get_serializer_context()
        if "issue_pk" in self.kwargs:
            context["issue"] = self.get_issue()
        return context

    @transaction.atomic
    def create(self, request, *args, **kwargs):
        source = self.get_issue()
        serializer = IssueLinkCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        target = Issue.objects.select_related("project").filter(
            pk=data["target_issue_id"]
        ).first()
        if target is None:
            raise NotFound("Target issue not found")
        if target.id == source.id:
            raise ValidationError("Cannot link an issue to itself")
        if target.project.workspace_id != source.project.workspace_id:
            raise ValidationError("Both issues must belong to the same workspace")
        if IssueLink.objects.filter(
            source_issue=source, target_issue=target, link_type=data["link_type"]
        ).exists():
            raise Conflict("This link already exists")

        link = IssueLink.objects.create(
            source_issue=source,
            target_issue=target,
            link_type=data["link_type"],
            created_by=request.user,
        )

        LoggerService.log_info(
            action="issue_linked",
            user=request.user,
            ip_address=request.META.get("REMOTE_ADDR"),
            details={
                "link_id": str(link.id),
                "source": source.key,
                "target": target.key,
                "link_type": link.link_type,
            },
        )
        return Response(
            self.get_serializer(link).data, status=status.HTTP_201_CREATED
        )

    def perform_destroy(self, instance):
        LoggerService.log_info(
            action="issue_unlinked",
            user=self.request.user,
            ip_address=self.request.META.get("REMOTE_ADDR"),
            details={"link_id": str(instance.id), "link_type": instance.link_type},
        )
        instance.delete()
