from django.db import transaction

from drf_spectacular.utils import extend_schema, extend_schema_view
from rest_framework import viewsets
from rest_framework.permissions import IsAuthenticated

from apps.logging.services import LoggerService
from apps.projects.models import Sprint
from apps.projects.permissions import CanAccessProject
from apps.projects.serializers import SprintSerializer
from apps.projects.viewsets.nested import ProjectNestedMixin
from base.exceptions import Conflict

DUPLICATE_SPRINT_MESSAGE = "A sprint with this name already exists"


@extend_schema_view(
    list=extend_schema(
        tags=["Sprints"], operation_id="sprints_list", summary="List Sprints"
    ),
    retrieve=extend_schema(
        tags=["Sprints"], operation_id="sprints_retrieve", summary="Get Sprint Details"
    ),
    create=extend_schema(
        tags=["Sprints"], operation_id="sprints_create", summary="Create Sprint"
    ),
    partial_update=extend_schema(
        tags=["Sprints"], operation_id="sprints_partial_update", summary="Update Sprint"
    ),
    destroy=extend_schema(
        tags=["Sprints"], operation_id="sprints_destroy", summary="Delete Sprint"
    ),
)
class SprintViewSet(ProjectNestedMixin, viewsets.ModelViewSet):
    serializer_class = SprintSerializer
    permission_classes = [IsAuthenticated, CanAccessProject]
    http_method_names = ["get", "post", "patch", "delete", "head", "options"]
    pagination_class = None

    def get_queryset(self):
        return Sprint.objects.filter(project=self.get_project()).order_by("-created_at")

    def _ensure_unique(self, name, exclude_id=None):
        duplicates = Sprint.objects.filter(project=self.get_project(), name=name)
        if exclude_id is not None:
            duplicates = duplicates.exclude(pk=exclude_id)
        if duplicates.exists():
            raise Conflict(DUPLICATE_SPRINT_MESSAGE)

    @transaction.atomic
    def perform_create(self, serializer):
        self._ensure_unique(serializer.validated_data["name"])
        sprint = serializer.save(project=self.get_project())

        LoggerService.log_info(
            action="sprint_created",
            user=self.request.user,
            ip_address=self.request.META.get("REMOTE_ADDR"),
            details={"sprint_id": str(sprint.id), "project_id": str(sprint.project_id)},
        )

    @transaction.atomic
    def perform_update(self, serializer):
        if "name" in serializer.validated_data:
            self._ensure_unique(
                serializer.validated_data["name"], exclude_id=serializer.instance.id
            )
        sprint = serializer.save()

        LoggerService.log_info(
            action="sprint_updated",
            user=self.request.user,
            ip_address=self.request.META.get("REMOTE_ADDR"),
            details={
                "sprint_id": str(sprint.id),
                "updated_fields": sorted(serializer.validated_data.keys()),
            },
        )

    def perform_destroy(self, instance):
        LoggerService.log_info(
            action="sprint_deleted",
            user=self.request.user,
            ip_address=self.request.META.get("REMOTE_ADDR"),
            details={"sprint_id": str(instance.id), "name": instance.name},
        )
        instance.delete()
