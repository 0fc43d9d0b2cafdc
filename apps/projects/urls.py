from django.urls import include, path

from rest_framework.routers import SimpleRouter

from .viewsets import (
    IssueAttachmentViewSet,
    IssueCommentViewSet,
    IssueLinkViewSet,
    IssueViewSet,
    LabelViewSet,
    ProjectViewSet,
    SprintViewSet,
)

# "issues" must be registered before the project routes at the empty prefix
router = SimpleRouter()
router.register(r"issues", IssueViewSet, basename="issue")
router.register(r"", ProjectViewSet, basename="project")

urlpatterns = [
    # Project labels
    path(
        "<uuid:project_pk>/labels/",
        LabelViewSet.as_view({"get": "list", "post": "create"}),
        name="project-label-list",
    ),
    path(
        "<uuid:project_pk>/labels/<uuid:pk>/",
        LabelViewSet.as_view({"patch": "partial_update", "delete": "destroy"}),
        name="project-label-detail",
    ),
    # Project sprints
    path(
        "<uuid:project_pk>/sprints/",
        SprintViewSet.as_view({"get": "list", "post": "create"}),
        name="project-sprint-list",
    ),
    path(
        "<uuid:project_pk>/sprints/<uuid:pk>/",
        SprintViewSet.as_view(
            {"get": "retrieve", "patch": "partial_update", "delete": "destroy"}
        ),
        name="project-sprint-detail",
    ),
    # Issue comments
    path(
        "issues/<uuid:issue_pk>/comments/",
        IssueCommentViewSet.as_view({"get": "list", "post": "create"}),
        name="issue-comment-list",
    ),
    path(
        "issues/<uuid:issue_pk>/comments/<uuid:pk>/",
        IssueCommentViewSet.as_view({"patch": "partial_update", "delete": "destroy"}),
        name="issue-comment-detail",
    ),
    # Issue attachments
    path(
        "issues/<uuid:issue_pk>/attachments/",
        IssueAttachmentViewSet.as_view({"get": "list", "post": "create"}),
        name="issue-attachment-list",
    ),
    path(
        "issues/<uuid:issue_pk>/attachments/<uuid:pk>/",
        IssueAttachmentViewSet.as_view({"delete": "destroy"}),
        name="issue-attachment-detail",
    ),
    # Issue links
    path(
        "issues/<uuid:issue_pk>/links/",
        IssueLinkViewSet.as_view({"get": "list", "post": "create"}),
        name="issue-link-list",
    ),
    path(
        "issues/<uuid:issue_pk>/links/<uuid:pk>/",
        IssueLinkViewSet.as_view({"delete": "destroy"}),
        name="issue-link-detail",
    ),
    path("", include(router.urls)),
]
