from apps.projects.models import Issue
from apps.workspaces.services import ensure_workspace_access

BOARD_COLUMNS = [value for value, _label in Issue.STATUS_CHOICES]


def _top_level_issues(project):
    return (
        Issue.objects.filter(project=project, parent__isnull=True)
        .select_related("assignee", "reporter")
        .prefetch_related("labels")
    )


def project_board(user, project):
    """
    Group the top-level issues of ``project`` into one column per status,
    in workflow order. Issues inside a column are sorted by ``order``;
    ties fall back to the issue id so the layout is stable.
    """
    ensure_workspace_access(user, project.workspace)

    columns = {status: [] for status in BOARD_COLUMNS}
    for issue in _top_level_issues(project).order_by("order", "id"):
        columns[issue.status].append(issue)

    labels = dict(Issue.STATUS_CHOICES)
    return [
        {"status": status, "name": labels[status], "issues": columns[status]}
        for status in BOARD_COLUMNS
    ]


def project_backlog(user, project):
    """Top-level issues of ``project``, newest first."""
    ensure_workspace_access(user, project.workspace)
    return list(_top_level_issues(project).order_by("-created_at", "id"))
