from django.db import transaction
from django.db.models import F

from apps.projects.models import Project


class IssueKeyGenerator:
    @staticmethod
    @transaction.atomic
    def generate_key(project):
        """
        Reserve the next issue number of ``project`` and return the full
        key, e.g. ``ENG-7``. The project row is locked for the increment.
        """
        Project.objects.select_for_update().filter(pk=project.pk).update(
            issue_counter=F("issue_counter") + 1
        )
        counter = Project.objects.values_list("issue_counter", flat=True).get(
            pk=project.pk
        )
        project.issue_counter = counter
        return f"{project.key}-{counter}"
