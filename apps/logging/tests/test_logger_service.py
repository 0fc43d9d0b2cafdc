from unittest.mock import patch

from django.contrib.auth.models import AnonymousUser

import pytest

from apps.logging.models import ErrorLog, SystemLog
from apps.logging.services import LoggerService


@pytest.mark.django_db
class TestLoggerService:
    def test_log_info(self, user):
        LoggerService.log_info(
            action="issue_created",
            user=user,
            ip_address="127.0.0.1",
            details={"issue_key": "ENG-1"},
        )

        entry = SystemLog.objects.get()
        assert entry.level == "INFO"
        assert entry.action_type == "crud_operation"
        assert entry.user == user
        assert entry.metadata == {"issue_key": "ENG-1"}

    def test_anonymous_user_is_stored_as_null(self):
        LoggerService.log_warning(action="login_failed", user=AnonymousUser())

        entry = SystemLog.objects.get()
        assert entry.level == "WARNING"
        assert entry.user is None

    def test_repeated_error_bumps_count(self):
        LoggerService.log_error(action="store_failure", error="OperationalError")
        LoggerService.log_error(action="store_failure", error="OperationalError")
        LoggerService.log_error(action="store_failure", error="DataError")

        assert SystemLog.objects.filter(level="ERROR").count() == 3
        repeated = ErrorLog.objects.get(error_message="OperationalError")
        assert repeated.occurrence_count == 2
        assert ErrorLog.objects.count() == 2

    def test_write_failure_is_swallowed(self):
        with patch.object(SystemLog.objects, "create", side_effect=RuntimeError("down")):
            LoggerService.log_info(action="issue_created")

        assert not SystemLog.objects.exists()
