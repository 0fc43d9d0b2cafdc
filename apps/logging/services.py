import logging
import traceback
from typing import Any, Dict, Optional

from django.db import transaction
from django.db.models import F

from .models import ErrorLog, SystemLog

logger = logging.getLogger(__name__)


class LoggerService:
    """
    Persists audit entries in ``system_logs`` and error occurrences in
    ``error_logs``. Failing to write a log never fails the request; the
    failure goes to the Python logger instead.
    """

    @staticmethod
    def _write(level, action, action_type, message, user, ip_address, details):
        if user is not None and not getattr(user, "is_authenticated", False):
            user = None
        # Savepoint keeps a failed log write from poisoning the caller's transaction.
        with transaction.atomic():
            return SystemLog.objects.create(
                level=level,
                action=action,
                action_type=action_type,
                message=message,
                user=user,
                ip_address=ip_address,
                metadata=details or {},
            )

    @staticmethod
    def log_info(
        action: str,
        user=None,
        ip_address: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        action_type: str = "crud_operation",
    ):
        logger.info("%s %s", action, details or {})
        try:
            LoggerService._write(
                "INFO", action, action_type, f"Action: {action}", user, ip_address, details
            )
        except Exception as e:
            logger.error(f"Failed to log info: {str(e)}")

    @staticmethod
    def log_warning(
        action: str,
        user=None,
        ip_address: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        logger.warning("%s %s", action, details or {})
        try:
            LoggerService._write(
                "WARNING", action, "system_event", f"Warning: {action}", user, ip_address, details
            )
        except Exception as e:
            logger.error(f"Failed to log warning: {str(e)}")

    @staticmethod
    def log_error(
        action: str,
        error: str,
        user=None,
        ip_address: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        severity: str = "medium",
    ):
        logger.error("%s: %s", action, error)
        try:
            LoggerService._write(
                "ERROR", action, "error", f"Error in {action}: {error}", user, ip_address, details
            )
            LoggerService._record_error(action, error, user, ip_address, details, severity)
        except Exception as e:
            logger.error(f"Failed to log error: {str(e)}")

    @staticmethod
    def _record_error(action, error, user, ip_address, details, severity):
        if user is not None and not getattr(user, "is_authenticated", False):
            user = None
        with transaction.atomic():
            updated = ErrorLog.objects.filter(
                error_type=action, error_message=error
            ).update(occurrence_count=F("occurrence_count") + 1)
            if updated:
                return
            stack_trace = traceback.format_exc()
            ErrorLog.objects.create(
                error_type=action,
                error_message=error,
                stack_trace="" if stack_trace.startswith("NoneType: None") else stack_trace,
                user=user,
                ip_address=ip_address,
                request_data=details or {},
                severity=severity,
            )
