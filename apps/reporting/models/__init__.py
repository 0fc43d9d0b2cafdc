from .activity_log_model import ActivityLog
from .saved_filter_model import SavedFilter

__all__ = [
    "ActivityLog",
    "SavedFilter",
]
