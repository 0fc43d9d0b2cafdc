from .activity_service import ActivityService
from .saved_filter_service import SavedFilterService

__all__ = [
    "ActivityService",
    "SavedFilterService",
]
