from .saved_filter_viewset import SavedFilterViewSet

__all__ = [
    "SavedFilterViewSet",
]
