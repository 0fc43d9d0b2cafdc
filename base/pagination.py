from rest_framework.pagination import PageNumberPagination


class QuestPageNumberPagination(PageNumberPagination):
    """
    Page-number pagination for list endpoints (projects, issues,
    workspaces, users). ``?page_size=`` is honoured up to 100.

    The renderer wraps the page as
    ``{"data": {"count", "next", "previous", "results"}}``.
    """

    page_size_query_param = "page_size"
    max_page_size = 100
