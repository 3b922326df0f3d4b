import math

from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response


class OJTPageNumberPagination(PageNumberPagination):
    """Page-number pagination that also reports the page count the list screens render."""

    page_size = 10

    def get_paginated_response(self, data):
        count = self.page.paginator.count
        return Response(
            {
                "count": count,
                "page": self.page.number,
                "total_pages": math.ceil(count / self.get_page_size(self.request)) if count else 0,
                "next": self.get_next_link(),
                "previous": self.get_previous_link(),
                "results": data,
            }
        )
