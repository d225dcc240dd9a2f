"""
PaginationStrategy module for page-number pagination over list endpoints
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from shop_lister.config_loader import DEFAULT_PAGE_SIZE


@dataclass(frozen=True)
class PageRequest:
    """One page of one query"""
    page_number: int
    page_size: int = DEFAULT_PAGE_SIZE
    filter: Optional[str] = None

    def __post_init__(self):
        if self.page_number < 1:
            raise ValueError(f"page_number must be >= 1, got {self.page_number}")
        if self.page_size < 1:
            raise ValueError(f"page_size must be >= 1, got {self.page_size}")

    @property
    def has_filter(self) -> bool:
        """An empty filter string means no filter"""
        return bool(self.filter)


class PageBasedPagination:
    """
    Page-number pagination (WooCommerce style ?page=N&per_page=M)

    The API exposes no total count, so a page shorter than the requested
    size is the only end-of-data signal.
    """

    def __init__(self, page_param: str = 'page', size_param: str = 'per_page'):
        self.page_param = page_param
        self.size_param = size_param

    def get_page_params(self, page_request: PageRequest,
                        filter_param: Optional[str] = None) -> Dict[str, Any]:
        """
        Build query parameters for a page request

        Args:
            page_request: Page number, size and optional filter
            filter_param: Query parameter name for the filter, None when the resource has none

        Returns:
            Query parameter dictionary
        """
        params: Dict[str, Any] = {
            self.size_param: page_request.page_size,
            self.page_param: page_request.page_number
        }

        if filter_param and page_request.has_filter:
            params[filter_param] = page_request.filter

        return params

    @staticmethod
    def has_more_pages(returned_count: int, page_size: int) -> bool:
        """True only when the page just fetched came back full"""
        return returned_count == page_size
