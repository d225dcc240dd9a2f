"""
RemoteListSource module for fetching one page of a remote collection
"""

import logging
from typing import Any, Dict, List, Optional

from shop_lister.credential_provider import Credentials
from shop_lister.http_client import HTTPClient, APIRequest, FetchError
from shop_lister.pagination_strategy import PageBasedPagination, PageRequest
from shop_lister.payload_validator import PayloadValidator


logger = logging.getLogger(__name__)


def build_url(base_url: str, resource_path: str) -> str:
    """Join base URL and resource path with exactly one slash"""
    return f"{base_url.rstrip('/')}/{resource_path.lstrip('/')}"


class RemoteListSource:
    """Performs one authenticated GET per page against a paged REST endpoint"""

    def __init__(self, http_client: HTTPClient,
                 pagination: Optional[PageBasedPagination] = None,
                 payload_validator: Optional[PayloadValidator] = None):
        self.http_client = http_client
        self.pagination = pagination or PageBasedPagination()
        self.payload_validator = payload_validator or PayloadValidator()

    def fetch_page(self, base_url: str, credentials: Credentials, resource_path: str,
                   page_request: PageRequest, filter_param: Optional[str] = None) -> List[Dict[str, Any]]:
        """
        Fetch a single page of records

        Args:
            base_url: API root, e.g. https://shop.example.com
            credentials: Basic Auth username and password
            resource_path: Collection path relative to base_url
            page_request: Page number, size and optional filter
            filter_param: Query parameter carrying the filter, None if the resource can't be filtered

        Returns:
            Records of the page in API order

        Raises:
            FetchError: On transport failure, non-2xx response or malformed body
        """
        request = APIRequest(
            url=build_url(base_url, resource_path),
            parameters=self.pagination.get_page_params(page_request, filter_param),
            auth=(credentials.username, credentials.password)
        )

        response = self.http_client.make_request(request)
        items = self.payload_validator.extract_items(response)

        logger.info(f"Fetched {len(items)} items from {resource_path} page {page_request.page_number}")
        return items

    def check_connection(self, credentials: Credentials, path: str) -> bool:
        """
        Probe an endpoint to confirm the URL and credentials are accepted

        Args:
            credentials: Endpoint and Basic Auth values to try
            path: Path of a cheap authenticated endpoint

        Returns:
            True if the API answered with a 2xx status
        """
        request = APIRequest(
            url=build_url(credentials.base_url, path),
            parameters={},
            auth=(credentials.username, credentials.password)
        )

        try:
            self.http_client.make_request(request)
        except FetchError as e:
            logger.warning(f"Connection test failed: {e}")
            return False

        logger.info("Connection test succeeded")
        return True
