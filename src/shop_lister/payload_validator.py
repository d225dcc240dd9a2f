"""
PayloadValidator module for validating list page responses
"""

from typing import Any, Dict, List, Optional

from shop_lister.http_client import APIResponse, FetchError


class PayloadValidator:
    """Validates that a page response is a JSON array of records carrying an id"""

    def __init__(self, id_field: str = 'id'):
        self.id_field = id_field

    def extract_items(self, response: APIResponse) -> List[Dict[str, Any]]:
        """
        Return the page records, refusing malformed bodies

        Args:
            response: APIResponse from a list endpoint

        Returns:
            Records in the order the API returned them

        Raises:
            FetchError: If the body is not a list of records with an id
        """
        problem = self._find_problem(response.raw_data)
        if problem is not None:
            raise FetchError(f"Malformed response body: {problem}", status_code=response.status_code)
        return list(response.raw_data)

    def _find_problem(self, raw_data: Any) -> Optional[str]:
        if not isinstance(raw_data, list):
            return f"expected a JSON array, got {type(raw_data).__name__}"

        for position, record in enumerate(raw_data):
            if not isinstance(record, dict):
                return f"item {position} is not an object"
            if record.get(self.id_field) is None:
                return f"item {position} has no '{self.id_field}'"

        return None
