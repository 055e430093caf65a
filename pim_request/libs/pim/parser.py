"""
Role Assignment Parser

Handles parsing of OData role assignment responses from the PIM API.
"""

import json
import logging
from typing import Any, Dict, List

from ..core.constants import ErrorMessages, PIMConstants
from ..core.exceptions import RoleParsingError
from .models import Role

logger = logging.getLogger(__name__)

Key = PIMConstants.ResponseKey


class RoleAssignmentParser:
    """Parses role assignment envelopes into Role values"""

    def parse_response(self, text_body: str) -> List[Role]:
        """
        Parse a raw response body

        Args:
            text_body: Response body text

        Returns:
            List of roles in response order

        Raises:
            RoleParsingError: If the body is not a JSON object or an entry is malformed
        """
        logger.debug(f"Parsing role assignments response ({len(text_body)} bytes)")

        try:
            content = json.loads(text_body)
        except json.JSONDecodeError as e:
            raise RoleParsingError(ErrorMessages.ParseError.INVALID_JSON.format(error=e)) from e

        return self.parse_envelope(content)

    def parse_envelope(self, content: Dict[str, Any]) -> List[Role]:
        """
        Extract roles from a decoded OData envelope.

        Only the first page is read. An envelope without a 'value' array
        yields no roles.

        Args:
            content: Decoded JSON response

        Returns:
            List of roles in response order

        Raises:
            RoleParsingError: If content is not an object or an entry is malformed
        """
        if not isinstance(content, dict):
            raise RoleParsingError(
                ErrorMessages.ParseError.NOT_AN_OBJECT.format(type_name=type(content).__name__)
            )

        if Key.COUNT.value in content:
            logger.debug(f"API reports {content[Key.COUNT.value]} eligible role assignments")

        if content.get(Key.NEXT_LINK.value):
            logger.warning("More role assignments are available than fit in one page; only the first page is shown")

        items = content.get(Key.VALUE.value)
        if not isinstance(items, list):
            logger.debug("Response has no 'value' array")
            return []

        roles = [Role.from_api(item, index) for index, item in enumerate(items)]

        logger.info(f"Found {len(roles)} eligible roles")
        return roles
