"""
PIM Client

Handles HTTP communication with the Azure PIM role assignment API.
"""

import logging
from typing import List, Optional

import requests

from ..core.constants import NetworkConstants, PIMConstants
from ..core.utils import disable_ssl_warnings, handle_http_error
from .models import Role
from .parser import RoleAssignmentParser

logger = logging.getLogger(__name__)


class PIMClient:
    """Client for the PIM role assignments endpoint"""

    def __init__(self, api_url: str = PIMConstants.DEFAULT_API_URL, skip_tls: bool = False,
                 timeout: Optional[float] = None, parser: Optional[RoleAssignmentParser] = None,
                 session: Optional[requests.Session] = None):
        """
        Initialize PIM client

        Args:
            api_url: Base URL of the PIM API
            skip_tls: Whether to skip TLS verification
            timeout: Request timeout in seconds (None waits indefinitely)
            parser: Response parser (defaults to RoleAssignmentParser)
            session: Existing requests session (a new one is opened per request when not given)
        """
        self.api_url = api_url.rstrip('/')
        self.skip_tls = skip_tls
        self.timeout = timeout
        self.parser = parser or RoleAssignmentParser()
        self._session = session

        if skip_tls:
            disable_ssl_warnings()

    def build_role_assignments_url(self, object_id: str,
                                   state: PIMConstants.AssignmentState = PIMConstants.AssignmentState.ELIGIBLE) -> str:
        """
        Build the role assignments URL for a subject.

        The object id is placed verbatim inside the single-quoted OData
        equality clause.

        Args:
            object_id: Azure AD object id of the user
            state: Assignment state to filter on

        Returns:
            str: Full request URL
        """
        odata_filter = PIMConstants.FILTER_TEMPLATE.format(object_id=object_id, state=state.value)
        return (
            f"{self.api_url}{PIMConstants.ROLE_ASSIGNMENTS_PATH}"
            f"?$expand={PIMConstants.EXPAND_CLAUSE}"
            f"&$filter={odata_filter}"
            f"&$count=true"
        )

    def fetch_eligible_roles(self, object_id: str, token: str) -> List[Role]:
        """
        Fetch the roles a user is eligible to activate

        Args:
            object_id: Azure AD object id of the user
            token: Bearer token for the PIM API

        Returns:
            List of eligible roles in API order

        Raises:
            NetworkError: On transport failures and HTTP error statuses
            RoleParsingError: If the response is malformed
        """
        url = self.build_role_assignments_url(object_id)
        body = self._get(url, token)
        return self.parser.parse_response(body)

    def _get(self, url: str, token: str) -> str:
        """Send an authenticated GET and return the response body text"""
        headers = {
            'Authorization': f'Bearer {token}',
            'Accept': 'application/json',
            'User-Agent': NetworkConstants.USER_AGENT,
        }

        logger.debug(f"GET {url}")

        try:
            if self._session is not None:
                response = self._send(self._session, url, headers)
            else:
                with requests.Session() as session:
                    response = self._send(session, url, headers)
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            handle_http_error(e, url=url, timeout=self.timeout)

        logger.debug(f"PIM API responded with HTTP {response.status_code}")
        return response.text

    def _send(self, session: requests.Session, url: str, headers: dict) -> requests.Response:
        return session.get(url, headers=headers, verify=not self.skip_tls, timeout=self.timeout)
