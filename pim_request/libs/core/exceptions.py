"""
Exceptions

Exception hierarchy for the PIM Request tool.
"""


class PIMRequestError(Exception):
    """Base exception for all PIM Request errors"""


class AuthenticationError(PIMRequestError):
    """Raised when the identity CLI cannot provide the authentication context"""


class ConfigurationError(PIMRequestError):
    """Raised when configuration files or values are invalid"""


class NetworkError(PIMRequestError):
    """Raised on transport failures and HTTP error responses from the PIM API"""


class RoleParsingError(PIMRequestError):
    """Raised when a role assignment response is malformed or missing fields"""


class SelectionError(PIMRequestError):
    """Raised when the interactive prompt is cancelled or cannot be shown"""
