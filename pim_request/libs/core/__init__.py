"""
Core Libraries

Shared functionality and utilities for the PIM Request tool.
"""

from .auth import AzureCliAuth, IdentityContext
from .config import ConfigManager, RuntimeSettings
from .exceptions import (
    PIMRequestError, AuthenticationError, ConfigurationError,
    NetworkError, RoleParsingError, SelectionError
)
from .utils import setup_logging, disable_ssl_warnings, mask_sensitive_info, parse_bool

__all__ = [
    'AzureCliAuth',
    'IdentityContext',
    'ConfigManager',
    'RuntimeSettings',
    'PIMRequestError',
    'AuthenticationError',
    'ConfigurationError',
    'NetworkError',
    'RoleParsingError',
    'SelectionError',
    'setup_logging',
    'disable_ssl_warnings',
    'mask_sensitive_info',
    'parse_bool'
]
