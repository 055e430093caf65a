"""
PIM Request Library

Identity discovery, PIM role lookup and interactive role selection.
"""

# Core libraries
from .core import AzureCliAuth, ConfigManager, IdentityContext, RuntimeSettings
from .core.exceptions import (
    PIMRequestError, AuthenticationError, ConfigurationError,
    NetworkError, RoleParsingError, SelectionError
)

# PIM libraries
from .pim import PIMClient, Role, RoleAssignmentParser

# Application
from .cli_interface import CLIInterface
from .selection_ui import RoleSelectionUI
from .main_app import PIMRequestManager, create_pim_request_manager, main

__all__ = [
    # Core
    'AzureCliAuth',
    'ConfigManager',
    'IdentityContext',
    'RuntimeSettings',
    'PIMRequestError',
    'AuthenticationError',
    'ConfigurationError',
    'NetworkError',
    'RoleParsingError',
    'SelectionError',
    # PIM
    'PIMClient',
    'Role',
    'RoleAssignmentParser',
    # Application
    'CLIInterface',
    'RoleSelectionUI',
    'PIMRequestManager',
    'create_pim_request_manager',
    'main'
]
