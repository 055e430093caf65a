"""
PIM Request

Lists the Azure AD Privileged Identity Management roles the signed-in user
is eligible for and lets them choose which ones to request.
"""

from .libs.core.constants import AppConstants

__version__ = AppConstants.VERSION
__author__ = "PIM Request Project"

from .libs import PIMRequestManager, PIMClient, AzureCliAuth, RoleSelectionUI, Role, main

__all__ = [
    'PIMRequestManager',
    'PIMClient',
    'AzureCliAuth',
    'RoleSelectionUI',
    'Role',
    'main'
]
