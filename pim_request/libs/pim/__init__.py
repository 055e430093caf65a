"""
PIM Libraries

Handles queries against the Azure Privileged Identity Management API.
"""

from .client import PIMClient
from .models import Role
from .parser import RoleAssignmentParser

__all__ = [
    'PIMClient',
    'Role',
    'RoleAssignmentParser'
]
