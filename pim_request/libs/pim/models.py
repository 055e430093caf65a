"""
PIM Data Models

Typed structures for PIM API data.
"""

from dataclasses import dataclass
from typing import Any, Dict

from ..core.constants import ErrorMessages, PIMConstants
from ..core.exceptions import RoleParsingError

Key = PIMConstants.ResponseKey


@dataclass(frozen=True)
class Role:
    """An eligible role assignment: assignment id and display name"""
    id: str
    name: str

    @classmethod
    def from_api(cls, item: Dict[str, Any], index: int = 0) -> 'Role':
        """
        Build a Role from one entry of the role assignments 'value' array.

        Args:
            item: Role assignment object from the API
            index: Position of the entry, used in error messages

        Returns:
            Role with id and roleDefinition.resource.displayName

        Raises:
            RoleParsingError: If id or the display name is absent or not a string
        """
        role_id = _require_str(item, [Key.ID], index)
        name = _require_str(item, [Key.ROLE_DEFINITION, Key.RESOURCE, Key.DISPLAY_NAME], index)
        return cls(id=role_id, name=name)


def _require_str(item: Any, path: list, index: int) -> str:
    """Walk a key path and return the string at its end"""
    value = item
    for key in path:
        if not isinstance(value, dict) or key.value not in value:
            value = None
            break
        value = value[key.value]

    if not isinstance(value, str):
        field_name = '.'.join(key.value for key in path)
        raise RoleParsingError(ErrorMessages.ParseError.MISSING_FIELD.format(index=index, field=field_name))

    return value
