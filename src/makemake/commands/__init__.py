"""CLI commands"""

from .alias import alias_remove_command, alias_set_command
from .create import create_command
from .edit import edit_command
from .list import list_command
from .load import load_command
from .remove import remove_command
from .var import var_list_command, var_set_command, var_unset_command

__all__ = [
    "alias_remove_command",
    "alias_set_command",
    "create_command",
    "edit_command",
    "list_command",
    "load_command",
    "remove_command",
    "var_list_command",
    "var_set_command",
    "var_unset_command",
]
