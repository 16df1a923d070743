"""Base class for launcher commands.

Each command owns one keyword. In query mode the dispatcher calls
``items()`` with the text typed after the keyword; in action mode it calls
``do()`` with the data from the selected item's arg.
"""

from typing import TYPE_CHECKING, Any

from core.errors import HueError
from models.items import ItemArg, MenuItem

if TYPE_CHECKING:
    from core.context import Context


class Command:
    """A keyword-triggered launcher command."""

    keyword = ''
    description = ''

    def is_enabled(self, ctx: 'Context') -> bool:
        """Whether the command is offered at all."""
        return True

    def menu_item(self, ctx: 'Context') -> MenuItem:
        """Item shown when the user is still typing a keyword."""
        return MenuItem(
            title=self.keyword,
            subtitle=self.description,
            autocomplete=f'{self.keyword} ',
            valid=False,
        )

    def items(self, ctx: 'Context', query: str) -> list[MenuItem]:
        raise NotImplementedError

    def do(self, ctx: 'Context', data: Any) -> str:
        raise HueError(f"'{self.keyword}' has no action")

    def arg(self, data: Any = None) -> ItemArg:
        """Item arg that runs this command's action with data."""
        return ItemArg(self.keyword, data)


class HubRequiredCommand(Command):
    """Command that needs a paired hub."""

    def is_enabled(self, ctx: 'Context') -> bool:
        return ctx.config.hub_configured
