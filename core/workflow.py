"""Keyword dispatch for query and action modes.

Query mode turns the text typed in the launcher into menu items; action
mode runs the command named by a selected item's arg.
"""

import json
import logging
from typing import TYPE_CHECKING

from core.errors import HueError
from models.items import ItemArg, MenuItem, error_item
from models.utils import find_similar_strings, fuzzy_matches

if TYPE_CHECKING:
    from commands.base import Command
    from core.context import Context

logger = logging.getLogger(__name__)


def enabled_commands(ctx: 'Context', commands: list['Command']) -> list['Command']:
    return [command for command in commands if command.is_enabled(ctx)]


def run_query(ctx: 'Context', commands: list['Command'], text: str) -> list[MenuItem]:
    """Build the menu for the text typed so far.

    "<keyword> <query>" is routed to that command's items(). Anything else
    lists the enabled commands whose keyword matches the text. Hub errors
    are returned as a single error item.
    """
    text = text.lstrip()
    keyword, _, query = text.partition(' ')
    enabled = enabled_commands(ctx, commands)

    try:
        for command in enabled:
            if command.keyword == keyword:
                logger.debug("Listing %s for %r", keyword, query)
                return command.items(ctx, query.strip())

        return [command.menu_item(ctx) for command in enabled
                if fuzzy_matches(command.keyword, text)]
    except HueError as e:
        logger.error("Error listing %r: %s", text, e)
        return [error_item(e)]


def parse_arg(arg: str) -> ItemArg:
    """Parse an action arg.

    Accepts a serialized ItemArg or the plain form "<keyword> <payload>",
    where a payload starting with '{' or '[' is decoded as JSON and
    anything else (an id or a number) is kept as a string.

    Raises:
        HueError: If arg is empty or holds malformed JSON
    """
    arg = arg.strip()
    if not arg:
        raise HueError("Missing command")

    if arg.startswith('{'):
        try:
            return ItemArg.from_json(arg)
        except ValueError as e:
            raise HueError(f"Invalid action data: {e}") from e

    keyword, _, payload = arg.partition(' ')
    payload = payload.strip()
    if payload[:1] in ('{', '['):
        try:
            return ItemArg(keyword, json.loads(payload))
        except ValueError as e:
            raise HueError(f"Invalid action data: {e}") from e
    return ItemArg(keyword, payload or None)


def run_action(ctx: 'Context', commands: list['Command'], arg: str) -> str:
    """Run the command named in arg and return its status text.

    Raises:
        HueError: If the command is unknown or disabled, or the action fails
    """
    item_arg = parse_arg(arg)
    enabled = enabled_commands(ctx, commands)

    for command in enabled:
        if command.keyword == item_arg.keyword:
            logger.debug("Running %s with %r", command.keyword, item_arg.data)
            return command.do(ctx, item_arg.data)

    message = f"Unknown command '{item_arg.keyword}'"
    suggestions = find_similar_strings(item_arg.keyword, [c.keyword for c in enabled])
    if suggestions:
        message += f". Did you mean: {', '.join(suggestions)}?"
    raise HueError(message)
