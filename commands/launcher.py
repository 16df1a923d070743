"""Launcher entry points: query mode and action mode.

The launcher runs ``query`` on every keystroke and reads the item list
from stdout; it runs ``do`` with the arg of the selected item and shows
the printed status as a notification.
"""

import sys

import click

from commands import all_commands
from core.errors import HueError
from core.workflow import run_action, run_query
from models.items import render_items


@click.command(name='query')
@click.argument('text', default='')
@click.pass_obj
def query_command(ctx, text: str):
    """List menu items for TEXT typed in the launcher."""
    items = run_query(ctx, all_commands(), text)
    click.echo(render_items(items))


@click.command(name='do')
@click.argument('arg')
@click.pass_obj
def do_command(ctx, arg: str):
    """Run the action described by ARG."""
    try:
        out = run_action(ctx, all_commands(), arg)
    except HueError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if out:
        click.echo(out)
