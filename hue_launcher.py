#!/usr/bin/env python3
"""
Hue Launcher
Query and control Philips Hue lights, groups and scenes from a launcher.
"""

import sys

import click

from commands.cache import cache_info_command, reload_command
from commands.launcher import do_command, query_command
from commands.setup import ColouredGroup, setup_command
from core.config import cache_store, config_store
from core.context import Context
from core.log import configure_logging
from core.prompt import get_prompt


@click.group(
    cls=ColouredGroup,
    context_settings={
        'help_option_names': ['-h', '--help'],
        'max_content_width': 999
    }
)
@click.version_option(version='0.1.0', prog_name='Hue Launcher')
@click.option('--debug', is_flag=True, help='Log debug output to stderr')
@click.option('--prompt', type=click.Choice(['auto', 'dialog', 'terminal']), default='auto',
              help='How to ask for input while pairing or logging in')
@click.pass_context
def cli(click_ctx, debug: bool, prompt: str):
    """Hue Launcher - Control your Philips Hue lights from a launcher.

Keywords: hub, lights, level, groups, scenes, sync, cloud

The launcher calls 'query TEXT' on every keystroke and 'do ARG' when an
item is selected. Use 'reload' and 'cache-info' to manage the cache by hand."""
    configure_logging(debug)

    config_s = config_store()
    cache_s = cache_store()
    try:
        config_s.path.parent.mkdir(parents=True, exist_ok=True)
        cache_s.path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click_ctx.obj = Context.load(config_s, cache_s, get_prompt(prompt))


# Register launcher commands
cli.add_command(query_command)
cli.add_command(do_command)

# Register cache and setup commands
cli.add_command(reload_command)
cli.add_command(cache_info_command)
cli.add_command(setup_command)


if __name__ == '__main__':
    cli()
