"""
Setup command and CLI group for the Hue launcher.

Contains custom Click group class for coloured help output and typo suggestions.
"""

import click

from core.errors import HueError
from models.utils import find_similar_strings


class ColouredGroup(click.Group):
    """Custom Group class that adds colour to help output and suggests similar commands."""

    def resolve_command(self, ctx, args):
        """Resolve command with suggestions for typos."""
        try:
            return super().resolve_command(ctx, args)
        except click.UsageError as e:
            if 'No such command' in str(e):
                cmd_name = args[0] if args else ''
                suggestions = self._get_suggestions(ctx, cmd_name)

                if suggestions:
                    error_msg = f"No such command '{cmd_name}'.\n\n"
                    error_msg += click.style("Did you mean one of these?\n", fg='yellow')
                    for suggestion in suggestions:
                        error_msg += click.style(f"  • {suggestion}\n", fg='green')
                    raise click.UsageError(error_msg)
            raise

    def _get_suggestions(self, ctx, cmd_name, max_suggestions=3):
        """Get command suggestions based on similarity."""
        if not cmd_name:
            return []

        visible = [name for name in self.list_commands(ctx)
                   if not self.get_command(ctx, name).hidden]
        return find_similar_strings(cmd_name, visible, limit=max_suggestions)

    def format_usage(self, ctx, formatter):
        """Format the usage line with colour."""
        formatter.write_paragraph()
        formatter.write_text(
            click.style('Usage: ', fg='cyan', bold=True) +
            click.style(f'{ctx.command_path} [OPTIONS] COMMAND [ARGS]...', fg='white')
        )

    def format_commands(self, ctx, formatter):
        """Format commands with colour."""
        commands = []
        for subcommand in self.list_commands(ctx):
            cmd = self.get_command(ctx, subcommand)
            if cmd is None or cmd.hidden:
                continue
            commands.append((subcommand, cmd.get_short_help_str(limit=500)))

        if commands:
            formatter.write_paragraph()
            formatter.write_text(click.style('Commands:', fg='yellow', bold=True))

            max_len = max(max(len(cmd[0]) for cmd in commands), 12)

            with formatter.indentation():
                for subcommand, help_text in commands:
                    formatter.write_text(
                        click.style(subcommand.ljust(max_len), fg='green') + '  ' +
                        click.style(help_text, fg='white', dim=True)
                    )


@click.command(name='setup')
@click.pass_obj
def setup_command(ctx):
    """Show current hub configuration and test the connection."""
    config = ctx.config

    click.echo()
    click.secho("=== Hue Hub Configuration ===", fg='cyan', bold=True)
    click.echo()
    click.echo(f"Config file:  {ctx.config_store.path}")
    click.echo(f"Cache file:   {ctx.cache_store.path}")
    click.echo()

    if not config.hub_configured:
        click.secho("⚠ No hub configured", fg='yellow', bold=True)
        click.echo("Use the 'hub' keyword in the launcher to pair with a hub.")
        click.echo()
        return

    click.echo(f"Hub address:  {config.ip_address}")
    cloud = click.style('logged in', fg='green') if config.api_token else click.style('logged out', fg='yellow')
    click.echo(f"Cloud:        {cloud}")
    click.echo()

    click.echo("Testing connection to hub...")
    try:
        lights = ctx.controller.get_lights()
    except HueError as e:
        click.secho(f"✗ Connection failed: {e}", fg='red', bold=True)
    else:
        click.secho(f"✓ Connected to hub at {config.ip_address} ({len(lights)} lights)",
                    fg='green', bold=True)
    click.echo()
