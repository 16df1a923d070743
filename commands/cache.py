"""Cache management CLI commands.

This module provides CLI commands for reloading and inspecting the
local cache of Hue hub data.
"""

from datetime import datetime

import click

from core.cache import STALE_AFTER, get_cache_info, reload_cache
from core.errors import HueError


@click.command(name='reload')
@click.pass_obj
def reload_command(ctx):
    """Reload and cache lights, scenes and groups from the hub."""
    click.echo()
    click.secho("=== Reloading Hue Hub Data ===", fg='cyan', bold=True)
    click.echo()

    try:
        reload_cache(ctx)
    except HueError as e:
        click.secho(f"✗ Failed to reload cache: {e}", fg='red')
        raise SystemExit(1)

    cache = ctx.cache
    click.echo(f"✓ Cached {len(cache.lights)} lights")
    click.echo(f"✓ Cached {len(cache.scenes)} scenes")
    click.echo(f"✓ Cached {len(cache.groups)} groups")
    click.echo(f"\nCache saved to {ctx.cache_store.path}")
    click.echo()


def format_age(seconds: float) -> str:
    if seconds < 60:
        return f"{int(seconds)} seconds"
    if seconds < 3600:
        return f"{int(seconds / 60)} minutes"
    if seconds < 86400:
        return f"{seconds / 3600:.1f} hours"
    return f"{seconds / 86400:.1f} days"


@click.command(name='cache-info')
@click.pass_obj
def cache_info_command(ctx):
    """Show cache status and information.

    Displays when the cache was last updated, how old it is, and whether
    the next query will refresh it. Also shows counts of cached resources.
    """
    click.echo()
    click.secho("=== Cache Information ===", fg='cyan', bold=True)
    click.echo()

    info = get_cache_info(ctx)

    if not info['exists']:
        click.secho("No cache found", fg='red')
        click.echo(f"Cache file: {ctx.cache_store.path}")
        click.echo()
        return

    last_updated = info['last_updated']
    if last_updated:
        formatted = datetime.fromisoformat(last_updated).strftime('%d %b %Y at %H:%M:%S')
        click.echo(f"Last updated: {click.style(formatted, fg='green')}")
    else:
        click.echo(f"Last updated: {click.style('Never (invalidated)', fg='yellow')}")

    if info['age_seconds'] is not None:
        age_colour = 'red' if info['is_stale'] else 'green'
        click.echo(f"Cache age:    {click.style(format_age(info['age_seconds']), fg=age_colour)}")

    if info['is_stale']:
        limit = int(STALE_AFTER.total_seconds())
        click.echo(f"Status:       {click.style(f'STALE (>{limit} seconds old)', fg='red')}")
    else:
        click.echo(f"Status:       {click.style('Fresh', fg='green')}")

    click.secho("\nCached Resources:", fg='cyan')
    counts = info['counts']
    items = [("Lights", "lights"),
             ("Scenes", "scenes"),
             ("Groups", "groups"),
             ("Cloud scenes", "cloud_scenes")]

    max_label_len = max(len(label) for label, _ in items)
    max_num_len = max(len(str(counts.get(key, 0))) for _, key in items)
    for label, key in items:
        value = counts.get(key, 0)
        click.echo(f"  {label:<{max_label_len}} {value:>{max_num_len}}")

    click.echo(f"\n{click.style('Cache file:', fg='cyan')} {ctx.cache_store.path}\n")
