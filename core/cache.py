"""Cache management for Hue hub data.

This module handles the local snapshot of lights, scenes and groups:
fetching it from the hub, deciding when it is stale, invalidating it
after changes, and reporting cache information.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import TYPE_CHECKING

from models.types import CloudScene, Group, Light, Scene

if TYPE_CHECKING:
    from core.context import Context

logger = logging.getLogger(__name__)

# Cached data older than this is re-fetched before answering a query
STALE_AFTER = timedelta(seconds=60)


@dataclass
class Cache:
    """Snapshot of hub resources, keyed by id."""
    last_update: datetime | None = None
    lights: dict[str, Light] = field(default_factory=dict)
    scenes: dict[str, Scene] = field(default_factory=dict)
    groups: dict[str, Group] = field(default_factory=dict)
    cloud_scenes: dict[str, CloudScene] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict) -> 'Cache':
        """Build a Cache from the cache file format.

        An unparseable timestamp is treated as missing (stale cache). Malformed
        entries raise, and the caller falls back to an empty cache.
        """
        last_update = None
        if data.get('LastUpdate'):
            try:
                last_update = datetime.fromisoformat(data['LastUpdate'])
            except (ValueError, TypeError):
                logger.warning("Invalid cache timestamp %r", data['LastUpdate'])

        return cls(
            last_update=last_update,
            lights={k: Light.from_dict(v) for k, v in data.get('Lights', {}).items()},
            scenes={k: Scene.from_dict(v) for k, v in data.get('Scenes', {}).items()},
            groups={k: Group.from_dict(v) for k, v in data.get('Groups', {}).items()},
            cloud_scenes={k: CloudScene.from_dict(v) for k, v in data.get('CloudScenes', {}).items()},
        )

    def to_dict(self) -> dict:
        return {
            'LastUpdate': self.last_update.isoformat() if self.last_update else None,
            'Lights': {k: v.to_dict() for k, v in self.lights.items()},
            'Scenes': {k: v.to_dict() for k, v in self.scenes.items()},
            'Groups': {k: v.to_dict() for k, v in self.groups.items()},
            'CloudScenes': {k: v.to_dict() for k, v in self.cloud_scenes.items()},
        }


def load_cache(data: dict) -> Cache:
    """Build a Cache from loaded JSON, or an empty Cache if it is malformed."""
    try:
        return Cache.from_dict(data)
    except (KeyError, TypeError, AttributeError) as e:
        logger.warning("Ignoring malformed cache: %s", e)
        return Cache()


def reload_cache(ctx: 'Context'):
    """Fetch lights, scenes and groups from the hub and save the cache.

    All three are fetched before anything is replaced, so a failure leaves
    both the in-memory cache and the cache file untouched.

    Raises:
        HueError: If any fetch fails
    """
    controller = ctx.controller
    logger.debug("Refreshing cache from hub at %s", controller.bridge_ip)

    lights = controller.get_lights()
    scenes = controller.get_scenes()
    groups = controller.get_groups()

    ctx.cache.lights = lights
    ctx.cache.scenes = scenes
    ctx.cache.groups = groups
    ctx.cache.last_update = ctx.now()
    ctx.save_cache()

    logger.debug("Cached %d lights, %d scenes, %d groups", len(lights), len(scenes), len(groups))


def cache_age(ctx: 'Context') -> timedelta | None:
    """Age of the cache, or None if it has never been refreshed."""
    if ctx.cache.last_update is None:
        return None
    return ctx.now() - ctx.cache.last_update


def is_cache_stale(ctx: 'Context', max_age: timedelta = STALE_AFTER) -> bool:
    """Check if cache is older than max_age.

    Returns:
        True if cache is stale or was never refreshed, False if fresh
    """
    age = cache_age(ctx)
    if age is None:
        return True
    return age > max_age


def ensure_fresh_cache(ctx: 'Context', max_age: timedelta = STALE_AFTER) -> bool:
    """Reload the cache if it is stale.

    Returns:
        True if a reload happened, False if the cache was already fresh

    Raises:
        HueError: If the reload fails
    """
    if not is_cache_stale(ctx, max_age):
        return False

    logger.debug("Cache is stale (last updated: %s)", ctx.cache.last_update)
    reload_cache(ctx)
    return True


def invalidate_cache(ctx: 'Context'):
    """Mark the cache stale so the next read re-fetches from the hub."""
    ctx.cache.last_update = None
    ctx.save_cache()
    logger.debug("Cleared cache")


def get_cache_info(ctx: 'Context') -> dict:
    """Get information about the current cache.

    Returns:
        Dictionary with cache information including exists, last_updated,
        age_seconds, is_stale, and counts of cached resources
    """
    cache = ctx.cache
    age = cache_age(ctx)

    return {
        'exists': cache.last_update is not None or bool(cache.lights),
        'last_updated': cache.last_update.isoformat() if cache.last_update else None,
        'age_seconds': age.total_seconds() if age is not None else None,
        'is_stale': is_cache_stale(ctx),
        'counts': {
            'lights': len(cache.lights),
            'scenes': len(cache.scenes),
            'groups': len(cache.groups),
            'cloud_scenes': len(cache.cloud_scenes),
        }
    }
