"""Scene listing and activation."""

import logging

from commands.base import HubRequiredCommand
from core.cache import ensure_fresh_cache, invalidate_cache
from core.errors import HueError
from models.items import MenuItem
from models.utils import fuzzy_matches, light_names

logger = logging.getLogger(__name__)

# Owner of scenes the hub creates internally
HIDDEN_OWNER = 'none'


class SceneCommand(HubRequiredCommand):
    """Lists hub and cloud scenes and activates the chosen one."""

    keyword = 'scenes'
    description = 'Choose a scene'

    def is_enabled(self, ctx):
        return super().is_enabled(ctx) and bool(ctx.cache.scenes or ctx.cache.cloud_scenes)

    def items(self, ctx, query):
        ensure_fresh_cache(ctx)
        lights = ctx.cache.lights

        # The hub often stores several copies of a scene; show one per name and light set
        unique = {}
        for scene_id, scene in sorted(ctx.cache.scenes.items()):
            if scene.owner == HIDDEN_OWNER or not fuzzy_matches(scene.short_name, query):
                continue
            unique.setdefault((scene.short_name, tuple(scene.light_ids)), scene)

        items = [
            MenuItem(
                title=scene.short_name,
                subtitle=', '.join(light_names(lights, scene.light_ids)),
                autocomplete=f'{self.keyword} {scene.short_name}',
                arg=self.arg(scene.id),
            )
            for scene in unique.values()
        ]

        for scene in ctx.cache.cloud_scenes.values():
            if not fuzzy_matches(f'{scene.category} {scene.name}', query):
                continue
            subtitle = ', '.join(light_names(lights, sorted(scene.light_states)))
            if scene.category:
                subtitle = f'{scene.category}, {subtitle}'
            items.append(MenuItem(
                title=scene.name,
                subtitle=subtitle,
                autocomplete=f'{self.keyword} {scene.name}',
                arg=self.arg(scene.id),
            ))

        items.sort(key=lambda item: item.title)
        return items

    def do(self, ctx, data):
        scene_id = str(data or '').strip()

        if scene_id in ctx.cache.scenes:
            scene = ctx.cache.scenes[scene_id]
            logger.debug("Setting scene to %s", scene_id)
            ctx.controller.activate_scene(scene_id)
            invalidate_cache(ctx)
            return f'Activated scene {scene.short_name}'

        if scene_id in ctx.cache.cloud_scenes:
            scene = ctx.cache.cloud_scenes[scene_id]
            logger.debug("Applying cloud scene %s", scene_id)
            for light_id, state in sorted(scene.light_states.items()):
                ctx.controller.set_light_state(light_id, state)
            invalidate_cache(ctx)
            return f'Activated scene {scene.name}'

        raise HueError(f"Invalid scene '{scene_id}'")
