"""Global brightness control."""

import logging

from commands.base import HubRequiredCommand
from core.cache import ensure_fresh_cache, invalidate_cache
from core.errors import HueError
from models.items import MenuItem
from models.types import Light
from models.utils import parse_level

logger = logging.getLogger(__name__)


def mean_brightness(lights) -> float | None:
    """Mean brightness of the lights that are on, or None if none is on."""
    on = [light.brightness for light in lights if light.on]
    if not on:
        return None
    return sum(on) / len(on)


class LevelCommand(HubRequiredCommand):
    """Shows the average level of the lights that are on, and sets it."""

    keyword = 'level'
    description = 'Change the light level for all lights'

    def items(self, ctx, query):
        ensure_fresh_cache(ctx)
        lights = ctx.cache.lights

        average = mean_brightness(lights.values())
        if average is None:
            return [MenuItem(title='No lights are currently on', valid=False)]

        logger.debug("Average brightness: %f", average)
        level = int(average)

        query = query.strip()
        if not query:
            return [MenuItem(title=f'Level: {level}',
                             subtitle='Type a level between 0 and 255', valid=False)]

        light_id, text = self._split(query)
        item = MenuItem(title=f'Level: {text}')

        if light_id is not None and light_id not in lights:
            item.subtitle = f"Unknown light '{light_id}'"
            item.valid = False
            return [item]

        value = parse_level(text)
        if value is None:
            item.subtitle = 'Enter an integer between 0 and 255'
            item.valid = False
            return [item]

        data = {'level': value}
        if light_id is not None:
            data['light'] = light_id
            item.subtitle = f'Set {lights[light_id].name} to {value}'
        else:
            item.subtitle = f'Current level: {level}'
        item.arg = self.arg(data)
        return [item]

    @staticmethod
    def _split(text: str) -> tuple[str | None, str]:
        """Split "<id> <level>" or "<level>" into (id, level text)."""
        parts = text.split(None, 1)
        if len(parts) == 2:
            return parts[0], parts[1].strip()
        return None, text

    def do(self, ctx, data):
        if isinstance(data, dict):
            light_id = data.get('light')
            text = str(data.get('level', ''))
        else:
            light_id, text = self._split(str(data or '').strip())

        level = parse_level(text)
        if level is None:
            raise HueError(f"Invalid level '{text}'")

        controller = ctx.controller
        lights: dict[str, Light] = controller.get_lights()

        changed = 0
        failed = []
        for lid, light in sorted(lights.items()):
            if light_id and lid != str(light_id):
                continue
            if not light.on:
                continue
            try:
                controller.set_light_state(lid, {'bri': level})
                changed += 1
            except HueError as e:
                logger.error("Error setting state for %s: %s", lid, e)
                failed.append(lid)

        invalidate_cache(ctx)

        if failed:
            raise HueError(f"Failed to set level for lights: {', '.join(failed)}")
        return f'Set level to {level} for {changed} light(s)'
