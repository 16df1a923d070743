"""Listing and control of individual lights.

Query forms (after the ``lights`` keyword):
  <text>                      fuzzy-filter the light list
  <id>▸ <property>            pick a property of one light
  <id>▸ <property>▸ <value>   set that property
"""

import json
import logging

from commands.base import HubRequiredCommand
from core.cache import ensure_fresh_cache, invalidate_cache
from core.errors import HueError
from models.items import ICON_OFF, ICON_ON, ItemMod, MenuItem
from models.types import Light
from models.utils import SEPARATOR, fuzzy_matches, parse_level, split_query

logger = logging.getLogger(__name__)

PROPERTIES = ('name', 'state', 'level', 'color')


def toggle_state(light: Light) -> dict:
    """State delta that flips a light on or off."""
    return {'on': not light.on}


class LightCommand(HubRequiredCommand):
    """Lists lights and edits one light at a time."""

    keyword = 'lights'
    description = 'Control individual lights'

    def items(self, ctx, query):
        ensure_fresh_cache(ctx)
        lights = ctx.cache.lights
        parts = split_query(query)

        if len(parts) == 1:
            return self._light_items(lights, query)

        light_id = parts[0]
        light = lights.get(light_id)
        if light is None:
            return [MenuItem(title=f"Unknown light '{light_id}'", valid=False)]

        prefix = f'{self.keyword} {light_id}{SEPARATOR} '
        prop = parts[1].lower()
        logger.debug("light: %s, property: %s", light_id, prop)

        if len(parts) > 2 and prop in PROPERTIES:
            value = parts[2]
            return [getattr(self, f'_{prop}_item')(light, value)]

        return self._property_items(light, prop, prefix)

    def _light_items(self, lights: dict[str, Light], query: str) -> list[MenuItem]:
        items = []

        for light in lights.values():
            title = f'{light.id}: {light.name}'
            if not fuzzy_matches(title, query):
                continue

            new_state = 'off' if light.on else 'on'
            items.append(MenuItem(
                title=title,
                subtitle=(f'Hue: {light.hue}, Sat: {light.saturation}, '
                          f'Bri: {light.brightness}, RGB: {light.hex_colour}'),
                icon=ICON_ON if light.on else ICON_OFF,
                autocomplete=f'{self.keyword} {light.id}{SEPARATOR} ',
                valid=False,
                mods={'cmd': ItemMod(
                    subtitle=f'Turn light {new_state}',
                    arg=self.arg({'light': light.id, 'state': toggle_state(light)}),
                )},
            ))

        items.sort(key=lambda item: item.title)
        return items

    def _property_items(self, light: Light, prop: str, prefix: str) -> list[MenuItem]:
        """Items for each property whose name matches prop."""
        icon = ICON_ON if light.on else ICON_OFF
        items = []

        if fuzzy_matches('name', prop):
            items.append(MenuItem(
                title=f'Name: {light.name}',
                subtitle='Update this light’s name',
                icon=icon,
                autocomplete=f'{prefix}Name{SEPARATOR} ',
                valid=False,
            ))

        if fuzzy_matches('state', prop):
            items.append(self._state_item(light, ''))

        if fuzzy_matches('level', prop):
            items.append(MenuItem(
                title=f'Level: {light.brightness}',
                subtitle='Set this light’s brightness',
                icon=icon,
                autocomplete=f'{prefix}Level{SEPARATOR} ',
                valid=False,
            ))

        if fuzzy_matches('color', prop):
            items.append(MenuItem(
                title=f'Color: {light.hex_colour}',
                subtitle='Change this light’s color',
                icon=icon,
                autocomplete=f'{prefix}Color{SEPARATOR} ',
                valid=False,
            ))

        return items

    def _name_item(self, light: Light, value: str) -> MenuItem:
        if not value:
            return MenuItem(title=f'Name: {light.name}', subtitle='Type a new name', valid=False)
        return MenuItem(
            title=f'Name: {value}',
            subtitle=f'Name: {light.name}',
            arg=self.arg({'light': light.id, 'name': value}),
        )

    def _state_item(self, light: Light, value: str) -> MenuItem:
        current = 'on' if light.on else 'off'
        if value.lower() in ('on', 'off'):
            target = value.lower() == 'on'
        else:
            target = not light.on

        return MenuItem(
            title=f'State: {current}',
            subtitle=f"Press Enter to turn this light {'on' if target else 'off'}",
            icon=ICON_ON if light.on else ICON_OFF,
            arg=self.arg({'light': light.id, 'state': {'on': target}}),
        )

    def _level_item(self, light: Light, value: str) -> MenuItem:
        if not value:
            return MenuItem(title=f'Level: {light.brightness}',
                            subtitle='Enter an integer between 0 and 255', valid=False)

        level = parse_level(value)
        if level is None:
            return MenuItem(title=f'Level: {value}', subtitle=f"Invalid number '{value}'", valid=False)

        return MenuItem(
            title=f'Level: {level}',
            subtitle=f'Level: {light.brightness}',
            arg=self.arg({'light': light.id, 'state': {'bri': level}}),
        )

    def _color_item(self, light: Light, value: str) -> MenuItem:
        if not value:
            return MenuItem(title=f'Color: {light.hex_colour}',
                            subtitle='Enter a color as #rrggbb', valid=False)

        try:
            state = light.colour_state(value)
        except ValueError:
            return MenuItem(title=f'Color: {value}', subtitle=f"Invalid color '{value}'", valid=False)

        new_light = Light(light.id, light.name, True, state['bri'], state['hue'], state['sat'])
        return MenuItem(
            title=f'Color: {new_light.hex_colour}',
            subtitle=f'Color: {light.hex_colour}',
            arg=self.arg({'light': light.id, 'state': state}),
        )

    def do(self, ctx, data):
        if not isinstance(data, dict) or not data.get('light'):
            raise HueError("Missing light data")

        light_id = str(data['light'])
        controller = ctx.controller

        if data.get('state'):
            state = data['state']
            controller.set_light_state(light_id, state)
            out = f'Set state for {light_id} to {json.dumps(state)}'
        elif data.get('name'):
            controller.set_light_name(light_id, data['name'])
            out = f"Renamed light {light_id} to {data['name']}"
        else:
            raise HueError("Missing light state data")

        invalidate_cache(ctx)
        return out
