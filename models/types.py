"""Type definitions for the Hue launcher.

Lights, scenes and groups are read from the hub's v1 API and kept in the
local cache. ``from_api`` builds a model from the hub's JSON, ``from_dict``
and ``to_dict`` round-trip the cache file format.
"""

import colorsys
import re
from dataclasses import dataclass, field
from typing import TypedDict

MAX_BRIGHTNESS = 255
MAX_HUE = 65535
MAX_SATURATION = 254

HEX_COLOUR = re.compile(r'#?[0-9a-fA-F]{6}')

# Suffix the hub appends to scene names, e.g. "Relax on 1449133269486"
SCENE_TIMESTAMP = re.compile(r' on [0-9]+$')


class DiscoveredBridge(TypedDict):
    """Bridge information from N-UPnP discovery."""
    id: str
    internalipaddress: str
    name: str | None


@dataclass
class Light:
    """A light as last seen on the hub."""
    id: str
    name: str
    on: bool = False
    brightness: int = 0
    hue: int = 0
    saturation: int = 0

    @classmethod
    def from_api(cls, light_id: str, data: dict) -> 'Light':
        state = data.get('state', {})
        return cls(
            id=light_id,
            name=data.get('name', ''),
            on=bool(state.get('on', False)),
            brightness=state.get('bri', 0),
            hue=state.get('hue', 0),
            saturation=state.get('sat', 0),
        )

    @classmethod
    def from_dict(cls, data: dict) -> 'Light':
        return cls(
            id=data['id'],
            name=data.get('name', ''),
            on=data.get('on', False),
            brightness=data.get('brightness', 0),
            hue=data.get('hue', 0),
            saturation=data.get('saturation', 0),
        )

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'name': self.name,
            'on': self.on,
            'brightness': self.brightness,
            'hue': self.hue,
            'saturation': self.saturation,
        }

    def state(self) -> dict:
        """Full light state in hub format."""
        return {'on': self.on, 'bri': self.brightness, 'hue': self.hue, 'sat': self.saturation}

    @property
    def rgb(self) -> tuple[int, int, int]:
        """Approximate RGB colour from hue, saturation and brightness."""
        r, g, b = colorsys.hsv_to_rgb(
            self.hue / MAX_HUE,
            self.saturation / MAX_SATURATION,
            self.brightness / MAX_BRIGHTNESS,
        )
        return round(r * 255), round(g * 255), round(b * 255)

    @property
    def hex_colour(self) -> str:
        return '#{:02x}{:02x}{:02x}'.format(*self.rgb)

    def colour_state(self, hex_colour: str) -> dict:
        """Build a state delta that sets this light to a hex colour.

        Raises:
            ValueError: If hex_colour is not of the form #rrggbb or rrggbb
        """
        r, g, b = parse_hex_colour(hex_colour)
        h, s, v = colorsys.rgb_to_hsv(r / 255, g / 255, b / 255)
        return {
            'on': True,
            'hue': round(h * MAX_HUE),
            'sat': round(s * MAX_SATURATION),
            'bri': round(v * MAX_BRIGHTNESS),
        }


@dataclass
class Scene:
    """A scene stored on the hub."""
    id: str
    short_name: str
    owner: str = ''
    light_ids: list[str] = field(default_factory=list)

    @classmethod
    def from_api(cls, scene_id: str, data: dict) -> 'Scene':
        name = data.get('name', '')
        short_name = SCENE_TIMESTAMP.sub('', name)
        return cls(
            id=scene_id,
            short_name=short_name,
            owner=data.get('owner', ''),
            light_ids=list(data.get('lights', [])),
        )

    @classmethod
    def from_dict(cls, data: dict) -> 'Scene':
        return cls(
            id=data['id'],
            short_name=data.get('short_name', ''),
            owner=data.get('owner', ''),
            light_ids=list(data.get('light_ids', [])),
        )

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'short_name': self.short_name,
            'owner': self.owner,
            'light_ids': self.light_ids,
        }


@dataclass
class Group:
    """A named set of lights defined on the hub."""
    id: str
    name: str
    light_ids: list[str] = field(default_factory=list)

    @classmethod
    def from_api(cls, group_id: str, data: dict) -> 'Group':
        return cls(id=group_id, name=data.get('name', ''), light_ids=list(data.get('lights', [])))

    @classmethod
    def from_dict(cls, data: dict) -> 'Group':
        return cls(id=data['id'], name=data.get('name', ''), light_ids=list(data.get('light_ids', [])))

    def to_dict(self) -> dict:
        return {'id': self.id, 'name': self.name, 'light_ids': self.light_ids}


@dataclass
class CloudScene:
    """A scene downloaded from the cloud service.

    Cloud scenes are not stored on the hub, so activating one means sending
    each light its target state.
    """
    id: str
    name: str
    category: str = ''
    light_states: dict[str, dict] = field(default_factory=dict)

    @classmethod
    def from_api(cls, data: dict) -> 'CloudScene':
        states = {}
        for light in data.get('lights', []):
            state = {k: light[k] for k in ('on', 'bri', 'hue', 'sat') if k in light}
            states[str(light['id'])] = state
        return cls(
            id=str(data['id']),
            name=data.get('name', ''),
            category=data.get('category', ''),
            light_states=states,
        )

    @classmethod
    def from_dict(cls, data: dict) -> 'CloudScene':
        return cls(
            id=data['id'],
            name=data.get('name', ''),
            category=data.get('category', ''),
            light_states=dict(data.get('light_states', {})),
        )

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'name': self.name,
            'category': self.category,
            'light_states': self.light_states,
        }


def parse_hex_colour(value: str) -> tuple[int, int, int]:
    """Parse '#rrggbb' (leading '#' optional) into an RGB tuple.

    Raises:
        ValueError: If the value is not a six-digit hex colour
    """
    text = value.strip()
    if not HEX_COLOUR.fullmatch(text):
        raise ValueError(f"Invalid colour '{value}'")
    text = text.lstrip('#')
    return int(text[0:2], 16), int(text[2:4], 16), int(text[4:6], 16)
