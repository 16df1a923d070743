"""Menu items shown by the launcher.

Items are rendered in the launcher's script filter JSON format:
``{"items": [{"title": ..., "subtitle": ..., "arg": ..., "valid": ...}]}``.
An item is actionable when it carries an ItemArg; selecting it hands the
serialized arg back to ``hue_launcher.py do``.
"""

import json
from dataclasses import dataclass, field
from typing import Any

ICON_ON = 'on.png'
ICON_OFF = 'off.png'


@dataclass
class ItemArg:
    """Action payload: which command to run, and its data."""
    keyword: str
    data: Any = None

    def to_json(self) -> str:
        return json.dumps({'keyword': self.keyword, 'data': self.data}, separators=(',', ':'))

    @classmethod
    def from_json(cls, text: str) -> 'ItemArg':
        """Parse a serialized arg.

        Raises:
            ValueError: If text is not a JSON object with a keyword
        """
        value = json.loads(text)
        if not isinstance(value, dict) or not value.get('keyword'):
            raise ValueError(f"Not an item arg: {text}")
        return cls(keyword=value['keyword'], data=value.get('data'))


@dataclass
class ItemMod:
    """Alternative action shown while a modifier key is held."""
    subtitle: str
    arg: ItemArg | None = None

    def to_dict(self) -> dict:
        result = {'subtitle': self.subtitle, 'valid': self.arg is not None}
        if self.arg is not None:
            result['arg'] = self.arg.to_json()
        return result


@dataclass
class MenuItem:
    """One row in the launcher's result list."""
    title: str
    subtitle: str = ''
    arg: ItemArg | None = None
    autocomplete: str | None = None
    valid: bool | None = None
    icon: str | None = None
    mods: dict[str, ItemMod] = field(default_factory=dict)

    @property
    def actionable(self) -> bool:
        if self.valid is not None:
            return self.valid
        return self.arg is not None

    def to_dict(self) -> dict:
        result = {'title': self.title, 'valid': self.actionable}
        if self.subtitle:
            result['subtitle'] = self.subtitle
        if self.arg is not None:
            result['arg'] = self.arg.to_json()
        if self.autocomplete is not None:
            result['autocomplete'] = self.autocomplete
        if self.icon:
            result['icon'] = {'path': self.icon}
        if self.mods:
            result['mods'] = {key: mod.to_dict() for key, mod in self.mods.items()}
        return result


def error_item(error: Exception) -> MenuItem:
    return MenuItem(title='Error', subtitle=str(error), valid=False)


def render_items(items: list[MenuItem]) -> str:
    """Serialize items for the launcher."""
    return json.dumps({'items': [item.to_dict() for item in items]}, ensure_ascii=False)
