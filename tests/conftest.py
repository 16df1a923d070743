"""Pytest configuration and fixtures for Hue launcher tests."""

import logging
from datetime import datetime
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from core.cache import Cache
from core.config import Config
from core.context import Context
from core.controller import HueController
from core.prompt import Prompt
from models.types import Group, Light, Scene

NOW = datetime(2025, 12, 11, 10, 0, 0)


class MemoryStore:
    """In-memory stand-in for JsonStore that records every save."""

    def __init__(self, data: dict | None = None, name: str = 'memory.json'):
        self.path = Path('/nonexistent') / name
        self.data = data or {}
        self.saves = []

    def load(self) -> dict:
        return dict(self.data)

    def save(self, data: dict):
        self.data = data
        self.saves.append(data)


class FakePrompt(Prompt):
    """Prompt that records messages and returns canned answers."""

    def __init__(self, confirm: bool = True, values: dict | None = None):
        self.confirm = confirm
        self.values = values or {}
        self.messages = []
        self.fields = []

    def show_message(self, message, cancellable=False):
        self.messages.append(message)
        return self.confirm if cancellable else True

    def prompt_user(self, fields):
        self.fields.extend(fields)
        return dict(self.values), self.confirm


@pytest.fixture
def project_root():
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def lights():
    return {
        '1': Light('1', 'Kitchen', on=True, brightness=100, hue=10000, saturation=200),
        '2': Light('2', 'Hallway', on=False, brightness=50),
        '3': Light('3', 'Bedroom', on=True, brightness=201, hue=46920, saturation=254),
    }


@pytest.fixture
def scenes():
    return {
        'abc': Scene('abc', 'Relax', owner='user1', light_ids=['1', '3']),
        'def': Scene('def', 'Relax', owner='user2', light_ids=['1', '3']),
        'ghi': Scene('ghi', 'Bright', owner='user1', light_ids=['2']),
        'hid': Scene('hid', 'Internal', owner='none', light_ids=['1']),
    }


@pytest.fixture
def groups():
    return {
        '1': Group('1', 'Upstairs', light_ids=['3']),
        '2': Group('2', 'Downstairs', light_ids=['1', '2']),
    }


@pytest.fixture
def mock_controller(lights, scenes, groups):
    """Mock HueController returning the sample lights, scenes and groups."""
    controller = MagicMock(spec=HueController)
    controller.bridge_ip = '192.168.1.2'
    controller.get_lights.return_value = lights
    controller.get_scenes.return_value = scenes
    controller.get_groups.return_value = groups
    return controller


@pytest.fixture
def prompt():
    return FakePrompt()


@pytest.fixture
def config_store():
    return MemoryStore(name='config.json')


@pytest.fixture
def cache_store():
    return MemoryStore(name='cache.json')


@pytest.fixture
def ctx(mock_controller, prompt, config_store, cache_store):
    """Context for a paired hub with an empty (stale) cache and a fixed clock."""
    return Context(
        Config(ip_address='192.168.1.2', username='user-123'),
        Cache(),
        config_store,
        cache_store,
        prompt,
        controller_factory=lambda ip, username: mock_controller,
        clock=lambda: NOW,
    )


@pytest.fixture
def fresh_ctx(ctx, lights, scenes, groups):
    """Context whose cache was refreshed just now."""
    ctx.cache = Cache(last_update=NOW, lights=dict(lights), scenes=dict(scenes), groups=dict(groups))
    return ctx


@pytest.fixture
def restore_logging():
    """Undo configure_logging so handlers don't outlive a captured stream."""
    names = ('core', 'models', 'commands', 'hue_launcher')
    saved = {name: (logging.getLogger(name).level, list(logging.getLogger(name).handlers)) for name in names}
    yield
    for name, (level, handlers) in saved.items():
        logger = logging.getLogger(name)
        logger.setLevel(level)
        logger.handlers = handlers
        logger.propagate = True
