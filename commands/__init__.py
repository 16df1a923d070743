"""Launcher command modules.

This package contains:
- base: Command base class
- hub: Hub discovery and pairing
- lights: Light listing and control
- level: Global brightness control
- groups: Group listing
- scenes: Scene listing and activation
- sync: Manual cache refresh
- cloud: Cloud service login/logout
- launcher: click commands for query and action modes
- cache: click commands for reloading and inspecting the cache
- setup: Custom click group with typo suggestions
"""

from commands.base import Command
from commands.cloud import CloudCommand
from commands.groups import GroupCommand
from commands.hub import HubCommand
from commands.level import LevelCommand
from commands.lights import LightCommand
from commands.scenes import SceneCommand
from commands.sync import SyncCommand


def all_commands() -> list[Command]:
    """Every launcher command, in menu order."""
    return [
        SceneCommand(),
        LightCommand(),
        LevelCommand(),
        GroupCommand(),
        SyncCommand(),
        HubCommand(),
        CloudCommand(),
    ]
