"""Per-invocation state shared by all commands.

A Context is built once per process from the config and cache files and
passed to every command, instead of module-level globals.
"""

import logging
from datetime import datetime
from typing import Callable

from core.cache import Cache, load_cache
from core.config import Config, JsonStore, load_config, save_config
from core.controller import HueController
from core.errors import HueError
from core.prompt import Prompt

logger = logging.getLogger(__name__)


class Context:
    """Config, cache and collaborators for one command execution."""

    def __init__(self, config: Config, cache: Cache, config_store: JsonStore,
                 cache_store: JsonStore, prompt: Prompt,
                 controller_factory: Callable[[str, str], HueController] = HueController,
                 clock: Callable[[], datetime] = datetime.now):
        self.config = config
        self.cache = cache
        self.config_store = config_store
        self.cache_store = cache_store
        self.prompt = prompt
        self.controller_factory = controller_factory
        self.clock = clock
        self._controller = None

    @classmethod
    def load(cls, config_store: JsonStore, cache_store: JsonStore, prompt: Prompt,
             **kwargs) -> 'Context':
        """Build a Context from the config and cache files."""
        logger.debug("Using config file %s", config_store.path)
        logger.debug("Using cache file %s", cache_store.path)
        config = load_config(config_store)
        cache = load_cache(cache_store.load())
        return cls(config, cache, config_store, cache_store, prompt, **kwargs)

    @property
    def controller(self) -> HueController:
        """Hub client for the configured hub.

        Raises:
            HueError: If no hub has been paired yet
        """
        if not self.config.hub_configured:
            raise HueError("No hub configured. Use 'hub' to connect to one.")
        if self._controller is None:
            self._controller = self.controller_factory(self.config.ip_address, self.config.username)
        return self._controller

    def now(self) -> datetime:
        return self.clock()

    def save_config(self):
        save_config(self.config_store, self.config)
        # A new hub or username needs a new client
        self._controller = None

    def save_cache(self):
        self.cache_store.save(self.cache.to_dict())
