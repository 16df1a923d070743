"""Hub discovery and pairing."""

import ipaddress
import logging

from commands.base import Command
from core.auth import create_user_via_link_button, discover_bridges
from core.cache import Cache
from core.errors import HueConnectionError, HueError
from models.items import MenuItem
from models.utils import fuzzy_matches

logger = logging.getLogger(__name__)


def is_ip_address(text: str) -> bool:
    try:
        ipaddress.ip_address(text)
    except ValueError:
        return False
    return True


class HubCommand(Command):
    """Lists hubs found on the network and pairs with the chosen one."""

    keyword = 'hub'
    description = 'Select a Hue hub to connect to'

    def items(self, ctx, query):
        items = []

        try:
            bridges = discover_bridges()
        except HueConnectionError as e:
            logger.warning("Discovery failed: %s", e)
            bridges = []
            if not is_ip_address(query):
                items.append(MenuItem(title="Enter your hub's IP address", subtitle=str(e), valid=False))

        for bridge in bridges:
            ip = bridge.get('internalipaddress', '')
            title = bridge.get('name') or ip
            if fuzzy_matches(f'{title} {ip}', query):
                items.append(MenuItem(
                    title=title,
                    subtitle=ip,
                    autocomplete=f'{self.keyword} {ip}',
                    arg=self.arg(ip),
                ))

        items.sort(key=lambda item: item.title)

        known = {bridge.get('internalipaddress') for bridge in bridges}
        if is_ip_address(query) and query not in known:
            items.append(MenuItem(
                title=f'Connect to {query}',
                subtitle='Pair with the hub at this address',
                arg=self.arg(query),
            ))

        return items

    def do(self, ctx, data):
        ip = str(data or '').strip()
        if not is_ip_address(ip):
            raise HueError(f"Invalid hub address '{ip}'")

        if not ctx.prompt.show_message("Press the button on your hub, then click OK to continue...",
                                       cancellable=True):
            logger.info("User cancelled pairing")
            return ''

        try:
            username = create_user_via_link_button(ip)
        except HueError as e:
            ctx.prompt.show_message(f"There was an error accessing your hub:\n\n{e}")
            raise

        ctx.config.ip_address = ip
        ctx.config.username = username
        ctx.save_config()

        # Anything cached came from the previous hub
        ctx.cache = Cache()
        ctx.save_cache()

        ctx.prompt.show_message("You've successfully connected to your hub!")
        return f'Connected to hub at {ip}'
