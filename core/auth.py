"""
Pairing with a Hue hub.

Handles hub discovery and link button authentication. The resulting
address and username are stored in the Config by the hub command.
"""

import logging

import requests

from core.controller import REQUEST_TIMEOUT, raise_for_hub_errors
from core.errors import HueApiError, HueConnectionError
from models.types import DiscoveredBridge

logger = logging.getLogger(__name__)

DISCOVERY_URL = 'https://discovery.meethue.com/'
APP_NAME = 'hue_launcher#workflow'


def discover_bridges(session: requests.Session | None = None) -> list[DiscoveredBridge]:
    """Discover Hue hubs on the network using N-UPnP.

    Uses the Philips discovery service to find hubs on the same network.

    Returns:
        List of bridge dicts with keys: id, internalipaddress, name

    Raises:
        HueConnectionError: If the discovery service fails
    """
    http = session or requests
    try:
        response = http.get(DISCOVERY_URL, timeout=REQUEST_TIMEOUT)
        response.raise_for_status()
        bridges = response.json()
    except requests.exceptions.HTTPError as e:
        if e.response is not None and e.response.status_code == 429:
            raise HueConnectionError(
                "Discovery service rate limit reached; enter your hub's IP address instead") from e
        raise HueConnectionError(f"Hub discovery failed: {e}") from e
    except requests.exceptions.RequestException as e:
        raise HueConnectionError(f"Hub discovery failed: {e}") from e
    except ValueError as e:
        raise HueConnectionError(f"Failed to parse discovery response: {e}") from e

    logger.debug("Discovered %d hubs", len(bridges))

    # Sort by IP address for consistency
    return sorted(bridges, key=lambda b: b.get('internalipaddress', ''))


def create_user_via_link_button(bridge_ip: str, app_name: str = APP_NAME,
                                session: requests.Session | None = None) -> str:
    """Create a new API user via link button authentication.

    The physical link button on the hub must have been pressed shortly
    before this is called.

    Args:
        bridge_ip: Hub IP address
        app_name: Application identifier (devicetype)

    Returns:
        The new username

    Raises:
        LinkButtonNotPressed: If the link button was not pressed
        HueApiError: If the hub rejects the request
        HueConnectionError: If the hub cannot be reached
    """
    url = f"https://{bridge_ip}/api"
    http = session or requests

    try:
        response = http.post(url, json={'devicetype': app_name}, verify=False, timeout=REQUEST_TIMEOUT)
        data = response.json()
    except requests.exceptions.RequestException as e:
        raise HueConnectionError(f"Connection error: {e}") from e
    except ValueError as e:
        raise HueConnectionError(f"Failed to parse response: {e}") from e

    raise_for_hub_errors(data)

    try:
        return data[0]['success']['username']
    except (IndexError, KeyError, TypeError) as e:
        raise HueApiError(f"Unexpected pairing response: {data}") from e
