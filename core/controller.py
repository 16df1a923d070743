"""HueController class for managing Hue hub API interactions.

This module contains the controller class that handles all communication
with the Philips Hue hub using the v1 REST API.
"""

import logging

import requests
from requests.packages.urllib3.exceptions import InsecureRequestWarning

from core.errors import HueApiError, HueConnectionError, LinkButtonNotPressed
from models.types import Group, Light, Scene

logger = logging.getLogger(__name__)

# Hub error type returned when pairing before the link button is pressed
LINK_BUTTON_NOT_PRESSED = 101

REQUEST_TIMEOUT = 5

# Disable SSL warnings for self-signed certificate
requests.packages.urllib3.disable_warnings(InsecureRequestWarning)


def raise_for_hub_errors(result):
    """Raise HueApiError if a v1 response contains an error entry.

    The v1 API reports failures with HTTP 200 and a body like
    ``[{"error": {"type": 1, "address": "/", "description": "unauthorized user"}}]``.
    """
    if not isinstance(result, list):
        return

    for entry in result:
        if isinstance(entry, dict) and 'error' in entry:
            error = entry['error']
            error_type = error.get('type')
            description = error.get('description', 'Unknown error')
            if error_type == LINK_BUTTON_NOT_PRESSED:
                raise LinkButtonNotPressed(description, error_type, error.get('address'))
            raise HueApiError(description, error_type, error.get('address'))


class HueController:
    """Manages connection and operations with a Philips Hue hub using API v1."""

    def __init__(self, bridge_ip: str, username: str, session: requests.Session | None = None):
        """Initialise HueController.

        Args:
            bridge_ip: Hub IP address
            username: Username obtained by pairing with the hub
            session: Optional requests session (a new one is created if omitted)
        """
        self.bridge_ip = bridge_ip
        self.username = username
        self.base_url = f"https://{bridge_ip}/api/{username}"
        self.session = session or requests.Session()
        self.session.verify = False  # Accept self-signed certificate

    def _request(self, method: str, endpoint: str, data: dict | None = None):
        """Make a request to the hub and return the decoded JSON body.

        Raises:
            HueConnectionError: If the hub cannot be reached or returns garbage
            HueApiError: If the hub reports an error
        """
        url = f"{self.base_url}{endpoint}"
        logger.debug("%s %s %s", method, endpoint, data if data is not None else '')

        try:
            response = self.session.request(method, url, json=data, timeout=REQUEST_TIMEOUT, verify=False)
            response.raise_for_status()
            result = response.json()
        except requests.exceptions.RequestException as e:
            raise HueConnectionError(f"Error talking to hub at {self.bridge_ip}: {e}") from e
        except ValueError as e:
            raise HueConnectionError(f"Invalid response from hub at {self.bridge_ip}: {e}") from e

        raise_for_hub_errors(result)
        return result

    def get_lights(self) -> dict[str, Light]:
        """Get all lights with their current state, keyed by id."""
        result = self._request('GET', '/lights')
        return {light_id: Light.from_api(light_id, data) for light_id, data in result.items()}

    def get_scenes(self) -> dict[str, Scene]:
        """Get all scenes stored on the hub, keyed by id."""
        result = self._request('GET', '/scenes')
        return {scene_id: Scene.from_api(scene_id, data) for scene_id, data in result.items()}

    def get_groups(self) -> dict[str, Group]:
        """Get all groups (rooms, zones, light groups), keyed by id."""
        result = self._request('GET', '/groups')
        return {group_id: Group.from_api(group_id, data) for group_id, data in result.items()}

    def set_light_state(self, light_id: str, state: dict):
        """Set the state of a light.

        Args:
            light_id: Light id
            state: Partial state using hub keys (on, bri, hue, sat)
        """
        self._request('PUT', f'/lights/{light_id}/state', state)

    def set_light_name(self, light_id: str, name: str):
        """Rename a light."""
        self._request('PUT', f'/lights/{light_id}', {'name': name})

    def activate_scene(self, scene_id: str):
        """Recall a scene by its id (applied through the all-lights group)."""
        self._request('PUT', '/groups/0/action', {'scene': scene_id})
