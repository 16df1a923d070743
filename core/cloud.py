"""Cloud scene service client.

Logs in for an API token and downloads scenes stored in the user's cloud
account. Scenes are returned as CloudScene models for the cache.
"""

import logging
import os

import requests

from core.controller import REQUEST_TIMEOUT
from core.errors import HueApiError, HueConnectionError
from models.types import CloudScene

logger = logging.getLogger(__name__)

DEFAULT_CLOUD_URL = 'https://www.meethue.com/api'


def get_cloud_url() -> str:
    return os.environ.get('HUE_CLOUD_URL', DEFAULT_CLOUD_URL).rstrip('/')


def _cloud_request(method: str, endpoint: str, session: requests.Session | None = None, **kwargs):
    http = session or requests
    url = f"{get_cloud_url()}{endpoint}"

    try:
        response = http.request(method, url, timeout=REQUEST_TIMEOUT, **kwargs)
    except requests.exceptions.RequestException as e:
        raise HueConnectionError(f"Error talking to cloud service: {e}") from e

    if response.status_code in (401, 403):
        raise HueApiError("Cloud service rejected the credentials")

    try:
        response.raise_for_status()
        return response.json()
    except requests.exceptions.HTTPError as e:
        raise HueApiError(f"Cloud service error: {e}") from e
    except ValueError as e:
        raise HueConnectionError(f"Invalid response from cloud service: {e}") from e


def get_cloud_token(username: str, password: str, session: requests.Session | None = None) -> str:
    """Exchange account credentials for an API token.

    Raises:
        HueApiError: If the credentials are rejected
        HueConnectionError: If the service cannot be reached
    """
    result = _cloud_request('POST', '/token', session,
                            json={'username': username, 'password': password})
    token = result.get('token') if isinstance(result, dict) else None
    if not token:
        raise HueApiError("Cloud service did not return a token")
    return token


def get_cloud_scenes(token: str, session: requests.Session | None = None) -> dict[str, CloudScene]:
    """Download the scenes stored in the cloud account, keyed by id."""
    result = _cloud_request('GET', '/scenes', session,
                            headers={'Authorization': f'Bearer {token}'})
    if not isinstance(result, list):
        raise HueApiError("Unexpected scene list from cloud service")

    try:
        scenes = [CloudScene.from_api(s) for s in result]
    except (AttributeError, KeyError, TypeError) as e:
        raise HueApiError(f"Invalid scene from cloud service: {e}") from e
    logger.debug("Downloaded %d cloud scenes", len(scenes))
    return {scene.id: scene for scene in scenes}
