"""Exceptions raised when talking to the Hue hub or the cloud service.

Handlers let these propagate; the dispatcher turns them into an error item
(query mode) or a message on stderr (action mode).
"""


class HueError(Exception):
    """Base class for hub and cloud errors."""


class HueConnectionError(HueError):
    """The hub or cloud service could not be reached."""


class HueApiError(HueError):
    """The hub or cloud service rejected a request.

    Attributes:
        error_type: Hub error type (e.g. 101 for link button not pressed), if known
        address: Resource address reported by the hub, if any
    """

    def __init__(self, description: str, error_type: int | None = None,
                 address: str | None = None):
        super().__init__(description)
        self.error_type = error_type
        self.address = address


class LinkButtonNotPressed(HueApiError):
    """Pairing was attempted before the hub's link button was pressed."""
