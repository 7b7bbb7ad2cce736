"""Error hierarchy shared by the bridge components.

Parser and handler code raise these instead of library exceptions so that
the handler boundary can turn each kind into the right reply:

- ValidationError: malformed user input, the message is shown to the user.
- NotFoundError: a referenced entity (order) does not exist.
- ExternalServiceError: Telegram, storage or database call failed.
- ConfigurationError: required settings are missing, fatal at startup.
"""


class BridgeError(Exception):
    """Base class for all bridge errors."""


class ValidationError(BridgeError):
    """User input could not be parsed into a command."""


class NotFoundError(BridgeError):
    """Referenced entity is absent in the backend store."""


class ExternalServiceError(BridgeError):
    """Call to an external collaborator failed.

    Attributes:
        service: Short name of the failing collaborator, used in logs.
    """

    def __init__(self, message: str, service: str = "external"):
        super().__init__(message)
        self.service = service


class ConfigurationError(BridgeError):
    """Required configuration value is missing or invalid."""
