"""
Exception hierarchy for the setup package.
"""


class SetupError(Exception):
    """Base class for all setup errors."""


class ProviderError(SetupError):
    """Raised when a provider is used in a way its lifecycle does not allow."""


class UninitializedProviderError(ProviderError):
    """Raised when a provider is validated or read before collect() ran."""

    def __init__(self, provider_name: str):
        super().__init__(
            f"{provider_name} config is uninitialized, call collect() first"
        )
        self.provider_name = provider_name


class InvalidProviderStateError(ProviderError):
    """Raised when a lifecycle transition is attempted from the wrong state."""

    def __init__(self, provider_name: str, action: str, state: str):
        super().__init__(f"Cannot {action} {provider_name} while it is {state}")
        self.provider_name = provider_name
        self.action = action
        self.state = state


class TigerCLIError(SetupError):
    """Raised when the tiger CLI fails or returns output we cannot parse."""


class ServiceNotReadyError(TigerCLIError):
    """Raised when a database service does not become ready in time."""

    def __init__(self, service_id: str, timeout: float):
        super().__init__(
            f"Service {service_id} was not ready after {int(timeout)} seconds"
        )
        self.service_id = service_id
        self.timeout = timeout


class DownloadError(SetupError):
    """Raised when a remote document cannot be fetched or decoded."""


class ClipboardError(SetupError):
    """Raised when no clipboard tool is available."""
