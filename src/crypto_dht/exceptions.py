"""Exception hierarchy for the node shell."""

from __future__ import annotations


class CryptoDhtError(Exception):
    """
    Base exception for all node shell errors.

    Attributes:
        message: Human-readable error description.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r})"


class LedgerLoadError(CryptoDhtError):
    """Raised when the ledger node factory cannot be resolved from its import path."""


class StartupError(CryptoDhtError):
    """
    Raised when a ledger node fails to start.

    Usually the node could not bind its listen address or open its storage folder.

    Attributes:
        listen: Listen address of the node that failed.
    """

    def __init__(self, listen: str, detail: str) -> None:
        self.listen = listen
        self.detail = detail
        super().__init__(f"Node on {listen} failed to start: {detail}")


class ShutdownError(CryptoDhtError):
    """Raised when a ledger node's stop operation fails."""


class NodeFailure(CryptoDhtError):
    """
    Raised when a running ledger node fails instead of finishing.

    Attributes:
        name: Supervisor label of the node that failed.
    """

    def __init__(self, name: str, detail: str) -> None:
        self.name = name
        self.detail = detail
        super().__init__(f"{name} failed while running: {detail}")


class BridgeError(CryptoDhtError):
    """
    Base class for request-level bridge faults.

    These are always returned to the front end as data, never raised past the bridge.
    """


class UnsupportedRequest(BridgeError):
    """
    Raised when a front end sends a request name the bridge does not know.

    Attributes:
        name: The unknown request name.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unsupported request: {name!r}")


class MalformedRequest(BridgeError):
    """
    Raised when a request payload cannot be decoded into its typed form.

    Attributes:
        name: The request name.
        detail: Description of what went wrong.
    """

    def __init__(self, name: str, detail: str) -> None:
        self.name = name
        self.detail = detail
        super().__init__(f"Malformed {name!r} request: {detail}")
