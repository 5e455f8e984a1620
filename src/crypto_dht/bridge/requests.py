"""
Front-end requests and responses.

A front end sends a request name with an optional JSON payload. The name
selects one variant of a closed union, and each variant carries its own
typed payload. Decoding happens once, at the edge; dispatch only ever sees
typed requests.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Final

from crypto_dht.exceptions import MalformedRequest, UnsupportedRequest
from crypto_dht.snapshot import BaseInfo
from crypto_dht.types import StrictBaseModel

GET_INFOS: Final = "getInfos"
"""Request name for a state snapshot."""

SEND: Final = "send"
"""Request name for a transaction submission."""


@dataclass(frozen=True, slots=True)
class GetInfos:
    """Ask for a fresh state snapshot. Read-only."""


@dataclass(frozen=True, slots=True)
class Send:
    """
    Submit a transaction.

    Mutates ledger state when accepted.
    """

    instruction: str
    """Passed to the ledger node unmodified, usually 'amount:destAddress'."""


BridgeRequest = GetInfos | Send
"""Union of all request types for pattern matching dispatch."""

REQUEST_NAMES: Final = frozenset({GET_INFOS, SEND})
"""Every request name the bridge understands."""


def decode_request(name: str, payload: bytes | str | None = None) -> BridgeRequest:
    """
    Decode a raw front-end message into a typed request.

    Args:
        name: Request name.
        payload: Raw JSON payload, or None when the request carries none.

    Raises:
        UnsupportedRequest: If the name is unknown.
        MalformedRequest: If the payload does not decode to the variant's type.
    """
    if name == GET_INFOS:
        return GetInfos()

    if name == SEND:
        if payload is None or payload in (b"", ""):
            raise MalformedRequest(name, "missing payload")
        try:
            instruction = json.loads(payload)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise MalformedRequest(name, f"invalid JSON: {e}") from e
        if not isinstance(instruction, str):
            raise MalformedRequest(
                name, f"expected a JSON string, got {type(instruction).__name__}"
            )
        return Send(instruction=instruction)

    raise UnsupportedRequest(name)


class BridgeResponse(StrictBaseModel):
    """
    Answer to one front-end request.

    Exactly one of payload and error is meaningful. A rejected transaction
    is not an error: its message is the payload of the send response.
    """

    name: str
    """Request name this answers."""

    payload: BaseInfo | str | None = None
    """Snapshot for getInfos, '' or the rejection message for send."""

    error: str | None = None
    """Why the request could not be dispatched."""

    def to_json(self) -> dict[str, Any]:
        """Serialize with the camelCase names front ends expect."""
        return self.model_dump(mode="json", by_alias=True)
