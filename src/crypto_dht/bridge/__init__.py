"""Front-end bridge: typed requests dispatched to the ledger node."""

from .bridge import Bridge
from .requests import (
    GET_INFOS,
    REQUEST_NAMES,
    SEND,
    BridgeRequest,
    BridgeResponse,
    GetInfos,
    Send,
    decode_request,
)

__all__ = [
    "GET_INFOS",
    "REQUEST_NAMES",
    "SEND",
    "Bridge",
    "BridgeRequest",
    "BridgeResponse",
    "GetInfos",
    "Send",
    "decode_request",
]
