"""
Dispatch of front-end requests to the ledger node.

The bridge holds no session state. Every request is answered from the node's
current state, and request-level faults come back as data.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

from crypto_dht import metrics
from crypto_dht.exceptions import BridgeError
from crypto_dht.ledger import LedgerNode
from crypto_dht.snapshot import BaseInfo, SnapshotAggregator

from .requests import REQUEST_NAMES, BridgeRequest, BridgeResponse, GetInfos, Send, decode_request

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Bridge:
    """
    Request/response interface between a front end and one ledger node.

    Takes no locks. The ledger node must tolerate reads and writes from
    several threads while its own background activity runs. Node calls
    run in worker threads so a slow ledger never stalls the event loop.
    """

    node: LedgerNode
    """Node the requests are answered from."""

    async def handle(self, request: BridgeRequest) -> BaseInfo | str:
        """
        Answer a typed request.

        Returns:
            The snapshot for GetInfos. For Send, '' on success or the
            ledger node's rejection message.
        """
        match request:
            case GetInfos():
                return await asyncio.to_thread(SnapshotAggregator(self.node).snapshot)

            case Send(instruction=instruction):
                return await self._send(instruction)

    async def dispatch(self, name: str, payload: bytes | str | None = None) -> BridgeResponse:
        """
        Decode and answer a raw front-end message.

        Never raises for request-level faults. Unknown names and undecodable
        payloads are answered with an error string.
        """
        metrics.bridge_requests.labels(request=name if name in REQUEST_NAMES else "unknown").inc()

        try:
            request = decode_request(name, payload)
        except BridgeError as e:
            metrics.bridge_errors.inc()
            logger.warning("Rejected front-end request: %s", e)
            return BridgeResponse(name=name, error=str(e))

        return BridgeResponse(name=name, payload=await self.handle(request))

    async def _send(self, instruction: str) -> str:
        """Submit a transaction. The node may block, so it runs in a worker thread."""
        try:
            await asyncio.to_thread(self.node.send_to, instruction)
        except Exception as e:
            logger.info("Send rejected: %s", e)
            return str(e)

        logger.info("Send submitted: %s", instruction)
        return ""
