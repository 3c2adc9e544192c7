"""
==============================================================================
Scanner WebSocket Module
==============================================================================

Real-time scan lookups via WebSocket connection.

Protocol:
---------
1. Client connects to /ws/scan
2. Server sends a ready message with the catalog size
3. Client sends {"type": "scan", "payload": "<decoded value>"} per scan
4. Server replies {"type": "result", ...} per scan, in arrival order
5. Client sends {"type": "stop"} (or disconnects) to end the session

==============================================================================
"""

import json
import logging
from typing import Any

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect

from app.catalog import CatalogService, ScanResult
from app.config import get_settings
from app.core.dependencies import get_catalog_service_ws
from app.scanner import ScanEventQueue, ScanResolver


# Module logger
logger = logging.getLogger(__name__)

router = APIRouter()

# Returned by receive_message for frames that are not valid JSON
INVALID_FRAME = object()


class ScannerWebSocketHandler:
    """
    Handler for scan lookup WebSocket connections.

    Manages the lifecycle of a scanning session including:
    - Catalog readiness check
    - Scan event queueing
    - Result reporting
    """

    def __init__(self, websocket: WebSocket, service: CatalogService, queue_size: int):
        self._websocket = websocket
        self._service = service
        self._queue_size = queue_size
        self._queue = None

    async def send_error(self, message: str, code: str = "ERROR") -> None:
        """Send error message to client."""
        await self._websocket.send_json({
            "type": "error",
            "code": code,
            "message": message
        })

    async def send_result(self, result: ScanResult) -> None:
        """Send one lookup result to the client."""
        await self._websocket.send_json({"type": "result", **result.to_response()})

    async def receive_message(self) -> Any:
        """
        Receive one client message.

        Returns:
            Decoded JSON value, or INVALID_FRAME if the frame was not
            valid JSON (the client has already been told)
        """
        text = await self._websocket.receive_text()
        try:
            return json.loads(text)
        except json.JSONDecodeError:
            await self.send_error("Message must be valid JSON", "INVALID_MESSAGE")
            return INVALID_FRAME

    async def handle_message(self, data: Any) -> bool:
        """
        Handle one client message.

        Returns:
            False when the session should end
        """
        if not isinstance(data, dict):
            await self.send_error("Message must be a JSON object", "INVALID_MESSAGE")
            return True

        message_type = data.get("type")

        if message_type == "scan":
            payload = data.get("payload")
            if not isinstance(payload, str):
                await self.send_error("Scan payload must be a string", "INVALID_PAYLOAD")
                return True
            await self._queue.submit(payload)
            return True

        if message_type == "stop":
            logger.info("🛑 Client requested stop")
            return False

        await self.send_error(f"Unknown message type: {message_type}", "UNKNOWN_TYPE")
        return True

    async def run(self) -> None:
        """Main handler loop."""
        await self._websocket.accept()
        logger.info("📱 Scanner WebSocket connected")

        if not self._service.is_ready:
            await self.send_error("Product catalog not loaded", "CATALOG_NOT_LOADED")
            await self._websocket.close()
            return

        catalog = self._service.catalog
        self._queue = ScanEventQueue(
            ScanResolver(catalog),
            on_result=self.send_result,
            maxsize=self._queue_size
        )
        self._queue.start()

        try:
            await self._websocket.send_json({"type": "ready", "products": len(catalog)})

            while True:
                data = await self.receive_message()
                if data is INVALID_FRAME:
                    continue
                if not await self.handle_message(data):
                    await self._queue.join()
                    break

            await self._websocket.close()

        except WebSocketDisconnect:
            logger.info("📱 Client disconnected")
        except Exception as e:
            logger.error(f"WebSocket error: {e}")
            try:
                await self.send_error(str(e))
            except Exception as send_exc:
                logger.debug(f"Could not report error to client: {send_exc}")
        finally:
            await self._queue.stop()
            logger.info(f"✅ Scanner WebSocket closed ({self._queue.processed} scans)")


@router.websocket("/ws/scan")
async def websocket_scan(
    websocket: WebSocket,
    service: CatalogService = Depends(get_catalog_service_ws)
):
    """Real-time scan lookups via WebSocket."""
    settings = getattr(websocket.app.state, "settings", None) or get_settings()
    handler = ScannerWebSocketHandler(websocket, service, settings.scan_queue_size)
    await handler.run()
