"""
==============================================================================
Scan Event Tests
==============================================================================

Tests for payload resolution and the ordered scan event queue.

==============================================================================
"""

import asyncio
from typing import List

import pytest

from app.catalog import NOT_FOUND_MESSAGE, ProductCatalog, ScanResult
from app.scanner import ScanEventQueue, ScanResolver


class TestScanResolver:
    """Tests for ScanResolver."""

    def test_found(self, catalog: ProductCatalog):
        """Test a known code resolves to its product."""
        result = ScanResolver(catalog).resolve("A1")
        assert result.found is True
        assert result.product.name == "Widget"
        assert result.message is None
        assert result.scanned_code == "A1"

    def test_not_found(self, catalog: ProductCatalog):
        """Test an unknown code carries the not-found message."""
        result = ScanResolver(catalog).resolve("https://example.com/x")
        assert result.found is False
        assert result.product is None
        assert result.message == NOT_FOUND_MESSAGE

    def test_response_shape(self, catalog: ProductCatalog):
        """Test the serialized result."""
        response = ScanResolver(catalog).resolve("B7").to_response()
        assert response == {
            "scanned_code": "B7",
            "found": True,
            "product": {"id": "B7", "name": "Gadget", "price": 19.5, "weight": 1.25},
            "message": None,
        }


class TestScanEventQueue:
    """Tests for ScanEventQueue."""

    def test_results_in_arrival_order(self, catalog: ProductCatalog):
        """Test results are delivered in submission order."""
        payloads = ["A1", "zzz", "B7", "A1", "4601234567890", ""]
        received: List[ScanResult] = []

        async def on_result(result: ScanResult) -> None:
            received.append(result)

        async def scenario() -> int:
            queue = ScanEventQueue(ScanResolver(catalog), on_result, maxsize=2)
            queue.start()
            for payload in payloads:
                await queue.submit(payload)
            await queue.join()
            await queue.stop()
            return queue.processed

        assert asyncio.run(scenario()) == len(payloads)
        assert [r.scanned_code for r in received] == payloads
        assert [r.found for r in received] == [True, False, True, True, True, False]

    def test_submit_waits_when_full(self, catalog: ProductCatalog):
        """Test a full queue applies back-pressure."""
        async def on_result(result: ScanResult) -> None:
            pass

        async def scenario() -> None:
            queue = ScanEventQueue(ScanResolver(catalog), on_result, maxsize=1)
            await queue.submit("A1")
            assert queue.pending == 1
            with pytest.raises(asyncio.TimeoutError):
                await asyncio.wait_for(queue.submit("B7"), timeout=0.05)

        asyncio.run(scenario())

    def test_callback_failure_does_not_stop_consumer(self, catalog: ProductCatalog):
        """Test a failing callback is logged and later events still flow."""
        received: List[str] = []

        async def on_result(result: ScanResult) -> None:
            if result.scanned_code == "boom":
                raise RuntimeError("display failed")
            received.append(result.scanned_code)

        async def scenario() -> bool:
            queue = ScanEventQueue(ScanResolver(catalog), on_result)
            queue.start()
            for payload in ("A1", "boom", "B7"):
                await queue.submit(payload)
            await queue.join()
            running = queue.is_running
            await queue.stop()
            return running

        assert asyncio.run(scenario()) is True
        assert received == ["A1", "B7"]

    def test_stop_without_start(self, catalog: ProductCatalog):
        """Test stopping an idle queue is harmless."""
        async def on_result(result: ScanResult) -> None:
            pass

        async def scenario() -> bool:
            queue = ScanEventQueue(ScanResolver(catalog), on_result)
            await queue.stop()
            return queue.is_running

        assert asyncio.run(scenario()) is False
