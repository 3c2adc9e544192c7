"""
==============================================================================
WebSocket Package
==============================================================================

Real-time WebSocket handlers for scan lookups.

Handlers:
---------
- scanner: Ordered catalog lookups for a stream of scan events

==============================================================================
"""

from .scanner import router as scanner_router

__all__ = ["scanner_router"]
