"""
==============================================================================
Scanner Package - Scan Event Handling
==============================================================================

Turns decoded scan payloads into catalog lookup results.

Classes:
--------
- ScanResolver: Single payload lookup
- ScanEventQueue: Bounded, ordered scan event channel

==============================================================================
"""

from .core import ScanEventQueue, ScanResolver

__all__ = ["ScanEventQueue", "ScanResolver"]
