"""
==============================================================================
API v1 Endpoints
==============================================================================

Version 1 of the REST API.

Routers:
--------
- health: Health check endpoints
- products: Product catalog
- scans: Scan payload lookup

==============================================================================
"""

from . import health, products, scans

__all__ = ["health", "products", "scans"]
