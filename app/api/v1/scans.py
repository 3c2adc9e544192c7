"""
==============================================================================
Scan Endpoints
==============================================================================

Resolve a single decoded scan payload. A miss is a normal result carrying
the "not found" message, not an error.

==============================================================================
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from app.catalog import ProductCatalog
from app.core.dependencies import get_catalog
from app.scanner import ScanResolver


router = APIRouter(prefix="/scans", tags=["Scans"])


class ScanRequest(BaseModel):
    """Decoded payload of one scan event."""

    payload: str = Field(..., description="Raw decoded QR/barcode value")


@router.post("")
async def resolve_scan(
    request: ScanRequest,
    catalog: ProductCatalog = Depends(get_catalog)
):
    """Look up a scanned code."""
    result = ScanResolver(catalog).resolve(request.payload)
    return {"success": True, **result.to_response()}
