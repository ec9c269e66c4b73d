"""
==============================================================================
Scan Endpoints
==============================================================================

Free-standing scan submission, last-scan polling and read-only lookup.

    POST /scan              Announce a known barcode, store it in the background
    GET  /scan/last         Take the pending barcode (read-once)
    GET  /scan/{barcode}    Resolve a barcode without side effects

/scan/last is declared before /scan/{barcode} so "last" is never taken
for a barcode.

==============================================================================
"""

from fastapi import APIRouter, Depends

from barcode_inventory.catalog import ProductResponse
from barcode_inventory.core import exceptions
from barcode_inventory.core.dependencies import get_last_scan_slot, get_scan_pipeline
from barcode_inventory.realtime import LastScanSlot
from barcode_inventory.schemas.scan import LastScanResponse, ScanResult, ScanSubmit
from barcode_inventory.services import ScanIngestionPipeline


router = APIRouter(prefix="/scan", tags=["Scan"])


@router.post("", response_model=ScanResult)
async def submit_scan(
    data: ScanSubmit,
    pipeline: ScanIngestionPipeline = Depends(get_scan_pipeline)
):
    """
    Submit a scanned barcode.

    Unknown barcodes return 404 and are not announced. The scanned item
    is written after the response is sent.
    """
    product = await pipeline.submit_scan(data.barcode)
    return ScanResult(
        message="Barcode received",
        product=ProductResponse.model_validate(product)
    )


@router.get("/last", response_model=LastScanResponse)
async def take_last_scan(slot: LastScanSlot = Depends(get_last_scan_slot)):
    """Return the most recent unread barcode and clear it."""
    barcode = slot.take_and_clear()
    if barcode is None:
        raise exceptions.no_pending_scan()
    return LastScanResponse(barcode=barcode)


@router.get("/{barcode}", response_model=ScanResult)
async def lookup_barcode(
    barcode: str,
    pipeline: ScanIngestionPipeline = Depends(get_scan_pipeline)
):
    """Look up a product by barcode."""
    product = pipeline.lookup(barcode)
    return ScanResult(
        message="Product found",
        product=ProductResponse.model_validate(product)
    )
