"""
==============================================================================
Folder Endpoints
==============================================================================

Folder CRUD plus the folder-scoped scan entry point.

Endpoints:
---------
    GET    /folders                 All folders, newest first
    GET    /folders/{id}            One folder
    POST   /folders                 Create
    PUT    /folders/{id}            Rename
    DELETE /folders/{id}            Delete (204 even when missing)
    GET    /folders/{id}/items      Scanned items, newest first
    POST   /folders/{id}/items      Scan a barcode into the folder

==============================================================================
"""

from typing import List
from fastapi import APIRouter, Depends, Response, status

from barcode_inventory.core.dependencies import get_folder_service, get_scan_pipeline
from barcode_inventory.schemas.folder import FolderCreate, FolderResponse, FolderUpdate
from barcode_inventory.schemas.scan import ScannedItemCreate, ScannedItemResponse
from barcode_inventory.services import FolderService, ScanIngestionPipeline


router = APIRouter(prefix="/folders", tags=["Folders"])


class FolderController:
    """Controller for folder operations."""

    def __init__(self, service: FolderService):
        self._service = service

    def list_folders(self) -> List[FolderResponse]:
        return [FolderResponse.model_validate(f) for f in self._service.list_folders()]

    def get_folder(self, folder_id: str) -> FolderResponse:
        return FolderResponse.model_validate(self._service.get(folder_id))

    def create_folder(self, data: FolderCreate) -> FolderResponse:
        return FolderResponse.model_validate(self._service.create(data))

    def rename_folder(self, folder_id: str, data: FolderUpdate) -> FolderResponse:
        return FolderResponse.model_validate(self._service.rename(folder_id, data))

    def delete_folder(self, folder_id: str) -> None:
        self._service.delete(folder_id)

    def list_items(self, folder_id: str) -> List[ScannedItemResponse]:
        return [ScannedItemResponse.model_validate(i) for i in self._service.list_items(folder_id)]


@router.get("", response_model=List[FolderResponse])
async def list_folders(service: FolderService = Depends(get_folder_service)):
    """List all folders, newest first."""
    controller = FolderController(service)
    return controller.list_folders()


@router.get("/{folder_id}", response_model=FolderResponse)
async def get_folder(
    folder_id: str,
    service: FolderService = Depends(get_folder_service)
):
    """Get a folder by id."""
    controller = FolderController(service)
    return controller.get_folder(folder_id)


@router.post("", response_model=FolderResponse, status_code=status.HTTP_201_CREATED)
async def create_folder(
    data: FolderCreate,
    service: FolderService = Depends(get_folder_service)
):
    """Create a folder. The name is required."""
    controller = FolderController(service)
    return controller.create_folder(data)


@router.put("/{folder_id}", response_model=FolderResponse)
async def rename_folder(
    folder_id: str,
    data: FolderUpdate,
    service: FolderService = Depends(get_folder_service)
):
    """Rename a folder."""
    controller = FolderController(service)
    return controller.rename_folder(folder_id, data)


@router.delete("/{folder_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_folder(
    folder_id: str,
    service: FolderService = Depends(get_folder_service)
):
    """
    Delete a folder.

    Succeeds whether or not the folder existed. What happens to its items
    depends on the configured folder_delete_policy.
    """
    controller = FolderController(service)
    controller.delete_folder(folder_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{folder_id}/items", response_model=List[ScannedItemResponse])
async def list_folder_items(
    folder_id: str,
    service: FolderService = Depends(get_folder_service)
):
    """List scanned items filed under a folder, newest first."""
    controller = FolderController(service)
    return controller.list_items(folder_id)


@router.post(
    "/{folder_id}/items",
    response_model=ScannedItemResponse,
    status_code=status.HTTP_201_CREATED
)
async def add_folder_item(
    folder_id: str,
    data: ScannedItemCreate,
    pipeline: ScanIngestionPipeline = Depends(get_scan_pipeline)
):
    """
    Scan a barcode into a folder.

    Unknown barcodes are stored as "Unknown Product". Every stored scan is
    pushed to live stream subscribers and the last-scan slot.
    """
    item = await pipeline.add_to_folder(folder_id, data.barcode, data.id)
    return ScannedItemResponse.model_validate(item)
