from fastapi import APIRouter, HTTPException, Query, status
from pydantic import ValidationError
from typing import List, Optional

from models.pantry import PantryItem, PantryItemCreate, PantryItemUpdate
from services.sync_service import sync_manager
from storage.memory_storage import storage

router = APIRouter()

@router.get("", response_model=List[PantryItem])
async def get_pantry_items(family_group_id: Optional[str] = Query(None, alias="familyGroupId")):
    """Get all pantry items in scope"""
    try:
        return storage.load_pantry_items(family_group_id)
    except Exception as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to load pantry items: {str(e)}"
        )

@router.get("/low-stock", response_model=List[PantryItem])
async def get_low_stock_items(family_group_id: Optional[str] = Query(None, alias="familyGroupId")):
    """Items at or below their minimum stock"""
    return storage.get_low_stock_items(family_group_id)

@router.get("/expiring-soon", response_model=List[PantryItem])
async def get_expiring_soon_items(
    family_group_id: Optional[str] = Query(None, alias="familyGroupId"),
    days: Optional[int] = Query(None, ge=0),
):
    """Items expiring within the configured window (or the given number of days)"""
    return storage.get_expiring_soon_items(family_group_id, days)

@router.post("", response_model=PantryItem, status_code=status.HTTP_201_CREATED)
async def create_pantry_item(item_data: PantryItemCreate):
    """Add an item to the pantry"""
    try:
        item = storage.add_pantry_item(PantryItem(**item_data.model_dump()))
    except Exception as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to create pantry item: {str(e)}"
        )

    await sync_manager.broadcast_change("pantry", "create", item)
    return item

@router.put("/{item_id}", response_model=PantryItem)
async def update_pantry_item(item_id: str, item_update: PantryItemUpdate):
    """Update an existing pantry item"""
    try:
        item = storage.update_pantry_item(item_id, item_update.model_dump(exclude_unset=True))
    except ValidationError as e:
        raise HTTPException(
            status_code=422,
            detail=f"Invalid pantry item data: {str(e)}"
        )

    if not item:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Pantry item with ID {item_id} not found"
        )

    await sync_manager.broadcast_change("pantry", "update", item)
    return item

@router.delete("/{item_id}")
async def delete_pantry_item(item_id: str):
    """Remove an item from the pantry"""
    if not storage.delete_pantry_item(item_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Pantry item with ID {item_id} not found"
        )

    await sync_manager.broadcast_change("pantry", "delete", {"id": item_id})
    return {"message": f"Pantry item {item_id} deleted successfully"}
