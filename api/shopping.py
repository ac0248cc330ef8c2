from fastapi import APIRouter, HTTPException, Query, status
from pydantic import ValidationError
from typing import List, Optional

from models.pantry import PantryItem
from models.shopping_list import ShoppingListItem, ShoppingListItemCreate, ShoppingListItemUpdate
from services.sync_service import sync_manager
from storage.memory_storage import storage

router = APIRouter()

@router.get("", response_model=List[ShoppingListItem])
async def get_shopping_list(family_group_id: Optional[str] = Query(None, alias="familyGroupId")):
    """Get the shopping list of a family group (or the personal list)"""
    try:
        return storage.load_shopping_items(family_group_id)
    except Exception as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to load shopping list: {str(e)}"
        )

@router.post("", response_model=ShoppingListItem, status_code=status.HTTP_201_CREATED)
async def add_shopping_item(item_data: ShoppingListItemCreate):
    """Add an item, merging it into a pending item with the same name"""
    try:
        item = storage.add_shopping_item(ShoppingListItem(**item_data.model_dump()))
    except Exception as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to create shopping item: {str(e)}"
        )

    await sync_manager.broadcast_change("shopping", "create", item)
    return item

@router.delete("/completed")
async def clear_completed_items(family_group_id: Optional[str] = Query(None, alias="familyGroupId")):
    """Remove every completed item from the list"""
    removed = storage.clear_completed_shopping_items(family_group_id)
    await sync_manager.broadcast_change("shopping", "clear-completed", {})
    return {"message": "Completed items cleared successfully", "removed": removed}

@router.put("/{item_id}", response_model=ShoppingListItem)
async def update_shopping_item(item_id: str, item_update: ShoppingListItemUpdate):
    """Update an existing shopping item"""
    try:
        item = storage.update_shopping_item(item_id, item_update.model_dump(exclude_unset=True))
    except ValidationError as e:
        raise HTTPException(
            status_code=422,
            detail=f"Invalid shopping item data: {str(e)}"
        )

    if not item:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Shopping item with ID {item_id} not found"
        )

    await sync_manager.broadcast_change("shopping", "update", item)
    return item

@router.delete("/{item_id}")
async def delete_shopping_item(item_id: str):
    """Remove an item from the shopping list"""
    if not storage.delete_shopping_item(item_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Shopping item with ID {item_id} not found"
        )

    await sync_manager.broadcast_change("shopping", "delete", {"id": item_id})
    return {"message": f"Shopping item {item_id} deleted successfully"}

@router.patch("/{item_id}/toggle", response_model=ShoppingListItem)
async def toggle_item_completed(item_id: str):
    """Toggle the completed status of a shopping item"""
    item = storage.toggle_shopping_item_completed(item_id)
    if not item:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Shopping item with ID {item_id} not found"
        )

    await sync_manager.broadcast_change("shopping", "toggle", item)
    return item

@router.post("/{item_id}/bought", response_model=PantryItem)
async def mark_item_bought(item_id: str):
    """Move a shopping item into the pantry"""
    pantry_item = storage.mark_shopping_item_bought(item_id)
    if not pantry_item:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Shopping item with ID {item_id} not found"
        )

    await sync_manager.broadcast_change("shopping", "delete", {"id": item_id})
    await sync_manager.broadcast_change("pantry", "update", pantry_item)
    return pantry_item
