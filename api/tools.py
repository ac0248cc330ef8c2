from fastapi import APIRouter, HTTPException, Query, status
from pydantic import ValidationError
from typing import List, Optional

from models.tools_list import ToolsListItem, ToolsListItemCreate, ToolsListItemUpdate
from services.sync_service import sync_manager
from storage.memory_storage import storage

router = APIRouter()

@router.get("", response_model=List[ToolsListItem])
async def get_tools(family_group_id: Optional[str] = Query(None, alias="familyGroupId")):
    """Get the tools list in scope"""
    try:
        return storage.load_tools_items(family_group_id)
    except Exception as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to load tools: {str(e)}"
        )

@router.post("", response_model=ToolsListItem, status_code=status.HTTP_201_CREATED)
async def create_tool(item_data: ToolsListItemCreate):
    """Add a tool to the list"""
    try:
        item = storage.add_tools_item(ToolsListItem(**item_data.model_dump()))
    except Exception as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to create tool: {str(e)}"
        )

    await sync_manager.broadcast_change("tools", "create", item)
    return item

@router.delete("/available")
async def clear_available_tools(family_group_id: Optional[str] = Query(None, alias="familyGroupId")):
    """Remove every tool already marked as available"""
    removed = storage.clear_available_tools_items(family_group_id)
    await sync_manager.broadcast_change("tools", "clear-available", {})
    return {"message": "Available tools cleared successfully", "removed": removed}

@router.put("/{item_id}", response_model=ToolsListItem)
async def update_tool(item_id: str, item_update: ToolsListItemUpdate):
    """Update an existing tool"""
    try:
        item = storage.update_tools_item(item_id, item_update.model_dump(exclude_unset=True))
    except ValidationError as e:
        raise HTTPException(
            status_code=422,
            detail=f"Invalid tool data: {str(e)}"
        )

    if not item:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Tool with ID {item_id} not found"
        )

    await sync_manager.broadcast_change("tools", "update", item)
    return item

@router.patch("/{item_id}/toggle", response_model=ToolsListItem)
async def toggle_tool_available(item_id: str):
    """Toggle whether the household already has a tool"""
    item = storage.toggle_tools_item_available(item_id)
    if not item:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Tool with ID {item_id} not found"
        )

    await sync_manager.broadcast_change("tools", "toggle", item)
    return item

@router.delete("/{item_id}")
async def delete_tool(item_id: str):
    """Remove a tool from the list"""
    if not storage.delete_tools_item(item_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Tool with ID {item_id} not found"
        )

    await sync_manager.broadcast_change("tools", "delete", {"id": item_id})
    return {"message": f"Tool {item_id} deleted successfully"}
