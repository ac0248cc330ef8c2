from typing import List, Optional
from pydantic import BaseModel, Field
from .base import BaseEntity
from .tools_list import ToolsListItem

class ShoppingListItem(BaseEntity):
    """Shopping list entry, optionally shared with a family group"""
    item_name_en: str = Field("", description="English item name", alias="itemNameEn")
    item_name_ar: str = Field("", description="Arabic item name", alias="itemNameAr")
    quantity: str = Field("1", description="Quantity as display text")
    unit: str = Field("piece", description="Canonical unit")
    category: Optional[str] = Field(None, description="Grocery category")
    notes: Optional[str] = Field(None, description="Free-text notes, including recipe sources")
    is_completed: bool = Field(False, description="Whether item has been shopped", alias="isCompleted")
    family_group_id: Optional[str] = Field(None, alias="familyGroupId")
    created_by: Optional[str] = Field(None, alias="createdBy")
    
    model_config = {
        "use_enum_values": True,
        "populate_by_name": True,
        "json_schema_extra": {
            "example": {
                "id": "550e8400-e29b-41d4-a716-446655440002",
                "itemNameEn": "Flour",
                "itemNameAr": "",
                "quantity": "1.1",
                "unit": "kg",
                "category": "grains",
                "notes": "From recipe: Bread",
                "isCompleted": False
            }
        }
    }

    def display_name(self) -> str:
        return self.item_name_en or self.item_name_ar

class ShoppingListItemCreate(BaseModel):
    """Model for adding an item to the shopping list"""
    item_name_en: str = Field("", alias="itemNameEn")
    item_name_ar: str = Field("", alias="itemNameAr")
    quantity: str = "1"
    unit: str = "piece"
    category: Optional[str] = None
    notes: Optional[str] = None
    is_completed: bool = Field(False, alias="isCompleted")
    family_group_id: Optional[str] = Field(None, alias="familyGroupId")
    created_by: Optional[str] = Field(None, alias="createdBy")
    
    model_config = {
        "populate_by_name": True
    }

class ShoppingListItemUpdate(BaseModel):
    """Model for updating an existing shopping list item"""
    item_name_en: Optional[str] = Field(None, alias="itemNameEn")
    item_name_ar: Optional[str] = Field(None, alias="itemNameAr")
    quantity: Optional[str] = None
    unit: Optional[str] = None
    category: Optional[str] = None
    notes: Optional[str] = None
    is_completed: Optional[bool] = Field(None, alias="isCompleted")
    
    model_config = {
        "populate_by_name": True
    }

class RecipeListsResponse(BaseModel):
    """Entries created or merged when a recipe is added to the lists"""
    shopping_items: List[ShoppingListItem] = Field(default_factory=list, alias="shoppingItems")
    tools_items: List[ToolsListItem] = Field(default_factory=list, alias="toolsItems")
    multiplier: float = Field(1.0, description="Serving multiplier applied to every quantity")
    
    model_config = {
        "populate_by_name": True
    }
