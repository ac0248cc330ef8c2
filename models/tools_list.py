from typing import Optional
from pydantic import BaseModel, Field
from .base import BaseEntity

class ToolsListItem(BaseEntity):
    """Kitchen tool needed by one or more recipes"""
    tool_name_en: str = Field("", alias="toolNameEn")
    tool_name_ar: str = Field("", alias="toolNameAr")
    category: Optional[str] = None
    notes: Optional[str] = None
    is_available: bool = Field(False, description="Whether the household already has it", alias="isAvailable")
    recipe_count: int = Field(0, ge=0, description="Number of recipes that added this tool", alias="recipeCount")
    family_group_id: Optional[str] = Field(None, alias="familyGroupId")
    created_by: Optional[str] = Field(None, alias="createdBy")
    
    model_config = {
        "use_enum_values": True,
        "populate_by_name": True,
        "json_schema_extra": {
            "example": {
                "id": "550e8400-e29b-41d4-a716-446655440005",
                "toolNameEn": "Pot",
                "toolNameAr": "قدر",
                "isAvailable": False,
                "recipeCount": 2
            }
        }
    }

class ToolsListItemCreate(BaseModel):
    """Model for adding a tool to the list"""
    tool_name_en: str = Field("", alias="toolNameEn")
    tool_name_ar: str = Field("", alias="toolNameAr")
    category: Optional[str] = None
    notes: Optional[str] = None
    is_available: bool = Field(False, alias="isAvailable")
    recipe_count: int = Field(0, ge=0, alias="recipeCount")
    family_group_id: Optional[str] = Field(None, alias="familyGroupId")
    created_by: Optional[str] = Field(None, alias="createdBy")
    
    model_config = {
        "populate_by_name": True
    }

class ToolsListItemUpdate(BaseModel):
    """Model for updating an existing tool"""
    tool_name_en: Optional[str] = Field(None, alias="toolNameEn")
    tool_name_ar: Optional[str] = Field(None, alias="toolNameAr")
    category: Optional[str] = None
    notes: Optional[str] = None
    is_available: Optional[bool] = Field(None, alias="isAvailable")
    recipe_count: Optional[int] = Field(None, ge=0, alias="recipeCount")
    
    model_config = {
        "populate_by_name": True
    }
