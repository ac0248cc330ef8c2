from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field
from .base import BaseEntity

class PantryItem(BaseEntity):
    """Pantry inventory entry with optional expiry and restock threshold"""
    item_name_en: str = Field("", alias="itemNameEn")
    item_name_ar: str = Field("", alias="itemNameAr")
    quantity: str = Field("1", description="Quantity on hand as display text")
    unit: str = Field("piece")
    category: Optional[str] = None
    notes: Optional[str] = None
    location: Optional[str] = Field(None, description="Where it is kept (pantry, fridge, freezer...)")
    expiry_date: Optional[datetime] = Field(None, alias="expiryDate")
    minimum_stock: Optional[str] = Field(None, description="Restock threshold", alias="minimumStock")
    family_group_id: Optional[str] = Field(None, alias="familyGroupId")
    created_by: Optional[str] = Field(None, alias="createdBy")
    
    model_config = {
        "use_enum_values": True,
        "populate_by_name": True,
        "json_schema_extra": {
            "example": {
                "id": "550e8400-e29b-41d4-a716-446655440004",
                "itemNameEn": "Rice",
                "itemNameAr": "أرز",
                "quantity": "2",
                "unit": "kg",
                "location": "pantry",
                "expiryDate": "2025-12-31T00:00:00",
                "minimumStock": "1"
            }
        }
    }

class PantryItemCreate(BaseModel):
    """Model for adding an item to the pantry"""
    item_name_en: str = Field("", alias="itemNameEn")
    item_name_ar: str = Field("", alias="itemNameAr")
    quantity: str = "1"
    unit: str = "piece"
    category: Optional[str] = None
    notes: Optional[str] = None
    location: Optional[str] = None
    expiry_date: Optional[datetime] = Field(None, alias="expiryDate")
    minimum_stock: Optional[str] = Field(None, alias="minimumStock")
    family_group_id: Optional[str] = Field(None, alias="familyGroupId")
    created_by: Optional[str] = Field(None, alias="createdBy")
    
    model_config = {
        "populate_by_name": True
    }

class PantryItemUpdate(BaseModel):
    """Model for updating an existing pantry item"""
    item_name_en: Optional[str] = Field(None, alias="itemNameEn")
    item_name_ar: Optional[str] = Field(None, alias="itemNameAr")
    quantity: Optional[str] = None
    unit: Optional[str] = None
    category: Optional[str] = None
    notes: Optional[str] = None
    location: Optional[str] = None
    expiry_date: Optional[datetime] = Field(None, alias="expiryDate")
    minimum_stock: Optional[str] = Field(None, alias="minimumStock")
    
    model_config = {
        "populate_by_name": True
    }
