from typing import Optional
from pydantic import BaseModel, Field
from .base import BaseEntity

class User(BaseEntity):
    """Account identified by email; optionally a member of one family group"""
    email: str = Field(..., min_length=3, description="Unique email address")
    name: Optional[str] = None
    family_group_id: Optional[str] = Field(None, alias="familyGroupId")
    
    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {
            "example": {
                "id": "550e8400-e29b-41d4-a716-446655440006",
                "email": "layla@example.com",
                "name": "Layla",
                "familyGroupId": None
            }
        }
    }

class UserCreate(BaseModel):
    """Model for registering a user"""
    email: str = Field(..., min_length=3)
    name: Optional[str] = None
    family_group_id: Optional[str] = Field(None, alias="familyGroupId")
    
    model_config = {
        "populate_by_name": True
    }

class FamilyGroup(BaseEntity):
    """Set of users sharing recipes, shopping list, pantry and tools"""
    name: str
    invite_code: str = Field(..., alias="inviteCode")
    created_by: Optional[str] = Field(None, alias="createdBy")
    
    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {
            "example": {
                "id": "550e8400-e29b-41d4-a716-446655440007",
                "name": "Haddad Family",
                "inviteCode": "K3X9QZ",
                "createdBy": "550e8400-e29b-41d4-a716-446655440006"
            }
        }
    }

class FamilyGroupCreate(BaseModel):
    """Model for creating a family group (invite code is generated)"""
    name: str = Field(..., min_length=1)
    created_by: Optional[str] = Field(None, alias="createdBy")
    
    model_config = {
        "populate_by_name": True
    }

class JoinFamilyGroupRequest(BaseModel):
    user_id: str = Field(..., alias="userId")
    
    model_config = {
        "populate_by_name": True
    }
