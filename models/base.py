from pydantic import BaseModel, Field
from uuid import UUID, uuid4
from datetime import datetime

class BaseEntity(BaseModel):
    """Base entity class with common fields"""
    id: UUID = Field(default_factory=uuid4)
    created_at: datetime = Field(default_factory=datetime.now, alias="createdAt")
    updated_at: datetime = Field(default_factory=datetime.now, alias="updatedAt")
    
    model_config = {
        "validate_assignment": True,
        "use_enum_values": True,
        "populate_by_name": True,
        "extra": "forbid",
        "json_schema_extra": {
            "example": {
                "id": "550e8400-e29b-41d4-a716-446655440000",
                "createdAt": "2025-08-10T12:00:00",
                "updatedAt": "2025-08-10T12:00:00"
            }
        }
    }

    def touch(self) -> None:
        """Refresh the updated timestamp after a modification"""
        self.updated_at = datetime.now()
