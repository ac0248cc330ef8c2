from fastapi import APIRouter, HTTPException, status
from typing import List

from exceptions import FamilyGroupNotFoundError, UserNotFoundError
from models.user import FamilyGroup, FamilyGroupCreate, JoinFamilyGroupRequest, User
from storage.memory_storage import storage

router = APIRouter()

@router.get("/invite/{code}", response_model=FamilyGroup)
async def get_family_group_by_invite_code(code: str):
    """Resolve an invite code to its family group"""
    group = storage.get_family_group_by_invite_code(code)
    if not group:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Invalid invite code"
        )
    return group

@router.get("/{family_group_id}", response_model=FamilyGroup)
async def get_family_group(family_group_id: str):
    """Get a specific family group by ID"""
    group = storage.get_family_group(family_group_id)
    if not group:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Family group not found"
        )
    return group

@router.get("/{family_group_id}/members", response_model=List[User])
async def get_family_members(family_group_id: str):
    """List the users in a family group"""
    return storage.get_users_by_family_group(family_group_id)

@router.post("", response_model=FamilyGroup, status_code=status.HTTP_201_CREATED)
async def create_family_group(group_data: FamilyGroupCreate):
    """Create a family group; the invite code is generated"""
    return storage.create_family_group(group_data.name, group_data.created_by)

@router.post("/{family_group_id}/join")
async def join_family_group(family_group_id: str, request: JoinFamilyGroupRequest):
    """Add a user to a family group"""
    try:
        storage.join_family_group(request.user_id, family_group_id)
    except (UserNotFoundError, FamilyGroupNotFoundError) as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )
    return {"message": "Successfully joined family group"}
