from fastapi import APIRouter, HTTPException, status

from exceptions import DuplicateEmailError
from models.user import User, UserCreate
from storage.memory_storage import storage

router = APIRouter()

@router.get("/email/{email}", response_model=User)
async def get_user_by_email(email: str):
    """Look a user up by email (used to sync devices)"""
    user = storage.get_user_by_email(email)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found"
        )
    return user

@router.get("/{user_id}", response_model=User)
async def get_user(user_id: str):
    """Get a specific user by ID"""
    user = storage.get_user(user_id)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found"
        )
    return user

@router.post("", response_model=User, status_code=status.HTTP_201_CREATED)
async def create_user(user_data: UserCreate):
    """Register a user"""
    try:
        return storage.create_user(User(**user_data.model_dump()))
    except DuplicateEmailError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e)
        )
