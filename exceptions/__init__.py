"""
Exceptions module exports
"""

from .app_exceptions import (
    RecipeAppError,
    UserNotFoundError,
    FamilyGroupNotFoundError,
    DuplicateEmailError,
    InvalidRecipeVersionError
)

__all__ = [
    'RecipeAppError',
    'UserNotFoundError',
    'FamilyGroupNotFoundError',
    'DuplicateEmailError',
    'InvalidRecipeVersionError'
]
