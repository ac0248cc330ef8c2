"""
Custom exception classes for the recipe service
"""


class RecipeAppError(Exception):
    """Base exception for the recipe service"""
    pass


class UserNotFoundError(RecipeAppError):
    """Raised when an operation references an unknown user"""
    def __init__(self, user_id: str):
        self.user_id = user_id
        super().__init__(f"User with ID {user_id} not found")


class FamilyGroupNotFoundError(RecipeAppError):
    """Raised when an operation references an unknown family group"""
    def __init__(self, family_group_id: str):
        self.family_group_id = family_group_id
        super().__init__(f"Family group with ID {family_group_id} not found")


class DuplicateEmailError(RecipeAppError):
    """Raised when registering an email that already has an account"""
    def __init__(self, email: str):
        self.email = email
        super().__init__(f"A user with email '{email}' already exists")


class InvalidRecipeVersionError(RecipeAppError):
    """Raised when none of the requested recipe versions exist"""
    def __init__(self, versions: list):
        self.versions = versions
        super().__init__(f"No recipe version matches {versions}")
