import logging
import re
import secrets
import string
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional

from config.settings import settings
from exceptions import DuplicateEmailError, FamilyGroupNotFoundError, UserNotFoundError
from models.pantry import PantryItem
from models.recipe import Recipe
from models.shopping_list import ShoppingListItem
from models.tools_list import ToolsListItem
from models.user import FamilyGroup, User
from utils.ingredient_utils import format_number
from utils.quantity_utils import can_merge_units, merge_quantities, parse_quantity

logger = logging.getLogger(__name__)

RECIPE_NOTE_PREFIX = "From recipe:"
INVITE_CODE_LENGTH = 6

_LEADING_NUMBER = re.compile(r'^\s*(-?\d*\.?\d+)')


def _same_name(first: Optional[str], second: Optional[str]) -> bool:
    """Trimmed, case-insensitive name match; blank names never match"""
    first = (first or "").strip().lower()
    second = (second or "").strip().lower()
    return bool(first) and first == second


def _in_scope(item_group_id: Optional[str], family_group_id: Optional[str]) -> bool:
    """Items belong to a family group, or to nobody when no group is given"""
    if family_group_id:
        return item_group_id == family_group_id
    return item_group_id is None


def _leading_number(text: Optional[str]) -> Optional[float]:
    match = _LEADING_NUMBER.match(text or "")
    return float(match.group(1)) if match else None


class MemStorage:
    """In-memory storage for every resource; nothing survives a restart"""

    def __init__(self):
        self.reset()

    def reset(self) -> None:
        """Drop all stored data"""
        self.users: Dict[str, User] = {}
        self.family_groups: Dict[str, FamilyGroup] = {}
        self.recipes: Dict[str, Recipe] = {}
        self.shopping_items: Dict[str, ShoppingListItem] = {}
        self.pantry_items: Dict[str, PantryItem] = {}
        self.tools_items: Dict[str, ToolsListItem] = {}

    def _apply_update(self, entity, update_data: Dict[str, Any]):
        """Build a validated copy of an entity with the given fields replaced"""
        data = entity.model_dump()
        data.update(update_data)
        data["updated_at"] = datetime.now()
        return type(entity)(**data)

    # Users
    def get_user(self, user_id: str) -> Optional[User]:
        return self.users.get(user_id)

    def get_user_by_email(self, email: str) -> Optional[User]:
        """Find a user by email (case-insensitive)"""
        for user in self.users.values():
            if _same_name(user.email, email):
                return user
        return None

    def create_user(self, user: User) -> User:
        if self.get_user_by_email(user.email):
            raise DuplicateEmailError(user.email)
        self.users[str(user.id)] = user
        logger.debug(f"Created user {user.id}")
        return user

    def update_user(self, user_id: str, update_data: Dict[str, Any]) -> Optional[User]:
        existing = self.users.get(user_id)
        if not existing:
            return None
        updated = self._apply_update(existing, update_data)
        self.users[user_id] = updated
        return updated

    # Family Groups
    def get_family_group(self, family_group_id: str) -> Optional[FamilyGroup]:
        return self.family_groups.get(family_group_id)

    def get_family_group_by_invite_code(self, code: str) -> Optional[FamilyGroup]:
        code = code.strip().upper()
        return next((g for g in self.family_groups.values() if g.invite_code == code), None)

    def _generate_invite_code(self) -> str:
        alphabet = string.ascii_uppercase + string.digits
        while True:
            code = "".join(secrets.choice(alphabet) for _ in range(INVITE_CODE_LENGTH))
            if not self.get_family_group_by_invite_code(code):
                return code

    def create_family_group(self, name: str, created_by: Optional[str] = None) -> FamilyGroup:
        """Create a family group with a fresh invite code"""
        group = FamilyGroup(name=name, invite_code=self._generate_invite_code(), created_by=created_by)
        self.family_groups[str(group.id)] = group
        logger.debug(f"Created family group {group.id} with invite code {group.invite_code}")
        return group

    def join_family_group(self, user_id: str, family_group_id: str) -> User:
        """Move a user into a family group

        Raises:
            UserNotFoundError: No user with that ID
            FamilyGroupNotFoundError: No family group with that ID
        """
        if user_id not in self.users:
            raise UserNotFoundError(user_id)
        if family_group_id not in self.family_groups:
            raise FamilyGroupNotFoundError(family_group_id)
        return self.update_user(user_id, {"family_group_id": family_group_id})

    def get_users_by_family_group(self, family_group_id: str) -> List[User]:
        return [u for u in self.users.values() if u.family_group_id == family_group_id]

    # Recipes
    def load_recipes(self, family_group_id: Optional[str] = None) -> List[Recipe]:
        """All recipes, or only a family group's recipes when one is given"""
        recipes = list(self.recipes.values())
        if family_group_id:
            recipes = [r for r in recipes if r.family_group_id == family_group_id]
        return recipes

    def get_recipe_by_id(self, recipe_id: str) -> Optional[Recipe]:
        return self.recipes.get(recipe_id)

    def add_recipe(self, recipe: Recipe) -> Recipe:
        self.recipes[str(recipe.id)] = recipe
        logger.debug(f"Added recipe {recipe.id} ({recipe.name_en})")
        return recipe

    def update_recipe(self, recipe_id: str, update_data: Dict[str, Any]) -> Optional[Recipe]:
        """Apply a partial update; returns None when the recipe does not exist"""
        existing = self.recipes.get(recipe_id)
        if not existing:
            return None
        updated = self._apply_update(existing, update_data)
        self.recipes[recipe_id] = updated
        return updated

    def delete_recipe(self, recipe_id: str) -> bool:
        return self.recipes.pop(recipe_id, None) is not None

    def search_recipes(self, query: str, family_group_id: Optional[str] = None) -> List[Recipe]:
        """Case-insensitive substring search over names and descriptions in both languages"""
        needle = query.strip().lower()
        results = []
        for recipe in self.load_recipes(family_group_id):
            haystacks = [recipe.name_en, recipe.name_ar, recipe.description_en, recipe.description_ar]
            if any(needle in (text or "").lower() for text in haystacks):
                results.append(recipe)
        return results

    def filter_recipes(self, country: Optional[str] = None, serving_temperature: Optional[str] = None,
                       category: Optional[str] = None, rating: Optional[int] = None,
                       family_group_id: Optional[str] = None) -> List[Recipe]:
        """Filter recipes; every provided criterion must match"""
        recipes = self.load_recipes(family_group_id)
        if country:
            recipes = [r for r in recipes if r.country == country]
        if serving_temperature:
            recipes = [r for r in recipes if r.serving_temperature == serving_temperature]
        if category:
            recipes = [r for r in recipes if r.category == category]
        if rating is not None:
            recipes = [r for r in recipes if r.rating == rating]
        return recipes

    # Shopping List
    def load_shopping_items(self, family_group_id: Optional[str] = None) -> List[ShoppingListItem]:
        items = [i for i in self.shopping_items.values() if _in_scope(i.family_group_id, family_group_id)]
        logger.debug(f"Found {len(items)} shopping items for family group {family_group_id!r}")
        return items

    def get_shopping_item_by_id(self, item_id: str) -> Optional[ShoppingListItem]:
        return self.shopping_items.get(item_id)

    def _find_mergeable_shopping_item(self, item: ShoppingListItem) -> Optional[ShoppingListItem]:
        for existing in self.shopping_items.values():
            if existing.is_completed or existing.family_group_id != item.family_group_id:
                continue
            if _same_name(existing.item_name_en, item.item_name_en) or _same_name(existing.item_name_ar, item.item_name_ar):
                return existing
        return None

    def add_shopping_item(self, item: ShoppingListItem) -> ShoppingListItem:
        """Add an item, or merge it into a pending item with the same name

        Compatible units are summed into the existing entry; otherwise the
        existing quantity is kept and the new one is recorded in the notes.

        Returns:
            The created or the updated existing item
        """
        existing = self._find_mergeable_shopping_item(item)
        if existing is None:
            self.shopping_items[str(item.id)] = item
            logger.debug(f"Added shopping item {item.id} ({item.display_name()})")
            return item

        existing_amount, existing_unit = parse_quantity(existing.quantity, existing.unit)
        new_amount, new_unit = parse_quantity(item.quantity, item.unit)

        merged = None
        if can_merge_units(existing_unit, new_unit):
            merged = merge_quantities(existing_amount, existing_unit, new_amount, new_unit)

        notes = [n.strip() for n in (existing.notes or "").split(",") if n.strip()]
        if merged is not None:
            existing.quantity = format_number(merged[0])
            existing.unit = merged[1]
            if item.notes and item.notes.strip() not in notes:
                notes.append(item.notes.strip())
        else:
            notes.append(f"+ {item.quantity} {item.unit}".strip())

        existing.notes = ", ".join(notes) or None
        existing.touch()
        logger.debug(f"Merged shopping item into {existing.id} ({existing.display_name()}): {existing.quantity} {existing.unit}")
        return existing

    def update_shopping_item(self, item_id: str, update_data: Dict[str, Any]) -> Optional[ShoppingListItem]:
        existing = self.shopping_items.get(item_id)
        if not existing:
            return None
        updated = self._apply_update(existing, update_data)
        self.shopping_items[item_id] = updated
        return updated

    def delete_shopping_item(self, item_id: str) -> bool:
        return self.shopping_items.pop(item_id, None) is not None

    def toggle_shopping_item_completed(self, item_id: str) -> Optional[ShoppingListItem]:
        item = self.shopping_items.get(item_id)
        if not item:
            return None
        item.is_completed = not item.is_completed
        item.touch()
        return item

    def clear_completed_shopping_items(self, family_group_id: Optional[str] = None) -> int:
        """Remove completed items in scope

        Returns:
            Number of items removed
        """
        completed = [
            item_id for item_id, item in self.shopping_items.items()
            if item.is_completed and _in_scope(item.family_group_id, family_group_id)
        ]
        for item_id in completed:
            del self.shopping_items[item_id]
        return len(completed)

    def mark_shopping_item_bought(self, item_id: str) -> Optional[PantryItem]:
        """Move a shopping item into the pantry

        Merges into a pantry item with the same names, unit and family group when
        one exists; the shopping item is removed either way.

        Returns:
            The created or updated pantry item, or None if the shopping item is unknown
        """
        shopping_item = self.shopping_items.get(item_id)
        if not shopping_item:
            return None

        unit = shopping_item.unit or "piece"
        existing = next((
            p for p in self.pantry_items.values()
            if p.item_name_en == shopping_item.item_name_en
            and p.item_name_ar == shopping_item.item_name_ar
            and p.unit == unit
            and p.family_group_id == shopping_item.family_group_id
        ), None)

        note = shopping_item.notes or "Added from shopping list"
        if existing:
            existing_amount, _ = parse_quantity(existing.quantity)
            new_amount, _ = parse_quantity(shopping_item.quantity)
            existing.quantity = format_number(existing_amount + new_amount)
            existing.notes = f"{existing.notes}; {note}" if existing.notes else note
            existing.touch()
            pantry_item = existing
        else:
            pantry_item = PantryItem(
                item_name_en=shopping_item.item_name_en,
                item_name_ar=shopping_item.item_name_ar,
                quantity=shopping_item.quantity,
                unit=unit,
                category=shopping_item.category,
                notes=note,
                location="pantry",
                family_group_id=shopping_item.family_group_id,
                created_by=shopping_item.created_by,
            )
            self.pantry_items[str(pantry_item.id)] = pantry_item

        del self.shopping_items[item_id]
        logger.debug(f"Moved shopping item {item_id} to pantry item {pantry_item.id}")
        return pantry_item

    # Pantry
    def load_pantry_items(self, family_group_id: Optional[str] = None) -> List[PantryItem]:
        return [i for i in self.pantry_items.values() if _in_scope(i.family_group_id, family_group_id)]

    def get_pantry_item_by_id(self, item_id: str) -> Optional[PantryItem]:
        return self.pantry_items.get(item_id)

    def add_pantry_item(self, item: PantryItem) -> PantryItem:
        self.pantry_items[str(item.id)] = item
        return item

    def update_pantry_item(self, item_id: str, update_data: Dict[str, Any]) -> Optional[PantryItem]:
        existing = self.pantry_items.get(item_id)
        if not existing:
            return None
        updated = self._apply_update(existing, update_data)
        self.pantry_items[item_id] = updated
        return updated

    def delete_pantry_item(self, item_id: str) -> bool:
        return self.pantry_items.pop(item_id, None) is not None

    def get_low_stock_items(self, family_group_id: Optional[str] = None) -> List[PantryItem]:
        """Items whose numeric quantity is at or below their minimum stock"""
        low_stock = []
        for item in self.load_pantry_items(family_group_id):
            quantity = _leading_number(item.quantity)
            minimum = _leading_number(item.minimum_stock)
            if quantity is not None and minimum is not None and quantity <= minimum:
                low_stock.append(item)
        return low_stock

    def get_expiring_soon_items(self, family_group_id: Optional[str] = None,
                                days: Optional[int] = None) -> List[PantryItem]:
        """Items expiring within the window, including already expired ones"""
        window = timedelta(days=settings.expiring_soon_days if days is None else days)
        expiring = []
        for item in self.load_pantry_items(family_group_id):
            if item.expiry_date is None:
                continue
            # Match the stored value's awareness so naive and aware dates both compare
            now = datetime.now(item.expiry_date.tzinfo)
            if item.expiry_date <= now + window:
                expiring.append(item)
        return expiring

    # Tools List
    def load_tools_items(self, family_group_id: Optional[str] = None) -> List[ToolsListItem]:
        items = [i for i in self.tools_items.values() if _in_scope(i.family_group_id, family_group_id)]
        logger.debug(f"Found {len(items)} tools for family group {family_group_id!r}")
        return items

    def get_tools_item_by_id(self, item_id: str) -> Optional[ToolsListItem]:
        return self.tools_items.get(item_id)

    def add_tools_item(self, item: ToolsListItem) -> ToolsListItem:
        self.tools_items[str(item.id)] = item
        return item

    def add_tool_from_recipe(self, tool_name_en: str = "", tool_name_ar: str = "",
                             family_group_id: Optional[str] = None,
                             created_by: Optional[str] = None) -> ToolsListItem:
        """Record that a recipe needs a tool, bumping the count of a known tool"""
        for existing in self.load_tools_items(family_group_id):
            if _same_name(existing.tool_name_en, tool_name_en) or _same_name(existing.tool_name_ar, tool_name_ar):
                existing.recipe_count += 1
                existing.touch()
                return existing

        return self.add_tools_item(ToolsListItem(
            tool_name_en=tool_name_en.strip(),
            tool_name_ar=tool_name_ar.strip(),
            recipe_count=1,
            family_group_id=family_group_id,
            created_by=created_by,
        ))

    def update_tools_item(self, item_id: str, update_data: Dict[str, Any]) -> Optional[ToolsListItem]:
        existing = self.tools_items.get(item_id)
        if not existing:
            return None
        updated = self._apply_update(existing, update_data)
        self.tools_items[item_id] = updated
        return updated

    def delete_tools_item(self, item_id: str) -> bool:
        return self.tools_items.pop(item_id, None) is not None

    def toggle_tools_item_available(self, item_id: str) -> Optional[ToolsListItem]:
        item = self.tools_items.get(item_id)
        if not item:
            return None
        item.is_available = not item.is_available
        item.touch()
        return item

    def clear_available_tools_items(self, family_group_id: Optional[str] = None) -> int:
        """Remove tools already marked available

        Returns:
            Number of tools removed
        """
        available = [
            item_id for item_id, item in self.tools_items.items()
            if item.is_available and _in_scope(item.family_group_id, family_group_id)
        ]
        for item_id in available:
            del self.tools_items[item_id]
        return len(available)


# Shared instance used by every router
storage = MemStorage()
