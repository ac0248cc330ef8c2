"""
Recipe -> shopping list / tools list

Turns the selected versions of a recipe into shopping list entries (combined
across versions and scaled to the number of servings needed) and tool entries.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from config.settings import settings
from exceptions import InvalidRecipeVersionError
from models.recipe import Recipe, RecipeVersion
from models.shopping_list import ShoppingListItem
from models.tools_list import ToolsListItem
from storage.memory_storage import RECIPE_NOTE_PREFIX, MemStorage
from utils.ingredient_utils import (
    ProcessedIngredient,
    combine_ingredients,
    format_number,
    process_ingredients,
    scale_ingredients,
    serving_multiplier,
)

logger = logging.getLogger(__name__)


@dataclass
class ListsUpdate:
    """Entries touched by adding a recipe to the lists"""
    shopping_items: List[ShoppingListItem] = field(default_factory=list)
    tools_items: List[ToolsListItem] = field(default_factory=list)
    multiplier: float = 1.0


def select_versions(recipe: Recipe, indexes: List[int]) -> List[RecipeVersion]:
    """Resolve version indexes (0 = main recipe); unknown indexes are skipped"""
    versions = recipe.versions()
    selected = []
    for index in dict.fromkeys(indexes):
        if 0 <= index < len(versions):
            selected.append(versions[index])
    return selected


def recipe_ingredients(versions: List[RecipeVersion], language: str) -> List[ProcessedIngredient]:
    """Processed ingredients of the given versions, combined by name and unit"""
    return combine_ingredients(process_ingredients(v.ingredients_for(language)) for v in versions)


def add_recipe_to_lists(storage: MemStorage, recipe: Recipe, version_indexes: List[int],
                        language: str = "en", people: int = 4, days: int = 1,
                        family_group_id: Optional[str] = None,
                        created_by: Optional[str] = None) -> ListsUpdate:
    """
    Add a recipe's ingredients to the shopping list and its tools to the tools list.

    Args:
        storage: Store to write to
        recipe: Source recipe
        version_indexes: Versions to include (0 = main recipe, n = additionalRecipes[n-1])
        language: "en" or "ar"; picks which ingredient and tool lists are used
        people: Number of people to cook for
        days: Number of days to cook for
        family_group_id: Family group the new entries belong to
        created_by: User adding the recipe

    Returns:
        ListsUpdate with every created or merged entry

    Raises:
        InvalidRecipeVersionError: None of the requested versions exist
    """
    versions = select_versions(recipe, version_indexes)
    if not versions:
        raise InvalidRecipeVersionError(version_indexes)

    # Original servings are only known when a single version is selected
    original_servings = versions[0].servings if len(versions) == 1 else None
    multiplier = serving_multiplier(people, days, original_servings, settings.default_servings)

    ingredients = scale_ingredients(recipe_ingredients(versions, language), multiplier)
    recipe_name = recipe.name_ar if language == "ar" else recipe.name_en
    update = ListsUpdate(multiplier=multiplier)

    for ingredient in ingredients:
        item = ShoppingListItem(
            item_name_en=ingredient.name if language != "ar" else "",
            item_name_ar=ingredient.name if language == "ar" else "",
            quantity=format_number(ingredient.amount),
            unit=ingredient.unit,
            category=ingredient.category,
            notes=f"{RECIPE_NOTE_PREFIX} {recipe_name}",
            family_group_id=family_group_id,
            created_by=created_by,
        )
        saved = storage.add_shopping_item(item)
        # Two entries (e.g. "Flour" in gram and in cup) can merge into one row
        if all(existing.id != saved.id for existing in update.shopping_items):
            update.shopping_items.append(saved)

    # A tool shared by several selected versions counts once for this recipe
    tool_names = {}
    for version in versions:
        for tool_name in version.tools_for(language):
            if tool_name.strip():
                tool_names.setdefault(tool_name.strip().lower(), tool_name.strip())

    for tool_name in tool_names.values():
        names = {"tool_name_ar": tool_name} if language == "ar" else {"tool_name_en": tool_name}
        update.tools_items.append(
            storage.add_tool_from_recipe(family_group_id=family_group_id, created_by=created_by, **names)
        )

    logger.info(
        f"Added recipe {recipe.id} to lists: {len(update.shopping_items)} ingredients, "
        f"{len(update.tools_items)} tools (x{multiplier:.2f})"
    )
    return update
