import logging
from fastapi import APIRouter, HTTPException, Query, status
from pydantic import ValidationError
from typing import List, Optional

from api.ingredients import serialize_groups, serialize_ingredients
from exceptions import InvalidRecipeVersionError
from models.recipe import AddToShoppingListRequest, Recipe, RecipeCreate, RecipeUpdate
from models.shopping_list import RecipeListsResponse
from services.shopping_service import add_recipe_to_lists, recipe_ingredients, select_versions
from services.sync_service import sync_manager
from storage.memory_storage import storage
from utils.ingredient_utils import group_ingredients_by_category

logger = logging.getLogger(__name__)

router = APIRouter()

@router.get("", response_model=List[Recipe])
async def get_recipes(
    search: Optional[str] = None,
    country: Optional[str] = None,
    serving_temperature: Optional[str] = Query(None, alias="servingTemperature"),
    category: Optional[str] = None,
    rating: Optional[int] = Query(None, ge=0, le=5),
    family_group_id: Optional[str] = Query(None, alias="familyGroupId"),
):
    """List recipes, optionally searched and filtered"""
    try:
        if search:
            recipes = storage.search_recipes(search, family_group_id)
        else:
            recipes = storage.load_recipes(family_group_id)

        if country or serving_temperature or category or rating is not None:
            allowed = {
                str(r.id) for r in storage.filter_recipes(
                    country=country,
                    serving_temperature=serving_temperature,
                    category=category,
                    rating=rating,
                    family_group_id=family_group_id,
                )
            }
            recipes = [r for r in recipes if str(r.id) in allowed]

        return recipes
    except Exception as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to load recipes: {str(e)}"
        )

@router.get("/{recipe_id}", response_model=Recipe)
async def get_recipe(recipe_id: str):
    """Get a specific recipe by ID"""
    recipe = storage.get_recipe_by_id(recipe_id)
    if not recipe:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Recipe with ID {recipe_id} not found"
        )
    return recipe

@router.post("", response_model=Recipe, status_code=status.HTTP_201_CREATED)
async def create_recipe(recipe_data: RecipeCreate):
    """Create a new recipe"""
    try:
        # Convert RecipeCreate to Recipe (this will generate a new UUID)
        recipe = storage.add_recipe(Recipe(**recipe_data.model_dump()))
    except Exception as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to create recipe: {str(e)}"
        )

    await sync_manager.broadcast_change("recipes", "create", recipe)
    return recipe

async def _update_recipe(recipe_id: str, recipe_update: RecipeUpdate) -> Recipe:
    try:
        # Update only provided fields
        recipe = storage.update_recipe(recipe_id, recipe_update.model_dump(exclude_unset=True))
    except ValidationError as e:
        raise HTTPException(
            status_code=422,
            detail=f"Invalid recipe data: {str(e)}"
        )
    except Exception as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to update recipe: {str(e)}"
        )

    if not recipe:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Recipe with ID {recipe_id} not found"
        )

    await sync_manager.broadcast_change("recipes", "update", recipe)
    return recipe

@router.put("/{recipe_id}", response_model=Recipe)
async def update_recipe(recipe_id: str, recipe_update: RecipeUpdate):
    """Update an existing recipe"""
    return await _update_recipe(recipe_id, recipe_update)

@router.patch("/{recipe_id}", response_model=Recipe)
async def patch_recipe(recipe_id: str, recipe_update: RecipeUpdate):
    """Partially update a recipe (e.g. just the rating)"""
    return await _update_recipe(recipe_id, recipe_update)

@router.delete("/{recipe_id}")
async def delete_recipe(recipe_id: str):
    """Delete a recipe"""
    if not storage.delete_recipe(recipe_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Recipe with ID {recipe_id} not found"
        )

    await sync_manager.broadcast_change("recipes", "delete", {"id": recipe_id})
    return {"message": f"Recipe {recipe_id} deleted successfully"}

@router.get("/{recipe_id}/ingredients")
async def get_recipe_ingredients(
    recipe_id: str,
    language: str = Query("en", pattern="^(en|ar)$"),
    versions: List[int] = Query([0]),
    grouped: bool = False,
):
    """Processed ingredients of a recipe, combined across the selected versions"""
    recipe = storage.get_recipe_by_id(recipe_id)
    if not recipe:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Recipe with ID {recipe_id} not found"
        )

    ingredients = recipe_ingredients(select_versions(recipe, versions), language)
    if grouped:
        return serialize_groups(group_ingredients_by_category(ingredients))
    return serialize_ingredients(ingredients)

@router.post("/{recipe_id}/shopping-list", response_model=RecipeListsResponse, status_code=status.HTTP_201_CREATED)
async def add_recipe_to_shopping_list(recipe_id: str, request: AddToShoppingListRequest):
    """Add a recipe's ingredients to the shopping list and its tools to the tools list"""
    recipe = storage.get_recipe_by_id(recipe_id)
    if not recipe:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Recipe with ID {recipe_id} not found"
        )

    try:
        update = add_recipe_to_lists(
            storage,
            recipe,
            request.versions,
            language=request.language,
            people=request.people,
            days=request.days,
            family_group_id=request.family_group_id,
            created_by=request.created_by,
        )
    except InvalidRecipeVersionError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
    except Exception as e:
        logger.exception(f"Adding recipe {recipe_id} to lists failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to add recipe to shopping list: {str(e)}"
        )

    if update.shopping_items:
        await sync_manager.broadcast_change("shopping", "create", {"recipeId": recipe_id})
    if update.tools_items:
        await sync_manager.broadcast_change("tools", "create", {"recipeId": recipe_id})

    return RecipeListsResponse(
        shopping_items=update.shopping_items,
        tools_items=update.tools_items,
        multiplier=update.multiplier,
    )
