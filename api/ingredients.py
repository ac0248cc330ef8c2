from fastapi import APIRouter, HTTPException, status
from typing import Dict, Iterable, List

from models.ingredient import (
    CombineIngredientsRequest,
    GroupedIngredients,
    ProcessedIngredientOut,
    ProcessIngredientsRequest,
)
from utils.ingredient_utils import (
    ProcessedIngredient,
    combine_ingredients,
    format_amount,
    group_ingredients_by_category,
    process_ingredients,
)

router = APIRouter()


def serialize_ingredients(ingredients: Iterable[ProcessedIngredient]) -> List[ProcessedIngredientOut]:
    return [
        ProcessedIngredientOut(
            name=i.name,
            amount=i.amount,
            unit=i.unit,
            category=i.category,
            display=format_amount(i.amount, i.unit),
        )
        for i in ingredients
    ]


def serialize_groups(groups: Dict[str, List[ProcessedIngredient]]) -> GroupedIngredients:
    return GroupedIngredients(groups={
        category: serialize_ingredients(items) for category, items in groups.items()
    })


@router.post("/process", response_model=List[ProcessedIngredientOut])
async def process(request: ProcessIngredientsRequest):
    """Parse, convert and categorize a list of raw ingredients"""
    try:
        return serialize_ingredients(process_ingredients(request.ingredients))
    except Exception as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to process ingredients: {str(e)}"
        )


@router.post("/combine")
async def combine(request: CombineIngredientsRequest):
    """Combine several raw ingredient lists, optionally grouped by category"""
    try:
        combined = combine_ingredients(process_ingredients(items) for items in request.lists)
        if request.grouped:
            return serialize_groups(group_ingredients_by_category(combined))
        return serialize_ingredients(combined)
    except Exception as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to combine ingredients: {str(e)}"
        )
