"""
Utilities module exports
"""

from .ingredient_utils import (
    ProcessedIngredient,
    parse_amount,
    normalize_unit,
    get_ingredient_category,
    convert_unit,
    process_ingredients,
    combine_ingredients,
    group_ingredients_by_category,
    scale_ingredients,
    serving_multiplier,
    format_amount,
    format_number
)

__all__ = [
    'ProcessedIngredient',
    'parse_amount',
    'normalize_unit',
    'get_ingredient_category',
    'convert_unit',
    'process_ingredients',
    'combine_ingredients',
    'group_ingredients_by_category',
    'scale_ingredients',
    'serving_multiplier',
    'format_amount',
    'format_number'
]
