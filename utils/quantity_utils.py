"""
Quantity Utilities - Merging stored shopping/pantry quantities

Shopping list entries keep their quantity as display text plus a unit. When the
same item is added again (for example from a second recipe) the two quantities
are merged here. Unlike the ingredient combiner, merging reconciles compatible
units: dry measures through grams, liquid measures through milliliters.
"""

import re
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from .ingredient_utils import convert_unit, normalize_unit, parse_amount, round_amount

# Rough kitchen equivalents; a cup of flour or sugar is taken as 120 g
DRY_UNITS_IN_GRAMS: Mapping[str, float] = MappingProxyType({
    "gram": 1,
    "kg": 1000,
    "cup": 120,
    "tablespoon": 15,
    "teaspoon": 5,
})

LIQUID_UNITS_IN_ML: Mapping[str, float] = MappingProxyType({
    "ml": 1,
    "liter": 1000,
    "cup": 240,
    "tablespoon": 15,
    "teaspoon": 5,
})

COUNT_UNITS = frozenset({"piece"})

_BARE_NUMBER = re.compile(r'^\d*\.?\d+$')


def parse_quantity(quantity: str, unit: Optional[str] = None) -> Tuple[float, str]:
    """
    Parse a stored quantity. A bare number takes its unit from the separate unit
    field; text that carries its own unit ("2 kg") is parsed as-is.
    """
    text = (quantity or "").strip()
    if unit and unit.strip() and _BARE_NUMBER.match(text):
        text = f"{text} {unit.strip()}"
    return parse_amount(text)


def can_merge_units(unit1: str, unit2: str) -> bool:
    first, second = normalize_unit(unit1), normalize_unit(unit2)
    if first == second:
        return True
    both_dry = first in DRY_UNITS_IN_GRAMS and second in DRY_UNITS_IN_GRAMS
    both_liquid = first in LIQUID_UNITS_IN_ML and second in LIQUID_UNITS_IN_ML
    both_count = first in COUNT_UNITS and second in COUNT_UNITS
    return both_dry or both_liquid or both_count


def _merge_through(table: Mapping[str, float], amount1: float, unit1: str,
                   amount2: float, unit2: str, base_unit: str) -> Optional[Tuple[float, str]]:
    if unit1 not in table or unit2 not in table:
        return None
    total = round_amount(amount1 * table[unit1] + amount2 * table[unit2])
    return convert_unit(total, base_unit)


def merge_quantities(amount1: float, unit1: str, amount2: float, unit2: str) -> Optional[Tuple[float, str]]:
    """
    Add two quantities, reconciling units where possible.

    Returns:
        (amount, unit) of the total, promoted to kg/liter at 1000 g/ml, or None
        when the units cannot be reconciled.
    """
    unit1, unit2 = normalize_unit(unit1), normalize_unit(unit2)

    if unit1 == unit2:
        return convert_unit(round_amount(amount1 + amount2), unit1)

    merged = _merge_through(DRY_UNITS_IN_GRAMS, amount1, unit1, amount2, unit2, "gram")
    if merged is None:
        merged = _merge_through(LIQUID_UNITS_IN_ML, amount1, unit1, amount2, unit2, "ml")
    return merged
