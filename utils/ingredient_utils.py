"""
Ingredient Utilities - Bilingual ingredient parsing, categorization and aggregation

Turns recipe ingredients authored as free text ({"name": "Flour", "amount": "500 g"})
into structured entries that can be combined across recipes and grouped for the
shopping list. Every function here is pure and fail-soft: malformed input falls
back to a best-effort guess instead of raising.

Supports:
- "2.5 cups"   -> amount=2.5, unit=cup
- "500جرام"    -> amount=500, unit=gram
- "1500 g"     -> amount=1.5, unit=kg (after conversion)
- "some"       -> amount=1,   unit=piece
"""

import math
import re
from dataclasses import dataclass, replace
from decimal import Decimal, ROUND_HALF_UP
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from models.recipe import RawIngredient


@dataclass
class ProcessedIngredient:
    """Normalized, categorized ingredient derived from a RawIngredient."""
    name: str
    amount: float
    unit: str
    category: str


CATEGORIES: Tuple[str, ...] = (
    "vegetables", "meat", "dairy", "grains", "spices", "oils", "other"
)

DEFAULT_UNIT = "piece"
DEFAULT_CATEGORY = "other"

# Smallest amount kept after scaling; two-decimal rounding would otherwise reach 0
MIN_AMOUNT = 0.01

# Floats this large carry no hundredths, and Decimal quantize would overflow its precision
_ROUNDING_LIMIT = 1e15

# Ordered: the partial-match scan returns the first hit, so entry order decides ties
INGREDIENT_CATEGORIES: Tuple[Tuple[str, str], ...] = (
    # Vegetables
    ("طماطم", "vegetables"),
    ("tomato", "vegetables"),
    ("بصل", "vegetables"),
    ("onion", "vegetables"),
    ("ثوم", "vegetables"),
    ("garlic", "vegetables"),
    ("جزر", "vegetables"),
    ("carrot", "vegetables"),
    ("بطاطس", "vegetables"),
    ("potato", "vegetables"),
    ("خيار", "vegetables"),
    ("cucumber", "vegetables"),
    ("فلفل", "vegetables"),
    ("pepper", "vegetables"),
    ("باذنجان", "vegetables"),
    ("eggplant", "vegetables"),

    # Meat
    ("لحم", "meat"),
    ("meat", "meat"),
    ("دجاج", "meat"),
    ("chicken", "meat"),
    ("سمك", "meat"),
    ("fish", "meat"),
    ("لحم بقر", "meat"),
    ("beef", "meat"),
    ("لحم خروف", "meat"),
    ("lamb", "meat"),

    # Dairy
    ("حليب", "dairy"),
    ("milk", "dairy"),
    ("جبن", "dairy"),
    ("cheese", "dairy"),
    ("زبدة", "dairy"),
    ("butter", "dairy"),
    ("كريمة", "dairy"),
    ("cream", "dairy"),
    ("زبادي", "dairy"),
    ("yogurt", "dairy"),
    ("بيض", "dairy"),
    ("egg", "dairy"),

    # Grains & starches
    ("دقيق", "grains"),
    ("flour", "grains"),
    ("أرز", "grains"),
    ("rice", "grains"),
    ("خبز", "grains"),
    ("bread", "grains"),
    ("شعيرية", "grains"),
    ("pasta", "grains"),
    ("برغل", "grains"),
    ("bulgur", "grains"),

    # Spices & herbs
    ("ملح", "spices"),
    ("salt", "spices"),
    ("فلفل أسود", "spices"),
    ("black pepper", "spices"),
    ("كمون", "spices"),
    ("cumin", "spices"),
    ("كزبرة", "spices"),
    ("coriander", "spices"),
    ("قرفة", "spices"),
    ("cinnamon", "spices"),
    ("هيل", "spices"),
    ("cardamom", "spices"),
    ("بقدونس", "spices"),
    ("parsley", "spices"),
    ("نعناع", "spices"),
    ("mint", "spices"),

    # Oils & liquids
    ("زيت", "oils"),
    ("oil", "oils"),
    ("ماء", "oils"),
    ("water", "oils"),
    ("خل", "oils"),
    ("vinegar", "oils"),
    ("عصير ليمون", "oils"),
    ("lemon juice", "oils"),

    # Other
    ("سكر", "other"),
    ("sugar", "other"),
    ("عسل", "other"),
    ("honey", "other"),
    ("ملعقة صغيرة", "other"),
    ("teaspoon", "other"),
    ("ملعقة كبيرة", "other"),
    ("tablespoon", "other"),
)

_CATEGORY_LOOKUP: Mapping[str, str] = MappingProxyType(dict(INGREDIENT_CATEGORIES))

UNIT_ALIASES: Mapping[str, str] = MappingProxyType({
    "g": "gram",
    "gram": "gram",
    "grams": "gram",
    "جرام": "gram",
    "جم": "gram",
    "kg": "kg",
    "كيلو": "kg",
    "كيلوجرام": "kg",
    "كيلوغرام": "kg",
    "ml": "ml",
    "مل": "ml",
    "milliliter": "ml",
    "liter": "liter",
    "لتر": "liter",
    "l": "liter",
    "cup": "cup",
    "cups": "cup",
    "كوب": "cup",
    "أكواب": "cup",
    "tbsp": "tablespoon",
    "tablespoon": "tablespoon",
    "ملعقة كبيرة": "tablespoon",
    "م ك": "tablespoon",
    "tsp": "teaspoon",
    "teaspoon": "teaspoon",
    "ملعقة صغيرة": "teaspoon",
    "م ص": "teaspoon",
    "piece": "piece",
    "pieces": "piece",
    "قطعة": "piece",
    "قطع": "piece",
    "حبة": "piece",
    "حبات": "piece",
})

# Upgrade rules per canonical unit, walked in order: (target unit, factor)
UNIT_CONVERSIONS: Mapping[str, Tuple[Tuple[str, float], ...]] = MappingProxyType({
    "gram": (("kg", 1000),),
    "ml": (("liter", 1000),),
})

_AMOUNT_PATTERN = re.compile(r'^(\d*\.?\d+)\s*(.*)$', re.DOTALL)


def round_amount(value: float) -> float:
    """Round to two decimal places, halves away from zero."""
    if not math.isfinite(value) or abs(value) >= _ROUNDING_LIMIT:
        return value
    return float(Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def normalize_unit(unit: str) -> str:
    """Map a unit token to its canonical name; unknown tokens pass through."""
    return UNIT_ALIASES.get(unit.lower(), unit)


def parse_amount(amount_text: str) -> Tuple[float, str]:
    """
    Split a free-text quantity into a magnitude and a canonical unit.

    Args:
        amount_text: Text such as "2 cups", "500 جرام" or "3"

    Returns:
        Tuple of (amount, unit). Text without a leading numeral yields (1, "piece");
        a numeral without a unit yields unit "piece".
    """
    trimmed = (amount_text or "").strip()
    match = _AMOUNT_PATTERN.match(trimmed)

    if not match:
        return 1.0, DEFAULT_UNIT

    # A zero or overflowing numeral counts as unparsed
    amount = float(match.group(1))
    if not amount or not math.isfinite(amount):
        amount = 1.0
    unit = match.group(2).strip() or DEFAULT_UNIT

    return amount, normalize_unit(unit)


def get_ingredient_category(ingredient_name: str) -> str:
    """
    Classify an ingredient name (English or Arabic) into a grocery category.

    Exact keyword match first, then the first keyword (in table order) that the
    name contains or that contains the name, then "other".
    """
    name = (ingredient_name or "").lower().strip()
    if not name:
        return DEFAULT_CATEGORY

    if name in _CATEGORY_LOOKUP:
        return _CATEGORY_LOOKUP[name]

    for keyword, category in INGREDIENT_CATEGORIES:
        if keyword in name or name in keyword:
            return category

    return DEFAULT_CATEGORY


def convert_unit(amount: float, from_unit: str, target_unit: Optional[str] = None) -> Tuple[float, str]:
    """
    Promote an amount to a larger unit once it crosses the rule's threshold.

    Only automatic upgrades are supported. An explicit target unit is accepted
    but no cross-unit conversion is performed for it: the amount comes back
    unchanged in the normalized source unit.
    """
    unit = normalize_unit(from_unit)

    if target_unit is None:
        for to_unit, factor in UNIT_CONVERSIONS.get(unit, ()):
            if amount >= factor:
                return round_amount(amount / factor), to_unit

    return amount, unit


def process_ingredients(ingredients: Iterable[RawIngredient]) -> List[ProcessedIngredient]:
    """Parse, convert and classify raw ingredients, dropping incomplete entries."""
    processed = []

    for ingredient in ingredients:
        name = (ingredient.name or "").strip()
        amount_text = (ingredient.amount or "").strip()
        if not name or not amount_text:
            continue

        amount, unit = parse_amount(amount_text)
        amount, unit = convert_unit(amount, unit)

        processed.append(ProcessedIngredient(
            name=name,
            amount=amount,
            unit=unit,
            category=get_ingredient_category(name),
        ))

    return processed


def _rescale(amount: float, from_unit: str, to_unit: str) -> float:
    """Express an amount in a promoted unit using the upgrade rule between them."""
    for rule_unit, factor in UNIT_CONVERSIONS.get(from_unit, ()):
        if rule_unit == to_unit:
            return amount / factor
    return amount


def combine_ingredients(ingredient_lists: Iterable[Iterable[ProcessedIngredient]]) -> List[ProcessedIngredient]:
    """
    Merge processed ingredients from several recipes by (lowercased name, unit).

    Totals are rounded and re-converted after every merge, so repeated small
    amounts are promoted (e.g. 400 g + 700 g -> 1.1 kg) and additions below the
    promoted unit's resolution can be lost.
    """
    combined: Dict[Tuple[str, str], ProcessedIngredient] = {}

    for ingredients in ingredient_lists:
        for ingredient in ingredients:
            key = (ingredient.name.lower(), ingredient.unit)
            existing = combined.get(key)

            if existing is None:
                combined[key] = replace(ingredient)
                continue

            incoming = _rescale(ingredient.amount, ingredient.unit, existing.unit)
            total = round_amount(existing.amount + incoming)
            existing.amount, existing.unit = convert_unit(total, existing.unit)

    return list(combined.values())


def group_ingredients_by_category(ingredients: Iterable[ProcessedIngredient]) -> Dict[str, List[ProcessedIngredient]]:
    """Bucket ingredients by category, each bucket sorted by name."""
    grouped: Dict[str, List[ProcessedIngredient]] = {}

    for ingredient in ingredients:
        grouped.setdefault(ingredient.category, []).append(ingredient)

    for items in grouped.values():
        items.sort(key=lambda item: (item.name.casefold(), item.name))

    return grouped


def scale_ingredients(ingredients: Iterable[ProcessedIngredient], multiplier: float) -> List[ProcessedIngredient]:
    """Multiply every amount (serving adjustment) and re-run unit promotion.

    Scaled amounts never drop below MIN_AMOUNT.
    """
    scaled = []
    for ingredient in ingredients:
        amount = max(round_amount(ingredient.amount * multiplier), MIN_AMOUNT)
        amount, unit = convert_unit(amount, ingredient.unit)
        scaled.append(replace(ingredient, amount=amount, unit=unit))
    return scaled


def serving_multiplier(people: int, days: int, original_servings: Optional[int], default_servings: int = 4) -> float:
    """Ratio of servings needed (people x days) to what the recipe yields."""
    servings = original_servings if original_servings and original_servings > 0 else default_servings
    return (people * days) / servings


def format_number(amount: float) -> str:
    """Render an amount with at most two decimals and no trailing zeros."""
    rounded = round_amount(amount)
    if rounded.is_integer():
        return str(int(rounded))
    return str(rounded)


def format_amount(amount: float, unit: str) -> str:
    return f"{format_number(amount)} {unit}"
