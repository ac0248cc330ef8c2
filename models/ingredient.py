from typing import Dict, List
from pydantic import BaseModel, Field
from .recipe import RawIngredient

class ProcessedIngredientOut(BaseModel):
    """Serialized form of a processed ingredient"""
    name: str
    amount: float
    unit: str
    category: str
    display: str = Field(..., description="Amount and unit rendered as text")

class ProcessIngredientsRequest(BaseModel):
    ingredients: List[RawIngredient] = Field(default_factory=list)

class CombineIngredientsRequest(BaseModel):
    """One raw ingredient list per recipe (or recipe version)"""
    lists: List[List[RawIngredient]] = Field(default_factory=list)
    grouped: bool = False

class GroupedIngredients(BaseModel):
    groups: Dict[str, List[ProcessedIngredientOut]]
