from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, Field
from .base import BaseEntity

class ServingTemperature(str, Enum):
    """How a dish is served"""
    hot = "hot"
    cold = "cold"
    room_temp = "room_temp"

class RecipeCategory(str, Enum):
    """Recipe course categories"""
    breakfast = "breakfast"
    lunch = "lunch"
    dinner = "dinner"
    snack = "snack"
    dessert = "dessert"
    drink = "drink"

class RawIngredient(BaseModel):
    """Ingredient exactly as authored in the recipe form"""
    name: str = Field("", description="Ingredient display name")
    amount: str = Field("", description="Free-text quantity, e.g. '2 cups' or '500 جرام'")

class AdditionalLink(BaseModel):
    """External reference attached to a recipe"""
    title: str
    url: str

class RecipeVersion(BaseModel):
    """Alternative version of a recipe (e.g. a variation from another source)"""
    name_en: str = Field("", alias="nameEn")
    name_ar: str = Field("", alias="nameAr")
    ingredients_en: List[RawIngredient] = Field(default_factory=list, alias="ingredientsEn")
    ingredients_ar: List[RawIngredient] = Field(default_factory=list, alias="ingredientsAr")
    tools_en: List[str] = Field(default_factory=list, alias="toolsEn")
    tools_ar: List[str] = Field(default_factory=list, alias="toolsAr")
    servings: Optional[int] = Field(None, ge=1)
    video_url: Optional[str] = Field(None, alias="videoUrl")

    model_config = {
        "populate_by_name": True
    }

    def ingredients_for(self, language: str) -> List[RawIngredient]:
        return self.ingredients_ar if language == "ar" else self.ingredients_en

    def tools_for(self, language: str) -> List[str]:
        return self.tools_ar if language == "ar" else self.tools_en

class Recipe(BaseEntity, RecipeVersion):
    """Bilingual recipe with ingredients, tools and alternative versions"""
    name_en: str = Field(..., description="English name", alias="nameEn")
    name_ar: str = Field(..., description="Arabic name", alias="nameAr")
    description_en: Optional[str] = Field(None, alias="descriptionEn")
    description_ar: Optional[str] = Field(None, alias="descriptionAr")
    country: str = Field(..., description="Country of origin")
    serving_temperature: ServingTemperature = Field(..., alias="servingTemperature")
    calories: Optional[int] = Field(None, ge=0)
    prep_time: Optional[int] = Field(None, description="Preparation time in minutes", alias="prepTime")
    images: List[str] = Field(default_factory=list)
    instructions_en: str = Field(..., alias="instructionsEn")
    instructions_ar: str = Field(..., alias="instructionsAr")
    additional_links: List[AdditionalLink] = Field(default_factory=list, alias="additionalLinks")
    additional_recipes: List[RecipeVersion] = Field(default_factory=list, alias="additionalRecipes")
    rating: int = Field(0, ge=0, le=5, description="0-5 stars")
    category: RecipeCategory = Field(..., description="Course category")
    family_group_id: Optional[str] = Field(None, alias="familyGroupId")
    created_by: Optional[str] = Field(None, alias="createdBy")

    model_config = {
        "use_enum_values": True,
        "populate_by_name": True,
        "json_schema_extra": {
            "example": {
                "id": "550e8400-e29b-41d4-a716-446655440000",
                "nameEn": "Mujaddara",
                "nameAr": "مجدرة",
                "country": "Lebanon",
                "servingTemperature": "hot",
                "servings": 4,
                "ingredientsEn": [{"name": "Rice", "amount": "500 gram"}],
                "ingredientsAr": [{"name": "أرز", "amount": "500 جرام"}],
                "instructionsEn": "Cook the lentils, add rice, top with fried onions.",
                "instructionsAr": "اطبخ العدس، أضف الأرز، وزين بالبصل المقلي.",
                "toolsEn": ["Pot"],
                "toolsAr": ["قدر"],
                "rating": 5,
                "category": "dinner"
            }
        }
    }

    def versions(self) -> List[RecipeVersion]:
        """Main recipe (index 0) followed by its additional versions"""
        return [self, *self.additional_recipes]

class RecipeCreate(BaseModel):
    """Model for creating a new recipe (without ID)"""
    name_en: str = Field(..., alias="nameEn")
    name_ar: str = Field(..., alias="nameAr")
    description_en: Optional[str] = Field(None, alias="descriptionEn")
    description_ar: Optional[str] = Field(None, alias="descriptionAr")
    country: str
    serving_temperature: ServingTemperature = Field(..., alias="servingTemperature")
    calories: Optional[int] = Field(None, ge=0)
    prep_time: Optional[int] = Field(None, alias="prepTime")
    servings: Optional[int] = Field(None, ge=1)
    images: List[str] = Field(default_factory=list)
    video_url: Optional[str] = Field(None, alias="videoUrl")
    ingredients_en: List[RawIngredient] = Field(default_factory=list, alias="ingredientsEn")
    ingredients_ar: List[RawIngredient] = Field(default_factory=list, alias="ingredientsAr")
    instructions_en: str = Field(..., alias="instructionsEn")
    instructions_ar: str = Field(..., alias="instructionsAr")
    tools_en: List[str] = Field(default_factory=list, alias="toolsEn")
    tools_ar: List[str] = Field(default_factory=list, alias="toolsAr")
    additional_links: List[AdditionalLink] = Field(default_factory=list, alias="additionalLinks")
    additional_recipes: List[RecipeVersion] = Field(default_factory=list, alias="additionalRecipes")
    rating: int = Field(0, ge=0, le=5)
    category: RecipeCategory
    family_group_id: Optional[str] = Field(None, alias="familyGroupId")
    created_by: Optional[str] = Field(None, alias="createdBy")
    
    model_config = {
        "use_enum_values": True,
        "populate_by_name": True
    }

class RecipeUpdate(BaseModel):
    """Model for updating an existing recipe (all fields optional)"""
    name_en: Optional[str] = Field(None, alias="nameEn")
    name_ar: Optional[str] = Field(None, alias="nameAr")
    description_en: Optional[str] = Field(None, alias="descriptionEn")
    description_ar: Optional[str] = Field(None, alias="descriptionAr")
    country: Optional[str] = None
    serving_temperature: Optional[ServingTemperature] = Field(None, alias="servingTemperature")
    calories: Optional[int] = Field(None, ge=0)
    prep_time: Optional[int] = Field(None, alias="prepTime")
    servings: Optional[int] = Field(None, ge=1)
    images: Optional[List[str]] = None
    video_url: Optional[str] = Field(None, alias="videoUrl")
    ingredients_en: Optional[List[RawIngredient]] = Field(None, alias="ingredientsEn")
    ingredients_ar: Optional[List[RawIngredient]] = Field(None, alias="ingredientsAr")
    instructions_en: Optional[str] = Field(None, alias="instructionsEn")
    instructions_ar: Optional[str] = Field(None, alias="instructionsAr")
    tools_en: Optional[List[str]] = Field(None, alias="toolsEn")
    tools_ar: Optional[List[str]] = Field(None, alias="toolsAr")
    additional_links: Optional[List[AdditionalLink]] = Field(None, alias="additionalLinks")
    additional_recipes: Optional[List[RecipeVersion]] = Field(None, alias="additionalRecipes")
    rating: Optional[int] = Field(None, ge=0, le=5)
    category: Optional[RecipeCategory] = None
    family_group_id: Optional[str] = Field(None, alias="familyGroupId")
    
    model_config = {
        "use_enum_values": True,
        "populate_by_name": True
    }

class AddToShoppingListRequest(BaseModel):
    """Request for turning a recipe's ingredients and tools into list entries"""
    versions: List[int] = Field(default_factory=lambda: [0], description="0 is the main recipe, n is additionalRecipes[n-1]")
    language: str = Field("en", pattern="^(en|ar)$")
    people: int = Field(4, ge=1)
    days: int = Field(1, ge=1)
    family_group_id: Optional[str] = Field(None, alias="familyGroupId")
    created_by: Optional[str] = Field(None, alias="createdBy")

    model_config = {
        "populate_by_name": True
    }
