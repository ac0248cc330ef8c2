import pytest
from fastapi.testclient import TestClient

from api import app
from storage.memory_storage import storage


@pytest.fixture(autouse=True)
def clean_storage():
    """Every test starts from an empty shared store"""
    storage.reset()
    yield
    storage.reset()


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def recipe_payload():
    return {
        "nameEn": "Bread",
        "nameAr": "خبز",
        "descriptionEn": "Simple home bread",
        "country": "Lebanon",
        "servingTemperature": "room_temp",
        "servings": 4,
        "ingredientsEn": [
            {"name": "Flour", "amount": "500 g"},
            {"name": "Water", "amount": "300 ml"},
            {"name": "Salt", "amount": "1 tsp"},
        ],
        "ingredientsAr": [
            {"name": "دقيق", "amount": "500 جرام"},
            {"name": "ماء", "amount": "300 مل"},
        ],
        "instructionsEn": "Mix, knead, rest and bake.",
        "instructionsAr": "اخلط واعجن واترك العجين ثم اخبز.",
        "toolsEn": ["Bowl", "Oven"],
        "toolsAr": ["وعاء", "فرن"],
        "category": "breakfast",
        "additionalRecipes": [
            {
                "nameEn": "Whole wheat bread",
                "ingredientsEn": [
                    {"name": "flour", "amount": "700 g"},
                    {"name": "Yeast", "amount": "1 tsp"},
                ],
                "toolsEn": ["bowl"],
                "servings": 2,
            }
        ],
    }
