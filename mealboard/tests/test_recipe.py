import unittest
from mealboard.domain.Ingredient import Ingredient
from mealboard.domain.Recipe import Recipe


class TestRecipe(unittest.TestCase):

    def setUp(self):
        self.recipe = Recipe(
            name="Pancakes",
            ingredients=[
                Ingredient("Flour", 200, "g"),
                Ingredient("Milk", 300, "ml"),
                Ingredient("Eggs", 2, "pcs"),
            ],
            calories=500,
            macros={"protein": 12, "carbohydrates": 70, "fat": 9},
            tags=["breakfast", "vegetarian"],
            servings=4,
            id="r-pancakes",
        )

    def test_macro_synonyms_are_normalized(self):
        self.assertEqual(self.recipe.macros, {"protein": 12, "carbs": 70, "fats": 9})

    def test_macros_absent_stay_none(self):
        self.assertIsNone(Recipe(name="Water").macros)
        self.assertEqual(Recipe(name="Water").get_protein(), 0)

    def test_from_dict_accepts_client_field_names(self):
        r = Recipe.from_dict({
            "name": "Toast",
            "prepTime": "5 min",
            "calories_per_serving": 180,
            "ingredients": [{"name": "Bread", "amount": 2, "unit": "slices"}],
            "unknown": "ignored",
        })
        self.assertEqual(r.prep_time, "5 min")
        self.assertEqual(r.calories, 180)
        self.assertEqual(r.ingredients[0].name, "Bread")

    def test_apply_update_merges_and_keeps_id(self):
        self.recipe.apply_update({"name": "Fluffy Pancakes", "id": "other", "calories": 450})
        self.assertEqual(self.recipe.id, "r-pancakes")
        self.assertEqual(self.recipe.name, "Fluffy Pancakes")
        self.assertEqual(self.recipe.calories, 450)
        self.assertEqual(len(self.recipe.ingredients), 3)

    def test_apply_update_replaces_ingredient_list(self):
        self.recipe.apply_update({"ingredients": [{"name": "Oats", "amount": 80, "unit": "g"}]})
        self.assertEqual([i.name for i in self.recipe.ingredients], ["Oats"])

    def test_to_dict_round_trip(self):
        again = Recipe.from_dict(self.recipe.to_dict())
        self.assertEqual(again.to_dict(), self.recipe.to_dict())
