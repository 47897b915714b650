"""Unit tests for the ingredient set manager."""

import pytest

from src.pantry.ingredient_set import COMMON_INGREDIENTS, IngredientSet, normalize_ingredient_name


class TestNormalizeIngredientName:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            (" chicken BREAST ", "Chicken Breast"),
            ("rice", "Rice"),
            ("OLIVE oil", "Olive Oil"),
            ("sweet  potato", "Sweet Potato"),
            ("", ""),
            ("   ", ""),
        ],
    )
    def test_normalization(self, raw, expected):
        assert normalize_ingredient_name(raw) == expected

    def test_common_ingredients_are_normalized(self):
        assert all(normalize_ingredient_name(name) == name for name in COMMON_INGREDIENTS)


class TestIngredientSet:
    def test_starts_empty(self):
        assert IngredientSet().items == ()

    def test_add_stores_normalized_name(self):
        ingredients = IngredientSet()

        assert ingredients.add(" chicken BREAST ") is True
        assert ingredients.items == ("Chicken Breast",)

    def test_add_is_idempotent(self):
        ingredients = IngredientSet()
        ingredients.add("Rice")

        assert ingredients.add("rice") is False
        assert ingredients.add(" RICE ") is False
        assert ingredients.items == ("Rice",)
        assert len(ingredients) == 1

    def test_add_blank_is_ignored(self):
        ingredients = IngredientSet()
        assert ingredients.add("   ") is False
        assert len(ingredients) == 0

    def test_keeps_insertion_order(self):
        ingredients = IngredientSet()
        for name in ("eggs", "milk", "flour"):
            ingredients.add(name)

        assert list(ingredients) == ["Eggs", "Milk", "Flour"]

    def test_remove_exact_match(self):
        ingredients = IngredientSet()
        ingredients.add("Eggs")
        ingredients.add("Milk")

        assert ingredients.remove("Eggs") is True
        assert ingredients.items == ("Milk",)

    def test_remove_absent_is_noop(self):
        ingredients = IngredientSet()
        ingredients.add("Eggs")

        assert ingredients.remove("eggs") is False
        assert ingredients.remove("Bacon") is False
        assert ingredients.items == ("Eggs",)

    def test_clear(self):
        ingredients = IngredientSet()
        ingredients.add("Eggs")
        ingredients.add("Milk")

        assert ingredients.clear() is True
        assert ingredients.items == ()
        assert ingredients.clear() is False

    def test_contains(self):
        ingredients = IngredientSet()
        ingredients.add("garlic")
        assert "Garlic" in ingredients
        assert "garlic" not in ingredients

    def test_items_is_a_snapshot(self):
        ingredients = IngredientSet()
        ingredients.add("Eggs")
        snapshot = ingredients.items

        ingredients.add("Milk")

        assert snapshot == ("Eggs",)


class TestIngredientSetSubscription:
    def test_listener_receives_snapshot_on_change(self):
        ingredients = IngredientSet()
        seen = []
        ingredients.subscribe(seen.append)

        ingredients.add("Chicken")
        ingredients.add("Rice")
        ingredients.remove("Chicken")
        ingredients.clear()

        assert seen == [("Chicken",), ("Chicken", "Rice"), ("Rice",), ()]

    def test_noop_operations_do_not_notify(self):
        ingredients = IngredientSet()
        ingredients.add("Chicken")
        seen = []
        ingredients.subscribe(seen.append)

        ingredients.add("chicken")
        ingredients.remove("Beef")
        ingredients.add("")

        assert seen == []

    def test_unsubscribe(self):
        ingredients = IngredientSet()
        seen = []
        unsubscribe = ingredients.subscribe(seen.append)

        unsubscribe()
        ingredients.add("Chicken")
        unsubscribe()

        assert seen == []
