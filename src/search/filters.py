"""Client-side recipe filtering by dietary restriction and meal type.

filter_recipes() is a pure function: it never mutates its inputs and keeps
the input order. Dietary restrictions combine with AND, meal types with OR.

Restriction tags map onto boolean flags of RecipeDetail. Tags without a
flag ("unbacked": Paleo, Pescetarian, anything unknown), and Ketogenic when
the payload did not report it, are resolved by an explicit policy:
- "permissive": always satisfied
- "diets": satisfied only if the recipe's diets list names the diet
"""

from typing import Iterable, List

from src.models.models import FilterCriteria, RecipeDetail


RESTRICTION_FLAGS = {
    "Vegetarian": "vegetarian",
    "Vegan": "vegan",
    "Gluten Free": "gluten_free",
    "Ketogenic": "ketogenic",
}

# Restriction label to the name it takes in a recipe's diets list
DIET_NAMES = {
    "Paleo": "paleolithic",
    "Pescetarian": "pescatarian",
    "Ketogenic": "ketogenic",
}

# Only the vocabulary's unbacked or unreported tags are checked under the "diets" policy
KNOWN_UNBACKED = frozenset(DIET_NAMES)


def satisfies_restriction(recipe: RecipeDetail, restriction: str, unbacked_policy: str = "permissive") -> bool:
    """Check one dietary restriction against a recipe."""
    flag = RESTRICTION_FLAGS.get(restriction)
    if flag is not None:
        value = getattr(recipe, flag)
        if value is not None:
            return bool(value)

    if unbacked_policy == "diets" and restriction in KNOWN_UNBACKED:
        diet = DIET_NAMES[restriction]
        return any(diet == name.lower() for name in recipe.diets)

    return True


def matches_meal_type(recipe: RecipeDetail, meal_types: Iterable[str]) -> bool:
    """True if no meal type is selected or any selected type is a
    case-insensitive substring of any of the recipe's dish types."""
    selected = [meal_type.lower() for meal_type in meal_types]
    if not selected:
        return True

    dish_types = [dish_type.lower() for dish_type in recipe.dish_types]
    return any(meal_type in dish_type for meal_type in selected for dish_type in dish_types)


def filter_recipes(
    recipes: Iterable[RecipeDetail],
    criteria: FilterCriteria,
    unbacked_policy: str = "permissive",
) -> List[RecipeDetail]:
    """Return the recipes matching every selected restriction and any selected meal type.

    Args:
        recipes: Enriched recipes in display order.
        criteria: Selected restrictions and meal types.
        unbacked_policy: How to treat restrictions without a boolean flag.

    Returns:
        New list, same relative order as the input.
    """
    return [
        recipe
        for recipe in recipes
        if all(
            satisfies_restriction(recipe, restriction, unbacked_policy)
            for restriction in criteria.dietary_restrictions
        )
        and matches_meal_type(recipe, criteria.meal_types)
    ]
