"""The user's ingredient selection for one browsing session.

IngredientSet is the single writer of the selection: it is the only object
that mutates it, and everything else reads tuple snapshots or subscribes to
changes. There is no persistence; a set lives as long as its session.
"""

from typing import Callable, List, Tuple

from src.utils.logger import logger


IngredientListener = Callable[[Tuple[str, ...]], None]

# Quick-pick vocabulary offered before the user types anything
COMMON_INGREDIENTS = (
    "Chicken",
    "Beef",
    "Pork",
    "Fish",
    "Eggs",
    "Milk",
    "Cheese",
    "Tomatoes",
    "Onions",
    "Garlic",
    "Peppers",
    "Rice",
    "Pasta",
    "Bread",
    "Potatoes",
    "Carrots",
    "Broccoli",
    "Spinach",
    "Olive Oil",
    "Salt",
    "Pepper",
    "Flour",
    "Sugar",
    "Butter",
    "Cream",
)


def normalize_ingredient_name(name: str) -> str:
    """Normalize an ingredient name to its stored form.

    Trims, splits on whitespace, uppercases the first character of each word
    and lowercases the rest, then joins with single spaces.

    Example:
        >>> normalize_ingredient_name(" chicken BREAST ")
        'Chicken Breast'
    """
    return " ".join(word[:1].upper() + word[1:].lower() for word in name.split())


class IngredientSet:
    """Ordered, duplicate-free list of normalized ingredient names."""

    def __init__(self) -> None:
        self._items: List[str] = []
        self._listeners: List[IngredientListener] = []

    @property
    def items(self) -> Tuple[str, ...]:
        """Snapshot of the current selection in insertion order."""
        return tuple(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, name: object) -> bool:
        return name in self._items

    def __iter__(self):
        return iter(self.items)

    def subscribe(self, listener: IngredientListener) -> Callable[[], None]:
        """Register a listener called with a snapshot after every change.

        Returns:
            A callable that unsubscribes the listener.
        """
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def add(self, name: str) -> bool:
        """Add a normalized ingredient if absent.

        Blank input is ignored. Adding a name already present is a no-op.

        Returns:
            True if the set changed.
        """
        normalized = normalize_ingredient_name(name)
        if not normalized or normalized in self._items:
            return False

        self._items.append(normalized)
        logger.debug(f"Ingredient added: {normalized} ({len(self._items)} total)")
        self._notify()
        return True

    def remove(self, name: str) -> bool:
        """Remove an exact match if present.

        Returns:
            True if the set changed.
        """
        if name not in self._items:
            return False

        self._items.remove(name)
        logger.debug(f"Ingredient removed: {name} ({len(self._items)} total)")
        self._notify()
        return True

    def clear(self) -> bool:
        """Empty the set.

        Returns:
            True if the set changed.
        """
        if not self._items:
            return False

        self._items.clear()
        logger.debug("Ingredients cleared")
        self._notify()
        return True

    def _notify(self) -> None:
        snapshot = self.items
        for listener in list(self._listeners):
            listener(snapshot)
