"""Shopping list domain models."""

from pydantic import BaseModel


class ShoppingListItem(BaseModel):
    """A single aggregated ingredient for the week."""

    name: str
    quantity: str
    category: str
    completed: bool = False


def toggle_item(
    items: list[ShoppingListItem], name: str
) -> list[ShoppingListItem]:
    """Return a copy of the list with the named item's completed flag flipped."""
    return [
        item.model_copy(update={"completed": not item.completed})
        if item.name == name
        else item
        for item in items
    ]
