"""Restriction aggregate: an operator-declared forbidden ingredient for one
pizza type, on top of the type's built-in forbidden set.
"""

from protean.fields import String

from pizzeria.catalogue.events import IngredientForbidden
from pizzeria.catalogue.pizza import PizzaType
from pizzeria.domain import pizzeria


def restriction_key(pizza_type, ingredient_key):
    return f"{pizza_type.value.lower()}:{ingredient_key}"


@pizzeria.aggregate
class Restriction:
    key = String(identifier=True, max_length=150)
    pizza_type = String(required=True, choices=PizzaType)
    ingredient_key = String(required=True, max_length=100)

    @classmethod
    def declare(cls, pizza_type, ingredient_key):
        restriction = cls(
            key=restriction_key(pizza_type, ingredient_key),
            pizza_type=pizza_type.value,
            ingredient_key=ingredient_key,
        )
        restriction.raise_(
            IngredientForbidden(
                restriction_key=restriction.key,
                pizza_type=pizza_type.value,
                ingredient_key=ingredient_key,
            )
        )
        return restriction
