"""Domain events for the catalogue aggregates (Ingredient, Pizza, Restriction)."""

from protean.fields import DateTime, Float, Identifier, String, Text

from pizzeria.domain import pizzeria


@pizzeria.event(part_of="Ingredient")
class IngredientAdded:
    """The operator registered a new ingredient."""

    __version__ = 1

    ingredient_key = Identifier(required=True)
    name = String(required=True)
    price = Float(required=True)
    added_at = DateTime(required=True)


@pizzeria.event(part_of="Ingredient")
class IngredientRepriced:
    """An ingredient's cost changed; every pizza using it gets a new floor."""

    __version__ = 1

    ingredient_key = Identifier(required=True)
    previous_price = Float(required=True)
    new_price = Float(required=True)


@pizzeria.event(part_of="Ingredient")
class IngredientRenamed:
    __version__ = 1

    ingredient_key = Identifier(required=True)
    previous_name = String(required=True)
    new_name = String(required=True)


@pizzeria.event(part_of="Restriction")
class IngredientForbidden:
    """The operator forbade an ingredient for one pizza type."""

    __version__ = 1

    restriction_key = Identifier(required=True)
    pizza_type = String(required=True)
    ingredient_key = Identifier(required=True)


@pizzeria.event(part_of="Pizza")
class PizzaCreated:
    __version__ = 1

    pizza_key = Identifier(required=True)
    name = String(required=True)
    pizza_type = String(required=True)
    created_at = DateTime(required=True)


@pizzeria.event(part_of="Pizza")
class ToppingAdded:
    __version__ = 1

    pizza_key = Identifier(required=True)
    ingredient_key = Identifier(required=True)


@pizzeria.event(part_of="Pizza")
class ToppingRemoved:
    __version__ = 1

    pizza_key = Identifier(required=True)
    ingredient_key = Identifier(required=True)


@pizzeria.event(part_of="Pizza")
class PizzaRepriced:
    __version__ = 1

    pizza_key = Identifier(required=True)
    previous_price = Float()
    new_price = Float(required=True)


@pizzeria.event(part_of="Pizza")
class PizzaPhotoAttached:
    __version__ = 1

    pizza_key = Identifier(required=True)
    photo = Text(required=True)
