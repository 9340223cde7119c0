"""Pizza aggregate with Topping entity, and the PizzaType enumeration.

A pizza lists its toppings by ingredient key, in the order they were added.
Prices are never cached on the pizza: the minimal price is derived from the
current ingredient prices by the Catalog, and ``sale_price`` is the
operator-controlled price bounded below by that floor. A sale price of zero
means "not set yet" and the pizza then sells at its minimal price.
"""

from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Integer, String, Text

from pizzeria.catalogue.events import (
    PizzaCreated,
    PizzaPhotoAttached,
    PizzaRepriced,
    ToppingAdded,
    ToppingRemoved,
)
from pizzeria.catalogue.ingredient import MAX_NAME_LENGTH
from pizzeria.domain import pizzeria


class PizzaType(Enum):
    MEAT = "Meat"
    VEGETARIAN = "Vegetarian"
    REGIONAL = "Regional"

    @property
    def builtin_forbidden(self) -> frozenset[str]:
        """Ingredient keys this type forbids regardless of operator restrictions."""
        return _BUILTIN_FORBIDDEN[self]


_BUILTIN_FORBIDDEN = {
    PizzaType.MEAT: frozenset(),
    PizzaType.VEGETARIAN: frozenset({"ham", "beef", "bacon"}),
    PizzaType.REGIONAL: frozenset(),
}


def pizza_key(name):
    return name.strip().lower()


def parse_pizza_type(value):
    """Accept a PizzaType, its value or its name; return None when unknown."""
    if isinstance(value, PizzaType):
        return value
    if not isinstance(value, str):
        return None
    for member in PizzaType:
        if value.strip().lower() in (member.value.lower(), member.name.lower()):
            return member
    return None


@pizzeria.entity(part_of="Pizza")
class Topping:
    """One ingredient placed on a pizza."""

    ingredient_key = String(required=True, max_length=MAX_NAME_LENGTH)
    position = Integer(default=0)


@pizzeria.aggregate
class Pizza:
    key = String(identifier=True, max_length=MAX_NAME_LENGTH)
    name = String(required=True, max_length=MAX_NAME_LENGTH)
    pizza_type = String(required=True, choices=PizzaType)
    toppings = HasMany(Topping)
    sale_price = Float(default=0.0, min_value=0.0)
    photo = Text()
    created_at = DateTime()

    @invariant.post
    def name_must_not_be_blank(self):
        if self.name is not None and not self.name.strip():
            raise ValidationError({"name": ["Pizza name cannot be blank"]})

    @invariant.post
    def toppings_must_be_distinct(self):
        keys = [t.ingredient_key for t in self.toppings]
        if len(keys) != len(set(keys)):
            raise ValidationError({"toppings": ["An ingredient can appear only once on a pizza"]})

    @classmethod
    def create(cls, name, pizza_type, created_at=None):
        pizza_type = PizzaType(pizza_type) if not isinstance(pizza_type, PizzaType) else pizza_type
        now = created_at or datetime.now(UTC)

        pizza = cls(
            key=pizza_key(name),
            name=name.strip(),
            pizza_type=pizza_type.value,
            sale_price=0.0,
            created_at=now,
        )
        pizza.raise_(
            PizzaCreated(
                pizza_key=pizza.key,
                name=pizza.name,
                pizza_type=pizza_type.value,
                created_at=now,
            )
        )
        return pizza

    @property
    def kind(self) -> PizzaType:
        return PizzaType(self.pizza_type)

    @property
    def topping_keys(self) -> list[str]:
        """Ingredient keys in the order they were put on the pizza."""
        return [t.ingredient_key for t in sorted(self.toppings, key=lambda t: t.position)]

    def has_topping(self, ingredient_key):
        return any(t.ingredient_key == ingredient_key for t in self.toppings)

    def add_topping(self, ingredient_key):
        if self.has_topping(ingredient_key):
            raise ValidationError({"toppings": [f"Pizza already contains {ingredient_key}"]})

        position = max((t.position for t in self.toppings), default=-1) + 1
        self.add_toppings(Topping(ingredient_key=ingredient_key, position=position))

        self.raise_(ToppingAdded(pizza_key=self.key, ingredient_key=ingredient_key))

    def remove_topping(self, ingredient_key):
        topping = next((t for t in self.toppings if t.ingredient_key == ingredient_key), None)
        if topping is None:
            raise ValidationError({"toppings": [f"Pizza does not contain {ingredient_key}"]})

        self.remove_toppings(topping)

        self.raise_(ToppingRemoved(pizza_key=self.key, ingredient_key=ingredient_key))

    def effective_price(self, floor):
        """Price the pizza sells at, given its current minimal price."""
        return self.sale_price if self.sale_price else floor

    def set_sale_price(self, price, floor):
        if price <= 0:
            raise ValidationError({"sale_price": ["Sale price must be greater than zero"]})
        if price < floor:
            raise ValidationError({"sale_price": [f"Sale price {price} is below the minimal price {floor}"]})

        previous_price = self.sale_price
        self.sale_price = price

        self.raise_(
            PizzaRepriced(
                pizza_key=self.key,
                previous_price=previous_price,
                new_price=price,
            )
        )

    def attach_photo(self, path):
        self.photo = path
        self.raise_(PizzaPhotoAttached(pizza_key=self.key, photo=path))
