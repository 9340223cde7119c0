"""Ingredient aggregate: a named, priced component of pizzas.

Ingredients are identified by their lower-cased name, so "Cheese" and
"cheese" are the same ingredient.
"""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, String

from pizzeria.catalogue.events import IngredientAdded, IngredientRenamed, IngredientRepriced
from pizzeria.domain import pizzeria

MAX_NAME_LENGTH = 100


def ingredient_key(name):
    return name.strip().lower()


@pizzeria.aggregate
class Ingredient:
    key = String(identifier=True, max_length=MAX_NAME_LENGTH)
    name = String(required=True, max_length=MAX_NAME_LENGTH)
    price = Float(required=True, min_value=0.0)
    created_at = DateTime()

    @invariant.post
    def name_must_not_be_blank(self):
        if self.name is not None and not self.name.strip():
            raise ValidationError({"name": ["Ingredient name cannot be blank"]})

    @classmethod
    def create(cls, name, price, created_at=None):
        now = created_at or datetime.now(UTC)
        ingredient = cls(
            key=ingredient_key(name),
            name=name.strip(),
            price=price,
            created_at=now,
        )
        ingredient.raise_(
            IngredientAdded(
                ingredient_key=ingredient.key,
                name=ingredient.name,
                price=price,
                added_at=now,
            )
        )
        return ingredient

    def reprice(self, price):
        if price < 0:
            raise ValidationError({"price": ["Ingredient price cannot be negative"]})

        previous_price = self.price
        self.price = price

        self.raise_(
            IngredientRepriced(
                ingredient_key=self.key,
                previous_price=previous_price,
                new_price=price,
            )
        )

    def correct_name(self, name):
        """Fix the spelling of the display name; the identity cannot change."""
        if name is None or not name.strip():
            raise ValidationError({"name": ["Ingredient name cannot be blank"]})
        if ingredient_key(name) != self.key:
            raise ValidationError({"name": ["Only the capitalisation of an ingredient name can be corrected"]})
        previous_name = self.name
        self.name = name.strip()

        self.raise_(
            IngredientRenamed(
                ingredient_key=self.key,
                previous_name=previous_name,
                new_name=self.name,
            )
        )
