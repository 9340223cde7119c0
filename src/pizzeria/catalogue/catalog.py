"""Catalog: the operator's registry of ingredients, pizzas and per-type
ingredient restrictions, and the pricing authority for pizzas.

Pizzas and ingredients are addressed by name (case-insensitive). Operations
that accept a pizza take either a ``Pizza`` or its name; the current state is
always re-read from the repository, so minimal prices reflect the ingredient
prices of the moment.
"""

import threading
from pathlib import Path

from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain

from pizzeria.catalogue.ingredient import MAX_NAME_LENGTH, Ingredient, ingredient_key
from pizzeria.catalogue.pizza import Pizza, parse_pizza_type, pizza_key
from pizzeria.catalogue.pricing import minimal_price
from pizzeria.catalogue.restriction import Restriction, restriction_key
from pizzeria.config import get_settings
from pizzeria.shared.errors import CatalogError
from pizzeria.shared.outcome import Outcome
from pizzeria.utils.logging import get_logger

logger = get_logger(__name__)


def _is_blank(value):
    return value is None or not isinstance(value, str) or not value.strip()


def _is_too_long(name):
    return len(name.strip()) > MAX_NAME_LENGTH


def _is_positive(value):
    return isinstance(value, int | float) and not isinstance(value, bool) and value > 0


class Catalog:
    def __init__(self):
        self._lock = threading.RLock()

    # -------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------
    def find_ingredient(self, name) -> Ingredient | None:
        if _is_blank(name):
            return None
        try:
            return current_domain.repository_for(Ingredient).get(ingredient_key(name))
        except ObjectNotFoundError:
            return None

    def find_pizza(self, pizza) -> Pizza | None:
        """Resolve a ``Pizza`` or a pizza name to the pizza currently registered."""
        name = pizza.key if isinstance(pizza, Pizza) else pizza
        if _is_blank(name):
            return None
        try:
            return current_domain.repository_for(Pizza).get(pizza_key(name))
        except ObjectNotFoundError:
            return None

    def ingredients(self) -> list[Ingredient]:
        items = current_domain.repository_for(Ingredient)._dao.query.all().items
        return sorted(items, key=lambda i: i.key)

    def ingredient_names(self) -> list[str]:
        return [i.name for i in self.ingredients()]

    def pizzas(self) -> list[Pizza]:
        """All pizzas in catalog insertion order."""
        items = current_domain.repository_for(Pizza)._dao.query.all().items
        return sorted(items, key=lambda p: (p.created_at, p.key))

    def restrictions(self, pizza_type=None) -> list[Restriction]:
        repo = current_domain.repository_for(Restriction)
        if pizza_type is None:
            items = repo._dao.query.all().items
        else:
            items = repo._dao.query.filter(pizza_type=pizza_type.value).all().items
        return sorted(items, key=lambda r: r.key)

    def forbidden_for(self, pizza_type) -> set[str]:
        """Effective forbidden ingredient keys: built-in plus operator-declared."""
        declared = {r.ingredient_key for r in self.restrictions(pizza_type)}
        return set(pizza_type.builtin_forbidden) | declared

    # -------------------------------------------------------------------
    # Ingredients
    # -------------------------------------------------------------------
    def create_ingredient(self, name, price) -> Outcome:
        if _is_blank(name):
            return self._reject("create_ingredient", CatalogError.BLANK_NAME, name=name)
        if _is_too_long(name):
            return self._reject("create_ingredient", CatalogError.NAME_TOO_LONG, name=name)
        if not _is_positive(price):
            return self._reject("create_ingredient", CatalogError.INVALID_PRICE, name=name, price=price)

        with self._lock:
            if self.find_ingredient(name) is not None:
                return self._reject("create_ingredient", CatalogError.DUPLICATE_INGREDIENT, name=name)

            ingredient = Ingredient.create(name=name, price=float(price))
            current_domain.repository_for(Ingredient).add(ingredient)

        logger.info("Ingredient created", ingredient=ingredient.key, price=ingredient.price)
        return Outcome.success(ingredient)

    def set_ingredient_price(self, name, price) -> Outcome:
        if _is_blank(name):
            return self._reject("set_ingredient_price", CatalogError.BLANK_NAME, name=name)
        if not _is_positive(price):
            return self._reject("set_ingredient_price", CatalogError.INVALID_PRICE, name=name, price=price)

        with self._lock:
            ingredient = self.find_ingredient(name)
            if ingredient is None:
                return self._reject("set_ingredient_price", CatalogError.UNKNOWN_INGREDIENT, name=name)

            ingredient.reprice(float(price))
            current_domain.repository_for(Ingredient).add(ingredient)

        logger.info("Ingredient repriced", ingredient=ingredient.key, price=ingredient.price)
        return Outcome.success(ingredient)

    def correct_ingredient_name(self, name, corrected) -> Outcome:
        """Fix how an ingredient name is written, e.g. "mozzarella" to "Mozzarella".

        The lower-cased name is the ingredient's identity and pizzas refer to
        it, so only the capitalisation and surrounding blanks can change.
        """
        if _is_blank(name) or _is_blank(corrected):
            return self._reject(
                "correct_ingredient_name", CatalogError.BLANK_NAME, name=name, corrected=corrected
            )

        with self._lock:
            ingredient = self.find_ingredient(name)
            if ingredient is None:
                return self._reject("correct_ingredient_name", CatalogError.UNKNOWN_INGREDIENT, name=name)
            if ingredient_key(corrected) != ingredient.key:
                return self._reject(
                    "correct_ingredient_name",
                    CatalogError.NAME_MISMATCH,
                    ingredient=ingredient.key,
                    corrected=corrected,
                )

            ingredient.correct_name(corrected)
            current_domain.repository_for(Ingredient).add(ingredient)

        logger.info("Ingredient name corrected", ingredient=ingredient.key, name=ingredient.name)
        return Outcome.success(ingredient)

    def forbid_ingredient(self, name, pizza_type) -> Outcome:
        """Forbid an ingredient for a pizza type.

        Succeeds with ``True`` when the restriction is new and ``False`` when
        it was already declared. Pizzas already holding the ingredient keep
        it; see ``forbidden_ingredients_present``.
        """
        if _is_blank(name):
            return self._reject("forbid_ingredient", CatalogError.BLANK_NAME, name=name)
        kind = parse_pizza_type(pizza_type)
        if kind is None:
            return self._reject("forbid_ingredient", CatalogError.INVALID_TYPE, pizza_type=pizza_type)

        with self._lock:
            ingredient = self.find_ingredient(name)
            if ingredient is None:
                return self._reject("forbid_ingredient", CatalogError.UNKNOWN_INGREDIENT, name=name)

            repo = current_domain.repository_for(Restriction)
            try:
                repo.get(restriction_key(kind, ingredient.key))
                return Outcome.success(False)
            except ObjectNotFoundError:
                repo.add(Restriction.declare(kind, ingredient.key))

        logger.info("Ingredient forbidden", ingredient=ingredient.key, pizza_type=kind.value)
        return Outcome.success(True)

    # -------------------------------------------------------------------
    # Pizzas
    # -------------------------------------------------------------------
    def create_pizza(self, name, pizza_type) -> Outcome:
        if _is_blank(name):
            return self._reject("create_pizza", CatalogError.BLANK_NAME, name=name)
        if _is_too_long(name):
            return self._reject("create_pizza", CatalogError.NAME_TOO_LONG, name=name)
        kind = parse_pizza_type(pizza_type)
        if kind is None:
            return self._reject("create_pizza", CatalogError.INVALID_TYPE, pizza_type=pizza_type)

        with self._lock:
            if self.find_pizza(name) is not None:
                return self._reject("create_pizza", CatalogError.DUPLICATE_PIZZA, name=name)

            pizza = Pizza.create(name=name, pizza_type=kind)
            current_domain.repository_for(Pizza).add(pizza)

        logger.info("Pizza created", pizza=pizza.key, pizza_type=kind.value)
        return Outcome.success(pizza)

    def add_ingredient_to_pizza(self, pizza, name) -> Outcome:
        with self._lock:
            found = self.find_pizza(pizza)
            if found is None:
                return self._reject("add_ingredient_to_pizza", CatalogError.UNKNOWN_PIZZA, pizza=pizza)
            ingredient = self.find_ingredient(name)
            if ingredient is None:
                return self._reject("add_ingredient_to_pizza", CatalogError.UNKNOWN_INGREDIENT, name=name)
            if ingredient.key in self.forbidden_for(found.kind):
                return self._reject(
                    "add_ingredient_to_pizza",
                    CatalogError.FORBIDDEN_INGREDIENT,
                    pizza=found.key,
                    ingredient=ingredient.key,
                )
            if found.has_topping(ingredient.key):
                return self._reject(
                    "add_ingredient_to_pizza",
                    CatalogError.ALREADY_PRESENT,
                    pizza=found.key,
                    ingredient=ingredient.key,
                )

            found.add_topping(ingredient.key)
            current_domain.repository_for(Pizza).add(found)

        logger.info("Ingredient added to pizza", pizza=found.key, ingredient=ingredient.key)
        return Outcome.success(found)

    def remove_ingredient_from_pizza(self, pizza, name) -> Outcome:
        with self._lock:
            found = self.find_pizza(pizza)
            if found is None:
                return self._reject("remove_ingredient_from_pizza", CatalogError.UNKNOWN_PIZZA, pizza=pizza)
            ingredient = self.find_ingredient(name)
            if ingredient is None:
                return self._reject("remove_ingredient_from_pizza", CatalogError.UNKNOWN_INGREDIENT, name=name)
            if not found.has_topping(ingredient.key):
                return self._reject(
                    "remove_ingredient_from_pizza",
                    CatalogError.NOT_PRESENT,
                    pizza=found.key,
                    ingredient=ingredient.key,
                )

            found.remove_topping(ingredient.key)
            current_domain.repository_for(Pizza).add(found)

        logger.info("Ingredient removed from pizza", pizza=found.key, ingredient=ingredient.key)
        return Outcome.success(found)

    def forbidden_ingredients_present(self, pizza) -> Outcome:
        """Toppings of ``pizza`` that its type now forbids (restrictions can be
        declared after the ingredients were placed)."""
        found = self.find_pizza(pizza)
        if found is None:
            return Outcome.failure(CatalogError.UNKNOWN_PIZZA)
        forbidden = self.forbidden_for(found.kind)
        return Outcome.success({key for key in found.topping_keys if key in forbidden})

    # -------------------------------------------------------------------
    # Pricing
    # -------------------------------------------------------------------
    def minimal_price_of(self, pizza: Pizza) -> float:
        """Minimal price of an already-resolved pizza, from current ingredient prices."""
        repo = current_domain.repository_for(Ingredient)
        prices = []
        for key in pizza.topping_keys:
            try:
                prices.append(repo.get(key).price)
            except ObjectNotFoundError:
                continue
        return minimal_price(prices)

    def price_of(self, pizza: Pizza) -> float:
        return pizza.effective_price(self.minimal_price_of(pizza))

    def minimal_price(self, pizza) -> Outcome:
        found = self.find_pizza(pizza)
        if found is None:
            return Outcome.failure(CatalogError.UNKNOWN_PIZZA)
        return Outcome.success(self.minimal_price_of(found))

    def sale_price(self, pizza) -> Outcome:
        found = self.find_pizza(pizza)
        if found is None:
            return Outcome.failure(CatalogError.UNKNOWN_PIZZA)
        return Outcome.success(self.price_of(found))

    def set_sale_price(self, pizza, price) -> Outcome:
        if not _is_positive(price):
            return self._reject("set_sale_price", CatalogError.INVALID_PRICE, pizza=pizza, price=price)

        with self._lock:
            found = self.find_pizza(pizza)
            if found is None:
                return self._reject("set_sale_price", CatalogError.UNKNOWN_PIZZA, pizza=pizza)

            floor = self.minimal_price_of(found)
            try:
                found.set_sale_price(float(price), floor)
            except ValidationError:
                return self._reject(
                    "set_sale_price",
                    CatalogError.BELOW_MINIMAL_PRICE,
                    pizza=found.key,
                    price=price,
                    minimal_price=floor,
                )
            current_domain.repository_for(Pizza).add(found)

        logger.info("Pizza repriced", pizza=found.key, sale_price=found.sale_price)
        return Outcome.success(found)

    # -------------------------------------------------------------------
    # Photos
    # -------------------------------------------------------------------
    def attach_photo(self, pizza, path) -> Outcome:
        """Attach a photo by path; the file must exist and its name end in
        a lower-case ``.png``, ``.jpg`` or ``.jpeg``.

        Only the path is stored, the file is neither copied nor inspected.
        """
        with self._lock:
            found = self.find_pizza(pizza)
            if found is None:
                return self._reject("attach_photo", CatalogError.UNKNOWN_PIZZA, pizza=pizza)
            if path is None or not str(path).strip():
                return self._reject("attach_photo", CatalogError.MISSING_FILE, pizza=found.key)

            location = str(path)
            if not location.endswith(get_settings().photo_extensions):
                return self._reject("attach_photo", CatalogError.UNSUPPORTED_IMAGE, pizza=found.key, path=location)
            if not Path(location).is_file():
                return self._reject("attach_photo", CatalogError.MISSING_FILE, pizza=found.key, path=location)

            found.attach_photo(location)
            current_domain.repository_for(Pizza).add(found)

        logger.info("Pizza photo attached", pizza=found.key, photo=location)
        return Outcome.success(found)

    # -------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------
    @staticmethod
    def _reject(operation, error, **details):
        logger.debug("Catalog operation rejected", operation=operation, error=error.value, **details)
        return Outcome.failure(error)
