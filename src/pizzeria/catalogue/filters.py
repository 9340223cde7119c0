"""PizzaFilter: composable, persistent filters over the catalog's pizzas.

Three optional criteria combine with a logical AND: exact pizza type, maximum
sale price (inclusive) and a set of required ingredients (case-insensitive,
every one must be on the pizza). Criteria stay set across ``apply`` calls
until ``clear`` is called; with no criteria every pizza matches.
"""

from pizzeria.catalogue.catalog import Catalog
from pizzeria.catalogue.ingredient import ingredient_key
from pizzeria.catalogue.pizza import Pizza, PizzaType, parse_pizza_type


class PizzaFilter:
    def __init__(self, catalog: Catalog):
        self._catalog = catalog
        self.pizza_type: PizzaType | None = None
        self.max_price: float | None = None
        self.required_ingredients: set[str] = set()

    @property
    def is_empty(self) -> bool:
        return self.pizza_type is None and self.max_price is None and not self.required_ingredients

    def by_type(self, pizza_type) -> "PizzaFilter":
        self.pizza_type = parse_pizza_type(pizza_type)
        return self

    def by_max_price(self, max_price) -> "PizzaFilter":
        # Non-positive limits are ignored
        if max_price is not None and max_price > 0:
            self.max_price = float(max_price)
        return self

    def by_ingredients(self, *names) -> "PizzaFilter":
        for name in names:
            if name and name.strip():
                self.required_ingredients.add(ingredient_key(name))
        return self

    def clear(self) -> "PizzaFilter":
        self.pizza_type = None
        self.max_price = None
        self.required_ingredients = set()
        return self

    def matches(self, pizza: Pizza) -> bool:
        if self.pizza_type is not None and pizza.kind is not self.pizza_type:
            return False
        if self.max_price is not None and self._catalog.price_of(pizza) > self.max_price:
            return False
        if self.required_ingredients and not self.required_ingredients <= set(pizza.topping_keys):
            return False
        return True

    def apply(self) -> list[Pizza]:
        """Pizzas matching every active criterion, in catalog order."""
        return [pizza for pizza in self._catalog.pizzas() if self.matches(pizza)]
