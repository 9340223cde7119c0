"""Tests for the Pizza aggregate, its toppings and its sale price."""

import pytest
from pizzeria.catalogue.events import (
    PizzaCreated,
    PizzaPhotoAttached,
    PizzaRepriced,
    ToppingAdded,
    ToppingRemoved,
)
from pizzeria.catalogue.pizza import Pizza, PizzaType, parse_pizza_type, pizza_key
from protean.exceptions import ValidationError


def _make_pizza(**overrides):
    defaults = {"name": "Margherita", "pizza_type": PizzaType.VEGETARIAN}
    defaults.update(overrides)
    pizza = Pizza.create(**defaults)
    pizza._events.clear()
    return pizza


class TestPizzaType:
    def test_vegetarian_forbids_meats(self):
        assert PizzaType.VEGETARIAN.builtin_forbidden == {"ham", "beef", "bacon"}

    def test_meat_forbids_nothing(self):
        assert PizzaType.MEAT.builtin_forbidden == frozenset()

    @pytest.mark.parametrize("value", ["Vegetarian", "vegetarian", "VEGETARIAN", " Vegetarian "])
    def test_parse_accepts_value_or_name(self, value):
        assert parse_pizza_type(value) is PizzaType.VEGETARIAN

    def test_parse_accepts_member(self):
        assert parse_pizza_type(PizzaType.REGIONAL) is PizzaType.REGIONAL

    @pytest.mark.parametrize("value", [None, "", "Vegan", 3])
    def test_parse_unknown(self, value):
        assert parse_pizza_type(value) is None


class TestPizzaCreation:
    def test_create(self):
        pizza = Pizza.create(name=" Margherita ", pizza_type=PizzaType.VEGETARIAN)
        assert pizza.key == "margherita"
        assert pizza.name == "Margherita"
        assert pizza.kind is PizzaType.VEGETARIAN
        assert pizza.sale_price == 0.0
        assert pizza.topping_keys == []
        assert pizza.photo is None

    def test_create_raises_event(self):
        pizza = Pizza.create(name="Margherita", pizza_type=PizzaType.VEGETARIAN)
        assert isinstance(pizza._events[0], PizzaCreated)
        assert pizza._events[0].pizza_type == "Vegetarian"

    def test_key(self):
        assert pizza_key("Quatre Fromages") == "quatre fromages"

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError):
            Pizza(key="x", name="  ", pizza_type="Meat")

    def test_unknown_type_rejected(self):
        with pytest.raises(ValidationError):
            Pizza(key="x", name="X", pizza_type="Vegan")


class TestToppings:
    def test_toppings_keep_insertion_order(self):
        pizza = _make_pizza()
        pizza.add_topping("tomato")
        pizza.add_topping("cheese")
        pizza.add_topping("basil")
        assert pizza.topping_keys == ["tomato", "cheese", "basil"]

    def test_add_raises_event(self):
        pizza = _make_pizza()
        pizza.add_topping("cheese")
        assert isinstance(pizza._events[0], ToppingAdded)
        assert pizza._events[0].ingredient_key == "cheese"

    def test_duplicate_topping_rejected(self):
        pizza = _make_pizza()
        pizza.add_topping("cheese")
        with pytest.raises(ValidationError):
            pizza.add_topping("cheese")
        assert pizza.topping_keys == ["cheese"]

    def test_remove(self):
        pizza = _make_pizza()
        pizza.add_topping("tomato")
        pizza.add_topping("cheese")
        pizza._events.clear()

        pizza.remove_topping("tomato")

        assert pizza.topping_keys == ["cheese"]
        assert isinstance(pizza._events[0], ToppingRemoved)

    def test_remove_absent_rejected(self):
        pizza = _make_pizza()
        with pytest.raises(ValidationError):
            pizza.remove_topping("cheese")

    def test_re_adding_after_removal_goes_last(self):
        pizza = _make_pizza()
        pizza.add_topping("tomato")
        pizza.add_topping("cheese")
        pizza.remove_topping("tomato")
        pizza.add_topping("tomato")
        assert pizza.topping_keys == ["cheese", "tomato"]


class TestSalePrice:
    def test_unset_sale_price_sells_at_floor(self):
        pizza = _make_pizza()
        assert pizza.effective_price(4.2) == 4.2

    def test_set_sale_price(self):
        pizza = _make_pizza()
        pizza.set_sale_price(5.0, 4.2)
        assert pizza.sale_price == 5.0
        assert pizza.effective_price(4.2) == 5.0
        assert isinstance(pizza._events[0], PizzaRepriced)

    def test_price_equal_to_floor_accepted(self):
        pizza = _make_pizza()
        pizza.set_sale_price(4.2, 4.2)
        assert pizza.sale_price == 4.2

    def test_price_below_floor_rejected(self):
        pizza = _make_pizza()
        with pytest.raises(ValidationError):
            pizza.set_sale_price(4.0, 4.2)
        assert pizza.sale_price == 0.0

    @pytest.mark.parametrize("price", [0, -1.0])
    def test_non_positive_price_rejected(self, price):
        pizza = _make_pizza()
        with pytest.raises(ValidationError):
            pizza.set_sale_price(price, 0.0)


class TestPhoto:
    def test_attach_photo(self):
        pizza = _make_pizza()
        pizza.attach_photo("/photos/margherita.png")
        assert pizza.photo == "/photos/margherita.png"
        assert isinstance(pizza._events[0], PizzaPhotoAttached)
