"""Application tests for the Catalog: ingredients, pizzas, restrictions, prices and photos."""

import pytest
from pizzeria.catalogue.pizza import PizzaType
from pizzeria.shared.errors import CatalogError


class TestCreateIngredient:
    def test_create(self, catalog):
        outcome = catalog.create_ingredient("Cheese", 2.0)
        assert outcome.ok
        assert catalog.find_ingredient("cheese").price == 2.0

    @pytest.mark.parametrize("name", [None, "", "   "])
    def test_blank_name(self, catalog, name):
        assert catalog.create_ingredient(name, 2.0).error is CatalogError.BLANK_NAME

    @pytest.mark.parametrize("price", [0, -1.0, None, "2.0"])
    def test_invalid_price(self, catalog, price):
        assert catalog.create_ingredient("Cheese", price).error is CatalogError.INVALID_PRICE

    def test_name_length_limit(self, catalog):
        assert catalog.create_ingredient("x" * 100, 1.0).ok
        assert catalog.create_ingredient("y" * 101, 1.0).error is CatalogError.NAME_TOO_LONG
        assert catalog.find_ingredient("y" * 101) is None

    def test_duplicate_ignores_case(self, catalog):
        catalog.create_ingredient("Cheese", 2.0)
        outcome = catalog.create_ingredient("CHEESE", 3.0)
        assert outcome.error is CatalogError.DUPLICATE_INGREDIENT
        assert catalog.find_ingredient("Cheese").price == 2.0

    def test_listings(self, catalog):
        catalog.create_ingredient("Tomato", 1.0)
        catalog.create_ingredient("Cheese", 2.0)
        assert [i.key for i in catalog.ingredients()] == ["cheese", "tomato"]
        assert catalog.ingredient_names() == ["Cheese", "Tomato"]


class TestSetIngredientPrice:
    def test_reprice(self, catalog):
        catalog.create_ingredient("Cheese", 2.0)
        assert catalog.set_ingredient_price("cheese", 2.5).ok
        assert catalog.find_ingredient("Cheese").price == 2.5

    def test_unknown(self, catalog):
        assert catalog.set_ingredient_price("Cheese", 2.5).error is CatalogError.UNKNOWN_INGREDIENT

    def test_blank_name(self, catalog):
        assert catalog.set_ingredient_price(" ", 2.5).error is CatalogError.BLANK_NAME

    def test_invalid_price(self, catalog):
        catalog.create_ingredient("Cheese", 2.0)
        assert catalog.set_ingredient_price("Cheese", 0).error is CatalogError.INVALID_PRICE
        assert catalog.find_ingredient("Cheese").price == 2.0

    def test_repricing_moves_the_floor(self, catalog, margherita):
        catalog.set_ingredient_price("Cheese", 3.0)
        assert catalog.minimal_price("Margherita").value == 5.6


class TestCorrectIngredientName:
    def test_capitalisation_fixed(self, catalog, margherita):
        catalog.create_ingredient("mozzarella", 2.5)
        outcome = catalog.correct_ingredient_name("MOZZARELLA", " Mozzarella ")
        assert outcome.ok
        assert catalog.find_ingredient("mozzarella").name == "Mozzarella"

    @pytest.mark.parametrize("corrected", [None, "", "   "])
    def test_blank_correction(self, catalog, margherita, corrected):
        outcome = catalog.correct_ingredient_name("Cheese", corrected)
        assert outcome.error is CatalogError.BLANK_NAME
        assert catalog.find_ingredient("cheese").name == "Cheese"

    def test_unknown_ingredient(self, catalog):
        assert catalog.correct_ingredient_name("Basil", "BASIL").error is CatalogError.UNKNOWN_INGREDIENT

    def test_different_name_rejected(self, catalog, margherita):
        outcome = catalog.correct_ingredient_name("Cheese", "Mozzarella")
        assert outcome.error is CatalogError.NAME_MISMATCH
        assert catalog.find_ingredient("Mozzarella") is None
        assert catalog.find_pizza("Margherita").topping_keys == ["cheese", "tomato"]


class TestForbidIngredient:
    def test_newly_forbidden(self, catalog):
        catalog.create_ingredient("Anchovy", 1.5)
        outcome = catalog.forbid_ingredient("Anchovy", PizzaType.REGIONAL)
        assert outcome.ok and outcome.value is True
        assert "anchovy" in catalog.forbidden_for(PizzaType.REGIONAL)

    def test_already_forbidden(self, catalog):
        catalog.create_ingredient("Anchovy", 1.5)
        catalog.forbid_ingredient("Anchovy", "Regional")
        outcome = catalog.forbid_ingredient("anchovy", "Regional")
        assert outcome.ok and outcome.value is False
        assert len(catalog.restrictions(PizzaType.REGIONAL)) == 1

    def test_unknown_ingredient(self, catalog):
        assert catalog.forbid_ingredient("Anchovy", "Regional").error is CatalogError.UNKNOWN_INGREDIENT

    def test_invalid_type(self, catalog):
        catalog.create_ingredient("Anchovy", 1.5)
        assert catalog.forbid_ingredient("Anchovy", "Vegan").error is CatalogError.INVALID_TYPE

    def test_blank_name(self, catalog):
        assert catalog.forbid_ingredient("", "Regional").error is CatalogError.BLANK_NAME

    def test_builtin_and_declared_combine(self, catalog):
        catalog.create_ingredient("Chorizo", 1.0)
        catalog.forbid_ingredient("Chorizo", "Vegetarian")
        assert catalog.forbidden_for(PizzaType.VEGETARIAN) == {"ham", "beef", "bacon", "chorizo"}
        assert catalog.forbidden_for(PizzaType.MEAT) == set()


class TestCreatePizza:
    def test_create(self, catalog):
        outcome = catalog.create_pizza("Regina", PizzaType.MEAT)
        assert outcome.ok
        assert outcome.value.kind is PizzaType.MEAT
        assert catalog.sale_price("Regina").value == 0.0

    def test_blank_name(self, catalog):
        assert catalog.create_pizza("  ", "Meat").error is CatalogError.BLANK_NAME

    @pytest.mark.parametrize("pizza_type", [None, "", "Vegan"])
    def test_invalid_type(self, catalog, pizza_type):
        assert catalog.create_pizza("Regina", pizza_type).error is CatalogError.INVALID_TYPE

    def test_name_length_limit(self, catalog):
        assert catalog.create_pizza("p" * 101, "Meat").error is CatalogError.NAME_TOO_LONG
        assert catalog.pizzas() == []

    def test_duplicate_ignores_case(self, catalog):
        catalog.create_pizza("Regina", "Meat")
        assert catalog.create_pizza("REGINA", "Regional").error is CatalogError.DUPLICATE_PIZZA

    def test_pizzas_listed_in_insertion_order(self, catalog):
        for name in ("Calzone", "Diavola", "Napoli"):
            catalog.create_pizza(name, "Meat")
        assert [p.name for p in catalog.pizzas()] == ["Calzone", "Diavola", "Napoli"]


class TestAddIngredientToPizza:
    def test_add_keeps_order(self, catalog, margherita):
        assert margherita.topping_keys == ["cheese", "tomato"]

    def test_unknown_pizza(self, catalog):
        catalog.create_ingredient("Cheese", 2.0)
        assert catalog.add_ingredient_to_pizza("Nope", "Cheese").error is CatalogError.UNKNOWN_PIZZA

    def test_unknown_ingredient(self, catalog, margherita):
        assert catalog.add_ingredient_to_pizza(margherita, "Basil").error is CatalogError.UNKNOWN_INGREDIENT

    def test_builtin_forbidden(self, catalog, margherita):
        catalog.create_ingredient("Ham", 1.5)
        assert catalog.add_ingredient_to_pizza(margherita, "Ham").error is CatalogError.FORBIDDEN_INGREDIENT
        assert "ham" not in catalog.find_pizza("Margherita").topping_keys

    def test_declared_forbidden(self, catalog):
        catalog.create_ingredient("Pineapple", 1.0)
        catalog.forbid_ingredient("Pineapple", "Regional")
        catalog.create_pizza("Savoyarde", "Regional")
        outcome = catalog.add_ingredient_to_pizza("Savoyarde", "Pineapple")
        assert outcome.error is CatalogError.FORBIDDEN_INGREDIENT

    def test_already_present(self, catalog, margherita):
        outcome = catalog.add_ingredient_to_pizza(margherita, "CHEESE")
        assert outcome.error is CatalogError.ALREADY_PRESENT
        assert catalog.find_pizza("Margherita").topping_keys == ["cheese", "tomato"]


class TestRemoveIngredientFromPizza:
    def test_remove(self, catalog, margherita):
        assert catalog.remove_ingredient_from_pizza("Margherita", "Tomato").ok
        assert catalog.find_pizza("Margherita").topping_keys == ["cheese"]
        assert catalog.minimal_price("Margherita").value == 2.8

    def test_unknown_ingredient(self, catalog, margherita):
        assert catalog.remove_ingredient_from_pizza(margherita, "Basil").error is CatalogError.UNKNOWN_INGREDIENT

    def test_not_present(self, catalog, margherita):
        catalog.create_ingredient("Basil", 0.2)
        assert catalog.remove_ingredient_from_pizza(margherita, "Basil").error is CatalogError.NOT_PRESENT


class TestForbiddenIngredientsPresent:
    def test_restriction_declared_after_placement(self, catalog, margherita):
        catalog.forbid_ingredient("Tomato", "Vegetarian")
        assert catalog.forbidden_ingredients_present(margherita).value == {"tomato"}

    def test_clean_pizza(self, catalog, margherita):
        assert catalog.forbidden_ingredients_present(margherita).value == set()

    def test_unknown_pizza(self, catalog):
        assert catalog.forbidden_ingredients_present("Nope").error is CatalogError.UNKNOWN_PIZZA


class TestPricing:
    def test_minimal_price(self, catalog, margherita):
        assert catalog.minimal_price(margherita).value == 4.2

    def test_unset_sale_price_reports_minimal(self, catalog, margherita):
        assert catalog.sale_price(margherita).value == 4.2

    def test_below_minimal_rejected(self, catalog, margherita):
        outcome = catalog.set_sale_price(margherita, 4.0)
        assert outcome.error is CatalogError.BELOW_MINIMAL_PRICE
        assert catalog.sale_price(margherita).value == 4.2

    def test_set_sale_price(self, catalog, margherita):
        assert catalog.set_sale_price(margherita, 5.0).ok
        assert catalog.sale_price("margherita").value == 5.0

    @pytest.mark.parametrize("price", [0, -5.0])
    def test_invalid_price(self, catalog, margherita, price):
        assert catalog.set_sale_price(margherita, price).error is CatalogError.INVALID_PRICE

    def test_unknown_pizza(self, catalog):
        assert catalog.set_sale_price("Nope", 5.0).error is CatalogError.UNKNOWN_PIZZA
        assert catalog.minimal_price("Nope").error is CatalogError.UNKNOWN_PIZZA
        assert catalog.sale_price("Nope").error is CatalogError.UNKNOWN_PIZZA

    def test_below_minimal_always_rejected_after_changes(self, catalog, margherita):
        catalog.set_sale_price(margherita, 5.0)
        catalog.set_ingredient_price("Cheese", 3.0)
        assert catalog.set_sale_price(margherita, 5.5).error is CatalogError.BELOW_MINIMAL_PRICE
        assert catalog.set_sale_price(margherita, 5.6).ok


class TestAttachPhoto:
    def test_png(self, catalog, margherita, tmp_path):
        photo = tmp_path / "margherita.png"
        photo.write_bytes(b"\x89PNG")
        assert catalog.attach_photo(margherita, photo).ok
        assert catalog.find_pizza("Margherita").photo == str(photo)

    @pytest.mark.parametrize("name", ["m.jpg", "m.jpeg"])
    def test_jpeg(self, catalog, margherita, tmp_path, name):
        photo = tmp_path / name
        photo.write_bytes(b"\xff\xd8")
        assert catalog.attach_photo(margherita, str(photo)).ok

    def test_unsupported_extension(self, catalog, margherita, tmp_path):
        photo = tmp_path / "margherita.gif"
        photo.write_bytes(b"GIF89a")
        assert catalog.attach_photo(margherita, photo).error is CatalogError.UNSUPPORTED_IMAGE

    @pytest.mark.parametrize("name", ["m.PNG", "m.Jpg", "m.JPEG"])
    def test_suffix_is_case_sensitive(self, catalog, margherita, tmp_path, name):
        photo = tmp_path / name
        photo.write_bytes(b"\xff\xd8")
        assert catalog.attach_photo(margherita, photo).error is CatalogError.UNSUPPORTED_IMAGE

    def test_long_path(self, catalog, margherita, tmp_path):
        folder = tmp_path
        for part in range(4):
            folder = folder / (str(part) * 60)
        folder.mkdir(parents=True)
        photo = folder / "margherita.png"
        photo.write_bytes(b"\x89PNG")
        assert len(str(photo)) > 255
        assert catalog.attach_photo(margherita, photo).ok
        assert catalog.find_pizza("Margherita").photo == str(photo)

    def test_missing_file(self, catalog, margherita, tmp_path):
        outcome = catalog.attach_photo(margherita, tmp_path / "absent.png")
        assert outcome.error is CatalogError.MISSING_FILE
        assert catalog.find_pizza("Margherita").photo is None

    @pytest.mark.parametrize("path", [None, "", "  "])
    def test_no_path(self, catalog, margherita, path):
        assert catalog.attach_photo(margherita, path).error is CatalogError.MISSING_FILE

    def test_unknown_pizza(self, catalog, tmp_path):
        assert catalog.attach_photo("Nope", tmp_path / "x.png").error is CatalogError.UNKNOWN_PIZZA
