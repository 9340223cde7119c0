import pytest
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def pizzeria_bed():
    from pizzeria.domain import pizzeria

    bed = DomainFixture(pizzeria)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(pizzeria_bed):
    """Push domain context before each test, cleanup after."""
    with pizzeria_bed.domain_context():
        yield

        from protean import current_domain

        for _, provider in current_domain.providers.items():
            provider._data_reset()

        current_domain.event_store.store._data_reset()


@pytest.fixture
def shop():
    from pizzeria.app import Pizzeria

    return Pizzeria()


@pytest.fixture
def catalog(shop):
    return shop.catalog


@pytest.fixture
def directory(shop):
    return shop.directory


@pytest.fixture
def ledger(shop):
    return shop.ledger


@pytest.fixture
def desk(shop):
    return shop.desk


@pytest.fixture
def book(shop):
    return shop.evaluations


@pytest.fixture
def statistics(shop):
    return shop.statistics


@pytest.fixture
def margherita(catalog):
    """Cheese 2.0 + Tomato 1.0 on a vegetarian pizza: minimal price 4.2."""
    catalog.create_ingredient("Cheese", 2.0)
    catalog.create_ingredient("Tomato", 1.0)
    pizza = catalog.create_pizza("Margherita", "Vegetarian").value
    catalog.add_ingredient_to_pizza(pizza, "Cheese")
    catalog.add_ingredient_to_pizza(pizza, "Tomato")
    return catalog.find_pizza("Margherita")


@pytest.fixture
def alice_info():
    return {"last_name": "Martin", "first_name": "Alice", "address": "1 rue des Lilas, Nancy", "age": 31}


@pytest.fixture
def alice(directory, alice_info):
    return directory.register("alice@example.com", "correct-horse", alice_info).value


@pytest.fixture
def alice_session(directory, alice):
    return directory.login("alice@example.com", "correct-horse").value
