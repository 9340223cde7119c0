"""Registry snapshots: save and restore the whole pizzeria state.

A snapshot is one JSON document written to a ``.dat`` file:

    {
        "schema": "pizzeria.registry",
        "version": 1,
        "ingredients": [...],
        "restrictions": [...],
        "pizzas": [...],
        "clients": [...],
        "orders": [...],
        "evaluations": [...],
        "order_sequence": 12
    }

Records reference each other by name: pizzas list their ingredients by name,
orders their pizzas by name and their client by email. Whether an order is
awaiting processing or processed is carried by its ``status``. Open sessions
are not part of a snapshot.

Loading replaces the current registries entirely and resumes order numbering
after the saved sequence.
"""

import json
from datetime import datetime
from pathlib import Path

from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from pizzeria.catalogue.ingredient import Ingredient, ingredient_key
from pizzeria.catalogue.pizza import Pizza, PizzaType, Topping, pizza_key
from pizzeria.catalogue.restriction import Restriction, restriction_key
from pizzeria.config import get_settings
from pizzeria.identity.client import Client, PersonalInfo, client_key
from pizzeria.ordering.ledger import OrderLedger
from pizzeria.ordering.order import Order, OrderLine
from pizzeria.reviews.evaluation import Evaluation, Rating
from pizzeria.utils.logging import get_logger, log_context

logger = get_logger(__name__)

SCHEMA = "pizzeria.registry"
VERSION = 1


class SnapshotError(Exception):
    """A snapshot could not be written or read back."""


# ---------------------------------------------------------------------------
# Timestamps
# ---------------------------------------------------------------------------
def _stamp(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def _unstamp(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value is not None else None


# ---------------------------------------------------------------------------
# Dumping
# ---------------------------------------------------------------------------
def _all(aggregate_cls):
    return current_domain.repository_for(aggregate_cls)._dao.query.all().items


def _names_by_key(aggregate_cls):
    return {item.key: item.name for item in _all(aggregate_cls)}


def dump_registry(ledger: OrderLedger) -> dict:
    """Build the snapshot document for the current registries."""
    ingredient_names = _names_by_key(Ingredient)
    pizza_names = _names_by_key(Pizza)
    emails = {c.key: c.email for c in _all(Client)}

    ingredients = [
        {
            "name": i.name,
            "price": i.price,
            "created_at": _stamp(i.created_at),
        }
        for i in sorted(_all(Ingredient), key=lambda i: i.key)
    ]
    restrictions = [
        {
            "pizza_type": r.pizza_type,
            "ingredient": ingredient_names.get(r.ingredient_key, r.ingredient_key),
        }
        for r in sorted(_all(Restriction), key=lambda r: r.key)
    ]
    pizzas = [
        {
            "name": p.name,
            "pizza_type": p.pizza_type,
            "ingredients": [ingredient_names.get(k, k) for k in p.topping_keys],
            "sale_price": p.sale_price,
            "photo": p.photo,
            "created_at": _stamp(p.created_at),
        }
        for p in sorted(_all(Pizza), key=lambda p: (p.created_at, p.key))
    ]
    clients = [
        {
            "email": c.email,
            "password": c.password,
            "personal_info": {
                "last_name": c.personal_info.last_name,
                "first_name": c.personal_info.first_name,
                "address": c.personal_info.address,
                "age": c.personal_info.age,
            },
            "registered_at": _stamp(c.registered_at),
        }
        for c in sorted(_all(Client), key=lambda c: (c.registered_at, c.key))
    ]
    orders = [
        {
            "number": o.number,
            "client": emails.get(o.client_key, o.client_key),
            "pizzas": [pizza_names.get(k, k) for k in o.pizza_keys],
            "status": o.status,
            "created_at": _stamp(o.created_at),
            "validated_at": _stamp(o.validated_at),
            "processed_at": _stamp(o.processed_at),
        }
        for o in sorted(_all(Order), key=lambda o: o.number)
    ]
    evaluations = [
        {
            "client": emails.get(e.client_key, e.client_key),
            "pizza": pizza_names.get(e.pizza_key, e.pizza_key),
            "score": e.score,
            "comment": e.comment,
            "created_at": _stamp(e.created_at),
        }
        for e in sorted(_all(Evaluation), key=lambda e: (e.created_at, e.client_key, e.pizza_key))
    ]

    return {
        "schema": SCHEMA,
        "version": VERSION,
        "ingredients": ingredients,
        "restrictions": restrictions,
        "pizzas": pizzas,
        "clients": clients,
        "orders": orders,
        "evaluations": evaluations,
        "order_sequence": ledger.last_number,
    }


# ---------------------------------------------------------------------------
# Restoring
# ---------------------------------------------------------------------------
def clear_registry():
    """Drop every stored record, child entities included."""
    for _, provider in current_domain.providers.items():
        provider._data_reset()


def _check_header(document):
    if not isinstance(document, dict) or document.get("schema") != SCHEMA:
        raise SnapshotError("Not a pizzeria registry snapshot")
    version = document.get("version")
    if not isinstance(version, int) or version < 1:
        raise SnapshotError(f"Invalid snapshot version: {version!r}")
    if version > VERSION:
        raise SnapshotError(f"Snapshot version {version} is newer than supported version {VERSION}")


def _build_records(document):
    records = []

    for item in document["ingredients"]:
        records.append(
            Ingredient(
                key=ingredient_key(item["name"]),
                name=item["name"],
                price=item["price"],
                created_at=_unstamp(item["created_at"]),
            )
        )
    for item in document["restrictions"]:
        kind = PizzaType(item["pizza_type"])
        key = ingredient_key(item["ingredient"])
        records.append(
            Restriction(
                key=restriction_key(kind, key),
                pizza_type=kind.value,
                ingredient_key=key,
            )
        )
    for item in document["pizzas"]:
        records.append(
            Pizza(
                key=pizza_key(item["name"]),
                name=item["name"],
                pizza_type=item["pizza_type"],
                toppings=[
                    Topping(ingredient_key=ingredient_key(name), position=position)
                    for position, name in enumerate(item["ingredients"])
                ],
                sale_price=item["sale_price"],
                photo=item["photo"],
                created_at=_unstamp(item["created_at"]),
            )
        )
    for item in document["clients"]:
        records.append(
            Client(
                key=client_key(item["email"]),
                email=item["email"],
                password=item["password"],
                personal_info=PersonalInfo(**item["personal_info"]),
                registered_at=_unstamp(item["registered_at"]),
            )
        )
    for item in document["orders"]:
        records.append(
            Order(
                number=item["number"],
                client_key=client_key(item["client"]),
                lines=[
                    OrderLine(pizza_key=pizza_key(name), position=position)
                    for position, name in enumerate(item["pizzas"])
                ],
                status=item["status"],
                created_at=_unstamp(item["created_at"]),
                validated_at=_unstamp(item["validated_at"]),
                processed_at=_unstamp(item["processed_at"]),
            )
        )
    rated = set()
    for item in document["evaluations"]:
        client, pizza = client_key(item["client"]), pizza_key(item["pizza"])
        if (client, pizza) in rated:
            raise ValueError(f"{client} rated {pizza} more than once")
        rated.add((client, pizza))
        records.append(
            Evaluation(
                client_key=client,
                pizza_key=pizza,
                rating=Rating(score=item["score"]),
                comment=item["comment"],
                created_at=_unstamp(item["created_at"]),
            )
        )

    return records


def restore_registry(document: dict, ledger: OrderLedger):
    """Replace the current registries with the content of ``document``.

    The document is fully decoded before anything is cleared, so a malformed
    snapshot leaves the current state untouched.
    """
    _check_header(document)
    try:
        records = _build_records(document)
        sequence = int(document["order_sequence"])
    except (AttributeError, KeyError, TypeError, ValueError, ValidationError) as exc:
        raise SnapshotError(f"Malformed snapshot: {exc}") from exc

    clear_registry()
    for record in records:
        current_domain.repository_for(type(record)).add(record)

    highest = max((r.number for r in records if isinstance(r, Order)), default=0)
    ledger.resume_after(max(sequence, highest))


# ---------------------------------------------------------------------------
# Files
# ---------------------------------------------------------------------------
def _checked_path(path) -> Path:
    location = Path(path)
    suffix = get_settings().snapshot_suffix
    if location.suffix.lower() != suffix:
        raise SnapshotError(f"Snapshot files must end in {suffix}: {location}")
    return location


def save(path, ledger: OrderLedger) -> Path:
    location = _checked_path(path)
    document = dump_registry(ledger)
    with log_context(snapshot=str(location)):
        try:
            location.write_text(json.dumps(document, indent=2), encoding="utf-8")
        except OSError as exc:
            raise SnapshotError(f"Cannot write snapshot {location}: {exc}") from exc

        logger.info(
            "Snapshot saved",
            pizzas=len(document["pizzas"]),
            clients=len(document["clients"]),
            orders=len(document["orders"]),
        )
    return location


def load(path, ledger: OrderLedger):
    location = _checked_path(path)
    try:
        document = json.loads(location.read_text(encoding="utf-8"))
    except OSError as exc:
        raise SnapshotError(f"Cannot read snapshot {location}: {exc}") from exc
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise SnapshotError(f"Snapshot {location} is not valid JSON: {exc}") from exc

    with log_context(snapshot=str(location)):
        restore_registry(document, ledger)
        logger.info("Snapshot loaded", order_sequence=ledger.last_number)
