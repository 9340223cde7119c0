"""Domain events for the Order aggregate.

Events are versioned, immutable facts about an order's lifecycle:
started by a client, edited while in Created, validated by the client and
processed by the operator.
"""

from protean.fields import DateTime, Identifier, Integer, String

from pizzeria.domain import pizzeria


@pizzeria.event(part_of="Order")
class OrderStarted:
    __version__ = 1

    order_number = Integer(required=True)
    client_key = Identifier(required=True)
    created_at = DateTime(required=True)


@pizzeria.event(part_of="Order")
class PizzaAddedToOrder:
    __version__ = 1

    order_number = Integer(required=True)
    pizza_key = String(required=True)
    quantity = Integer(required=True)


@pizzeria.event(part_of="Order")
class PizzaRemovedFromOrder:
    __version__ = 1

    order_number = Integer(required=True)
    pizza_key = String(required=True)


@pizzeria.event(part_of="Order")
class OrderValidated:
    """The client confirmed the order; its pizza list is now frozen."""

    __version__ = 1

    order_number = Integer(required=True)
    client_key = Identifier(required=True)
    pizza_count = Integer(required=True)
    validated_at = DateTime(required=True)


@pizzeria.event(part_of="Order")
class OrderProcessed:
    """The operator prepared the order. Terminal."""

    __version__ = 1

    order_number = Integer(required=True)
    client_key = Identifier(required=True)
    processed_at = DateTime(required=True)
