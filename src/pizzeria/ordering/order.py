"""Order aggregate: a client's purchase of catalog pizzas.

State Machine (3 states):
    CREATED → VALIDATED → PROCESSED

Pizzas can be added and removed only while CREATED. Validation freezes the
pizza list and requires at least one pizza; only the operator's batch step
processes a VALIDATED order. There is no way back. Cancelling is not a
transition: a CREATED order is deleted outright by the ledger.

Orders reference pizzas by key and hold no prices: totals are derived on
demand from the catalog's current prices.
"""

from collections.abc import Callable
from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, HasMany, Identifier, Integer, String

from pizzeria.catalogue.pricing import add_prices
from pizzeria.domain import pizzeria
from pizzeria.ordering.events import (
    OrderProcessed,
    OrderStarted,
    OrderValidated,
    PizzaAddedToOrder,
    PizzaRemovedFromOrder,
)


class OrderStatus(Enum):
    CREATED = "Created"
    VALIDATED = "Validated"
    PROCESSED = "Processed"


# State machine transition map
_VALID_TRANSITIONS = {
    OrderStatus.CREATED: {OrderStatus.VALIDATED},
    OrderStatus.VALIDATED: {OrderStatus.PROCESSED},
    OrderStatus.PROCESSED: set(),  # Terminal
}


@pizzeria.entity(part_of="Order")
class OrderLine:
    """One pizza in an order. The same pizza may appear on several lines."""

    pizza_key = String(required=True, max_length=100)
    position = Integer(default=0)


@pizzeria.aggregate
class Order:
    number = Integer(identifier=True)
    client_key = Identifier(required=True)
    lines = HasMany(OrderLine)
    status = String(choices=OrderStatus, default=OrderStatus.CREATED.value)
    created_at = DateTime()
    validated_at = DateTime()
    processed_at = DateTime()

    @classmethod
    def create(cls, number, client_key, created_at=None):
        now = created_at or datetime.now(UTC)

        order = cls(
            number=number,
            client_key=client_key,
            status=OrderStatus.CREATED.value,
            created_at=now,
        )
        order.raise_(
            OrderStarted(
                order_number=number,
                client_key=client_key,
                created_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    @property
    def state(self) -> OrderStatus:
        return OrderStatus(self.status)

    @property
    def is_modifiable(self) -> bool:
        return self.state == OrderStatus.CREATED

    @property
    def pizza_keys(self) -> list[str]:
        """Pizza keys in the order they were added, repeats included."""
        return [line.pizza_key for line in sorted(self.lines, key=lambda line: line.position)]

    def count_of(self, pizza_key) -> int:
        return sum(1 for line in self.lines if line.pizza_key == pizza_key)

    def total_price(self, price_of: Callable[[str], float]) -> float:
        """Sum of the current sale prices of every pizza in the order."""
        return add_prices(price_of(key) for key in self.pizza_keys)

    def total_profit(self, profit_of: Callable[[str], float]) -> float:
        """Sum of (sale price - minimal price) over every pizza in the order."""
        return add_prices(profit_of(key) for key in self.pizza_keys)

    # -------------------------------------------------------------------
    # State transition helper
    # -------------------------------------------------------------------
    def _assert_can_transition(self, target_status):
        """Validate that the current state allows transition to target."""
        current = self.state
        if target_status not in _VALID_TRANSITIONS.get(current, set()):
            raise ValidationError({"status": [f"Cannot transition from {current.value} to {target_status.value}"]})

    # -------------------------------------------------------------------
    # Modification (only in CREATED state)
    # -------------------------------------------------------------------
    def add_pizza(self, pizza_key, quantity=1):
        if not self.is_modifiable:
            raise ValidationError({"status": ["Pizzas can only be added in Created state"]})
        if quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})

        position = max((line.position for line in self.lines), default=-1) + 1
        for offset in range(quantity):
            self.add_lines(OrderLine(pizza_key=pizza_key, position=position + offset))

        self.raise_(
            PizzaAddedToOrder(
                order_number=self.number,
                pizza_key=pizza_key,
                quantity=quantity,
            )
        )

    def remove_pizza(self, pizza_key):
        """Remove one occurrence of a pizza (the earliest added)."""
        if not self.is_modifiable:
            raise ValidationError({"status": ["Pizzas can only be removed in Created state"]})

        line = next(
            (line for line in sorted(self.lines, key=lambda line: line.position) if line.pizza_key == pizza_key),
            None,
        )
        if line is None:
            raise ValidationError({"lines": [f"Order does not contain {pizza_key}"]})

        self.remove_lines(line)

        self.raise_(PizzaRemovedFromOrder(order_number=self.number, pizza_key=pizza_key))

    # -------------------------------------------------------------------
    # Lifecycle transitions
    # -------------------------------------------------------------------
    def validate(self):
        """Freeze the order. Fails when already validated or empty."""
        self._assert_can_transition(OrderStatus.VALIDATED)
        if not self.lines:
            raise ValidationError({"lines": ["Cannot validate an empty order"]})

        now = datetime.now(UTC)
        self.status = OrderStatus.VALIDATED.value
        self.validated_at = now

        self.raise_(
            OrderValidated(
                order_number=self.number,
                client_key=self.client_key,
                pizza_count=len(self.lines),
                validated_at=now,
            )
        )

    def process(self):
        """Mark a validated order as prepared by the operator."""
        self._assert_can_transition(OrderStatus.PROCESSED)

        now = datetime.now(UTC)
        self.status = OrderStatus.PROCESSED.value
        self.processed_at = now

        self.raise_(
            OrderProcessed(
                order_number=self.number,
                client_key=self.client_key,
                processed_at=now,
            )
        )
