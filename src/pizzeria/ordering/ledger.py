"""OrderLedger: the operator's view of orders, and the order-number authority.

Every order lives in the Order repository from the moment a client starts
it; the ledger splits them by status into orders awaiting processing
(VALIDATED) and processed orders (PROCESSED). Order numbers come from a
counter owned by the ledger and incremented under its lock, so they are
unique and strictly increasing. After a snapshot load the counter resumes
past the highest loaded number.
"""

import threading

from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain

from pizzeria.catalogue.catalog import Catalog
from pizzeria.catalogue.pricing import profit
from pizzeria.identity.client import client_key
from pizzeria.ordering.order import Order, OrderStatus
from pizzeria.shared.errors import OrderError
from pizzeria.shared.outcome import Outcome
from pizzeria.utils.logging import get_logger

logger = get_logger(__name__)


def _chronological(orders):
    return sorted(orders, key=lambda o: (o.created_at, o.number))


class OrderLedger:
    def __init__(self, catalog: Catalog):
        self._lock = threading.RLock()
        self._catalog = catalog
        self._last_number = 0

    # -------------------------------------------------------------------
    # Numbering
    # -------------------------------------------------------------------
    @property
    def last_number(self) -> int:
        return self._last_number

    def next_number(self) -> int:
        with self._lock:
            self._last_number += 1
            return self._last_number

    def resume_after(self, number: int):
        """Continue numbering after ``number`` (never moves the counter back)."""
        with self._lock:
            self._last_number = max(self._last_number, number)

    # -------------------------------------------------------------------
    # Storage
    # -------------------------------------------------------------------
    def open(self, client) -> Order:
        """Start a new, empty order for the client with the given email key."""
        with self._lock:
            order = Order.create(number=self.next_number(), client_key=client)
            current_domain.repository_for(Order).add(order)

        logger.info("Order started", order_number=order.number, client=client)
        return order

    def find(self, number) -> Order | None:
        if isinstance(number, Order):
            number = number.number
        if not isinstance(number, int) or isinstance(number, bool):
            return None
        try:
            return current_domain.repository_for(Order).get(number)
        except ObjectNotFoundError:
            return None

    def save(self, order: Order):
        with self._lock:
            current_domain.repository_for(Order).add(order)

    def discard(self, order: Order):
        with self._lock:
            current_domain.repository_for(Order)._dao.delete(order)

        logger.info("Order discarded", order_number=order.number, client=order.client_key)

    def all_orders(self) -> list[Order]:
        return _chronological(current_domain.repository_for(Order)._dao.query.all().items)

    def orders_of(self, email) -> list[Order]:
        orders = current_domain.repository_for(Order)._dao.query.filter(client_key=client_key(email)).all().items
        return _chronological(orders)

    # -------------------------------------------------------------------
    # Validation hand-over and processing
    # -------------------------------------------------------------------
    def receive(self, order: Order) -> Outcome:
        """Validate a CREATED order and take it in for processing."""
        with self._lock:
            if order.is_modifiable and not order.lines:
                return self._reject("receive", OrderError.EMPTY_ORDER, order_number=order.number)
            try:
                order.validate()
            except ValidationError:
                return self._reject("receive", OrderError.INVALID_TRANSITION, order_number=order.number)
            current_domain.repository_for(Order).add(order)

        logger.info("Order validated", order_number=order.number, client=order.client_key)
        return Outcome.success(order)

    def pending(self) -> list[Order]:
        """Orders awaiting processing, oldest first."""
        with self._lock:
            orders = (
                current_domain.repository_for(Order)._dao.query.filter(status=OrderStatus.VALIDATED.value).all().items
            )
        return _chronological(orders)

    def process(self, order) -> Outcome:
        """Process a single validated order."""
        with self._lock:
            found = self.find(order)
            if found is None:
                return self._reject("process", OrderError.UNKNOWN_ORDER, order=order)
            try:
                found.process()
            except ValidationError:
                return self._reject("process", OrderError.INVALID_TRANSITION, order_number=found.number)
            current_domain.repository_for(Order).add(found)

        logger.info("Order processed", order_number=found.number, client=found.client_key)
        return Outcome.success(found)

    def process_pending(self) -> list[Order]:
        """Process every order awaiting processing and return that batch."""
        repo = current_domain.repository_for(Order)
        with self._lock:
            batch = self.pending()
            for order in batch:
                order.process()
                repo.add(order)

        logger.info("Pending orders processed", count=len(batch), order_numbers=[o.number for o in batch])
        return batch

    def processed(self, client=None) -> list[Order]:
        """Processed orders, oldest first; restricted to one client's email when given.

        Read under the ledger lock, so a batch being processed is seen whole or
        not at all.
        """
        filters = {"status": OrderStatus.PROCESSED.value}
        if client is not None:
            filters["client_key"] = client_key(client)
        with self._lock:
            orders = current_domain.repository_for(Order)._dao.query.filter(**filters).all().items
        return _chronological(orders)

    # -------------------------------------------------------------------
    # Derived amounts
    # -------------------------------------------------------------------
    def total_price(self, order: Order) -> float:
        return order.total_price(self.pizza_price)

    def total_profit(self, order: Order) -> float:
        return order.total_profit(self.pizza_profit)

    def pizza_price(self, key) -> float:
        pizza = self._catalog.find_pizza(key)
        return self._catalog.price_of(pizza) if pizza is not None else 0.0

    def pizza_profit(self, key) -> float:
        pizza = self._catalog.find_pizza(key)
        if pizza is None:
            return 0.0
        floor = self._catalog.minimal_price_of(pizza)
        return profit(pizza.effective_price(floor), floor)

    @staticmethod
    def _reject(operation, error, **details):
        logger.debug("Ledger operation rejected", operation=operation, error=error.value, **details)
        return Outcome.failure(error)
