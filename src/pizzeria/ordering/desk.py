"""OrderDesk: the client-facing ordering counter.

Every operation takes the caller's ``Session`` and acts on that client's
orders only. A missing or closed session is reported as ``NO_SESSION``
before anything else is looked at; an order that does not exist or belongs to
another client is ``UNKNOWN_ORDER``.
"""

from protean.exceptions import ValidationError

from pizzeria.catalogue.catalog import Catalog
from pizzeria.identity.directory import ClientDirectory
from pizzeria.ordering.ledger import OrderLedger
from pizzeria.ordering.order import Order
from pizzeria.shared.errors import OrderError
from pizzeria.shared.outcome import Outcome
from pizzeria.utils.logging import get_logger

logger = get_logger(__name__)


class OrderDesk:
    def __init__(self, directory: ClientDirectory, catalog: Catalog, ledger: OrderLedger):
        self._directory = directory
        self._catalog = catalog
        self._ledger = ledger

    def start_order(self, session) -> Outcome:
        if not self._directory.is_active(session):
            return self._reject("start_order", OrderError.NO_SESSION)

        return Outcome.success(self._ledger.open(session.client_key))

    def add_pizza(self, session, order, pizza, quantity=1) -> Outcome:
        """Add ``quantity`` occurrences of a catalog pizza to a Created order."""
        if not self._directory.is_active(session):
            return self._reject("add_pizza", OrderError.NO_SESSION)
        found = self._own_order(session, order)
        if found is None:
            return self._reject("add_pizza", OrderError.UNKNOWN_ORDER, order=order)
        if not isinstance(quantity, int) or isinstance(quantity, bool) or quantity <= 0:
            return self._reject("add_pizza", OrderError.INVALID_QUANTITY, quantity=quantity)
        selected = self._catalog.find_pizza(pizza)
        if selected is None:
            return self._reject("add_pizza", OrderError.UNKNOWN_PIZZA, pizza=pizza)
        if not found.is_modifiable:
            return self._reject("add_pizza", OrderError.NOT_MODIFIABLE, order_number=found.number)

        found.add_pizza(selected.key, quantity)
        self._ledger.save(found)

        logger.info("Pizza added to order", order_number=found.number, pizza=selected.key, quantity=quantity)
        return Outcome.success(found)

    def remove_pizza(self, session, order, pizza) -> Outcome:
        """Remove one occurrence of a pizza from a Created order."""
        if not self._directory.is_active(session):
            return self._reject("remove_pizza", OrderError.NO_SESSION)
        found = self._own_order(session, order)
        if found is None:
            return self._reject("remove_pizza", OrderError.UNKNOWN_ORDER, order=order)
        selected = self._catalog.find_pizza(pizza)
        if selected is None:
            return self._reject("remove_pizza", OrderError.UNKNOWN_PIZZA, pizza=pizza)
        if not found.is_modifiable:
            return self._reject("remove_pizza", OrderError.NOT_MODIFIABLE, order_number=found.number)

        try:
            found.remove_pizza(selected.key)
        except ValidationError:
            return self._reject("remove_pizza", OrderError.NOT_IN_ORDER, order_number=found.number, pizza=selected.key)
        self._ledger.save(found)

        logger.info("Pizza removed from order", order_number=found.number, pizza=selected.key)
        return Outcome.success(found)

    def validate(self, session, order) -> Outcome:
        """Validate the order and hand it to the ledger for processing."""
        if not self._directory.is_active(session):
            return self._reject("validate", OrderError.NO_SESSION)
        found = self._own_order(session, order)
        if found is None:
            return self._reject("validate", OrderError.UNKNOWN_ORDER, order=order)

        return self._ledger.receive(found)

    def cancel(self, session, order) -> Outcome:
        """Delete a Created order. Validated and processed orders stay."""
        if not self._directory.is_active(session):
            return self._reject("cancel", OrderError.NO_SESSION)
        found = self._own_order(session, order)
        if found is None:
            return self._reject("cancel", OrderError.UNKNOWN_ORDER, order=order)
        if not found.is_modifiable:
            return self._reject("cancel", OrderError.NOT_CANCELLABLE, order_number=found.number)

        self._ledger.discard(found)
        return Outcome.success()

    def pending_orders(self, session) -> Outcome:
        """The client's orders still being built, oldest first."""
        if not self._directory.is_active(session):
            return self._reject("pending_orders", OrderError.NO_SESSION)
        orders = self._ledger.orders_of(session.client_key)
        return Outcome.success([o for o in orders if o.is_modifiable])

    def past_orders(self, session) -> Outcome:
        """The client's validated and processed orders, oldest first."""
        if not self._directory.is_active(session):
            return self._reject("past_orders", OrderError.NO_SESSION)
        orders = self._ledger.orders_of(session.client_key)
        return Outcome.success([o for o in orders if not o.is_modifiable])

    def total_price(self, session, order) -> Outcome:
        if not self._directory.is_active(session):
            return self._reject("total_price", OrderError.NO_SESSION)
        found = self._own_order(session, order)
        if found is None:
            return self._reject("total_price", OrderError.UNKNOWN_ORDER, order=order)
        return Outcome.success(self._ledger.total_price(found))

    def _own_order(self, session, order) -> Order | None:
        found = self._ledger.find(order)
        if found is None or found.client_key != session.client_key:
            return None
        return found

    @staticmethod
    def _reject(operation, error, **details):
        logger.debug("Order operation rejected", operation=operation, error=error.value, **details)
        return Outcome.failure(error)
