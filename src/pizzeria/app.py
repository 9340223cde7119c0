"""Pizzeria: composition root wiring the registries for both roles.

The operator works with ``catalog``, ``ledger`` and ``statistics`` and can
save or load the whole registry; clients go through ``directory`` for
registration and sessions, ``desk`` for their orders, ``filter`` to browse
pizzas and ``evaluations`` to rate what they bought.

All components share the repositories of the active ``pizzeria`` domain
context, so callers push one (``pizzeria.domain_context()``) around use.
"""

from pizzeria.catalogue.catalog import Catalog
from pizzeria.catalogue.filters import PizzaFilter
from pizzeria.identity.directory import ClientDirectory
from pizzeria.ordering.desk import OrderDesk
from pizzeria.ordering.ledger import OrderLedger
from pizzeria.persistence import snapshot
from pizzeria.reviews.book import EvaluationBook
from pizzeria.statistics.sales import SalesStatistics
from pizzeria.utils.logging import get_logger

logger = get_logger(__name__)


class Pizzeria:
    def __init__(self):
        self.catalog = Catalog()
        self.directory = ClientDirectory()
        self.ledger = OrderLedger(self.catalog)
        self.desk = OrderDesk(self.directory, self.catalog, self.ledger)
        self.filter = PizzaFilter(self.catalog)
        self.evaluations = EvaluationBook(self.directory, self.catalog, self.ledger)
        self.statistics = SalesStatistics(self.catalog, self.directory, self.ledger)

    # -------------------------------------------------------------------
    # Operator
    # -------------------------------------------------------------------
    def process_pending_orders(self):
        return self.ledger.process_pending()

    def processed_orders(self, client=None):
        return self.ledger.processed(client)

    def save(self, path):
        return snapshot.save(path, self.ledger)

    def load(self, path):
        """Replace the registry with a saved one. Open sessions are closed."""
        snapshot.load(path, self.ledger)
        self.directory.close_all_sessions()
        self.filter.clear()

    # -------------------------------------------------------------------
    # Client
    # -------------------------------------------------------------------
    def register(self, email, password, personal_info):
        return self.directory.register(email, password, personal_info)

    def login(self, email, password):
        return self.directory.login(email, password)

    def logout(self, session):
        return self.directory.logout(session)

    def browse(self):
        """Pizzas matching the current filter, in catalog order."""
        return self.filter.apply()
