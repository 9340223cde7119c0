"""SalesStatistics: read-only aggregations over processed orders.

Only PROCESSED orders count. Amounts use the catalog's current prices, so
repricing an ingredient or a pizza changes past profits too. With no
processed orders every aggregate is zero or empty.

Per-client aggregates are keyed by the client's email key and carry the
client's personal information; clients without processed orders are absent.
"""

from collections import Counter
from dataclasses import dataclass

from pizzeria.catalogue.catalog import Catalog
from pizzeria.catalogue.pizza import Pizza
from pizzeria.catalogue.pricing import add_prices
from pizzeria.identity.client import PersonalInfo
from pizzeria.identity.directory import ClientDirectory
from pizzeria.ordering.ledger import OrderLedger
from pizzeria.ordering.order import OrderStatus
from pizzeria.shared.errors import StatisticsError
from pizzeria.shared.outcome import Outcome


@dataclass(frozen=True)
class ClientSales:
    client_key: str
    personal_info: PersonalInfo | None
    pizza_count: int
    profit: float


class SalesStatistics:
    def __init__(self, catalog: Catalog, directory: ClientDirectory, ledger: OrderLedger):
        self._catalog = catalog
        self._directory = directory
        self._ledger = ledger

    # -------------------------------------------------------------------
    # Per pizza
    # -------------------------------------------------------------------
    def pizza_profit(self, pizza) -> Outcome:
        """Sale price minus minimal price, independent of how often it sold."""
        found = self._catalog.find_pizza(pizza)
        if found is None:
            return Outcome.failure(StatisticsError.UNKNOWN_PIZZA)
        return Outcome.success(self._ledger.pizza_profit(found.key))

    def profit_per_pizza(self) -> dict[str, float]:
        return {p.key: self._ledger.pizza_profit(p.key) for p in self._catalog.pizzas()}

    def purchase_counts(self) -> Counter:
        counts = Counter()
        for order in self._ledger.processed():
            counts.update(order.pizza_keys)
        return counts

    def purchase_count(self, pizza) -> Outcome:
        """Occurrences of the pizza across all processed orders."""
        found = self._catalog.find_pizza(pizza)
        if found is None:
            return Outcome.failure(StatisticsError.UNKNOWN_PIZZA)
        return Outcome.success(self.purchase_counts()[found.key])

    def ranking(self) -> list[tuple[Pizza, int]]:
        """Catalog pizzas by purchase count, most bought first.

        Equal counts keep catalog insertion order.
        """
        counts = self.purchase_counts()
        pizzas = self._catalog.pizzas()
        return sorted(((p, counts[p.key]) for p in pizzas), key=lambda pair: pair[1], reverse=True)

    # -------------------------------------------------------------------
    # Per order
    # -------------------------------------------------------------------
    def order_profit(self, order) -> Outcome:
        found = self._ledger.find(order)
        if found is None:
            return Outcome.failure(StatisticsError.UNKNOWN_ORDER)
        if found.state != OrderStatus.PROCESSED:
            return Outcome.failure(StatisticsError.NOT_PROCESSED)
        return Outcome.success(self._ledger.total_profit(found))

    def total_profit(self) -> float:
        return add_prices(self._ledger.total_profit(o) for o in self._ledger.processed())

    # -------------------------------------------------------------------
    # Per client
    # -------------------------------------------------------------------
    def client_sales(self) -> list[ClientSales]:
        counts: dict[str, int] = {}
        profits: dict[str, list[float]] = {}
        for order in self._ledger.processed():
            counts[order.client_key] = counts.get(order.client_key, 0) + len(order.pizza_keys)
            profits.setdefault(order.client_key, []).append(self._ledger.total_profit(order))

        sales = []
        for key, count in counts.items():
            client = self._directory.find(key)
            sales.append(
                ClientSales(
                    client_key=key,
                    personal_info=client.personal_info if client is not None else None,
                    pizza_count=count,
                    profit=add_prices(profits[key]),
                )
            )
        return sorted(sales, key=lambda s: s.client_key)

    def pizzas_per_client(self) -> dict[str, int]:
        return {s.client_key: s.pizza_count for s in self.client_sales()}

    def profit_per_client(self) -> dict[str, float]:
        return {s.client_key: s.profit for s in self.client_sales()}

    def client_infos(self) -> list[PersonalInfo]:
        """Personal information of every registered client."""
        return [c.personal_info for c in self._directory.clients()]
