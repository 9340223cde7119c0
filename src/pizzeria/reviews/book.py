"""EvaluationBook: pizza ratings, gated by purchase history.

A client may rate a pizza only after one of their processed orders contained
it, and only once. Averages are computed over all evaluations of a pizza; a
pizza nobody rated yet has no average (``None``), which is distinct from an
unknown pizza (``UNKNOWN_PIZZA``).
"""

import threading

from protean.utils.globals import current_domain

from pizzeria.catalogue.catalog import Catalog
from pizzeria.identity.client import client_key
from pizzeria.identity.directory import ClientDirectory
from pizzeria.ordering.ledger import OrderLedger
from pizzeria.reviews.evaluation import MAX_SCORE, MIN_SCORE, Evaluation
from pizzeria.shared.errors import EvaluationError
from pizzeria.shared.outcome import Outcome
from pizzeria.utils.logging import get_logger

logger = get_logger(__name__)


def _valid_score(rating):
    return isinstance(rating, int) and not isinstance(rating, bool) and MIN_SCORE <= rating <= MAX_SCORE


class EvaluationBook:
    def __init__(self, directory: ClientDirectory, catalog: Catalog, ledger: OrderLedger):
        self._lock = threading.RLock()
        self._directory = directory
        self._catalog = catalog
        self._ledger = ledger

    def rate(self, session, pizza, rating, comment=None) -> Outcome:
        if not self._directory.is_active(session):
            return self._reject(EvaluationError.NO_SESSION, pizza=pizza)
        found = self._catalog.find_pizza(pizza)
        if found is None:
            return self._reject(EvaluationError.UNKNOWN_PIZZA, pizza=pizza)
        if not _valid_score(rating):
            return self._reject(EvaluationError.INVALID_RATING, pizza=found.key, rating=rating)
        if not self.has_purchased(session.client_key, found.key):
            return self._reject(EvaluationError.NOT_PURCHASED, client=session.client_key, pizza=found.key)

        repo = current_domain.repository_for(Evaluation)
        with self._lock:
            if self.find(session.client_key, found.key) is not None:
                return self._reject(EvaluationError.ALREADY_RATED, client=session.client_key, pizza=found.key)

            evaluation = Evaluation.submit(
                client_key=session.client_key,
                pizza_key=found.key,
                score=rating,
                comment=comment,
            )
            repo.add(evaluation)

        logger.info("Pizza rated", client=session.client_key, pizza=found.key, score=rating)
        return Outcome.success(evaluation)

    def has_purchased(self, client, pizza_key) -> bool:
        return any(pizza_key in order.pizza_keys for order in self._ledger.processed(client))

    def find(self, client, pizza_key) -> Evaluation | None:
        items = (
            current_domain.repository_for(Evaluation)
            ._dao.query.filter(client_key=client_key(client), pizza_key=pizza_key)
            .all()
            .items
        )
        return items[0] if items else None

    def evaluations_for(self, pizza) -> Outcome:
        """A pizza's evaluations, oldest first."""
        found = self._catalog.find_pizza(pizza)
        if found is None:
            return Outcome.failure(EvaluationError.UNKNOWN_PIZZA)
        items = current_domain.repository_for(Evaluation)._dao.query.filter(pizza_key=found.key).all().items
        return Outcome.success(sorted(items, key=lambda e: (e.created_at, e.client_key)))

    def average_rating(self, pizza) -> Outcome:
        outcome = self.evaluations_for(pizza)
        if not outcome.ok:
            return outcome
        scores = [e.score for e in outcome.value]
        if not scores:
            return Outcome.success(None)
        return Outcome.success(sum(scores) / len(scores))

    @staticmethod
    def _reject(error, **details):
        logger.debug("Evaluation rejected", error=error.value, **details)
        return Outcome.failure(error)
