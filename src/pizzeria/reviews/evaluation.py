"""Evaluation aggregate: a client's rating of a pizza they bought.

Evaluations are write-once: there are no methods that change one after
``submit``. Each evaluation gets its own generated identity; the
``EvaluationBook`` keeps one evaluation per client and pizza.
"""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Identifier, Integer, String, Text, ValueObject

from pizzeria.domain import pizzeria
from pizzeria.reviews.events import EvaluationSubmitted

MIN_SCORE = 0
MAX_SCORE = 5


@pizzeria.value_object(part_of="Evaluation")
class Rating:
    """A score from 0 to 5."""

    score = Integer(required=True)

    @invariant.post
    def score_must_be_in_range(self):
        if self.score is not None and (self.score < MIN_SCORE or self.score > MAX_SCORE):
            raise ValidationError({"score": [f"Rating must be between {MIN_SCORE} and {MAX_SCORE}"]})


@pizzeria.aggregate
class Evaluation:
    client_key = Identifier(required=True)
    pizza_key = String(required=True, max_length=100)
    rating = ValueObject(Rating, required=True)
    comment = Text()
    created_at = DateTime()

    @classmethod
    def submit(cls, client_key, pizza_key, score, comment=None, created_at=None):
        now = created_at or datetime.now(UTC)

        evaluation = cls(
            client_key=client_key,
            pizza_key=pizza_key,
            rating=Rating(score=score),
            comment=comment,
            created_at=now,
        )
        evaluation.raise_(
            EvaluationSubmitted(
                evaluation_id=str(evaluation.id),
                client_key=client_key,
                pizza_key=pizza_key,
                score=score,
                created_at=now,
            )
        )
        return evaluation

    @property
    def score(self) -> int:
        return self.rating.score
