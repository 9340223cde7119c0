"""Domain events for the Evaluation aggregate."""

from protean.fields import DateTime, Identifier, Integer, String

from pizzeria.domain import pizzeria


@pizzeria.event(part_of="Evaluation")
class EvaluationSubmitted:
    __version__ = 1

    evaluation_id = Identifier(required=True)
    client_key = Identifier(required=True)
    pizza_key = String(required=True)
    score = Integer(required=True)
    created_at = DateTime(required=True)
