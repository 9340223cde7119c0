"""Pizzeria bounded context: catalogue, clients, orders, evaluations and sales.

The operator (pizzaiolo) curates ingredients, pizzas and per-type ingredient
restrictions; clients register, build orders and rate what they bought; the
operator processes validated orders and reads sales statistics.
"""

from protean.domain import Domain

from pizzeria.utils.logging import configure_logging, get_logger

# Configure logging for the application
configure_logging()

# Get logger for this module
logger = get_logger(__name__)

# Domain Composition Root
pizzeria = Domain(name="pizzeria")
