"""Human-readable messages for every error kind, for the presentation layer."""

from enum import Enum

from pizzeria.shared.errors import (
    CatalogError,
    EvaluationError,
    OrderError,
    RegistrationError,
    SessionError,
    StatisticsError,
)

_MESSAGES = {
    CatalogError.BLANK_NAME: "A name is required",
    CatalogError.NAME_TOO_LONG: "Names are limited to 100 characters",
    CatalogError.NAME_MISMATCH: "Only the capitalisation of a name can be corrected",
    CatalogError.INVALID_PRICE: "Price must be greater than zero",
    CatalogError.INVALID_TYPE: "Unknown pizza type",
    CatalogError.DUPLICATE_INGREDIENT: "An ingredient with this name already exists",
    CatalogError.UNKNOWN_INGREDIENT: "Unknown ingredient",
    CatalogError.DUPLICATE_PIZZA: "A pizza with this name already exists",
    CatalogError.UNKNOWN_PIZZA: "Unknown pizza",
    CatalogError.FORBIDDEN_INGREDIENT: "This ingredient is forbidden for this pizza type",
    CatalogError.ALREADY_PRESENT: "The pizza already contains this ingredient",
    CatalogError.NOT_PRESENT: "The pizza does not contain this ingredient",
    CatalogError.BELOW_MINIMAL_PRICE: "Sale price cannot be below the minimal price",
    CatalogError.MISSING_FILE: "Photo file not found",
    CatalogError.UNSUPPORTED_IMAGE: "Photo must be a .png, .jpg or .jpeg file",
    RegistrationError.MISSING_FIELDS: "All fields are required and age must be positive",
    RegistrationError.PASSWORD_TOO_SHORT: "Password is too short",
    RegistrationError.PASSWORD_TOO_LONG: "Password is too long",
    RegistrationError.INVALID_EMAIL: "Invalid email address",
    RegistrationError.DUPLICATE_EMAIL: "Email address already registered",
    SessionError.INVALID_CREDENTIALS: "Unknown email or wrong password",
    SessionError.NO_SESSION: "No client is logged in",
    OrderError.NO_SESSION: "No client is logged in",
    OrderError.UNKNOWN_ORDER: "Unknown order",
    OrderError.UNKNOWN_PIZZA: "Unknown pizza",
    OrderError.INVALID_QUANTITY: "Quantity must be at least 1",
    OrderError.NOT_MODIFIABLE: "Order can no longer be modified",
    OrderError.NOT_IN_ORDER: "The order does not contain this pizza",
    OrderError.EMPTY_ORDER: "Cannot validate an empty order",
    OrderError.INVALID_TRANSITION: "Order is not in a state allowing this action",
    OrderError.NOT_CANCELLABLE: "Only orders that are not validated yet can be cancelled",
    EvaluationError.NO_SESSION: "No client is logged in",
    EvaluationError.UNKNOWN_PIZZA: "Unknown pizza",
    EvaluationError.INVALID_RATING: "Rating must be between 0 and 5",
    EvaluationError.NOT_PURCHASED: "Only pizzas from processed orders can be rated",
    EvaluationError.ALREADY_RATED: "This pizza has already been rated",
    StatisticsError.UNKNOWN_PIZZA: "Unknown pizza",
    StatisticsError.UNKNOWN_ORDER: "Unknown order",
    StatisticsError.NOT_PROCESSED: "Order has not been processed",
}


def describe(error: Enum | None) -> str:
    """Return the message for an error kind, or an empty string for success."""
    if error is None:
        return ""
    return _MESSAGES.get(error, "Unknown error")
