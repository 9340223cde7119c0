"""Closed sets of error kinds, one enumeration per component."""

from enum import Enum


class CatalogError(Enum):
    BLANK_NAME = "Blank_Name"
    NAME_TOO_LONG = "Name_Too_Long"
    NAME_MISMATCH = "Name_Mismatch"
    INVALID_PRICE = "Invalid_Price"
    INVALID_TYPE = "Invalid_Type"
    DUPLICATE_INGREDIENT = "Duplicate_Ingredient"
    UNKNOWN_INGREDIENT = "Unknown_Ingredient"
    DUPLICATE_PIZZA = "Duplicate_Pizza"
    UNKNOWN_PIZZA = "Unknown_Pizza"
    FORBIDDEN_INGREDIENT = "Forbidden_Ingredient"
    ALREADY_PRESENT = "Already_Present"
    NOT_PRESENT = "Not_Present"
    BELOW_MINIMAL_PRICE = "Below_Minimal_Price"
    MISSING_FILE = "Missing_File"
    UNSUPPORTED_IMAGE = "Unsupported_Image"


class RegistrationError(Enum):
    MISSING_FIELDS = "Missing_Fields"
    PASSWORD_TOO_SHORT = "Password_Too_Short"
    PASSWORD_TOO_LONG = "Password_Too_Long"
    INVALID_EMAIL = "Invalid_Email"
    DUPLICATE_EMAIL = "Duplicate_Email"


class SessionError(Enum):
    INVALID_CREDENTIALS = "Invalid_Credentials"
    NO_SESSION = "No_Session"


class OrderError(Enum):
    NO_SESSION = "No_Session"
    UNKNOWN_ORDER = "Unknown_Order"
    UNKNOWN_PIZZA = "Unknown_Pizza"
    INVALID_QUANTITY = "Invalid_Quantity"
    NOT_MODIFIABLE = "Not_Modifiable"
    NOT_IN_ORDER = "Not_In_Order"
    EMPTY_ORDER = "Empty_Order"
    INVALID_TRANSITION = "Invalid_Transition"
    NOT_CANCELLABLE = "Not_Cancellable"


class EvaluationError(Enum):
    NO_SESSION = "No_Session"
    UNKNOWN_PIZZA = "Unknown_Pizza"
    INVALID_RATING = "Invalid_Rating"
    NOT_PURCHASED = "Not_Purchased"
    ALREADY_RATED = "Already_Rated"


class StatisticsError(Enum):
    UNKNOWN_PIZZA = "Unknown_Pizza"
    UNKNOWN_ORDER = "Unknown_Order"
    NOT_PROCESSED = "Not_Processed"
