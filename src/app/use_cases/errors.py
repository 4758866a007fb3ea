"""Stable error codes returned in Error.code by order and subscription use cases"""


class ErrorCode:
    UNAUTHENTICATED = "UNAUTHENTICATED"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    EMPTY_ORDER = "EMPTY_ORDER"
    ITEM_UNAVAILABLE = "ITEM_UNAVAILABLE"
    INVALID_STATE = "INVALID_STATE"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    PERSISTENCE_FAILURE = "PERSISTENCE_FAILURE"
