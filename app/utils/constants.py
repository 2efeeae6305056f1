# Application Constants
class AppConstants:
    # Pagination
    DEFAULT_PAGE = 1
    DEFAULT_PAGE_SIZE = 10
    MAX_PAGE_SIZE = 50

    # Validation Limits
    MIN_PASSWORD_LENGTH = 6
    MAX_REGISTRATION_QUANTITY = 10
    MIN_POLL_OPTIONS = 2
    MAX_POLL_OPTIONS = 10
    MIN_SEARCH_LENGTH = 2

    # Financial
    CURRENCY_DECIMAL_PLACES = 2


# API Response Messages
class Messages:
    INVALID_CREDENTIALS = "Email or password is incorrect"
    TOKEN_EXPIRED = "Token expired"
    ALREADY_REGISTERED = "Already registered"
    INSUFFICIENT_TICKETS = "Insufficient tickets"
    PAYMENT_FAILED = "Payment failed"
    REFUND_NOT_ELIGIBLE = "Refund not eligible"
    ALREADY_VOTED = "Already voted"
    INVALID_OPTION = "Invalid option"
    POLL_NOT_ACTIVE = "Poll is not active"
