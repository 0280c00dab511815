"""Error taxonomy for the marketplace.

Every error knows the HTTP status it maps to and the short title used in the
``error`` field of the response envelope. Field-level input problems are
reported with Protean's ``ValidationError`` and are not part of this tree.
"""


class MarketplaceError(Exception):
    status_code = 500
    title = "Internal Server Error"

    def __init__(self, message: str | None = None, details: list | dict | None = None):
        self.message = message or self.title
        self.details = details
        super().__init__(self.message)


class InternalError(MarketplaceError):
    pass


# ---------------------------------------------------------------------------
# 401
# ---------------------------------------------------------------------------
class AuthenticationError(MarketplaceError):
    status_code = 401
    title = "Authentication Failed"


class Unauthorized(AuthenticationError):
    title = "Unauthorized"


class InvalidToken(AuthenticationError):
    title = "Invalid Token"


class TokenExpired(AuthenticationError):
    title = "Token Expired"


class TokenRevoked(AuthenticationError):
    title = "Token Revoked"


# ---------------------------------------------------------------------------
# 403
# ---------------------------------------------------------------------------
class AuthorizationError(MarketplaceError):
    status_code = 403
    title = "Access Denied"


class Forbidden(AuthorizationError):
    title = "Forbidden"


class AccountDisabled(AuthorizationError):
    title = "Account Disabled"


# ---------------------------------------------------------------------------
# 404
# ---------------------------------------------------------------------------
class NotFoundError(MarketplaceError):
    status_code = 404
    title = "Not Found"


class UserNotFound(NotFoundError):
    title = "User Not Found"


class ProductNotFound(NotFoundError):
    title = "Product Not Found"


class OrderNotFound(NotFoundError):
    title = "Order Not Found"


class NotificationNotFound(NotFoundError):
    title = "Notification Not Found"


# ---------------------------------------------------------------------------
# Business rules
# ---------------------------------------------------------------------------
class BusinessRuleError(MarketplaceError):
    status_code = 400
    title = "Business Rule Violation"


class ProductUnavailable(BusinessRuleError):
    title = "Product Unavailable"


class InsufficientStock(BusinessRuleError):
    title = "Insufficient Stock"


class DuplicateReview(BusinessRuleError):
    title = "Review Exists"


class OrderNotReviewable(BusinessRuleError):
    title = "Order Not Reviewable"


class EmailAlreadyExists(BusinessRuleError):
    title = "Email Already Exists"


class InvalidTransition(BusinessRuleError):
    status_code = 409
    title = "Invalid Status Transition"


class OrderNotCancellable(BusinessRuleError):
    status_code = 409
    title = "Cannot Cancel"


class ConcurrentModification(BusinessRuleError):
    status_code = 409
    title = "Concurrent Modification"


# ---------------------------------------------------------------------------
# 503
# ---------------------------------------------------------------------------
class UpstreamServiceError(MarketplaceError):
    status_code = 503
    title = "Upstream Service Error"
