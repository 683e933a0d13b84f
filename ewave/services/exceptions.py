class MarketplaceError(Exception):
    """Base class for all marketplace domain errors."""
    status_code = 500
    default_message = "Internal Server Error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)

class ClientInputError(MarketplaceError):
    """Raised when required fields are missing or malformed (e.g. rating outside 1-5)."""
    status_code = 400
    default_message = "Missing or malformed required parameters"

class AuthenticationError(MarketplaceError):
    """Raised when username/password do not match a stored user."""
    status_code = 401
    default_message = "Incorrect username and/or password"

class NotFoundError(MarketplaceError):
    """Raised when a looked-up vehicle or result set does not exist."""
    status_code = 404
    default_message = "Not found"

class InvalidReferenceError(NotFoundError):
    """Raised when feedback references an unknown user or vehicle."""
    status_code = 401
    default_message = "Invalid user or vehicle ID"

class UnknownBuyerError(NotFoundError):
    """Raised when a purchase names a user that does not exist."""
    status_code = 400
    default_message = "Invalid user ID"

class UnavailableError(MarketplaceError):
    """Raised when a vehicle is unknown or has no remaining inventory."""
    status_code = 400
    default_message = "Vehicle not available"

class ConflictError(MarketplaceError):
    """Raised when a unique resource (e.g. username) already exists."""
    status_code = 409
    default_message = "Resource already exists"

class StorageFault(MarketplaceError):
    """Raised when the underlying store fails. The message never carries query text."""
    status_code = 500
    default_message = "Internal Server Error"
