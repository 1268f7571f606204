from .models import (
    ActivityLogEntry,
    AuthResult,
    Category,
    Pagination,
    Product,
    ProductPage,
    StockMovement,
    Supplier,
    User,
)
from .errors import AppError, AuthError, AuthorizationError, NetworkError, RequestError, ValidationError, error_message

__all__ = [
    "ActivityLogEntry",
    "AuthResult",
    "Category",
    "Pagination",
    "Product",
    "ProductPage",
    "StockMovement",
    "Supplier",
    "User",
    "AppError",
    "AuthError",
    "AuthorizationError",
    "NetworkError",
    "RequestError",
    "ValidationError",
    "error_message",
]
