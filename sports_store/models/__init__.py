from sports_store.models.database_models import *
from sports_store.models.catalog import ProductCategory, SportType, ProductType

# Explicit export for safety
__all__ = [
    # Base
    "Base",
    # User models
    "User",
    "UserRole",
    "PasswordResetCode",
    # Store models
    "Product",
    "CartItem",
    "Order",
    "OrderItem",
    "OrderStatus",
    "Review",
    # Catalog (static)
    "ProductCategory",
    "SportType",
    "ProductType",
]
