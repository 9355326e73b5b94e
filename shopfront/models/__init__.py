"""
SQLAlchemy models for Shopfront.
"""
# Availability
from shopfront.models.availability import Schedule, DateOverride

# Menu
from shopfront.models.product import Product, BatchOption

# Admin access
from shopfront.models.admin import Admin
from shopfront.models.token_blacklist import TokenBlacklist


__all__ = [
    # Availability
    "Schedule",
    "DateOverride",
    # Menu
    "Product",
    "BatchOption",
    # Admin access
    "Admin",
    "TokenBlacklist",
]
