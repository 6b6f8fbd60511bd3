"""API routes package"""

from . import admin, days, health, translate, users

__all__ = ["admin", "days", "health", "translate", "users"]
