"""
API routers for customer order service endpoints.
"""

from . import customer_router, health_router

__all__ = ["customer_router", "health_router"]
