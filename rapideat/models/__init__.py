"""
Database models using SQLModel.
"""

from .user import User, UserRole, SafeUser
from .session import AuthSession, IssuedSession
from .auth import AuthFormState, AuthStatus, initial_auth_state
from .restaurant import (
    Restaurant,
    RestaurantBase,
    RestaurantRead,
    RestaurantOffer,
    RestaurantListResponse,
    CatalogStats,
    CatalogSource,
    SortKey,
)

__all__ = [
    # Auth
    "User",
    "UserRole",
    "SafeUser",
    "AuthSession",
    "IssuedSession",
    "AuthFormState",
    "AuthStatus",
    "initial_auth_state",
    # Catalog
    "Restaurant",
    "RestaurantBase",
    "RestaurantRead",
    "RestaurantOffer",
    "RestaurantListResponse",
    "CatalogStats",
    "CatalogSource",
    "SortKey",
]
