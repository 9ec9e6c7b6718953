"""
Restaurant catalog service.
"""

from .data_source import (
    RestaurantDataSource,
    RestaurantQuery,
    matches,
    sort_restaurants,
    static_catalog,
)
from .static_data import SAMPLE_RESTAURANTS

__all__ = [
    "RestaurantDataSource",
    "RestaurantQuery",
    "matches",
    "sort_restaurants",
    "static_catalog",
    "SAMPLE_RESTAURANTS",
]
