"""
Restaurant catalog models.
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel

from rapideat.core.config import settings


class SortKey(str, Enum):
    """Catalog sort orders."""
    RELEVANCE = "relevance"
    RATING = "rating"
    DELIVERY = "delivery"
    COST = "cost"


class CatalogSource(str, Enum):
    """Where a catalog response came from."""
    DATABASE = "database"
    STATIC = "static"


class RestaurantOffer(SQLModel):
    """Promotional offer shown on a restaurant card."""
    title: str
    description: Optional[str] = None
    coupon_code: Optional[str] = None
    discount_percentage: Optional[float] = None
    max_discount: Optional[float] = None


class RestaurantBase(SQLModel):
    """Restaurant fields shared across schemas."""
    slug: str = Field(unique=True, index=True)
    name: str = Field(index=True)
    description: str = ""
    locality: str = ""
    city: str = ""
    area_name: str = ""
    rating: float = Field(default=0.0, index=True)
    review_count: int = 0
    delivery_time: int = 0  # minutes
    cost_for_two: int = Field(default=0, index=True)
    distance: float = 0.0  # km
    image_url: str = ""
    is_pure_veg: bool = False
    promoted: bool = False
    eta_description: Optional[str] = None


class Restaurant(RestaurantBase, table=True):
    """
    Restaurant database model.

    Cuisines, tags and the offer are stored as JSON columns.
    """

    __tablename__ = settings.restaurants_table

    id: Optional[int] = Field(default=None, primary_key=True)
    cuisines: List[str] = Field(default_factory=list, sa_column=Column(JSON))
    tags: List[str] = Field(default_factory=list, sa_column=Column(JSON))
    offer: Optional[Dict[str, Any]] = Field(default=None, sa_column=Column(JSON))


class RestaurantRead(RestaurantBase):
    """Schema for reading restaurant data."""
    id: Optional[int] = None
    cuisines: List[str] = []
    tags: List[str] = []
    offer: Optional[RestaurantOffer] = None


class RestaurantListResponse(SQLModel):
    """Catalog query result and the source that served it."""
    data: List[RestaurantRead]
    source: CatalogSource
    total: int


class CatalogStats(SQLModel):
    """Headline numbers for the whole catalog (unfiltered)."""
    total: int
    top_rated: int
    pure_veg: int
    source: CatalogSource
