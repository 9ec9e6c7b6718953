"""
Restaurant data source.

Answers catalog queries from the database when it is configured, reachable
and non-empty, otherwise from the built-in static catalog. Every response
says which source served it.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from sqlalchemy import String, cast, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from rapideat.core.config import Settings, settings
from rapideat.core.database import translate_store_errors
from rapideat.core.exceptions import StoreUnavailable
from rapideat.models.restaurant import (
    CatalogSource,
    CatalogStats,
    Restaurant,
    RestaurantListResponse,
    RestaurantRead,
    SortKey,
)

from .static_data import SAMPLE_RESTAURANTS

logger = logging.getLogger(__name__)

TOP_RATED_THRESHOLD = 4.5


@dataclass
class RestaurantQuery:
    """
    Catalog filters, sort order and page.

    A min_rating or max_cost of zero (or less) disables that filter.
    """
    text: str = ""
    cuisines: List[str] = field(default_factory=list)
    min_rating: float = 0.0
    max_cost: float = 0.0
    sort: SortKey = SortKey.RELEVANCE
    limit: Optional[int] = None
    offset: int = 0


def static_catalog() -> List[RestaurantRead]:
    """Fresh copies of the built-in catalog."""
    return [RestaurantRead.model_validate(item) for item in SAMPLE_RESTAURANTS]


def matches(restaurant: RestaurantRead, query: RestaurantQuery) -> bool:
    """Check one restaurant against every filter in the query."""
    text = query.text.strip().lower()
    if text:
        haystack = " ".join(
            [restaurant.name, restaurant.description, restaurant.locality, *restaurant.cuisines]
        ).lower()
        if text not in haystack:
            return False

    if query.cuisines and not any(c in query.cuisines for c in restaurant.cuisines):
        return False

    if query.min_rating > 0 and restaurant.rating < query.min_rating:
        return False

    if query.max_cost > 0 and restaurant.cost_for_two > query.max_cost:
        return False

    return True


def sort_restaurants(restaurants: Sequence[RestaurantRead], sort: SortKey) -> List[RestaurantRead]:
    """Order restaurants; relevance keeps the source order."""
    if sort == SortKey.RATING:
        return sorted(restaurants, key=lambda r: r.rating, reverse=True)
    if sort == SortKey.DELIVERY:
        return sorted(restaurants, key=lambda r: r.delivery_time)
    if sort == SortKey.COST:
        return sorted(restaurants, key=lambda r: r.cost_for_two)
    return list(restaurants)


def like_pattern(text: str) -> str:
    """Substring LIKE pattern with %, _ and the escape character taken literally."""
    escaped = text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class RestaurantDataSource:
    """
    Catalog queries with static fallback.

    Args:
        db: Database session, or None when no database is configured.
        config: Settings providing the per-query result cap.
    """

    def __init__(self, db: Optional[AsyncSession], config: Settings = settings):
        self.db = db
        self.config = config

    async def query(self, query: RestaurantQuery) -> RestaurantListResponse:
        """
        Filter, sort and page the catalog.

        total counts every match before paging.
        """
        restaurants, source = await self._load(query)
        matched = sort_restaurants(
            [r for r in restaurants if matches(r, query)],
            query.sort,
        )

        limit = self.config.restaurant_query_limit
        if query.limit is not None:
            limit = max(0, min(query.limit, limit))
        offset = max(0, query.offset)

        return RestaurantListResponse(
            data=matched[offset:offset + limit],
            source=source,
            total=len(matched),
        )

    async def cuisines(self) -> List[str]:
        """Sorted distinct cuisines across the catalog."""
        restaurants, _ = await self._load(RestaurantQuery())
        return sorted({c for r in restaurants for c in r.cuisines})

    async def stats(self) -> CatalogStats:
        """Counts over the whole, unfiltered catalog."""
        restaurants, source = await self._load(RestaurantQuery())
        return CatalogStats(
            total=len(restaurants),
            top_rated=sum(1 for r in restaurants if r.rating >= TOP_RATED_THRESHOLD),
            pure_veg=sum(1 for r in restaurants if r.is_pure_veg),
            source=source,
        )

    async def _load(self, query: RestaurantQuery) -> Tuple[List[RestaurantRead], CatalogSource]:
        if self.db is not None:
            try:
                rows = await self._fetch(query)
            except StoreUnavailable:
                rows = []
            if rows:
                return rows, CatalogSource.DATABASE

        logger.debug("Serving restaurants from the static catalog")
        return static_catalog(), CatalogSource.STATIC

    async def _fetch(self, query: RestaurantQuery) -> List[RestaurantRead]:
        """
        Pre-filter in SQL on text, rating and cost.

        Cuisine matching, sorting and paging happen in Python so both
        sources behave the same.
        """
        statement = select(Restaurant)

        text = query.text.strip()
        if text:
            like = like_pattern(text)
            statement = statement.where(
                or_(
                    Restaurant.name.ilike(like, escape="\\"),
                    Restaurant.description.ilike(like, escape="\\"),
                    Restaurant.locality.ilike(like, escape="\\"),
                    cast(Restaurant.cuisines, String).ilike(like, escape="\\"),
                )
            )
        if query.min_rating > 0:
            statement = statement.where(Restaurant.rating >= query.min_rating)
        if query.max_cost > 0:
            statement = statement.where(Restaurant.cost_for_two <= query.max_cost)

        with translate_store_errors("restaurant"):
            result = await self.db.execute(statement.order_by(Restaurant.id))
            rows = result.scalars().all()

        return [RestaurantRead.model_validate(row) for row in rows]
