"""
Restaurant catalog endpoints.
"""

from typing import Annotated, List, Optional

from fastapi import APIRouter, Query

from rapideat.api.deps import OptionalDbSession
from rapideat.models.restaurant import CatalogStats, RestaurantListResponse, SortKey
from rapideat.services.restaurants import RestaurantDataSource, RestaurantQuery

router = APIRouter()


@router.get("", response_model=RestaurantListResponse)
async def list_restaurants(
    db: OptionalDbSession,
    q: str = "",
    cuisine: Annotated[List[str], Query()] = [],
    min_rating: float = 0,
    max_cost: float = 0,
    sort: SortKey = SortKey.RELEVANCE,
    limit: Annotated[Optional[int], Query(ge=0)] = None,
    offset: Annotated[int, Query(ge=0)] = 0,
) -> RestaurantListResponse:
    """
    Search, filter, sort and page the catalog.

    Args:
        q: Free text matched against name, description, locality and cuisines.
        cuisine: Repeatable; a restaurant matches if it serves any of them.
        min_rating: Minimum rating, 0 disables.
        max_cost: Maximum cost for two, 0 disables.
        sort: relevance, rating, delivery or cost.
    """
    query = RestaurantQuery(
        text=q,
        cuisines=[c for c in cuisine if c],
        min_rating=min_rating,
        max_cost=max_cost,
        sort=sort,
        limit=limit,
        offset=offset,
    )
    return await RestaurantDataSource(db).query(query)


@router.get("/cuisines", response_model=list[str])
async def list_cuisines(db: OptionalDbSession) -> list[str]:
    """List every cuisine offered in the catalog."""
    return await RestaurantDataSource(db).cuisines()


@router.get("/stats", response_model=CatalogStats)
async def catalog_stats(db: OptionalDbSession) -> CatalogStats:
    """Total, top-rated and pure-veg counts for the whole catalog."""
    return await RestaurantDataSource(db).stats()
