"""
Property repository for listing search and inserts.
The search statement is assembled from clause lists so any combination of filters
produces a single WHERE and a single HAVING, with parameters numbered in append order.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func, Integer
from sqlalchemy.sql import Select
from lightbnb.repositories.base import BaseRepository
from lightbnb.models.property import Property
from lightbnb.models.review import PropertyReview
from lightbnb.schemas.property import PropertyCreate, PropertySearchOptions, dollars_to_cents
from lightbnb.utils.query_builder import ClauseList, QueryParameters
from typing import Any, Dict, List, Tuple
import logging

logger = logging.getLogger(__name__)


def build_property_search(options: PropertySearchOptions, limit: int = 10) -> Tuple[Select, QueryParameters]:
    """
    Build the property search statement.

    Filters are applied in a fixed order (city, owner, price range, minimum rating)
    and the limit is always the last parameter.

    Args:
        options: Search filters; prices in dollars
        limit: Maximum number of properties to return

    Returns:
        Tuple of (statement, ordered parameters)
    """
    params = QueryParameters()
    where = ClauseList()
    having = ClauseList()
    average_rating = func.avg(PropertyReview.rating)

    # Case-insensitive partial match; the wildcards are part of the bound value
    if options.city:
        where.add(Property.city.ilike(params.bind(f"%{options.city}%")))

    if options.owner_id is not None:
        where.add(Property.owner_id == params.bind(options.owner_id))

    # Price range in dollars, stored in cents
    if options.minimum_price_per_night is not None:
        where.add(Property.cost_per_night >= params.bind(dollars_to_cents(options.minimum_price_per_night)))
    if options.maximum_price_per_night is not None:
        where.add(Property.cost_per_night <= params.bind(dollars_to_cents(options.maximum_price_per_night)))

    if options.minimum_rating is not None:
        having.add(average_rating >= params.bind(options.minimum_rating))

    query = (
        select(Property.__table__, average_rating.label("average_rating"))
        .select_from(Property)
        .join(PropertyReview, Property.id == PropertyReview.property_id)
    )
    if where:
        query = query.where(where.combined())
    query = query.group_by(Property.id)
    if having:
        query = query.having(having.combined())
    query = query.order_by(Property.cost_per_night).limit(params.bind(limit, Integer()))

    return query, params


class PropertyRepository(BaseRepository[Property]):
    """Repository for property listings."""

    def __init__(self, db: AsyncSession):
        super().__init__(Property, db)

    async def create_property(self, property_data: PropertyCreate, commit: bool = True) -> Property:
        """
        Insert a property from the fixed insert payload.

        Args:
            property_data: Validated property payload with the price in dollars
            commit: Commit immediately, or only flush within the current transaction

        Returns:
            Created property instance including its generated id
        """
        created_property = await self.create(property_data.to_row(), commit=commit)
        logger.info(f"Created property: {created_property.title} (ID: {created_property.id})")
        return created_property

    async def search_properties(self, options: PropertySearchOptions, limit: int = 10) -> List[Dict[str, Any]]:
        """
        Search properties that have at least one review.

        Args:
            options: Search filters
            limit: Maximum number of properties to return

        Returns:
            List of row dictionaries ordered by cost_per_night ascending
        """
        query, params = build_property_search(options, limit)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(f"Property search: {query} {params.values()}")

        try:
            result = await self.db.execute(query)
            rows = [dict(row) for row in result.mappings().all()]

            logger.debug(f"Property search returned {len(rows)} results")
            return rows
        except Exception as e:
            logger.error(f"Failed to search properties: {e}")
            raise
