"""Products service: runs the products query for one page request."""

from __future__ import annotations

import logging
import math
from collections import deque
from typing import TYPE_CHECKING, Annotated, Any, TypeVar

from fastapi import Depends
from pydantic import ValidationError

from catalog_service.core.settings import get_shopify_settings
from catalog_service.features.products.queries import (
    PRODUCTS_BEFORE_QUERY,
    PRODUCTS_CURSORS_QUERY,
    PRODUCTS_QUERY,
)
from catalog_service.features.products.schemas import (
    Direction,
    PaginationRequest,
    ProductConnection,
    ProductCursorConnection,
    ProductPage,
)
from catalog_service.infra.shopify import ShopifyAPIError

if TYPE_CHECKING:
    from catalog_service.infra.shopify import AdminApi

logger = logging.getLogger(__name__)

ConnectionT = TypeVar("ConnectionT", ProductConnection, ProductCursorConnection)


class ProductService:
    """Fetch pages of the products connection.

    Requests with a cursor move one page forward (``first/after``) or
    backward (``last/before``). Requests without a cursor start at the
    beginning of the collection and walk forward to ``request.page``,
    so the reported page number always matches what is shown.
    """

    def __init__(self, max_page_size: int = 250) -> None:
        self.max_page_size = max_page_size

    async def fetch_products(
        self,
        admin: AdminApi,
        cursor: str | None,
        page_size: int,
        direction: Direction = "next",
    ) -> ProductConnection:
        """Run the products query from ``cursor``.

        Args:
            admin: Authenticated Admin API capability.
            cursor: Boundary cursor, or None for the first page.
            page_size: Products per page (positive).
            direction: ``prev`` with a cursor pages backward from it.

        Raises:
            ValueError: ``page_size`` is not positive.
            ShopifyAPIError: The call failed or returned a malformed connection.
        """
        if page_size < 1:
            raise ValueError(f"page_size must be positive, got {page_size}")

        query = PRODUCTS_BEFORE_QUERY if direction == "prev" and cursor else PRODUCTS_QUERY
        data = await admin.graphql(
            query,
            {"cursor": cursor, "pageSize": min(page_size, self.max_page_size)},
        )
        return self._parse(admin, data, ProductConnection)

    async def load_page(self, admin: AdminApi, request: PaginationRequest) -> ProductPage:
        """Resolve a page request into a :class:`ProductPage`."""
        if request.cursor:
            connection = await self.fetch_products(
                admin, request.cursor, request.page_size, request.direction
            )
            current_page = request.page
            if request.direction == "prev" and not connection.page_info.has_previous_page:
                current_page = 1
        else:
            cursor, current_page = await self._walk_to_page(
                admin, request.page, min(request.page_size, self.max_page_size)
            )
            connection = await self.fetch_products(admin, cursor, request.page_size)

        logger.info(
            "Products page loaded",
            extra={
                "page": current_page,
                "requested_page": request.page,
                "page_size": request.page_size,
                "direction": request.direction,
                "count": len(connection.nodes),
            },
        )
        return ProductPage(
            products=connection.nodes,
            page_info=connection.page_info,
            page_size=request.page_size,
            current_page=current_page,
        )

    async def _walk_to_page(
        self, admin: AdminApi, page: int, page_size: int
    ) -> tuple[str | None, int]:
        """Skip the ``(page - 1) * page_size`` products before ``page``.

        Cursors are fetched in chunks of up to ``max_page_size`` items, so a
        jump costs ``ceil(skipped / max_page_size)`` calls whatever the
        page size.

        Returns:
            The ``after`` cursor of the page reached and its number. When the
            collection is shorter, that is the last page.
        """
        skip = (page - 1) * page_size
        # Last page_size + 1 cursors: enough to restart at the last page
        recent: deque[str] = deque(maxlen=page_size + 1)
        seen = 0
        has_more = True
        while seen < skip and has_more:
            data = await admin.graphql(
                PRODUCTS_CURSORS_QUERY,
                {
                    "cursor": recent[-1] if recent else None,
                    "pageSize": min(skip - seen, self.max_page_size),
                },
            )
            connection = self._parse(admin, data, ProductCursorConnection)
            recent.extend(edge.cursor for edge in connection.edges)
            seen += len(connection.edges)
            has_more = connection.page_info.has_next_page and bool(connection.edges)

        if seen >= skip and has_more:
            return (recent[-1] if recent else None), page

        last_page = max(1, math.ceil(seen / page_size))
        logger.info(
            "Requested page is past the end of the catalog",
            extra={"requested_page": page, "last_page": last_page},
        )
        offset = (last_page - 1) * page_size
        if offset == 0:
            return None, 1
        return recent[offset - 1 - seen], last_page

    @staticmethod
    def _parse(admin: AdminApi, data: dict[str, Any], model: type[ConnectionT]) -> ConnectionT:
        products = data.get("products")
        if not isinstance(products, dict):
            raise ShopifyAPIError("Products connection missing from response", shop=admin.shop)
        try:
            return model.model_validate(products)
        except ValidationError as e:
            raise ShopifyAPIError(
                "Malformed products connection in response",
                shop=admin.shop,
                extra={"error_count": e.error_count()},
            ) from e


def get_product_service() -> ProductService:
    """Get product service dependency."""
    return ProductService(max_page_size=get_shopify_settings().max_page_size)


ProductServiceDep = Annotated[ProductService, Depends(get_product_service)]
