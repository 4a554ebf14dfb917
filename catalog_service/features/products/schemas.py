"""Pydantic schemas for the products page.

Field names are snake_case in Python and camelCase on the wire, matching
the Admin API payloads and the page's form/JSON contract.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

Direction = Literal["next", "prev"]


class CamelModel(BaseModel):
    """Base model serialized with camelCase aliases."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class Product(CamelModel):
    """A product node as returned by the Admin API."""

    id: str = Field(description="Global id, e.g. gid://shopify/Product/123")
    title: str | None = Field(default=None, description="Product title")
    online_store_url: str | None = Field(
        default=None,
        description="Storefront URL; absent when the product is not published online",
    )


class PageInfo(CamelModel):
    """Boundary cursors and neighbour flags of the current page only."""

    has_next_page: bool = False
    has_previous_page: bool = False
    start_cursor: str | None = None
    end_cursor: str | None = None


class ProductConnection(CamelModel):
    """The ``products`` connection of one Admin API response."""

    nodes: list[Product] = Field(default_factory=list)
    page_info: PageInfo = Field(default_factory=PageInfo)


class ProductEdge(CamelModel):
    cursor: str


class ProductCursorConnection(CamelModel):
    """Edge cursors of a ``products`` connection, used to skip ahead."""

    edges: list[ProductEdge] = Field(default_factory=list)
    page_info: PageInfo = Field(default_factory=PageInfo)


class PaginationRequest(CamelModel):
    """One page request built by the page controls.

    ``page`` is the page number the caller expects to land on. With a
    cursor it is a label; without one the service walks to that page.
    """

    page_size: int = Field(ge=1, description="Products per page")
    cursor: str | None = Field(default=None, description="Boundary cursor to paginate from")
    direction: Direction = Field(default="next", description="next: after cursor, prev: before cursor")
    page: int = Field(default=1, ge=1, description="Target page number")


class ProductPage(CamelModel):
    """Response of a page action.

    Example:
        ```json
        {
            "products": [{"id": "gid://shopify/Product/1", "title": "A", "onlineStoreUrl": null}],
            "pageInfo": {"hasNextPage": true, "hasPreviousPage": false, "startCursor": "c1", "endCursor": "c1"},
            "pageSize": 10,
            "currentPage": 1
        }
        ```
    """

    products: list[Product] = Field(default_factory=list)
    page_info: PageInfo = Field(default_factory=PageInfo)
    page_size: int = Field(ge=1)
    current_page: int = Field(ge=1)
