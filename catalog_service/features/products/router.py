"""Products page router.

``GET`` renders the page; ``POST`` runs one pagination action and renders
the result, or returns it as JSON when the client asks for
``application/json``. Both authenticate through the signed query string,
which the page's forms post back unchanged.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated, Any

from fastapi import APIRouter, Form, Request, status
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.templating import Jinja2Templates

from catalog_service.core.dependencies.shopify import AdminApiDep, ShopifySettingsDep
from catalog_service.core.settings import ShopifySettings, get_app_settings
from catalog_service.features.products.formatter import format_products
from catalog_service.features.products.pagination import (
    PaginationAction,
    PaginationSnapshot,
    parse_pagination_form,
    resolve_request,
)
from catalog_service.features.products.service import ProductServiceDep
from catalog_service.infra.shopify import ShopifyAPIError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["products"])

templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))


def wants_json(request: Request) -> bool:
    """Check whether the client asked for a JSON response."""
    return "application/json" in request.headers.get("accept", "")


def _render(
    request: Request,
    snapshot: PaginationSnapshot,
    settings: ShopifySettings,
    status_code: int = status.HTTP_200_OK,
) -> HTMLResponse:
    """Render the products page for a snapshot."""
    context: dict[str, Any] = {
        "title": get_app_settings().title,
        "action_url": request.url.path + (f"?{request.url.query}" if request.url.query else ""),
        "snapshot": snapshot,
        "formatted_output": format_products(snapshot.products),
        "page_size_options": settings.page_size_options,
        "fetch_request": resolve_request(PaginationAction.FETCH, snapshot),
        "previous_request": resolve_request(PaginationAction.PREVIOUS, snapshot),
        "next_request": resolve_request(PaginationAction.NEXT, snapshot),
        "resize_request": resolve_request(
            PaginationAction.RESIZE, snapshot, page_size=snapshot.page_size
        ),
        "jump_request": resolve_request(
            PaginationAction.JUMP, snapshot, target_page=snapshot.current_page
        ),
    }
    return templates.TemplateResponse(
        request, "products.html", context, status_code=status_code
    )


@router.get(
    "",
    response_class=HTMLResponse,
    summary="Render the products page",
)
async def products_page(
    request: Request,
    admin: AdminApiDep,
    settings: ShopifySettingsDep,
) -> HTMLResponse:
    """Render the page in its idle state (no products loaded yet)."""
    logger.debug("Rendering products page", extra={"shop": admin.shop})
    return _render(request, PaginationSnapshot(page_size=settings.default_page_size), settings)


@router.post(
    "",
    response_model=None,
    summary="Run a pagination action",
    responses={
        status.HTTP_200_OK: {"description": "Rendered page, or ProductPage JSON"},
        status.HTTP_502_BAD_GATEWAY: {"description": "Shopify Admin API failure"},
    },
)
async def products_action(
    request: Request,
    admin: AdminApiDep,
    settings: ShopifySettingsDep,
    service: ProductServiceDep,
    page_size: Annotated[str | None, Form(alias="pageSize")] = None,
    cursor: Annotated[str | None, Form()] = None,
    direction: Annotated[str | None, Form()] = None,
    page: Annotated[str | None, Form()] = None,
) -> HTMLResponse | JSONResponse:
    """Fetch one page of products.

    Form fields: ``pageSize``, ``cursor``, ``direction`` (next|prev), ``page``.
    Invalid numbers fall back to defaults.

    Example:
        ```bash
        curl -X POST "http://localhost:8000/app?shop=demo.myshopify.com&timestamp=...&hmac=..." \\
          -H "Accept: application/json" \\
          -d pageSize=25 -d page=1
        ```
    """
    page_request = parse_pagination_form(
        page_size,
        cursor,
        direction,
        page,
        default_page_size=settings.default_page_size,
        max_page_size=settings.max_page_size,
    )
    snapshot = PaginationSnapshot(
        current_page=page_request.page,
        page_size=page_request.page_size,
    ).begin(page_request)

    try:
        product_page = await service.load_page(admin, page_request)
    except ShopifyAPIError as e:
        if wants_json(request):
            raise
        logger.warning(
            "Products fetch failed",
            extra={"error_type": e.type, "detail": e.detail},
        )
        return _render(
            request,
            snapshot.fail("Could not load products from Shopify. Please try again."),
            settings,
            status_code=status.HTTP_502_BAD_GATEWAY,
        )

    if wants_json(request):
        return JSONResponse(content=product_page.model_dump(mode="json", by_alias=True))
    return _render(request, snapshot.complete(product_page), settings)
