"""Pagination state for the products page.

The Admin API only exposes boundary cursors, so the page keeps its own
page counter. A :class:`PaginationSnapshot` is the whole UI state of one
render; it is replaced, never patched:

    IDLE ──submit──> FETCHING ──ok──> LOADED
                         └────error──> FAILED

:func:`resolve_request` maps a user action on a snapshot to the next
:class:`PaginationRequest`, or ``None`` when the control is disabled.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import Field

from catalog_service.features.products.schemas import (
    CamelModel,
    PageInfo,
    PaginationRequest,
    Product,
    ProductPage,
)

DEFAULT_PAGE_SIZE = 10
DEFAULT_PAGE = 1


class PaginationAction(StrEnum):
    """User actions on the products page."""

    FETCH = "fetch"
    NEXT = "next"
    PREVIOUS = "previous"
    RESIZE = "resize"
    JUMP = "jump"


class FetchStatus(StrEnum):
    """Lifecycle of one submission."""

    IDLE = "idle"
    FETCHING = "fetching"
    LOADED = "loaded"
    FAILED = "failed"


class InvalidTransitionError(RuntimeError):
    """A snapshot transition was requested from the wrong status."""


class PaginationSnapshot(CamelModel):
    """Immutable UI state of the products page."""

    status: FetchStatus = FetchStatus.IDLE
    current_page: int = Field(default=DEFAULT_PAGE, ge=1)
    page_size: int = Field(default=DEFAULT_PAGE_SIZE, ge=1)
    products: list[Product] = Field(default_factory=list)
    page_info: PageInfo = Field(default_factory=PageInfo)
    error: str | None = None

    @property
    def is_fetching(self) -> bool:
        return self.status is FetchStatus.FETCHING

    @property
    def can_go_previous(self) -> bool:
        """Previous is enabled only past page 1 and when the API reports one."""
        return self.page_info.has_previous_page and self.current_page > 1

    @property
    def can_go_next(self) -> bool:
        return self.page_info.has_next_page

    def begin(self, request: PaginationRequest) -> PaginationSnapshot:
        """Idle/Loaded/Failed -> Fetching for a new submission."""
        if self.is_fetching:
            raise InvalidTransitionError("A fetch is already in flight for this snapshot")
        return self.model_copy(
            update={
                "status": FetchStatus.FETCHING,
                "page_size": request.page_size,
                "error": None,
            }
        )

    def complete(self, page: ProductPage) -> PaginationSnapshot:
        """Fetching -> Loaded, replacing page, size, products and cursors at once."""
        self._require_fetching("complete")
        return PaginationSnapshot(
            status=FetchStatus.LOADED,
            current_page=page.current_page,
            page_size=page.page_size,
            products=page.products,
            page_info=page.page_info,
        )

    def fail(self, error: str) -> PaginationSnapshot:
        """Fetching -> Failed; products and cursors are dropped."""
        self._require_fetching("fail")
        return PaginationSnapshot(
            status=FetchStatus.FAILED,
            current_page=self.current_page,
            page_size=self.page_size,
            error=error,
        )

    def _require_fetching(self, transition: str) -> None:
        if not self.is_fetching:
            msg = f"Cannot {transition} a snapshot in status {self.status.value!r}"
            raise InvalidTransitionError(msg)


def resolve_request(
    action: PaginationAction,
    snapshot: PaginationSnapshot,
    *,
    page_size: int | None = None,
    target_page: int | None = None,
) -> PaginationRequest | None:
    """Decide the request a control submits.

    Args:
        action: The control the user activated.
        snapshot: The currently displayed state.
        page_size: New page size (RESIZE only).
        target_page: Requested page number (JUMP only).

    Returns:
        The request to submit, or ``None`` if the control is disabled.

    Raises:
        ValueError: RESIZE without ``page_size`` or JUMP without ``target_page``.
    """
    if action is PaginationAction.NEXT:
        if not snapshot.can_go_next:
            return None
        return PaginationRequest(
            page_size=snapshot.page_size,
            cursor=snapshot.page_info.end_cursor,
            direction="next",
            page=snapshot.current_page + 1,
        )

    if action is PaginationAction.PREVIOUS:
        if not snapshot.can_go_previous:
            return None
        return PaginationRequest(
            page_size=snapshot.page_size,
            cursor=snapshot.page_info.start_cursor,
            direction="prev",
            page=snapshot.current_page - 1,
        )

    if action is PaginationAction.RESIZE:
        if page_size is None:
            raise ValueError("RESIZE requires page_size")
        return PaginationRequest(page_size=page_size, page=1)

    if action is PaginationAction.JUMP:
        if target_page is None:
            raise ValueError("JUMP requires target_page")
        return PaginationRequest(page_size=snapshot.page_size, page=max(target_page, 1))

    return PaginationRequest(page_size=snapshot.page_size, page=snapshot.current_page)


def parse_positive_int(value: Any, default: int) -> int:
    """Parse a form value as a positive integer, falling back to ``default``."""
    if value is None:
        return default
    try:
        number = int(str(value).strip())
    except ValueError:
        return default
    return number if number >= 1 else default


def parse_pagination_form(
    page_size: str | None,
    cursor: str | None,
    direction: str | None,
    page: str | None,
    *,
    default_page_size: int = DEFAULT_PAGE_SIZE,
    max_page_size: int = 250,
) -> PaginationRequest:
    """Build a request from raw form fields.

    Missing or invalid numbers fall back to defaults instead of failing,
    an oversized page size is clamped, and unknown directions mean "next".
    """
    return PaginationRequest(
        page_size=min(parse_positive_int(page_size, default_page_size), max_page_size),
        cursor=cursor or None,
        direction="prev" if direction == "prev" else "next",
        page=parse_positive_int(page, DEFAULT_PAGE),
    )
