"""Item page schemas.

``ItemPage[T]`` is the wire contract the loader reads by default: an ``items``
list plus an ``exhausted`` flag. ``start``/``count``/``total`` are informational.
"""

from pydantic import BaseModel


class CatalogItem(BaseModel):
    """A single item served by the reference service."""

    id: int
    title: str
    tags: list[str] = []


class ItemPage[T](BaseModel):
    """One page of items.

    ``exhausted`` is true when no item exists past this page, so a client
    can stop asking without issuing an extra empty request.
    """

    items: list[T]
    exhausted: bool
    start: int
    count: int
    total: int


CatalogItemPage = ItemPage[CatalogItem]


class PageError(BaseModel):
    """Why a page request was refused.

    The loader only sees the non-2xx status and fails the fetch; the body is
    for people reading logs or poking the service by hand.
    """

    code: str
    message: str
    max_page_size: int | None = None  # Set when the page asked for was too large


class RejectedPage(BaseModel):
    """Body served instead of an ``ItemPage`` when a page cannot be produced."""

    error: PageError

    @classmethod
    def of(
        cls, code: str, message: str, *, max_page_size: int | None = None
    ) -> dict[str, object]:
        """Serialized body, leaving out details that do not apply."""
        error = PageError(code=code, message=message, max_page_size=max_page_size)
        return cls(error=error).model_dump(exclude_none=True)
