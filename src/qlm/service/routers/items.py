"""Item endpoints."""

from fastapi import APIRouter, Query

from qlm.logging import get_logger
from qlm.service.dependencies import CatalogDep, SettingsDep
from qlm.service.exceptions import PageTooLargeError
from qlm.service.schemas.items import CatalogItemPage

logger = get_logger(__name__)

router = APIRouter()


@router.get("/items", response_model=CatalogItemPage, status_code=200)
async def list_items(
    catalog: CatalogDep,
    settings: SettingsDep,
    start: int = Query(0, ge=0),
    count: int | None = Query(None, ge=1),
    tags: list[str] = Query(default=[]),
) -> CatalogItemPage:
    """Serve one page of items, optionally filtered by repeated ``tags`` parameters."""
    if count is None:
        count = settings.default_page_size
    if count > settings.max_page_size:
        raise PageTooLargeError(count, settings.max_page_size)

    items = catalog.list_items(start, count, tags)
    total = catalog.count_items(tags)
    logger.info("items_listed", start=start, count=count, tags=tags, returned=len(items))
    return CatalogItemPage(
        items=items,
        exhausted=start + count >= total,
        start=start,
        count=count,
        total=total,
    )
