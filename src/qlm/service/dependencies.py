"""Shared FastAPI dependencies.

Catalog and settings live on ``app.state`` so each ``create_app()`` call
serves its own data; routers get them through these aliases.
"""

from typing import Annotated

from fastapi import Depends, Request

from qlm.config import ServiceSettings
from qlm.service.catalog import Catalog


def get_catalog(request: Request) -> Catalog:
    return request.app.state.catalog  # type: ignore[no-any-return]


def get_settings(request: Request) -> ServiceSettings:
    return request.app.state.settings  # type: ignore[no-any-return]


CatalogDep = Annotated[Catalog, Depends(get_catalog)]
SettingsDep = Annotated[ServiceSettings, Depends(get_settings)]
