"""Home Routes: catalog landing page with record counts."""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import RedirectResponse

from locallibrary.api.templating import render_outcome
from locallibrary.config import get_settings
from locallibrary.infrastructure.catalog_store import CatalogStore, get_store
from locallibrary.services.catalog_home import catalog_home

router = APIRouter(tags=["home"])


@router.get("/", include_in_schema=False)
async def root():
    return RedirectResponse("/catalog/", status_code=303)


@router.get("/catalog/")
async def catalog_index(request: Request, store: CatalogStore = Depends(get_store)):
    outcome = await catalog_home(store, get_settings().site_title)
    return render_outcome(request, outcome)
