"""Genre Routes: list, detail, create, delete, update placeholder."""

from fastapi import APIRouter, Depends, Request

from locallibrary.api.templating import read_form_fields, render_outcome
from locallibrary.infrastructure.catalog_store import CatalogStore, get_store
from locallibrary.services.genre_handlers import GenreHandlers

router = APIRouter(prefix="/catalog", tags=["genres"])


def get_handlers(store: CatalogStore = Depends(get_store)) -> GenreHandlers:
    return GenreHandlers(store)


@router.get("/genres")
async def genre_list(request: Request, handlers: GenreHandlers = Depends(get_handlers)):
    return render_outcome(request, await handlers.list_all())


@router.get("/genre/create")
async def genre_create_get(request: Request, handlers: GenreHandlers = Depends(get_handlers)):
    return render_outcome(request, await handlers.create_form())


@router.post("/genre/create")
async def genre_create_post(request: Request, handlers: GenreHandlers = Depends(get_handlers)):
    fields = await read_form_fields(request)
    return render_outcome(request, await handlers.create(fields))


@router.get("/genre/{genre_id}")
async def genre_detail(
    genre_id: str, request: Request, handlers: GenreHandlers = Depends(get_handlers),
):
    return render_outcome(request, await handlers.detail(genre_id))


@router.get("/genre/{genre_id}/delete")
async def genre_delete_get(
    genre_id: str, request: Request, handlers: GenreHandlers = Depends(get_handlers),
):
    return render_outcome(request, await handlers.delete_form(genre_id))


@router.post("/genre/{genre_id}/delete")
async def genre_delete_post(
    genre_id: str, request: Request, handlers: GenreHandlers = Depends(get_handlers),
):
    fields = await read_form_fields(request)
    return render_outcome(request, await handlers.delete(fields))


@router.get("/genre/{genre_id}/update")
async def genre_update_get(
    genre_id: str, request: Request, handlers: GenreHandlers = Depends(get_handlers),
):
    return render_outcome(request, await handlers.update_form(genre_id))


@router.post("/genre/{genre_id}/update")
async def genre_update_post(
    genre_id: str, request: Request, handlers: GenreHandlers = Depends(get_handlers),
):
    fields = await read_form_fields(request)
    return render_outcome(request, await handlers.update(genre_id, fields))
