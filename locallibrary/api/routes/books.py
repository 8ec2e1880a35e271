"""Book Routes: list, detail, create, update, delete.

Invariants:
    - Multi-valued "genre" checkboxes arrive as a list (see read_form_fields)
"""

from fastapi import APIRouter, Depends, Request

from locallibrary.api.templating import read_form_fields, render_outcome
from locallibrary.infrastructure.catalog_store import CatalogStore, get_store
from locallibrary.services.book_handlers import BookHandlers

router = APIRouter(prefix="/catalog", tags=["books"])


def get_handlers(store: CatalogStore = Depends(get_store)) -> BookHandlers:
    return BookHandlers(store)


@router.get("/books")
async def book_list(request: Request, handlers: BookHandlers = Depends(get_handlers)):
    return render_outcome(request, await handlers.list_all())


@router.get("/book/create")
async def book_create_get(request: Request, handlers: BookHandlers = Depends(get_handlers)):
    return render_outcome(request, await handlers.create_form())


@router.post("/book/create")
async def book_create_post(request: Request, handlers: BookHandlers = Depends(get_handlers)):
    fields = await read_form_fields(request)
    return render_outcome(request, await handlers.create(fields))


@router.get("/book/{book_id}")
async def book_detail(
    book_id: str, request: Request, handlers: BookHandlers = Depends(get_handlers),
):
    return render_outcome(request, await handlers.detail(book_id))


@router.get("/book/{book_id}/delete")
async def book_delete_get(
    book_id: str, request: Request, handlers: BookHandlers = Depends(get_handlers),
):
    return render_outcome(request, await handlers.delete_form(book_id))


@router.post("/book/{book_id}/delete")
async def book_delete_post(
    book_id: str, request: Request, handlers: BookHandlers = Depends(get_handlers),
):
    fields = await read_form_fields(request)
    return render_outcome(request, await handlers.delete(fields))


@router.get("/book/{book_id}/update")
async def book_update_get(
    book_id: str, request: Request, handlers: BookHandlers = Depends(get_handlers),
):
    return render_outcome(request, await handlers.update_form(book_id))


@router.post("/book/{book_id}/update")
async def book_update_post(
    book_id: str, request: Request, handlers: BookHandlers = Depends(get_handlers),
):
    fields = await read_form_fields(request)
    return render_outcome(request, await handlers.update(book_id, fields))
