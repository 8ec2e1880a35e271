"""Author Routes: list, detail, create, delete, update placeholder.

Invariants:
    - /author/create is registered before /author/{author_id} so "create" is never read as an id
    - Routes only read path/body and render the handler's outcome
"""

from fastapi import APIRouter, Depends, Request

from locallibrary.api.templating import read_form_fields, render_outcome
from locallibrary.infrastructure.catalog_store import CatalogStore, get_store
from locallibrary.services.author_handlers import AuthorHandlers

router = APIRouter(prefix="/catalog", tags=["authors"])


def get_handlers(store: CatalogStore = Depends(get_store)) -> AuthorHandlers:
    return AuthorHandlers(store)


@router.get("/authors")
async def author_list(request: Request, handlers: AuthorHandlers = Depends(get_handlers)):
    return render_outcome(request, await handlers.list_all())


@router.get("/author/create")
async def author_create_get(request: Request, handlers: AuthorHandlers = Depends(get_handlers)):
    return render_outcome(request, await handlers.create_form())


@router.post("/author/create")
async def author_create_post(request: Request, handlers: AuthorHandlers = Depends(get_handlers)):
    fields = await read_form_fields(request)
    return render_outcome(request, await handlers.create(fields))


@router.get("/author/{author_id}")
async def author_detail(
    author_id: str, request: Request, handlers: AuthorHandlers = Depends(get_handlers),
):
    return render_outcome(request, await handlers.detail(author_id))


@router.get("/author/{author_id}/delete")
async def author_delete_get(
    author_id: str, request: Request, handlers: AuthorHandlers = Depends(get_handlers),
):
    return render_outcome(request, await handlers.delete_form(author_id))


@router.post("/author/{author_id}/delete")
async def author_delete_post(
    author_id: str, request: Request, handlers: AuthorHandlers = Depends(get_handlers),
):
    fields = await read_form_fields(request)
    return render_outcome(request, await handlers.delete(fields))


@router.get("/author/{author_id}/update")
async def author_update_get(
    author_id: str, request: Request, handlers: AuthorHandlers = Depends(get_handlers),
):
    return render_outcome(request, await handlers.update_form(author_id))


@router.post("/author/{author_id}/update")
async def author_update_post(
    author_id: str, request: Request, handlers: AuthorHandlers = Depends(get_handlers),
):
    fields = await read_form_fields(request)
    return render_outcome(request, await handlers.update(author_id, fields))
