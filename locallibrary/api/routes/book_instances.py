"""BookInstance Routes: list, detail, create, update, delete."""

from fastapi import APIRouter, Depends, Request

from locallibrary.api.templating import read_form_fields, render_outcome
from locallibrary.infrastructure.catalog_store import CatalogStore, get_store
from locallibrary.services.book_instance_handlers import BookInstanceHandlers

router = APIRouter(prefix="/catalog", tags=["bookinstances"])


def get_handlers(store: CatalogStore = Depends(get_store)) -> BookInstanceHandlers:
    return BookInstanceHandlers(store)


@router.get("/bookinstances")
async def bookinstance_list(
    request: Request, handlers: BookInstanceHandlers = Depends(get_handlers),
):
    return render_outcome(request, await handlers.list_all())


@router.get("/bookinstance/create")
async def bookinstance_create_get(
    request: Request, handlers: BookInstanceHandlers = Depends(get_handlers),
):
    return render_outcome(request, await handlers.create_form())


@router.post("/bookinstance/create")
async def bookinstance_create_post(
    request: Request, handlers: BookInstanceHandlers = Depends(get_handlers),
):
    fields = await read_form_fields(request)
    return render_outcome(request, await handlers.create(fields))


@router.get("/bookinstance/{instance_id}")
async def bookinstance_detail(
    instance_id: str, request: Request,
    handlers: BookInstanceHandlers = Depends(get_handlers),
):
    return render_outcome(request, await handlers.detail(instance_id))


@router.get("/bookinstance/{instance_id}/delete")
async def bookinstance_delete_get(
    instance_id: str, request: Request,
    handlers: BookInstanceHandlers = Depends(get_handlers),
):
    return render_outcome(request, await handlers.delete_form(instance_id))


@router.post("/bookinstance/{instance_id}/delete")
async def bookinstance_delete_post(
    instance_id: str, request: Request,
    handlers: BookInstanceHandlers = Depends(get_handlers),
):
    fields = await read_form_fields(request)
    return render_outcome(request, await handlers.delete(fields))


@router.get("/bookinstance/{instance_id}/update")
async def bookinstance_update_get(
    instance_id: str, request: Request,
    handlers: BookInstanceHandlers = Depends(get_handlers),
):
    return render_outcome(request, await handlers.update_form(instance_id))


@router.post("/bookinstance/{instance_id}/update")
async def bookinstance_update_post(
    instance_id: str, request: Request,
    handlers: BookInstanceHandlers = Depends(get_handlers),
):
    fields = await read_form_fields(request)
    return render_outcome(request, await handlers.update(instance_id, fields))
