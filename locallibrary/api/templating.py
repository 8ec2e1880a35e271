"""Templating: Jinja2 environment and the outcome-to-response adapter.

Invariants:
    - Every HTML page is rendered from locallibrary/templates/
    - Handler outcomes map 1:1 onto Starlette responses (no logic here)
    - Form bodies reach handlers as plain dicts: repeated keys become lists
"""

from pathlib import Path
from typing import Any

from fastapi import Request
from fastapi.responses import PlainTextResponse, RedirectResponse, Response
from fastapi.templating import Jinja2Templates

from locallibrary.config import get_settings
from locallibrary.services.outcomes import HandlerOutcome, PlainText, Redirect, Rendered

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.globals["site_title"] = get_settings().site_title


def render_outcome(request: Request, outcome: HandlerOutcome) -> Response:
    """Turn a handler outcome into the HTTP response."""
    if isinstance(outcome, Rendered):
        return templates.TemplateResponse(
            request, f"{outcome.view}.html", outcome.context,
            status_code=outcome.status_code,
        )
    if isinstance(outcome, Redirect):
        return RedirectResponse(outcome.url, status_code=outcome.status_code)
    if isinstance(outcome, PlainText):
        return PlainTextResponse(outcome.text, status_code=outcome.status_code)
    raise TypeError(f"Unknown handler outcome: {outcome!r}")


async def read_form_fields(request: Request) -> dict[str, Any]:
    """Raw, untrusted form fields."""
    form = await request.form()
    fields: dict[str, Any] = {}
    for key in form.keys():
        values = form.getlist(key)
        fields[key] = values if len(values) > 1 else values[0]
    return fields
