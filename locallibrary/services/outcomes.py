"""Handler Outcomes: what a request handler asks the route layer to send back.

Invariants:
    - Handlers return exactly one outcome or raise a CatalogError
    - Rendered.view names a template in locallibrary/templates/ without the .html suffix
    - Redirects after a POST use 303 so the browser follows with GET
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Rendered:
    view: str
    context: dict = field(default_factory=dict)
    status_code: int = 200


@dataclass(frozen=True)
class Redirect:
    url: str
    status_code: int = 303


@dataclass(frozen=True)
class PlainText:
    text: str
    status_code: int = 200


HandlerOutcome = Rendered | Redirect | PlainText
