"""Decoding of WordPress-style query strings into request models.

List parameters accept every form WordPress clients send: repeated keys
(``author=1&author=2``), the PHP array form (``author[]=1``) and
comma-separated values (``author=1,2``).
"""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError
from starlette.datastructures import QueryParams

from ..errors import InvalidParameter, InvalidRoute
from ..models import GetItemRequest, ListRequest

LIST_PARAMS = (
    "author",
    "author_exclude",
    "include",
    "exclude",
    "slug",
    "categories",
    "categories_exclude",
    "tags",
    "tags_exclude",
    "parent",
    "parent_exclude",
)

SCALAR_PARAMS = (
    "page",
    "per_page",
    "offset",
    "search",
    "after",
    "before",
    "status",
    "sticky",
    "order",
    "menu_order",
    "context",
)

# WordPress clients send `orderby`
ORDER_BY_PARAMS = ("orderby", "order_by")

EMBED_PARAM = "_embed"


def list_values(query: QueryParams, name: str) -> list[str]:
    """Collect a list parameter from its repeated, ``[]`` and comma-separated forms.

    Values keep their query string order, which ``orderby=include`` relies on.
    """
    keys = (name, f"{name}[]")
    values = []
    for key, raw in query.multi_items():
        if key not in keys:
            continue
        values.extend(part.strip() for part in raw.split(","))
    return [value for value in values if value]


def invalid_parameter(e: ValidationError) -> InvalidParameter:
    """Name the first field that failed validation."""
    error = e.errors()[0]
    param = str(error["loc"][0]) if error["loc"] else "request"
    return InvalidParameter(param, error["msg"])


def decode_list_request(query: QueryParams) -> ListRequest:
    """Build a ListRequest from a query string.

    Raises:
        InvalidParameter: If a value does not validate, e.g. ``per_page=0``.
    """
    data: dict[str, Any] = {}
    for name in LIST_PARAMS:
        values = list_values(query, name)
        if values:
            data[name] = values

    for name in SCALAR_PARAMS:
        value = query.get(name)
        if value is not None and value != "":
            data[name] = value

    for name in ORDER_BY_PARAMS:
        value = query.get(name)
        if value:
            data["order_by"] = value

    data["embed"] = EMBED_PARAM in query

    try:
        return ListRequest(**data)
    except ValidationError as e:
        raise invalid_parameter(e) from e


def decode_item_request(item_id: str, query: QueryParams) -> GetItemRequest:
    """Build a GetItemRequest from the path id and query string.

    Raises:
        InvalidRoute: If the id is not a number (no route matches).
        InvalidParameter: If a query value does not validate.
    """
    if not (item_id.isascii() and item_id.isdigit()):
        raise InvalidRoute(item_id)

    data: dict[str, Any] = {"id": int(item_id), "embed": EMBED_PARAM in query}
    for name in ("context", "password"):
        value = query.get(name)
        if value:
            data[name] = value

    try:
        return GetItemRequest(**data)
    except ValidationError as e:
        raise invalid_parameter(e) from e
