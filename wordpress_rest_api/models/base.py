"""Base types shared by the response and request models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class ResponseModel(BaseModel):
    """Base for every model serialized into a REST response.

    Field names that are not valid Python identifiers (``_links``,
    ``wp:featuredmedia``...) are declared as aliases; responses are always
    dumped with ``by_alias=True``.
    """

    model_config = ConfigDict(populate_by_name=True)

    def to_response(self) -> dict:
        """Dump the model to JSON-compatible data, dropping unset optional fields."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class Rendered(ResponseModel):
    """A dictionary with a single ``rendered`` key (title, guid, caption)."""

    rendered: str = ""


class ContentRendered(ResponseModel):
    """Rendered content/excerpt with its password-protection flag."""

    rendered: str = ""
    protected: bool = False
