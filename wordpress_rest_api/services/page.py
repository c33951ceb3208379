"""Page service."""

from __future__ import annotations

from ..config import PAGE_TYPE
from ..models import ContentBase, GetItemRequest, ListRequest
from .content import ContentService


class PageService(ContentService):
    """Pages carry the template as their only view-only field."""

    content_type = PAGE_TYPE

    async def get_page(self, request: GetItemRequest) -> ContentBase:
        return await self.get_item(request)

    async def list_pages(self, request: ListRequest) -> list[ContentBase]:
        return await self.list_items(request)
