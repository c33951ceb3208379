"""FastAPI dependencies providing the services built at startup.

Tests replace them through ``app.dependency_overrides``.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from ..services import PageService, PostService


def get_post_service(request: Request) -> PostService:
    return request.app.state.post_service


def get_page_service(request: Request) -> PageService:
    return request.app.state.page_service


PostServiceDep = Annotated[PostService, Depends(get_post_service)]
PageServiceDep = Annotated[PageService, Depends(get_page_service)]
