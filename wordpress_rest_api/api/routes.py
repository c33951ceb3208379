"""Read-only post and page routes."""

from __future__ import annotations

from fastapi import APIRouter, Request

from .deps import PageServiceDep, PostServiceDep
from .params import decode_item_request, decode_list_request

router = APIRouter()


@router.get("/posts")
async def list_posts(request: Request, service: PostServiceDep) -> list[dict]:
    items = await service.list_posts(decode_list_request(request.query_params))
    return [item.to_response() for item in items]


@router.get("/posts/{item_id}")
async def get_post(item_id: str, request: Request, service: PostServiceDep) -> dict:
    item = await service.get_post(decode_item_request(item_id, request.query_params))
    return item.to_response()


@router.get("/pages")
async def list_pages(request: Request, service: PageServiceDep) -> list[dict]:
    items = await service.list_pages(decode_list_request(request.query_params))
    return [item.to_response() for item in items]


@router.get("/pages/{item_id}")
async def get_page(item_id: str, request: Request, service: PageServiceDep) -> dict:
    item = await service.get_page(decode_item_request(item_id, request.query_params))
    return item.to_response()
