from __future__ import annotations

from fastapi import APIRouter, Header, Request, Response

from rpos.api.dependencies import get_container
from rpos.application.dto.responses import MenuResponse
from rpos.application.use_cases.get_menu import GetMenu

router = APIRouter()


def _get_menu_use_case(request: Request) -> GetMenu:
    return GetMenu(catalog=get_container(request).catalog)


@router.get("/v1/menu", response_model=MenuResponse)
def get_menu(
    request: Request,
    response: Response,
    if_none_match: str | None = Header(default=None, alias="If-None-Match"),
) -> MenuResponse | Response:
    payload = _get_menu_use_case(request).execute()

    etag = f'"menu-v{payload.menuVersion}"'
    if if_none_match == etag:
        return Response(status_code=304, headers={"ETag": etag})

    response.headers["ETag"] = etag
    return payload
