"""Request-scoped accessors for the service container and settings."""
from typing import Optional

from fastapi import Query, Request

from mtor.config import Settings
from mtor.services import Services
from mtor.utils import InvalidPageRequestError


def get_services(request: Request) -> Services:
    return request.app.state.services


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


class Pagination:
    def __init__(self, page: int, size: int):
        self.page = page
        self.size = size


def pagination(
    request: Request,
    page: int = Query(0, description="Zero-based page index"),
    size: Optional[int] = Query(None, description="Page size"),
) -> Pagination:
    settings = get_settings(request)
    size = settings.default_page_size if size is None else size
    if size > settings.max_page_size:
        raise InvalidPageRequestError(page, size)
    return Pagination(page, size)
