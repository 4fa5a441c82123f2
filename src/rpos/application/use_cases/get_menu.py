from __future__ import annotations

from rpos.application.dto.responses import MenuResponse
from rpos.application.mappers.menu_mapper import to_menu_response
from rpos.domain.catalog.entities import Catalog


class GetMenu:
    def __init__(self, catalog: Catalog) -> None:
        self._catalog = catalog

    def execute(self) -> MenuResponse:
        return to_menu_response(self._catalog)
