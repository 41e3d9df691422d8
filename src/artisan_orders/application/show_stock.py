"""Application service: Show Stock use case (query)."""

from __future__ import annotations

from typing import Callable

from artisan_orders.application.dto import StockLineDTO
from artisan_orders.domain.repository.unit_of_work import UnitOfWork


class ShowStockHandler:

    def __init__(self, uow_factory: Callable[[], UnitOfWork]) -> None:
        self._uow_factory = uow_factory

    def handle(self, product_id: int) -> StockLineDTO:
        with self._uow_factory() as uow:
            stock = uow.inventory.get_stock(product_id)
        return StockLineDTO(product_id=product_id, stock=stock)
