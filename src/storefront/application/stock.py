"""Application services: stock levels (query and manual update)."""

from __future__ import annotations

from typing import Any, Callable

import structlog

from storefront.application.dto import StockDTO
from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.stock import StockRecord
from storefront.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)


class ShowStockHandler:

    def __init__(self, uow_factory: Callable[[], UnitOfWork]) -> None:
        self._uow_factory = uow_factory

    def handle(self, product_id: str) -> StockDTO:
        """Return the stock of one product; 0 if it has no stock record yet."""
        with self._uow_factory() as uow:
            if uow.products.get_by_id(product_id) is None:
                raise EntityNotFoundError("Product not found")
            record = uow.stock.get(product_id)
        return StockDTO(product_id=product_id, stock_quantity=record.quantity if record else 0)


class ListStockHandler:

    def __init__(self, uow_factory: Callable[[], UnitOfWork]) -> None:
        self._uow_factory = uow_factory

    def handle(self) -> list[StockDTO]:
        with self._uow_factory() as uow:
            records = uow.stock.list_all()
        return [StockDTO(product_id=r.product_id, stock_quantity=r.quantity) for r in records]


class SetStockHandler:

    def __init__(self, uow_factory: Callable[[], UnitOfWork]) -> None:
        self._uow_factory = uow_factory

    def handle(self, product_id: str, quantity: Any) -> StockDTO:
        """Set the quantity on hand, creating the stock record if needed."""
        record = StockRecord(product_id=product_id, quantity=quantity)

        with self._uow_factory() as uow:
            if uow.products.get_by_id(product_id) is None:
                raise EntityNotFoundError("Product not found")
            uow.stock.save(record)
            uow.commit()

        logger.info("stock_updated", product_id=product_id, stock_quantity=record.quantity)
        return StockDTO(product_id=product_id, stock_quantity=record.quantity)
