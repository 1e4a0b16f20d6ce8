"""Application services: catalog maintenance (add, update price, list)."""

from __future__ import annotations

from typing import Callable

from storefront.application.dto import ProductDTO
from storefront.domain.exceptions import EntityNotFoundError, ValidationError
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.unit_of_work import UnitOfWork


def product_to_dto(product: Product) -> ProductDTO:
    return ProductDTO(
        product_id=product.product_id,
        name=product.name,
        price=product.price.amount,
        brand=product.brand,
        category_id=product.category_id,
        promotion_id=product.promotion_id,
    )


class AddProductHandler:

    def __init__(self, uow_factory: Callable[[], UnitOfWork]) -> None:
        self._uow_factory = uow_factory

    def handle(
        self,
        product_id: str,
        name: str,
        price: str,
        brand: str = "",
        category_id: str = "",
        promotion_id: str | None = None,
    ) -> ProductDTO:
        """Add a new product to the catalog under its business key."""
        if not product_id or not product_id.strip():
            raise ValidationError("Product ID is required")
        if not name or not name.strip():
            raise ValidationError("Product name is required")

        product = Product(
            product_id=product_id.strip(),
            name=name.strip(),
            price=Money.of(price),
            brand=brand,
            category_id=category_id,
            promotion_id=promotion_id or None,
        )
        if product.price.amount <= 0:
            raise ValidationError("Product price must be greater than zero")

        with self._uow_factory() as uow:
            if uow.products.get_by_id(product.product_id) is not None:
                raise ValidationError(f"Product '{product.product_id}' already exists")
            uow.products.save(product)
            uow.commit()
        return product_to_dto(product)


class UpdateProductHandler:

    def __init__(self, uow_factory: Callable[[], UnitOfWork]) -> None:
        self._uow_factory = uow_factory

    def handle(self, product_id: str, new_price: str) -> None:
        """Update a product's price.

        Existing orders keep the price captured when they were placed.
        """
        with self._uow_factory() as uow:
            product = uow.products.get_by_id(product_id)
            if product is None:
                raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

            product.update_price(Money.of(new_price))
            uow.products.save(product)
            uow.commit()


class ListProductsHandler:

    def __init__(self, uow_factory: Callable[[], UnitOfWork]) -> None:
        self._uow_factory = uow_factory

    def handle(self) -> list[ProductDTO]:
        with self._uow_factory() as uow:
            return [product_to_dto(p) for p in uow.products.list_all()]
