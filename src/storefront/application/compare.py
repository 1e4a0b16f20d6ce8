"""Application services: compare list use cases.

Same session/account split as the cart, but the list is a set of
product identifiers rather than quantities.
"""

from __future__ import annotations

from typing import Callable

import structlog

from storefront.application.dto import Identity, ProductDTO, Session
from storefront.application.products import product_to_dto
from storefront.domain.exceptions import EntityNotFoundError, ValidationError
from storefront.domain.model.cart import CompareList
from storefront.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)

SESSION_COMPARE_KEY = "compareList"


class GetCompareListHandler:

    def __init__(self, uow_factory: Callable[[], UnitOfWork]) -> None:
        self._uow_factory = uow_factory

    def handle(self, identity: Identity | None, session: Session) -> list[ProductDTO]:
        """Return the compared products, migrating the session list on first read."""
        guest_list = CompareList.from_session(session.get(SESSION_COMPARE_KEY))

        with self._uow_factory() as uow:
            if identity is None:
                compare = guest_list
            else:
                compare = uow.compares.get(identity.account_id)
                if compare is None and not guest_list.is_empty:
                    uow.compares.save(identity.account_id, guest_list)
                    uow.commit()
                    session[SESSION_COMPARE_KEY] = []
                    compare = guest_list
                    logger.info(
                        "compare_list_migrated_from_session",
                        account_id=identity.account_id,
                    )
            ids = compare.product_ids if compare is not None else []
            products = uow.products.get_many(ids)

        return [product_to_dto(p) for p in products]


class AddCompareItemHandler:

    def __init__(self, uow_factory: Callable[[], UnitOfWork]) -> None:
        self._uow_factory = uow_factory

    def handle(self, identity: Identity | None, session: Session, product_id: str) -> list[str]:
        if not product_id:
            raise ValidationError("Invalid or missing productId")

        with self._uow_factory() as uow:
            if uow.products.get_by_id(product_id) is None:
                raise EntityNotFoundError("Product not found")

            if identity is None:
                compare = CompareList.from_session(session.get(SESSION_COMPARE_KEY))
                compare.add(product_id)
                session[SESSION_COMPARE_KEY] = compare.to_session()
                return compare.to_session()

            compare = uow.compares.get(identity.account_id) or CompareList()
            compare.add(product_id)
            uow.compares.save(identity.account_id, compare)
            uow.commit()
        return compare.to_session()


class RemoveCompareItemHandler:

    def __init__(self, uow_factory: Callable[[], UnitOfWork]) -> None:
        self._uow_factory = uow_factory

    def handle(self, identity: Identity | None, session: Session, product_id: str) -> list[str]:
        if identity is None:
            compare = CompareList.from_session(session.get(SESSION_COMPARE_KEY))
            compare.remove(product_id)
            session[SESSION_COMPARE_KEY] = compare.to_session()
            return compare.to_session()

        with self._uow_factory() as uow:
            compare = uow.compares.get(identity.account_id)
            if compare is None:
                return []
            compare.remove(product_id)
            uow.compares.save(identity.account_id, compare)
            uow.commit()
        return compare.to_session()
