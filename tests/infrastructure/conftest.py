import pytest

from storefront.application.products import AddProductHandler
from storefront.application.stock import SetStockHandler
from storefront.infrastructure.bootstrap import unit_of_work_factory
from storefront.infrastructure.persistence.database import Database


@pytest.fixture()
def db(tmp_path):
    with Database(tmp_path / "storefront.db", timeout=10.0) as database:
        yield database


@pytest.fixture()
def uow_factory(db):
    """Unit-of-work factory over a catalog of P1 (100, stock 5) and P2 (250.50, stock 1)."""
    factory = unit_of_work_factory(db)
    AddProductHandler(factory).handle("P1", "Chateau Margaux", "100")
    AddProductHandler(factory).handle("P2", "Moet Brut", "250.50")
    SetStockHandler(factory).handle("P1", 5)
    SetStockHandler(factory).handle("P2", 1)
    return factory
