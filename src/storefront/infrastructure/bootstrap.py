"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Callable, Iterator

from storefront.domain.repository.unit_of_work import UnitOfWork
from storefront.infrastructure.persistence.database import Database
from storefront.infrastructure.persistence.sqlite_unit_of_work import SqliteUnitOfWork
from storefront.infrastructure.settings import Settings

UnitOfWorkFactory = Callable[[], UnitOfWork]


def database(settings: Settings) -> Database:
    return Database(settings.database_path, timeout=settings.db_timeout)


def unit_of_work_factory(db: Database) -> UnitOfWorkFactory:
    return lambda: SqliteUnitOfWork(db)


@contextmanager
def storefront(settings: Settings | None = None) -> Iterator[UnitOfWorkFactory]:
    """Open the database for the duration of the block."""
    with database(settings or Settings.from_env()) as db:
        yield unit_of_work_factory(db)
