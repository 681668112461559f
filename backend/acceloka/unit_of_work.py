"""Unit of Work: one transaction shared by the catalog and ledger stores.

Usage:
    async with uow:
        ticket = await uow.catalog.get_ticket("T1", for_update=True)
        await uow.ledger.insert_entry(entry)
        await uow.commit()

Leaving the block without commit() rolls back everything staged inside it.
"""

from __future__ import annotations

import abc

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from acceloka.db import get_session
from acceloka.stores import CatalogStore, LedgerStore, SqlAlchemyCatalogStore, SqlAlchemyLedgerStore
from acceloka.stores.sqlalchemy_store import translate_errors


class AbstractUnitOfWork(abc.ABC):
    catalog: CatalogStore
    ledger: LedgerStore

    async def __aenter__(self) -> AbstractUnitOfWork:
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    @abc.abstractmethod
    async def commit(self) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    async def rollback(self) -> None:
        raise NotImplementedError


class SqlAlchemyUnitOfWork(AbstractUnitOfWork):
    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self) -> SqlAlchemyUnitOfWork:
        # End any implicit transaction left by earlier reads so the work starts fresh
        await self.rollback()
        self.catalog = SqlAlchemyCatalogStore(self.session)
        self.ledger = SqlAlchemyLedgerStore(self.session)
        await super().__aenter__()
        return self

    async def commit(self) -> None:
        with translate_errors("commit"):
            await self.session.commit()

    async def rollback(self) -> None:
        if self.session.in_transaction():
            with translate_errors("rollback"):
                await self.session.rollback()


def get_unit_of_work(session: AsyncSession = Depends(get_session)) -> AbstractUnitOfWork:
    return SqlAlchemyUnitOfWork(session)
