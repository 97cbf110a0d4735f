"""
StockPro - Transaction helpers
Fronteira transacional comum a todas as operacoes que alteram o stock
"""
import logging
from contextlib import asynccontextmanager

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from stockpro.core.errors import StockProError, TransactionFailure

logger = logging.getLogger(__name__)


@asynccontextmanager
async def atomic(db: AsyncSession, operation: str):
    """
    Executa o bloco numa unica transacao.

    Commit no fim do bloco; qualquer erro faz rollback de tudo o que foi
    preparado no bloco. Erros do banco viram TransactionFailure.
    """
    try:
        yield
        await db.commit()
    except StockProError as e:
        await db.rollback()
        logger.warning(f"[{operation}] rejeitada: {e.message}")
        raise
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"[{operation}] falha na transacao: {e}")
        raise TransactionFailure() from e


async def fetch_one(db: AsyncSession, model, record_id: str, lock: bool = False):
    """
    Busca um registro pelo id relendo o estado do banco.
    Com lock=True usa SELECT ... FOR UPDATE (ignorado no SQLite).
    """
    query = select(model).where(model.id == record_id)
    if lock:
        query = query.with_for_update()
    result = await db.execute(query.execution_options(populate_existing=True))
    return result.scalar_one_or_none()
