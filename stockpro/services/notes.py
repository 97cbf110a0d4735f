"""
StockPro - Notes
Anotacoes da equipa, opcionalmente ligadas a uma encomenda
"""
import logging
from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from stockpro.core.errors import Forbidden, NoteNotFound, OrderNotFound
from stockpro.core.rbac import Caller, authorize
from stockpro.models import Note, Order
from stockpro.schemas import NoteCreate
from .transaction import atomic, fetch_one

logger = logging.getLogger(__name__)


async def list_notes(db: AsyncSession, caller: Caller) -> List[Note]:
    """FUNCIONARIO ve apenas as proprias anotacoes"""
    authorize(caller, "note:list")

    query = select(Note)
    if caller.is_funcionario:
        query = query.where(Note.user_id == caller.user_id)

    result = await db.execute(
        query.order_by(Note.created_at.desc()).execution_options(populate_existing=True)
    )
    return list(result.scalars().all())


async def create_note(db: AsyncSession, caller: Caller, data: NoteCreate) -> Note:
    authorize(caller, "note:create")

    async with atomic(db, "note-create"):
        if data.order_id:
            order = await db.get(Order, data.order_id)
            if order is None:
                raise OrderNotFound()

        note = Note(
            user_id=caller.user_id,
            order_id=data.order_id or None,
            title=data.title,
            content=data.content,
        )
        db.add(note)

    logger.info(f"Anotacao {note.id} criada por {caller.user_id}")
    return await fetch_one(db, Note, note.id)


async def delete_note(db: AsyncSession, caller: Caller, note_id: str):
    authorize(caller, "note:delete")

    async with atomic(db, "note-delete"):
        note = await fetch_one(db, Note, note_id, lock=True)
        if note is None:
            raise NoteNotFound()
        if caller.is_funcionario and note.user_id != caller.user_id:
            raise Forbidden("Apenas o autor pode remover esta anotacao")

        await db.delete(note)

    logger.info(f"Anotacao {note_id} removida por {caller.user_id}")
