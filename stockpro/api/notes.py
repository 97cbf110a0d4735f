"""
StockPro - Notes API
"""
from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from stockpro.core.rbac import Caller
from stockpro.database import get_db
from stockpro.schemas import NoteCreate, NoteResponse
from stockpro.services import notes as note_service
from stockpro.api.auth import get_current_caller

router = APIRouter(prefix="/notes", tags=["Notes"])


@router.get("", response_model=List[NoteResponse])
async def list_notes(
    db: AsyncSession = Depends(get_db),
    caller: Caller = Depends(get_current_caller)
):
    notes = await note_service.list_notes(db, caller)
    return [n.to_dict() for n in notes]


@router.post("", response_model=NoteResponse, status_code=status.HTTP_201_CREATED)
async def create_note(
    request: NoteCreate,
    db: AsyncSession = Depends(get_db),
    caller: Caller = Depends(get_current_caller)
):
    """Cria anotacao, opcionalmente ligada a uma encomenda"""
    note = await note_service.create_note(db, caller, request)
    return note.to_dict()


@router.delete("/{note_id}")
async def delete_note(
    note_id: str,
    db: AsyncSession = Depends(get_db),
    caller: Caller = Depends(get_current_caller)
):
    """Remove anotacao (FUNCIONARIO apenas as proprias)"""
    await note_service.delete_note(db, caller, note_id)
    return {"message": "Anotacao removida"}
