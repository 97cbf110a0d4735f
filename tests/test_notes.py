import pytest

from stockpro.core.errors import Forbidden, NoteNotFound, OrderNotFound
from stockpro.schemas import NoteCreate
from stockpro.services import notes


async def test_funcionario_lists_only_own_notes(db, funcionario, other_funcionario, gerente):
    mine = await notes.create_note(db, funcionario, NoteCreate(title="Minha", content="a"))
    await notes.create_note(db, other_funcionario, NoteCreate(title="Outra", content="b"))

    assert [n.id for n in await notes.list_notes(db, funcionario)] == [mine.id]
    assert len(await notes.list_notes(db, gerente)) == 2


async def test_note_for_unknown_order(db, funcionario):
    with pytest.raises(OrderNotFound):
        await notes.create_note(db, funcionario, NoteCreate(title="t", content="c", order_id="nao-existe"))


async def test_funcionario_deletes_only_own_notes(db, funcionario, other_funcionario, gerente):
    note = await notes.create_note(db, funcionario, NoteCreate(title="Minha", content="a"))
    note_id = note.id

    with pytest.raises(Forbidden):
        await notes.delete_note(db, other_funcionario, note_id)

    await notes.delete_note(db, gerente, note_id)
    with pytest.raises(NoteNotFound):
        await notes.delete_note(db, funcionario, note_id)
