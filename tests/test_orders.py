"""
Encomendas: criacao, visibilidade, edicao e remocao
"""
import pytest
from pydantic import ValidationError as SchemaValidationError

from stockpro.core.errors import Forbidden, OrderNotFound, ProductNotFound, ValidationError
from stockpro.models import OrderStatus
from stockpro.schemas import NoteCreate, OrderCreate, OrderUpdate
from stockpro.services import notes, orders


async def test_order_total_includes_custom_line(db, funcionario, make_product):
    product = await make_product()

    order = await orders.create_order(db, funcionario, OrderCreate(
        items=[{"product_id": product.id, "quantity": 2, "unit_price": 22.0}],
        description="Cesta personalizada",
        custom_quantity=3,
        custom_unit_price=10.0,
        client_name="Carlos",
        client_phone="11 99999-0000",
    ))

    assert order.total == 74.0
    assert order.status == OrderStatus.PENDENTE.value
    assert order.user_id == funcionario.user_id
    assert order.items[0].product.name == product.name


def test_order_requires_items_or_description():
    with pytest.raises(SchemaValidationError):
        OrderCreate(items=[], description="   ")


async def test_order_with_unknown_product(db, funcionario):
    with pytest.raises(ProductNotFound):
        await orders.create_order(db, funcionario, OrderCreate(
            items=[{"product_id": "nao-existe", "quantity": 1, "unit_price": 1.0}]
        ))


async def test_order_with_too_many_images(db, funcionario):
    urls = [f"/uploads/orders/{i}.jpg" for i in range(11)]

    with pytest.raises(ValidationError):
        await orders.create_order(db, funcionario, OrderCreate(description="Bolo"), urls)


async def test_funcionario_sees_only_own_orders(db, funcionario, other_funcionario, gerente):
    mine = await orders.create_order(db, funcionario, OrderCreate(description="Minha"))
    theirs = await orders.create_order(db, other_funcionario, OrderCreate(description="Outra"))

    assert [o.id for o in await orders.list_orders(db, funcionario)] == [mine.id]
    assert {o.id for o in await orders.list_orders(db, gerente)} == {mine.id, theirs.id}

    with pytest.raises(Forbidden):
        await orders.get_order(db, funcionario, theirs.id)


async def test_list_orders_by_status(db, funcionario):
    await orders.create_order(db, funcionario, OrderCreate(description="Bolo"))

    assert len(await orders.list_orders(db, funcionario, OrderStatus.PENDENTE)) == 1
    assert await orders.list_orders(db, funcionario, OrderStatus.CONCLUIDA) == []


async def test_admin_edits_order_and_images(db, funcionario, admin):
    order = await orders.create_order(
        db, funcionario, OrderCreate(description="Bolo"),
        ["/uploads/orders/a.jpg", "/uploads/orders/b.jpg"]
    )
    first_image = order.images[0]

    updated, removed = await orders.update_order(
        db, admin, order.id,
        OrderUpdate(client_name="Beatriz", remove_image_ids=[first_image.id]),
        ["/uploads/orders/c.jpg"]
    )

    assert updated.client_name == "Beatriz"
    assert updated.description == "Bolo"
    assert removed == [first_image.url]
    kept = {"/uploads/orders/a.jpg", "/uploads/orders/b.jpg"} - {first_image.url}
    assert {image.url for image in updated.images} == kept | {"/uploads/orders/c.jpg"}


async def test_edit_respects_image_limit(db, funcionario, admin):
    order = await orders.create_order(
        db, funcionario, OrderCreate(description="Bolo"),
        [f"/uploads/orders/{i}.jpg" for i in range(10)]
    )

    with pytest.raises(ValidationError):
        await orders.update_order(db, admin, order.id, OrderUpdate(), ["/uploads/orders/extra.jpg"])


async def test_only_admin_edits_or_deletes(db, funcionario, gerente):
    order = await orders.create_order(db, funcionario, OrderCreate(description="Bolo"))

    with pytest.raises(Forbidden):
        await orders.update_order(db, gerente, order.id, OrderUpdate(notes="x"))
    with pytest.raises(Forbidden):
        await orders.delete_order(db, gerente, order.id)


async def test_delete_order_detaches_notes(db, funcionario, admin):
    order = await orders.create_order(
        db, funcionario, OrderCreate(description="Bolo"), ["/uploads/orders/a.jpg"]
    )
    note = await notes.create_note(db, funcionario, NoteCreate(
        title="Entrega", content="Entregar sexta", order_id=order.id
    ))

    urls = await orders.delete_order(db, admin, order.id)

    assert urls == ["/uploads/orders/a.jpg"]
    with pytest.raises(OrderNotFound):
        await orders.get_order(db, admin, order.id)

    remaining = await notes.list_notes(db, funcionario)
    assert [n.id for n in remaining] == [note.id]
    assert remaining[0].order_id is None


async def test_delete_unknown_order(db, admin):
    with pytest.raises(OrderNotFound):
        await orders.delete_order(db, admin, "nao-existe")
