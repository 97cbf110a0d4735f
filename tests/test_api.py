"""
Fluxos HTTP ponta a ponta sobre a aplicacao FastAPI
"""
import json

from stockpro.utils.storage import ORDER_IMAGES_FOLDER, get_uploads_dir

from .conftest import PASSWORD, auth_headers


async def test_health(client):
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


async def test_login_and_me(client, gerente_user):
    response = await client.post(
        "/api/auth/login", json={"email": "gerente@stockpro.com", "password": PASSWORD}
    )
    assert response.status_code == 200
    token = response.json()["access_token"]

    response = await client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 200
    assert response.json()["email"] == "gerente@stockpro.com"


async def test_login_with_wrong_password(client, gerente_user):
    response = await client.post(
        "/api/auth/login", json={"email": "gerente@stockpro.com", "password": "errada123"}
    )
    assert response.status_code == 401
    assert response.json()["error"] == "unauthenticated"


async def test_requests_without_token_are_rejected(client):
    response = await client.get("/api/products")
    assert response.status_code == 401

    response = await client.get("/api/products", headers={"Authorization": "Bearer invalido"})
    assert response.status_code == 401


async def test_sale_flow_and_insufficient_stock(client, funcionario_user, make_product):
    product = await make_product(buy_price=10.0, sell_price=15.0, quantity=100)
    headers = auth_headers(funcionario_user)

    response = await client.post("/api/sales", headers=headers, json={
        "items": [{"product_id": product.id, "quantity": 20, "unit_price": 15.0}]
    })
    assert response.status_code == 201
    body = response.json()
    assert body["total"] == 300.0
    assert body["profit"] == 100.0
    assert body["items"][0]["product_name"] == product.name

    response = await client.post("/api/sales", headers=headers, json={
        "items": [{"product_id": product.id, "quantity": 81, "unit_price": 15.0}]
    })
    assert response.status_code == 400
    assert response.json()["error"] == "insufficient_stock"

    response = await client.get(f"/api/products/{product.id}", headers=headers)
    assert response.json()["quantity"] == 80


async def test_invalid_body_returns_400(client, funcionario_user):
    response = await client.post("/api/sales", headers=auth_headers(funcionario_user), json={"items": []})
    assert response.status_code == 400
    assert response.json()["error"] == "validation_error"


async def test_purchase_requires_some_item(client, funcionario_user):
    response = await client.post(
        "/api/purchases", headers=auth_headers(funcionario_user), json={"items": [], "free_items": []}
    )
    assert response.status_code == 400


async def test_funcionario_forbidden_from_manager_routes(client, funcionario_user):
    headers = auth_headers(funcionario_user)

    assert (await client.get("/api/reports", headers=headers)).status_code == 403
    assert (await client.get("/api/debts", headers=headers)).status_code == 403
    response = await client.post("/api/products", headers=headers, json={
        "name": "Arroz", "category": "Alimentos", "buy_price": 1.0, "sell_price": 2.0
    })
    assert response.status_code == 403
    assert response.json()["error"] == "forbidden"


async def test_order_lifecycle(client, funcionario_user, gerente_user, admin_user, make_product):
    product = await make_product(quantity=10)

    response = await client.post(
        "/api/orders",
        headers=auth_headers(funcionario_user),
        data={
            "items": json.dumps([{"product_id": product.id, "quantity": 4, "unit_price": 22.0}]),
            "client_name": "Carlos",
        },
        files=[("images", ("foto.png", b"\x89PNG fake", "image/png"))],
    )
    assert response.status_code == 201
    order = response.json()
    assert order["total"] == 88.0
    assert len(order["images"]) == 1
    assert order["images"][0]["url"].startswith("/uploads/orders/")

    response = await client.put(
        f"/api/orders/{order['id']}/status",
        headers=auth_headers(gerente_user),
        json={"status": "CONCLUIDA"},
    )
    assert response.status_code == 200
    assert response.json()["status"] == "CONCLUIDA"

    response = await client.get(f"/api/products/{product.id}", headers=auth_headers(gerente_user))
    assert response.json()["quantity"] == 6

    response = await client.delete(f"/api/orders/{order['id']}", headers=auth_headers(admin_user))
    assert response.status_code == 200


async def test_order_rejects_non_image_upload(client, funcionario_user):
    response = await client.post(
        "/api/orders",
        headers=auth_headers(funcionario_user),
        data={"description": "Bolo"},
        files=[("images", ("notas.txt", b"texto", "text/plain"))],
    )
    assert response.status_code == 400
    assert response.json()["error"] == "validation_error"


async def test_order_image_extension_ignores_path_in_filename(client, funcionario_user):
    response = await client.post(
        "/api/orders",
        headers=auth_headers(funcionario_user),
        data={"description": "Bolo"},
        files=[("images", ("a./../x", b"\x89PNG fake", "image/png"))],
    )
    assert response.status_code == 201

    url = response.json()["images"][0]["url"]
    filename = url.rsplit("/", 1)[-1]
    assert url == f"/uploads/orders/{filename}"
    assert filename.endswith(".png")
    assert (get_uploads_dir() / ORDER_IMAGES_FOLDER / filename).is_file()


async def test_gerente_edit_does_not_store_images(client, funcionario_user, gerente_user):
    response = await client.post(
        "/api/orders", headers=auth_headers(funcionario_user), data={"description": "Bolo"}
    )
    order_id = response.json()["id"]
    folder = get_uploads_dir() / ORDER_IMAGES_FOLDER
    before = set(folder.iterdir())

    response = await client.put(
        f"/api/orders/{order_id}",
        headers=auth_headers(gerente_user),
        data={"notes": "Sem cobertura"},
        files=[("images", ("foto.png", b"\x89PNG fake", "image/png"))],
    )
    assert response.status_code == 403
    assert set(folder.iterdir()) == before


async def test_order_without_items_or_description(client, funcionario_user):
    response = await client.post(
        "/api/orders", headers=auth_headers(funcionario_user), data={"client_name": "Carlos"}
    )
    assert response.status_code == 400


async def test_debt_and_payments(client, gerente_user):
    headers = auth_headers(gerente_user)

    response = await client.post("/api/debts", headers=headers, json={
        "client_name": "Maria", "total_amount": 500.0
    })
    assert response.status_code == 201
    debt_id = response.json()["id"]

    response = await client.post("/api/payments", headers=headers, json={"debt_id": debt_id, "amount": 200.0})
    assert response.status_code == 201
    assert response.json()["debt"]["remaining"] == 300.0

    response = await client.post("/api/payments", headers=headers, json={"debt_id": debt_id, "amount": 300.01})
    assert response.status_code == 400
    assert response.json()["error"] == "amount_exceeds_balance"

    response = await client.post("/api/payments", headers=headers, json={"debt_id": debt_id, "amount": 300.0})
    assert response.json()["debt"]["is_paid"] is True


async def test_admin_creates_user_who_can_login(client, admin_user):
    response = await client.post("/api/users", headers=auth_headers(admin_user), json={
        "name": "Novo Gerente", "email": "novo@stockpro.com", "password": "novo1234", "role": "GERENTE"
    })
    assert response.status_code == 201

    response = await client.post(
        "/api/auth/login", json={"email": "novo@stockpro.com", "password": "novo1234"}
    )
    assert response.status_code == 200
    assert response.json()["user"]["role"] == "GERENTE"


async def test_camel_case_payloads_are_accepted(client, funcionario_user, make_product):
    product = await make_product(quantity=5)

    response = await client.post("/api/purchases", headers=auth_headers(funcionario_user), json={
        "items": [{"productId": product.id, "quantity": 5, "unitPrice": 10.0}],
        "freeItems": [{"description": "Frete", "quantity": 1, "unitPrice": 15.0}],
    })

    assert response.status_code == 201
    assert response.json()["total"] == 65.0
    assert len(response.json()["items"]) == 2
