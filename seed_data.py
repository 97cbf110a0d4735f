"""
Script para criar dados de demonstracao no StockPro
Execute (com o servidor a correr): python seed_data.py
"""
import os
import httpx

BASE_URL = os.getenv("STOCKPRO_URL", "http://localhost:8080")
ADMIN_EMAIL = os.getenv("ADMIN_EMAIL", "admin@stockpro.com")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "change-me-in-production")

USERS = [
    {"name": "Gerente Silva", "email": "gerente@stockpro.com", "password": "gerente123", "role": "GERENTE"},
    {"name": "João Funcionário", "email": "funcionario@stockpro.com", "password": "func123", "role": "FUNCIONARIO"},
]

PRODUCTS = [
    {"name": "Arroz 5kg", "category": "Alimentos", "buy_price": 15.0, "sell_price": 22.0, "quantity": 100, "min_quantity": 20},
    {"name": "Feijão 1kg", "category": "Alimentos", "buy_price": 8.0, "sell_price": 12.0, "quantity": 80, "min_quantity": 15},
    {"name": "Óleo de Soja 900ml", "category": "Alimentos", "buy_price": 6.5, "sell_price": 9.5, "quantity": 50, "min_quantity": 10},
    {"name": "Açúcar 1kg", "category": "Alimentos", "buy_price": 4.0, "sell_price": 6.5, "quantity": 60, "min_quantity": 15},
    {"name": "Farinha de Trigo 1kg", "category": "Alimentos", "buy_price": 3.5, "sell_price": 5.5, "quantity": 45, "min_quantity": 10},
    {"name": "Detergente 500ml", "category": "Limpeza", "buy_price": 2.0, "sell_price": 3.5, "quantity": 3, "min_quantity": 10},
    {"name": "Sabão em Pó 1kg", "category": "Limpeza", "buy_price": 8.0, "sell_price": 12.0, "quantity": 30, "min_quantity": 8},
    {"name": "Água Sanitária 1L", "category": "Limpeza", "buy_price": 3.0, "sell_price": 5.0, "quantity": 5, "min_quantity": 10},
    {"name": "Refrigerante 2L", "category": "Bebidas", "buy_price": 5.0, "sell_price": 8.0, "quantity": 40, "min_quantity": 12},
    {"name": "Água Mineral 500ml", "category": "Bebidas", "buy_price": 1.0, "sell_price": 2.5, "quantity": 200, "min_quantity": 50},
]


def main():
    print("=== Setup de Dados de Demonstracao ===\n")

    # 1. Setup inicial (ignora se ja existir admin)
    print("1. Setup inicial...")
    response = httpx.post(f"{BASE_URL}/api/auth/setup")
    if response.status_code == 200:
        print(f"   Admin criado: {response.json()['email']}")
    else:
        print("   Setup ja realizado")

    # 2. Login
    print("\n2. Fazendo login...")
    login_response = httpx.post(
        f"{BASE_URL}/api/auth/login",
        json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD}
    )
    if login_response.status_code != 200:
        print(f"Erro no login: {login_response.text}")
        return

    headers = {"Authorization": f"Bearer {login_response.json()['access_token']}"}
    print("   Token obtido!")

    # 3. Usuarios
    print("\n3. Criando usuarios...")
    for user in USERS:
        response = httpx.post(f"{BASE_URL}/api/users", json=user, headers=headers)
        if response.status_code == 201:
            print(f"   {user['role']}: {user['email']}")
        else:
            print(f"   {user['email']}: {response.json().get('detail')}")

    # 4. Produtos
    print("\n4. Criando produtos...")
    products = []
    for product in PRODUCTS:
        response = httpx.post(f"{BASE_URL}/api/products", json=product, headers=headers)
        if response.status_code != 201:
            print(f"Erro ao criar produto: {response.text}")
            return
        products.append(response.json())
    print(f"   {len(products)} produtos criados")

    # 5. Compra semanal
    print("\n5. Registrando compra...")
    response = httpx.post(
        f"{BASE_URL}/api/purchases",
        json={
            "notes": "Compra semanal de alimentos",
            "items": [
                {"product_id": products[0]["id"], "quantity": 20, "unit_price": 15.0},
                {"product_id": products[1]["id"], "quantity": 30, "unit_price": 8.0},
                {"product_id": products[2]["id"], "quantity": 20, "unit_price": 6.5},
                {"product_id": products[3]["id"], "quantity": 20, "unit_price": 4.0},
            ],
            "free_items": [
                {"description": "Frete", "quantity": 1, "unit_price": 25.0},
            ],
        },
        headers=headers
    )
    print(f"   Compra: {response.json().get('total')}")

    # 6. Venda
    print("\n6. Registrando venda...")
    response = httpx.post(
        f"{BASE_URL}/api/sales",
        json={
            "notes": "Venda da manha",
            "items": [
                {"product_id": products[0]["id"], "quantity": 2, "unit_price": 22.0},
                {"product_id": products[1]["id"], "quantity": 3, "unit_price": 12.0},
                {"product_id": products[3]["id"], "quantity": 1, "unit_price": 6.5},
                {"product_id": products[8]["id"], "quantity": 2, "unit_price": 8.0},
            ],
        },
        headers=headers
    )
    sale = response.json()
    print(f"   Venda: total {sale.get('total')}, lucro {sale.get('profit')}")

    # 7. Divida com pagamento parcial
    print("\n7. Registrando divida...")
    response = httpx.post(
        f"{BASE_URL}/api/debts",
        json={"client_name": "Maria Santos", "total_amount": 150.0, "description": "Compras do mes"},
        headers=headers
    )
    debt = response.json()
    httpx.post(
        f"{BASE_URL}/api/payments",
        json={"debt_id": debt["id"], "amount": 50.0, "notes": "Primeira parcela"},
        headers=headers
    )
    print(f"   Divida de {debt['client_name']}: 150.00 (pago 50.00)")

    print("\n=== Dados de demonstracao criados ===")


if __name__ == "__main__":
    main()
