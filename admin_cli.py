"""
StockPro - CLI Admin
Ferramenta de linha de comando para consultar e operar o stock

Uso:
    python admin_cli.py login
    python admin_cli.py products list
    python admin_cli.py products create "Nome" "Categoria" <custo> <venda> [quantidade]
    python admin_cli.py sell <product_id> <quantidade> <preco>
    python admin_cli.py debts list
    python admin_cli.py pay <debt_id> <valor>
    python admin_cli.py report
"""
import os
import sys
import httpx
from pathlib import Path

BASE_URL = os.getenv("STOCKPRO_URL", "http://localhost:8080")
TOKEN_FILE = Path(".stockpro_token")


def save_token(token: str):
    TOKEN_FILE.write_text(token)


def load_token() -> str:
    if TOKEN_FILE.exists():
        return TOKEN_FILE.read_text().strip()
    return None


def get_headers():
    token = load_token()
    if not token:
        print("Erro: Faca login primeiro com 'python admin_cli.py login'")
        sys.exit(1)
    return {"Authorization": f"Bearer {token}"}


def error_detail(response: httpx.Response) -> str:
    try:
        return response.json().get("detail", response.text)
    except ValueError:
        return response.text


def cmd_login():
    """Login no sistema"""
    email = input("Email [admin@stockpro.com]: ").strip() or "admin@stockpro.com"
    password = input("Senha: ").strip()

    try:
        response = httpx.post(
            f"{BASE_URL}/api/auth/login",
            json={"email": email, "password": password}
        )
        if response.status_code == 200:
            data = response.json()
            save_token(data["access_token"])
            print(f"\n✓ Login bem sucedido!")
            print(f"  Usuario: {data['user']['email']} ({data['user']['role']})")
        else:
            print(f"✗ Erro: {error_detail(response)}")
    except httpx.HTTPError as e:
        print(f"✗ Erro de conexao: {e}")


def cmd_products_list():
    """Lista produtos"""
    try:
        response = httpx.get(f"{BASE_URL}/api/products", headers=get_headers())
        if response.status_code == 200:
            products = response.json()
            print(f"\n{'='*90}")
            print(f"{'ID':<36} | {'Nome':<22} | {'Categoria':<12} | {'Qtd':>5} | {'Venda':>8}")
            print(f"{'='*90}")
            for p in products:
                alert = " !" if p["low_stock"] else ""
                print(
                    f"{p['id']:<36} | {p['name'][:22]:<22} | {p['category'][:12]:<12} | "
                    f"{p['quantity']:>5} | {p['sell_price']:>8.2f}{alert}"
                )
            print(f"\nTotal: {len(products)} produtos (! = stock baixo)")
        else:
            print(f"✗ Erro: {error_detail(response)}")
    except httpx.HTTPError as e:
        print(f"✗ Erro: {e}")


def cmd_products_create(name: str, category: str, buy_price: str, sell_price: str, quantity: str = "0"):
    """Cria novo produto"""
    try:
        response = httpx.post(
            f"{BASE_URL}/api/products",
            json={
                "name": name,
                "category": category,
                "buy_price": float(buy_price),
                "sell_price": float(sell_price),
                "quantity": int(quantity),
            },
            headers=get_headers()
        )
        if response.status_code == 201:
            product = response.json()
            print(f"\n✓ Produto criado!")
            print(f"  ID: {product['id']}")
            print(f"  Nome: {product['name']}")
            print(f"  Stock: {product['quantity']}")
        else:
            print(f"✗ Erro: {error_detail(response)}")
    except httpx.HTTPError as e:
        print(f"✗ Erro: {e}")


def cmd_sell(product_id: str, quantity: str, unit_price: str):
    """Registra venda de um unico produto"""
    try:
        response = httpx.post(
            f"{BASE_URL}/api/sales",
            json={"items": [{
                "product_id": product_id,
                "quantity": int(quantity),
                "unit_price": float(unit_price),
            }]},
            headers=get_headers()
        )
        if response.status_code == 201:
            sale = response.json()
            print(f"\n✓ Venda registrada: total {sale['total']:.2f}, lucro {sale['profit']:.2f}")
        else:
            print(f"✗ Erro: {error_detail(response)}")
    except httpx.HTTPError as e:
        print(f"✗ Erro: {e}")


def cmd_debts_list():
    """Lista dividas"""
    try:
        response = httpx.get(f"{BASE_URL}/api/debts", headers=get_headers())
        if response.status_code == 200:
            debts = response.json()
            print(f"\n{'='*84}")
            print(f"{'ID':<36} | {'Cliente':<20} | {'Total':>9} | {'Restante':>9}")
            print(f"{'='*84}")
            for d in debts:
                print(
                    f"{d['id']:<36} | {d['client_name'][:20]:<20} | "
                    f"{d['total_amount']:>9.2f} | {d['remaining']:>9.2f}"
                )
            print(f"\nTotal: {len(debts)} dividas")
        else:
            print(f"✗ Erro: {error_detail(response)}")
    except httpx.HTTPError as e:
        print(f"✗ Erro: {e}")


def cmd_pay(debt_id: str, amount: str):
    """Registra pagamento numa divida"""
    try:
        response = httpx.post(
            f"{BASE_URL}/api/payments",
            json={"debt_id": debt_id, "amount": float(amount)},
            headers=get_headers()
        )
        if response.status_code == 201:
            debt = response.json()["debt"]
            status = "quitada" if debt["is_paid"] else f"restante {debt['remaining']:.2f}"
            print(f"\n✓ Pagamento registrado ({status})")
        else:
            print(f"✗ Erro: {error_detail(response)}")
    except httpx.HTTPError as e:
        print(f"✗ Erro: {e}")


def cmd_report():
    """Mostra o resumo do dashboard"""
    try:
        response = httpx.get(f"{BASE_URL}/api/reports", headers=get_headers())
        if response.status_code == 200:
            report = response.json()
            stock, sales, debts = report["stock"], report["sales"], report["debts"]
            print(f"\n{'='*40}")
            print(f"  RESUMO STOCKPRO")
            print(f"{'='*40}")
            print(f"  Produtos: {stock['total_products']} (stock baixo: {stock['low_stock_count']})")
            print(f"  Investido em stock: {stock['total_invested']:.2f}")
            print(f"  Vendas hoje: {sales['daily_total']:.2f} (lucro {sales['daily_profit']:.2f})")
            print(f"  Vendas no mes: {sales['monthly_total']:.2f} (lucro {sales['monthly_profit']:.2f})")
            print(f"  Compras hoje: {report['purchases']['daily_total']:.2f}")
            print(f"  Encomendas: {report['orders']['total']}")
            print(f"  Dividas ativas: {debts['active_debts']} (a receber {debts['total_remaining']:.2f})")
            print(f"{'='*40}")
        else:
            print(f"✗ Erro: {error_detail(response)}")
    except httpx.HTTPError as e:
        print(f"✗ Erro: {e}")


def print_help():
    print("""
StockPro - CLI Admin
====================

Comandos disponiveis:

  python admin_cli.py login                                  - Fazer login
  python admin_cli.py report                                 - Ver resumo

  python admin_cli.py products list                          - Listar produtos
  python admin_cli.py products create "Nome" "Categoria" <custo> <venda> [quantidade]
                                                             - Criar produto
  python admin_cli.py sell <product_id> <quantidade> <preco> - Registrar venda

  python admin_cli.py debts list                             - Listar dividas
  python admin_cli.py pay <debt_id> <valor>                  - Registrar pagamento

Variavel de ambiente STOCKPRO_URL altera o servidor (padrao http://localhost:8080)
""")


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print_help()
        sys.exit(0)

    cmd = sys.argv[1].lower()

    if cmd == "login":
        cmd_login()
    elif cmd == "report":
        cmd_report()
    elif cmd == "products":
        if len(sys.argv) < 3:
            print("Uso: products [list|create]")
        elif sys.argv[2] == "list":
            cmd_products_list()
        elif sys.argv[2] == "create" and len(sys.argv) >= 7:
            cmd_products_create(*sys.argv[3:8])
        else:
            print("Uso: products create 'Nome' 'Categoria' <custo> <venda> [quantidade]")
    elif cmd == "sell" and len(sys.argv) >= 5:
        cmd_sell(sys.argv[2], sys.argv[3], sys.argv[4])
    elif cmd == "debts":
        cmd_debts_list()
    elif cmd == "pay" and len(sys.argv) >= 4:
        cmd_pay(sys.argv[2], sys.argv[3])
    elif cmd == "help":
        print_help()
    else:
        print(f"Comando desconhecido: {cmd}")
        print_help()
