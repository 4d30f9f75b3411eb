# frontend/stock_client/console.py
# Plain terminal front end: renders the current view and reads one command at a time.
import getpass

from stock_client.api import StockApi
from stock_client.app import StockApp, View

HISTORY_ROWS = 10


def _alert(message: str):
    print(f"\n>>> {message}\n")


def _confirm(message: str) -> bool:
    return input(f"{message} [s/N] ").strip().lower() in ("s", "sim", "y", "yes")


def _print_products(app: StockApp):
    if app.loading_products:
        print("Atualizando catálogo...")
        return
    products = app.sorted_products
    if not products:
        print("Nenhum produto encontrado.")
        return
    print(f"{'ID':>4}  {'Produto':<32} {'Em loja':>8} {'Mínimo':>7}  Status")
    for p in products:
        status = "Repor!" if p["below_minimum"] else "OK"
        print(f"{p['id']:>4}  {p['name']:<32} {p['quantity']:>8} {p['minimum_threshold']:>7}  {status}")


def _login_view(app: StockApp):
    print("== Mercado - Acesso ==")
    email = input("Email: ")
    password = getpass.getpass("Senha: ")
    app.login(email, password)


def _home_view(app: StockApp):
    print(f"== Bem-vindo(a), {app.user['name']}! ==")
    print("1) Catálogo de produtos   2) Entrada/Saída   0) Sair")
    choice = input("> ").strip()
    target = {"1": View.PRODUCTS, "2": View.STOCK, "0": View.LOGIN}.get(choice)
    if target is not None:
        app.go(target)


def _fill_product_form(app: StockApp):
    form = app.product_form
    form.name = input(f"Nome [{form.name}]: ") or form.name
    form.quantity = input(f"Qtd atual [{form.quantity}]: ") or form.quantity
    form.minimum_threshold = input(f"Estoque mín. [{form.minimum_threshold}]: ") or form.minimum_threshold


def _products_view(app: StockApp):
    print("== Gerenciar catálogo ==")
    _print_products(app)
    print("b <termo>) Buscar  l) Limpar busca  n) Novo  e <id>) Editar  x <id>) Excluir  v) Voltar")
    command, _, arg = input("> ").strip().partition(" ")
    by_id = {str(p["id"]): p for p in app.products}

    if command == "b":
        app.search(arg)
    elif command == "l":
        app.clear_search()
    elif command == "n":
        app.cancel_edit()
        _fill_product_form(app)
        app.create_product()
    elif command == "e" and arg in by_id:
        app.start_edit(by_id[arg])
        _fill_product_form(app)
        if not app.save_product():
            app.cancel_edit()
    elif command == "x" and arg in by_id:
        app.delete_product(by_id[arg]["id"])
    elif command == "v":
        app.go(View.HOME)


def _stock_view(app: StockApp):
    print("== Caixa / Reposição ==")
    _print_products(app)
    critical = app.critical_products
    print("\nNíveis de estoque críticos:")
    for p in critical:
        print(f"  ! {p['name']}: restam {p['quantity']} (mín: {p['minimum_threshold']})")
    if not critical:
        print("  Tudo certo! Nenhum produto com estoque baixo.")

    print("\nÚltimas movimentações:")
    for m in app.history[:HISTORY_ROWS]:
        sign = "+" if m["kind"] == "entry" else "-"
        note = f"  ({m['note']})" if m.get("note") else ""
        print(f"  {m['timestamp'][:16]}  {m['product_name']:<28} {sign}{m['quantity']:<6} {m['user_name']}{note}")
    if not app.history:
        print("  Nenhuma movimentação registrada.")

    print("r) Registrar operação  h <id>) Histórico do produto  t) Todo o histórico  v) Voltar")
    command, _, arg = input("> ").strip().partition(" ")
    if command == "h" and arg.isdigit():
        app.load_history(int(arg))
    elif command == "t":
        app.load_history()
    elif command == "v":
        app.go(View.HOME)
    elif command == "r":
        form = app.movement_form
        form.product_id = input("ID do produto: ").strip()
        kind = input("Tipo (entry/exit) [entry]: ").strip().lower()
        form.kind = kind or "entry"
        form.quantity = input("Quantidade: ").strip()
        form.date = input("Data (AAAA-MM-DD, vazio = agora): ").strip()
        form.note = input("Observação: ").strip()
        app.submit_movement()


VIEWS = {
    View.LOGIN: _login_view,
    View.HOME: _home_view,
    View.PRODUCTS: _products_view,
    View.STOCK: _stock_view,
}


def run(api: StockApi = None):
    api = api or StockApi()
    app = StockApp(api, alert=_alert, confirm=_confirm)
    try:
        while True:
            VIEWS[app.view](app)
    except (KeyboardInterrupt, EOFError):
        print()
    finally:
        api.close()
