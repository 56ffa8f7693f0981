# catalog_sdk/cli.py
import argparse
import sys
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

import httpx
from prompt_toolkit import prompt
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.styles import Style as PromptStyle
from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm, Prompt
from rich.table import Table

from .client import CatalogClient

console = Console()

custom_style = PromptStyle.from_dict({
    'completion-menu.completion': 'bg:#008888 #ffffff',
    'completion-menu.completion.current': 'bg:#00aaaa #000000',
})


# ---------------------------
# Display helpers
# ---------------------------
def _fmt_number(value: Any) -> str:
    if isinstance(value, float):
        return f"{value:.2f}"
    return str(value)


def show_products(products: List[Dict[str, Any]], out: Optional[Console] = None):
    out = out or console
    if not products:
        out.print("[italic yellow]No products found[/italic yellow]")
        return

    table = Table(
        title="Products Catalog",
        box=box.ROUNDED,
        header_style="bold cyan",
        title_style="bold magenta",
        show_lines=True
    )
    table.add_column("ID", style="dim", no_wrap=True)
    table.add_column("Name", style="bold")
    table.add_column("Description")
    table.add_column("Price", justify="right")
    table.add_column("Qty", justify="right")
    table.add_column("Category")

    for p in products:
        table.add_row(
            p.get("id", "N/A"),
            p.get("name", "N/A"),
            p.get("description", ""),
            _fmt_number(p.get("price", 0)),
            _fmt_number(p.get("quantity", 0)),
            p.get("category", "N/A"),
        )
    out.print(table)


def show_status(message: str, is_success: bool = True):
    style = "green" if is_success else "red"
    return Panel.fit(f"[{style}]{message}[/{style}]", title="Status")


# returned by try_api when the call failed
FAILED = object()


def try_api(fn: Callable, *args, success_msg: Optional[str] = None, **kwargs):
    """Call fn and report HTTP/transport failures as a status panel instead of raising.

    Returns FAILED when the call did not succeed, so a None answer stays meaningful.
    """
    try:
        result = fn(*args, **kwargs)
    except httpx.HTTPStatusError as e:
        console.print(show_status(f"Error: HTTP {e.response.status_code}: {e.response.text}", False))
        return FAILED
    except httpx.HTTPError as e:
        console.print(show_status(f"Error: {e}", False))
        return FAILED
    if success_msg:
        console.print(show_status(success_msg, True))
    return result


# ---------------------------
# Interactive menu
# ---------------------------
def get_product_completer(c: CatalogClient) -> WordCompleter:
    products = try_api(c.list_products)
    if products is FAILED:
        products = []
    names = [p.get("name", "") for p in products]
    ids = [p.get("id", "") for p in products]
    return WordCompleter([n for n in (names + ids) if n], ignore_case=True)


def prompt_with_autocomplete(message: str, completer=None, default: str = "") -> str:
    return prompt(f"{message} ", completer=completer, style=custom_style, default=default)


def ask_float(message: str, default: Optional[float] = None) -> Optional[float]:
    while True:
        raw = Prompt.ask(message, default="" if default is None else str(default))
        if raw == "" and default is None:
            return None
        try:
            return float(raw)
        except ValueError:
            console.print("[red]Please enter a valid number.[/red]")


def menu(c: CatalogClient):
    console.clear()
    now = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    console.print(Panel(f"[bold blue]MarketPlace catalog[/bold blue]  [dim]{now}[/dim]", style="bold blue"))

    options = [
        ("1", "List products"),
        ("2", "Search products by name"),
        ("3", "Show product"),
        ("4", "Add product"),
        ("5", "Edit product"),
        ("6", "Delete product"),
        ("q", "Quit"),
    ]
    while True:
        menu_table = Table.grid(padding=(0, 2))
        menu_table.add_column("Key", style="bold cyan")
        menu_table.add_column("Option")
        for row in options:
            menu_table.add_row(*row)
        console.print(Panel(menu_table, title="Menu", border_style="yellow"))

        choice = prompt_with_autocomplete(
            "Choose an option",
            completer=WordCompleter([key for key, _ in options] + ["quit", "exit"]),
        ).strip()

        if choice == "1":
            products = try_api(c.list_products)
            if products is not FAILED:
                show_products(products)

        elif choice == "2":
            term = prompt_with_autocomplete("Name contains")
            products = try_api(c.search_products, term)
            if products is not FAILED:
                show_products(products)

        elif choice == "3":
            pid = prompt_with_autocomplete("Product ID", completer=get_product_completer(c))
            product = try_api(c.get_product, pid)
            if product is None:
                console.print(f"[yellow]No product with id {pid}[/yellow]")
            elif product is not FAILED:
                show_products([product])

        elif choice == "4":
            name = prompt_with_autocomplete("Name")
            description = prompt_with_autocomplete("Description")
            price = ask_float("Price", default=10.0)
            qty = ask_float("Quantity", default=1)
            category = prompt_with_autocomplete("Category")
            created = try_api(
                c.create_product, name, description, price, qty, category,
                success_msg=f"Product '{name}' added",
            )
            if created is not FAILED:
                show_products([created])

        elif choice == "5":
            pid = prompt_with_autocomplete("Product ID", completer=get_product_completer(c))
            changes: Dict[str, Any] = {}
            for field in ("name", "description", "category"):
                value = prompt_with_autocomplete(f"New {field} (blank keeps current)")
                if value:
                    changes[field] = value
            for field in ("price", "quantity"):
                value = ask_float(f"New {field} (blank keeps current)")
                if value is not None:
                    changes[field] = value
            updated = try_api(c.update_product, pid, success_msg=f"Product {pid} updated", **changes)
            if updated is not FAILED:
                show_products([updated])

        elif choice == "6":
            pid = prompt_with_autocomplete("Product ID", completer=get_product_completer(c))
            if Confirm.ask(f"Delete product {pid}?"):
                message = try_api(c.delete_product, pid)
                if message is not FAILED:
                    console.print(show_status(message, True))

        elif choice.lower() in ("q", "quit", "exit"):
            console.print(Panel.fit("[bold green]Goodbye[/bold green]"))
            return

        console.print()
        console.rule(style="dim")


# ---------------------------
# One-shot commands
# ---------------------------
def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="catalog-cli", description="MarketPlace catalog client")
    parser.add_argument("--base-url", default="http://localhost:3000", help="Catalog service URL")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("list", help="List all products")

    sp = subparsers.add_parser("search", help="Search products by name")
    sp.add_argument("title", help="Case-insensitive name fragment")

    gp = subparsers.add_parser("get", help="Show one product")
    gp.add_argument("product_id")

    cp = subparsers.add_parser("create", help="Add a product")
    cp.add_argument("--name", required=True)
    cp.add_argument("--description", required=True)
    cp.add_argument("--price", type=float, required=True)
    cp.add_argument("--quantity", type=float, required=True)
    cp.add_argument("--category", required=True)

    up = subparsers.add_parser("update", help="Edit fields of a product")
    up.add_argument("product_id")
    up.add_argument("--name")
    up.add_argument("--description")
    up.add_argument("--price", type=float)
    up.add_argument("--quantity", type=float)
    up.add_argument("--category")

    dp = subparsers.add_parser("delete", help="Remove a product")
    dp.add_argument("product_id")

    subparsers.add_parser("menu", help="Interactive menu")
    return parser


def run_command(args: argparse.Namespace, c: CatalogClient) -> int:
    if args.command == "list":
        products = try_api(c.list_products)
        if products is FAILED:
            return 1
        show_products(products)

    elif args.command == "search":
        products = try_api(c.search_products, args.title)
        if products is FAILED:
            return 1
        show_products(products)

    elif args.command == "get":
        product = try_api(c.get_product, args.product_id)
        if product is FAILED:
            return 1
        if product is None:
            console.print(f"[yellow]No product with id {args.product_id}[/yellow]")
            return 1
        show_products([product])

    elif args.command == "create":
        created = try_api(c.create_product, args.name, args.description, args.price, args.quantity, args.category)
        if created is FAILED:
            return 1
        show_products([created])

    elif args.command == "update":
        changes = {
            k: getattr(args, k)
            for k in ("name", "description", "price", "quantity", "category")
            if getattr(args, k) is not None
        }
        updated = try_api(c.update_product, args.product_id, **changes)
        if updated is FAILED:
            return 1
        show_products([updated])

    elif args.command == "delete":
        message = try_api(c.delete_product, args.product_id)
        if message is FAILED:
            return 1
        console.print(show_status(message, True))

    elif args.command == "menu":
        menu(c)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        with CatalogClient(base_url=args.base_url) as c:
            return run_command(args, c)
    except KeyboardInterrupt:
        console.print("\n\n[bold red]Interrupted by user[/bold red]")
        return 1


if __name__ == "__main__":
    sys.exit(main())
