# cli.py
import os
import sys
from datetime import datetime
from typing import Any, Dict, List, Optional

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.prompt import Confirm, IntPrompt, Prompt
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich import box

from prompt_toolkit import prompt
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.styles import Style as PromptStyle

from app.models import Product
from sdk.pystore import StoreAPIError, StoreClient

console = Console()
c = StoreClient(
    base_url=os.getenv("PRODUCTS_API_URL", "http://127.0.0.1:5000"),
    token=os.getenv("PRODUCTS_API_TOKEN", "12345"),
)

# Global state for status messages and caching
status_message = "Ready"
product_cache: List[Product] = []

custom_style = PromptStyle.from_dict({
    'completion-menu.completion': 'bg:#008888 #ffffff',
    'completion-menu.completion.current': 'bg:#00aaaa #000000',
})


# ---------------------------
# Display helpers
# ---------------------------
def show_products(products: List[Product]):
    if not products:
        console.print("[italic yellow]No products found[/italic yellow]")
        return

    table = Table(
        title="📦 Products",
        box=box.ROUNDED,
        header_style="bold cyan",
        title_style="bold magenta",
        show_lines=True
    )
    table.add_column("ID", style="dim", width=6)
    table.add_column("Name", style="bold", width=20)
    table.add_column("Price", justify="right", width=10)
    table.add_column("Other fields", width=30)

    for p in products:
        extra = p.model_extra or {}
        table.add_row(
            str(p.id),
            str(p.name),
            str(p.price),
            ", ".join(f"{k}={v}" for k, v in extra.items()),
        )
    console.print(table)


def show_status(message: str, is_success: bool = True):
    style = "green" if is_success else "red"
    return Panel.fit(f"[{style}]{message}[/{style}]", title="Status")


# ---------------------------
# API wrapper
# ---------------------------
def try_api(fn, *args, success_msg: Optional[str] = None, **kwargs):
    """
    Calls fn(*args, **kwargs) behind a spinner.
    API and connection errors are reported in the status panel and yield None.
    """
    global status_message
    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            transient=True,
        ) as progress:
            progress.add_task(description="Processing...", total=None)
            result = fn(*args, **kwargs)
    except (StoreAPIError, OSError) as e:
        status_message = f"Error: {e}"
        console.print(show_status(status_message, False))
        return None

    if success_msg:
        status_message = success_msg
        console.print(show_status(success_msg, True))
    return result


def get_product_completer():
    global product_cache
    if not product_cache:
        product_cache = try_api(c.list_products) or []
    words = [str(p.id) for p in product_cache] + [str(p.name) for p in product_cache]
    return WordCompleter([w for w in words if w], ignore_case=True)


def create_header():
    header = Table(show_header=False, box=box.ROUNDED)
    header.add_column("left", width=30)
    header.add_column("center", width=40)
    header.add_column("right", width=30)

    now = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    header.add_row(
        "🛍️ Products API",
        f"[bold blue]{c.base_url}[/bold blue]",
        f"[dim]{now}[/dim]"
    )
    return Panel(header, style="bold blue")


# ---------------------------
# Input helpers
# ---------------------------
def prompt_with_autocomplete(message: str, completer=None, default: str = ""):
    return prompt(f"{message} ", completer=completer, style=custom_style, default=default)


def ask_float(message: str, default: Optional[float] = None) -> Optional[float]:
    # empty answer means "not set" when there is no default
    while True:
        raw = Prompt.ask(message, default="" if default is None else str(default))
        if raw == "" and default is None:
            return None
        try:
            return float(raw)
        except ValueError:
            console.print("[red]Please enter a valid number.[/red]")


def ask_product_id() -> Optional[int]:
    raw = prompt_with_autocomplete("Enter product ID", completer=get_product_completer()).strip()
    try:
        return int(raw)
    except ValueError:
        console.print(show_status(f"'{raw}' is not a product ID", False))
        return None


def ask_extra_fields() -> Dict[str, Any]:
    extra: Dict[str, Any] = {}
    while Confirm.ask("Add another field?", default=False):
        key = Prompt.ask("Field name")
        extra[key] = Prompt.ask("Value")
    return extra


# ---------------------------
# Main menu
# ---------------------------
def menu():
    global status_message, product_cache

    console.clear()
    console.print(create_header())
    product_cache = try_api(c.list_products) or []

    while True:
        menu_table = Table.grid(padding=(0, 2))
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)
        options = [
            ("1", "📦 List products"),
            ("2", "🔍 Search / filter"),
            ("3", "ℹ️ Get product by ID"),
            ("4", "➕ Create product"),
            ("5", "✏️ Update product"),
            ("6", "🗑️ Delete product"),
            ("q", "👋 Quit"),
        ]
        for row in options:
            menu_table.add_row(*row)
        console.print(Panel(menu_table, title="📋 Menu", border_style="yellow"))

        choice = prompt_with_autocomplete(
            "\nChoose an option",
            completer=WordCompleter([str(i) for i in range(1, 7)] + ["q", "quit", "exit"])
        ).strip()

        if choice == "1":
            products = try_api(c.list_products, success_msg="Products loaded")
            if products is not None:
                product_cache = products
                show_products(products)

        elif choice == "2":
            term = prompt_with_autocomplete("Search term (blank for none)").strip() or None
            min_price = ask_float("Min price (blank for none)")
            max_price = ask_float("Max price (blank for none)")
            page = IntPrompt.ask("Page", default=1)
            limit = IntPrompt.ask("Per page (0 = all)", default=0)
            res = try_api(
                c.list_products, term, min_price, max_price, page, limit or None,
                success_msg="Search completed",
            )
            if res is not None:
                show_products(res)

        elif choice == "3":
            pid = ask_product_id()
            if pid is not None:
                resp = try_api(c.get_product, pid, success_msg=f"Product {pid} loaded")
                if resp:
                    show_products([resp])

        elif choice == "4":
            name = prompt_with_autocomplete("Product name")
            price = ask_float("💰 Price", default=10.0)
            extra = ask_extra_fields()
            resp = try_api(c.create_product, name, price, success_msg=f"Product '{name}' created", **extra)
            if resp:
                show_products([resp])
                product_cache = []

        elif choice == "5":
            pid = ask_product_id()
            if pid is not None:
                name = prompt_with_autocomplete("New name")
                price = ask_float("💰 New price", default=10.0)
                extra = ask_extra_fields()
                resp = try_api(c.update_product, pid, name, price, success_msg=f"Product {pid} updated", **extra)
                if resp:
                    show_products([resp])
                    product_cache = []

        elif choice == "6":
            pid = ask_product_id()
            if pid is not None and Confirm.ask(f"[red]Delete product {pid}?[/red]"):
                if try_api(c.delete_product, pid, success_msg=f"Product {pid} deleted") is not None:
                    product_cache = []

        elif choice.lower() in ("q", "quit", "exit"):
            if Confirm.ask("Are you sure you want to quit?"):
                console.print(Panel.fit("[bold green]Bye! 👋[/bold green]", title="Goodbye"))
                sys.exit(0)

        console.print()
        console.rule(style="dim")


if __name__ == "__main__":
    try:
        menu()
    except KeyboardInterrupt:
        console.print("\n\n[bold red]Interrupted by user[/bold red]")
        sys.exit(1)
