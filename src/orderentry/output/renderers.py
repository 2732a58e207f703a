"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO). The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

from collections.abc import Callable
from decimal import Decimal, InvalidOperation
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from orderentry.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from orderentry.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"
    if result.op == "place_order":
        return f"OK: {result.op} {result.data.get('order_number', '')}".rstrip()
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


_CENT = Decimal("0.01")


def _money(value: Any) -> str:
    """Two-decimal display of a money value; longer exact values are kept."""
    if not isinstance(value, Decimal):
        return str(value)
    try:
        cents = value.quantize(_CENT)
    except InvalidOperation:
        return str(value)
    return str(cents if cents == value else value)


def _status_line(console: Console, result: ServiceResult) -> None:
    label = Text("OK", style="oe.ok")
    op = Text(f"  {result.op}", style="oe.op")
    console.print(label, op)


def _field(console: Console, key: str, value: Any, *, style: str = "") -> None:
    """Print a single indented key-value field."""
    line = Text(f"  {key}: ", style="oe.key")
    if not style and (key == "id" or key.endswith("_id")):
        style = "oe.id"
    line.append(str(value), style=style)
    console.print(line)


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print meta block including telemetry span tree (verbose only)."""
    if not result.meta:
        return

    console.print()
    console.print(Text("  meta:", style="dim"))

    for k, v in result.meta.items():
        if k == "telemetry":
            _render_telemetry_tree(console, v, indent=4)
        else:
            console.print(f"    {k}: {v}")


def _render_telemetry_tree(
    console: Console,
    span_data: dict[str, Any],
    indent: int = 4,
) -> None:
    """Render a span tree, one line per span with its timing."""
    prefix = " " * indent
    name = span_data.get("name", "?")
    duration = span_data.get("duration_ms", 0.0)
    style = "yellow" if duration > 100 else "dim"

    line = Text(prefix)
    line.append(f"{duration:>8.2f}ms", style=style)
    line.append(f"  {name}")
    annotations = span_data.get("annotations") or {}
    if annotations:
        line.append("  (" + ", ".join(f"{k}={v}" for k, v in annotations.items()) + ")")
    console.print(line)

    for child in span_data.get("children", []):
        _render_telemetry_tree(console, child, indent=indent + 4)


def _items_table(items: list[dict[str, Any]]) -> Table:
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("SKU", style="oe.sku", no_wrap=True)
    table.add_column("Name")
    table.add_column("Qty", justify="right")
    table.add_column("Price", style="oe.money", justify="right")
    table.add_column("Line", style="oe.money", justify="right")

    for item in items:
        product = item.get("product", {})
        price = product.get("price", Decimal(0))
        quantity = item.get("quantity", Decimal(0))
        table.add_row(
            str(product.get("sku", "")),
            str(product.get("name", "")),
            str(quantity),
            _money(price),
            _money(price * quantity),
        )
    return table


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="oe.error")
    op = Text(f"  {result.op}", style="oe.op")
    code = Text(f"  [{err.code}]" if err else "", style="dim")
    console.print(label, op, code, Text(" — "), Text(msg))

    if err and err.violations:
        for violation in err.violations:
            line = Text("  - ", style="oe.error")
            line.append(violation.error_message)
            if verbose and violation.property_name:
                line.append(f" ({violation.property_name})", style="dim")
            console.print(line)

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}")


# ── Operation renderers ───────────────────────────────────────────────


def _render_place_order(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    data = result.data
    _status_line(console, result)
    _field(console, "order_id", data.get("order_id"))
    _field(console, "order_number", data.get("order_number") or "(none)")
    _field(console, "customer_id", data.get("customer_id"))
    _field(console, "estimated_delivery_date", data.get("estimated_delivery_date"))

    items = list(data.get("items", ()))
    if items:
        console.print()
        console.print(_items_table(items))

    console.print()
    for tax in data.get("taxes", ()):
        _field(console, tax.get("description", "tax"), tax.get("rate"))
    _field(console, "net_total", _money(data.get("net_total")), style="oe.money")
    _field(console, "total", _money(data.get("total")), style="oe.total")

    if verbose:
        _render_meta(console, result)


def _render_validate_order(
    result: ServiceResult, console: Console, *, verbose: bool = False
) -> None:
    _status_line(console, result)
    _field(console, "valid", result.data.get("valid"))
    _field(console, "item_count", result.data.get("item_count"))
    if verbose:
        _render_meta(console, result)


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)
    if verbose:
        _render_meta(console, result)


_OP_RENDERERS: dict[str, Callable[..., None]] = {
    "place_order": _render_place_order,
    "validate_order": _render_validate_order,
}
