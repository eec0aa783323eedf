# src/renderers/card_renderer.py

"""Render products as inline-styled HTML table cells for email clients.

Email platforms may strip ``<style>`` blocks, so every rule is inlined and
the grid is built from tables.
"""

import html
import math

from src.config.settings import Settings
from src.models.product import Product

_TABLE_STYLE = (
    "width:100%;max-width:600px;border-collapse:collapse;"
    "table-layout:fixed;margin:0 auto;"
)
_CELL_STYLE = (
    "padding:8px;vertical-align:top;text-align:center;"
    "font-family:Arial,Helvetica,sans-serif;"
)
_IMAGE_STYLE = (
    "display:block;width:100%;max-width:{max_px}px;height:auto;"
    "margin:0 auto 8px auto;border:0;"
)
_TITLE_STYLE = (
    "display:block;color:#222222;font-size:14px;line-height:18px;"
    "text-decoration:none;margin-bottom:6px;"
)
_PRICE_STYLE = "color:#d62128;font-size:16px;font-weight:bold;"


def esc(text: str) -> str:
    """Escape text for HTML content and attribute values."""
    return html.escape(text, quote=True)


def format_price(price: float) -> str:
    """Two-decimal currency string, or the placeholder for non-finite prices."""
    if not math.isfinite(price):
        return Settings.PRICE_PLACEHOLDER
    return f"{Settings.CURRENCY_SYMBOL}{price:.2f}"


def _cell_width(width: int) -> int:
    return 100 // max(width, 1)


def render_card(product: Product, width: int) -> str:
    """Render one product as a ``<td>``; the image slot is always present."""
    max_px = 560 // max(width, 1)
    link = esc(product.link)
    title = esc(product.title)
    return (
        f'<td width="{_cell_width(width)}%" '
        f'style="width:{_cell_width(width)}%;{_CELL_STYLE}">'
        f'<a href="{link}" target="_blank" style="text-decoration:none;">'
        f'<img src="{esc(product.image)}" alt="{title}" '
        f'width="{max_px}" style="{_IMAGE_STYLE.format(max_px=max_px)}">'
        f"</a>"
        f'<a href="{link}" target="_blank" style="{_TITLE_STYLE}">{title}</a>'
        f'<span style="{_PRICE_STYLE}">{esc(format_price(product.price))}</span>'
        f"</td>"
    )


def render_empty_cell(width: int) -> str:
    """Filler cell that keeps a short final row aligned to the grid."""
    return (
        f'<td width="{_cell_width(width)}%" '
        f'style="width:{_cell_width(width)}%;{_CELL_STYLE}">&nbsp;</td>'
    )


def render_row(products: list[Product], width: int) -> str:
    """Render a unit of products as a table of ``width``-column rows."""
    width = max(width, 1)
    lines: list[str] = []
    for start in range(0, len(products), width):
        visual_row = products[start:start + width]
        cells = [render_card(p, width) for p in visual_row]
        cells.extend(
            render_empty_cell(width)
            for _ in range(width - len(visual_row))
        )
        lines.append(f"<tr>{''.join(cells)}</tr>")
    return (
        f'<table role="presentation" cellpadding="0" cellspacing="0" '
        f'border="0" width="100%" style="{_TABLE_STYLE}">'
        f"{''.join(lines)}</table>"
    )
