"""
campaign/products.py — Product collection renderers, one per template.

  classic  — 2-column grid of bordered cards, filler cell on odd counts
  modern   — single-column list, image left / text right, divider per row
  banner   — one full-width block per product

Every renderer keeps the input order of ``products`` and emits table markup
with inline styles only.  Image widths come from campaign.geometry.
"""

import logging

from campaign import geometry

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Colour / style tokens that do not come from the configured theme
# ---------------------------------------------------------------------------
COLOURS = {
    "card_bg":     "#ffffff",
    "border":      "#e5e7eb",
    "divider":     "#f3f4f6",
    "muted":       "#6b7280",
    "brand_label": "#9ca3af",
    "button_text": "#ffffff",
}

_TABLE = 'width="100%" cellpadding="0" cellspacing="0" border="0"'


def button_style(color: str, small: bool = False) -> str:
    padding, size = ("8px 16px", "14px") if small else ("12px 24px", "16px")
    return (
        f"display: inline-block; padding: {padding}; background-color: {color}; "
        f"color: {COLOURS['button_text']}; text-decoration: none; border-radius: 4px; "
        f"font-weight: bold; font-size: {size};"
    )


# ---------------------------------------------------------------------------
# Per-product sub-renderers
# ---------------------------------------------------------------------------

def has_brand(product: dict) -> bool:
    return bool(product.get("brand_name") or product.get("brand_logo_url"))


def render_brand(product: dict, align: str = "center") -> str:
    """Brand badge: 20x20 logo and/or uppercase name. Empty without brand data."""
    if not has_brand(product):
        return ""
    name = product.get("brand_name", "")
    logo_url = product.get("brand_logo_url", "")
    justify = "flex-start" if align == "left" else "center"

    logo = ""
    if logo_url:
        logo = (
            f'<img src="{logo_url}" alt="{name}" width="20" height="20" '
            f'style="display:inline-block; vertical-align:middle;" />'
        )
    label = ""
    if name:
        label = (
            f'<span style="font-size: 11px; text-transform: uppercase; '
            f'color: {COLOURS["brand_label"]}; letter-spacing: 1px; font-weight: 600; '
            f'vertical-align:middle;">{name}</span>'
        )
    return (
        f'<div style="margin-bottom: 8px; display: flex; align-items: center; '
        f'justify-content: {justify}; gap: 6px; text-align: {align};">'
        f"{logo}{label}</div>"
    )


def render_price(product: dict, theme: dict, font_size: str = "18px") -> str:
    """Exactly one of price / discount text / nothing, by ``pricing_mode``."""
    mode = product.get("pricing_mode", "standard")
    if mode == "hidden":
        return ""
    if mode == "discount":
        text, color = product.get("discount_text", ""), theme.get("accent_color", "")
    else:
        text, color = product.get("price", ""), theme.get("primary_color", "")
    return (
        f'<p style="margin: 0 0 10px 0; color: {color}; font-weight: bold; '
        f'font-size: {font_size};">{text}</p>'
    )


def _is_image_only(product: dict) -> bool:
    return product.get("render_mode") == "image-only"


def _linked_image(product: dict, width: int, extra_style: str = "") -> str:
    """Centered, link-wrapped pre-composited image; alt is left empty so no text leaks."""
    return (
        f'<a href="{product.get("link", "")}" style="text-decoration:none; display:block; text-align: center;">'
        f'<img src="{product.get("image_url", "")}" alt="" width="{width}" '
        f'style="display: inline-block; width: {width}px; max-width: 100%; height: auto;{extra_style}" />'
        f"</a>"
    )


# ---------------------------------------------------------------------------
# classic — 2-column grid
# ---------------------------------------------------------------------------

def _grid_card(product: dict, theme: dict, size_tier: str, width: int) -> str:
    link = product.get("link", "")
    pad_top = "0" if size_tier == "large" else "15px"
    return f"""
<table {_TABLE} style="border: 1px solid {COLOURS["border"]}; border-radius: 8px; overflow: hidden; background-color: {COLOURS["card_bg"]};">
  <tr>
    <td align="center" valign="top" style="padding-top: {pad_top}; font-size: 0;">
      <a href="{link}" style="text-decoration:none; display:block;">
        <img src="{product.get("image_url", "")}" alt="{product.get("name", "")}" width="{width}"
             style="display: inline-block; width: {width}px; max-width: 100%; height: auto; object-fit: cover; aspect-ratio: 1/1;" />
      </a>
    </td>
  </tr>
  <tr>
    <td valign="top" style="padding: 15px 15px 5px 15px; text-align: center;">
      {render_brand(product, "center")}
      <h3 style="margin: 0 0 8px 0; color: {theme.get("text_color", "")}; font-size: 16px; line-height: 1.3;">{product.get("name", "")}</h3>
      <p style="margin: 0 0 10px 0; color: {COLOURS["muted"]}; font-size: 14px; line-height: 1.5;">{product.get("description", "")}</p>
      {render_price(product, theme)}
    </td>
  </tr>
  <tr>
    <td valign="bottom" style="padding: 0 15px 20px 15px; text-align: center;">
      <a href="{link}" style="display: inline-block; padding: 10px 20px; background-color: {theme.get("primary_color", "")}; color: {COLOURS["button_text"]}; text-decoration: none; border-radius: 4px; font-size: 14px; font-weight: bold;">View Details</a>
    </td>
  </tr>
</table>"""


def render_grid(products: list, layout: dict, theme: dict) -> str:
    size_tier = geometry.normalise_size_tier(layout.get("product_image_size"))
    width = geometry.grid_image_width(layout.get("content_width", 600), size_tier)

    rows = []
    for start in range(0, len(products), 2):
        cells = []
        for product in products[start:start + 2]:
            if _is_image_only(product):
                content = _linked_image(product, width, extra_style=" border-radius: 8px;")
            else:
                content = _grid_card(product, theme, size_tier, width)
            cells.append(f'<td width="50%" valign="top" style="padding: 10px;">{content}\n</td>')
        if len(cells) == 1:
            cells.append('<!-- GRID FILLER --><td width="50%"></td>')
        rows.append(f"<!-- GRID ROW {start // 2 + 1} -->\n<tr>{''.join(cells)}</tr>")

    return f"<table {_TABLE}>{''.join(rows)}</table>"


# ---------------------------------------------------------------------------
# modern — list
# ---------------------------------------------------------------------------

def _list_item(product: dict, theme: dict, size: int) -> str:
    link = product.get("link", "")
    return f"""
<table {_TABLE}>
  <tr>
    <td width="{size + 10}" valign="top">
      <a href="{link}" style="text-decoration:none; display:block;">
        <img src="{product.get("image_url", "")}" alt="{product.get("name", "")}" width="{size}"
             style="display: block; border-radius: 6px; object-fit: cover; height: {size}px; width: {size}px;" />
      </a>
    </td>
    <td valign="top" style="padding-left: 20px;">
      {render_brand(product, "left")}
      <h3 style="margin: 0 0 5px 0; color: {theme.get("text_color", "")}; font-size: 18px;">{product.get("name", "")}</h3>
      {render_price(product, theme)}
      <p style="margin: 0 0 15px 0; color: {COLOURS["muted"]}; font-size: 14px; line-height: 1.4;">{product.get("description", "")}</p>
      <a href="{link}" style="color: {theme.get("primary_color", "")}; text-decoration: underline; font-size: 14px;">Buy Now &rarr;</a>
    </td>
  </tr>
</table>"""


def render_list(products: list, layout: dict, theme: dict) -> str:
    size = geometry.list_image_width(layout.get("product_image_size"))
    full_width = geometry.full_bleed_width(layout.get("content_width", 600))

    rows = []
    for product in products:
        if _is_image_only(product):
            content = (
                f'<a href="{product.get("link", "")}" style="text-decoration:none; display:block;">'
                f'<img src="{product.get("image_url", "")}" alt="" width="{full_width}" '
                f'style="display: block; border-radius: 8px; width: 100%; height: auto;" /></a>'
            )
        else:
            content = _list_item(product, theme, size)
        rows.append(
            f'<!-- LIST ITEM -->\n<tr><td style="padding: 15px 0; '
            f'border-bottom: 1px solid {COLOURS["border"]};">{content}\n</td></tr>'
        )

    return f"<table {_TABLE}>{''.join(rows)}</table>"


# ---------------------------------------------------------------------------
# banner — full-width blocks
# ---------------------------------------------------------------------------

def _banner_block(product: dict, theme: dict, size_tier: str, width: int) -> str:
    link = product.get("link", "")
    pad_top = "0" if size_tier == "large" else "20px"

    brand_row = ""
    if has_brand(product):
        brand_row = (
            f'<table {_TABLE} style="margin-bottom: 8px;"><tr>'
            f'<td>{render_brand(product, "left")}</td></tr></table>'
        )

    return f"""
<table {_TABLE} style="border: 1px solid {COLOURS["border"]}; border-radius: 0px; margin-bottom: 20px;">
  <tr>
    <td align="center" style="padding-top: {pad_top};">
      <a href="{link}" style="text-decoration:none; display:block;">
        <img src="{product.get("image_url", "")}" alt="{product.get("name", "")}" width="{width}"
             style="display: inline-block; width: {width}px; max-width: 100%; height: auto;" />
      </a>
    </td>
  </tr>
  <tr>
    <td style="padding: 24px; text-align: left; background-color: {COLOURS["card_bg"]};">
      {brand_row}
      <h3 style="margin: 0 0 10px 0; color: {theme.get("text_color", "")}; font-size: 22px; line-height: 1.3;">{product.get("name", "")}</h3>
      <p style="margin: 0 0 20px 0; color: {COLOURS["muted"]}; font-size: 15px; line-height: 1.6;">{product.get("description", "")}</p>
      <table {_TABLE} style="border-top: 1px solid {COLOURS["divider"]}; padding-top: 15px;">
        <tr>
          <td valign="middle" align="left">{render_price(product, theme, "20px")}</td>
          <td valign="middle" align="right">
            <a href="{link}" style="{button_style(theme.get("primary_color", ""), small=True)}">Shop Now</a>
          </td>
        </tr>
      </table>
    </td>
  </tr>
</table>"""


def render_banner(products: list, layout: dict, theme: dict) -> str:
    size_tier = geometry.normalise_size_tier(layout.get("product_image_size"))
    width = geometry.banner_image_width(layout.get("content_width", 600), size_tier)

    rows = []
    for product in products:
        if _is_image_only(product):
            content = _linked_image(product, width)
        else:
            content = _banner_block(product, theme, size_tier, width)
        rows.append(f'<!-- BANNER ITEM -->\n<tr><td style="padding-bottom: 20px;">{content}\n</td></tr>')

    return f"<table {_TABLE}>{''.join(rows)}</table>"


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------

RENDERERS = {
    "classic": render_grid,
    "modern":  render_list,
    "banner":  render_banner,
}


def render_products(template: str, products: list, layout: dict, theme: dict) -> str:
    """Render the products fragment with the renderer for ``template``."""
    renderer = RENDERERS[geometry.normalise_template(template)]
    logger.debug(f"Rendering {len(products)} product(s) with {renderer.__name__}")
    return renderer(products, layout, theme)
