"""
campaign/email_template.py — Compiles a campaign configuration into a
complete, email-client-compatible HTML document.

The configuration owns the content (company, hero, products, footer).
This module owns the presentation: nested tables, explicit pixel widths and
inline styles only, so the result survives Gmail and Outlook alike.

Usage
-----
    from campaign.email_template import render_html
    html = render_html(config)                # text passed through verbatim
    html = render_html(config, escape=True)   # for untrusted configurations
"""

import logging

from campaign.config import resolve_config
from campaign.geometry import normalise_template
from campaign.products import button_style, render_products

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Colour / style tokens
# ---------------------------------------------------------------------------
_C = {
    "page_bg":      "#f3f4f6",
    "header_bg":    "#ffffff",
    "hero_tint":    "#f8fafc",   # modern template only
    "hero_divider": "#f3f4f6",
    "subtitle":     "#4b5563",
    "footer_bg":    "#f3f4f6",
    "footer_text":  "#6b7280",
}

_TABLE = 'width="100%" cellpadding="0" cellspacing="0" border="0"'


# ---------------------------------------------------------------------------
# Escaping boundary
# ---------------------------------------------------------------------------

def _esc(text: str) -> str:
    """Minimal HTML escaping."""
    return (
        str(text)
        .replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
    )


def escape_config(value):
    """Return a copy of ``value`` with every string HTML-escaped."""
    if isinstance(value, str):
        return _esc(value)
    if isinstance(value, dict):
        return {key: escape_config(item) for key, item in value.items()}
    if isinstance(value, list):
        return [escape_config(item) for item in value]
    return value


# ---------------------------------------------------------------------------
# Sections
# ---------------------------------------------------------------------------

def render_header(company: dict, theme: dict) -> str:
    name = company.get("name", "")
    logo_url = company.get("logo_url", "")
    if logo_url:
        mark = f'<img src="{logo_url}" alt="{name}" height="50" style="display: block; height: 50px;" />'
    else:
        mark = f'<h1 style="margin:0; color: {theme.get("primary_color", "")};">{name}</h1>'

    return f"""
<!-- ── HEADER ── -->
<table {_TABLE} style="background-color: {_C["header_bg"]}; border-bottom: 2px solid {theme.get("primary_color", "")};">
  <tr>
    <td align="center" style="padding: 20px;">
      <a href="{company.get("website_url", "")}" style="text-decoration:none;">
        {mark}
      </a>
    </td>
  </tr>
</table>"""


def render_hero(hero: dict, theme: dict, template: str, content_width: int) -> str:
    """Hero image plus title/subtitle/CTA panel; empty when ``hero.show`` is off."""
    if not hero.get("show"):
        return ""
    panel_bg = _C["hero_tint"] if template == "modern" else theme.get("background_color", "")
    cta_link = hero.get("cta_link", "")
    title = hero.get("title", "")

    return f"""
<!-- ── HERO ── -->
<table {_TABLE}>
  <tr>
    <td style="padding: 0; text-align: center;">
      <a href="{cta_link}" style="display:block; text-decoration:none;">
        <img src="{hero.get("image_url", "")}" alt="{title}" width="{content_width}"
             style="display: block; width: 100%; max-width: {content_width}px; height: auto;" />
      </a>
    </td>
  </tr>
  <tr>
    <td style="padding: 30px 20px; background-color: {panel_bg}; text-align: center; border-bottom: 1px solid {_C["hero_divider"]};">
      <h2 style="margin: 0 0 10px 0; color: {theme.get("text_color", "")}; font-size: 24px;">{title}</h2>
      <p style="margin: 0 0 20px 0; color: {_C["subtitle"]}; font-size: 16px; line-height: 1.5;">{hero.get("subtitle", "")}</p>
      <a href="{cta_link}" style="{button_style(theme.get("primary_color", ""))}">{hero.get("cta_text", "")}</a>
    </td>
  </tr>
</table>"""


def render_footer(company: dict, footer: dict, theme: dict) -> str:
    return f"""
<!-- ── FOOTER ── -->
<table {_TABLE} style="background-color: {_C["footer_bg"]}; margin-top: 20px;">
  <tr>
    <td align="center" style="padding: 30px 20px; color: {_C["footer_text"]}; font-size: 12px; line-height: 1.5;">
      <p style="margin: 0 0 10px 0; font-weight: bold;">{company.get("name", "")}</p>
      <p style="margin: 0 0 10px 0;">{footer.get("address", "")}</p>
      <p style="margin: 0;">{footer.get("text", "")}</p>
      <div style="margin-top: 15px;">
        <a href="{company.get("website_url", "")}" style="color: {theme.get("primary_color", "")}; text-decoration: none;">Visit Website</a>
      </div>
    </td>
  </tr>
</table>"""


def document_title(config: dict) -> str:
    """Hero title when the hero is shown, otherwise the company name."""
    hero = config.get("hero") or {}
    if hero.get("show"):
        return hero.get("title", "")
    return (config.get("company") or {}).get("name", "")


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def render_html(config: dict, escape: bool = False) -> str:
    """
    Compile a campaign configuration into a complete HTML email string.

    Parameters
    ----------
    config : dict
        Campaign configuration (template, layout, theme, company, hero,
        products, footer). Missing keys take the blank defaults from
        campaign.config.
    escape : bool
        HTML-escape every string in the configuration before assembly.
        Leave off for trusted input; the text is then emitted verbatim.

    Returns
    -------
    str
        Self-contained HTML document. Identical input always gives an
        identical string.
    """
    config = resolve_config(config)
    if escape:
        config = escape_config(config)

    template = normalise_template(config["template"])
    layout = config["layout"]
    theme = config["theme"]
    company = config["company"]
    content_width = layout["content_width"]

    logger.debug(
        f"Compiling template={template} width={content_width} "
        f"size={layout['product_image_size']} products={len(config['products'])}"
    )

    header = render_header(company, theme)
    hero = render_hero(config["hero"], theme, template, content_width)
    products = render_products(template, config["products"], layout, theme)
    footer = render_footer(company, config["footer"], theme)

    return f"""<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1.0">
<title>{document_title(config)}</title>
</head>
<body style="margin: 0; padding: 0; background-color: {_C["page_bg"]};">
<center>

<!-- OUTER WRAPPER -->
<table border="0" cellpadding="0" cellspacing="0" width="100%" style="background-color: {_C["page_bg"]};">
<tr><td align="center" style="padding: 20px 0;">

<!-- INNER CONTAINER ({content_width}px) -->
<table border="0" cellpadding="0" cellspacing="0" width="{content_width}"
       style="max-width: {content_width}px; background-color: {theme["background_color"]}; width: {content_width}px;">
<tr><td>
{header}
{hero}

<!-- ── PRODUCTS ── -->
<table {_TABLE}>
  <tr>
    <td style="padding: 20px;">
      {products}
    </td>
  </tr>
</table>
{footer}
</td></tr>
</table>
<!-- /INNER CONTAINER -->

</td></tr>
</table>
<!-- /OUTER WRAPPER -->

</center>
</body>
</html>"""
