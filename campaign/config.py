"""
campaign/config.py — Campaign configuration: defaults, YAML loading and the
pure editing helpers used while a campaign is being put together.

A configuration is a plain mapping, exactly what ``yaml.safe_load`` gives
back for a file such as::

    template: classic            # classic | modern | banner
    layout:
      content_width: 600
      product_image_size: large  # small | medium | large
    theme:   {primary_color, background_color, text_color, accent_color}
    company: {name, logo_url, website_url}
    hero:    {show, image_url, title, subtitle, cta_text, cta_link}
    products:
      - {id, name, price, discount_text, pricing_mode, description,
         image_url, link, brand_name, brand_logo_url, render_mode}
    footer:  {text, address}

Nothing in here mutates its input; every helper returns a new mapping.
"""

from __future__ import annotations

import copy
import logging
import os
import uuid

import yaml

logger = logging.getLogger(__name__)

PRICING_MODES: tuple = ("standard", "discount", "hidden")
RENDER_MODES: tuple = ("html", "image-only")

# Blank product; every key a product may carry.
PRODUCT_DEFAULTS: dict = {
    "id": "",
    "name": "",
    "price": "",
    "discount_text": "",
    "pricing_mode": "standard",
    "description": "",
    "image_url": "",
    "link": "",
    "brand_name": "",
    "brand_logo_url": "",
    "render_mode": "html",
}

# What a freshly added product looks like before anyone edits it.
_NEW_PRODUCT: dict = {
    **PRODUCT_DEFAULTS,
    "name": "New Product",
    "price": "$99.00",
    "description": "Product description goes here.",
    "image_url": "https://via.placeholder.com/600x600",
    "link": "#",
}

DEFAULTS: dict = {
    "template": "classic",
    "layout": {
        "content_width": 600,
        "product_image_size": "large",
    },
    "theme": {
        "primary_color": "#3b82f6",
        "background_color": "#ffffff",
        "text_color": "#1f2937",
        "accent_color": "#ef4444",   # discounts / highlights
    },
    "company": {
        "name": "",
        "logo_url": "",
        "website_url": "",
    },
    "hero": {
        "show": True,
        "image_url": "",
        "title": "",
        "subtitle": "",
        "cta_text": "",
        "cta_link": "",
    },
    "products": [],
    "footer": {
        "text": "",
        "address": "",
    },
}

# Demo campaign: one product per pricing mode.
SAMPLE_CONFIG: dict = {
    **DEFAULTS,
    "company": {
        "name": "TechNova",
        "logo_url": "https://via.placeholder.com/150x50/3b82f6/ffffff?text=TechNova",
        "website_url": "https://example.com",
    },
    "hero": {
        "show": True,
        "image_url": (
            "https://images.unsplash.com/photo-1496181133206-80ce9b88a853"
            "?ixlib=rb-1.2.1&auto=format&fit=crop&w=1200&h=600&q=80"
        ),
        "title": "Summer Collection 2024",
        "subtitle": "Discover the latest trends in technology and design.",
        "cta_text": "Shop Now",
        "cta_link": "https://example.com/shop",
    },
    "products": [
        {
            **PRODUCT_DEFAULTS,
            "id": "1",
            "name": "Wireless Headphones",
            "price": "$199.00",
            "discount_text": "Save $50",
            "pricing_mode": "standard",
            "description": "Noise cancelling, 40h battery life. Great for travel.",
            "image_url": (
                "https://images.unsplash.com/photo-1505740420928-5e560c06d30e"
                "?ixlib=rb-1.2.1&auto=format&fit=crop&w=600&q=80"
            ),
            "link": "https://example.com/p1",
            "brand_name": "Sony",
        },
        {
            **PRODUCT_DEFAULTS,
            "id": "2",
            "name": "Smart Watch Series 7",
            "price": "$299.00",
            "discount_text": "Up to 20% Off",
            "pricing_mode": "discount",
            "description": (
                "Fitness tracking, heart rate monitor, ECG, Always-On Retina "
                "display, water resistant."
            ),
            "image_url": (
                "https://images.unsplash.com/photo-1523275335684-37898b6baf30"
                "?ixlib=rb-1.2.1&auto=format&fit=crop&w=600&q=80"
            ),
            "link": "https://example.com/p2",
            "brand_name": "Apple",
            "brand_logo_url": "https://upload.wikimedia.org/wikipedia/commons/f/fa/Apple_logo_black.svg",
        },
        {
            **PRODUCT_DEFAULTS,
            "id": "3",
            "name": "Exclusive Camera",
            "price": "$1200.00",
            "pricing_mode": "hidden",
            "description": "Professional grade photography gear. Inquire for pricing.",
            "image_url": (
                "https://images.unsplash.com/photo-1516035069371-29a1b244cc32"
                "?ixlib=rb-1.2.1&auto=format&fit=crop&w=600&q=80"
            ),
            "link": "https://example.com/p3",
            "brand_name": "Leica",
        },
    ],
    "footer": {
        "text": "© 2024 TechNova Inc. All rights reserved.",
        "address": "123 Innovation Dr, Tech City, CA 94000",
    },
}


# ---------------------------------------------------------------------------
# Normalisation
# ---------------------------------------------------------------------------

def _merge(base: dict, override: dict) -> dict:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        # an emptied YAML section (``hero:`` with every key commented out)
        if value is None and isinstance(merged.get(key), dict):
            continue
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def resolve_config(config: dict | None) -> dict:
    """
    Fill in everything a partial configuration leaves out.

    Sections are deep-merged over ``DEFAULTS``; each product is merged over
    ``PRODUCT_DEFAULTS`` with list order preserved.  Values are taken as
    given: no clamping of ``content_width`` and no rewriting of unknown
    ``template`` or size values (the renderers apply their own fallbacks).
    """
    resolved = _merge(DEFAULTS, config or {})
    resolved["products"] = [
        _merge(PRODUCT_DEFAULTS, product or {}) for product in resolved.get("products") or []
    ]
    return resolved


def load_config(path: str = "config.yaml") -> dict:
    if not os.path.exists(path):
        raise FileNotFoundError(f"Config file not found: {path}")
    with open(path, "r", encoding="utf-8") as fh:
        cfg = yaml.safe_load(fh)
    if not isinstance(cfg, dict):
        raise ValueError(f"{path} must contain a YAML mapping")
    logger.info(f"Loaded campaign config from {path} ({len(cfg.get('products') or [])} products)")
    return resolve_config(cfg)


# ---------------------------------------------------------------------------
# Editing helpers
# ---------------------------------------------------------------------------

def new_product(**overrides) -> dict:
    """A placeholder product with a fresh unique id."""
    unknown = set(overrides) - set(PRODUCT_DEFAULTS)
    if unknown:
        raise KeyError(f"Unknown product field(s): {sorted(unknown)}")
    return {**_NEW_PRODUCT, "id": uuid.uuid4().hex, **overrides}


def add_product(config: dict, product: dict | None = None) -> dict:
    """Return a copy of ``config`` with ``product`` (or a new one) appended."""
    updated = copy.deepcopy(config)
    products = updated.get("products") or []
    products.append(copy.deepcopy(product) if product is not None else new_product())
    updated["products"] = products
    return updated


def update_product(config: dict, index: int, field: str, value) -> dict:
    """Return a copy of ``config`` with one field of one product replaced."""
    if field not in PRODUCT_DEFAULTS:
        raise KeyError(f"Unknown product field {field!r}")
    updated = copy.deepcopy(config)
    products = updated.get("products") or []
    if not 0 <= index < len(products):
        raise IndexError(f"No product at index {index} ({len(products)} products)")
    products[index] = {**products[index], field: value}
    updated["products"] = products
    return updated


def remove_product(config: dict, index: int) -> dict:
    """Return a copy of ``config`` without the product at ``index``."""
    updated = copy.deepcopy(config)
    products = updated.get("products") or []
    if not 0 <= index < len(products):
        raise IndexError(f"No product at index {index} ({len(products)} products)")
    updated["products"] = products[:index] + products[index + 1:]
    return updated
