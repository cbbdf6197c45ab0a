"""
campaign/geometry.py — Pixel geometry for product images.

Every image width that ends up in the compiled email is computed here, and
the "recommended image cut" hints shown to whoever prepares the artwork are
derived from the very same functions, so the two can never disagree.

Formulas (``w`` = layout.content_width):

  classic  2-column grid   round((w / 2 - 20) * {small: .6,  medium: .8,  large: 1})
  modern   list            {small: 100, medium: 140, large: 180}   (w ignored)
  banner   full width      round(w * {small: .7,  medium: .85, large: 1})
"""

import logging
import math

logger = logging.getLogger(__name__)

TEMPLATES: tuple = ("classic", "modern", "banner")
SIZE_TIERS: tuple = ("small", "medium", "large")

DEFAULT_TEMPLATE = "classic"
DEFAULT_SIZE_TIER = "large"

# Each template has its own visual tuning; the grid and banner scales differ
# on purpose.
_GRID_SCALE = {"small": 0.6, "medium": 0.8, "large": 1.0}
_BANNER_SCALE = {"small": 0.7, "medium": 0.85, "large": 1.0}
_LIST_SIZE = {"small": 100, "medium": 140, "large": 180}

_GRID_CELL_PADDING = 20     # per-cell gutter subtracted from half the width
_FULL_BLEED_INSET = 40      # products block padding, 20px on each side
_HERO_CUT_HEIGHT = 300


# ---------------------------------------------------------------------------
# Normalisation
# ---------------------------------------------------------------------------

def normalise_size_tier(tier) -> str:
    """Return ``tier`` if it is a known size tier, otherwise ``"large"``."""
    if tier in SIZE_TIERS:
        return tier
    return DEFAULT_SIZE_TIER


def normalise_template(template) -> str:
    """
    Return ``template`` if it is one of the three layouts, otherwise fall back
    to the classic grid so the products section is never silently dropped.
    """
    if template in TEMPLATES:
        return template
    logger.warning(
        f"Unknown template {template!r} — falling back to {DEFAULT_TEMPLATE!r}"
    )
    return DEFAULT_TEMPLATE


def _round(value: float) -> int:
    """Round half up, so 518.5 becomes 519 rather than banker's 518."""
    return int(math.floor(value + 0.5))


# ---------------------------------------------------------------------------
# Widths
# ---------------------------------------------------------------------------

def grid_image_width(content_width: int, size_tier: str) -> int:
    scale = _GRID_SCALE[normalise_size_tier(size_tier)]
    return _round((content_width / 2 - _GRID_CELL_PADDING) * scale)


def list_image_width(size_tier: str) -> int:
    return _LIST_SIZE[normalise_size_tier(size_tier)]


def banner_image_width(content_width: int, size_tier: str) -> int:
    scale = _BANNER_SCALE[normalise_size_tier(size_tier)]
    return _round(content_width * scale)


def full_bleed_width(content_width: int) -> int:
    """Width of an image-only item in the list layout."""
    return content_width - _FULL_BLEED_INSET


_WIDTH_BY_TEMPLATE = {
    "classic": grid_image_width,
    "modern":  lambda content_width, size_tier: list_image_width(size_tier),
    "banner":  banner_image_width,
}


def image_width(template: str, content_width: int, size_tier: str) -> int:
    """
    Pixel width of a product image for the given layout.

    Parameters
    ----------
    template : str
        ``classic``, ``modern`` or ``banner``; anything else is treated as
        ``classic``.
    content_width : int
        Width of the outer email column in pixels. Not clamped.
    size_tier : str
        ``small``, ``medium`` or ``large``; anything else is treated as
        ``large``.

    Returns
    -------
    int
    """
    return _WIDTH_BY_TEMPLATE[normalise_template(template)](content_width, size_tier)


# ---------------------------------------------------------------------------
# Hints
# ---------------------------------------------------------------------------

def image_hint(template: str, content_width: int, size_tier: str) -> str:
    """
    Recommended crop for product images, e.g. ``"280 x 280 px"`` for the
    square grid/list images or ``"510 px width"`` for banners.
    """
    template = normalise_template(template)
    px = image_width(template, content_width, size_tier)
    if template == "banner":
        return f"{px} px width"
    return f"{px} x {px} px"


def hero_image_hint(content_width: int) -> str:
    return f"{content_width} x {_HERO_CUT_HEIGHT} px"
