import logging

import pytest

from campaign import geometry


@pytest.mark.parametrize(
    "tier, expected",
    [("large", 280), ("medium", 224), ("small", 168)],
)
def test_grid_width_scales_half_column(tier, expected):
    assert geometry.image_width("classic", 600, tier) == expected


def test_modern_width_ignores_content_width():
    for width in (400, 600, 800):
        assert geometry.image_width("modern", width, "medium") == 140
    assert geometry.image_width("modern", 600, "small") == 100
    assert geometry.image_width("modern", 600, "large") == 180


def test_banner_width_uses_its_own_scales():
    assert geometry.image_width("banner", 600, "small") == 420
    assert geometry.image_width("banner", 600, "medium") == 510
    assert geometry.image_width("banner", 600, "large") == 600


def test_rounding_is_half_up():
    # (401 / 2 - 20) * 1.0 = 180.5
    assert geometry.image_width("classic", 401, "large") == 181
    assert geometry.image_width("classic", 403, "large") == 182


def test_unknown_size_tier_is_large():
    assert geometry.normalise_size_tier("huge") == "large"
    assert geometry.normalise_size_tier(None) == "large"
    assert geometry.image_width("classic", 600, "huge") == 280
    assert geometry.image_width("modern", 600, "") == 180


def test_unknown_template_falls_back_to_grid(caplog):
    with caplog.at_level(logging.WARNING):
        assert geometry.image_width("magazine", 600, "large") == 280
    assert "magazine" in caplog.text


def test_content_width_is_not_clamped():
    assert geometry.image_width("banner", 1000, "large") == 1000
    assert geometry.full_bleed_width(600) == 560


@pytest.mark.parametrize(
    "template, width, expected",
    [
        ("classic", 0, -20),
        ("banner", 0, 0),
        ("modern", 0, 180),
        ("classic", -100, -70),
        ("banner", -100, -100),
        ("modern", -100, 180),
    ],
)
def test_zero_and_negative_widths_pass_through(template, width, expected):
    assert geometry.image_width(template, width, "large") == expected
    assert geometry.full_bleed_width(width) == width - 40


def test_image_hint_formats():
    assert geometry.image_hint("classic", 600, "large") == "280 x 280 px"
    assert geometry.image_hint("modern", 800, "small") == "100 x 100 px"
    assert geometry.image_hint("banner", 600, "medium") == "510 px width"
    assert geometry.hero_image_hint(640) == "640 x 300 px"


@pytest.mark.parametrize("template", geometry.TEMPLATES)
@pytest.mark.parametrize("tier", geometry.SIZE_TIERS)
def test_hint_agrees_with_width(template, tier):
    px = geometry.image_width(template, 700, tier)
    assert geometry.image_hint(template, 700, tier).startswith(f"{px} ")
