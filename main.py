"""
main.py — Campaign email builder entry point.

Reads config.yaml (or the file named by CAMPAIGN_CONFIG), compiles it into a
single HTML email, writes it to ``output.path`` and, when a recipient is
configured, sends a test copy.

config.yaml keys used here on top of the campaign itself:

  output.path      where to write the HTML (default: campaign.html)
  output.escape    HTML-escape all configured text (default: false)
  email_recipient  test-send address (or EMAIL_RECIPIENT env var)
"""

import logging
import os
import sys

from campaign import delivery
from campaign.config import load_config
from campaign.email_template import document_title, render_html
from campaign.geometry import hero_image_hint, image_hint


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)

DEFAULT_OUTPUT = "campaign.html"


# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------
def _get_config_path() -> str:
    return os.environ.get("CAMPAIGN_CONFIG", "").strip() or "config.yaml"


def _get_output(config: dict) -> dict:
    output = config.get("output") or {}
    return {
        "path": output.get("path") or DEFAULT_OUTPUT,
        "escape": bool(output.get("escape", False)),
    }


def _get_recipient(config: dict) -> str:
    return (
        config.get("email_recipient") or os.environ.get("EMAIL_RECIPIENT", "")
    ).strip()


def _log_image_hints(config: dict) -> None:
    layout = config["layout"]
    logger.info(
        "Recommended image cut: "
        f"{image_hint(config['template'], layout['content_width'], layout['product_image_size'])}"
        f" (hero: {hero_image_hint(layout['content_width'])})"
    )


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------
def build(config: dict) -> tuple:
    """Compile ``config`` and write the result; returns ``(html, output path)``."""
    output = _get_output(config)
    html = render_html(config, escape=output["escape"])
    _log_image_hints(config)
    return html, delivery.write_html(html, output["path"])


def _send(config: dict, html: str) -> None:
    recipient = _get_recipient(config)
    if not recipient:
        logger.info("No email recipient configured — skipping test send.")
        return

    subject = document_title(config) or "Campaign preview"
    result = delivery.send_test_email(
        subject=subject,
        html=html,
        to=recipient,
        plain_text=delivery.plain_text_version(config),
    )
    if not result["ok"]:
        logger.error(f"Test send failed: {result['error']}")


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------
def main() -> None:
    path = _get_config_path()
    try:
        config = load_config(path)
        html, _ = build(config)
    except Exception as exc:
        logger.error(f"Failed to build campaign from {path}: {type(exc).__name__}: {exc}")
        sys.exit(1)

    _send(config, html)


if __name__ == "__main__":
    main()
