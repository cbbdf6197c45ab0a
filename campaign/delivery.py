"""
campaign/delivery.py — Hand-off of a compiled campaign email.

The compiler only produces a string; these helpers put it somewhere useful:
on disk for a preview/ESP upload, or straight into an inbox for a test send.
A test send carries a plain-text alternative built from the same campaign
config, for clients that refuse HTML.
"""

import logging
import os
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

logger = logging.getLogger(__name__)

# Used when there is no config to derive a text version from.
PLAIN_TEXT_FALLBACK = "Please paste this in an email client that supports HTML."

SMTP_HOST = "smtp.gmail.com"
SMTP_PORT = 587


def write_html(html: str, path: str) -> str:
    """Write ``html`` to ``path`` (UTF-8), creating parent directories."""
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    with open(path, "w", encoding="utf-8") as fh:
        fh.write(html)
    logger.info(f"Campaign HTML written to {path} ({len(html)} chars)")
    return path


def _plain_price(product: dict) -> str:
    mode = product.get("pricing_mode", "standard")
    if mode == "hidden":
        return ""
    if mode == "discount":
        return product.get("discount_text", "")
    return product.get("price", "")


def plain_text_version(config: dict) -> str:
    """
    Text/plain rendering of a resolved campaign config.

    Follows the same suppression rules as the HTML: hidden prices are left
    out, and image-only products contribute nothing but their link.
    """
    company = config.get("company") or {}
    hero = config.get("hero") or {}
    footer = config.get("footer") or {}

    lines = [company.get("name", ""), ""]
    if hero.get("show"):
        lines += [hero.get("title", ""), hero.get("subtitle", "")]
        if hero.get("cta_link"):
            lines.append(f"{hero.get('cta_text', '')}: {hero['cta_link']}")
        lines.append("")

    for product in config.get("products") or []:
        if product.get("render_mode") == "image-only":
            lines.append(f"* {product.get('link', '')}")
            continue
        head = " — ".join(t for t in (product.get("name", ""), _plain_price(product)) if t)
        lines.append(f"* {head}")
        if product.get("description"):
            lines.append(f"  {product['description']}")
        if product.get("link"):
            lines.append(f"  {product['link']}")
    lines += ["", footer.get("address", ""), footer.get("text", ""), company.get("website_url", "")]

    text = "\n".join(lines).strip()
    return text or PLAIN_TEXT_FALLBACK


def send_test_email(subject: str, html: str, to: str, plain_text: str = PLAIN_TEXT_FALLBACK) -> dict:
    """
    Deliver one test copy of the campaign as multipart/alternative
    (plain text first, HTML preferred) through Gmail SMTP.

    Credentials come from GMAIL_USER / GMAIL_APP_PASSWORD only; nothing is
    raised, the outcome is reported as {ok: bool, error: str|None}.
    """
    sender = os.environ.get("GMAIL_USER")
    password = os.environ.get("GMAIL_APP_PASSWORD")
    if not sender or not password:
        logger.warning("Test send skipped: SMTP credentials missing")
        return {
            "ok": False,
            "error": "Test sends need GMAIL_USER and GMAIL_APP_PASSWORD in the environment.",
        }

    msg = MIMEMultipart("alternative")
    msg["Subject"] = subject
    msg["From"] = sender
    msg["To"] = to
    msg.attach(MIMEText(plain_text, "plain", "utf-8"))
    msg.attach(MIMEText(html, "html", "utf-8"))

    logger.info(f"Sending campaign test {subject!r} to {to} via {SMTP_HOST}")
    try:
        with smtplib.SMTP(SMTP_HOST, SMTP_PORT) as server:
            server.ehlo()
            server.starttls()
            server.login(sender, password)
            server.send_message(msg)
    except (smtplib.SMTPException, OSError) as exc:
        logger.error(f"Campaign test send to {to} failed: {exc}")
        return {"ok": False, "error": str(exc)}

    logger.info(f"Campaign test delivered to {to}")
    return {"ok": True, "error": None}
