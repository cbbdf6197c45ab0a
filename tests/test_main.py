import pytest

import main
from campaign import delivery
from campaign.config import resolve_config


CONFIG_YAML = """
template: modern
layout:
  content_width: 640
  product_image_size: medium
company:
  name: Acme
hero:
  title: Spring Sale
products:
  - name: Kettle
    price: "$20"
    description: "Boils <fast>"
output:
  path: {path}
  escape: {escape}
"""


def _write_config(tmp_path, escape=False, recipient=""):
    out = tmp_path / "out" / "campaign.html"
    text = CONFIG_YAML.format(path=out, escape=str(escape).lower())
    if recipient:
        text += f"email_recipient: {recipient}\n"
    cfg_path = tmp_path / "config.yaml"
    cfg_path.write_text(text, encoding="utf-8")
    return cfg_path, out


def test_main_writes_html(tmp_path, monkeypatch, caplog):
    cfg_path, out = _write_config(tmp_path)
    monkeypatch.setenv("CAMPAIGN_CONFIG", str(cfg_path))
    monkeypatch.delenv("EMAIL_RECIPIENT", raising=False)

    sent = []
    monkeypatch.setattr(delivery, "send_test_email", lambda **kw: sent.append(kw))

    with caplog.at_level("INFO"):
        main.main()

    html = out.read_text(encoding="utf-8")
    assert "<title>Spring Sale</title>" in html
    assert "Boils <fast>" in html
    assert "140 x 140 px" in caplog.text
    assert "640 x 300 px" in caplog.text
    assert sent == []


def test_main_escapes_when_configured(tmp_path, monkeypatch):
    cfg_path, out = _write_config(tmp_path, escape=True)
    monkeypatch.setenv("CAMPAIGN_CONFIG", str(cfg_path))
    monkeypatch.delenv("EMAIL_RECIPIENT", raising=False)

    main.main()

    assert "Boils &lt;fast&gt;" in out.read_text(encoding="utf-8")


def test_main_sends_compiled_html(tmp_path, monkeypatch):
    cfg_path, out = _write_config(tmp_path, recipient="a@b.com")
    monkeypatch.setenv("CAMPAIGN_CONFIG", str(cfg_path))

    # nothing reaches the disk; the send must still get the document
    monkeypatch.setattr(delivery, "write_html", lambda html, path: path)

    called = {}

    def fake_send_test_email(subject, html, to, plain_text):
        called.update(subject=subject, html=html, to=to, plain_text=plain_text)
        return {"ok": False, "error": "smtp down"}

    monkeypatch.setattr(delivery, "send_test_email", fake_send_test_email)

    # a failed send is logged, not fatal
    main.main()

    assert not out.exists()
    assert called["to"] == "a@b.com"
    assert called["subject"] == "Spring Sale"
    assert "<title>Spring Sale</title>" in called["html"]
    assert "Kettle — $20" in called["plain_text"]


def test_build_returns_html_and_path(tmp_path):
    out = tmp_path / "c.html"
    html, path = main.build(resolve_config({"output": {"path": str(out)}}))
    assert path == str(out)
    assert out.read_text(encoding="utf-8") == html


def test_main_exits_on_missing_config(tmp_path, monkeypatch):
    monkeypatch.setenv("CAMPAIGN_CONFIG", str(tmp_path / "nope.yaml"))
    with pytest.raises(SystemExit):
        main.main()


# ---------------------------------------------------------------------------
# delivery
# ---------------------------------------------------------------------------

def test_plain_text_version_follows_render_rules():
    cfg = resolve_config({
        "company": {"name": "Acme", "website_url": "https://acme.test"},
        "hero": {"show": False, "title": "Secret Hero"},
        "products": [
            {"name": "Lamp", "price": "$5", "pricing_mode": "standard", "link": "https://acme.test/lamp"},
            {"name": "Vault", "price": "$900", "discount_text": "Ask us", "pricing_mode": "hidden"},
            {"name": "Poster", "price": "$1", "render_mode": "image-only", "link": "https://acme.test/poster"},
        ],
        "footer": {"address": "1 Main St"},
    })
    text = delivery.plain_text_version(cfg)

    assert text.startswith("Acme")
    assert "Secret Hero" not in text
    assert "* Lamp — $5" in text
    assert "* Vault" in text
    assert "$900" not in text and "Ask us" not in text
    assert "Poster" not in text
    assert "* https://acme.test/poster" in text
    assert "1 Main St" in text


def test_plain_text_version_of_blank_config():
    assert delivery.plain_text_version(resolve_config({"hero": {"show": False}})) == delivery.PLAIN_TEXT_FALLBACK


def test_send_test_email_requires_credentials(monkeypatch):
    monkeypatch.delenv("GMAIL_USER", raising=False)
    monkeypatch.delenv("GMAIL_APP_PASSWORD", raising=False)
    result = delivery.send_test_email("s", "<p>x</p>", "a@b.com")
    assert result["ok"] is False
    assert "GMAIL_USER" in result["error"]


class FakeSMTP:
    sent = []
    fail = False

    def __init__(self, host, port):
        self.host, self.port = host, port

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def ehlo(self):
        pass

    def starttls(self):
        pass

    def login(self, user, password):
        if FakeSMTP.fail:
            raise delivery.smtplib.SMTPAuthenticationError(535, b"bad credentials")

    def send_message(self, msg):
        FakeSMTP.sent.append(msg)


def test_send_test_email_builds_multipart(monkeypatch):
    monkeypatch.setenv("GMAIL_USER", "me@example.com")
    monkeypatch.setenv("GMAIL_APP_PASSWORD", "pw")
    monkeypatch.setattr(FakeSMTP, "sent", [])
    monkeypatch.setattr(FakeSMTP, "fail", False)
    monkeypatch.setattr(delivery.smtplib, "SMTP", FakeSMTP)

    result = delivery.send_test_email("Hello", "<p>x</p>", "a@b.com", plain_text="x")

    assert result == {"ok": True, "error": None}
    parts = FakeSMTP.sent[0].get_payload()
    assert [p.get_content_type() for p in parts] == ["text/plain", "text/html"]
    assert parts[0].get_payload(decode=True).decode("utf-8") == "x"


def test_send_test_email_reports_smtp_errors(monkeypatch):
    monkeypatch.setenv("GMAIL_USER", "me@example.com")
    monkeypatch.setenv("GMAIL_APP_PASSWORD", "pw")
    monkeypatch.setattr(FakeSMTP, "fail", True)
    monkeypatch.setattr(delivery.smtplib, "SMTP", FakeSMTP)

    result = delivery.send_test_email("Hello", "<p>x</p>", "a@b.com")

    assert result["ok"] is False
    assert "bad credentials" in result["error"]
