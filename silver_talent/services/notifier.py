# silver_talent/services/notifier.py
import html
import smtplib
import logging
from email.message import EmailMessage
from email.utils import formataddr
from typing import Optional

logger = logging.getLogger(__name__)


class NotificationError(Exception):
    pass


def text_to_html(body: str) -> str:
    """Plain newlines become <br> so admin-written replies keep their layout"""
    return (body or "").replace("\r\n", "\n").replace("\n", "<br>")


def escape(value) -> str:
    return html.escape(str(value or ""))


class Notifier:
    """SMTP mail sender. Port 465 uses implicit SSL, anything else STARTTLS."""

    is_configured = True

    def __init__(self, host: str, port: int, username: str, password: str,
                 default_recipient: Optional[str] = None, timeout: int = 30):
        self.host = host
        self.port = int(port)
        self.username = username
        self.password = password
        self.default_recipient = default_recipient
        self.timeout = timeout
        self.verified: Optional[bool] = None

    @property
    def is_ready(self) -> bool:
        # A failed startup verification disables sending, same as missing config
        return self.verified is not False

    def sender(self, display_name: str) -> str:
        return formataddr((display_name, self.username))

    def _connect(self) -> smtplib.SMTP:
        if self.port == 465:
            server = smtplib.SMTP_SSL(self.host, self.port, timeout=self.timeout)
        else:
            server = smtplib.SMTP(self.host, self.port, timeout=self.timeout)
            server.starttls()
        server.login(self.username, self.password)
        return server

    def send(self, to: str, subject: str, html_body: str, sender: Optional[str] = None) -> None:
        if not to:
            raise NotificationError("Missing recipient")
        msg = EmailMessage()
        msg["Subject"] = subject
        msg["From"] = sender or self.username
        msg["To"] = to
        msg.set_content("This message requires an HTML capable mail client.")
        msg.add_alternative(html_body, subtype="html")

        try:
            with self._connect() as server:
                server.send_message(msg)
        except (smtplib.SMTPException, OSError) as e:
            raise NotificationError(f"Failed to send email to {to}: {e}") from e
        logger.info(f"Email sent to {to} | subject={subject}")

    def verify(self) -> bool:
        try:
            with self._connect() as server:
                server.noop()
            self.verified = True
            logger.info(f"SMTP connection to {self.host}:{self.port} verified")
        except (smtplib.SMTPException, OSError) as e:
            self.verified = False
            logger.error(f"SMTP verification failed for {self.host}:{self.port}: {e}")
        return self.verified


class DisabledNotifier:
    """Stand-in used when mail settings are missing. Every send fails."""

    is_configured = False
    is_ready = False

    def __init__(self, reason: str = "Email service is not configured."):
        self.reason = reason
        self.default_recipient = None
        self.username = ""

    def sender(self, display_name: str) -> str:
        return display_name

    def send(self, to: str, subject: str, html_body: str, sender: Optional[str] = None) -> None:
        logger.error(f"Email to {to} not sent: {self.reason}")
        raise NotificationError(self.reason)

    def verify(self) -> bool:
        logger.warning(f"Email verification skipped: {self.reason}")
        return False


def build_notifier(host: str, port, username: str, password: str,
                   default_recipient: Optional[str] = None, name: str = "mail",
                   require_recipient: bool = True):
    """Return a Notifier, or a DisabledNotifier when any setting is missing"""
    settings = {"host": host, "port": port, "user": username, "password": password}
    if require_recipient:
        settings["recipient"] = default_recipient
    missing = [key for key, value in settings.items() if not value]
    if missing:
        logger.error(f"{name}: missing settings {', '.join(missing)}; email sending disabled")
        return DisabledNotifier()
    try:
        port = int(port)
    except (TypeError, ValueError):
        logger.error(f"{name}: invalid port {port!r}; email sending disabled")
        return DisabledNotifier()
    logger.info(f"{name}: using {host}:{port} as {username[:3]}***")
    return Notifier(host, port, username, password, default_recipient=default_recipient)
