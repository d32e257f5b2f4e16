from __future__ import annotations

import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formataddr
from typing import Any

from briefing_mcp.app.config import BACKEND_TIMEOUT, EMAIL_SENDER_NAME, MCPSettings
from briefing_mcp.tools.errors import ToolError

logger = logging.getLogger("briefing-mcp")


def build_message(sender: str, to: list[str], subject: str, text: str) -> MIMEMultipart:
    msg = MIMEMultipart()
    msg["From"] = formataddr((EMAIL_SENDER_NAME, sender))
    msg["To"] = ", ".join(to)
    msg["Subject"] = subject
    msg.attach(MIMEText(text, "plain"))
    return msg


def send_email(args: dict[str, Any], settings: MCPSettings) -> str:
    """Send a plain text email over SMTP with STARTTLS."""
    if not settings.email_user or not settings.email_pass:
        raise ToolError("EMAIL_USER or EMAIL_PASS is not configured")

    to = args.get("to") or []
    if isinstance(to, str):
        to = [addr.strip() for addr in to.split(",") if addr.strip()]
    if not to:
        raise ToolError("No recipients given")

    logger.info(f"Sending email to: {', '.join(to)}")
    msg = build_message(settings.email_user, to, args.get("subject", ""), args.get("text", ""))

    try:
        with smtplib.SMTP(settings.smtp_host, settings.smtp_port, timeout=BACKEND_TIMEOUT) as server:
            server.starttls()
            server.login(settings.email_user, settings.email_pass)
            server.send_message(msg)
    except (smtplib.SMTPException, OSError) as e:
        logger.error(f"Email send error: {e}")
        raise ToolError("Failed to send email") from e

    return f"Email sent to {', '.join(to)}"
