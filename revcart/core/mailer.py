"""
Email adapter for the RevCart backend.

Delivery goes through SMTP with credentials from Settings. Port 465 uses
implicit TLS; any other port upgrades with STARTTLS.
"""

from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
import logging
import smtplib
import ssl

from .config import Settings, get_settings

logger = logging.getLogger("revcart.mailer")


def _smtp_configured(settings: Settings) -> bool:
    return all((settings.smtp_host, settings.smtp_port, settings.smtp_user, settings.smtp_password, settings.smtp_from))


def _build_message(settings: Settings, subject: str, to_email: str, html_body: str, text_body: str | None) -> MIMEMultipart:
    msg = MIMEMultipart("alternative")
    msg["Subject"] = subject
    msg["From"] = settings.smtp_from
    msg["To"] = to_email
    msg.attach(MIMEText(text_body or html_body, "plain", "utf-8"))
    msg.attach(MIMEText(html_body, "html", "utf-8"))
    return msg


def _open_smtp(settings: Settings) -> smtplib.SMTP:
    context = ssl.create_default_context()
    if settings.smtp_port == 465:
        return smtplib.SMTP_SSL(settings.smtp_host, settings.smtp_port, context=context)
    server = smtplib.SMTP(settings.smtp_host, settings.smtp_port)
    server.ehlo()
    server.starttls(context=context)
    return server


def send_email(subject: str, to_email: str, html_body: str, text_body: str | None = None) -> bool:
    """
    Send one email. Returns False (and logs) when SMTP is not configured or
    delivery fails; callers decide whether that matters.
    """
    settings = get_settings()
    if not _smtp_configured(settings):
        logger.warning("SMTP not configured; skipping email to %s", to_email)
        return False
    msg = _build_message(settings, subject, to_email, html_body, text_body)
    try:
        with _open_smtp(settings) as server:
            server.login(settings.smtp_user, settings.smtp_password)
            server.sendmail(settings.smtp_from, [to_email], msg.as_string())
    except (smtplib.SMTPException, OSError) as exc:
        logger.error("Failed to send email to %s: %s", to_email, exc)
        return False
    return True


def send_otp_email(to_email: str, otp: str, ttl_minutes: int = 10) -> bool:
    html_body = f"""
    <p>Hello!</p>
    <p>Your RevCart verification code is:</p>
    <p style="font-size:24px;font-weight:bold;letter-spacing:4px;">{otp}</p>
    <p>The code expires in {ttl_minutes} minutes. If you did not request it, ignore this message.</p>
    <p>RevCart Team</p>
    """
    return send_email(
        "Your RevCart verification code",
        to_email,
        html_body,
        f"Your RevCart verification code is {otp}. It expires in {ttl_minutes} minutes.",
    )
