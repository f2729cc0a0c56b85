"""
Mail relay client for contact form submissions.

Composes the notification sent to the operator inbox and hands it to the
configured SMTP relay with aiosmtplib. One send attempt per submission,
no retries, no queue.
"""

import html
import logging
import re
from email import policy
from email.headerregistry import Address
from email.message import EmailMessage

import aiosmtplib

from comingsoon.core.config import RelayConfig
from comingsoon.core.exceptions import RelayDeliveryError
from comingsoon.models.contact import ContactSubmission

# Set up logger
logger = logging.getLogger(__name__)

SUBJECT_TEMPLATE = "Contact Form Submission from {name}"

HTML_TEMPLATE = """
<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
  <h2 style="color: #333;">Contact Form Submission</h2>
  <p><strong>Name:</strong> {name}</p>
  <p><strong>Email:</strong> {email}</p>
  <hr style="border: 1px solid #eee; margin: 20px 0;">
  <h3 style="color: #333;">Message:</h3>
  <p style="white-space: pre-wrap;">{message}</p>
</div>
"""

_LINE_BREAKS = re.compile(r"[\r\n]+")


def _single_line(value: str) -> str:
    """Collapse CR/LF runs so submitter text cannot add header lines."""
    return _LINE_BREAKS.sub(" ", value).strip()


def reply_to_address(email: str) -> str:
    """
    Header form of the submitter's address.

    Internationalized domains are IDNA-encoded so the address survives an
    ASCII-only flatten. A non-ASCII local part is left as is and needs
    SMTPUTF8 on the wire (see requires_smtputf8).
    """
    email = _single_line(email)
    local, _, domain = email.rpartition("@")
    if domain.isascii():
        return email
    try:
        domain = domain.encode("idna").decode("ascii")
    except UnicodeError:
        return email
    return f"{local}@{domain}"


def requires_smtputf8(message: EmailMessage) -> bool:
    """True when an address header cannot be written as plain ASCII."""
    return not str(message["Reply-To"]).isascii()


def render_text_body(submission: ContactSubmission) -> str:
    return (
        f"Name: {submission.name}\n"
        f"Email: {submission.email}\n\n"
        f"Message:\n{submission.message}"
    )


def render_html_body(submission: ContactSubmission) -> str:
    message = html.escape(submission.message).replace("\r\n", "\n").replace("\n", "<br>")
    return HTML_TEMPLATE.format(
        name=html.escape(submission.name),
        email=html.escape(submission.email),
        message=message,
    )


def compose_contact_email(submission: ContactSubmission, config: RelayConfig) -> EmailMessage:
    """
    Build the operator notification for a submission.

    The sender address is always the configured relay sender; the
    submitter's name is only used as the display name, and replies go
    to the submitter through Reply-To.

    Args:
        submission: Validated contact submission
        config: Relay parameters

    Returns:
        EmailMessage: multipart/alternative with plain text and HTML parts
    """
    name = _single_line(submission.name)

    msg = EmailMessage()
    msg["From"] = Address(display_name=name, addr_spec=config.from_email)
    msg["To"] = config.recipient_email
    msg["Reply-To"] = reply_to_address(submission.email)
    msg["Subject"] = SUBJECT_TEMPLATE.format(name=name)

    msg.set_content(render_text_body(submission))
    msg.add_alternative(render_html_body(submission), subtype="html")
    return msg


async def send_contact_email(submission: ContactSubmission, config: RelayConfig) -> None:
    """
    Relay a submission to the operator inbox.

    Opens a fresh SMTP connection for this message and waits for the
    relay's answer.

    Raises:
        RelayDeliveryError: if the relay cannot be reached or refuses the message
    """
    message = compose_contact_email(submission, config)

    envelope = {}
    if requires_smtputf8(message):
        # aiosmtplib flattens as ASCII unless an envelope address is non-ASCII
        envelope = {
            "sender": config.from_email,
            "recipients": [config.recipient_email],
            "mail_options": ["SMTPUTF8"],
        }
        message = message.as_bytes(policy=policy.SMTPUTF8)

    try:
        await aiosmtplib.send(
            message,
            **envelope,
            hostname=config.host,
            port=config.port,
            username=config.username,
            password=config.password.get_secret_value(),
            use_tls=config.use_tls,
            timeout=config.timeout,
        )
    except (aiosmtplib.SMTPException, OSError) as e:
        logger.error(f"❌ SMTP relay {config.host}:{config.port} failed to send contact email: {str(e)}")
        raise RelayDeliveryError("Failed to send contact email") from e

    logger.info(f"✅ Contact email from submitter relayed to {config.recipient_email}")
