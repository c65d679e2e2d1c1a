import logging

import resend

from chromepass.core.constants import email_templates
from chromepass.core.settings import get_settings

logger = logging.getLogger(__name__)


def _render_template(template_name: str, **context: str) -> str:
    """Render an email template.

    Args:
        template_name: Name of the template file
        **context: Template variables

    Returns:
        Rendered HTML
    """
    template = email_templates.get_template(template_name)
    return template.render(**context)


def init_resend() -> None:
    """Initialize Resend with API key if available."""
    settings = get_settings()
    if not settings.resend_api_key:
        logger.info("RESEND_API_KEY not set, outgoing email is disabled")
        return
    resend.api_key = settings.resend_api_key


def build_verification_url(token: str) -> str:
    settings = get_settings()
    return f"{settings.client_url}/verify-email/{token}"


def send_email_verification_email(to_email: str, token: str) -> bool:
    """Send the email verification link via Resend.

    Delivery is best-effort: when email is not configured, or Resend
    rejects the message, the failure is logged and False is returned.

    Args:
        to_email: Recipient email address
        token: Verification token stored on the user

    Returns:
        True if the message was handed to Resend
    """
    settings = get_settings()
    if not settings.email_configured:
        logger.info("Email not configured, skipping verification email for %s", to_email)
        return False

    verification_url = build_verification_url(token)
    try:
        html_content = _render_template(
            "email-verification.html", verification_url=verification_url
        )
        resend.Emails.send(
            {
                "from": f"noreply@{settings.app_domain}",
                "to": to_email,
                "subject": "Chrome Pass - Verify Your Email",
                "html": html_content,
            }
        )
    except Exception as e:
        logger.warning("Failed to send verification email to %s: %s", to_email, e)
        return False

    logger.info("Verification email sent to %s", to_email)
    return True
