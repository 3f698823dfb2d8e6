import html
import resend
from datetime import datetime
from typing import Optional
from config import config
from logging_config import get_logger

logger = get_logger("email")

if config.RESEND_API_KEY:
    resend.api_key = config.RESEND_API_KEY

BRAND = "AminWebTech"


def send_email(to_email: str, subject: str, html_content: str, reply_to: Optional[str] = None):
    """
    Send one message through Resend.
    Without RESEND_API_KEY the send is only logged and None is returned.
    """
    if not config.RESEND_API_KEY:
        logger.warning(f"Resend API key not configured. Mock sending email to {to_email} with subject '{subject}'")
        return None

    resend.api_key = config.RESEND_API_KEY
    params = {
        "from": config.MAIL_FROM,
        "to": [to_email],
        "subject": subject,
        "html": html_content,
    }
    if reply_to:
        params["reply_to"] = reply_to

    try:
        response = resend.Emails.send(params)
    except Exception as e:
        # Runs as a background task after the response is sent; the reply record already exists
        logger.error(f"Failed to send email to {to_email}: {e}", exc_info=True)
        return None

    logger.info(f"Email sent to {to_email}", extra={"data": {"email_id": response.get("id"), "subject": subject}})
    return response


def _paragraphs(text: str) -> str:
    return html.escape(text or "").replace("\n", "<br>")


def base_email_template(title: str, preheader: str, content: str, footer_text: str = "") -> str:
    """Single-column layout with the brand bar on top and a legal line at the bottom."""
    year = datetime.now().year
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{html.escape(title)}</title>
</head>
<body style="margin:0;padding:0;background:#eef2f7;font-family:Arial,Helvetica,sans-serif;color:#1f2937;">
  <span style="display:none;max-height:0;overflow:hidden;">{html.escape(preheader)}</span>
  <div style="max-width:560px;margin:32px auto;background:#ffffff;border:1px solid #dbe3ee;border-radius:10px;">
    <div style="padding:18px 28px;border-bottom:3px solid #2563eb;font-size:20px;font-weight:bold;">{BRAND}</div>
    <div style="padding:28px;font-size:15px;line-height:1.6;">{content}</div>
    <div style="padding:16px 28px;background:#f8fafc;font-size:12px;color:#64748b;border-radius:0 0 10px 10px;">
      {footer_text}<br>&copy; {year} {BRAND}
    </div>
  </div>
</body>
</html>"""


def reply_subject(original_subject: Optional[str], tracking_id: str) -> str:
    """The bracketed tracking id is what the inbound webhook matches on."""
    base = original_subject or "Your message"
    return f"Re: {base} [{tracking_id}]"


def send_contact_reply_email(
    to_email: str,
    recipient_name: Optional[str],
    original_subject: Optional[str],
    message: str,
    tracking_id: str,
    reply_to: Optional[str] = None,
    original_message: Optional[str] = None,
):
    """Quick reply from the admin inbox to a contact form submitter."""
    quoted = ""
    if original_message:
        quoted = (
            '<div style="margin-top:24px;padding-left:12px;border-left:3px solid #cbd5e1;color:#64748b;font-size:13px;">'
            f"{_paragraphs(original_message)}</div>"
        )

    content = (
        f"<p>Hello {html.escape(recipient_name or 'there')},</p>"
        f"<p>{_paragraphs(message)}</p>"
        '<p style="color:#64748b;font-size:13px;">Reply to this email to continue the conversation.</p>'
        f"{quoted}"
    )

    html_content = base_email_template(
        title=f"Reply from {BRAND}",
        preheader=f"A reply to: {original_subject or 'your message'}",
        content=content,
        footer_text="You are receiving this because you contacted us through our website.",
    )
    return send_email(to_email, reply_subject(original_subject, tracking_id), html_content, reply_to=reply_to)
