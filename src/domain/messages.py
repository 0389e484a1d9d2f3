"""
Transactional email bodies for verification and password reset.

Each message carries exactly one actionable link. The HTML body shows it
as a button and repeats it as escaped fallback text; the plain-text body
shows it once.
"""

from html import escape

from .ports import EmailMessage

_FOOTER = "School Chow • support@schoolchow.com"

_HTML = """<!DOCTYPE html><html lang="en"><head><meta charset="utf-8">
<title>{title}</title></head><body>
  <h1>{title}</h1>
  <p>Hi {name},</p>
  <p>{intro}</p>
  <p><a href="{link}">{action}</a></p>
  <p>If the button doesn’t work, copy and paste this link into your browser:</p>
  <p>{link}</p>
  <p>{outro}</p>
  <p>{footer}</p>
</body></html>"""

_TEXT = """{title}

Hi {name},

{intro}

{link}

{outro}

{footer}"""


def _render(
    to: str, link: str, name: str | None, title: str, intro: str, action: str, outro: str
) -> EmailMessage:
    greeting = name or "there"
    html = _HTML.format(
        title=escape(title),
        name=escape(greeting),
        intro=escape(intro),
        link=escape(link),
        action=escape(action),
        outro=escape(outro),
        footer=escape(_FOOTER),
    )
    text = _TEXT.format(
        title=title, name=greeting, intro=intro, link=link, outro=outro, footer=_FOOTER
    )
    return EmailMessage(to=to, subject=title, html=html, text=text)


def verification_email(to: str, link: str, name: str | None = None) -> EmailMessage:
    """Build the email-verification message."""
    return _render(
        to,
        link,
        name,
        title="Verify your email",
        intro="Please confirm your email address to complete your School Chow account setup.",
        action="Verify email",
        outro="If you didn’t create an account, you can ignore this message.",
    )


def password_reset_email(to: str, link: str, name: str | None = None) -> EmailMessage:
    """Build the password-reset message."""
    return _render(
        to,
        link,
        name,
        title="Reset your password",
        intro="You requested a password reset for your School Chow account.",
        action="Reset password",
        outro="If you didn’t request this, you can ignore this message.",
    )
