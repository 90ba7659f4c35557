"""
Verification email copy.

French is the site's primary language; English is available for
English-locale users.
"""

from datetime import datetime, timezone
from html import escape
from typing import Optional

from .models import EmailMessage

DEFAULT_EMAIL_LOCALE = "fr"

COPY = {
    "fr": {
        "subject": "Votre code de vérification {brand}",
        "greeting": "Bonjour {name},",
        "intro": "Votre code de vérification pour {brand} est :",
        "expiry": "Ce code expirera dans {minutes} minutes.",
        "ignore": "Si vous n'avez pas demandé ce code, vous pouvez ignorer cet e-mail en toute sécurité.",
        "signoff": "Merci,",
        "team": "L'équipe {brand}",
        "rights": "Tous droits réservés.",
    },
    "en": {
        "subject": "Your {brand} verification code",
        "greeting": "Hello {name},",
        "intro": "Your verification code for {brand} is:",
        "expiry": "This code will expire in {minutes} minutes.",
        "ignore": "If you did not request this code, you can safely ignore this email.",
        "signoff": "Thanks,",
        "team": "The {brand} team",
        "rights": "All rights reserved.",
    },
}

HTML_TEMPLATE = """\
<div style="font-family: Arial, 'Helvetica Neue', Helvetica, sans-serif; background-color: #f5f8fa; color: #74787e; line-height: 1.4; margin: 0; width: 100%;">
  <table width="100%" cellpadding="0" cellspacing="0">
    <tr>
      <td style="padding: 25px 0; text-align: center;">
        <a href="{base_url}" style="color: #013A81; font-size: 19px; font-weight: bold; text-decoration: none;">{brand}</a>
      </td>
    </tr>
    <tr>
      <td style="background-color: #ffffff; border-top: 1px solid #edeff2; border-bottom: 1px solid #edeff2;">
        <table align="center" width="570" cellpadding="0" cellspacing="0" style="margin: 0 auto;">
          <tr>
            <td style="padding: 35px;">
              <h1 style="color: #2F3133; font-size: 19px; font-weight: bold; margin-top: 0;">{greeting}</h1>
              <p style="font-size: 16px;">{intro}</p>
              <div style="margin: 30px auto; text-align: center;">
                <div style="background-color: #f2f2f2; border-radius: 5px; padding: 15px 25px; font-size: 30px; font-weight: bold; letter-spacing: 5px; display: inline-block;">{code}</div>
              </div>
              <p style="font-size: 16px;">{expiry}</p>
              <p style="font-size: 16px;">{ignore}</p>
              <p style="font-size: 16px;">{signoff}<br>{team}</p>
            </td>
          </tr>
        </table>
      </td>
    </tr>
    <tr>
      <td align="center" style="padding: 35px;">
        <p style="color: #aeaeae; font-size: 12px;">&copy; {year} {brand}. {rights}</p>
      </td>
    </tr>
  </table>
</div>
"""


def render_verification_email(
    to: str,
    user_name: str,
    code: str,
    ttl_minutes: int,
    brand: str,
    base_url: str,
    locale: Optional[str] = None,
    now: Optional[datetime] = None,
) -> EmailMessage:
    """
    Render the verification email.

    Unknown locales fall back to French.
    """
    copy = COPY.get(locale or DEFAULT_EMAIL_LOCALE, COPY[DEFAULT_EMAIL_LOCALE])
    year = (now or datetime.now(timezone.utc)).year

    subject = copy["subject"].format(brand=brand)
    greeting = copy["greeting"].format(name=user_name)
    intro = copy["intro"].format(brand=brand)
    expiry = copy["expiry"].format(minutes=ttl_minutes)
    team = copy["team"].format(brand=brand)

    text = "\n\n".join([
        greeting,
        f"{intro} {code}",
        expiry,
        copy["ignore"],
        f"{copy['signoff']}\n{team}",
    ])

    html = HTML_TEMPLATE.format(
        base_url=escape(base_url, quote=True),
        brand=escape(brand),
        greeting=escape(greeting),
        intro=escape(intro),
        code=escape(code),
        expiry=escape(expiry),
        ignore=escape(copy["ignore"]),
        signoff=escape(copy["signoff"]),
        team=escape(team),
        year=year,
        rights=escape(copy["rights"]),
    )

    return EmailMessage(to=to, subject=subject, text=text, html=html)
