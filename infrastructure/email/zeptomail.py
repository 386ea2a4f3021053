"""ZeptoMail implementation of Notifier.

Templates are looked up by kind: ``templates/emails/{template_kind}.html``
rendered with Jinja2, plus a plain-text fallback built from the same data.
"""

import os
from typing import Any, Mapping, Optional

import httpx
from jinja2 import Environment, FileSystemLoader, TemplateNotFound, select_autoescape

from config import EmailSettings
from errors import TransportError
from infrastructure.http_client import HttpClient
from shared.logging import get_logger

log = get_logger(__name__)

_ZEPTO_API_URL = "https://api.zeptomail.in/v1.1/email"
_DEFAULT_TEMPLATE_DIR = os.path.join(
    os.path.dirname(os.path.dirname(os.path.dirname(__file__))),
    "templates",
    "emails",
)


class ZeptoMailProvider:
    def __init__(
        self,
        settings: EmailSettings,
        http_client: HttpClient,
        app_url: str = "http://localhost:3000",
        template_dir: str = _DEFAULT_TEMPLATE_DIR,
    ) -> None:
        self._settings = settings
        self._http = http_client
        self._app_url = app_url
        self._jinja = Environment(
            loader=FileSystemLoader(template_dir),
            autoescape=select_autoescape(["html", "xml"]),
        )

    def _render(self, template_kind: str, data: Mapping[str, Any]) -> str:
        try:
            template = self._jinja.get_template(f"{template_kind}.html")
        except TemplateNotFound as e:
            log.error("email_template_missing", template_kind=template_kind)
            raise TransportError(f"Unknown email template: {template_kind}") from e
        return template.render(app_url=self._app_url, **data)

    @staticmethod
    def _text_body(subject: str, data: Mapping[str, Any]) -> str:
        name: Optional[str] = data.get("name")
        lines = [subject, "", f"Hello{f' {name}' if name else ''},", ""]
        if "otp" in data:
            lines.append(f"Your one-time code is: {data['otp']}")
            lines.append("")
            lines.append("This code expires in 5 minutes.")
        return "\n".join(lines)

    async def send(
        self,
        to_email: str,
        subject: str,
        template_kind: str,
        data: Mapping[str, Any],
    ) -> None:
        if not self._settings.zepto_api_token:
            log.error("zepto_mail_send_failed", reason="token_not_configured")
            raise TransportError("Email delivery is not configured.")

        payload: dict = {
            "from": {
                "address": self._settings.zepto_from_email,
                "name": self._settings.zepto_from_name,
            },
            "to": [
                {
                    "email_address": {
                        "address": to_email,
                        "name": data.get("name") or to_email,
                    }
                }
            ],
            "subject": subject,
            "htmlbody": self._render(template_kind, data),
            "textbody": self._text_body(subject, data),
        }

        token = self._settings.zepto_api_token
        if not token.startswith("Zoho-enczapikey "):
            token = f"Zoho-enczapikey {token}"

        headers = {"Authorization": token, "Content-Type": "application/json"}

        try:
            response = await self._http.post(_ZEPTO_API_URL, json=payload, headers=headers)
        except httpx.HTTPError as e:
            log.error(
                "email_send_error",
                to_email=to_email,
                template_kind=template_kind,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise TransportError("Failed to send email. Please try again later.") from e

        if response.status_code not in (200, 201, 202):
            log.error(
                "email_sent_failed",
                to_email=to_email,
                template_kind=template_kind,
                status_code=response.status_code,
                response=response.text[:200],
            )
            raise TransportError("Failed to send email. Please try again later.")

        log.info("email_sent_success", to_email=to_email, template_kind=template_kind)
