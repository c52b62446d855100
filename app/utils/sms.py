# app/utils/sms.py
"""
Twilio SMS transport.

Stored numbers are bare 10-digit national numbers. Twilio needs E.164, so a bare
10-digit number gets the configured default_country_code (91 unless changed)
in front of it as well as the "+". This goes beyond simply prefixing "+".
Numbers of any other length, and any call with an empty country code, only get
the "+".
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Protocol

import httpx

logger = logging.getLogger(__name__)

TWILIO_API_URL = "https://api.twilio.com/2010-04-01/Accounts/{sid}/Messages.json"


@dataclass
class SmsConfig:
    """Transport credentials, resolved per dispatch from the settings provider."""

    account_sid: str
    auth_token: str
    sender_number: str
    default_country_code: str = ""

    @property
    def is_configured(self) -> bool:
        return bool(self.account_sid and self.auth_token and self.sender_number)


class SmsSender(Protocol):
    def send(self, to: str, message: str) -> bool: ...


def normalize_phone_number(number: str, country_code: str = "") -> str:
    """
    Ensure the number carries a leading '+'.
    Bare 10-digit national numbers get the default country code first.
    """
    number = (number or "").strip()
    if number.startswith("+"):
        return number
    if country_code and len(number) == 10 and number.isdigit():
        return f"+{country_code.lstrip('+')}{number}"
    return f"+{number}"


class TwilioSmsSender:
    """
    Sends an SMS through the Twilio Messages REST API.

    Args:
        config_provider: Callable returning the current SmsConfig. It is
            invoked on every send so credential changes apply immediately.
        client: Optional httpx.Client (tests inject one with a MockTransport).
    """

    def __init__(
        self,
        config_provider: Callable[[], SmsConfig],
        client: Optional[httpx.Client] = None,
        timeout: float = 10,
    ):
        self.config_provider = config_provider
        self.client = client
        self.timeout = timeout

    def send(self, to: str, message: str) -> bool:
        """Return True when Twilio accepted the message, False otherwise."""
        config = self.config_provider()
        if not config.is_configured:
            logger.warning(f"Twilio credentials not configured. SMS to {to} not sent: {message}")
            return False

        formatted_to = normalize_phone_number(to, config.default_country_code)
        formatted_from = normalize_phone_number(config.sender_number)

        api_url = TWILIO_API_URL.format(sid=config.account_sid)
        payload = {"To": formatted_to, "From": formatted_from, "Body": message}
        auth = (config.account_sid, config.auth_token)

        try:
            if self.client is not None:
                response = self.client.post(api_url, data=payload, auth=auth, timeout=self.timeout)
            else:
                response = httpx.post(api_url, data=payload, auth=auth, timeout=self.timeout)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(f"Twilio API error sending SMS to {formatted_to}: {e}")
            return False
        except httpx.RequestError as e:
            logger.error(f"Connection error sending SMS to {formatted_to}: {e}")
            return False

        try:
            message_id = response.json().get("sid")
        except ValueError:
            message_id = None
        logger.info(f"SMS sent to {formatted_to} (sid={message_id})")
        return True
