from pydantic import BaseModel


class SmsSettingsResponse(BaseModel):
    account_sid: str
    auth_token: str  # masked
    sender_number: str
    default_country_code: str
    is_configured: bool


class SmsSettingsUpdate(BaseModel):
    account_sid: str | None = None
    auth_token: str | None = None
    sender_number: str | None = None
    default_country_code: str | None = None
