from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from ...core.constants import SettingKeys
from ...db.engine_sync import get_sync_session
from ...services.settings_service import SettingsService
from .models import SmsSettingsResponse, SmsSettingsUpdate

router = APIRouter()

# Never echoed back through the generic settings endpoint
SECRET_KEYS = {SettingKeys.TWILIO_AUTH_TOKEN.value}


def get_settings_service(session: Session = Depends(get_sync_session)) -> SettingsService:
    return SettingsService(session)


def mask_secret(value: str) -> str:
    if not value:
        return ""
    return "*" * max(len(value) - 4, 4) + value[-4:]


@router.get("/settings", response_model=dict[str, str])
def api_get_settings(service: SettingsService = Depends(get_settings_service)):
    settings = service.get_all_settings()
    return {k: (mask_secret(v) if k in SECRET_KEYS else v) for k, v in settings.items()}


@router.put("/settings", status_code=status.HTTP_204_NO_CONTENT)
def api_update_settings(
    settings: dict[str, str],
    service: SettingsService = Depends(get_settings_service),
):
    # A masked secret sent back unchanged must not overwrite the stored one
    settings = {
        k: v for k, v in settings.items() if not (k in SECRET_KEYS and v.startswith("****"))
    }
    service.update_settings(settings)
    return


@router.get("/settings/sms", response_model=SmsSettingsResponse)
def api_get_sms_settings(service: SettingsService = Depends(get_settings_service)):
    config = service.get_sms_config()
    return {
        "account_sid": config.account_sid,
        "auth_token": mask_secret(config.auth_token),
        "sender_number": config.sender_number,
        "default_country_code": config.default_country_code,
        "is_configured": config.is_configured,
    }


@router.put("/settings/sms", status_code=status.HTTP_204_NO_CONTENT)
def api_update_sms_settings(
    config: SmsSettingsUpdate,
    service: SettingsService = Depends(get_settings_service),
):
    """Takes effect on the next dispatch; credentials are resolved per send."""
    service.update_sms_config(config.model_dump(exclude_unset=True))
    return
