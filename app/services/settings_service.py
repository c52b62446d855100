# app/services/settings_service.py
import os
from typing import Dict

from sqlmodel import Session, select

from ..core.constants import SettingKeys
from ..models.setting import Setting
from ..utils.sms import SmsConfig

# Fallbacks used when neither the settings table nor the environment has a value
SMS_FALLBACKS = {
    SettingKeys.TWILIO_ACCOUNT_SID: ("TWILIO_ACCOUNT_SID", ""),
    SettingKeys.TWILIO_AUTH_TOKEN: ("TWILIO_AUTH_TOKEN", ""),
    SettingKeys.TWILIO_PHONE_NUMBER: ("TWILIO_PHONE_NUMBER", ""),
    SettingKeys.DEFAULT_COUNTRY_CODE: ("SMS_DEFAULT_COUNTRY_CODE", "91"),
}


class SettingsService:
    def __init__(self, session: Session):
        self.session = session

    def get_all_settings(self) -> Dict[str, str]:
        settings = self.session.exec(select(Setting)).all()
        return {s.key: s.value for s in settings}

    def get_setting(self, key: str, default: str | None = None) -> str | None:
        setting = self.session.get(Setting, key)
        return setting.value if setting and setting.value != "" else default

    def update_settings(self, settings_to_update: Dict[str, str]):
        for key, value in settings_to_update.items():
            setting = self.session.get(Setting, key)
            if setting:
                setting.value = value
                self.session.add(setting)
            else:
                self.session.add(Setting(key=key, value=value))

        self.session.commit()

    def get_brand_name(self) -> str:
        return self.get_setting(
            SettingKeys.COMPANY_NAME.value, os.getenv("BRAND_NAME", "Service Reminder")
        )

    # --- SMS transport configuration ---
    def _resolve(self, key: SettingKeys) -> str:
        env_var, fallback = SMS_FALLBACKS[key]
        return self.get_setting(key.value) or os.getenv(env_var) or fallback

    def get_sms_config(self) -> SmsConfig:
        """
        Resolve transport credentials: settings table, then environment,
        then preset fallback values. Called once per dispatch.
        """
        return SmsConfig(
            account_sid=self._resolve(SettingKeys.TWILIO_ACCOUNT_SID),
            auth_token=self._resolve(SettingKeys.TWILIO_AUTH_TOKEN),
            sender_number=self._resolve(SettingKeys.TWILIO_PHONE_NUMBER),
            default_country_code=self._resolve(SettingKeys.DEFAULT_COUNTRY_CODE),
        )

    def update_sms_config(self, updates: Dict[str, str | None]):
        """Partial update; keys are SmsConfig field names."""
        field_to_key = {
            "account_sid": SettingKeys.TWILIO_ACCOUNT_SID,
            "auth_token": SettingKeys.TWILIO_AUTH_TOKEN,
            "sender_number": SettingKeys.TWILIO_PHONE_NUMBER,
            "default_country_code": SettingKeys.DEFAULT_COUNTRY_CODE,
        }
        to_store = {
            field_to_key[field].value: value
            for field, value in updates.items()
            if field in field_to_key and value is not None
        }
        if to_store:
            self.update_settings(to_store)
