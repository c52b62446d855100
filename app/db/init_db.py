# app/db/init_db.py
import logging
import os

from sqlmodel import Session, select

from ..core.constants import (
    DEFAULT_CHECK_INTERVAL_SECONDS,
    DEFAULT_SERVICE_TYPES,
    NOTIFICATION_LEAD_DAYS,
    SettingKeys,
)
from ..models.service_type import ServiceType
from ..models.setting import Setting
from .engine_sync import create_sync_db_and_tables, sync_engine

logger = logging.getLogger(__name__)


def default_settings() -> list[tuple[str, str]]:
    """Initial settings rows; SMS credentials come from the environment if present."""
    return [
        (SettingKeys.COMPANY_NAME.value, os.getenv("BRAND_NAME", "Service Reminder")),
        (SettingKeys.CHECK_INTERVAL.value, str(DEFAULT_CHECK_INTERVAL_SECONDS)),
        (SettingKeys.LEAD_DAYS.value, str(NOTIFICATION_LEAD_DAYS)),
        (SettingKeys.TWILIO_ACCOUNT_SID.value, os.getenv("TWILIO_ACCOUNT_SID", "")),
        (SettingKeys.TWILIO_AUTH_TOKEN.value, os.getenv("TWILIO_AUTH_TOKEN", "")),
        (SettingKeys.TWILIO_PHONE_NUMBER.value, os.getenv("TWILIO_PHONE_NUMBER", "")),
        (SettingKeys.DEFAULT_COUNTRY_CODE.value, os.getenv("SMS_DEFAULT_COUNTRY_CODE", "91")),
    ]


def seed_defaults(session: Session) -> None:
    """
    Insert missing settings (INSERT OR IGNORE semantics) and the initial
    service types when the table is empty.
    """
    for key, value in default_settings():
        if session.get(Setting, key) is None:
            session.add(Setting(key=key, value=value))

    if session.exec(select(ServiceType)).first() is None:
        logger.info("Seeding default service types...")
        for name in DEFAULT_SERVICE_TYPES:
            session.add(ServiceType(name=name))

    session.commit()


def setup_databases():
    logger.info("Configuring reminder database...")
    create_sync_db_and_tables()
    with Session(sync_engine) as session:
        seed_defaults(session)
    logger.info("Database setup complete.")
