from app.db.engine_sync import get_sync_session
from app.models.setting import Setting


def get_setting_sync(key: str) -> str | None:
    """
    Helper function to get a setting value synchronously.
    Uses a temporary sync session (scheduler process, outside any request).
    """
    with next(get_sync_session()) as session:
        setting = session.get(Setting, key)
        return setting.value if setting else None


def get_int_setting_sync(key: str, default: int) -> int:
    """Integer setting with fallback for missing or malformed values."""
    value = get_setting_sync(key)
    try:
        return int(value) if value and value.strip().isdigit() else default
    except (ValueError, TypeError):
        return default
