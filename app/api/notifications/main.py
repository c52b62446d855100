import uuid

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session

from ...db.engine_sync import get_sync_session
from ...services.notification_state import NotificationStateService
from ...services.reminder_service import ReminderService
from ...utils.sms import SmsSender
from .models import CheckResult, NotificationStatus

router = APIRouter()


# --- Dependency Injectors ---
def get_sms_sender() -> SmsSender | None:
    """None lets ReminderService build the Twilio sender from settings."""
    return None


def get_reminder_service(
    session: Session = Depends(get_sync_session),
    sender: SmsSender | None = Depends(get_sms_sender),
) -> ReminderService:
    return ReminderService(session, sender=sender)


def get_state_service(session: Session = Depends(get_sync_session)) -> NotificationStateService:
    return NotificationStateService(session)


# --- Endpoints ---


@router.get("/notifications/status", response_model=list[NotificationStatus])
def api_get_all_status(service: NotificationStateService = Depends(get_state_service)):
    return service.get_all()


@router.get("/notifications/status/{customer_id}", response_model=NotificationStatus)
def api_get_status(
    customer_id: uuid.UUID,
    service: NotificationStateService = Depends(get_state_service),
):
    return service.get(customer_id)


@router.post("/notifications/check", response_model=CheckResult)
def api_force_reminder_check(reminders: ReminderService = Depends(get_reminder_service)):
    """
    Run one reminder cycle now, in the API process.
    Safe alongside the scheduler: customers already sent today are skipped.
    """
    try:
        return reminders.run_cycle()
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))
