import uuid
from datetime import date, datetime

from app.models.notification_status import NotificationStatus
from app.services.notification_state import NotificationStateService


def test_get_defaults_when_absent(session) -> None:
    status = NotificationStateService(session).get(uuid.uuid4())
    assert status.last_sent is None
    assert status.is_sent is False


def test_set_is_a_full_overwrite(session) -> None:
    states = NotificationStateService(session)
    customer_id = uuid.uuid4()

    states.set(customer_id, NotificationStatus(customer_id=customer_id, last_sent=datetime(2024, 4, 5, 9), is_sent=True, cycle_date=date(2024, 4, 10)))
    states.set(customer_id, NotificationStatus(customer_id=customer_id, last_sent=None, is_sent=False))

    status = states.get(customer_id)
    assert status.is_sent is False
    assert status.last_sent is None
    assert status.cycle_date is None
    assert len(states.get_all()) == 1


def test_is_sent_for_treats_other_cycles_as_stale(session) -> None:
    states = NotificationStateService(session)
    customer_id = uuid.uuid4()
    states.set(customer_id, NotificationStatus(customer_id=customer_id, last_sent=datetime(2024, 4, 5, 9), is_sent=True, cycle_date=date(2024, 4, 10)))

    assert states.is_sent_for(customer_id, date(2024, 4, 10)) is True
    assert states.is_sent_for(customer_id, date(2024, 7, 10)) is False
    assert states.is_sent_for(uuid.uuid4(), date(2024, 4, 10)) is False
