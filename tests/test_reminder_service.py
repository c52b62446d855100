from datetime import date, datetime, timedelta

import pytest
from sqlalchemy.exc import OperationalError

from app.models.notification_status import NotificationStatus
from app.services.customer_service import CustomerService
from app.services.notification_state import NotificationStateService
from app.services.reminder_service import ReminderService, notification_date

from .conftest import FakeSender, FixedClock

# service_date 2024-01-10 + 3 months -> next service 2024-04-10, reminder on 2024-04-05
NEXT_SERVICE = date(2024, 4, 10)
TRIGGER_DAY = date(2024, 4, 5)


def _service(session, sender, now=datetime(2024, 4, 5, 9, 30)):
    return ReminderService(session, sender=sender, clock=FixedClock(now))


def test_notification_date_is_five_days_before(make_customer) -> None:
    customer = make_customer()
    assert customer.next_service_date == NEXT_SERVICE
    assert notification_date(customer) == TRIGGER_DAY


@pytest.mark.parametrize(
    "today, selected",
    [
        (TRIGGER_DAY - timedelta(days=1), False),
        (TRIGGER_DAY, True),
        (TRIGGER_DAY + timedelta(days=1), False),
    ],
)
def test_only_the_trigger_day_selects(session, sender, make_customer, today, selected) -> None:
    customer = make_customer()
    due = _service(session, sender).find_due_customers(today)
    assert [c.id for c in due] == ([customer.id] if selected else [])


def test_cycle_sends_exactly_once_per_day(session, sender, make_customer) -> None:
    customer = make_customer()
    service = _service(session, sender)

    first = service.run_cycle(TRIGGER_DAY)
    second = service.run_cycle(TRIGGER_DAY)

    assert first == {"evaluated": 1, "due": 1, "sent": 1, "failed": 0}
    assert second == {"evaluated": 1, "due": 0, "sent": 0, "failed": 0}
    assert sender.sent == [
        ("9876543210", "Hey, Your Solar service is scheduled on April 10, 2024")
    ]

    status = NotificationStateService(session).get(customer.id)
    assert status.is_sent is True
    assert status.last_sent == datetime(2024, 4, 5, 9, 30)
    assert status.cycle_date == NEXT_SERVICE


def test_failure_is_retried_on_next_cycle(session, make_customer) -> None:
    customer = make_customer()
    sender = FakeSender(results=[False, True])
    clock = FixedClock(datetime(2024, 4, 5, 8, 0))
    service = ReminderService(session, sender=sender, clock=clock)

    assert service.run_cycle(TRIGGER_DAY)["failed"] == 1
    assert NotificationStateService(session).get(customer.id).is_sent is False

    clock.now = datetime(2024, 4, 5, 9, 0)
    assert service.run_cycle(TRIGGER_DAY)["sent"] == 1

    status = NotificationStateService(session).get(customer.id)
    assert status.is_sent is True
    assert status.last_sent == datetime(2024, 4, 5, 9, 0)
    assert len(sender.sent) == 2


def test_one_failure_does_not_abort_the_batch(session, make_customer) -> None:
    first = make_customer(name="First", phone_number="1111111111")
    second = make_customer(name="Second", phone_number="2222222222")
    third = make_customer(name="Third", phone_number="3333333333")
    sender = FakeSender(failing_numbers=["2222222222"])

    stats = _service(session, sender).run_cycle(TRIGGER_DAY)

    assert stats == {"evaluated": 3, "due": 3, "sent": 2, "failed": 1}
    assert sorted(to for to, _ in sender.sent) == ["1111111111", "2222222222", "3333333333"]
    states = NotificationStateService(session)
    assert states.get(first.id).is_sent is True
    assert states.get(second.id).is_sent is False
    assert states.get(third.id).is_sent is True


def test_missed_trigger_day_is_not_caught_up(session, sender, make_customer) -> None:
    make_customer()
    stats = _service(session, sender).run_cycle(TRIGGER_DAY + timedelta(days=2))
    assert stats["due"] == 0
    assert sender.sent == []


def test_new_cycle_after_update_is_due_again(session, sender, make_customer) -> None:
    customer = make_customer()
    service = _service(session, sender)
    service.run_cycle(TRIGGER_DAY)

    # Service done on the due date; next cycle is 2024-07-10, reminder on 2024-07-05
    CustomerService(session).update_customer(customer.id, {"service_date": date(2024, 4, 10)})
    new_trigger = date(2024, 7, 5)

    assert [c.id for c in service.find_due_customers(new_trigger)] == [customer.id]
    assert service.run_cycle(new_trigger)["sent"] == 1
    assert service.run_cycle(new_trigger)["sent"] == 0
    assert len(sender.sent) == 2


def test_completion_notice_ignores_and_keeps_state(session, make_customer) -> None:
    customer = make_customer(service_type="Water Filter")
    states = NotificationStateService(session)
    sent_at = datetime(2024, 4, 5, 9, 30)
    states.set(
        customer.id,
        NotificationStatus(customer_id=customer.id, last_sent=sent_at, is_sent=True, cycle_date=NEXT_SERVICE),
    )
    sender = FakeSender()

    assert _service(session, sender).send_completion_notice(customer.id) is True
    assert _service(session, sender).send_completion_notice(customer.id) is True

    assert sender.sent[0] == (
        "9876543210",
        "Hey, Thank you for choosing Service Reminder! Service for Water Filter is done "
        "and the next Service date is April 10, 2024. Have a great day!",
    )
    assert len(sender.sent) == 2
    status = states.get(customer.id)
    assert status.is_sent is True
    assert status.last_sent == sent_at


def test_completion_notice_without_prior_state_creates_none(session, make_customer) -> None:
    customer = make_customer()
    assert _service(session, FakeSender(results=[False])).send_completion_notice(customer.id) is False
    assert NotificationStateService(session).get_all() == []


def test_store_failure_abandons_cycle(session, sender, make_customer, monkeypatch) -> None:
    make_customer()
    service = _service(session, sender)

    def broken_store():
        raise OperationalError("SELECT", {}, Exception("database is locked"))

    monkeypatch.setattr(service.customer_service, "list_customers", broken_store)
    with pytest.raises(OperationalError):
        service.run_cycle(TRIGGER_DAY)
    assert sender.sent == []
