import uuid
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, status
from sqlmodel import Session

from ...db.engine_sync import get_sync_session
from ...services.customer_service import CustomerService
from ...services.reminder_service import ReminderService
from ...services.stats_service import table_status_label
from ..notifications.main import get_reminder_service
from .models import (
    CompletionResult,
    Customer,
    CustomerCreate,
    CustomerListItem,
    CustomerUpdate,
    ServiceCompletion,
)

router = APIRouter()


# --- Dependency Injectors ---
def get_customer_service(session: Session = Depends(get_sync_session)) -> CustomerService:
    return CustomerService(session)


# --- Customer Endpoints ---


@router.get("/customers", response_model=list[CustomerListItem])
def api_get_customers(
    search: str | None = None,
    service_type: str | None = None,
    service: CustomerService = Depends(get_customer_service),
):
    today = date.today()
    rows = []
    for customer in service.search_customers(search=search, service_type=service_type):
        days_left = (customer.next_service_date - today).days
        rows.append(
            CustomerListItem(
                **Customer.model_validate(customer).model_dump(),
                days_left=days_left,
                status_label=table_status_label(days_left),
            )
        )
    return rows


@router.get("/customers/{customer_id}", response_model=Customer)
def api_get_customer(
    customer_id: uuid.UUID,
    service: CustomerService = Depends(get_customer_service),
):
    try:
        return service.get_customer_by_id(customer_id)
    except FileNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/customers", response_model=Customer, status_code=status.HTTP_201_CREATED)
def api_create_customer(
    customer: CustomerCreate,
    service: CustomerService = Depends(get_customer_service),
):
    try:
        return service.create_customer(customer.model_dump())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.put("/customers/{customer_id}", response_model=Customer)
def api_update_customer(
    customer_id: uuid.UUID,
    customer_update: CustomerUpdate,
    service: CustomerService = Depends(get_customer_service),
):
    update_fields = customer_update.model_dump(exclude_unset=True)
    try:
        return service.update_customer(customer_id, update_fields)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except FileNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/customers/{customer_id}", status_code=status.HTTP_204_NO_CONTENT)
def api_delete_customer(
    customer_id: uuid.UUID,
    service: CustomerService = Depends(get_customer_service),
):
    try:
        service.delete_customer(customer_id)
        return
    except FileNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/customers/{customer_id}/complete", response_model=CompletionResult)
def api_complete_service(
    customer_id: uuid.UUID,
    completion: ServiceCompletion,
    service: CustomerService = Depends(get_customer_service),
    reminders: ReminderService = Depends(get_reminder_service),
):
    """
    Mark the service as done: the completion date becomes the new service_date,
    next_service_date is recomputed and the completion SMS is sent.
    """
    try:
        customer = service.complete_service(customer_id, completion.completed_on)
    except FileNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    sent = reminders.send_completion_notice(customer_id) if completion.notify else False
    return {"customer": customer, "notification_sent": sent}


@router.post("/customers/{customer_id}/notify-completion")
def api_notify_completion(
    customer_id: uuid.UUID,
    reminders: ReminderService = Depends(get_reminder_service),
):
    """Manual completion SMS; independent of the reminder state."""
    try:
        sent = reminders.send_completion_notice(customer_id)
    except FileNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    if not sent:
        raise HTTPException(status_code=502, detail="SMS could not be delivered.")
    return {"message": "Completion notice sent."}
