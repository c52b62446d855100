from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, ConfigDict
from sqlmodel import Session

from ...db.engine_sync import get_sync_session
from ...services.service_type_service import ServiceTypeService

router = APIRouter()


# --- Pydantic models for Request/Response ---
class ServiceTypeBase(BaseModel):
    name: str


class ServiceTypeCreate(ServiceTypeBase):
    pass


class ServiceTypeResponse(ServiceTypeBase):
    id: int
    model_config = ConfigDict(from_attributes=True)


# --- Dependency Injection ---
def get_service_type_service(session: Session = Depends(get_sync_session)) -> ServiceTypeService:
    return ServiceTypeService(session)


# --- Endpoints ---


@router.get("/service-types", response_model=List[ServiceTypeResponse])
def get_all_service_types(service: ServiceTypeService = Depends(get_service_type_service)):
    return service.get_all_service_types()


@router.post(
    "/service-types", response_model=ServiceTypeResponse, status_code=status.HTTP_201_CREATED
)
def create_service_type(
    service_type: ServiceTypeCreate,
    service: ServiceTypeService = Depends(get_service_type_service),
):
    try:
        return service.create_service_type(service_type.name)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.put("/service-types/{type_id}", response_model=ServiceTypeResponse)
def rename_service_type(
    type_id: int,
    service_type: ServiceTypeCreate,
    service: ServiceTypeService = Depends(get_service_type_service),
):
    try:
        return service.rename_service_type(type_id, service_type.name)
    except FileNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("/service-types/{type_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_service_type(
    type_id: int,
    service: ServiceTypeService = Depends(get_service_type_service),
):
    try:
        service.delete_service_type(type_id)
    except FileNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return
