# app/services/service_type_service.py
from typing import List

from sqlmodel import Session, select

from ..models.service_type import ServiceType


class ServiceTypeService:
    def __init__(self, session: Session):
        self.session = session

    def get_all_service_types(self) -> List[ServiceType]:
        return list(self.session.exec(select(ServiceType).order_by(ServiceType.id)).all())

    def create_service_type(self, name: str) -> ServiceType:
        """Add a service type. Duplicate names are tolerated."""
        name = (name or "").strip()
        if not name:
            raise ValueError("Service type name cannot be empty.")

        try:
            new_type = ServiceType(name=name)
            self.session.add(new_type)
            self.session.commit()
            self.session.refresh(new_type)
            return new_type
        except Exception as e:
            self.session.rollback()
            raise ValueError(f"Error creating service type: {str(e)}")

    def get_service_type_by_id(self, type_id: int) -> ServiceType:
        service_type = self.session.get(ServiceType, type_id)
        if not service_type:
            raise FileNotFoundError(f"Service type {type_id} not found.")
        return service_type

    def rename_service_type(self, type_id: int, name: str) -> ServiceType:
        # Customers keep their label: service_type is referenced by value, not by key
        name = (name or "").strip()
        if not name:
            raise ValueError("Service type name cannot be empty.")

        service_type = self.get_service_type_by_id(type_id)
        service_type.name = name
        self.session.add(service_type)
        self.session.commit()
        self.session.refresh(service_type)
        return service_type

    def delete_service_type(self, type_id: int):
        service_type = self.get_service_type_by_id(type_id)
        self.session.delete(service_type)
        self.session.commit()
