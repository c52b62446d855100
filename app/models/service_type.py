"""
ServiceType model. Names are unique by convention only.
"""
from typing import Optional

from sqlmodel import Field, SQLModel


class ServiceType(SQLModel, table=True):
    __tablename__ = "service_types"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(nullable=False)
