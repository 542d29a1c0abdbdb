"""
Pydantic schemas for employee records.

Request models accept any JSON value for every field.  Type, range and
format rules live in ``EmployeeService`` so that a wrongly typed salary
and a too-short name are reported in the same fail-fast order, with the
same ``{"detail": message}`` body, as any other invalid input.
``EmployeeUpdate`` relies on pydantic's ``model_fields_set``: a field
the client did not send (or sent as ``null``) is left untouched, while a
field sent with any other value, including ``0`` or ``""``, is
validated and written.
"""

from datetime import date, datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field


class Gender(str, Enum):
    MALE = "Male"
    FEMALE = "Female"
    OTHER = "Other"


class EmployeeCreate(BaseModel):
    """Schema for adding an employee."""

    first_name: Any = Field(None, examples=["Ada"])
    last_name: Any = Field(None, examples=["Lovelace"])
    email: Any = Field(None, examples=["ada@example.com"])
    gender: Any = Field(None, examples=["Female"])
    designation: Any = Field(None, examples=["Engineer"])
    salary: Any = Field(None, examples=[5000])
    date_of_joining: Any = Field(None, examples=["2024-03-01"])
    department: Any = Field(None, examples=["Eng"])
    employee_photo: Any = Field(None, description="URL or identifier of the photo")


class EmployeeUpdate(BaseModel):
    """Schema for updating an employee.

    All fields are optional; only fields present in the request body
    with a non-null value are applied.
    """

    first_name: Any = None
    last_name: Any = None
    email: Any = None
    gender: Any = None
    designation: Any = None
    salary: Any = None
    date_of_joining: Any = None
    department: Any = None
    employee_photo: Any = None

    def supplied_fields(self) -> dict:
        """Fields explicitly sent by the client, excluding nulls."""
        return {
            key: value
            for key, value in self.model_dump(exclude_unset=True).items()
            if value is not None
        }


class EmployeeRead(BaseModel):
    """Schema for reading an employee record."""

    id: str
    first_name: str
    last_name: str
    email: str
    gender: Gender
    designation: Optional[str] = None
    salary: float
    date_of_joining: Optional[date] = None
    department: Optional[str] = None
    employee_photo: str = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
