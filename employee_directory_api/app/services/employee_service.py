"""
Service layer for the employee directory.

Provides create, read, update, delete and filter operations on employee
records held in a ``DocumentCollection``.  Every operation is a single
validate-then-persist round trip.  Input is validated before the store
is touched; email uniqueness is checked up front and enforced again by
the store's constraint, which closes the race between two concurrent
creates with the same email.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

from ..core.exceptions import ConflictError, NotFoundError
from ..repositories.base import Document, DocumentCollection
from ..schemas.employee import EmployeeCreate, EmployeeUpdate, Gender
from .validators import (
    optional_text,
    parse_date,
    require_choice,
    require_email,
    require_min_length,
    require_min_value,
)

logger = logging.getLogger(__name__)

MIN_SALARY = 1000
GENDERS = tuple(g.value for g in Gender)
TEXT_FIELDS = ("designation", "department", "employee_photo")

FIRST_NAME_MESSAGE = "First name must be at least 2 characters long!"
LAST_NAME_MESSAGE = "Last name must be at least 2 characters long!"
SALARY_MESSAGE = "Salary must be at least 1000!"
GENDER_MESSAGE = "Gender must be Male, Female, or Other!"
DUPLICATE_MESSAGE = "Employee with this email already exists!"
NOT_FOUND_MESSAGE = "Employee not found!"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class EmployeeService:
    """Service class for managing employee records."""

    def __init__(self, employees: DocumentCollection, clock: Optional[Callable[[], datetime]] = None) -> None:
        self.employees = employees
        self.clock = clock or _utcnow

    async def create(self, data: EmployeeCreate) -> str:
        """Validate and store a new employee.

        Checks run in order: first name, last name, email, salary,
        gender, then the free-text fields and the joining date.
        ``employee_photo`` defaults to an empty string.
        """
        require_min_length(data.first_name, 2, FIRST_NAME_MESSAGE)
        require_min_length(data.last_name, 2, LAST_NAME_MESSAGE)
        require_email(data.email)
        salary = require_min_value(data.salary, MIN_SALARY, SALARY_MESSAGE)
        require_choice(data.gender, GENDERS, GENDER_MESSAGE)
        for field in TEXT_FIELDS:
            optional_text(getattr(data, field), field)
        joined = None
        if data.date_of_joining not in (None, ""):
            joined = parse_date(data.date_of_joining, "date_of_joining").isoformat()

        if await self.employees.find_one({"email": data.email}):
            raise ConflictError(DUPLICATE_MESSAGE)

        now = self.clock().isoformat()
        employee = await self.employees.save(
            {
                "first_name": data.first_name,
                "last_name": data.last_name,
                "email": data.email,
                "gender": data.gender,
                "designation": data.designation,
                "salary": salary,
                "date_of_joining": joined,
                "department": data.department,
                "employee_photo": data.employee_photo or "",
                "created_at": now,
                "updated_at": now,
            }
        )
        logger.info("Created employee %s", employee["id"])
        return "Employee added successfully!"

    async def get(self, employee_id: str) -> Document:
        employee = await self.employees.find_by_id(employee_id)
        if not employee:
            raise NotFoundError(NOT_FOUND_MESSAGE)
        return employee

    async def list(self) -> List[Document]:
        """Return every employee, unfiltered and unpaginated."""
        return await self.employees.find()

    async def search(self, designation: Optional[str] = None, department: Optional[str] = None) -> List[Document]:
        """Return employees matching every supplied filter.

        Omitted filters impose no constraint.  An empty result raises
        ``NotFoundError`` rather than returning an empty list.
        """
        filter: Dict[str, Any] = {}
        if designation is not None:
            filter["designation"] = designation
        if department is not None:
            filter["department"] = department

        employees = await self.employees.find(filter)
        if not employees:
            raise NotFoundError("No employees found with the given criteria!")
        return employees

    async def update(self, employee_id: str, data: EmployeeUpdate) -> str:
        """Apply the supplied fields to an employee.

        Only fields the client actually sent are validated and written.
        ``updated_at`` advances on every successful call, even when no
        field changed.
        """
        changes = self._validate_changes(data.supplied_fields())

        employee = await self.employees.find_by_id(employee_id)
        if not employee:
            raise NotFoundError(NOT_FOUND_MESSAGE)

        employee.update(changes)
        employee["updated_at"] = self.clock().isoformat()
        await self.employees.save(employee)
        logger.info("Updated employee %s (fields: %s)", employee_id, ", ".join(sorted(changes)) or "none")
        return "Employee updated successfully!"

    async def delete(self, employee_id: str) -> str:
        employee = await self.employees.find_by_id(employee_id)
        if not employee:
            raise NotFoundError(NOT_FOUND_MESSAGE)

        # Another request may have removed it since the lookup
        if not await self.employees.delete_by_id(employee_id):
            raise NotFoundError(NOT_FOUND_MESSAGE)
        logger.info("Deleted employee %s", employee_id)
        return "Employee deleted successfully!"

    @staticmethod
    def _validate_changes(fields: Dict[str, Any]) -> Dict[str, Any]:
        changes = dict(fields)
        if "first_name" in changes:
            require_min_length(changes["first_name"], 2, FIRST_NAME_MESSAGE)
        if "last_name" in changes:
            require_min_length(changes["last_name"], 2, LAST_NAME_MESSAGE)
        if "email" in changes:
            require_email(changes["email"])
        if "salary" in changes:
            changes["salary"] = require_min_value(changes["salary"], MIN_SALARY, SALARY_MESSAGE)
        if "gender" in changes:
            require_choice(changes["gender"], GENDERS, GENDER_MESSAGE)
        for field in TEXT_FIELDS:
            if field in changes:
                optional_text(changes[field], field)
        if "date_of_joining" in changes:
            changes["date_of_joining"] = parse_date(changes["date_of_joining"], "date_of_joining").isoformat()
        return changes
