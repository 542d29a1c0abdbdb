"""
Employee endpoints for API v1.

These routes expose CRUD and filtering for employee records.  When
``Settings.employee_auth_required`` is enabled every route requires a
bearer token from ``/auth/login``; otherwise they are open.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from employee_directory_api.app.api.deps import get_employee_service
from employee_directory_api.app.core.security import require_token
from employee_directory_api.app.schemas.common import MessageResponse
from employee_directory_api.app.schemas.employee import EmployeeCreate, EmployeeRead, EmployeeUpdate
from employee_directory_api.app.services.employee_service import EmployeeService

router = APIRouter(dependencies=[Depends(require_token)])


@router.get("/", response_model=List[EmployeeRead])
async def list_employees(service: EmployeeService = Depends(get_employee_service)) -> List[EmployeeRead]:
    """Return all employees."""
    employees = await service.list()
    return [EmployeeRead(**employee) for employee in employees]


# Declared before "/{employee_id}" so "search" is not taken for an id
@router.get("/search", response_model=List[EmployeeRead])
async def search_employees(
    designation: Optional[str] = Query(None),
    department: Optional[str] = Query(None),
    service: EmployeeService = Depends(get_employee_service),
) -> List[EmployeeRead]:
    """Filter employees by designation and/or department.

    Returns 404 when nothing matches.
    """
    employees = await service.search(designation=designation, department=department)
    return [EmployeeRead(**employee) for employee in employees]


@router.get("/{employee_id}", response_model=EmployeeRead)
async def get_employee(
    employee_id: str,
    service: EmployeeService = Depends(get_employee_service),
) -> EmployeeRead:
    employee = await service.get(employee_id)
    return EmployeeRead(**employee)


@router.post("/", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def add_employee(
    employee_in: EmployeeCreate,
    service: EmployeeService = Depends(get_employee_service),
) -> MessageResponse:
    """Add an employee.  Returns 400 on invalid input, 409 on a duplicate email."""
    return MessageResponse(message=await service.create(employee_in))


@router.put("/{employee_id}", response_model=MessageResponse)
async def update_employee(
    employee_id: str,
    employee_in: EmployeeUpdate,
    service: EmployeeService = Depends(get_employee_service),
) -> MessageResponse:
    """Update the fields present in the body; omitted or null fields are kept."""
    return MessageResponse(message=await service.update(employee_id, employee_in))


@router.delete("/{employee_id}", response_model=MessageResponse)
async def delete_employee(
    employee_id: str,
    service: EmployeeService = Depends(get_employee_service),
) -> MessageResponse:
    return MessageResponse(message=await service.delete(employee_id))
