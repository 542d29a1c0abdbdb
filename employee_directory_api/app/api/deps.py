"""
FastAPI dependencies that hand the services built by ``create_app`` to
endpoint functions.
"""

from fastapi import Request

from employee_directory_api.app.services.account_service import AccountService
from employee_directory_api.app.services.employee_service import EmployeeService


def get_account_service(request: Request) -> AccountService:
    return request.app.state.account_service


def get_employee_service(request: Request) -> EmployeeService:
    return request.app.state.employee_service
