"""
Service layer.

Each service encapsulates the business logic for one record kind and
talks to storage only through a ``DocumentCollection``, so API handlers
and tests can supply any store.
"""

from .account_service import AccountService
from .employee_service import EmployeeService

__all__ = ["AccountService", "EmployeeService"]
