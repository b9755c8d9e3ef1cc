"""
Shared fixtures for the employee records test suite
"""

from typing import Dict, List

import httpx
import pytest
import pytest_asyncio

from app import create_app
from models.employee import Employee
from models.enums import StoreErrorType
from services.base_service import ServiceResult


class InMemoryEmployeesService:
    """Dict-backed stand-in for EmployeesService with the same result contract"""

    def __init__(self, employees: List[Employee] = None):
        self.rows: Dict[int, Employee] = {e.id: e for e in (employees or [])}
        self.fail_with: str = None

    def _failure(self):
        return ServiceResult.failure(StoreErrorType.DATABASE_ERROR, self.fail_with)

    async def create_employee(self, employee: Employee) -> ServiceResult:
        if self.fail_with:
            return self._failure()
        if employee.id in self.rows:
            return ServiceResult.failure(
                StoreErrorType.CONFLICT,
                'duplicate key value violates unique constraint "employees_pkey"'
            )
        self.rows[employee.id] = employee
        return ServiceResult.ok()

    async def update_employee(self, employee: Employee) -> ServiceResult:
        if self.fail_with:
            return self._failure()
        if employee.id not in self.rows:
            return ServiceResult.failure(StoreErrorType.NOT_FOUND, f"No employee found with ID: {employee.id}")
        self.rows[employee.id] = employee
        return ServiceResult.ok([employee])

    async def delete_employee(self, employee_id: int) -> ServiceResult:
        if self.fail_with:
            return self._failure()
        if employee_id not in self.rows:
            return ServiceResult.failure(StoreErrorType.NOT_FOUND, f"No employee found with ID: {employee_id}")
        return ServiceResult.ok([self.rows.pop(employee_id)])

    async def get_employee_by_id(self, employee_id: int) -> ServiceResult:
        if self.fail_with:
            return self._failure()
        if employee_id not in self.rows:
            return ServiceResult.failure(StoreErrorType.NOT_FOUND, f"No employee found with ID: {employee_id}")
        return ServiceResult.ok([self.rows[employee_id]])

    async def list_employees(self, size: int, offset: int) -> ServiceResult:
        if self.fail_with:
            return self._failure()
        ordered = [self.rows[key] for key in sorted(self.rows)]
        return ServiceResult.ok(ordered[offset:offset + size])


SEED_EMPLOYEES = [
    Employee(id=44, name="Duplicate", position="Redundant", salary=99999),
    Employee(id=2, name="Alice", position="Manager", salary=60000),
    Employee(id=3, name="Jack", position="Writer", salary=2000),
    Employee(id=4, name="Mary", position="Assistant", salary=1000),
]


@pytest.fixture
def seed_employees() -> List[Employee]:
    return [employee.model_copy() for employee in SEED_EMPLOYEES]


@pytest.fixture
def employees_service(seed_employees) -> InMemoryEmployeesService:
    return InMemoryEmployeesService(seed_employees)


@pytest.fixture
def app(employees_service):
    return create_app(employees_service)


@pytest_asyncio.fixture
async def client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as http_client:
        yield http_client
