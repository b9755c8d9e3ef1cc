"""
Storage accessor tests against mocked asyncpg pool and connection objects
"""

from unittest.mock import AsyncMock, MagicMock

import asyncpg
import pytest

from models.employee import Employee
from models.enums import StoreErrorType
from services.employees_service import (
    DELETE_EMPLOYEE,
    EmployeesService,
    INSERT_EMPLOYEE,
    SELECT_EMPLOYEE_BY_ID,
    SELECT_EMPLOYEE_PAGE,
    UPDATE_EMPLOYEE,
)

ALICE_ROW = {"id": 2, "name": "Alice", "position": "Manager", "salary": 60000.0}


@pytest.fixture
def conn():
    """A connection double whose transaction() works as an async context manager"""
    connection = MagicMock()
    connection.execute = AsyncMock(return_value="OK")
    connection.fetchrow = AsyncMock(return_value=None)
    connection.fetch = AsyncMock(return_value=[])
    connection.transaction.return_value.__aexit__.return_value = False
    return connection


@pytest.fixture
def service(conn):
    pool = MagicMock()
    pool.acquire.return_value.__aenter__.return_value = conn
    pool.acquire.return_value.__aexit__.return_value = False
    return EmployeesService(pool)


def test_requires_a_pool():
    with pytest.raises(RuntimeError, match="Database pool not initialized"):
        EmployeesService(None)


@pytest.mark.asyncio
async def test_create_inserts_all_columns(service, conn):
    employee = Employee(id=1, name="John Doe", position="Engineer", salary=50000)

    result = await service.create_employee(employee)

    assert result.success
    assert result.data == []
    conn.execute.assert_awaited_once_with(INSERT_EMPLOYEE, 1, "John Doe", "Engineer", 50000.0)


@pytest.mark.asyncio
async def test_create_duplicate_is_conflict(service, conn):
    conn.execute.side_effect = asyncpg.UniqueViolationError(
        'duplicate key value violates unique constraint "employees_pkey"'
    )

    result = await service.create_employee(Employee(id=44, name="John", position="Engineer", salary=1))

    assert not result.success
    assert result.error_type == StoreErrorType.CONFLICT
    assert "employees_pkey" in result.error


@pytest.mark.asyncio
async def test_create_other_database_error(service, conn):
    conn.execute.side_effect = asyncpg.UndefinedTableError('relation "employees" does not exist')

    result = await service.create_employee(Employee(id=1, name="John", position="Engineer", salary=1))

    assert not result.success
    assert result.error_type == StoreErrorType.DATABASE_ERROR


@pytest.mark.asyncio
async def test_update_missing_row_is_not_found(service, conn):
    result = await service.update_employee(Employee(id=99, name="A", position="B", salary=1))

    assert result.error_type == StoreErrorType.NOT_FOUND
    conn.fetchrow.assert_awaited_once_with(SELECT_EMPLOYEE_BY_ID, 99)
    conn.execute.assert_not_awaited()


@pytest.mark.asyncio
async def test_update_existing_row(service, conn):
    conn.fetchrow.return_value = ALICE_ROW
    employee = Employee(id=2, name="Alice Smith", position="Senior Manager", salary=70000)

    result = await service.update_employee(employee)

    assert result.success
    conn.execute.assert_awaited_once_with(UPDATE_EMPLOYEE, "Alice Smith", "Senior Manager", 70000.0, 2)
    conn.transaction.assert_called_once()


@pytest.mark.asyncio
async def test_delete_missing_row_is_not_found(service, conn):
    result = await service.delete_employee(22)

    assert result.error_type == StoreErrorType.NOT_FOUND
    conn.execute.assert_not_awaited()


@pytest.mark.asyncio
async def test_delete_existing_row(service, conn):
    conn.fetchrow.return_value = ALICE_ROW

    result = await service.delete_employee(2)

    assert result.success
    assert result.data[0].name == "Alice"
    conn.execute.assert_awaited_once_with(DELETE_EMPLOYEE, 2)


@pytest.mark.asyncio
async def test_get_by_id_maps_row(service, conn):
    conn.fetchrow.return_value = ALICE_ROW

    result = await service.get_employee_by_id(2)

    assert result.success
    assert result.data == [Employee(id=2, name="Alice", position="Manager", salary=60000)]


@pytest.mark.asyncio
async def test_get_by_id_missing_row(service):
    result = await service.get_employee_by_id(22)

    assert result.error_type == StoreErrorType.NOT_FOUND


@pytest.mark.asyncio
async def test_get_by_id_connection_error(service, conn):
    conn.fetchrow.side_effect = asyncpg.InterfaceError("connection is closed")

    result = await service.get_employee_by_id(2)

    assert result.error_type == StoreErrorType.DATABASE_ERROR
    assert result.error == "connection is closed"


@pytest.mark.asyncio
async def test_list_passes_limit_and_offset(service, conn):
    conn.fetch.return_value = [ALICE_ROW, {"id": 3, "name": "Jack", "position": "Writer", "salary": 2000.0}]

    result = await service.list_employees(2, 0)

    assert result.success
    assert result.count == 2
    assert [e.id for e in result.data] == [2, 3]
    conn.fetch.assert_awaited_once_with(SELECT_EMPLOYEE_PAGE, 2, 0)


@pytest.mark.asyncio
async def test_list_empty_range_is_not_an_error(service):
    result = await service.list_employees(10, 100)

    assert result.success
    assert result.data == []
