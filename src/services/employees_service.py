"""
Employees service - parameterized SQL against the employees table
"""

import logging
from typing import List

import asyncpg

from models.employee import Employee
from models.enums import StoreErrorType
from services.base_service import BaseService, ServiceResult

logger = logging.getLogger(__name__)

SELECT_EMPLOYEE_BY_ID = "SELECT id, name, position, salary FROM employees WHERE id = $1"
SELECT_EMPLOYEE_PAGE = "SELECT id, name, position, salary FROM employees ORDER BY id ASC LIMIT $1 OFFSET $2"
INSERT_EMPLOYEE = "INSERT INTO employees (id, name, position, salary) VALUES ($1, $2, $3, $4)"
UPDATE_EMPLOYEE = "UPDATE employees SET name = $1, position = $2, salary = $3 WHERE id = $4"
DELETE_EMPLOYEE = "DELETE FROM employees WHERE id = $1"

# asyncpg raises InterfaceError (not a PostgresError) for client-side failures
DATABASE_ERRORS = (asyncpg.PostgresError, asyncpg.InterfaceError)


def _not_found(employee_id: int) -> ServiceResult:
    return ServiceResult.failure(StoreErrorType.NOT_FOUND, f"No employee found with ID: {employee_id}")


def _row_to_employee(row) -> Employee:
    return Employee(id=row["id"], name=row["name"], position=row["position"], salary=row["salary"])


class EmployeesService(BaseService):
    """Service for employee record operations"""

    def __init__(self, db_pool):
        super().__init__("employees", db_pool)

    async def create_employee(self, employee: Employee) -> ServiceResult:
        """
        Insert a new employee row

        Returns:
            ServiceResult with no data; CONFLICT when the id is already taken
        """
        params = [employee.id, employee.name, employee.position, employee.salary]
        logger.debug(f"Executing INSERT: {INSERT_EMPLOYEE} Parameters: {params}")

        try:
            async with self.db_pool.acquire() as conn:
                await conn.execute(INSERT_EMPLOYEE, *params)
        except asyncpg.UniqueViolationError as e:
            logger.warning(f"Unique constraint violation for employee {employee.id}: {e}")
            return ServiceResult.failure(StoreErrorType.CONFLICT, str(e))
        except DATABASE_ERRORS as e:
            logger.error(f"Database error during INSERT: {e}")
            return ServiceResult.failure(StoreErrorType.DATABASE_ERROR, str(e))

        logger.info(f"Created employee {employee.id}")
        return ServiceResult.ok()

    async def update_employee(self, employee: Employee) -> ServiceResult:
        """Overwrite name, position and salary of an existing employee"""
        try:
            async with self.db_pool.acquire() as conn:
                async with conn.transaction():
                    existing = await conn.fetchrow(SELECT_EMPLOYEE_BY_ID, employee.id)
                    if existing is None:
                        return _not_found(employee.id)

                    params = [employee.name, employee.position, employee.salary, employee.id]
                    logger.debug(f"Executing UPDATE: {UPDATE_EMPLOYEE} Parameters: {params}")
                    await conn.execute(UPDATE_EMPLOYEE, *params)
        except DATABASE_ERRORS as e:
            logger.error(f"Database error during UPDATE: {e}")
            return ServiceResult.failure(StoreErrorType.DATABASE_ERROR, str(e))

        logger.info(f"Updated employee {employee.id}")
        return ServiceResult.ok([employee])

    async def delete_employee(self, employee_id: int) -> ServiceResult:
        """Remove an existing employee"""
        try:
            async with self.db_pool.acquire() as conn:
                async with conn.transaction():
                    existing = await conn.fetchrow(SELECT_EMPLOYEE_BY_ID, employee_id)
                    if existing is None:
                        return _not_found(employee_id)

                    logger.debug(f"Executing DELETE: {DELETE_EMPLOYEE} Parameters: [{employee_id}]")
                    await conn.execute(DELETE_EMPLOYEE, employee_id)
        except DATABASE_ERRORS as e:
            logger.error(f"Database error during DELETE: {e}")
            return ServiceResult.failure(StoreErrorType.DATABASE_ERROR, str(e))

        logger.info(f"Deleted employee {employee_id}")
        return ServiceResult.ok([_row_to_employee(existing)])

    async def get_employee_by_id(self, employee_id: int) -> ServiceResult:
        """Point lookup by primary key"""
        try:
            async with self.db_pool.acquire() as conn:
                row = await conn.fetchrow(SELECT_EMPLOYEE_BY_ID, employee_id)
        except DATABASE_ERRORS as e:
            logger.error(f"Database error during READ: {e}")
            return ServiceResult.failure(StoreErrorType.DATABASE_ERROR, str(e))

        if row is None:
            return _not_found(employee_id)

        return ServiceResult.ok([_row_to_employee(row)])

    async def list_employees(self, size: int, offset: int) -> ServiceResult:
        """
        Range lookup ordered by ascending id

        Args:
            size: Maximum number of records to return
            offset: Number of records to skip

        Returns:
            ServiceResult whose data is empty, not an error, when nothing is in range
        """
        logger.debug(f"Executing READ query: {SELECT_EMPLOYEE_PAGE} Parameters: [{size}, {offset}]")

        try:
            async with self.db_pool.acquire() as conn:
                rows = await conn.fetch(SELECT_EMPLOYEE_PAGE, size, offset)
        except DATABASE_ERRORS as e:
            logger.error(f"Database error during READ: {e}")
            return ServiceResult.failure(StoreErrorType.DATABASE_ERROR, str(e))

        employees: List[Employee] = [_row_to_employee(row) for row in rows]
        return ServiceResult.ok(employees)
