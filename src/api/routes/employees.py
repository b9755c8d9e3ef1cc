"""
Employee records API routes
"""

import logging
import re
from typing import List, Optional, Tuple

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response
from pydantic import ValidationError

from config.settings import DEFAULT_PAGE, DEFAULT_PAGE_SIZE
from models.employee import Employee, INT64_MAX, INT64_MIN
from models.enums import StoreErrorType
from services.employees_service import EmployeesService
from services.validation import validate_employee

router = APIRouter()
logger = logging.getLogger(__name__)

EMPLOYEE_NOT_FOUND = "Employee does not exist."
INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")

def get_employees_service(request: Request) -> EmployeesService:
    """Resolve the service wired onto the app at startup"""
    service = getattr(request.app.state, "employees_service", None)
    if service is None:
        raise HTTPException(status_code=503, detail="Employee store is not available")
    return service

async def parse_employee_body(request: Request) -> Employee:
    """Decode the JSON body into an Employee and run the required-field checks"""
    try:
        payload = await request.json()
    except ValueError:
        raise HTTPException(status_code=400, detail="Request body is invalid")

    if not isinstance(payload, dict):
        raise HTTPException(status_code=400, detail="Request body is invalid")

    try:
        employee = Employee.model_validate(payload)
    except ValidationError:
        raise HTTPException(status_code=400, detail="Request body is invalid")

    validation_error = validate_employee(employee)
    if validation_error:
        raise HTTPException(status_code=400, detail=validation_error)

    return employee

def _parse_int64(raw: Optional[str]) -> Optional[int]:
    """Parse a signed decimal integer that fits the BIGINT id column, or return None"""
    if raw is None or not INTEGER_PATTERN.fullmatch(raw):
        return None
    value = int(raw)
    if value < INT64_MIN or value > INT64_MAX:
        return None
    return value

def parse_employee_id(raw_id: str) -> int:
    value = _parse_int64(raw_id)
    if value is None:
        raise HTTPException(
            status_code=400,
            detail=f"Error parsing the ID, make sure it is an integer. Error: invalid value {raw_id!r}"
        )
    return value

def _positive_int_or_default(raw: Optional[str], default: int) -> int:
    # Bad pagination input never fails the request
    value = _parse_int64(raw)
    if value is None or value < 1:
        return default
    return value

def pagination_window(page: Optional[str], size: Optional[str]) -> Tuple[int, int]:
    """Return (size, offset), falling back to the defaults when the offset would overflow BIGINT"""
    page_number = _positive_int_or_default(page, DEFAULT_PAGE)
    page_size = _positive_int_or_default(size, DEFAULT_PAGE_SIZE)
    offset = (page_number - 1) * page_size
    if offset > INT64_MAX:
        page_size = DEFAULT_PAGE_SIZE
        offset = (DEFAULT_PAGE - 1) * page_size
    return page_size, offset

@router.post("/createEmployee", status_code=201)
async def create_employee(
    request: Request,
    service: EmployeesService = Depends(get_employees_service)
):
    """Create a new employee record"""
    employee = await parse_employee_body(request)

    result = await service.create_employee(employee)

    if not result.success:
        if result.error_type == StoreErrorType.CONFLICT:
            raise HTTPException(
                status_code=409,
                detail=f"Employee with ID already exists. Error: {result.error}"
            )
        raise HTTPException(
            status_code=500,
            detail=f"Error while inserting employee. Error: {result.error}"
        )

    return Response(status_code=201, media_type="application/json")

@router.get("/employees/{employee_id}", response_model=Employee)
async def get_employee(
    employee_id: str,
    service: EmployeesService = Depends(get_employees_service)
):
    """Get employee by ID"""
    parsed_id = parse_employee_id(employee_id)

    result = await service.get_employee_by_id(parsed_id)

    if not result.success:
        if result.error_type == StoreErrorType.NOT_FOUND:
            raise HTTPException(status_code=404, detail=EMPLOYEE_NOT_FOUND)
        raise HTTPException(status_code=500, detail=f"Error while getting employee {result.error}")

    return result.data[0]

@router.put("/updateEmployee")
async def update_employee(
    request: Request,
    service: EmployeesService = Depends(get_employees_service)
):
    """Replace name, position and salary of an existing employee"""
    employee = await parse_employee_body(request)

    result = await service.update_employee(employee)

    if not result.success:
        if result.error_type == StoreErrorType.NOT_FOUND:
            raise HTTPException(status_code=404, detail=EMPLOYEE_NOT_FOUND)
        raise HTTPException(status_code=500, detail=f"Error while updating employee {result.error}")

    return Response(status_code=200, media_type="application/json")

@router.delete("/deleteEmployee/{employee_id}")
async def delete_employee(
    employee_id: str,
    service: EmployeesService = Depends(get_employees_service)
):
    """Delete employee record"""
    parsed_id = parse_employee_id(employee_id)

    result = await service.delete_employee(parsed_id)

    if not result.success:
        if result.error_type == StoreErrorType.NOT_FOUND:
            raise HTTPException(status_code=404, detail=EMPLOYEE_NOT_FOUND)
        raise HTTPException(status_code=500, detail=f"Error while deleting employee {result.error}")

    return Response(status_code=200, media_type="application/json")

@router.get("/getEmployees", response_model=List[Employee])
async def list_employees(
    page: Optional[str] = Query(None, description="1-based page number"),
    size: Optional[str] = Query(None, description="Records per page"),
    service: EmployeesService = Depends(get_employees_service)
):
    """List employees ordered by ascending ID"""
    page_size, offset = pagination_window(page, size)

    result = await service.list_employees(page_size, offset)

    if not result.success:
        raise HTTPException(status_code=500, detail=f"Error while listing employee {result.error}")

    return result.data
