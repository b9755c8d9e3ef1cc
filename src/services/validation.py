"""
Required-field checks for employee records
"""

from typing import Optional

from models.employee import Employee


def validate_employee(employee: Employee) -> Optional[str]:
    """Return the first failing check's message, or None when the record is complete"""
    if employee.id == 0:
        return "Employee ID cannot be 0"
    if employee.name == "":
        return "Employee Name cannot be blank"
    if employee.position == "":
        return "Employee Position cannot be blank"
    if employee.salary == 0:
        return "Employee Salary cannot be 0"

    return None
