"""
Employee Pydantic models
"""

from pydantic import BaseModel, ConfigDict, Field

# Range of the BIGINT id column
INT64_MIN = -2**63
INT64_MAX = 2**63 - 1


class Employee(BaseModel):
    """One employee row. Missing fields decode to zero values so the validator reports them."""

    model_config = ConfigDict(extra="ignore", strict=True, allow_inf_nan=False)

    id: int = Field(0, ge=INT64_MIN, le=INT64_MAX)
    name: str = ""
    position: str = ""
    salary: float = 0
