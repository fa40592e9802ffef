from typing import Optional

from pydantic import BaseModel, Field

from score_engine.models.enumerations import EngineerLevel


class EmployeeRecord(BaseModel):
    """Directory entry for an employee."""

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=255)
    manager_id: Optional[str] = None
    level: Optional[EngineerLevel] = None
