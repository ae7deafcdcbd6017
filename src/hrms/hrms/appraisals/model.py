from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Optional, Tuple

from ..common.refs import EmployeeRef


@dataclass(frozen=True)
class AppraisalDraft:
    employee_id: int
    department_id: int
    accomplishments: Optional[str]
    supervisors: Tuple[int, ...]
    supervisor_comments: Optional[str]
    ratings: Dict[str, float]
    total_rating: float


@dataclass(frozen=True)
class Appraisal:
    appraisal_id: int
    employee_id: int
    department_id: int
    accomplishments: Optional[str]
    supervisors: Tuple[int, ...]
    supervisor_comments: Optional[str]
    ratings: Dict[str, float] = field(default_factory=dict)
    total_rating: float = 0.0
    employee: Optional[EmployeeRef] = None
    created_at: Optional[datetime] = None
