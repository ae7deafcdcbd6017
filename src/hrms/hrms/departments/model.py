from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Department:
    department_id: int
    department_code: str
    department_name: str
    description: Optional[str] = None
    created_at: Optional[datetime] = None
