from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..audit.model import AuditEntry
from .model import Employee


class EmployeeRepository(Protocol):
    """Repository interface for Employee.

    Services depend on this protocol, not on a concrete database.
    """

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def list_active_for_branch(self, branch_id: int) -> Sequence[Employee]:
        raise NotImplementedError

    def deactivate(self, employee_id: int, *, audit: Optional[AuditEntry] = None) -> bool:
        """Soft-delete: set ``is_active=False`` and write ``audit`` in the same transaction.

        Returns False when the employee was already inactive (nothing is written).
        """

        raise NotImplementedError
