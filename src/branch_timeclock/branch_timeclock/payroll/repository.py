from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..audit.model import AuditEntry
from ..core.enums import PayrollStatus
from .model import Payroll


class PayrollRepository(Protocol):
    def insert_batch(self, rows: Sequence[Payroll], *, audit: Optional[AuditEntry] = None) -> list[int]:
        """Insert every row (and the audit entry) in one transaction.

        Raises WriteError if anything fails; in that case nothing is stored.
        """

        raise NotImplementedError

    def get_by_id(self, payroll_id: int) -> Optional[Payroll]:
        raise NotImplementedError

    def update_status(self, payroll_id: int, *, current: PayrollStatus, target: PayrollStatus) -> bool:
        """Compare-and-set on status. Returns False if the row was not in ``current``."""

        raise NotImplementedError

    def list_for_employee(self, employee_id: int, *, limit: int = 50) -> Sequence[Payroll]:
        raise NotImplementedError

    def search(
        self,
        *,
        start: date,
        end: date,
        branch_id: Optional[int] = None,
        employee_id: Optional[int] = None,
    ) -> Sequence[Payroll]:
        """Rows whose whole period lies inside ``[start, end]``, newest first."""

        raise NotImplementedError
