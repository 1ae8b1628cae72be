from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class AuditEntry:
    """Audit trail row written in the same transaction as the action it records."""

    action: str
    details: dict[str, Any] = field(default_factory=dict)
