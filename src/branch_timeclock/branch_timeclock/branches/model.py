from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Branch:
    """Domain entity: a physical branch with its own time clock."""

    branch_id: int
    name: str
