from __future__ import annotations

import json

from .model import AuditEntry


def insert_audit(cur, entry: AuditEntry) -> None:
    """Write an audit row on the caller's cursor, inside the caller's transaction."""
    cur.execute(
        "INSERT INTO audit_log(action, details) VALUES(%s,%s)",
        (entry.action, json.dumps(entry.details, default=str)),
    )
