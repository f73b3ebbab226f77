"""Audit logging and run manifest subsystem for bibfolio.

Main Components
---------------
- RunContext: Context manager for build runs, writes run.json
- AuditLogger: JSONL event logger
"""

from bibfolio.audit.context import RunContext
from bibfolio.audit.helpers import generate_run_id
from bibfolio.audit.logger import AuditLogger

__all__ = [
    "RunContext",
    "AuditLogger",
    "generate_run_id",
]
