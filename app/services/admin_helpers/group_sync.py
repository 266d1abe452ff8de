# /app/services/admin_helpers/group_sync.py

from typing import Dict, Optional

from ...core.logging_config import get_logger
from ...models.group_model import GroupMetrics
from ..database_helpers.record_store_sql import RecordStoreError
from ..database_service import DatabaseService
from .metrics import compute_group_metrics

logger = get_logger("group_sync")


def sync_group_metrics(db: DatabaseService, group_id: Optional[str] = None) -> Dict[str, GroupMetrics]:
    """
    Recomputes `current_students` and `monthly_revenue` from student data and
    writes them onto one group (`group_id`) or onto every group.

    A group with no students is written back as zero. Failures are logged and
    swallowed here: the mutation that triggered the sync has already been stored
    and must not be reported as failed.

    Returns the metrics that were written, keyed by group id.
    """
    try:
        if group_id:
            group_ids = [group_id]
            students = db.select("students", columns=["group_id", "monthly_payment", "payment_status"],
                                 filters={"group_id": group_id})
        else:
            group_ids = [g["id"] for g in db.select("groups", columns=["id"])]
            students = db.select("students", columns=["group_id", "monthly_payment", "payment_status"])

        metrics = compute_group_metrics(students)
        written: Dict[str, GroupMetrics] = {}
        for gid in group_ids:
            values = metrics.get(gid, GroupMetrics())
            db.update("groups", {"current_students": values.currentStudents, "monthly_revenue": values.monthlyRevenue},
                      {"id": gid})
            written[gid] = values
        return written
    except RecordStoreError as e:
        logger.error("Group metrics sync failed (group=%s): %s", group_id or "*", e)
        return {}
