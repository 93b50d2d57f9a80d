"""Job-planning workflow, inventory operations and reporting tables.

The workflow validates new-job proposals against a fresh registry snapshot and records
accepted jobs; inventory helpers turn deliveries into units; reporting builds pandas
tables for the CLI and for CSV export.
"""

from mkorplan.planning.inventory import (
    ReceiptResult,
    receipt_unit_names,
    receive_inventory,
    retire_unit,
    sorted_inventory,
    totals_by_diameter,
    update_batch_count,
)
from mkorplan.planning.reporting import (
    catalog_dataframe,
    fleet_dataframe,
    inventory_dataframe,
    jobs_dataframe,
    segments_dataframe,
    timeline_grid,
    totals_dataframe,
)
from mkorplan.planning.workflow import (
    JobPlanner,
    PlanOutcome,
    PlanState,
    RejectionReason,
    base_name,
    check_job,
    disambiguate_name,
)

__all__ = [
    "JobPlanner",
    "PlanOutcome",
    "PlanState",
    "RejectionReason",
    "base_name",
    "check_job",
    "disambiguate_name",
    "ReceiptResult",
    "receipt_unit_names",
    "receive_inventory",
    "retire_unit",
    "sorted_inventory",
    "totals_by_diameter",
    "update_batch_count",
    "catalog_dataframe",
    "fleet_dataframe",
    "inventory_dataframe",
    "jobs_dataframe",
    "segments_dataframe",
    "timeline_grid",
    "totals_dataframe",
]
