from .rule_validator import RuleViolation, ViolationCode, validate_database, validate_table
from .schema_reconciler import reconcile
from .table_generator import TableGenerator, TableOutcome
from .database_generator import DatabaseGenerator, DatabaseResult, TableConfigSource, resolve_output_paths
from .resource_governor import ResourceGovernor
from .batch_runner import BatchRunner, run_batch_sync

__all__ = [
    "RuleViolation",
    "ViolationCode",
    "validate_database",
    "validate_table",
    "reconcile",
    "TableGenerator",
    "TableOutcome",
    "DatabaseGenerator",
    "DatabaseResult",
    "TableConfigSource",
    "resolve_output_paths",
    "ResourceGovernor",
    "BatchRunner",
    "run_batch_sync",
]
