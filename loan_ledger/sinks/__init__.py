"""Output sinks for exporting ledger data."""

from loan_ledger.sinks.json_file import JsonFileSink

__all__ = ["JsonFileSink"]
