"""Export helpers for solved paths."""
from .paths import export_paths_csv, paths_frame, paths_to_records, write_results

__all__ = ["export_paths_csv", "paths_frame", "paths_to_records", "write_results"]
