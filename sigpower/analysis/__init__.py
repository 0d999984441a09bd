"""Numeric passes applied to filtered paths."""
from .distance import run_forward_pass
from .load_calc import run_load_calc
from .short_circuit import run_fault_current
from .voltage_drop import run_voltage_drop

__all__ = [
    "run_forward_pass",
    "run_load_calc",
    "run_voltage_drop",
    "run_fault_current",
]
