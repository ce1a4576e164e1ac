"""Validators package exports."""

from src.domain.validators.integrity import (
    ENUMERATIONS,
    check_line_item,
    check_new_order,
    check_order_total,
    check_row,
    check_status_transition,
    check_update,
    violation,
)

__all__ = [
    "ENUMERATIONS",
    "check_line_item",
    "check_new_order",
    "check_order_total",
    "check_row",
    "check_status_transition",
    "check_update",
    "violation",
]
