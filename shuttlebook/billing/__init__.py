"""Fee and reward arithmetic for sessions."""

from .payables import (
    compute_payable,
    compute_payable_with_service_fee,
    summarize_session,
    total_receivable,
)
from .reports import build_report

__all__ = [
    "build_report",
    "compute_payable",
    "compute_payable_with_service_fee",
    "summarize_session",
    "total_receivable",
]
