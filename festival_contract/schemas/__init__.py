"""
Pydantic schemas for the festival listing contract.
"""

from .festival import Band, Festival
from .response import ResponseDescriptor
from .snapshot import BandNode, FestivalNode, RenderedSnapshot
from .verdict import (
    ContractIssue,
    GateReport,
    MissingField,
    OrderingViolation,
    ValidationResult,
)

__all__ = [
    "Band",
    "BandNode",
    "ContractIssue",
    "Festival",
    "FestivalNode",
    "GateReport",
    "MissingField",
    "OrderingViolation",
    "RenderedSnapshot",
    "ResponseDescriptor",
    "ValidationResult",
]
