"""Risk level of a permission."""

from enum import StrEnum


class RiskLevel(StrEnum):
    """Security risk carried by granting a permission."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
