"""
Status codes for source price change assessment.
"""

from enum import Enum


class PriceChangeStatus(str, Enum):
    """
    Outcome of comparing a new source price with the previous one.

    Values:
        OK: Change is below the alert threshold.
        ALERT: Change reached the alert threshold; the sale price should be reviewed.
    """
    OK = "OK"
    ALERT = "ALERT"


class ChangeDirection(str, Enum):
    """
    Direction of price change.

    Values:
        INCREASE: New price is higher than the previous one.
        DECREASE: New price is lower than the previous one.
        NO_CHANGE: Prices are equal.
    """
    INCREASE = "INCREASE"
    DECREASE = "DECREASE"
    NO_CHANGE = "NO_CHANGE"


STATUS_DESCRIPTIONS = {
    PriceChangeStatus.OK: "Source price change is within the alert threshold.",
    PriceChangeStatus.ALERT: "Source price changed beyond the alert threshold. Review the sale price.",
}


def get_status_description(status: PriceChangeStatus) -> str:
    """
    Get a human-readable description for a status.

    Args:
        status: The price change status.

    Returns:
        str: Status description.
    """
    return STATUS_DESCRIPTIONS.get(status, "Unknown status.")
