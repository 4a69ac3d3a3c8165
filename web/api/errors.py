"""API errors and validation helpers."""

from app.services.periods import PERIODS


class ValidationError(Exception):
    """Validation error."""

    def __init__(self, message: str = "Validation error"):
        self.message = message
        super().__init__(self.message)


# Input ranges accepted by the analytics screens
MIN_MONTHS, MAX_MONTHS = 1, 12
MIN_LIMIT, MAX_LIMIT = 1, 20


def validate_store_id(store_id: str) -> None:
    """Every query is scoped to a store."""
    if not isinstance(store_id, str) or not store_id.strip():
        raise ValidationError("store_id is required")


def validate_months(months: int) -> None:
    if not MIN_MONTHS <= months <= MAX_MONTHS:
        raise ValidationError(f"Invalid months: {months}. Must be between {MIN_MONTHS} and {MAX_MONTHS}")


def validate_limit(limit: int) -> None:
    if not MIN_LIMIT <= limit <= MAX_LIMIT:
        raise ValidationError(f"Invalid limit: {limit}. Must be between {MIN_LIMIT} and {MAX_LIMIT}")


def validate_period(period: str) -> None:
    if period not in PERIODS:
        raise ValidationError(f"Invalid period: {period}. Must be one of {', '.join(PERIODS)}")
