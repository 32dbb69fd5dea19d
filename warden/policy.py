"""Token age policies."""

from dataclasses import dataclass

from warden.exceptions import TokenExpiredError


@dataclass(frozen=True)
class MaxAgePolicy:
    """Reject tokens older than max_hours. Negative ages always pass."""

    max_hours: float

    def __post_init__(self):
        if self.max_hours <= 0:
            raise ValueError(f"max_hours must be positive, got {self.max_hours}")

    def check(self, hours_old: float) -> None:
        if hours_old > self.max_hours:
            raise TokenExpiredError(
                f"Token is {hours_old:.2f} hours old (limit {self.max_hours:g})"
            )
