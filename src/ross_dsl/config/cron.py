"""
Cron Expressions
================

Schedule description used by TimeMatchesCronExpressionFilter.

A cron expression has one field per calendar unit. Each field either
matches any value or matches an explicit set of values.
"""

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class CronField:
    """
    One field of a cron expression.

    Attributes:
        values: Accepted values, or None to accept any value
    """
    values: Optional[frozenset] = None

    @classmethod
    def any(cls) -> "CronField":
        return cls(None)

    @classmethod
    def including(cls, values) -> "CronField":
        return cls(frozenset(values))

    @property
    def is_any(self) -> bool:
        return self.values is None

    def __str__(self) -> str:
        if self.values is None:
            return "*"
        return ",".join(str(value) for value in sorted(self.values))


@dataclass(frozen=True)
class CronExpression:
    """A full schedule. ``year`` is always compiled to any."""
    second: CronField
    minute: CronField
    hour: CronField
    day_month: CronField
    month: CronField
    day_week: CronField
    year: CronField = field(default_factory=CronField.any)

    def __str__(self) -> str:
        return " ".join(
            str(part) for part in (
                self.second, self.minute, self.hour,
                self.day_month, self.month, self.day_week, self.year,
            )
        )
