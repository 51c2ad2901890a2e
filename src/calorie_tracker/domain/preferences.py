"""App preference models."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class AppPreferences:
    """Persisted application preferences and usage counters."""

    is_first_launch: bool = True
    show_onboarding: bool = True
    launch_count: int = 0
    install_date: datetime | None = None
    last_launch_date: datetime | None = None
    seen_features: tuple[str, ...] = ()

    def days_used(self, now: datetime) -> int:
        if self.install_date is None:
            return 0
        return max((now - self.install_date).days, 0)
