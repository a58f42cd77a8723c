from dataclasses import dataclass, replace
from typing import Optional, Sequence, Tuple

from .exceptions import ConfigError, UnknownPolicyError
from .export import EXPORT_FILENAME
from .roster import Student, roster_labels
from .scheduling import DEFAULT_LINK_BASE, POLICIES, PriorityPolicy, get_policy


@dataclass(frozen=True)
class Settings:
    """Knobs the sidebar exposes. Defaults reproduce the stock scheduler."""
    days_ahead: int = 30
    policy: str = "required_meetings"
    meetings_per_day: Optional[int] = None      # None -> policy decides
    link_base: str = DEFAULT_LINK_BASE
    export_filename: str = EXPORT_FILENAME
    class_labels: Optional[Tuple[str, ...]] = None      # None -> taken from roster
    instructor_labels: Optional[Tuple[str, ...]] = None
    random_seed: Optional[int] = None

    def __post_init__(self):
        if self.days_ahead < 1:
            raise ConfigError(f"days_ahead must be at least 1, got {self.days_ahead}")
        if self.meetings_per_day is not None and self.meetings_per_day < 1:
            raise ConfigError(f"meetings_per_day must be at least 1, got {self.meetings_per_day}")
        if self.policy not in POLICIES:
            raise ConfigError(f"Unknown policy {self.policy!r}; choose from {sorted(POLICIES)}")

    def with_overrides(self, **changes) -> "Settings":
        return replace(self, **changes)

    @property
    def priority_policy(self) -> PriorityPolicy:
        try:
            return get_policy(self.policy)
        except UnknownPolicyError as e:
            raise ConfigError(str(e)) from e

    def labels_for(self, roster: Sequence[Student]) -> Tuple[Tuple[str, ...], Tuple[str, ...]]:
        """Fixed class and instructor columns for the overview export."""
        classes, instructors = roster_labels(roster)
        return (
            tuple(self.class_labels) if self.class_labels is not None else tuple(classes),
            tuple(self.instructor_labels) if self.instructor_labels is not None else tuple(instructors),
        )
