"""Child profiles - the roster the outfit composer works from."""
import uuid
from dataclasses import dataclass, replace
from typing import Optional

from thresholds import AgeGroup, get_age_group


@dataclass(frozen=True)
class Child:
    id: str
    name: str
    age_months: int

    @property
    def age_group(self) -> AgeGroup:
        """Derived from ``age_months`` so it always tracks age edits."""
        return get_age_group(self.age_months)

    def with_updates(self, name: Optional[str] = None, age_months: Optional[int] = None) -> "Child":
        changes = {}
        if name is not None:
            changes["name"] = name
        if age_months is not None:
            _check_age(age_months)
            changes["age_months"] = age_months
        return replace(self, **changes)


def _check_age(age_months: int) -> None:
    if age_months < 0:
        raise ValueError(f"age_months must not be negative, got {age_months}")


def create_child(name: str, age_months: int) -> Child:
    _check_age(age_months)
    return Child(id=f"child-{uuid.uuid4().hex[:12]}", name=name, age_months=age_months)


def parse_child_spec(spec: str) -> Child:
    """Build a child from ``"Name:months"``, e.g. ``"Ava:8"``."""
    name, sep, months = spec.rpartition(":")
    if not sep or not name.strip():
        raise ValueError(f"Expected NAME:MONTHS, got {spec!r}")
    try:
        age_months = int(months)
    except ValueError:
        raise ValueError(f"Age in months must be a whole number, got {months!r}") from None
    return create_child(name.strip(), age_months)
