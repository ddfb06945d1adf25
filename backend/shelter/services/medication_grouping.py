"""Grouping and batch-selection helpers for medication records.

Records are grouped two ways: by treatment group (records created together
share a ``group_id``) and by time of day for the daily board. Neither touches
the database; both operate on already loaded records.
"""

from __future__ import annotations

import uuid
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Generic, Protocol, TypeVar


class GroupableRecord(Protocol):
    id: uuid.UUID
    group_id: str | None
    time: str
    administered: bool


RecordT = TypeVar("RecordT", bound=GroupableRecord)

INDIVIDUAL_PREFIX = "individual-"


def group_key(record: GroupableRecord) -> str:
    """Return the group id, or a singleton key derived from the record id."""
    return record.group_id or f"{INDIVIDUAL_PREFIX}{record.id}"


@dataclass
class RecordGroup(Generic[RecordT]):
    key: str
    group_id: str | None
    records: list[RecordT] = field(default_factory=list)

    @property
    def member_ids(self) -> list[uuid.UUID]:
        return [record.id for record in self.records]


@dataclass
class TimeSection(Generic[RecordT]):
    time: str
    collapsed: bool
    records: list[RecordT] = field(default_factory=list)

    @property
    def pending(self) -> int:
        return sum(1 for record in self.records if not record.administered)


def group_records(records: Iterable[RecordT]) -> list[RecordGroup[RecordT]]:
    """Partition records by group id, keeping the order groups first appear in."""
    groups: dict[str, RecordGroup[RecordT]] = {}
    for record in records:
        key = group_key(record)
        if key not in groups:
            groups[key] = RecordGroup(key=key, group_id=record.group_id)
        groups[key].records.append(record)
    return list(groups.values())


def _hour_of(time: str) -> int:
    hours, _, _ = time.partition(":")
    return int(hours)


def group_by_time(
    records: Iterable[RecordT], *, current_hour: int | None = None
) -> list[TimeSection[RecordT]]:
    """Split records into sections per time of day, earliest first.

    Sections whose hour has already passed ``current_hour`` start collapsed.
    """
    sections: dict[str, TimeSection[RecordT]] = {}
    for record in records:
        section = sections.get(record.time)
        if section is None:
            collapsed = current_hour is not None and _hour_of(record.time) < current_hour
            section = sections[record.time] = TimeSection(
                time=record.time, collapsed=collapsed
            )
        section.records.append(record)
    return [sections[time] for time in sorted(sections)]


class MedicationSelection:
    """The set of record ids picked for a batch operation."""

    def __init__(self, ids: Iterable[uuid.UUID] = ()) -> None:
        self._ids: set[uuid.UUID] = set(ids)

    def __contains__(self, record_id: object) -> bool:
        return record_id in self._ids

    def __len__(self) -> int:
        return len(self._ids)

    @property
    def ids(self) -> frozenset[uuid.UUID]:
        return frozenset(self._ids)

    def toggle(self, record_id: uuid.UUID) -> None:
        if record_id in self._ids:
            self._ids.remove(record_id)
        else:
            self._ids.add(record_id)

    def is_group_selected(self, group: RecordGroup) -> bool:
        """A group is selected only when every member is."""
        return all(member in self._ids for member in group.member_ids)

    def toggle_group(self, group: RecordGroup) -> None:
        """Select every member, or deselect every member if all were selected."""
        members = group.member_ids
        if self.is_group_selected(group):
            self._ids.difference_update(members)
        else:
            self._ids.update(members)

    def clear(self) -> None:
        self._ids.clear()
