"""Manifest assignment rules.

A participant can be put on a load when they are on the event roster, not
yet on this load, not on another load of the same event, hold the roles the
slot category asks for, and the category still has room.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Mapping, Sequence

from ..core import Event, Manifest, Participant
from .event_cache import EventCache

SKYDIVER_ROLE = "Skydiver"
STAFF_ROLE = "Staff"


class SlotCategory(str, Enum):
    PARTICIPANT = "participant"
    STAFF = "staff"


class Ineligibility(str, Enum):
    """Why a participant cannot be assigned to a load."""

    NOT_IN_EVENT = "not_in_event"
    ALREADY_ON_LOAD = "already_on_load"
    ON_OTHER_LOAD = "on_other_load"
    ROLE_MISMATCH = "role_mismatch"
    CATEGORY_FULL = "category_full"


def matches_category(participant: Participant, category: SlotCategory) -> bool:
    """Staff slots need Skydiver and Staff; regular slots need Skydiver without Staff."""

    if not participant.has_role(SKYDIVER_ROLE):
        return False
    if category is SlotCategory.STAFF:
        return participant.has_role(STAFF_ROLE)
    return not participant.has_role(STAFF_ROLE)


def occupied_category(participant: Participant) -> SlotCategory | None:
    """Return the seat a participant on a load takes up.

    Staff who do not jump, such as ground crew, take no seat.
    """

    if not participant.has_role(STAFF_ROLE):
        return SlotCategory.PARTICIPANT
    if participant.has_role(SKYDIVER_ROLE):
        return SlotCategory.STAFF
    return None


def category_capacity(manifest: Manifest, category: SlotCategory) -> int | None:
    """Return the number of seats for ``category``; ``None`` means unlimited.

    Staff seats come from ``staff_slots``; a load without a staff slot count
    takes any number of staff. The remaining seats of the load go to regular
    participants, never fewer than zero.
    """

    if category is SlotCategory.STAFF:
        if manifest.staff_slots is None:
            return None
        return max(manifest.staff_slots, 0)
    staff_slots = max(manifest.staff_slots or 0, 0)
    if manifest.capacity is None:
        return None
    return max(manifest.capacity - staff_slots, 0)


def assigned_count(
    manifest: Manifest,
    participants: Mapping[int, Participant],
    category: SlotCategory,
) -> int:
    count = 0
    for participant_id in manifest.participant_ids:
        participant = participants.get(participant_id)
        if participant is None:
            occupies = SlotCategory.PARTICIPANT
        else:
            occupies = occupied_category(participant)
        if occupies is category:
            count += 1
    return count


def is_category_full(
    manifest: Manifest,
    participants: Mapping[int, Participant],
    category: SlotCategory,
) -> bool:
    capacity = category_capacity(manifest, category)
    if capacity is None:
        return False
    return assigned_count(manifest, participants, category) >= capacity


def assigned_elsewhere(manifest: Manifest, manifests: Iterable[Manifest]) -> set[int]:
    """Return ids already on other loads of the same event."""

    ids: set[int] = set()
    for other in manifests:
        if other.event_id != manifest.event_id or other.id == manifest.id:
            continue
        ids.update(other.participant_ids)
    return ids


def _index(participants: Iterable[Participant]) -> dict[int, Participant]:
    return {participant.id: participant for participant in participants}


def check_assignment(
    participant: Participant,
    *,
    manifest: Manifest,
    event: Event,
    manifests: Iterable[Manifest],
    participants: Iterable[Participant],
    category: SlotCategory,
) -> Ineligibility | None:
    """Return the first rule ``participant`` breaks, or ``None`` when assignable."""

    if participant.id not in event.participant_ids:
        return Ineligibility.NOT_IN_EVENT
    if participant.id in manifest.participant_ids:
        return Ineligibility.ALREADY_ON_LOAD
    if participant.id in assigned_elsewhere(manifest, manifests):
        return Ineligibility.ON_OTHER_LOAD
    if not matches_category(participant, category):
        return Ineligibility.ROLE_MISMATCH
    if is_category_full(manifest, _index(participants), category):
        return Ineligibility.CATEGORY_FULL
    return None


def can_assign(
    participant: Participant,
    *,
    manifest: Manifest,
    event: Event,
    manifests: Iterable[Manifest],
    participants: Iterable[Participant],
    category: SlotCategory,
) -> bool:
    return (
        check_assignment(
            participant,
            manifest=manifest,
            event=event,
            manifests=manifests,
            participants=participants,
            category=category,
        )
        is None
    )


def available_participants(
    participants: Iterable[Participant],
    *,
    manifest: Manifest,
    event: Event,
    manifests: Iterable[Manifest],
    category: SlotCategory,
) -> list[Participant]:
    """Return the pool that may be offered for ``category`` on ``manifest``.

    The pool is not shrunk when the category is full; callers check
    :func:`is_category_full` before assigning.
    """

    roster = set(event.participant_ids)
    on_load = set(manifest.participant_ids)
    elsewhere = assigned_elsewhere(manifest, manifests)
    return [
        participant
        for participant in participants
        if participant.id in roster
        and participant.id not in on_load
        and participant.id not in elsewhere
        and matches_category(participant, category)
    ]


@dataclass(slots=True)
class ManifestPlanner:
    """Evaluate assignments for the loads of one caller's session.

    Events are resolved through the caller's :class:`EventCache` so repeated
    checks for loads of the same event do not reload it.
    """

    participants: Sequence[Participant]
    manifests: Sequence[Manifest]
    events: EventCache = field(default_factory=EventCache)

    def event_for(self, manifest: Manifest) -> Event:
        return self.events.get_or_load(manifest.event_id)

    def roster(self) -> dict[int, Participant]:
        return _index(self.participants)

    def available(self, manifest: Manifest, category: SlotCategory) -> list[Participant]:
        return available_participants(
            self.participants,
            manifest=manifest,
            event=self.event_for(manifest),
            manifests=self.manifests,
            category=category,
        )

    def check(
        self, participant: Participant, manifest: Manifest, category: SlotCategory
    ) -> Ineligibility | None:
        return check_assignment(
            participant,
            manifest=manifest,
            event=self.event_for(manifest),
            manifests=self.manifests,
            participants=self.participants,
            category=category,
        )

    def can_assign(self, participant: Participant, manifest: Manifest, category: SlotCategory) -> bool:
        return self.check(participant, manifest, category) is None

    def is_full(self, manifest: Manifest, category: SlotCategory) -> bool:
        return is_category_full(manifest, self.roster(), category)
