"""Segment kinds, their triggers and the ordered segment configuration."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Iterable, Iterator

logger = logging.getLogger(__name__)


class TriggerClass(Enum):
    NONE = "none"
    SHORT_PRESS = "short"
    LONG_PRESS = "long"


class Effect(Enum):
    NONE = "none"
    SHOOT = "shoot"
    SHIELD = "shield"


class SegmentKind(Enum):
    HEAD = "head"
    GUN = "gun"
    SHIELD = "shield"
    BODY = "body"

    @property
    def trigger(self) -> TriggerClass:
        return SEGMENT_TRIGGERS[self][0]

    @property
    def effect(self) -> Effect:
        return SEGMENT_TRIGGERS[self][1]


SEGMENT_TRIGGERS: dict[SegmentKind, tuple[TriggerClass, Effect]] = {
    SegmentKind.HEAD: (TriggerClass.NONE, Effect.NONE),
    SegmentKind.GUN: (TriggerClass.SHORT_PRESS, Effect.SHOOT),
    SegmentKind.SHIELD: (TriggerClass.LONG_PRESS, Effect.SHIELD),
    SegmentKind.BODY: (TriggerClass.NONE, Effect.NONE),
}

# Kinds that can appear in the world as collectibles.
COLLECTIBLE_KINDS: tuple[SegmentKind, ...] = (SegmentKind.GUN, SegmentKind.SHIELD)


class SegmentConfiguration:
    """Ordered list of segment kinds with a locked HEAD at index 0.

    Only four structural operations are exposed: ``append``, ``remove_at``,
    ``move_to`` and ``insert``. All of them refuse to touch index 0 and
    report success with a bool instead of raising. The set of available
    trigger classes is recomputed after each successful change.
    """

    def __init__(self, kinds: Iterable[SegmentKind] = ()) -> None:
        self._kinds: list[SegmentKind] = [SegmentKind.HEAD]
        self._kinds.extend(kind for kind in kinds if kind is not SegmentKind.HEAD)
        self._triggers: frozenset[TriggerClass] = frozenset()
        self._refresh()

    def __len__(self) -> int:
        return len(self._kinds)

    def __iter__(self) -> Iterator[SegmentKind]:
        return iter(self._kinds)

    def __getitem__(self, index: int) -> SegmentKind:
        return self._kinds[index]

    def __repr__(self) -> str:
        names = ", ".join(kind.name for kind in self._kinds)
        return f"SegmentConfiguration([{names}])"

    @property
    def kinds(self) -> tuple[SegmentKind, ...]:
        return tuple(self._kinds)

    def _movable(self, index: int) -> bool:
        return 0 < index < len(self._kinds)

    def _refresh(self) -> None:
        self._triggers = frozenset(kind.trigger for kind in self._kinds)

    def append(self, kind: SegmentKind) -> bool:
        if kind is SegmentKind.HEAD:
            return False
        self._kinds.append(kind)
        self._refresh()
        return True

    def insert(self, index: int, kind: SegmentKind) -> bool:
        if kind is SegmentKind.HEAD or not 0 < index <= len(self._kinds):
            return False
        self._kinds.insert(index, kind)
        self._refresh()
        return True

    def remove_at(self, index: int) -> SegmentKind | None:
        if not self._movable(index):
            logger.debug("Rejected removal at index %s", index)
            return None
        kind = self._kinds.pop(index)
        self._refresh()
        return kind

    def move_to(self, from_index: int, to_index: int) -> bool:
        if not (self._movable(from_index) and self._movable(to_index)):
            logger.debug("Rejected move %s -> %s", from_index, to_index)
            return False
        if from_index == to_index:
            return True
        kind = self._kinds.pop(from_index)
        self._kinds.insert(to_index, kind)
        self._refresh()
        return True

    def kinds_with_trigger(self, trigger: TriggerClass) -> list[tuple[int, SegmentKind]]:
        """Return ``(index, kind)`` pairs matching ``trigger`` in list order."""

        return [
            (index, kind)
            for index, kind in enumerate(self._kinds)
            if kind.trigger is trigger
        ]

    def has_trigger(self, trigger: TriggerClass) -> bool:
        return trigger in self._triggers
