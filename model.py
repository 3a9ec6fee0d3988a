from enum import Enum
from typing import NewType

EventId = NewType("EventId", int)
RoomId = NewType("RoomId", int)
SlotId = NewType("SlotId", int)


def check_index(kind, index, count):
    """Return ``index`` if it lies in ``[0, count)``, raise IndexError otherwise."""
    if not 0 <= index < count:
        raise IndexError(f"{kind} index {index} out of range [0, {count})")
    return index


class Room:
    def __init__(self, index, capacity, features):
        self.index = index
        self.capacity = int(capacity)
        self.features = frozenset(features)

    def lacks(self, features):
        return sorted(f for f in features if f not in self.features)


class Event:
    def __init__(self, index, students, features):
        self.index = index
        self.students = frozenset(students)
        self.features = frozenset(features)

    @property
    def size(self):
        return len(self.students)


class Profile(str, Enum):
    """Which optional matrices are read and which optional checks run."""
    BASIC = "basic"
    EXTENDED = "extended"

    @property
    def has_slot_constraints(self):
        return self is Profile.EXTENDED
