from collections import namedtuple

import numpy as np

from config import UNASSIGNED
from model import EventId, RoomId, SlotId, check_index

Assignment = namedtuple("Assignment", ["slot", "room"])


class Solution:
    def __init__(self, model):
        self.model = model
        self.E = model.n_events
        self.R = model.n_rooms
        self.T = model.n_slots

        self.event_slots = np.full(self.E, UNASSIGNED, dtype=np.int64)
        self.event_rooms = np.full(self.E, UNASSIGNED, dtype=np.int64)
        self.frozen = False

    def assign_event(self, e: EventId, slot: SlotId, room: RoomId):
        if self.frozen:
            raise RuntimeError("solution is frozen")
        check_index("event", e, self.E)
        if slot != UNASSIGNED:
            check_index("slot", slot, self.T)
        if room != UNASSIGNED:
            check_index("room", room, self.R)
        self.event_slots[e] = slot
        self.event_rooms[e] = room

    def freeze(self):
        self.event_slots.flags.writeable = False
        self.event_rooms.flags.writeable = False
        self.frozen = True

    def assignment(self, e):
        check_index("event", e, self.E)
        return Assignment(int(self.event_slots[e]), int(self.event_rooms[e]))

    def has_slot(self, e):
        return self.event_slots[e] != UNASSIGNED

    def has_room(self, e):
        return self.event_rooms[e] != UNASSIGNED

    def slotted_mask(self):
        return self.event_slots != UNASSIGNED

    def placed_mask(self):
        return (self.event_slots != UNASSIGNED) & (self.event_rooms != UNASSIGNED)

    def to_string(self):
        return "\n".join(f"{s} {r}" for s, r in zip(self.event_slots.tolist(), self.event_rooms.tolist()))
