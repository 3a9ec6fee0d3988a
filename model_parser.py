import logging

import numpy as np

from config import N_SLOTS
from errors import InputFileNotFound, MalformedInstance
from model import Event, EventId, Profile, Room, RoomId, SlotId, check_index
from token_stream import TokenStream

logger = logging.getLogger(__name__)


class TimetableModel:
    def __init__(self, profile=Profile.EXTENDED):
        self.profile = Profile(profile)
        self.name = None
        self.n_events = 0
        self.n_rooms = 0
        self.n_features = 0
        self.n_students = 0
        self.n_slots = N_SLOTS

        self.room_capacity = None       # [room]
        self.attends = None             # [event, student]
        self.room_features = None       # [room, feature]
        self.event_features = None      # [event, feature]
        self.event_available = None     # [slot, event], extended profile only
        self.precedence = None          # [event_a, event_b], 1: a must come after b

        self.rooms = []
        self.events = []
        self.event_sizes = None

    def parse(self, file_path):
        try:
            with open(file_path, 'r') as f:
                text = f.read()
        except UnicodeDecodeError as exc:
            raise MalformedInstance(f"{file_path}: not a text file ({exc.reason} at byte {exc.start})") from None
        except OSError:
            raise InputFileNotFound(file_path) from None
        self.name = str(file_path)
        self.parse_text(text, source=self.name)

    def parse_text(self, text, source="<instance>"):
        tokens = TokenStream(text, MalformedInstance, source)

        self.n_events = tokens.take_int("number of events")
        self.n_rooms = tokens.take_int("number of rooms")
        self.n_features = tokens.take_int("number of features")
        self.n_students = tokens.take_int("number of students")
        self._check_header(source)

        E, R, F, S = self.n_events, self.n_rooms, self.n_features, self.n_students
        try:
            self.room_capacity = tokens.take_ints(R, "room sizes")
            if (self.room_capacity < 0).any():
                r = int(np.flatnonzero(self.room_capacity < 0)[0])
                raise MalformedInstance(f"{source}: room {r} has negative size {self.room_capacity[r]}")

            # Stored student-major in the file
            self.attends = tokens.take_bools(S * E, "student attendance").reshape(S, E).T.copy()
            self.room_features = tokens.take_bools(R * F, "room features").reshape(R, F)
            self.event_features = tokens.take_bools(E * F, "event features").reshape(E, F)

            if self.profile.has_slot_constraints:
                self.event_available = tokens.take_bools(
                    E * self.n_slots, "event availability").reshape(E, self.n_slots).T.copy()
                # Outer loop runs over event_b, inner over event_a
                self.precedence = tokens.take_ints(
                    E * E, "event precedence").reshape(E, E).T.copy()
        except (MemoryError, ValueError) as exc:
            raise MalformedInstance(f"{source}: cannot allocate storage for declared sizes ({exc})") from exc

        if tokens.remaining:
            logger.debug("%s: ignoring %d trailing tokens", source, tokens.remaining)

        self.finalize()
        logger.info("Instance %s loaded: %d events, %d rooms, %d features, %d students (%s profile)",
                    source, E, R, F, S, self.profile.value)

    def _check_header(self, source):
        counts = {
            "events": self.n_events,
            "rooms": self.n_rooms,
            "features": self.n_features,
            "students": self.n_students,
        }
        for what, value in counts.items():
            if value < 0:
                raise MalformedInstance(f"{source}: negative number of {what} ({value})")
        if self.n_events == 0:
            raise MalformedInstance(f"{source}: instance declares no events")
        if self.n_rooms == 0:
            raise MalformedInstance(f"{source}: instance declares no rooms")

    def finalize(self):
        self.event_sizes = self.attends.sum(axis=1)

        self.rooms = [
            Room(r, self.room_capacity[r], np.flatnonzero(self.room_features[r]).tolist())
            for r in range(self.n_rooms)
        ]
        self.events = [
            Event(e, np.flatnonzero(self.attends[e]).tolist(),
                  np.flatnonzero(self.event_features[e]).tolist())
            for e in range(self.n_events)
        ]

        for array in (self.room_capacity, self.attends, self.room_features, self.event_features,
                      self.event_available, self.precedence, self.event_sizes):
            if array is not None:
                array.flags.writeable = False

    def room(self, r: RoomId) -> Room:
        return self.rooms[check_index("room", r, self.n_rooms)]

    def event(self, e: EventId) -> Event:
        return self.events[check_index("event", e, self.n_events)]

    def is_available(self, slot: SlotId, e: EventId) -> bool:
        check_index("slot", slot, self.n_slots)
        check_index("event", e, self.n_events)
        if self.event_available is None:
            return True
        return bool(self.event_available[slot, e])

    def must_follow(self, event_a: EventId, event_b: EventId) -> bool:
        """True if ``event_a`` must take place strictly after ``event_b``."""
        check_index("event", event_a, self.n_events)
        check_index("event", event_b, self.n_events)
        if self.precedence is None:
            return False
        return self.precedence[event_a, event_b] == 1

    def precedence_pairs(self):
        if self.precedence is None:
            return []
        return [(int(a), int(b)) for a, b in np.argwhere(self.precedence == 1)]
