import logging
from collections import defaultdict, namedtuple

import numpy as np

from config import END_OF_DAY_SLOTS, LONG_INTENSIVE_RUN, N_DAYS, N_PERIODS_PER_DAY
from model import Profile

logger = logging.getLogger(__name__)

Violation = namedtuple("Violation", ["check", "message"])

HARD_COUNTERS = ("unplaced", "unsuitable_rooms", "unsuitable_slots", "order_clashes",
                 "student_clashes", "room_clashes")
SOFT_COUNTERS = ("long_intensive_penalty", "single_event_penalty", "end_of_day_penalty")


class ValidatorConfig:
    def __init__(self,
                 profile=Profile.EXTENDED,
                 check_slot_availability=True,
                 check_ordering=True,
                 distance_to_feasibility=True,
                 count_missing_room=False,
                 unplaced_blocks_feasibility=False):
        """
        Switches for the optional parts of the validator.

        Args:
            profile: Profile the report is rendered for
            check_slot_availability: Count events placed in a slot they are unavailable in
            check_ordering: Count violated precedence pairs
            distance_to_feasibility: Sum the attendance of unplaced events
            count_missing_room: A missing room alone makes an event unplaced
            unplaced_blocks_feasibility: Unplaced events make the timetable infeasible
        """
        self.profile = Profile(profile)
        self.check_slot_availability = check_slot_availability
        self.check_ordering = check_ordering
        self.distance_to_feasibility = distance_to_feasibility
        self.count_missing_room = count_missing_room
        self.unplaced_blocks_feasibility = unplaced_blocks_feasibility

    @classmethod
    def for_profile(cls, profile):
        profile = Profile(profile)
        if profile is Profile.BASIC:
            # The basic checker has no slot data and treats any missing
            # dimension as unplaced; the asymmetry with the extended checker is kept.
            return cls(profile=profile,
                       check_slot_availability=False,
                       check_ordering=False,
                       distance_to_feasibility=False,
                       count_missing_room=True,
                       unplaced_blocks_feasibility=True)
        return cls(profile=profile)


class ValidationReport:
    def __init__(self, config):
        self.config = config
        self.violations = []
        self.counters = {name: 0 for name in HARD_COUNTERS + SOFT_COUNTERS}
        self.counters["room_problems"] = 0
        self.counters["distance_to_feasibility"] = 0

    def add(self, check, message, counter=None, amount=1):
        self.violations.append(Violation(check, message))
        if counter is not None:
            self.counters[counter] += amount

    def __getattr__(self, name):
        counters = self.__dict__.get("counters", {})
        if name in counters:
            return counters[name]
        raise AttributeError(name)

    @property
    def hard_violations(self):
        total = (self.unsuitable_rooms + self.unsuitable_slots + self.order_clashes +
                 self.student_clashes + self.room_clashes)
        if self.config.unplaced_blocks_feasibility:
            total += self.unplaced
        return total

    @property
    def is_feasible(self):
        return self.hard_violations == 0

    @property
    def total_penalty(self):
        return sum(self.counters[name] for name in SOFT_COUNTERS)

    def messages(self, check=None):
        return [v.message for v in self.violations if check is None or v.check == check]

    def to_dict(self):
        return {
            "profile": self.config.profile.value,
            "feasible": self.is_feasible,
            "counters": dict(self.counters),
            "total_penalty": self.total_penalty,
            "violations": [v._asdict() for v in self.violations],
        }

    def to_text(self):
        extended = self.config.profile is Profile.EXTENDED
        lines = [v.message for v in self.violations]
        lines.append("")
        lines.append(f"Number of unplaced events = {self.unplaced}")
        if self.config.distance_to_feasibility:
            lines.append(f"Distance to feasibility = {self.distance_to_feasibility}")
        lines.append(f"Number of unsuitable rooms = {self.unsuitable_rooms}")
        if self.config.check_slot_availability:
            lines.append(f"Number of unsuitable slots = {self.unsuitable_slots}")
        if self.config.check_ordering:
            lines.append(f"Number of ordering problems = {self.order_clashes}")
        lines.append(f"Number of student clashes = {self.student_clashes}")
        lines.append(f"Number of room clashes = {self.room_clashes}")
        lines.append("")
        lines.append(f"Penalty for students having three or more events in a row = {self.long_intensive_penalty}")
        lines.append(f"Penalty for students having single events on a day = {self.single_event_penalty}")
        lines.append(f"Penalty for students having end of day events = {self.end_of_day_penalty}")
        lines.append("")
        lines.append(f"Total soft constraint penalty = {self.total_penalty}")
        lines.append("")
        if extended:
            lines.append("This solution file gives a valid timetable" if self.is_feasible
                         else "***This solution file does not give a valid timetable***")
        else:
            lines.append("This solution file gives a complete and feasible timetable" if self.is_feasible
                         else "This solution file does not give a complete and feasible timetable")
        return "\n".join(lines)


class Validator:
    def __init__(self, config=None):
        self.config = config or ValidatorConfig()

    def validate(self, model, solution):
        report = ValidationReport(self.config)

        self._check_unplaced(model, solution, report)
        for e in range(model.n_events):
            # Room and slot problems of one event are listed together
            self._check_room(model, solution, e, report)
            if self.config.check_slot_availability:
                self._check_slot(model, solution, e, report)
        if self.config.check_ordering:
            self._check_ordering(model, solution, report)
        self._check_student_clashes(model, solution, report)
        self._check_room_clashes(model, solution, report)

        busy = ~self.student_free_slots(model, solution)
        self._check_long_intensive(busy, report)
        self._check_single_event_days(busy, report)
        self._check_end_of_day(busy, report)

        logger.debug("Counters: %s", report.counters)
        logger.info("Validation finished: %s, soft penalty %d",
                    "feasible" if report.is_feasible else "infeasible", report.total_penalty)
        return report

    # --- Hard constraints ---

    def _check_unplaced(self, model, solution, report):
        for e in range(model.n_events):
            no_slot = not solution.has_slot(e)
            no_room = not solution.has_room(e)
            if no_slot:
                report.add("unplaced", f"Event {e} does not have a timeslot assigned")
            if no_room:
                report.add("unplaced", f"Event {e} does not have a room assigned")

            if no_slot or (self.config.count_missing_room and no_room):
                report.counters["unplaced"] += 1
                if self.config.distance_to_feasibility and no_slot:
                    report.counters["distance_to_feasibility"] += model.event(e).size

    def _check_room(self, model, solution, e, report):
        if not solution.has_room(e):
            return
        event = model.event(e)
        room = model.room(int(solution.event_rooms[e]))
        problems = 0

        if room.capacity < event.size:
            short = event.size - room.capacity
            report.add("unsuitable_rooms",
                       f"Event {e} requires a room of size {event.size}\n"
                       f"It has been assigned a room ({room.index}) of size {room.capacity}, "
                       f"{short} seat{'s' if short > 1 else ''} short")
            problems += 1

        for f in room.lacks(event.features):
            report.add("unsuitable_rooms",
                       f"Event {e} requires feature {f}\n"
                       f"It has been assigned a room ({room.index}) without feature {f}")
            problems += 1

        # One per event however many problems the room has
        if problems:
            report.counters["unsuitable_rooms"] += 1
            report.counters["room_problems"] += problems

    def _check_slot(self, model, solution, e, report):
        if not solution.has_slot(e):
            return
        slot = int(solution.event_slots[e])
        if not model.is_available(slot, e):
            report.add("unsuitable_slots",
                       f"Event {e} has been assigned slot {slot} and is not available at that time",
                       counter="unsuitable_slots")

    def _check_ordering(self, model, solution, report):
        slots = solution.event_slots
        for a, b in model.precedence_pairs():
            if not (solution.has_slot(a) and solution.has_slot(b)):
                continue
            if slots[a] <= slots[b]:
                report.add("order_clashes",
                           f"Event {a} (slot {slots[a]}) must take place after event {b} "
                           f"(slot {slots[b]}) but does not.",
                           counter="order_clashes")

    def _check_student_clashes(self, model, solution, report):
        events_in_slot = defaultdict(list)
        for e in range(model.n_events):
            if not solution.has_slot(e):
                continue
            slot = int(solution.event_slots[e])
            for f in events_in_slot[slot]:
                for g in np.flatnonzero(model.attends[e] & model.attends[f]).tolist():
                    report.add("student_clashes",
                               f"Student {g} has to attend both event {e} and event {f} in slot {slot}",
                               counter="student_clashes")
            events_in_slot[slot].append(e)

    def _check_room_clashes(self, model, solution, report):
        events_in_place = defaultdict(list)
        placed = solution.placed_mask()
        for e in range(model.n_events):
            if not placed[e]:
                continue
            slot, room = solution.assignment(e)
            for f in events_in_place[(slot, room)]:
                report.add("room_clashes",
                           f"Events {e} and event {f} both occur in slot {slot} and room {room}",
                           counter="room_clashes")
            events_in_place[(slot, room)].append(e)

    # --- Soft constraints ---

    def student_free_slots(self, model, solution):
        """[slot, student] matrix, False where the student attends an event in that slot."""
        free = np.ones((model.n_slots, model.n_students), dtype=bool)
        for e in np.flatnonzero(solution.slotted_mask()).tolist():
            free[solution.event_slots[e]] &= ~model.attends[e]
        return free

    def _check_long_intensive(self, busy, report):
        n_students = busy.shape[1]
        for g in range(n_students):
            for d in range(N_DAYS):
                run = 0
                for t in range(N_PERIODS_PER_DAY):
                    slot = d * N_PERIODS_PER_DAY + t
                    run = run + 1 if busy[slot, g] else 0
                    if run >= LONG_INTENSIVE_RUN:
                        report.add("long_intensive_penalty",
                                   f"Student {g} has a set of three events up to slot {slot}",
                                   counter="long_intensive_penalty")

    def _check_single_event_days(self, busy, report):
        n_students = busy.shape[1]
        for g in range(n_students):
            for d in range(N_DAYS):
                first = d * N_PERIODS_PER_DAY
                day_busy = np.flatnonzero(busy[first:first + N_PERIODS_PER_DAY, g])
                if len(day_busy) == 1:
                    slot = first + int(day_busy[0])
                    report.add("single_event_penalty",
                               f"Student {g} has an event in slot {slot} which is the only one on that day",
                               counter="single_event_penalty")

    def _check_end_of_day(self, busy, report):
        n_students = busy.shape[1]
        for g in range(n_students):
            for slot in END_OF_DAY_SLOTS:
                if busy[slot, g]:
                    report.add("end_of_day_penalty",
                               f"Student {g} has an event in slot {slot} which is at the end of a day",
                               counter="end_of_day_penalty")
