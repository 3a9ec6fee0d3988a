import pytest

from config import N_SLOTS
from model import Profile
from model_parser import TimetableModel
from solution import Solution
from solution_parser import SolutionParser


def build_instance_text(capacities, attends, n_features=0, room_features=None, event_features=None,
                        unavailable=(), precedence=(), extended=True):
    """Render an instance in the .tim token layout.

    ``attends`` is indexed [event][student], ``unavailable`` holds (event, slot)
    pairs and ``precedence`` holds (a, b) pairs meaning a must come after b.
    """
    n_rooms = len(capacities)
    n_events = len(attends)
    n_students = len(attends[0]) if attends else 0
    room_features = room_features or [[0] * n_features for _ in range(n_rooms)]
    event_features = event_features or [[0] * n_features for _ in range(n_events)]

    tokens = [n_events, n_rooms, n_features, n_students] + list(capacities)
    for g in range(n_students):
        for e in range(n_events):
            tokens.append(attends[e][g])
    for row in room_features:
        tokens += row
    for row in event_features:
        tokens += row
    if extended:
        for e in range(n_events):
            for t in range(N_SLOTS):
                tokens.append(0 if (e, t) in unavailable else 1)
        after = set(precedence)
        for b in range(n_events):
            for a in range(n_events):
                if (a, b) in after:
                    tokens.append(1)
                elif (b, a) in after:
                    tokens.append(-1)
                else:
                    tokens.append(0)
    return " ".join(str(t) for t in tokens)


@pytest.fixture
def instance_text():
    return build_instance_text


@pytest.fixture
def make_model():
    """Parse an instance built from the arguments of build_instance_text."""
    def _make(capacities, attends, profile=Profile.EXTENDED, **kwargs):
        profile = Profile(profile)
        model = TimetableModel(profile)
        model.parse_text(build_instance_text(capacities, attends,
                                             extended=profile is Profile.EXTENDED, **kwargs))
        return model
    return _make


@pytest.fixture
def make_solution():
    """Parse a solution from (slot, room) pairs in event order."""
    def _make(model, pairs):
        solution = Solution(model)
        SolutionParser().parse_text(" ".join(f"{s} {r}" for s, r in pairs), solution)
        return solution
    return _make


@pytest.fixture
def write_files(tmp_path):
    """Write <name>.tim and <name>.sln under tmp_path and return the base name."""
    def _write(tim_text, sln_text, name="instance"):
        base = tmp_path / name
        if tim_text is not None:
            (tmp_path / f"{name}.tim").write_text(tim_text)
        if sln_text is not None:
            (tmp_path / f"{name}.sln").write_text(sln_text)
        return str(base)
    return _write
