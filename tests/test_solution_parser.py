import pytest

from config import UNASSIGNED
from errors import InputFileNotFound, MalformedSolution
from solution import Assignment, Solution
from solution_parser import SolutionParser


@pytest.fixture
def model(make_model):
    return make_model([10, 10], [[1], [1], [0]])


class TestSolutionParser:
    def test_pairs_read_in_event_order(self, model, make_solution):
        solution = make_solution(model, [(0, 1), (44, 0), (-1, -1)])
        assert solution.assignment(0) == Assignment(0, 1)
        assert solution.assignment(1) == Assignment(44, 0)
        assert solution.assignment(2) == Assignment(UNASSIGNED, UNASSIGNED)

    def test_unassigned_distinct_from_zero(self, model, make_solution):
        solution = make_solution(model, [(0, 0), (-1, 0), (0, -1)])
        assert solution.has_slot(0) and solution.has_room(0)
        assert not solution.has_slot(1) and solution.has_room(1)
        assert solution.has_slot(2) and not solution.has_room(2)
        assert solution.slotted_mask().tolist() == [True, False, True]
        assert solution.placed_mask().tolist() == [True, False, False]

    def test_premature_end(self, model):
        with pytest.raises(MalformedSolution, match="unexpected end"):
            SolutionParser().parse_text("0 0 1 1 2", Solution(model))

    def test_room_out_of_range(self, model):
        with pytest.raises(MalformedSolution, match="event 1: room index 2"):
            SolutionParser().parse_text("0 0 1 2 2 0", Solution(model))

    def test_slot_out_of_range(self, model):
        with pytest.raises(MalformedSolution, match="slot index 45"):
            SolutionParser().parse_text("45 0 1 1 2 0", Solution(model))

    def test_frozen_after_load(self, model, make_solution):
        solution = make_solution(model, [(0, 0), (1, 1), (2, 0)])
        with pytest.raises(RuntimeError):
            solution.assign_event(0, 3, 0)

    def test_to_string_matches_sln_layout(self, model, make_solution):
        solution = make_solution(model, [(0, 1), (-1, -1), (12, 0)])
        assert solution.to_string() == "0 1\n-1 -1\n12 0"

    def test_missing_file(self, model, tmp_path):
        with pytest.raises(InputFileNotFound):
            SolutionParser().parse(str(tmp_path / "missing.sln"), Solution(model))

    def test_value_too_large(self, model):
        with pytest.raises(MalformedSolution, match="out of range"):
            SolutionParser().parse_text("99999999999999999999 0 1 1 2 0", Solution(model))

    def test_undecodable_file(self, model, tmp_path):
        path = tmp_path / "binary.sln"
        path.write_bytes(b"0 0 \xff 1 2 0")
        with pytest.raises(MalformedSolution):
            SolutionParser().parse(str(path), Solution(model))
