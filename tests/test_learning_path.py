"""
Tests for the prerequisite graph over learning-path items.
"""
import pytest

from factories import make_employee, make_item

from learning_hub.learning_path import (
    PrerequisiteCycleError,
    build_prerequisite_graph,
    find_cycle,
    is_unlocked,
    missing_prerequisites,
    prerequisite_title,
    topological_order,
)
from learning_hub.mock_data import EMPLOYEES, get_employee


class TestGraph:
    def test_edges(self, chain_items):
        assert build_prerequisite_graph(chain_items) == {"b": "a", "c": "b"}

    def test_prerequisite_title(self, chain_items):
        assert prerequisite_title(chain_items, chain_items[1]) == "A"
        assert prerequisite_title(chain_items, chain_items[0]) is None

    def test_title_of_out_of_path_reference_is_none(self):
        advanced = get_employee("emp1").item_by_id("advanced-react")
        assert prerequisite_title(get_employee("emp1").learning_path, advanced) is None


class TestCycles:
    def test_no_cycle_in_chain(self, chain_items):
        assert find_cycle(chain_items) is None

    def test_two_node_cycle(self):
        items = [make_item("a", prerequisite="b"), make_item("b", prerequisite="a")]
        cycle = find_cycle(items)
        assert cycle[0] == cycle[-1]
        assert set(cycle) == {"a", "b"}

    def test_self_reference(self):
        assert find_cycle([make_item("a", prerequisite="a")]) == ["a", "a"]

    def test_cycle_behind_a_tail(self):
        items = [
            make_item("tail", prerequisite="x"),
            make_item("x", prerequisite="y"),
            make_item("y", prerequisite="x"),
        ]
        cycle = find_cycle(items)
        assert "tail" not in cycle
        assert set(cycle) == {"x", "y"}

    def test_dangling_reference_is_not_a_cycle(self):
        assert find_cycle([make_item("a", prerequisite="elsewhere")]) is None

    @pytest.mark.parametrize("emp", EMPLOYEES, ids=lambda e: e.username)
    def test_dataset_is_acyclic(self, emp):
        assert find_cycle(emp.learning_path) is None


class TestTopologicalOrder:
    def test_prerequisites_first(self):
        items = [
            make_item("c", prerequisite="b"),
            make_item("a"),
            make_item("b", prerequisite="a"),
        ]
        order = topological_order(items)
        assert order.index("a") < order.index("b") < order.index("c")

    def test_stable_when_already_ordered(self, chain_items):
        assert topological_order(chain_items) == ["a", "b", "c"]

    def test_independent_items_keep_path_order(self):
        items = [make_item("z"), make_item("m"), make_item("a")]
        assert topological_order(items) == ["z", "m", "a"]

    def test_cycle_raises(self):
        items = [make_item("a", prerequisite="b"), make_item("b", prerequisite="a")]
        with pytest.raises(PrerequisiteCycleError) as err:
            topological_order(items)
        assert set(err.value.cycle) == {"a", "b"}
        assert isinstance(err.value, ValueError)

    def test_dataset_order_is_path_order(self):
        emp = get_employee("emp4")
        assert topological_order(emp.learning_path) == [i.id for i in emp.learning_path]


class TestMissingAndUnlocked:
    def test_completed_course_satisfies_reference(self):
        assert missing_prerequisites(get_employee("emp1")) == []

    def test_unknown_reference_reported(self):
        emp = make_employee(items=[make_item("a", prerequisite="ghost")])
        assert missing_prerequisites(emp) == [("a", "ghost")]

    def test_reference_to_completed_course(self):
        emp = make_employee(items=[make_item("a", prerequisite="basics")],
                            completed_courses=["basics"])
        assert missing_prerequisites(emp) == []

    def test_unlock_follows_prerequisite_status(self, chain_items):
        a, b, c = chain_items
        assert is_unlocked(chain_items, a)
        assert is_unlocked(chain_items, b)
        assert not is_unlocked(chain_items, c)

    def test_out_of_path_reference_is_unlocked(self):
        emp = get_employee("emp1")
        assert is_unlocked(emp.learning_path, emp.item_by_id("advanced-react"))
        assert not is_unlocked(emp.learning_path, emp.item_by_id("fullstack-project"))
