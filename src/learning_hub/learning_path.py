"""
learning_path.py – Prerequisite graph over learning-path items
==============================================================
A learning-path item may name one prerequisite by id.  The reference can
point at another item in the same path or at a course the employee has
already completed (e.g. "advanced-react" ← "react-basics").  Edges are
resolved explicitly here instead of by ad-hoc lookups in the views:

  build_prerequisite_graph(items)   item id → prerequisite id
  prerequisite_title(items, item)   title of the in-path prerequisite, or None
  find_cycle(items)                 first cycle as [id, …, id] or None
  topological_order(items)          ids with prerequisites first
  missing_prerequisites(employee)   references that resolve nowhere
  is_unlocked(items, item)          in-path prerequisite completed?
"""

from __future__ import annotations

from typing import Optional, Sequence

from learning_hub.models import Employee, ItemStatus, LearningPathItem


class PrerequisiteCycleError(ValueError):
    """Raised when prerequisite edges loop back on themselves."""

    def __init__(self, cycle: list[str]) -> None:
        self.cycle = cycle
        super().__init__("Prerequisite cycle: " + " → ".join(cycle))


def build_prerequisite_graph(items: Sequence[LearningPathItem]) -> dict[str, str]:
    return {item.id: item.prerequisite for item in items if item.prerequisite}


def prerequisite_title(
    items: Sequence[LearningPathItem], item: LearningPathItem,
) -> Optional[str]:
    if not item.prerequisite:
        return None
    target = next((p for p in items if p.id == item.prerequisite), None)
    return target.title if target else None


def find_cycle(items: Sequence[LearningPathItem]) -> Optional[list[str]]:
    """
    Walk each item's prerequisite chain; every node has at most one outgoing
    edge, so a chain either leaves the path, ends, or revisits a node.
    """
    graph = build_prerequisite_graph(items)
    in_path = {item.id for item in items}
    cleared: set[str] = set()

    for start in (item.id for item in items):
        chain: list[str] = []
        seen: dict[str, int] = {}
        node: Optional[str] = start
        while node is not None and node in in_path and node not in cleared:
            if node in seen:
                return chain[seen[node]:] + [node]
            seen[node] = len(chain)
            chain.append(node)
            node = graph.get(node)
        cleared.update(chain)
    return None


def topological_order(items: Sequence[LearningPathItem]) -> list[str]:
    """
    Order ids so each in-path prerequisite precedes its dependant.
    Ties keep the path's own order.  Raises PrerequisiteCycleError.
    """
    cycle = find_cycle(items)
    if cycle:
        raise PrerequisiteCycleError(cycle)

    graph = build_prerequisite_graph(items)
    in_path = {item.id for item in items}
    ordered: list[str] = []
    placed: set[str] = set()

    def _place(item_id: str) -> None:
        if item_id in placed:
            return
        prereq = graph.get(item_id)
        if prereq and prereq in in_path:
            _place(prereq)
        placed.add(item_id)
        ordered.append(item_id)

    for item in items:
        _place(item.id)
    return ordered


def missing_prerequisites(employee: Employee) -> list[tuple[str, str]]:
    """Return (item id, missing reference) pairs."""
    known = {item.id for item in employee.learning_path} | set(employee.completed_courses)
    return [
        (item.id, item.prerequisite)
        for item in employee.learning_path
        if item.prerequisite and item.prerequisite not in known
    ]


def is_unlocked(items: Sequence[LearningPathItem], item: LearningPathItem) -> bool:
    """An item is unlocked unless its in-path prerequisite is not yet completed."""
    if not item.prerequisite:
        return True
    target = next((p for p in items if p.id == item.prerequisite), None)
    if target is None:
        return True
    return target.status == ItemStatus.COMPLETED
