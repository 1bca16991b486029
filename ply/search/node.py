"""
Search tree nodes stored in an arena.

All nodes of a tree (or of a per-player forest) live in one growable
list. Children are referenced by index through a single action-keyed
map; the parent index exists only for backpropagation. Nothing points
back into Python objects, so a tree is dropped by dropping its arena.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Callable, Iterator, Optional

from ..engine_core.action import Action


@dataclass
class Node:
    """
    Statistics for one position in a search tree.

    Closed-loop nodes carry the state reached by their action path and
    the legal actions there, plus per-edge statistics. Open-loop nodes
    carry only the inbound action: the state is re-derived every visit.
    """
    index: int
    parent: Optional[int] = None
    action: Optional[Action] = None  # inbound action, None at a root
    player: Any = None  # owner of the tree this node belongs to

    value_sum: float = 0.0
    visit_count: int = 0
    visitable_count: int = 0  # how often the inbound action was legal at the parent

    children: dict[Action, int] = field(default_factory=dict)

    # Closed-loop only
    state: Any = None
    actions: list[Action] = field(default_factory=list)
    child_values: dict[Action, float] = field(default_factory=dict)
    child_visits: dict[Action, int] = field(default_factory=dict)

    @property
    def is_terminal(self) -> bool:
        return self.state is not None and self.state.ended

    @property
    def mean_value(self) -> float:
        return self.value_sum / self.visit_count if self.visit_count > 0 else 0.0

    def unvisited_actions(self) -> list[Action]:
        """Legal actions whose edge has never been backpropagated through."""
        return [a for a in self.actions if self.child_visits.get(a, 0) == 0]

    def record(self, value: float, via: Optional[Action] = None):
        """Add one sample to this node and, if given, to the edge via."""
        self.value_sum += value
        self.visit_count += 1
        if via is not None:
            self.child_values[via] = self.child_values.get(via, 0.0) + value
            self.child_visits[via] = self.child_visits.get(via, 0) + 1

    def describe(self) -> str:
        inbound = "none" if self.action is None else str(self.action)
        text = f"{inbound} VAL:{self.value_sum:g} #:{self.visit_count}"
        if self.visitable_count:
            text += f" legal#:{self.visitable_count}"
        return text


class NodeArena:
    """Growable node storage with index-based links."""

    def __init__(self):
        self._nodes: list[Node] = []

    def __len__(self) -> int:
        return len(self._nodes)

    def __getitem__(self, index: int) -> Node:
        return self._nodes[index]

    def __iter__(self) -> Iterator[Node]:
        return iter(self._nodes)

    def new_node(self, parent: Optional[int] = None, action: Optional[Action] = None, **kwargs) -> Node:
        """Allocate a node and link it under parent."""
        node = Node(index=len(self._nodes), parent=parent, action=action, **kwargs)
        self._nodes.append(node)
        if parent is not None:
            self._nodes[parent].children[action] = node.index
        return node

    def child(self, node: Node, action: Action) -> Optional[Node]:
        index = node.children.get(action)
        return None if index is None else self._nodes[index]

    def get_or_create_child(self, node: Node, action: Action, **kwargs) -> Node:
        existing = self.child(node, action)
        if existing is not None:
            return existing
        return self.new_node(parent=node.index, action=action, **kwargs)

    def parent(self, node: Node) -> Optional[Node]:
        return None if node.parent is None else self._nodes[node.parent]

    def path_to_root(self, node: Node) -> list[Node]:
        """node, its parent, ..., the root."""
        path = [node]
        while path[-1].parent is not None:
            path.append(self._nodes[path[-1].parent])
        return path

    def detach(self, node: Node):
        """Make node a root. Its former ancestors stay allocated but unreachable."""
        node.parent = None

    def dump(
        self,
        root: Node,
        describe: Callable[[Node], str] = Node.describe,
        max_depth: Optional[int] = None,
    ) -> str:
        """Indented text rendering of the subtree under root."""
        lines = []

        def walk(node: Node, level: int):
            lines.append(" " * level + describe(node))
            if max_depth is not None and level >= max_depth:
                return
            for index in node.children.values():
                walk(self._nodes[index], level + 1)

        walk(root, 0)
        return "\n".join(lines)
