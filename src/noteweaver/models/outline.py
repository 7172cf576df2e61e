"""Outline tree model."""

from __future__ import annotations

from typing import Iterator, Union

from pydantic import BaseModel, Field


class OutlineNode(BaseModel):
    """A fold scope: the heading or checklist line that opens it plus everything it owns.

    ``label`` is ``None`` only for the synthetic root. ``children`` keeps source order,
    which is also output order. ``size`` counts the source lines in this subtree,
    including the label line.
    """

    label: str | None = None
    children: list[Union["OutlineNode", str]] = Field(default_factory=list)
    size: int = Field(default=0, ge=0)

    def node_children(self) -> Iterator["OutlineNode"]:
        for child in self.children:
            if isinstance(child, OutlineNode):
                yield child

    def find_child(self, label: str | None) -> "OutlineNode | None":
        """Return the first child node whose label equals ``label``."""

        for child in self.node_children():
            if child.label == label:
                return child
        return None

    def recompute_size(self) -> int:
        """Rebuild ``size`` for the whole subtree and return it."""

        total = 1 if self.label is not None else 0
        for child in self.children:
            total += child.recompute_size() if isinstance(child, OutlineNode) else 1
        self.size = total
        return total

    def copy_tree(self) -> "OutlineNode":
        return self.model_copy(deep=True)


OutlineNode.model_rebuild()
