from __future__ import annotations

from typing import Iterator, List, Optional, Tuple

from .exceptions import IndexOverlapError
from .geometry import DIMENSIONS, Rect


class _Node:
    __slots__ = ("rect", "left", "right")

    def __init__(self, rect: Rect) -> None:
        self.rect = rect
        self.left: Optional[_Node] = None
        self.right: Optional[_Node] = None


class SpatialIndex:
    """Insert-only discriminator tree answering "does this rectangle overlap anything?".

    Each level of the tree branches on one of the four scalar coordinates
    ``(min.x, min.y, max.x, max.y)``, cycling with depth. Near the root a
    rectangle's min corner decides the branch, deeper down its max corner does.

    The tree is never rebalanced and entries are never removed. Its depth, and
    therefore the cost of insert and query, stays reasonable only while the
    inserted rectangles are pairwise non-overlapping and spatially spread out.
    That precondition belongs to the caller; ``insert(check=True)`` verifies it
    at the price of an extra query.

    Both walks are iterative so a badly unbalanced tree cannot exhaust the
    interpreter's recursion limit.
    """

    def __init__(self) -> None:
        self._root: Optional[_Node] = None
        self._size = 0

    def __len__(self) -> int:
        return self._size

    def __bool__(self) -> bool:
        return self._root is not None

    def __iter__(self) -> Iterator[Rect]:
        # Pre-order: parents are always inserted before their children.
        stack: List[_Node] = [self._root] if self._root is not None else []
        while stack:
            node = stack.pop()
            yield node.rect
            if node.right is not None:
                stack.append(node.right)
            if node.left is not None:
                stack.append(node.left)

    def insert(self, rect: Rect, check: bool = False) -> None:
        """Add a rectangle to the index. This cannot be undone."""
        if check and self.overlaps(rect):
            raise IndexOverlapError(f"{rect} overlaps a rectangle already in the index")
        self._size += 1
        if self._root is None:
            self._root = _Node(rect)
            return
        node = self._root
        dim = 0
        while True:
            if rect.is_dim_less(node.rect, dim):
                if node.left is None:
                    node.left = _Node(rect)
                    return
                node = node.left
            else:
                if node.right is None:
                    node.right = _Node(rect)
                    return
                node = node.right
            dim = (dim + 1) % DIMENSIONS

    def overlaps(self, query: Rect) -> bool:
        """Determine if ``query`` overlaps any rectangle in the index."""
        if self._root is None:
            return False
        stack: List[Tuple[_Node, int]] = [(self._root, 0)]
        while stack:
            node, dim = stack.pop()
            if node.rect.overlaps(query):
                return True
            next_dim = (dim + 1) % DIMENSIONS
            if dim < 2:
                # Min-coordinate axis: the right subtree starts no earlier than node.min[i].
                axis = dim
                if node.right is not None and not query.max[axis] < node.rect.min[axis]:
                    stack.append((node.right, next_dim))
                if node.left is not None:
                    stack.append((node.left, next_dim))
            else:
                # Max-coordinate axis: the left subtree ends no later than node.max[i].
                axis = dim - 2
                if node.left is not None and not query.min[axis] > node.rect.max[axis]:
                    stack.append((node.left, next_dim))
                if node.right is not None:
                    stack.append((node.right, next_dim))
        return False

    def depth(self) -> int:
        """Length of the longest root-to-leaf path (0 when empty)."""
        best = 0
        stack: List[Tuple[_Node, int]] = [(self._root, 1)] if self._root is not None else []
        while stack:
            node, level = stack.pop()
            best = max(best, level)
            for child in (node.left, node.right):
                if child is not None:
                    stack.append((child, level + 1))
        return best
