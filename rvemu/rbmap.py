"""Ordered map backed by a red-black tree with a user-supplied comparator."""

from __future__ import annotations

import enum
from typing import Any, Callable, Iterator, Optional, Tuple

Comparator = Callable[[Any, Any], int]

CMP_LESS = -1
CMP_EQUAL = 0
CMP_GREATER = 1

_UINT_MASK = 0xFFFFFFFF


def _three_way(a: Any, b: Any) -> int:
    if a < b:
        return CMP_LESS
    if a > b:
        return CMP_GREATER
    return CMP_EQUAL


def cmp_int(a: int, b: int) -> int:
    """Compare two signed integers, returning -1, 0 or 1."""
    return _three_way(a, b)


def cmp_uint(a: int, b: int) -> int:
    """Compare two integers as 32-bit unsigned values, returning -1, 0 or 1."""
    return _three_way(a & _UINT_MASK, b & _UINT_MASK)


class _Color(enum.Enum):
    RED = 0
    BLACK = 1


class _Node:
    __slots__ = ("key", "value", "color", "parent", "left", "right")

    def __init__(self, key: Any, value: Any, color: _Color, nil: Optional["_Node"]):
        self.key = key
        self.value = value
        self.color = color
        self.parent = nil
        self.left = nil
        self.right = nil


class RBMap:
    """A sorted key/value map; keys are ordered by ``compare(a, b)``.

    Inserting a key that is already present leaves the map unchanged.
    """

    def __init__(self, compare: Comparator = cmp_int):
        self._cmp = compare
        nil = _Node(None, None, _Color.BLACK, None)
        nil.parent = nil.left = nil.right = nil
        self._nil = nil
        self._root = nil
        self._size = 0

    # ----------------------------------------------------------------- lookup

    def _search(self, key: Any) -> Optional[_Node]:
        node = self._root
        while node is not self._nil:
            res = self._cmp(key, node.key)
            if res == 0:
                return node
            node = node.left if res < 0 else node.right
        return None

    def _minimum(self, node: _Node) -> _Node:
        while node.left is not self._nil:
            node = node.left
        return node

    def _maximum(self, node: _Node) -> _Node:
        while node.right is not self._nil:
            node = node.right
        return node

    # -------------------------------------------------------------- rotations

    def _rotate_left(self, node: _Node) -> None:
        nil = self._nil
        r = node.right
        node.right = r.left
        if r.left is not nil:
            r.left.parent = node
        r.parent = node.parent
        if node.parent is nil:
            self._root = r
        elif node is node.parent.left:
            node.parent.left = r
        else:
            node.parent.right = r
        r.left = node
        node.parent = r

    def _rotate_right(self, node: _Node) -> None:
        nil = self._nil
        left = node.left
        node.left = left.right
        if left.right is not nil:
            left.right.parent = node
        left.parent = node.parent
        if node.parent is nil:
            self._root = left
        elif node is node.parent.right:
            node.parent.right = left
        else:
            node.parent.left = left
        left.right = node
        node.parent = left

    # -------------------------------------------------------------- insertion

    def insert(self, key: Any, value: Any = None) -> bool:
        """Insert ``key`` with ``value``; return False if the key already exists."""
        nil = self._nil
        parent = nil
        node = self._root
        res = 0
        while node is not nil:
            res = self._cmp(key, node.key)
            if res == 0:
                return False
            parent = node
            node = node.left if res < 0 else node.right

        new = _Node(key, value, _Color.RED, nil)
        new.parent = parent
        if parent is nil:
            self._root = new
        elif res < 0:
            parent.left = new
        else:
            parent.right = new
        self._size += 1
        self._insert_fixup(new)
        return True

    def _insert_fixup(self, node: _Node) -> None:
        while node.parent.color is _Color.RED:
            parent = node.parent
            grand = parent.parent
            if parent is grand.left:
                uncle = grand.right
                if uncle.color is _Color.RED:
                    parent.color = uncle.color = _Color.BLACK
                    grand.color = _Color.RED
                    node = grand
                    continue
                if node is parent.right:
                    node = parent
                    self._rotate_left(node)
                    parent = node.parent
                parent.color = _Color.BLACK
                grand.color = _Color.RED
                self._rotate_right(grand)
            else:
                uncle = grand.left
                if uncle.color is _Color.RED:
                    parent.color = uncle.color = _Color.BLACK
                    grand.color = _Color.RED
                    node = grand
                    continue
                if node is parent.left:
                    node = parent
                    self._rotate_right(node)
                    parent = node.parent
                parent.color = _Color.BLACK
                grand.color = _Color.RED
                self._rotate_left(grand)
        self._root.color = _Color.BLACK

    # --------------------------------------------------------------- deletion

    def _transplant(self, old: _Node, new: _Node) -> None:
        if old.parent is self._nil:
            self._root = new
        elif old is old.parent.left:
            old.parent.left = new
        else:
            old.parent.right = new
        new.parent = old.parent

    def erase(self, key: Any) -> None:
        """Remove ``key`` from the map; raise KeyError if it is absent."""
        node = self._search(key)
        if node is None:
            raise KeyError(key)

        nil = self._nil
        removed_color = node.color
        if node.left is nil:
            child = node.right
            self._transplant(node, child)
        elif node.right is nil:
            child = node.left
            self._transplant(node, child)
        else:
            succ = self._minimum(node.right)
            removed_color = succ.color
            child = succ.right
            if succ.parent is node:
                child.parent = succ
            else:
                self._transplant(succ, succ.right)
                succ.right = node.right
                succ.right.parent = succ
            self._transplant(node, succ)
            succ.left = node.left
            succ.left.parent = succ
            succ.color = node.color

        self._size -= 1
        if removed_color is _Color.BLACK:
            self._delete_fixup(child)
        nil.parent = nil

    def _delete_fixup(self, node: _Node) -> None:
        while node is not self._root and node.color is _Color.BLACK:
            parent = node.parent
            if node is parent.left:
                sib = parent.right
                if sib.color is _Color.RED:
                    sib.color = _Color.BLACK
                    parent.color = _Color.RED
                    self._rotate_left(parent)
                    sib = parent.right
                if sib.left.color is _Color.BLACK and sib.right.color is _Color.BLACK:
                    sib.color = _Color.RED
                    node = parent
                    continue
                if sib.right.color is _Color.BLACK:
                    sib.left.color = _Color.BLACK
                    sib.color = _Color.RED
                    self._rotate_right(sib)
                    sib = parent.right
                sib.color = parent.color
                parent.color = _Color.BLACK
                sib.right.color = _Color.BLACK
                self._rotate_left(parent)
                node = self._root
            else:
                sib = parent.left
                if sib.color is _Color.RED:
                    sib.color = _Color.BLACK
                    parent.color = _Color.RED
                    self._rotate_right(parent)
                    sib = parent.left
                if sib.left.color is _Color.BLACK and sib.right.color is _Color.BLACK:
                    sib.color = _Color.RED
                    node = parent
                    continue
                if sib.left.color is _Color.BLACK:
                    sib.right.color = _Color.BLACK
                    sib.color = _Color.RED
                    self._rotate_left(sib)
                    sib = parent.left
                sib.color = parent.color
                parent.color = _Color.BLACK
                sib.left.color = _Color.BLACK
                self._rotate_right(parent)
                node = self._root
        node.color = _Color.BLACK

    # ----------------------------------------------------------------- public

    def find(self, key: Any) -> Any:
        """Return the value stored under ``key``, or None if it is absent."""
        node = self._search(key)
        return None if node is None else node.value

    def clear(self) -> None:
        """Remove every entry."""
        self._root = self._nil
        self._size = 0

    def is_empty(self) -> bool:
        return self._size == 0

    def first(self) -> Optional[Tuple[Any, Any]]:
        """Return the (key, value) pair with the least key, or None if empty."""
        if self._root is self._nil:
            return None
        node = self._minimum(self._root)
        return node.key, node.value

    def last(self) -> Optional[Tuple[Any, Any]]:
        """Return the (key, value) pair with the greatest key, or None if empty."""
        if self._root is self._nil:
            return None
        node = self._maximum(self._root)
        return node.key, node.value

    def items(self) -> Iterator[Tuple[Any, Any]]:
        """Yield (key, value) pairs in key order."""
        nil = self._nil
        stack = []
        node = self._root
        while stack or node is not nil:
            while node is not nil:
                stack.append(node)
                node = node.left
            node = stack.pop()
            yield node.key, node.value
            node = node.right

    def __len__(self) -> int:
        return self._size

    def __contains__(self, key: Any) -> bool:
        return self._search(key) is not None

    def __getitem__(self, key: Any) -> Any:
        node = self._search(key)
        if node is None:
            raise KeyError(key)
        return node.value

    def __iter__(self) -> Iterator[Any]:
        return (key for key, _ in self.items())

    def _black_height(self) -> int:
        """Check the red-black properties and return the tree's black height."""
        nil = self._nil
        if self._root.color is not _Color.BLACK:
            raise ValueError("root is not black")

        def walk(node: _Node) -> int:
            if node is nil:
                return 1
            if node.color is _Color.RED and (
                node.left.color is _Color.RED or node.right.color is _Color.RED
            ):
                raise ValueError("red node with red child")
            for child in (node.left, node.right):
                if child is not nil and child.parent is not node:
                    raise ValueError("broken parent link")
            lh = walk(node.left)
            rh = walk(node.right)
            if lh != rh:
                raise ValueError("unequal black heights")
            return lh + (1 if node.color is _Color.BLACK else 0)

        return walk(self._root)