"""Singly and doubly linked lists with node handles."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Any


class Node:
    """An element of a linked list; holds a value and links to its neighbours."""

    __slots__ = ("value", "next", "prev", "_owner")

    def __init__(self, value: Any, owner: object = None) -> None:
        self.value = value
        self.next: Node | None = None
        self.prev: Node | None = None
        self._owner = owner

    def __repr__(self) -> str:
        return f"Node({self.value!r})"


class _Linked:
    """Shared head handling and node bookkeeping."""

    def __init__(self, values: Iterable[Any] = ()) -> None:
        self._head: Node | None = None
        self._size = 0
        tail: Node | None = None
        for value in values:
            tail = self.insert_head(value) if tail is None else self.insert_after(tail, value)

    def _check(self, node: Node) -> None:
        if not isinstance(node, Node) or node._owner is not self:
            raise ValueError("node does not belong to this list")

    def _new(self, value: Any) -> Node:
        self._size += 1
        return Node(value, self)

    def _detach(self, node: Node) -> Any:
        node.next = node.prev = None
        node._owner = None
        self._size -= 1
        return node.value

    def nodes(self) -> Iterator[Node]:
        """Yield the nodes front to back; the current node may be removed."""
        node = self._head
        while node is not None:
            following = node.next
            yield node
            node = following

    def __repr__(self) -> str:
        return f"{type(self).__name__}({[node.value for node in self.nodes()]!r})"


class SList(_Linked):
    """A singly linked list: forward traversal, O(n) removal of arbitrary nodes."""

    def first(self) -> Node | None:
        """Return the first node, or None when the list is empty."""
        return self._head

    def __iter__(self) -> Iterator[Any]:
        return (node.value for node in self.nodes())

    def __len__(self) -> int:
        return self._size

    def insert_head(self, value: Any) -> Node:
        node = self._new(value)
        node.next = self._head
        self._head = node
        return node

    def insert_after(self, ref: Node, value: Any) -> Node:
        self._check(ref)
        node = self._new(value)
        node.next = ref.next
        ref.next = node
        return node

    def remove_head(self) -> Any:
        """Remove the first node and return its value."""
        node = self._head
        if node is None:
            raise IndexError("remove from empty list")
        self._head = node.next
        return self._detach(node)

    def remove_after(self, ref: Node) -> Any:
        """Remove the node following *ref* and return its value."""
        self._check(ref)
        victim = ref.next
        if victim is None:
            raise IndexError("no node after reference")
        ref.next = victim.next
        return self._detach(victim)

    def remove(self, node: Node) -> Any:
        """Remove *node* and return its value."""
        self._check(node)
        if self._head is node:
            return self.remove_head()
        previous = next(item for item in self.nodes() if item.next is node)
        previous.next = node.next
        return self._detach(node)


class List(_Linked):
    """A doubly linked list: forward traversal, O(1) removal of any node."""

    def first(self) -> Node | None:
        """Return the first node, or None when the list is empty."""
        return self._head

    def __iter__(self) -> Iterator[Any]:
        return (node.value for node in self.nodes())

    def __len__(self) -> int:
        return self._size

    def insert_head(self, value: Any) -> Node:
        node = self._new(value)
        node.next = self._head
        if self._head is not None:
            self._head.prev = node
        self._head = node
        return node

    def insert_after(self, ref: Node, value: Any) -> Node:
        self._check(ref)
        node = self._new(value)
        node.next = ref.next
        if ref.next is not None:
            ref.next.prev = node
        ref.next = node
        node.prev = ref
        return node

    def insert_before(self, ref: Node, value: Any) -> Node:
        self._check(ref)
        node = self._new(value)
        node.prev = ref.prev
        node.next = ref
        if ref.prev is not None:
            ref.prev.next = node
        else:
            self._head = node
        ref.prev = node
        return node

    def remove(self, node: Node) -> Any:
        """Remove *node* and return its value."""
        self._check(node)
        if node.next is not None:
            node.next.prev = node.prev
        if node.prev is not None:
            node.prev.next = node.next
        else:
            self._head = node.next
        return self._detach(node)

    def replace(self, node: Node, value: Any) -> Node:
        """Put a new node holding *value* in the place of *node*; return it."""
        self._check(node)
        fresh = self._new(value)
        fresh.next = node.next
        fresh.prev = node.prev
        if fresh.next is not None:
            fresh.next.prev = fresh
        if fresh.prev is not None:
            fresh.prev.next = fresh
        else:
            self._head = fresh
        self._detach(node)
        return fresh