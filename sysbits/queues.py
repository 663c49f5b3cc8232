"""Simple queues, tail queues and circular queues with node handles."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator
from typing import Any

from sysbits.lists import Node


class QueueNode(Node):
    """An element of a queue; holds a value and links to its neighbours."""

    __slots__ = ()

    def __repr__(self) -> str:
        return f"QueueNode({self.value!r})"


class _Queue(ABC):
    """Shared bookkeeping: ownership checks, counting and iteration."""

    def __init__(self, values: Iterable[Any] = ()) -> None:
        self._size = 0
        self._setup()
        for value in values:
            self.insert_tail(value)

    @abstractmethod
    def _setup(self) -> None:
        """Prepare an empty queue."""

    @abstractmethod
    def nodes(self) -> Iterator[QueueNode]:
        """Yield the nodes front to back; the current node may be removed."""

    @abstractmethod
    def insert_tail(self, value: Any) -> QueueNode:
        """Append *value* at the end and return its node."""

    def _check(self, node: QueueNode) -> None:
        if not isinstance(node, QueueNode) or node._owner is not self:
            raise ValueError("node does not belong to this queue")

    def _new(self, value: Any) -> QueueNode:
        self._size += 1
        return QueueNode(value, self)

    def _detach(self, node: QueueNode) -> Any:
        node.next = node.prev = None
        node._owner = None
        self._size -= 1
        return node.value

    def __iter__(self) -> Iterator[Any]:
        return (node.value for node in self.nodes())

    def __len__(self) -> int:
        return self._size

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self)!r})"


class _HeadTailQueue(_Queue):
    """A queue headed by pointers to its first and last nodes."""

    def _setup(self) -> None:
        self._head: QueueNode | None = None
        self._tail: QueueNode | None = None

    def first(self) -> QueueNode | None:
        """Return the first node, or None when the queue is empty."""
        return self._head

    def nodes(self) -> Iterator[QueueNode]:
        node = self._head
        while node is not None:
            following = node.next
            yield node
            node = following


class SimpleQueue(_HeadTailQueue):
    """A singly linked queue: insert anywhere, remove only at the head or after a node."""

    def insert_head(self, value: Any) -> QueueNode:
        node = self._new(value)
        node.next = self._head
        if self._head is None:
            self._tail = node
        self._head = node
        return node

    def insert_tail(self, value: Any) -> QueueNode:
        node = self._new(value)
        if self._tail is None:
            self._head = node
        else:
            self._tail.next = node
        self._tail = node
        return node

    def insert_after(self, ref: QueueNode, value: Any) -> QueueNode:
        self._check(ref)
        node = self._new(value)
        node.next = ref.next
        if node.next is None:
            self._tail = node
        ref.next = node
        return node

    def remove_head(self) -> Any:
        """Remove the first node and return its value."""
        node = self._head
        if node is None:
            raise IndexError("remove from empty queue")
        self._head = node.next
        if self._head is None:
            self._tail = None
        return self._detach(node)

    def remove_after(self, ref: QueueNode) -> Any:
        """Remove the node following *ref* and return its value."""
        self._check(ref)
        victim = ref.next
        if victim is None:
            raise IndexError("no node after reference")
        ref.next = victim.next
        if ref.next is None:
            self._tail = ref
        return self._detach(victim)

    def first(self) -> QueueNode | None:
        return self._head

    def __iter__(self) -> Iterator[Any]:
        return super().__iter__()

    def __len__(self) -> int:
        return self._size


class TailQueue(_HeadTailQueue):
    """A doubly linked queue: insert and remove anywhere, traverse both ways."""

    def insert_head(self, value: Any) -> QueueNode:
        node = self._new(value)
        node.next = self._head
        if self._head is not None:
            self._head.prev = node
        else:
            self._tail = node
        self._head = node
        return node

    def insert_tail(self, value: Any) -> QueueNode:
        node = self._new(value)
        node.prev = self._tail
        if self._tail is not None:
            self._tail.next = node
        else:
            self._head = node
        self._tail = node
        return node

    def insert_after(self, ref: QueueNode, value: Any) -> QueueNode:
        self._check(ref)
        node = self._new(value)
        node.next = ref.next
        if ref.next is not None:
            ref.next.prev = node
        else:
            self._tail = node
        ref.next = node
        node.prev = ref
        return node

    def insert_before(self, ref: QueueNode, value: Any) -> QueueNode:
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

    def remove(self, node: QueueNode) -> Any:
        """Remove *node* and return its value."""
        self._check(node)
        if node.next is not None:
            node.next.prev = node.prev
        else:
            self._tail = node.prev
        if node.prev is not None:
            node.prev.next = node.next
        else:
            self._head = node.next
        return self._detach(node)

    def replace(self, node: QueueNode, value: Any) -> QueueNode:
        """Put a new node holding *value* in the place of *node*; return it."""
        self._check(node)
        fresh = self._new(value)
        fresh.next = node.next
        fresh.prev = node.prev
        if fresh.next is not None:
            fresh.next.prev = fresh
        else:
            self._tail = fresh
        if fresh.prev is not None:
            fresh.prev.next = fresh
        else:
            self._head = fresh
        self._detach(node)
        return fresh

    def first(self) -> QueueNode | None:
        return self._head

    def last(self) -> QueueNode | None:
        """Return the last node, or None when the queue is empty."""
        return self._tail

    def reversed_nodes(self) -> Iterator[QueueNode]:
        """Yield the nodes back to front; the current node may be removed."""
        node = self._tail
        while node is not None:
            preceding = node.prev
            yield node
            node = preceding

    def __iter__(self) -> Iterator[Any]:
        return super().__iter__()

    def __reversed__(self) -> Iterator[Any]:
        return (node.value for node in self.reversed_nodes())

    def __len__(self) -> int:
        return self._size


class CircleQueue(_Queue):
    """A doubly linked ring closed through an end marker; traverse both ways."""

    def _setup(self) -> None:
        self._end = QueueNode(None)
        self._end.next = self._end
        self._end.prev = self._end

    def _link_after(self, ref: QueueNode, value: Any) -> QueueNode:
        node = self._new(value)
        node.prev = ref
        node.next = ref.next
        ref.next.prev = node
        ref.next = node
        return node

    def insert_head(self, value: Any) -> QueueNode:
        return self._link_after(self._end, value)

    def insert_tail(self, value: Any) -> QueueNode:
        return self._link_after(self._end.prev, value)

    def insert_after(self, ref: QueueNode, value: Any) -> QueueNode:
        self._check(ref)
        return self._link_after(ref, value)

    def insert_before(self, ref: QueueNode, value: Any) -> QueueNode:
        self._check(ref)
        return self._link_after(ref.prev, value)

    def remove(self, node: QueueNode) -> Any:
        """Remove *node* and return its value."""
        self._check(node)
        node.prev.next = node.next
        node.next.prev = node.prev
        return self._detach(node)

    def replace(self, node: QueueNode, value: Any) -> QueueNode:
        """Put a new node holding *value* in the place of *node*; return it."""
        self._check(node)
        fresh = self._new(value)
        fresh.next = node.next
        fresh.prev = node.prev
        fresh.next.prev = fresh
        fresh.prev.next = fresh
        self._detach(node)
        return fresh

    def first(self) -> QueueNode | None:
        """Return the first node, or None when the queue is empty."""
        node = self._end.next
        return None if node is self._end else node

    def last(self) -> QueueNode | None:
        """Return the last node, or None when the queue is empty."""
        node = self._end.prev
        return None if node is self._end else node

    def nodes(self) -> Iterator[QueueNode]:
        node = self._end.next
        while node is not self._end:
            following = node.next
            yield node
            node = following

    def reversed_nodes(self) -> Iterator[QueueNode]:
        """Yield the nodes back to front; the current node may be removed."""
        node = self._end.prev
        while node is not self._end:
            preceding = node.prev
            yield node
            node = preceding

    def __iter__(self) -> Iterator[Any]:
        return super().__iter__()

    def __reversed__(self) -> Iterator[Any]:
        return (node.value for node in self.reversed_nodes())

    def __len__(self) -> int:
        return self._size