"""An intrusive, circular doubly-linked list with consistency checks."""

from __future__ import annotations


class ListCorruptError(Exception):
    """A list's backward links do not match its forward links."""

    def __init__(self, message, head, node, count):
        self.message = message
        self.head = head
        self.node = node
        self.count = count
        super().__init__(
            f"{message}: prev corrupt in node {node!r} ({count}) of {head!r}"
        )


def _corrupt(message, head, node, count):
    if message is not None:
        raise ListCorruptError(message, head, node, count)
    return None


class ListNode:
    """An entry of a linked list; subclass it to put objects in a list.

    A node that is in no list links to itself.
    """

    def __init__(self):
        self.next = self
        self.prev = self

    def check(self, message=None):
        """Check the links of the ring this node is in.

        Returns the node when the ring is consistent. Otherwise raises
        ListCorruptError if message is given, else returns None.
        """
        previous, current = self, self.next
        count = 0
        seen = {id(self)}
        while current is not self:
            count += 1
            if current is None or current.prev is not previous:
                return _corrupt(message, self, current, count)
            if id(current) in seen:
                return _corrupt(message, self, current, count)
            seen.add(id(current))
            previous, current = current, current.next
        if self.prev is not previous:
            return _corrupt(message, self, self, 0)
        return self


class LinkedList:
    """A doubly-linked list of ListNode objects, kept around a sentinel head."""

    def __init__(self, nodes=()):
        self.head = ListNode()
        for node in nodes:
            self.add_tail(node)

    def add(self, node):
        """Insert node at the start of the list."""
        self._link(node, self.head, self.head.next)

    def add_tail(self, node):
        """Insert node at the end of the list."""
        self._link(node, self.head.prev, self.head)

    def add_before(self, node, before):
        """Insert node in front of before, which must be in this list."""
        self._link(node, before.prev, before)

    @staticmethod
    def _link(node, previous, following):
        node.prev = previous
        node.next = following
        previous.next = node
        following.prev = node

    def remove(self, node):
        """Remove node from the list; it must be a member."""
        if not self:
            raise IndexError("remove from an empty list")
        if node is self.head or not any(item is node for item in self):
            raise ValueError(f"{node!r} is not in this list")
        node.prev.next = node.next
        node.next.prev = node.prev
        node.next = node
        node.prev = node

    def top(self):
        """First node, or None if the list is empty."""
        return self.head.next if self else None

    def tail(self):
        """Last node, or None if the list is empty."""
        return self.head.prev if self else None

    def pop(self):
        """Remove and return the first node, or None if the list is empty."""
        node = self.top()
        if node is not None:
            self.remove(node)
        return node

    def check(self, message=None):
        """Check the list's links; see ListNode.check."""
        if self.head.check(message) is None:
            return None
        return self

    def __iter__(self):
        # The next node is taken before yielding, so the current one may be removed.
        node = self.head.next
        while node is not self.head:
            following = node.next
            yield node
            node = following

    def __reversed__(self):
        node = self.head.prev
        while node is not self.head:
            preceding = node.prev
            yield node
            node = preceding

    def __len__(self):
        return sum(1 for _ in self)

    def __bool__(self):
        return self.head.next is not self.head