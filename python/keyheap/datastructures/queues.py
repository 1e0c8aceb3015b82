###############################################################################
# Copyright (C) 2023 Oliver Michael Kamperis
# Email: olliekampo@gmail.com
#
# This program is free software: you can redistribute it and/or modify it under
# the terms of the GNU General Public License as published by the Free Software
# Foundation, either version 3 of the License, or any later version.
#
# This program is distributed in the hope that it will be useful, but WITHOUT
# ANY WARRANTY; without even the implied warranty of MERCHANTABILITY or FITNESS
# FOR A PARTICULAR PURPOSE. See the GNU General Public License for details.
#
# You should have received a copy of the GNU General Public License along with
# this program. If not, see <https://www.gnu.org/licenses/>.
"""
Module containing an array-backed binary heap min-priority queue.

The queue maps keys to values, and always gives access to an entry with a
minimal key under the ordering chosen when the queue was created. The
ordering is either the natural ordering of the keys (according to their rich
comparison methods) or a given three-way comparator function.

This data structure is for algorithmic use. It is not thread-safe, and not
intended to be used in multi-threaded or multi-process applications without
guarding every operation with a single external lock.
"""

import collections.abc
import functools
import logging
from dataclasses import dataclass
from typing import Generic, Iterable, Iterator, TypeVar

from keyheap.auxiliary.typingutils import Comparator, SupportsRichComparison
from keyheap.errors import InvalidKeyError

__copyright__ = "Copyright (C) 2023 Oliver Michael Kamperis"
__license__ = "GPL-3.0"

__all__ = (
    "Entry",
    "MinPriorityQueue",
    "natural_order",
    "reverse_order"
)


def __dir__() -> tuple[str, ...]:
    """Get the names of module attributes."""
    return tuple(sorted(__all__))


KT = TypeVar("KT")
VT = TypeVar("VT")


def natural_order(
    first: SupportsRichComparison,
    second: SupportsRichComparison
) -> int:
    """
    Three-way comparison of two keys by their natural ordering.

    Returns -1, 0 or 1 if the first key is respectively less than, equal to,
    or greater than the second key.

    Raises
    ------
    `TypeError` - If the keys do not support ordering against each other.
    """
    return (first > second) - (first < second)


def reverse_order(
    first: SupportsRichComparison,
    second: SupportsRichComparison
) -> int:
    """
    Three-way comparison of two keys by the reverse of their natural ordering.

    A min-priority queue using this comparator pops its largest key first.
    """
    return natural_order(second, first)


@dataclass(frozen=True)
class Entry(Generic[KT, VT]):
    """
    Dataclass for storing the key-value entries of a priority queue.

    Entries are immutable, so that holding onto an entry returned by a queue
    can never break the queue's ordering.
    """

    key: KT
    value: VT

    def __iter__(self) -> Iterator[KT | VT]:
        """Iterate over the key and the value, to allow unpacking."""
        yield self.key
        yield self.value


class MinPriorityQueue(collections.abc.Collection[Entry[KT, VT]],
                       Generic[KT, VT]):
    """
    Class defining an array-backed binary min-heap priority queue.

    Entries are stored densely in a list interpreted as a complete binary
    tree, the parent of index `j` is at `(j - 1) // 2` and its children are
    at `2j + 1` and `2j + 2`. No entry's key compares less than the key of
    its parent, so the root always holds a minimal key.

    Iterating over the queue yields entries in storage (level) order, not in
    key order, use `iter_ordered()` for the latter.

    Instances are not thread-safe.
    """

    __QUEUE_LOGGER = logging.getLogger("MinPriorityQueue")

    __slots__ = {
        "__heap": "The list of entries interpreted as a complete binary tree.",
        "__compare": "The three-way comparator over keys.",
        "__debug": "Whether to log debug messages."
    }

    def __init__(
        self,
        comparator: Comparator[KT] | None = None,
        *,
        debug: bool = False
    ) -> None:
        """
        Create an empty min-priority queue.

        Parameters
        ----------
        `comparator: Comparator[KT] | None = None` - A three-way comparison
        function over keys, returning a negative number, zero, or a positive
        number if the first key is respectively less than, equal to, or
        greater than the second. If not given or None, the natural ordering
        of the keys is used.

        `debug: bool = False` - Whether to log debug messages.
        """
        self.__heap: list[Entry[KT, VT]] = []
        self.__compare: Comparator[KT] = (
            natural_order if comparator is None else comparator
        )
        self.__debug: bool = debug
        if self.__debug:
            self.__QUEUE_LOGGER.debug(
                "Creating new min-priority queue with: comparator=%s",
                getattr(self.__compare, "__name__", self.__compare)
            )

    # pylint: disable=W0212,W0238
    @classmethod
    def from_keys_values(
        cls,
        keys: Iterable[KT],
        values: Iterable[VT],
        comparator: Comparator[KT] | None = None,
        *,
        debug: bool = False
    ) -> "MinPriorityQueue[KT, VT]":
        """
        Create a min-priority queue from respective sequences of keys and
        values.

        The keys and values are paired element-by-element. If their lengths
        differ, entries are created only up to the length of the shorter.
        Heap order is established by bottom-up construction in linear time.

        Raises
        ------
        `InvalidKeyError` - If any key is not acceptable under the ordering.
        """
        return cls.from_iterable(
            zip(keys, values),
            comparator,
            debug=debug
        )

    @classmethod
    def from_iterable(
        cls,
        iterable: Iterable[tuple[KT, VT]], /,
        comparator: Comparator[KT] | None = None,
        *,
        debug: bool = False
    ) -> "MinPriorityQueue[KT, VT]":
        """
        Create a min-priority queue from an iterable of key-value tuple pairs.

        Heap order is established by bottom-up construction in linear time.

        Raises
        ------
        `InvalidKeyError` - If any key is not acceptable under the ordering.
        """
        queue: "MinPriorityQueue[KT, VT]" = cls(comparator, debug=debug)
        entries = [Entry(key, value) for key, value in iterable]
        if entries:
            first_key = entries[0].key
            for entry in entries:
                queue.__check_key(entry.key, first_key)
        keys = [entry.key for entry in entries]
        queue.__heap = entries
        try:
            queue.__heapify()
        except TypeError as error:
            key = queue.__find_incomparable(keys)
            raise InvalidKeyError(
                key, f"cannot be compared under the queue's ordering: {error}"
            ) from error
        return queue

    def copy(self) -> "MinPriorityQueue[KT, VT]":
        """Return a shallow copy of the queue."""
        queue: "MinPriorityQueue[KT, VT]" = self.__class__(
            self.__compare,
            debug=self.__debug
        )
        queue.__heap = self.__heap.copy()
        return queue

    @property
    def comparator(self) -> Comparator[KT]:
        """The three-way comparator over keys used by the queue."""
        return self.__compare

    def __str__(self) -> str:
        """Return a string representation of the queue."""
        return f"Min Priority Queue with {len(self)} entries"

    def __repr__(self) -> str:
        """Return a string representation of the queue's entries."""
        entries = ", ".join(
            f"({entry.key!r}, {entry.value!r})"
            for entry in self.__heap
        )
        return f"{self.__class__.__name__}({entries})"

    def __contains__(self, entry: object) -> bool:
        """
        Return whether an entry equal to the given one is in the queue.

        Entries are equal when both their keys and their values are equal,
        their positions in the queue are not considered.
        """
        return entry in self.__heap

    def __iter__(self) -> Iterator[Entry[KT, VT]]:
        """
        Return an iterator over the entries in the queue.

        The entries are yielded in storage order (not in key order).
        """
        yield from self.__heap

    def __len__(self) -> int:
        """Return the number of entries in the queue."""
        return len(self.__heap)

    def __bool__(self) -> bool:
        """Return True if the queue is not empty."""
        return bool(self.__heap)

    def size(self) -> int:
        """Return the number of entries in the queue."""
        return len(self.__heap)

    def is_empty(self) -> bool:
        """Return whether the queue has no entries."""
        return not self.__heap

    def clear(self) -> None:
        """Remove all entries from the queue."""
        self.__heap.clear()

    def peek_min(self) -> Entry[KT, VT] | None:
        """
        Peek at an entry with minimal key, without removing it.

        Returns
        -------
        `Entry[KT, VT] | None` - An entry with minimal key, or None if the
        queue is empty.
        """
        if not self.__heap:
            return None
        return self.__heap[0]

    def insert(self, key: KT, value: VT, /) -> Entry[KT, VT]:
        """
        Insert a key-value pair into the queue.

        Parameters
        ----------
        `key: KT@MinPriorityQueue` - The key of the new entry.

        `value: VT@MinPriorityQueue` - The value of the new entry.

        Returns
        -------
        `Entry[KT, VT]` - The entry created for the key-value pair.

        Raises
        ------
        `InvalidKeyError` - If the key is None or cannot be compared under the
        queue's ordering. The queue is left unchanged.
        """
        if self.__heap:
            self.__check_key(key, self.__heap[0].key)
        else:
            self.__check_key(key, key)
        entry = Entry(key, value)
        self.__heap.append(entry)
        try:
            self.__sift_up(len(self.__heap) - 1)
        except TypeError as error:
            self.__heap.pop()
            raise InvalidKeyError(
                key, f"cannot be compared under the queue's ordering: {error}"
            ) from error
        if self.__debug:
            self.__QUEUE_LOGGER.debug(
                "Inserted entry: key=%s, value=%s, size=%s",
                key, value, len(self.__heap)
            )
        return entry

    def remove_min(self) -> Entry[KT, VT] | None:
        """
        Remove and return an entry with minimal key.

        Returns
        -------
        `Entry[KT, VT] | None` - The removed entry, or None if the queue is
        empty (in which case the queue is unchanged).
        """
        if not self.__heap:
            return None
        answer = self.__heap[0]
        last = self.__heap.pop()
        if self.__heap:
            self.__heap[0] = last
            self.__sift_down(0)
        if self.__debug:
            self.__QUEUE_LOGGER.debug(
                "Removed minimum entry: key=%s, value=%s, size=%s",
                answer.key, answer.value, len(self.__heap)
            )
        return answer

    def drain(self) -> Iterator[Entry[KT, VT]]:
        """
        Remove and yield entries with minimal key until the queue is empty.

        The entries are yielded in non-decreasing key order.
        """
        while self.__heap:
            yield self.remove_min()  # type: ignore

    def iter_ordered(self) -> Iterator[Entry[KT, VT]]:
        """
        Iterate over the entries in the queue in non-decreasing key order,
        without removing them.

        The iteration is over a snapshot of the queue taken when the iteration
        starts.

        Returns
        -------
        `Iterator[Entry[KT, VT]]` - An iterator over the entries in key order.
        """
        heap = self.__heap.copy()
        if not heap:
            return
        compare = self.__compare
        sort_key = functools.cmp_to_key(
            lambda i, j: compare(heap[i].key, heap[j].key)
        )
        indices: list[int] = [0]
        len_ = len(heap)
        while indices:
            min_index = min(indices, key=sort_key)
            yield heap[min_index]
            indices.remove(min_index)
            index: int = (min_index * 2) + 1
            if index < len_:
                indices.append(index)
            if index + 1 < len_:
                indices.append(index + 1)

    def iter_at_most(self, key: KT, /) -> Iterator[Entry[KT, VT]]:
        """
        Iterate over all entries whose key is not greater than the given key.

        Both subtrees of every visited entry are searched, and subtrees whose
        root key is greater than the given key are skipped, since no key
        below them can be smaller. Entries are yielded in preorder.
        """
        compare = self.__compare
        frontier: list[int] = [0] if self.__heap else []
        len_ = len(self.__heap)
        while frontier:
            index = frontier.pop()
            entry = self.__heap[index]
            if compare(entry.key, key) > 0:
                continue
            yield entry
            left = (index * 2) + 1
            if left + 1 < len_:
                frontier.append(left + 1)
            if left < len_:
                frontier.append(left)

    def iter_preorder(
        self,
        index: int = 0
    ) -> Iterator[tuple[int, Entry[KT, VT]]]:
        """
        Iterate over the subtree rooted at the given index in preorder.

        Returns
        -------
        `Iterator[tuple[int, Entry[KT, VT]]]` - An iterator over depth-entry
        tuple pairs, where the depth is that of the entry in the whole tree
        (the root has depth zero).
        """
        if index < 0:
            raise IndexError(f"Index {index} is negative.")
        frontier: list[tuple[int, int]] = []
        if index < len(self.__heap):
            frontier.append((index, (index + 1).bit_length() - 1))
        while frontier:
            index, depth = frontier.pop()
            yield depth, self.__heap[index]
            left = (index * 2) + 1
            if left + 1 < len(self.__heap):
                frontier.append((left + 1, depth + 1))
            if left < len(self.__heap):
                frontier.append((left, depth + 1))

    def format_preorder(self, index: int = 0) -> str:
        """
        Format the subtree rooted at the given index as text.

        Each entry's value is written on its own line in preorder, prefixed
        with one asterisk per level of depth in the tree.
        """
        return "\n".join(
            f"{'*' * depth}{entry.value}"
            for depth, entry in self.iter_preorder(index)
        )

    def is_heap(self) -> bool:
        """Return whether every entry's key is not less than its parent's."""
        compare = self.__compare
        heap = self.__heap
        return all(
            compare(heap[index].key, heap[(index - 1) // 2].key) >= 0
            for index in range(1, len(heap))
        )

    def __check_key(self, key: KT, other: KT) -> None:
        """Check that a key is acceptable, comparing it with another key."""
        if key is None:
            raise InvalidKeyError(key, "keys must not be None.")
        try:
            self.__compare(key, key)
            self.__compare(key, other)
        except TypeError as error:
            raise InvalidKeyError(
                key, f"cannot be compared under the queue's ordering: {error}"
            ) from error

    def __sift_up(self, index: int) -> None:
        """
        Move the entry at the given index up while its parent is greater.

        If the comparator raises a type error, the swaps already made are
        undone before the error is re-raised.
        """
        heap = self.__heap
        compare = self.__compare
        swapped: list[int] = []
        try:
            while index > 0:
                parent = (index - 1) // 2
                if compare(heap[index].key, heap[parent].key) >= 0:
                    break
                heap[index], heap[parent] = heap[parent], heap[index]
                swapped.append(index)
                index = parent
        except TypeError:
            for child in reversed(swapped):
                parent = (child - 1) // 2
                heap[child], heap[parent] = heap[parent], heap[child]
            raise

    def __find_incomparable(self, keys: list[KT]) -> KT:
        """Find the first key that cannot be compared with an earlier key."""
        for index, key in enumerate(keys):
            for other in keys[:index]:
                try:
                    self.__compare(key, other)
                except TypeError:
                    return key
        return keys[-1]

    def __sift_down(self, index: int) -> None:
        """Move the entry at the given index down until no child is smaller."""
        heap = self.__heap
        compare = self.__compare
        len_ = len(heap)
        while (left := (index * 2) + 1) < len_:
            child = left
            right = left + 1
            if right < len_ and compare(heap[left].key, heap[right].key) > 0:
                child = right
            if compare(heap[child].key, heap[index].key) >= 0:
                break
            heap[index], heap[child] = heap[child], heap[index]
            index = child

    def __heapify(self) -> None:
        """Establish heap order over the whole list bottom-up."""
        for index in range(((len(self.__heap) - 2) // 2), -1, -1):
            self.__sift_down(index)
        if self.__debug:
            self.__QUEUE_LOGGER.debug(
                "Heapified %s entries.", len(self.__heap)
            )
