import dataclasses
import unittest

import numpy as np

from keyheap.datastructures.queues import (Entry, MinPriorityQueue,
                                           natural_order, reverse_order)
from keyheap.errors import InvalidKeyError, KeyHeapError


def _keys(entries):
    return [entry.key for entry in entries]


class TestComparators(unittest.TestCase):
    def test_natural_order(self):
        self.assertEqual(natural_order(1, 2), -1)
        self.assertEqual(natural_order(2, 2), 0)
        self.assertEqual(natural_order("b", "a"), 1)

    def test_reverse_order(self):
        self.assertEqual(reverse_order(1, 2), 1)
        self.assertEqual(reverse_order(2, 2), 0)
        self.assertEqual(reverse_order(3, 2), -1)

    def test_natural_order_incomparable(self):
        with self.assertRaises(TypeError):
            natural_order(1, "a")


class TestEntry(unittest.TestCase):
    def test_frozen(self):
        entry = Entry(1, "one")
        with self.assertRaises(dataclasses.FrozenInstanceError):
            entry.key = 2  # type: ignore

    def test_unpack(self):
        key, value = Entry(1, "one")
        self.assertEqual((key, value), (1, "one"))


class TestMinPriorityQueue(unittest.TestCase):
    def test_empty(self):
        queue: MinPriorityQueue[int, str] = MinPriorityQueue()
        self.assertEqual(queue.size(), 0)
        self.assertEqual(len(queue), 0)
        self.assertTrue(queue.is_empty())
        self.assertFalse(queue)
        self.assertIsNone(queue.peek_min())
        self.assertIsNone(queue.remove_min())

    def test_remove_past_empty(self):
        queue: MinPriorityQueue[int, str] = MinPriorityQueue()
        queue.insert(1, "one")
        self.assertEqual(queue.remove_min(), Entry(1, "one"))
        for _ in range(3):
            self.assertIsNone(queue.remove_min())
            self.assertEqual(queue.size(), 0)
        self.assertIsNone(queue.peek_min())

    def test_insert_returns_entry(self):
        queue: MinPriorityQueue[int, str] = MinPriorityQueue()
        entry = queue.insert(5, "five")
        self.assertEqual(entry, Entry(5, "five"))
        self.assertIs(queue.peek_min(), entry)
        self.assertIn(entry, queue)

    def test_contains_compares_key_and_value(self):
        queue: MinPriorityQueue[int, str] = MinPriorityQueue()
        queue.insert(5, "five")
        self.assertIn(Entry(5, "five"), queue)
        self.assertNotIn(Entry(5, "other"), queue)
        self.assertNotIn(Entry(4, "five"), queue)

    def test_remove_order(self):
        queue: MinPriorityQueue[int, str] = MinPriorityQueue()
        for key in [4, 893, 100, 57, 12, 6]:
            queue.insert(key, str(key))
        removed = [queue.remove_min().key for _ in range(6)]  # type: ignore
        self.assertEqual(removed, [4, 6, 12, 57, 100, 893])
        self.assertTrue(queue.is_empty())

    def test_peek_does_not_remove(self):
        queue: MinPriorityQueue[int, str] = MinPriorityQueue()
        queue.insert(3, "three")
        queue.insert(1, "one")
        self.assertEqual(queue.peek_min(), Entry(1, "one"))
        self.assertEqual(queue.peek_min(), Entry(1, "one"))
        self.assertEqual(queue.size(), 2)

    def test_from_keys_values(self):
        queue = MinPriorityQueue.from_keys_values([1, 23, 10, 5],
                                                  [0, 36, 888, 99])
        self.assertEqual(queue.peek_min(), Entry(1, 0))
        self.assertEqual(queue.remove_min(), Entry(1, 0))
        self.assertEqual(queue.peek_min(), Entry(5, 99))

    def test_from_keys_values_truncates(self):
        queue = MinPriorityQueue.from_keys_values([3, 2, 1], ["a", "b"])
        self.assertEqual(queue.size(), 2)
        self.assertEqual(_keys(queue.drain()), [2, 3])
        queue = MinPriorityQueue.from_keys_values([3], ["a", "b", "c"])
        self.assertEqual(list(queue), [Entry(3, "a")])

    def test_from_keys_values_empty(self):
        queue = MinPriorityQueue.from_keys_values([], [])
        self.assertTrue(queue.is_empty())
        self.assertIsNone(queue.peek_min())

    def test_heapify_storage(self):
        queue = MinPriorityQueue.from_keys_values(
            [4, 893, 100, 57, 12, 6],
            ["10", "6", "88", "45", "23", "3"]
        )
        self.assertEqual(_keys(queue), [4, 12, 6, 57, 893, 100])
        self.assertTrue(queue.is_heap())

    def test_from_iterable(self):
        queue = MinPriorityQueue.from_iterable([(2, "b"), (1, "a"), (3, "c")])
        self.assertEqual([entry.value for entry in queue.drain()],
                         ["a", "b", "c"])

    def test_insert_ties_stay_in_place(self):
        queue: MinPriorityQueue[int, str] = MinPriorityQueue()
        queue.insert(1, "a")
        queue.insert(1, "b")
        self.assertEqual([entry.value for entry in queue], ["a", "b"])
        self.assertEqual(queue.remove_min().value, "a")  # type: ignore

    def test_sift_down_ties_stay_in_place(self):
        queue = MinPriorityQueue.from_iterable(
            [(0, "root"), (1, "left"), (1, "right")]
        )
        queue.remove_min()
        self.assertEqual([entry.value for entry in queue], ["right", "left"])

    def test_sift_down_prefers_left_child_on_ties(self):
        queue = MinPriorityQueue.from_iterable(
            [(0, "a"), (2, "b"), (2, "c"), (5, "d")]
        )
        queue.remove_min()
        self.assertEqual([entry.value for entry in queue], ["b", "d", "c"])

    def test_comparator(self):
        queue: MinPriorityQueue[str, int] = MinPriorityQueue(
            lambda first, second: len(first) - len(second)
        )
        for word in ["ccc", "a", "bbbb", "dd"]:
            queue.insert(word, len(word))
        self.assertEqual(_keys(queue.drain()), ["a", "dd", "ccc", "bbbb"])

    def test_reverse_comparator(self):
        queue = MinPriorityQueue.from_keys_values(
            [4, 893, 100, 57, 12, 6], range(6), reverse_order
        )
        self.assertIs(queue.comparator, reverse_order)
        self.assertEqual(_keys(queue.drain()), [893, 100, 57, 12, 6, 4])

    def test_default_comparator(self):
        self.assertIs(MinPriorityQueue().comparator, natural_order)

    def test_invalid_none_key(self):
        queue: MinPriorityQueue[int, str] = MinPriorityQueue()
        with self.assertRaises(InvalidKeyError) as context:
            queue.insert(None, "none")  # type: ignore
        self.assertIsNone(context.exception.key)
        self.assertTrue(queue.is_empty())

    def test_invalid_key_type(self):
        queue: MinPriorityQueue[int, str] = MinPriorityQueue()
        queue.insert(2, "two")
        queue.insert(1, "one")
        before = list(queue)
        with self.assertRaises(InvalidKeyError):
            queue.insert("three", "three")  # type: ignore
        self.assertEqual(list(queue), before)
        self.assertEqual(queue.size(), 2)

    def test_invalid_key_not_orderable(self):
        queue: MinPriorityQueue[object, str] = MinPriorityQueue()
        with self.assertRaises(InvalidKeyError):
            queue.insert(object(), "object")
        self.assertTrue(queue.is_empty())

    def test_invalid_key_is_value_error(self):
        self.assertTrue(issubclass(InvalidKeyError, KeyHeapError))
        self.assertTrue(issubclass(InvalidKeyError, ValueError))

    def test_invalid_key_from_keys_values(self):
        with self.assertRaises(InvalidKeyError):
            MinPriorityQueue.from_keys_values([1, "a", 2], ["x", "y", "z"])
        with self.assertRaises(InvalidKeyError):
            MinPriorityQueue.from_keys_values([1, None], ["x", "y"])

    def test_invalid_key_incomparable_with_parent(self):
        queue: MinPriorityQueue[tuple, str] = MinPriorityQueue()
        queue.insert((0, 0), "root")
        queue.insert((1, "a"), "left")
        queue.insert((5, 0), "right")
        before = list(queue)
        with self.assertRaises(InvalidKeyError) as context:
            queue.insert((1, 2), "new")
        self.assertEqual(context.exception.key, (1, 2))
        self.assertEqual(list(queue), before)
        self.assertEqual(queue.size(), 3)

    def test_invalid_key_undoes_swaps(self):
        queue = MinPriorityQueue.from_iterable(
            [((0, 0), "a"), ((1, "a"), "b"), ((5, 0), "c"), ((2, 0), "d"),
             ((3, 0), "e"), ((6, 0), "f"), ((7, 0), "g")]
        )
        before = list(queue)
        with self.assertRaises(InvalidKeyError):
            queue.insert((1, 1), "new")
        self.assertEqual(list(queue), before)
        self.assertTrue(queue.is_heap())

    def test_invalid_key_incomparable_in_heapify(self):
        with self.assertRaises(InvalidKeyError) as context:
            MinPriorityQueue.from_keys_values([(0, 0), (1, "a"), (1, 2)],
                                              "xyz")
        self.assertEqual(context.exception.key, (1, 2))

    def test_comparator_type_error_is_invalid_key(self):
        def compare(first: int, second: int) -> int:
            if first < 0 or second < 0:
                raise TypeError("Negative keys are not allowed.")
            return first - second

        queue: MinPriorityQueue[int, str] = MinPriorityQueue(compare)
        queue.insert(1, "one")
        with self.assertRaises(InvalidKeyError):
            queue.insert(-1, "minus one")
        self.assertEqual(queue.size(), 1)

    def test_comparator_fault_propagates(self):
        def compare(first: int, second: int) -> int:
            raise ZeroDivisionError("Comparator fault.")

        queue: MinPriorityQueue[int, str] = MinPriorityQueue(compare)
        with self.assertRaises(ZeroDivisionError):
            queue.insert(1, "one")

    def test_copy(self):
        queue = MinPriorityQueue.from_keys_values([3, 1, 2], "abc",
                                                  reverse_order)
        copy = queue.copy()
        self.assertEqual(list(copy), list(queue))
        self.assertIs(copy.comparator, reverse_order)
        copy.remove_min()
        self.assertEqual(queue.size(), 3)
        self.assertEqual(copy.size(), 2)

    def test_clear(self):
        queue = MinPriorityQueue.from_keys_values([3, 1, 2], "abc")
        queue.clear()
        self.assertTrue(queue.is_empty())
        self.assertIsNone(queue.peek_min())

    def test_str_repr(self):
        queue: MinPriorityQueue[int, str] = MinPriorityQueue()
        queue.insert(2, "b")
        queue.insert(1, "a")
        self.assertEqual(str(queue), "Min Priority Queue with 2 entries")
        self.assertEqual(repr(queue), "MinPriorityQueue((1, 'a'), (2, 'b'))")

    def test_iter_ordered(self):
        keys = [9, 3, 7, 3, 1, 8, 2]
        queue = MinPriorityQueue.from_keys_values(keys, keys)
        self.assertEqual(_keys(queue.iter_ordered()), sorted(keys))
        self.assertEqual(queue.size(), len(keys))
        self.assertEqual(list(MinPriorityQueue().iter_ordered()), [])

    def test_iter_at_most(self):
        keys = [9, 3, 7, 3, 1, 8, 2, 5]
        queue = MinPriorityQueue.from_keys_values(keys, keys)
        for bound in [0, 1, 3, 6, 9, 10]:
            self.assertEqual(
                sorted(_keys(queue.iter_at_most(bound))),
                sorted(key for key in keys if key <= bound)
            )
        self.assertEqual(list(MinPriorityQueue().iter_at_most(1)), [])

    def test_iter_preorder(self):
        queue = MinPriorityQueue.from_keys_values([1, 23, 10, 5],
                                                  [0, 36, 888, 99])
        self.assertEqual(
            [(depth, entry.key) for depth, entry in queue.iter_preorder()],
            [(0, 1), (1, 5), (2, 23), (1, 10)]
        )
        self.assertEqual(
            [(depth, entry.key) for depth, entry in queue.iter_preorder(1)],
            [(1, 5), (2, 23)]
        )
        self.assertEqual(list(queue.iter_preorder(4)), [])
        with self.assertRaises(IndexError):
            list(queue.iter_preorder(-1))

    def test_format_preorder(self):
        queue = MinPriorityQueue.from_keys_values([1, 23, 10, 5],
                                                  [0, 36, 888, 99])
        self.assertEqual(queue.format_preorder(), "0\n*99\n**36\n*888")
        self.assertEqual(queue.format_preorder(3), "**36")
        self.assertEqual(MinPriorityQueue().format_preorder(), "")

    def test_debug_logging(self):
        with self.assertLogs("MinPriorityQueue", level="DEBUG") as logs:
            queue: MinPriorityQueue[int, str] = MinPriorityQueue(debug=True)
            queue.insert(1, "one")
            queue.remove_min()
        self.assertEqual(len(logs.output), 3)
        self.assertIn("Inserted entry: key=1", logs.output[1])

    def test_no_logging_without_debug(self):
        with self.assertNoLogs("MinPriorityQueue", level="DEBUG"):
            queue = MinPriorityQueue.from_keys_values([2, 1], "ab")
            queue.insert(3, "c")
            queue.remove_min()

    def test_is_heap(self):
        self.assertTrue(MinPriorityQueue().is_heap())
        queue = MinPriorityQueue.from_keys_values([5, 4, 3, 2, 1], "abcde")
        self.assertTrue(queue.is_heap())


class TestMinPriorityQueueRandomised(unittest.TestCase):
    def test_heap_invariant_and_size(self):
        rng = np.random.default_rng(1234)
        queue: MinPriorityQueue[int, int] = MinPriorityQueue()
        inserted = 0
        removed = 0
        for step in range(500):
            if rng.random() < 0.6:
                queue.insert(int(rng.integers(-50, 50)), step)
                inserted += 1
            elif queue.remove_min() is not None:
                removed += 1
            self.assertTrue(queue.is_heap())
            self.assertEqual(queue.size(), inserted - removed)

    def test_extraction_order(self):
        rng = np.random.default_rng(42)
        keys = rng.integers(0, 100, size=200).tolist()
        queue: MinPriorityQueue[int, int] = MinPriorityQueue()
        for index, key in enumerate(keys):
            queue.insert(key, index)
        self.assertEqual(_keys(queue.drain()), sorted(keys))

    def test_heapify_matches_insertion(self):
        rng = np.random.default_rng(7)
        for size in [0, 1, 2, 3, 10, 31, 32, 100]:
            keys = rng.integers(-20, 20, size=size).tolist()
            values = list(range(size))
            bulk = MinPriorityQueue.from_keys_values(keys, values)
            self.assertTrue(bulk.is_heap())
            single: MinPriorityQueue[int, int] = MinPriorityQueue()
            for key, value in zip(keys, values):
                single.insert(key, value)
            self.assertEqual(_keys(bulk.drain()), _keys(single.drain()))

    def test_reverse_extraction_order(self):
        rng = np.random.default_rng(99)
        keys = rng.random(size=50).tolist()
        queue = MinPriorityQueue.from_keys_values(keys, keys, reverse_order)
        self.assertEqual(_keys(queue.drain()), sorted(keys, reverse=True))
