"""Tests for the Queue container."""

import pytest

from strata import Direction
from strata import EmptyContainerError
from strata import InvalidArgumentError
from strata import Queue
from strata import create_queue


def drain(queue):
  return [queue.dequeue() for _ in range(queue.count())]


class TestQueueDirections:
  """Test the dequeue order of every direction."""

  @pytest.mark.parametrize(
    "direction,expected",
    [
      (Direction.LIFO, ["d", "c", "b", "a"]),
      (Direction.FIFO, ["a", "b", "c", "d"]),
      (Direction.LILO, ["a", "b", "c", "d"]),
      (Direction.FILO, ["d", "c", "b", "a"]),
    ],
  )
  def test_dequeue_order(self, direction, expected):
    """Test enqueuing a, b, c, d and draining the queue."""
    queue = Queue(direction=direction)
    for item in "abcd":
      queue.enqueue(item)
    assert drain(queue) == expected

  def test_default_direction_is_lifo(self):
    """Test the direction of a queue created without one."""
    queue = create_queue()
    assert queue.direction is Direction.LIFO

  def test_prepending_directions_store_in_reverse(self):
    """Test where enqueued items land in storage."""
    queue = Queue(direction="filo")
    for item in "abc":
      queue.enqueue(item)
    assert queue.to_array() == ["c", "b", "a"]

  def test_direction_names_are_case_insensitive(self):
    """Test parsing directions from text."""
    assert Queue(direction="FIFO").direction is Direction.FIFO
    assert create_queue([1], "lilo").direction is Direction.LILO

  @pytest.mark.parametrize("direction", ["sideways", "", 3, None])
  def test_unknown_direction_raises(self, direction):
    """Test that only the four known directions are accepted."""
    with pytest.raises(InvalidArgumentError):
      Queue(direction=direction)


class TestQueueContents:
  """Test the rest of the queue surface."""

  def test_initial_items_keep_storage_order(self):
    """Test that initial items are stored as given."""
    queue = Queue(["a", "b"], Direction.FIFO)
    queue.enqueue("c")
    assert drain(queue) == ["a", "b", "c"]

  def test_dequeue_empty_raises(self):
    """Test dequeuing from an empty queue."""
    with pytest.raises(EmptyContainerError, match="dequeue"):
      Queue().dequeue()

  def test_repr_includes_direction(self):
    """Test the debug rendering."""
    assert repr(Queue([1], "fifo")) == "Queue([1], direction='fifo')"

  def test_serialize_keeps_direction(self):
    """Test that a round trip restores both the items and the direction."""
    queue = Queue(["a", "b"], Direction.FILO)
    restored = Queue()
    restored.deserialize(queue.serialize())
    assert restored.direction is Direction.FILO
    assert restored.to_array() == ["a", "b"]
    assert restored.dequeue() == "a"
