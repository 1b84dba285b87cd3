"""Tests for the Sequence container."""

import pytest

from strata import Collection
from strata import InvalidIndexError
from strata import OutOfRangeError
from strata import Sequence
from strata import create_sequence


class TestSequence:
  """Test dense, integer-indexed storage."""

  def test_values_are_reindexed(self):
    """Test that only the values of the source are kept."""
    sequence = Sequence({"x": "a", "y": "b"})
    assert sequence.to_array() == ["a", "b"]

  def test_accepts_collections_and_generators(self):
    """Test building from a lazy chain and from a generator."""
    chained = Collection([1, 2, 3]).filter(lambda value: value != 2)
    assert Sequence(chained).to_array() == [1, 3]
    assert create_sequence(value for value in "ab").to_array() == ["a", "b"]

  def test_get_and_set(self):
    """Test indexed reads and writes."""
    sequence = Sequence(["a", "b"])
    sequence[0] = "z"
    assert sequence[0] == "z"
    assert sequence.get(1) == "b"

  def test_set_past_the_end_appends(self):
    """Test that writing to an unused index never creates a gap."""
    sequence = Sequence(["a"])
    sequence[10] = "b"
    sequence.set(None, "c")
    sequence.append("d")
    assert sequence.to_array() == ["a", "b", "c", "d"]
    assert sequence.has(3)
    assert not sequence.has(4)

  def test_remove_shifts_later_values(self):
    """Test that indices stay contiguous after a removal."""
    sequence = Sequence(["a", "b", "c"])
    sequence.remove(0)
    assert sequence.to_array() == ["b", "c"]
    del sequence[1]
    assert sequence.to_array() == ["b"]

  def test_missing_index_raises(self):
    """Test reading and removing absent indices."""
    sequence = Sequence(["a"])
    with pytest.raises(OutOfRangeError):
      sequence.get(1)
    with pytest.raises(OutOfRangeError):
      sequence.remove(-1)
    with pytest.raises(IndexError):
      sequence[5]

  @pytest.mark.parametrize("index", ["0", 1.0, True, [0]])
  def test_non_integer_index_raises(self, index):
    """Test that only real integers are accepted as indices."""
    sequence = Sequence(["a", "b"])
    with pytest.raises(InvalidIndexError):
      sequence.get(index)
    with pytest.raises(InvalidIndexError):
      sequence.set(index, "x")
    with pytest.raises(TypeError):
      sequence.has(index)

  def test_contains_checks_indices(self):
    """Test that `in` looks at indices, not values."""
    sequence = Sequence(["a", "b"])
    assert 1 in sequence
    assert 2 not in sequence

  def test_sort(self):
    """Test sorting in place."""
    sequence = Sequence([3, 1, 2])
    sequence.sort()
    assert sequence.to_array() == [1, 2, 3]
    sequence.sort(lambda a, b: b - a)
    assert sequence.to_array() == [3, 2, 1]

  def test_count_and_clear(self):
    """Test size reporting."""
    sequence = Sequence("abc")
    assert sequence.count() == 3
    assert len(sequence) == 3
    sequence.clear()
    assert sequence.count() == 0
    assert sequence.to_array() == []

  def test_chaining_reads_live_storage(self):
    """Test that a chain built before a mutation sees the mutation."""
    sequence = Sequence([1, 2])
    doubled = sequence.map(lambda value: value * 2)
    sequence.append(3)
    assert doubled.to_array() == [2, 4, 6]
    assert sequence.filter(lambda value: value > 1).to_array() == {1: 2, 2: 3}

  def test_to_array_is_a_copy(self):
    """Test that mutating the materialized list leaves the sequence alone."""
    sequence = Sequence([1])
    sequence.to_array().append(2)
    assert sequence.to_array() == [1]

  def test_rendering(self):
    """Test the text and JSON renderings."""
    sequence = Sequence(["a", "b"])
    assert str(sequence) == "a,b"
    assert sequence.to_json() == '["a", "b"]'
    assert repr(sequence) == "Sequence(['a', 'b'])"
