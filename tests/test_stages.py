"""Tests for the iteration stages."""

import pytest

from strata import Collection
from strata import InvalidArgumentError
from strata import OutOfRangeError
from strata import Stage
from strata.stages import CallbackFilterStage
from strata.stages import CallbackMapStage
from strata.stages import EntryComposeStage
from strata.stages import EntryDecomposeStage
from strata.stages import FlipStage
from strata.stages import IterableStage
from strata.stages import KeyStage
from strata.stages import RegexFilterStage
from strata.stages import ReplayIterable
from strata.stages import ValueStage
from strata.stages import as_stage
from strata.types import iter_pairs


class CountingStage:
  """A duck-typed stage yielding 0..limit-1, keyed by letters."""

  def __init__(self, limit):
    self.limit = limit
    self.position = 0

  def advance(self):
    self.position += 1

  def valid(self):
    return self.position < self.limit

  def key(self):
    return "abcdefghij"[self.position]

  def value(self):
    return self.position

  def reset(self):
    self.position = 0


class TestStageProtocol:
  """Test the stage protocol and source normalization."""

  def test_duck_typed_class_satisfies_protocol(self):
    """Test that a class defining the five methods counts as a stage."""
    assert issubclass(CountingStage, Stage)
    assert isinstance(CountingStage(2), Stage)

  def test_incomplete_class_does_not_satisfy_protocol(self):
    """Test that missing methods disqualify a class."""

    class NoReset:
      def advance(self): ...
      def valid(self): ...
      def key(self): ...
      def value(self): ...

    assert not issubclass(NoReset, Stage)
    assert not issubclass(list, Stage)

  def test_iter_pairs_walks_duck_typed_stage(self):
    """Test iterating a stage that does not inherit from Stage."""
    assert list(iter_pairs(CountingStage(3))) == [("a", 0), ("b", 1), ("c", 2)]

  def test_as_stage_on_list_and_mapping(self):
    """Test that lists are keyed by position and mappings by their keys."""
    assert list(as_stage(["x", "y"])) == [(0, "x"), (1, "y")]
    assert list(as_stage({"a": 1, "b": 2})) == [("a", 1), ("b", 2)]

  def test_as_stage_returns_stage_unchanged(self):
    """Test that an existing stage is passed through."""
    stage = IterableStage([1])
    assert as_stage(stage) is stage

  def test_as_stage_rejects_non_iterables(self):
    """Test that non-iterable sources raise an invalid-argument error."""
    with pytest.raises(InvalidArgumentError):
      as_stage(42)

  def test_exhausted_stage_raises_on_access(self):
    """Test reading past the end of a root stage."""
    stage = IterableStage([])
    stage.reset()
    assert not stage.valid()
    with pytest.raises(OutOfRangeError):
      stage.value()

  def test_reset_rewinds_upstream(self):
    """Test that resetting a wrapper rewinds the stage it reads from."""
    stage = ValueStage({"a": 1, "b": 2})
    stage.reset()
    stage.advance()
    assert (stage.key(), stage.value()) == (1, 2)
    stage.reset()
    assert (stage.key(), stage.value()) == (0, 1)


class TestProjectionStages:
  """Test stages that reinterpret keys and values."""

  def test_value_stage_renumbers(self):
    """Test that values are re-keyed from 0."""
    assert list(ValueStage({"test": "a", 6: "b", 234: "c"})) == [(0, "a"), (1, "b"), (2, "c")]

  def test_key_stage_exposes_keys(self):
    """Test that keys become values."""
    assert list(KeyStage({"a": 0, "b": 1})) == [(0, "a"), (1, "b")]

  def test_entry_compose_stage(self):
    """Test that each value becomes a (key, value) pair."""
    assert list(EntryComposeStage({"x": 1, 5: 2})) == [(0, ("x", 1)), (1, (5, 2))]

  def test_entry_decompose_inverts_compose(self):
    """Test that decomposing composed entries restores the original pairs."""
    source = {"x": 1, 5: 2}
    assert list(EntryDecomposeStage(EntryComposeStage(source))) == [("x", 1), (5, 2)]

  def test_entry_decompose_accepts_lists(self):
    """Test decomposing two-element lists."""
    assert list(EntryDecomposeStage([["a", 1], ["b", 2]])) == [("a", 1), ("b", 2)]

  def test_entry_decompose_rejects_non_pairs(self):
    """Test that values which are not pairs raise an invalid-argument error."""
    with pytest.raises(InvalidArgumentError):
      list(EntryDecomposeStage([("a", 1, 2)]))
    with pytest.raises(InvalidArgumentError):
      list(EntryDecomposeStage(["ab"]))
    with pytest.raises(InvalidArgumentError):
      list(EntryDecomposeStage([{"a": 1, "b": 2}]))
    with pytest.raises(InvalidArgumentError):
      list(EntryDecomposeStage([{1, 2}]))

  def test_flip_stage_swaps(self):
    """Test that keys and values trade places."""
    assert list(FlipStage(["a", "b"])) == [("a", 0), ("b", 1)]

  def test_flip_stage_allows_unhashable_keys_while_lazy(self):
    """Test that flipping non-scalar values only matters on materialization."""
    assert list(FlipStage([[1, 2]])) == [([1, 2], 0)]


class TestCallbackStages:
  """Test stages driven by callables and patterns."""

  def test_map_stage_passes_value_and_key(self):
    """Test that the mapper sees the value and the key."""
    stage = CallbackMapStage([6, 5, 4], lambda value, key: value * key)
    assert list(stage) == [(0, 0), (1, 5), (2, 8)]

  def test_map_stage_calls_mapper_once_per_position(self):
    """Test that repeated value reads reuse the mapped result."""
    calls = []

    def mapper(value):
      calls.append(value)
      return value * 2

    stage = CallbackMapStage([1, 2], mapper)
    stage.reset()
    assert stage.value() == 2
    assert stage.value() == 2
    assert calls == [1]

  def test_filter_stage_keeps_original_keys(self):
    """Test that filtered positions leave gaps in the keys."""
    stage = CallbackFilterStage([1, 2, 3, 4], lambda value: value % 2 == 0)
    assert list(stage) == [(1, 2), (3, 4)]

  def test_filter_stage_skips_leading_rejections(self):
    """Test that reset lands on the first accepted position."""
    stage = CallbackFilterStage([1, 1, 5], lambda value, key: key == 2)
    stage.reset()
    assert (stage.key(), stage.value()) == (2, 5)

  def test_filter_stage_rejecting_everything(self):
    """Test a filter that keeps nothing."""
    assert list(CallbackFilterStage([1, 2, 3], lambda value: False)) == []

  def test_regex_filter_stage(self):
    """Test filtering by a regular expression."""
    letters = [chr(code) for code in range(ord("a"), ord("z") + 1)]
    stage = RegexFilterStage(letters, r"^[a-c]$")
    assert list(stage) == [(0, "a"), (1, "b"), (2, "c")]

  def test_regex_filter_stage_renders_values_as_text(self):
    """Test that non-string values are matched on their str() form."""
    assert list(RegexFilterStage([10, 21, 30], "0$")) == [(0, 10), (2, 30)]


class TestReplayIterable:
  """Test re-iteration of one-shot iterators."""

  def test_replays_consumed_items(self):
    """Test that a generator can be walked twice."""
    replay = ReplayIterable(iter([1, 2, 3]))
    assert list(replay) == [1, 2, 3]
    assert list(replay) == [1, 2, 3]

  def test_pulls_lazily(self):
    """Test that items are only pulled as far as a traversal goes."""
    pulled = []

    def generate():
      for item in range(5):
        pulled.append(item)
        yield item

    replay = ReplayIterable(generate())
    iterator = iter(replay)
    next(iterator)
    next(iterator)
    assert pulled == [0, 1]

  def test_collection_over_generator_reevaluates(self):
    """Test that a collection over a generator supports repeated terminal operations."""
    collection = Collection(value * 2 for value in range(3))
    assert collection.to_array() == [0, 2, 4]
    assert collection.join() == "0,2,4"
