"""Core collection implementation: lazy chaining and terminal operations."""

from abc import abstractmethod
from collections.abc import Iterable
from collections.abc import Iterator
import inspect
import json
import logging
from typing import Any

from strata import serialization
from strata.errors import InvalidArgumentError
from strata.errors import InvalidStageError
from strata.errors import OutOfRangeError
from strata.errors import UnhashableKeyError
from strata.helpers import adapt_callback
from strata.helpers import sort_key
from strata.stages import CallbackFilterStage
from strata.stages import CallbackMapStage
from strata.stages import EntryComposeStage
from strata.stages import EntryDecomposeStage
from strata.stages import FlipStage
from strata.stages import KeyStage
from strata.stages import ReplayIterable
from strata.stages import StagePlan
from strata.stages import ValueStage
from strata.stages import as_stage
from strata.types import Comparator
from strata.types import Handler
from strata.types import IterationSource
from strata.types import Mapper
from strata.types import Predicate
from strata.types import Reducer
from strata.types import Stage
from strata.types import StageSource
from strata.types import iter_pairs

logger = logging.getLogger(__name__)

DEFAULT_DELIMITER = ","


def materialize(pairs: Iterable[tuple[Any, Any]]) -> list[Any] | dict[Any, Any]:
  """Collapse (key, value) pairs into a concrete structure.

  Later pairs overwrite earlier pairs with the same key. The result is a
  list when the keys are exactly ``0..n-1`` in order, otherwise a dict.

  Raises:
      InvalidArgumentError: If a key is unhashable (this error is also a
                            `TypeError`).
  """
  result: dict[Any, Any] = {}
  for key, value in pairs:
    try:
      result[key] = value
    except TypeError as e:
      raise UnhashableKeyError(f"Cannot materialize an unhashable key of type {type(key).__name__}") from e

  if all(type(key) is int and key == position for position, key in enumerate(result)):
    return list(result.values())
  return result


def _has_key(contents: list[Any] | dict[Any, Any], key: Any) -> bool:
  if isinstance(contents, list):
    return type(key) is int and 0 <= key < len(contents)
  try:
    return key in contents
  except TypeError:
    return False


class AbstractCollection[V](StageSource):
  """Shared chaining and terminal operations for every collection type.

  Subclasses only provide `_get_iterable`, the current iteration source.
  Chaining methods (`map`, `filter`, `flip`, `get_keys`, ...) never touch
  the receiver: they return a new `Collection` that records which stage to
  open over the receiver. Nothing is evaluated until a terminal operation
  (`to_array`, `join`, `reduce`, `for_each`, iteration, ...) walks the
  chain, and every terminal operation walks it again from the source.

  Example:
      >>> numbers = Collection([1, 2, 3, 4])
      >>> numbers.map(lambda x: x * 10).filter(lambda x: x > 15).to_array()
      {1: 20, 2: 30, 3: 40}
      >>> numbers.filter(lambda x: x % 2 == 0).get_values().to_array()
      [2, 4]
  """

  @abstractmethod
  def _get_iterable(self) -> IterationSource:
    """Return the source the next traversal should read from."""
    raise NotImplementedError

  def get_iterator(self) -> Stage:
    """Open a fresh cursor over the current contents."""
    return as_stage(self._get_iterable())

  def items(self) -> Iterator[tuple[Any, V]]:
    """Iterate over (key, value) pairs."""
    return iter_pairs(self.get_iterator())

  def __iter__(self) -> Iterator[V]:
    for _, value in self.items():
      yield value

  def chain(self, kind: type[Stage], *args: Any, **kwargs: Any) -> "Collection[Any]":
    """Wrap this collection in another stage.

    This is the generic escape hatch behind every chaining method. The stage
    class is instantiated lazily, once per traversal, with a fresh cursor
    over this collection as its first argument followed by `args`.

    Args:
        kind: A class implementing the stage protocol.
        *args: Extra positional arguments for the stage.
        **kwargs: Extra keyword arguments for the stage.

    Returns:
        A new collection reading through the stage.

    Raises:
        InvalidStageError: If `kind` is not a concrete stage class.

    Example:
        >>> Collection(["ant", "bee", "cat"]).chain(RegexFilterStage, "^[ab]").to_array()
        ['ant', 'bee']
    """
    if not (isinstance(kind, type) and issubclass(kind, Stage)):
      raise InvalidStageError(f"{kind!r} is not a class implementing the stage protocol")
    if inspect.isabstract(kind):
      raise InvalidStageError(f"{kind.__name__} is abstract and cannot be chained")
    return Collection(StagePlan(kind, self, args, kwargs))

  def get_keys(self) -> "Collection[Any]":
    """Return a collection of the keys, indexed from 0."""
    return self.chain(KeyStage)

  def get_values(self) -> "Collection[V]":
    """Return a collection of the values, indexed from 0."""
    return self.chain(ValueStage)

  def get_entries(self) -> "Collection[tuple[Any, V]]":
    """Return a collection of ``(key, value)`` tuples, indexed from 0."""
    return self.chain(EntryComposeStage)

  def map(self, mapper: Mapper) -> "Collection[Any]":
    """Transform values lazily with ``mapper(value, key)``, keeping keys.

    Args:
        mapper: A callable taking the value and, optionally, the key.

    Returns:
        A new collection with the mapping applied.
    """
    return self.chain(CallbackMapStage, mapper)

  def filter(self, predicate: Predicate) -> "Collection[V]":
    """Keep positions where ``predicate(value, key)`` is truthy.

    Keys are not renumbered; chain `get_values()` for a dense result.

    Args:
        predicate: A callable taking the value and, optionally, the key.

    Returns:
        A new collection with the filter applied.
    """
    return self.chain(CallbackFilterStage, predicate)

  def flip(self) -> "Collection[Any]":
    """Swap keys and values."""
    return self.chain(FlipStage)

  def for_each(self, handler: Handler) -> None:
    """Call ``handler(value, key, stage)`` for each position (terminal operation).

    Args:
        handler: A callable taking the value and, optionally, the key and
                 the cursor being walked.
    """
    handler = adapt_callback(handler, 3)
    stage = self.get_iterator()
    for key, value in iter_pairs(stage):
      handler(value, key, stage)

  def reduce[U](self, reducer: Reducer, initial: U | None = None) -> U | None:
    """Fold the collection into a single value (terminal operation).

    The reducer is called as ``reducer(carry, value, key, stage)``, truncated
    to the arguments it accepts. An empty collection returns `initial`
    without calling the reducer.

    Args:
        reducer: The folding function.
        initial: The starting carry.

    Returns:
        The final carry.
    """
    reducer = adapt_callback(reducer, 4, min_args=2)
    carry = initial
    stage = self.get_iterator()
    for key, value in iter_pairs(stage):
      carry = reducer(carry, value, key, stage)
    return carry

  def join(self, delimiter: str = DEFAULT_DELIMITER, key_delimiter: str | None = None) -> str:
    """Render the values as text separated by `delimiter` (terminal operation).

    Args:
        delimiter: Placed between elements.
        key_delimiter: When given, each element is rendered as
                       ``f"{key}{key_delimiter}{value}"``.

    Returns:
        The joined text.
    """
    if key_delimiter is None:
      return delimiter.join(str(value) for _, value in self.items())
    return delimiter.join(f"{key}{key_delimiter}{value}" for key, value in self.items())

  def to_array(self) -> list[Any] | dict[Any, Any]:
    """Materialize the collection (terminal operation).

    Returns:
        A list when the keys are exactly ``0..n-1`` in order, otherwise an
        insertion-ordered dict.
    """
    return materialize(self.items())

  def to_list(self) -> list[V]:
    """Materialize the values into a list, discarding keys."""
    return list(self)

  def to_dict(self) -> dict[Any, V]:
    """Materialize into a dict, whatever the keys look like."""
    result = self.to_array()
    return dict(enumerate(result)) if isinstance(result, list) else result

  def count(self) -> int:
    """Count the positions in the collection."""
    return sum(1 for _ in self.items())

  def __len__(self) -> int:
    return self.count()

  def json_value(self) -> Any:
    """Return a structure suitable for `json.dumps`."""
    return self.to_array()

  def to_json(self, **kwargs: Any) -> str:
    """Render `json_value()` as JSON text; keyword arguments go to `json.dumps`."""
    return json.dumps(self.json_value(), **kwargs)

  def __str__(self) -> str:
    return self.join()


class Collection[V](AbstractCollection[V]):
  """A collection over any iterable, evaluated lazily.

  The wrapped source is read, never written: the first write (`set`, item
  assignment, deletion, `sort`, `deserialize`) copies the current contents
  into storage owned by the collection, and from then on the collection
  reads from that copy.
  """

  def __init__(self, iterable: IterationSource = ()) -> None:
    """Initialize a collection over an iteration source.

    Args:
        iterable: A list, mapping, any other iterable, another collection or
                  a stage. One-shot iterators and live stages are cached as
                  they are read so the collection can be traversed more than
                  once, each traversal with its own cursor.
    """
    if isinstance(iterable, Stage):
      iterable = StagePlan(EntryDecomposeStage, ReplayIterable(iter_pairs(iterable)))
    elif isinstance(iterable, Iterator) and not isinstance(iterable, StageSource):
      iterable = ReplayIterable(iterable)
    self._iterable: Any = iterable
    self._owned = False

  def _get_iterable(self) -> IterationSource:
    return self._iterable

  def _storage(self) -> list[Any] | dict[Any, Any]:
    """Return the owned storage, materializing the source on first use."""
    if not self._owned:
      self._iterable = self.to_array()
      self._owned = True
      logger.debug("Materialized %s into owned storage (%d entries)", type(self).__name__, len(self._iterable))
    return self._iterable

  def _snapshot(self) -> list[Any] | dict[Any, Any]:
    """Return direct-lookup contents without taking ownership."""
    if self._owned or isinstance(self._iterable, (list, dict)):
      return self._iterable
    return self.to_array()

  def has(self, key: Any) -> bool:
    """Return True if `key` exists."""
    return _has_key(self._snapshot(), key)

  def get(self, key: Any) -> V:
    """Return the value stored under `key`.

    Raises:
        OutOfRangeError: If the key does not exist.
    """
    contents = self._snapshot()
    if not _has_key(contents, key):
      raise OutOfRangeError(f"The key {key!r} doesn't exist in this collection")
    return contents[key]

  def set(self, key: Any, value: V) -> None:
    """Store `value` under `key`; a key of None appends with the next integer key."""
    storage = self._storage()
    if isinstance(storage, list):
      if key is None or (type(key) is int and key == len(storage)):
        storage.append(value)
        return
      if type(key) is int and 0 <= key < len(storage):
        storage[key] = value
        return
      storage = self._iterable = dict(enumerate(storage))

    if key is None:
      int_keys = [k for k in storage if type(k) is int]
      key = max(int_keys) + 1 if int_keys else 0
    storage[key] = value

  def remove(self, key: Any) -> None:
    """Delete `key` if it exists. Remaining keys are left as they are."""
    storage = self._storage()
    if not self.has(key):
      return
    if isinstance(storage, list):
      if key == len(storage) - 1:
        storage.pop()
        return
      storage = self._iterable = dict(enumerate(storage))
    del storage[key]

  def __contains__(self, key: Any) -> bool:
    return self.has(key)

  def __getitem__(self, key: Any) -> V:
    return self.get(key)

  def __setitem__(self, key: Any, value: V) -> None:
    self.set(key, value)

  def __delitem__(self, key: Any) -> None:
    self.remove(key)

  def count(self) -> int:
    if self._owned or isinstance(self._iterable, (list, dict)):
      return len(self._iterable)
    return super().count()

  def sort(self, comparator: Comparator | None = None) -> None:
    """Sort the values in place and re-index them from 0.

    Args:
        comparator: A three-way comparator ``(a, b) -> int``. Natural
                    ascending order is used when omitted.
    """
    storage = self._storage()
    values = storage if isinstance(storage, list) else list(storage.values())
    self._iterable = sorted(values, key=sort_key(comparator))

  def serialize(self) -> str:
    """Encode the current contents as text."""
    return serialization.dumps(type(self).__name__, self.to_array())

  def deserialize(self, text: str) -> None:
    """Replace the contents with those decoded from `serialize` output.

    Raises:
        InvalidArgumentError: If the text cannot be decoded into a collection.
    """
    payload = serialization.loads(type(self).__name__, text)
    if not isinstance(payload, (list, dict)):
      raise InvalidArgumentError(f"Expected a list or dict payload, got {type(payload).__name__}")
    self._iterable = payload
    self._owned = True


def create_collection[T](iterable: IterationSource = ()) -> Collection[T]:
  """Create a lazy collection over any iteration source."""
  return Collection(iterable)
