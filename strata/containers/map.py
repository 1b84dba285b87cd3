from collections.abc import Callable
from collections.abc import Iterable
from collections.abc import Mapping
from typing import Any

from strata import serialization
from strata.collection import DEFAULT_DELIMITER
from strata.collection import AbstractCollection
from strata.collection import Collection
from strata.errors import InvalidArgumentError
from strata.errors import KeyNotFoundError
from strata.helpers import index_of
from strata.helpers import sort_key
from strata.types import Comparator


def _is_pair(entry: Any) -> bool:
  return isinstance(entry, (tuple, list)) and len(entry) == 2


class Map[K, V](AbstractCollection[tuple[K, V]]):
  """An insertion-ordered key/value store that accepts any value as a key.

  Keys are looked up by strict equality with a linear search rather than by
  hashing, so lists, dicts and arbitrary objects all work as keys. Keys and
  values live in two parallel lists; overwriting an existing key keeps its
  position.

  Iterating a map yields ``(key, value)`` entries keyed by position.

  Example:
      >>> scores = Map([(["ann"], 3), (["bob"], 5)])
      >>> scores[["ann"]] = 4
      >>> scores.to_array()
      [(['ann'], 4), (['bob'], 5)]
  """

  def __init__(self, entries: Iterable[tuple[K, V]] | Mapping[K, V] = ()) -> None:
    """Initialize a map from ``(key, value)`` pairs or from a mapping.

    Raises:
        InvalidArgumentError: If an entry is not a 2-element tuple or list.
    """
    if isinstance(entries, Mapping):
      entries = entries.items()

    pairs = list(entries)
    for entry in pairs:
      if not _is_pair(entry):
        raise InvalidArgumentError(f"Map entries need to be (key, value) pairs, got {entry!r}")

    self._keys: list[K] = []
    self._values: list[V] = []
    for key, value in pairs:
      self.set(key, value)

  def _get_iterable(self) -> list[tuple[K, V]]:
    return list(zip(self._keys, self._values, strict=True))

  def get_keys(self) -> Collection[K]:
    """Return a snapshot of the keys, indexed from 0."""
    return Collection(list(self._keys))

  def get_values(self) -> Collection[V]:
    """Return a snapshot of the values, indexed from 0."""
    return Collection(list(self._values))

  def get_entries(self) -> Collection[tuple[K, V]]:
    """Return a snapshot of the ``(key, value)`` entries, indexed from 0."""
    return Collection(self._get_iterable())

  def has(self, key: Any) -> bool:
    return index_of(self._keys, key) >= 0

  def get(self, key: Any) -> V:
    """Return the value stored under `key`.

    Raises:
        KeyNotFoundError: If the key is not in the map.
    """
    position = index_of(self._keys, key)
    if position < 0:
      raise KeyNotFoundError(f"The key {key!r} doesn't exist in this map")
    return self._values[position]

  def set(self, key: K, value: V) -> None:
    """Store `value` under `key`, in place if the key exists, else at the end."""
    position = index_of(self._keys, key)
    if position < 0:
      self._keys.append(key)
      self._values.append(value)
      return
    self._values[position] = value

  def remove(self, key: Any) -> None:
    """Remove `key` and its value; a missing key is ignored."""
    position = index_of(self._keys, key)
    if position < 0:
      return
    del self._keys[position]
    del self._values[position]

  def __contains__(self, key: Any) -> bool:
    return self.has(key)

  def __getitem__(self, key: Any) -> V:
    return self.get(key)

  def __setitem__(self, key: K, value: V) -> None:
    self.set(key, value)

  def __delitem__(self, key: Any) -> None:
    self.remove(key)

  def count(self) -> int:
    return len(self._keys)

  def clear(self) -> None:
    self._keys.clear()
    self._values.clear()

  def sort(self, comparator: Comparator | None = None) -> None:
    """Reorder the entries by value; keys move with their values.

    Args:
        comparator: A three-way comparator ``(a, b) -> int`` applied to the
                    values. Natural ascending order is used when omitted.
    """
    order = sorted(zip(self._values, self._keys, strict=True), key=_entry_sort_key(comparator))
    self._values = [value for value, _ in order]
    self._keys = [key for _, key in order]

  def join(self, delimiter: str = DEFAULT_DELIMITER, key_delimiter: str | None = None) -> str:
    """Join the values, or ``key{key_delimiter}value`` renderings of the entries."""
    if key_delimiter is None:
      return delimiter.join(str(value) for value in self._values)
    entries = zip(self._keys, self._values, strict=True)
    return delimiter.join(f"{key}{key_delimiter}{value}" for key, value in entries)

  def to_array(self) -> list[tuple[K, V]]:
    """Return the entries as ``(key, value)`` tuples, whatever pair type they were given as.

    `json_value` renders the same entries as two-element lists.
    """
    return self._get_iterable()

  def json_value(self) -> list[list[Any]]:
    return [[key, value] for key, value in zip(self._keys, self._values, strict=True)]

  def serialize(self) -> str:
    """Encode the keys and values as text."""
    return serialization.dumps(type(self).__name__, (list(self._keys), list(self._values)))

  def deserialize(self, text: str) -> None:
    """Replace the contents with those decoded from `serialize` output.

    Raises:
        InvalidArgumentError: If the text was not produced by a map or its
                              key and value lists do not line up.
    """
    payload = serialization.loads(type(self).__name__, text)
    if not _is_pair(payload) or not all(isinstance(part, list) for part in payload):
      raise InvalidArgumentError("Expected a map payload of parallel key and value lists")
    keys, values = payload
    if len(keys) != len(values):
      raise InvalidArgumentError("Map payload has mismatched key and value counts")
    self._keys, self._values = keys, values

  def __repr__(self) -> str:
    return f"{type(self).__name__}({self._get_iterable()!r})"


def _entry_sort_key(comparator: Comparator | None) -> Callable[[tuple[Any, Any]], Any]:
  value_key = sort_key(comparator)
  if value_key is None:
    return lambda entry: entry[0]
  return lambda entry: value_key(entry[0])


def create_map[K, V](entries: Iterable[tuple[K, V]] | Mapping[K, V] = ()) -> Map[K, V]:
  """Create a map from ``(key, value)`` pairs or a mapping."""
  return Map(entries)
