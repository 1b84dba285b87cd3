from collections.abc import Iterable
from typing import Any

from strata import serialization
from strata.collection import AbstractCollection
from strata.containers.storage import SequenceStorage
from strata.errors import InvalidArgumentError
from strata.stages import values_of
from strata.types import Comparator
from strata.types import IterationSource


class Sequence[T](AbstractCollection[T]):
  """A dense, integer-indexed list of values.

  Only the values of the initial iterable are kept; they are re-indexed
  from 0. Assigning to an index that does not exist yet appends instead of
  leaving a gap, and removing an index shifts later values down.

  Example:
      >>> letters = Sequence({"x": "a", "y": "b"})
      >>> letters[5] = "c"
      >>> letters.to_array()
      ['a', 'b', 'c']
  """

  def __init__(self, iterable: IterationSource = ()) -> None:
    self._storage: SequenceStorage[T] = SequenceStorage()
    self._fill(values_of(iterable))

  def _fill(self, values: Iterable[T]) -> None:
    """Replace the storage contents. Subclasses gate insertions here."""
    self._storage.replace(values)

  def _get_iterable(self) -> list[T]:
    return self._storage.items

  def has(self, index: int) -> bool:
    """Return True if a value exists at `index`.

    Raises:
        InvalidIndexError: If `index` is not an int.
    """
    return self._storage.has(index)

  def get(self, index: int) -> T:
    """Return the value at `index`.

    Raises:
        InvalidIndexError: If `index` is not an int.
        OutOfRangeError: If there is no value at `index`.
    """
    return self._storage.get(index)

  def set(self, index: int | None, value: T) -> None:
    """Overwrite the value at `index`, or append when the index is None or unused."""
    self._storage.set(index, value)

  def remove(self, index: int) -> None:
    """Remove the value at `index`, closing the gap.

    Raises:
        InvalidIndexError: If `index` is not an int.
        OutOfRangeError: If there is no value at `index`.
    """
    self._storage.remove(index)

  def append(self, value: T) -> None:
    self.set(None, value)

  def __contains__(self, index: Any) -> bool:
    return self.has(index)

  def __getitem__(self, index: int) -> T:
    return self.get(index)

  def __setitem__(self, index: int | None, value: T) -> None:
    self.set(index, value)

  def __delitem__(self, index: int) -> None:
    self._storage.remove(index)

  def count(self) -> int:
    return len(self._storage)

  def clear(self) -> None:
    self._storage.clear()

  def sort(self, comparator: Comparator | None = None) -> None:
    """Sort the values in place.

    Args:
        comparator: A three-way comparator ``(a, b) -> int``. Natural
                    ascending order is used when omitted.
    """
    self._storage.sort(comparator)

  def to_array(self) -> list[T]:
    return list(self._storage.items)

  def json_value(self) -> list[T]:
    return self.to_array()

  def _payload(self) -> Any:
    return self.to_array()

  def _restore(self, payload: Any) -> None:
    if not isinstance(payload, list):
      raise InvalidArgumentError(f"Expected a list payload, got {type(payload).__name__}")
    self._fill(payload)

  def serialize(self) -> str:
    """Encode the values as text."""
    return serialization.dumps(type(self).__name__, self._payload())

  def deserialize(self, text: str) -> None:
    """Replace the contents with those decoded from `serialize` output.

    Raises:
        InvalidArgumentError: If the text was not produced for this container
                              type or is corrupt.
    """
    self._restore(serialization.loads(type(self).__name__, text))

  def __repr__(self) -> str:
    return f"{type(self).__name__}({self._storage.items!r})"


def create_sequence[T](iterable: IterationSource = ()) -> Sequence[T]:
  """Create a dense sequence from the values of any iteration source."""
  return Sequence(iterable)
