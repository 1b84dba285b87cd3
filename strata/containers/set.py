from collections.abc import Iterable
from typing import Any

from strata.containers.sequence import Sequence
from strata.containers.storage import validate_index
from strata.helpers import index_of


class Set[T](Sequence[T]):
  """An insertion-ordered sequence without duplicates.

  Membership uses strict equality (same type and equal, or the same
  object), so unhashable values are supported and ``1``/``1.0``/``True``
  stay distinct. Every insertion path, including indexed assignment and
  deserialization, goes through the same uniqueness gate: adding a value
  that is already present does nothing.
  """

  def _fill(self, values: Iterable[T]) -> None:
    unique: list[T] = []
    for value in values:
      if index_of(unique, value) < 0:
        unique.append(value)
    self._storage.replace(unique)

  def has(self, item: Any) -> bool:
    """Return True if `item` is in the set."""
    return index_of(self._storage, item) >= 0

  def add(self, item: T) -> None:
    """Append `item` unless it is already present."""
    if not self.has(item):
      self._storage.append(item)

  def remove(self, item: Any) -> None:
    """Remove `item` if present; otherwise do nothing."""
    position = index_of(self._storage, item)
    if position >= 0:
      self._storage.remove(position)

  def set(self, index: int | None, value: T) -> None:
    """Write `value` at `index` (or append), unless it already sits at another index.

    Raises:
        InvalidIndexError: If `index` is neither None nor an int.
    """
    validate_index(index, allow_none=True)
    position = index_of(self._storage, value)
    if position >= 0 and position != index:
      return
    self._storage.set(index, value)

  def append(self, value: T) -> None:
    self.add(value)


def create_set[T](iterable: Iterable[T] = ()) -> Set[T]:
  """Create a set from the distinct values of an iterable, in first-seen order."""
  return Set(iterable)
