"""Dense, integer-indexed storage shared by the sequential containers."""

from collections.abc import Iterable
from collections.abc import Iterator
from typing import Any

from strata.errors import EmptyContainerError
from strata.errors import InvalidIndexError
from strata.errors import OutOfRangeError
from strata.helpers import sort_key
from strata.types import Comparator


def validate_index(index: Any, *, allow_none: bool = False) -> None:
  """Reject indices that are not integers.

  Args:
      index: The index to check.
      allow_none: Whether None (meaning "append") is acceptable.

  Raises:
      InvalidIndexError: If `index` is not an int (bools are rejected too).
  """
  if index is None and allow_none:
    return
  if not isinstance(index, int) or isinstance(index, bool):
    raise InvalidIndexError(index)


class SequenceStorage[T]:
  """An ordered list of values indexed ``0..n-1`` with no gaps.

  Insertions at unknown indices append and removals close the gap, so the
  indices stay contiguous after every mutation.
  """

  def __init__(self, values: Iterable[T] = ()) -> None:
    self._items: list[T] = list(values)

  @property
  def items(self) -> list[T]:
    """The live backing list. Callers must not mutate it."""
    return self._items

  def has(self, index: int) -> bool:
    validate_index(index)
    return 0 <= index < len(self._items)

  def get(self, index: int) -> T:
    """Return the value at `index`.

    Raises:
        InvalidIndexError: If `index` is not an int.
        OutOfRangeError: If there is no value at `index`.
    """
    if not self.has(index):
      raise OutOfRangeError(f"The index {index} doesn't exist in this collection")
    return self._items[index]

  def set(self, index: int | None, value: T) -> None:
    """Overwrite the value at an existing index, or append.

    An index of None, or any integer that is not currently occupied, appends
    the value at the end instead of creating a gap.

    Raises:
        InvalidIndexError: If `index` is neither None nor an int.
    """
    validate_index(index, allow_none=True)
    if index is not None and 0 <= index < len(self._items):
      self._items[index] = value
      return
    self._items.append(value)

  def remove(self, index: int) -> T:
    """Remove and return the value at `index`; later values shift down by one.

    Raises:
        InvalidIndexError: If `index` is not an int.
        OutOfRangeError: If there is no value at `index`.
    """
    if not self.has(index):
      raise OutOfRangeError(f"The index {index} doesn't exist in this collection")
    return self._items.pop(index)

  def append(self, value: T) -> None:
    self._items.append(value)

  def prepend(self, value: T) -> None:
    self._items.insert(0, value)

  def pop(self, operation: str = "pop") -> T:
    """Remove and return the last value.

    Raises:
        EmptyContainerError: If the storage is empty.
    """
    if not self._items:
      raise EmptyContainerError(f"Failed to {operation}: No items left")
    return self._items.pop()

  def shift(self, operation: str = "shift") -> T:
    """Remove and return the first value.

    Raises:
        EmptyContainerError: If the storage is empty.
    """
    if not self._items:
      raise EmptyContainerError(f"Failed to {operation}: No items left")
    return self._items.pop(0)

  def sort(self, comparator: Comparator | None = None) -> None:
    self._items.sort(key=sort_key(comparator))

  def replace(self, values: Iterable[T]) -> None:
    self._items = list(values)

  def clear(self) -> None:
    self._items.clear()

  def __len__(self) -> int:
    return len(self._items)

  def __iter__(self) -> Iterator[T]:
    return iter(self._items)
