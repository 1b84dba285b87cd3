from strata.containers.sequence import Sequence
from strata.errors import EmptyContainerError
from strata.types import IterationSource


class Stack[T](Sequence[T]):
  """A sequence with push/pop at the end and unshift/shift at the front."""

  def push(self, item: T) -> None:
    """Add an item to the end."""
    self._storage.append(item)

  def pop(self) -> T:
    """Remove and return the last item.

    Raises:
        EmptyContainerError: If the stack is empty.
    """
    return self._storage.pop("pop stack")

  def unshift(self, item: T) -> None:
    """Add an item to the front."""
    self._storage.prepend(item)

  def shift(self) -> T:
    """Remove and return the first item.

    Raises:
        EmptyContainerError: If the stack is empty.
    """
    return self._storage.shift("shift stack")

  def peek(self) -> T:
    """Return the last item without removing it.

    Raises:
        EmptyContainerError: If the stack is empty.
    """
    if not self._storage:
      raise EmptyContainerError("Failed to peek stack: No items left")
    return self._storage.items[-1]


def create_stack[T](iterable: IterationSource = ()) -> Stack[T]:
  """Create a stack whose top is the last value of the iterable."""
  return Stack(iterable)
