from enum import StrEnum
import logging
from typing import Any

from strata.containers.sequence import Sequence
from strata.errors import InvalidArgumentError
from strata.types import IterationSource

logger = logging.getLogger(__name__)


class Direction(StrEnum):
  """Which ends of the storage a queue inserts at and removes from.

  ==========  ===========  ==========  =================================
  Direction   enqueue      dequeue     order for a, b, c, d enqueued
  ==========  ===========  ==========  =================================
  LIFO        append       last item   d, c, b, a
  FIFO        append       first item  a, b, c, d
  LILO        prepend      last item   a, b, c, d
  FILO        prepend      first item  d, c, b, a
  ==========  ===========  ==========  =================================
  """

  LIFO = "lifo"
  FIFO = "fifo"
  LILO = "lilo"
  FILO = "filo"


DEFAULT_DIRECTION = Direction.LIFO

_PREPENDING = frozenset({Direction.LILO, Direction.FILO})
_SHIFTING = frozenset({Direction.FIFO, Direction.FILO})


def parse_direction(direction: Direction | str) -> Direction:
  """Return the `Direction` for an enum member or its (case-insensitive) name.

  Raises:
      InvalidArgumentError: If the direction is not one of the four known ones.
  """
  if isinstance(direction, Direction):
    return direction
  if isinstance(direction, str):
    try:
      return Direction(direction.lower())
    except ValueError:
      pass
  raise InvalidArgumentError(f"Unknown queue direction: {direction!r}")


class Queue[T](Sequence[T]):
  """A sequence that inserts and removes at the ends chosen by its `Direction`.

  Example:
      >>> queue = Queue(direction="fifo")
      >>> for item in "abc":
      ...   queue.enqueue(item)
      >>> queue.dequeue(), queue.dequeue()
      ('a', 'b')
  """

  def __init__(self, iterable: IterationSource = (), direction: Direction | str = DEFAULT_DIRECTION) -> None:
    """Initialize a queue.

    Args:
        iterable: The initial items, in storage order.
        direction: One of the `Direction` members or their names.

    Raises:
        InvalidArgumentError: If `direction` is not recognized.
    """
    self._direction = parse_direction(direction)
    super().__init__(iterable)

  @property
  def direction(self) -> Direction:
    return self._direction

  def enqueue(self, item: T) -> None:
    """Insert an item at the end chosen by the direction."""
    if self._direction in _PREPENDING:
      self._storage.prepend(item)
    else:
      self._storage.append(item)

  def dequeue(self) -> T:
    """Remove and return an item from the end chosen by the direction.

    Raises:
        EmptyContainerError: If the queue is empty.
    """
    if self._direction in _SHIFTING:
      return self._storage.shift("dequeue")
    return self._storage.pop("dequeue")

  def _payload(self) -> Any:
    return {"direction": self._direction.value, "items": self.to_array()}

  def _restore(self, payload: Any) -> None:
    if not isinstance(payload, dict) or "items" not in payload or "direction" not in payload:
      raise InvalidArgumentError("Expected a queue payload with items and a direction")
    direction = parse_direction(payload["direction"])
    super()._restore(payload["items"])
    self._direction = direction
    logger.debug("Restored %s queue with %d items", direction.value, len(self._storage))

  def __repr__(self) -> str:
    return f"{type(self).__name__}({self._storage.items!r}, direction={self._direction.value!r})"


def create_queue[T](iterable: IterationSource = (), direction: Direction | str = DEFAULT_DIRECTION) -> Queue[T]:
  """Create a queue; LIFO unless another direction is given."""
  return Queue(iterable, direction)
