from abc import ABC
from abc import abstractmethod
from collections.abc import Callable
from collections.abc import Iterable
from collections.abc import Iterator
from typing import Any

STAGE_PROTOCOL = ("advance", "valid", "key", "value", "reset")


def _implements_protocol(cls: type) -> bool:
  for name in STAGE_PROTOCOL:
    for base in cls.__mro__:
      if name in base.__dict__:
        if base.__dict__[name] is None:
          return False
        break
    else:
      return False
  return True


class Stage[K, V](ABC):
  """
  Abstract base class for every lazy iteration stage.

  A stage is a cursor over an ordered sequence of (key, value) pairs. It
  must be reset before first use; after that `valid()` reports whether the
  cursor points at a position, `key()` and `value()` read that position and
  `advance()` moves to the next one. `reset()` rewinds the stage and
  whatever it reads from.

  Classes that define all five methods count as stages even when they do
  not inherit from this class.
  """

  @abstractmethod
  def advance(self) -> None:
    """Move the cursor to the next position."""
    raise NotImplementedError

  @abstractmethod
  def valid(self) -> bool:
    """Return True while the cursor points at a position."""
    raise NotImplementedError

  @abstractmethod
  def key(self) -> K:
    """Return the key at the current position."""
    raise NotImplementedError

  @abstractmethod
  def value(self) -> V:
    """Return the value at the current position."""
    raise NotImplementedError

  @abstractmethod
  def reset(self) -> None:
    """Rewind the stage, and everything upstream of it, to the first position."""
    raise NotImplementedError

  def __iter__(self) -> Iterator[tuple[K, V]]:
    return iter_pairs(self)

  @classmethod
  def __subclasshook__(cls, subclass: type) -> bool:
    if cls is Stage and _implements_protocol(subclass):
      return True
    return NotImplemented


class StageSource(ABC):
  """
  Something that can open a fresh stage over its contents.

  Each call to `get_iterator` must return a cursor that shares no position
  state with cursors returned earlier.
  """

  @abstractmethod
  def get_iterator(self) -> Stage:
    raise NotImplementedError


def iter_pairs[KT, VT](stage: Stage[KT, VT]) -> Iterator[tuple[KT, VT]]:
  """Reset a stage and walk it to the end, yielding (key, value) tuples.

  Only the protocol methods are used, so duck-typed stages work too.
  """
  stage.reset()
  while stage.valid():
    yield stage.key(), stage.value()
    stage.advance()


type IterationSource = Iterable[Any] | StageSource | Stage
type Mapper = Callable[..., Any]
type Predicate = Callable[..., bool]
type Reducer = Callable[..., Any]
type Handler = Callable[..., None]
type Comparator = Callable[[Any, Any], int]
