"""Root cursors and the delegating base classes every wrapper stage builds on."""

from collections.abc import Iterable
from collections.abc import Iterator
from collections.abc import Mapping
from typing import Any

from strata.errors import InvalidArgumentError
from strata.errors import OutOfRangeError
from strata.types import IterationSource
from strata.types import Stage
from strata.types import StageSource
from strata.types import iter_pairs

_EXHAUSTED = object()


def pairs_of(iterable: Iterable[Any]) -> Iterator[tuple[Any, Any]]:
  """Yield the (key, value) pairs of a raw iterable.

  Mappings contribute their items; every other iterable is keyed by
  position.
  """
  if isinstance(iterable, Mapping):
    return iter(iterable.items())
  return enumerate(iterable)


class ReplayIterable[T]:
  """A re-iterable view over a one-shot iterator.

  Items are pulled from the wrapped iterator only when a traversal first
  reaches them and are cached, so later traversals replay the same items.
  """

  def __init__(self, iterator: Iterator[T]) -> None:
    self._iterator = iterator
    self._cache: list[T] = []
    self._done = False

  def __iter__(self) -> Iterator[T]:
    position = 0
    while True:
      if position < len(self._cache):
        yield self._cache[position]
      elif self._done:
        return
      else:
        try:
          item = next(self._iterator)
        except StopIteration:
          self._done = True
          return
        self._cache.append(item)
        yield item
      position += 1


class IterableStage(Stage[Any, Any]):
  """The root cursor of every chain: walks a raw iterable as (key, value) pairs."""

  def __init__(self, iterable: Iterable[Any]) -> None:
    self._iterable = iterable
    self._pairs: Iterator[tuple[Any, Any]] = iter(())
    self._current: Any = _EXHAUSTED

  def _fetch(self) -> None:
    self._current = next(self._pairs, _EXHAUSTED)

  def _require_valid(self) -> tuple[Any, Any]:
    if self._current is _EXHAUSTED:
      raise OutOfRangeError("The stage has no current position")
    return self._current

  def advance(self) -> None:
    self._fetch()

  def valid(self) -> bool:
    return self._current is not _EXHAUSTED

  def key(self) -> Any:
    return self._require_valid()[0]

  def value(self) -> Any:
    return self._require_valid()[1]

  def reset(self) -> None:
    self._pairs = pairs_of(self._iterable)
    self._fetch()


def as_stage(source: IterationSource) -> Stage:
  """Normalize any iteration source into a stage.

  Args:
      source: A stage, a collection (or any other `StageSource`), a mapping,
              or a plain iterable.

  Returns:
      The stage itself, a freshly opened cursor for a `StageSource`, or an
      `IterableStage` over a raw iterable.

  Raises:
      InvalidArgumentError: If `source` cannot be iterated.
  """
  match source:
    case Stage():
      return source
    case StageSource():
      return source.get_iterator()
    case Iterable():
      return IterableStage(source)
    case _:
      raise InvalidArgumentError(f"Cannot iterate over a {type(source).__name__}")


def values_of(source: IterationSource) -> list[Any]:
  """Materialize the values of any iteration source into a dense list."""
  return [value for _, value in iter_pairs(as_stage(source))]


class StagePlan(StageSource):
  """A recipe for a stage: its class, its upstream source and its arguments.

  Collections produced by chaining hold a plan rather than a live stage, so
  every traversal opens its own cursor chain. The upstream is referenced,
  not owned.
  """

  def __init__(
    self,
    kind: type[Stage],
    upstream: IterationSource,
    args: tuple[Any, ...] = (),
    kwargs: dict[str, Any] | None = None,
  ) -> None:
    self.kind = kind
    self.upstream = upstream
    self.args = args
    self.kwargs = kwargs or {}

  def get_iterator(self) -> Stage:
    return self.kind(self.upstream, *self.args, **self.kwargs)


class ChainedStage[K, V](Stage[K, V]):
  """A stage that wraps exactly one upstream and, by default, passes it through."""

  def __init__(self, upstream: IterationSource) -> None:
    self._upstream = as_stage(upstream)

  @property
  def upstream(self) -> Stage:
    return self._upstream

  def advance(self) -> None:
    self._upstream.advance()

  def valid(self) -> bool:
    return self._upstream.valid()

  def key(self) -> K:
    return self._upstream.key()

  def value(self) -> V:
    return self._upstream.value()

  def reset(self) -> None:
    self._upstream.reset()


class IndexedStage[V](ChainedStage[int, V]):
  """A pass-through stage that also tracks its 0-based running position."""

  def __init__(self, upstream: IterationSource) -> None:
    super().__init__(upstream)
    self._position = 0

  @property
  def position(self) -> int:
    return self._position

  def advance(self) -> None:
    super().advance()
    self._position += 1

  def reset(self) -> None:
    super().reset()
    self._position = 0
