"""Stages driven by caller-supplied callables or patterns."""

import re
from typing import Any

from strata.helpers import adapt_callback
from strata.stages.base import ChainedStage
from strata.types import IterationSource
from strata.types import Mapper
from strata.types import Predicate

_UNSET = object()


class CallbackMapStage(ChainedStage[Any, Any]):
  """Keeps upstream keys and replaces each value with ``mapper(value, key)``.

  The mapper runs lazily, at most once per position.
  """

  def __init__(self, upstream: IterationSource, mapper: Mapper) -> None:
    super().__init__(upstream)
    self._mapper = adapt_callback(mapper, 2)
    self._mapped: Any = _UNSET

  def advance(self) -> None:
    super().advance()
    self._mapped = _UNSET

  def reset(self) -> None:
    super().reset()
    self._mapped = _UNSET

  def value(self) -> Any:
    if self._mapped is _UNSET:
      self._mapped = self._mapper(self.upstream.value(), self.upstream.key())
    return self._mapped


class CallbackFilterStage(ChainedStage[Any, Any]):
  """Drops upstream positions for which ``predicate(value, key)`` is falsy.

  Retained positions keep their original keys, so filtering a list leaves
  gaps in its indices.
  """

  def __init__(self, upstream: IterationSource, predicate: Predicate) -> None:
    super().__init__(upstream)
    self._predicate = adapt_callback(predicate, 2)

  def accept(self, value: Any, key: Any) -> bool:
    return bool(self._predicate(value, key))

  def _skip_rejected(self) -> None:
    upstream = self.upstream
    while upstream.valid() and not self.accept(upstream.value(), upstream.key()):
      upstream.advance()

  def advance(self) -> None:
    super().advance()
    self._skip_rejected()

  def reset(self) -> None:
    super().reset()
    self._skip_rejected()


class RegexFilterStage(CallbackFilterStage):
  """Keeps positions whose value, rendered with `str`, matches a regular expression."""

  def __init__(self, upstream: IterationSource, pattern: str | re.Pattern[str], flags: int = 0) -> None:
    self.pattern = re.compile(pattern, flags) if isinstance(pattern, str) else pattern
    super().__init__(upstream, self._matches)

  def _matches(self, value: Any) -> bool:
    return self.pattern.search(str(value)) is not None
