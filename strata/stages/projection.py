"""Stages that reinterpret what "key" and "value" mean for everything downstream."""

from collections.abc import Sequence
from typing import Any

from strata.errors import InvalidArgumentError
from strata.stages.base import ChainedStage
from strata.stages.base import IndexedStage


class ValueStage(IndexedStage[Any]):
  """Renumbers positions from 0 and keeps the upstream values."""

  def key(self) -> int:
    return self.position


class KeyStage(IndexedStage[Any]):
  """Renumbers positions from 0 and exposes the upstream keys as values."""

  def key(self) -> int:
    return self.position

  def value(self) -> Any:
    return self.upstream.key()


class EntryComposeStage(IndexedStage[tuple[Any, Any]]):
  """Renumbers positions from 0; each value is the upstream ``(key, value)`` pair."""

  def key(self) -> int:
    return self.position

  def value(self) -> tuple[Any, Any]:
    return self.upstream.key(), self.upstream.value()


class EntryDecomposeStage(ChainedStage[Any, Any]):
  """Inverse of `EntryComposeStage`: splits upstream ``(key, value)`` values back apart.

  Raises:
      InvalidArgumentError: When an upstream value is not a 2-element pair.
  """

  def _entry(self) -> Any:
    entry = self.upstream.value()
    if not isinstance(entry, Sequence) or isinstance(entry, (str, bytes)) or len(entry) != 2:
      raise InvalidArgumentError(f"Entries need to be (key, value) pairs, got {entry!r}")
    return entry

  def key(self) -> Any:
    return self._entry()[0]

  def value(self) -> Any:
    return self._entry()[1]


class FlipStage(ChainedStage[Any, Any]):
  """Swaps keys and values.

  Any value may become a key while the chain stays lazy; only materializing
  into a dict requires the new keys to be hashable.
  """

  def key(self) -> Any:
    return self.upstream.value()

  def value(self) -> Any:
    return self.upstream.key()
