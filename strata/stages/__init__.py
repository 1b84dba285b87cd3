"""
Lazy iteration stages.

Each stage wraps one upstream source and exposes a possibly different
sequence of (key, value) pairs without materializing the upstream.
"""

from .base import ChainedStage
from .base import IndexedStage
from .base import IterableStage
from .base import ReplayIterable
from .base import StagePlan
from .base import as_stage
from .base import values_of
from .callback import CallbackFilterStage
from .callback import CallbackMapStage
from .callback import RegexFilterStage
from .projection import EntryComposeStage
from .projection import EntryDecomposeStage
from .projection import FlipStage
from .projection import KeyStage
from .projection import ValueStage

__all__ = [
  "as_stage",
  "values_of",
  "ReplayIterable",
  "StagePlan",
  "IterableStage",
  "ChainedStage",
  "IndexedStage",
  "ValueStage",
  "KeyStage",
  "EntryComposeStage",
  "EntryDecomposeStage",
  "FlipStage",
  "CallbackMapStage",
  "CallbackFilterStage",
  "RegexFilterStage",
]
