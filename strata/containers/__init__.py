"""
Storage-backed containers.

Sequence, Stack, Queue and Set own a dense `SequenceStorage`; Map keeps
parallel key and value lists. All of them take part in the same lazy
chaining as `Collection`.
"""

from .map import Map
from .queue import DEFAULT_DIRECTION
from .queue import Direction
from .queue import Queue
from .sequence import Sequence
from .set import Set
from .stack import Stack
from .storage import SequenceStorage

__all__ = [
  "Sequence",
  "SequenceStorage",
  "Stack",
  "Queue",
  "Direction",
  "DEFAULT_DIRECTION",
  "Set",
  "Map",
]
