"""Strata - lazy, chainable collections for Python.

Wrap any iterable, chain `map`, `filter`, `flip` and key/value projections
without evaluating anything, then materialize with a terminal operation.
Storage-backed containers (Sequence, Stack, Queue, Set, Map) take part in
the same chains.
"""

import logging

from strata.collection import AbstractCollection
from strata.collection import Collection
from strata.collection import create_collection
from strata.containers.map import Map
from strata.containers.map import create_map
from strata.containers.queue import Direction
from strata.containers.queue import Queue
from strata.containers.queue import create_queue
from strata.containers.sequence import Sequence
from strata.containers.sequence import create_sequence
from strata.containers.set import Set
from strata.containers.set import create_set
from strata.containers.stack import Stack
from strata.containers.stack import create_stack
from strata.errors import CollectionError
from strata.errors import EmptyContainerError
from strata.errors import InvalidArgumentError
from strata.errors import InvalidIndexError
from strata.errors import InvalidStageError
from strata.errors import KeyNotFoundError
from strata.errors import NotFoundError
from strata.errors import OutOfRangeError
from strata.errors import UnhashableKeyError
from strata.types import Stage

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
  "AbstractCollection",
  "Collection",
  "Sequence",
  "Stack",
  "Queue",
  "Direction",
  "Set",
  "Map",
  "Stage",
  "create_collection",
  "create_map",
  "create_queue",
  "create_sequence",
  "create_set",
  "create_stack",
  "CollectionError",
  "InvalidArgumentError",
  "InvalidIndexError",
  "InvalidStageError",
  "UnhashableKeyError",
  "NotFoundError",
  "OutOfRangeError",
  "KeyNotFoundError",
  "EmptyContainerError",
]
