"""Exception hierarchy for strata.

Every error raised by the library derives from `CollectionError` and from the
builtin exception a caller would naturally reach for, so both
``except CollectionError`` and ``except KeyError`` style handlers work.
"""


class CollectionError(Exception):
  """Base class for all exceptions raised by strata."""

  pass


class InvalidArgumentError(CollectionError, ValueError):
  """Raised when a call receives input that violates its contract.

  Examples are Map entries that are not key/value pairs, an unknown queue
  direction, or a payload that cannot be deserialized.
  """

  pass


class InvalidIndexError(InvalidArgumentError, TypeError):
  """Raised when a sequential container is indexed with a non-integer."""

  def __init__(self, index: object) -> None:
    self.index = index
    super().__init__(f"Sequential collections only support integer indices, got {type(index).__name__}")


class UnhashableKeyError(InvalidArgumentError, TypeError):
  """Raised when materializing into a dict meets a key that cannot be hashed."""

  pass


class InvalidStageError(InvalidArgumentError, TypeError):
  """Raised when `chain` is given something that does not implement the stage protocol."""

  pass


class NotFoundError(CollectionError, LookupError):
  """Base class for lookups of absent keys or indices."""

  pass


class OutOfRangeError(NotFoundError, IndexError):
  """Raised when a well-typed key or index does not exist in a collection."""

  pass


class KeyNotFoundError(NotFoundError, KeyError):
  """Raised when a Map lookup misses."""

  def __str__(self) -> str:
    # KeyError quotes its argument; keep the plain message instead.
    return str(self.args[0]) if self.args else ""


class EmptyContainerError(CollectionError, IndexError):
  """Raised when removing from an empty stack or queue."""

  pass
