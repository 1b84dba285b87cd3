from collections.abc import Callable
from collections.abc import Iterable
from functools import cmp_to_key
import inspect
from typing import Any

from strata.types import Comparator

_POSITIONAL_KINDS = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)


def positional_arity(func: Callable[..., Any], max_args: int, min_args: int = 1) -> int:
  """Count how many positional arguments a callable is willing to receive.

  The result is capped at `max_args`. A callable that takes ``*args``
  receives all of them. Classes, and callables whose signature cannot be
  inspected (`max`, `min` and other builtins), receive `min_args`.

  Args:
      func: The callable to inspect.
      max_args: The number of arguments the caller has on offer.
      min_args: The fallback arity when the signature is unknown.

  Returns:
      The number of leading arguments to pass to `func`.
  """
  if isinstance(func, type):
    return min(min_args, max_args)
  try:
    signature = inspect.signature(func)
  except (TypeError, ValueError):
    return min(min_args, max_args)

  count = 0
  for parameter in signature.parameters.values():
    if parameter.kind is inspect.Parameter.VAR_POSITIONAL:
      return max_args
    if parameter.kind in _POSITIONAL_KINDS:
      count += 1
  return min(count, max_args)


def adapt_callback(func: Callable[..., Any], max_args: int, min_args: int = 1) -> Callable[..., Any]:
  """Wrap a callback so it can always be called with `max_args` positional arguments.

  Surplus trailing arguments are dropped before `func` is invoked, so a
  mapper written as ``lambda value: ...`` and one written as
  ``lambda value, key: ...`` are both accepted where a stage offers
  ``(value, key)``.

  Args:
      func: The user supplied callback.
      max_args: The number of arguments the call site passes.
      min_args: How many arguments a callable with an unknown signature
                receives.

  Returns:
      `func` itself when it accepts every argument, otherwise a thin wrapper.

  Raises:
      TypeError: If `func` is not callable.
  """
  if not callable(func):
    raise TypeError(f"Expected a callable, got {type(func).__name__}")

  arity = positional_arity(func, max_args, min_args)
  if arity >= max_args:
    return func

  def adapted(*args: Any) -> Any:
    return func(*args[:arity])

  return adapted


def strict_equals(left: Any, right: Any) -> bool:
  """Compare two values without cross-type coercion.

  Identical objects are equal; otherwise both values must be of the exact
  same type and compare equal. This keeps ``1``, ``1.0`` and ``True``
  distinct and works for unhashable values such as lists.
  """
  if left is right:
    return True
  return type(left) is type(right) and bool(left == right)


def index_of(items: Iterable[Any], needle: Any) -> int:
  """Return the position of the first item strictly equal to `needle`, or -1."""
  for position, item in enumerate(items):
    if strict_equals(item, needle):
      return position
  return -1


def sort_key(comparator: Comparator | None) -> Callable[[Any], Any] | None:
  """Turn an optional three-way comparator into a `sorted` key function.

  Returns None (natural ascending order) when no comparator is given.
  """
  if comparator is None:
    return None
  return cmp_to_key(comparator)
