"""Text serialization for containers.

A serialized container looks like ``strata:1:Map:<base64>``: a tag, the
format version, the container kind and a base64 encoded cloudpickle payload.
cloudpickle is used so that containers holding lambdas and closures survive
the round trip.

Only deserialize text from a trusted source: decoding a payload can run
arbitrary code.
"""

import base64
import binascii
import logging
import pickle
from typing import Any

import cloudpickle

from strata.errors import InvalidArgumentError

logger = logging.getLogger(__name__)

FORMAT_TAG = "strata"
FORMAT_VERSION = 1
PICKLE_PROTOCOL = pickle.HIGHEST_PROTOCOL


def dumps(kind: str, payload: Any) -> str:
  """Encode a container payload as text.

  Args:
      kind: The container kind, stored so decoding can reject mismatches.
      payload: The picklable state of the container.

  Returns:
      The serialized text.
  """
  body = base64.b64encode(cloudpickle.dumps(payload, protocol=PICKLE_PROTOCOL)).decode("ascii")
  return f"{FORMAT_TAG}:{FORMAT_VERSION}:{kind}:{body}"


def loads(kind: str, text: str) -> Any:
  """Decode text produced by `dumps` for the given container kind.

  Args:
      kind: The container kind the caller expects.
      text: The serialized text.

  Returns:
      The decoded payload.

  Raises:
      InvalidArgumentError: If the text is not a strata payload, has an
                            unsupported version, was produced for another
                            kind of container, or is corrupt.
  """
  if not isinstance(text, str):
    raise InvalidArgumentError(f"Serialized data must be text, got {type(text).__name__}")

  parts = text.split(":", 3)
  if len(parts) != 4 or parts[0] != FORMAT_TAG:
    raise InvalidArgumentError("The given text is not a serialized strata container")

  _, version, stored_kind, body = parts
  if version != str(FORMAT_VERSION):
    raise InvalidArgumentError(f"Unsupported serialization format version: {version}")
  if stored_kind != kind:
    raise InvalidArgumentError(f"Cannot deserialize a {stored_kind} into a {kind}")

  try:
    payload = cloudpickle.loads(base64.b64decode(body.encode("ascii"), validate=True))
  except (binascii.Error, pickle.UnpicklingError, EOFError, ValueError) as e:
    raise InvalidArgumentError(f"Corrupt {kind} payload") from e

  logger.debug("Decoded %s payload (%d characters)", kind, len(text))
  return payload
