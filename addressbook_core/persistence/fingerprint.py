"""
Fingerprint helper to derive entity tags from the content of models
"""

import json
import uuid
import hashlib
import collections.abc
from typing import Any, Optional

import pydantic


def _represent(obj: Any) -> Any:
    if isinstance(obj, pydantic.BaseModel):
        return obj.model_dump(mode="json", by_alias=True)
    if isinstance(obj, collections.abc.Sequence) and not isinstance(obj, (str, bytes)):
        if not all(isinstance(e, pydantic.BaseModel) for e in obj):
            raise TypeError(f"Not all elements of the sequence of length {len(obj)} are models")
        return [e.model_dump(mode="json", by_alias=True) for e in obj]
    raise TypeError(f"Object {obj!r} ({type(obj)}) is no valid model")


def make_fingerprint(obj: Any, name: Optional[str] = None) -> str:
    """
    Create a static and unambiguous fingerprint based on a given model or list of models

    The fingerprint is the MD5 digest of a canonical JSON serialization
    (sorted keys, no whitespace) of the model, prefixed with the type name
    of the object and the optional name. It's formatted as UUID string.
    The fingerprint only depends on the content, not on the process, so
    that it stays the same across restarts. It's not meant to be secure.

    :param obj: any pydantic model or sequence of pydantic models
    :param name: optional string describing the object (e.g. ``"AddressBook"``)
    :return: fingerprint as UUID string
    :raises TypeError: if the object is neither a model nor a sequence of models
    """

    representation = _represent(obj)
    dump = json.dumps(representation, sort_keys=True, separators=(",", ":"), allow_nan=False)
    content = type(obj).__name__ + (name or "") + dump
    return str(uuid.UUID(hashlib.md5(content.encode("UTF-8")).hexdigest()))
