"""Session identifier generators.

Identifiers only need to be practically collision-free within the retention
window; they are not secrets.
"""

from __future__ import annotations

import random
import string
import time
import uuid
from typing import Callable

SessionIdGenerator = Callable[[], str]

_BASE36 = string.digits + string.ascii_lowercase
_random = random.SystemRandom()


def timestamp_session_id(suffix_length: int = 9) -> str:
    """``session_<epoch millis>_<random base-36 suffix>``."""
    millis = int(time.time() * 1000)
    suffix = "".join(_random.choice(_BASE36) for _ in range(suffix_length))
    return f"session_{millis}_{suffix}"


def uuid_session_id() -> str:
    return f"session_{uuid.uuid4().hex}"


_GENERATORS: dict[str, SessionIdGenerator] = {
    "timestamp": timestamp_session_id,
    "uuid": uuid_session_id,
}


def get_session_id_generator(strategy: str) -> SessionIdGenerator:
    try:
        return _GENERATORS[strategy.strip().lower()]
    except KeyError as exc:
        raise ValueError(f"Unknown session id strategy: {strategy}") from exc
