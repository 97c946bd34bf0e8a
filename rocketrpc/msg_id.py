"""Generation of request message ids."""

from __future__ import annotations

import os
import threading

_MSG_ID_LENGTH = 20
_MAX_MSG_ID = "9" * _MSG_ID_LENGTH

_local = threading.local()


def gen_msg_id() -> str:
    """Return the next 20-digit message id for the calling thread.

    Each thread starts from a random id and counts up; after the largest
    id it starts again from a new random one.
    """
    current = getattr(_local, "msg_id", "")
    if not current or current == _MAX_MSG_ID:
        current = "".join(str(byte % 10) for byte in os.urandom(_MSG_ID_LENGTH))
    else:
        current = str(int(current) + 1).zfill(_MSG_ID_LENGTH)
    _local.msg_id = current
    return current