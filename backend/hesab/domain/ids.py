from __future__ import annotations

from uuid import uuid4


def new_id() -> str:
    # opaque, assigned once at creation, never reused
    return str(uuid4())
