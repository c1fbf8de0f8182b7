# pagekit/events.py

from enum import Enum


class EventType(Enum):
    # Published after every state transition, carries key= and state=
    STATE_CHANGED = "state_changed"

    # Fetch lifecycle
    FETCH_STARTED = "fetch_started"
    FETCH_SUCCEEDED = "fetch_succeeded"
    FETCH_FAILED = "fetch_failed"
    FETCH_DISCARDED = "fetch_discarded"

    # Session lifecycle
    SESSION_RESET = "session_reset"
    KEY_RELEASED = "key_released"
