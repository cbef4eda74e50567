from enum import StrEnum


class SessionState(StrEnum):
    IDLE = 'idle'
    SUBMITTING = 'submitting'
