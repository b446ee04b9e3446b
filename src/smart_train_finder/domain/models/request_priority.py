"""Request priority domain model."""

from enum import IntEnum


class RequestPriority(IntEnum):
    """Priority class for outbound provider requests. Higher values go first."""

    BACKGROUND = 0
    INTERACTIVE = 10
