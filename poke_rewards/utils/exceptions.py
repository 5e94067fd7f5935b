"""
Exception types for the reward engine.

Faults are raised as exceptions; policy rejections (daily limit reached,
already logged in today, welcome already claimed) are never exceptions and
come back as unsuccessful RewardResponse objects instead.
"""


class RewardEngineError(Exception):
    """Base class for reward engine faults."""

    retryable: bool = False


class EventValidationError(RewardEngineError, ValueError):
    """Raised when an event payload or player id cannot be decoded."""


class UnknownGameKindError(RewardEngineError, ValueError):
    """Raised when an event names a game kind the engine does not know."""

    def __init__(self, game: object) -> None:
        self.game = game
        super().__init__(f"Unknown game kind: {game!r}")


class StorageError(RewardEngineError):
    """Raised when the storage backend fails."""

    retryable = True


class RewardNotFoundError(StorageError):
    """Raised when an update targets a reward that does not exist."""

    retryable = False

    def __init__(self, reward_id: object) -> None:
        self.reward_id = reward_id
        super().__init__(f"Reward not found: {reward_id}")


class SettlementAlreadyRecordedError(StorageError):
    """Raised when a settlement reference is written twice for one reward."""

    retryable = False


# Exception categories based on handling strategy

# Caller bugs - never retry as-is
CALLER_ERRORS = (
    EventValidationError,
    UnknownGameKindError,
)


def is_retryable(exc: Exception) -> bool:
    """
    Check if a failed call may be retried unchanged.

    Args:
        exc: Exception to check

    Returns:
        True if exception is a retryable engine fault
    """
    return isinstance(exc, RewardEngineError) and exc.retryable


def is_caller_error(exc: Exception) -> bool:
    """
    Check if exception signals caller misuse.

    Args:
        exc: Exception to check

    Returns:
        True if exception is a validation or unknown-kind fault
    """
    return isinstance(exc, CALLER_ERRORS)
