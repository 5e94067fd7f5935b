"""
Validators for incoming game events.

``validate_*`` functions return a tuple of (is_valid, parsed_value,
error_message). ``decode_*`` functions raise engine exceptions and are what
the reward engine calls.
"""

import re
from collections.abc import Mapping
from typing import Any, TypeVar

from pydantic import ValidationError

from poke_rewards.models.enums import GameKind
from poke_rewards.models.events import EVENT_DATA_MODELS, EventData, GameEvent
from poke_rewards.utils.exceptions import EventValidationError, UnknownGameKindError

EventDataT = TypeVar("EventDataT", bound=EventData)

PLAYER_ID_MAX_LENGTH = 128
_PLAYER_ID_PATTERN = re.compile(r"^[A-Za-z0-9_.:@-]+$")


def validate_player_id(value: Any) -> tuple[bool, str | None, str | None]:
    """
    Validate player ID.

    Args:
        value: Raw player ID

    Returns:
        Tuple of (is_valid, normalized_player_id, error_message)

    Examples:
        >>> validate_player_id("player123")
        (True, 'player123', None)
        >>> validate_player_id("  ")
        (False, None, 'Player ID cannot be empty')
    """
    if not isinstance(value, str):
        return False, None, "Player ID must be a string"

    value = value.strip()
    if not value:
        return False, None, "Player ID cannot be empty"

    if len(value) > PLAYER_ID_MAX_LENGTH:
        return False, None, f"Player ID is longer than {PLAYER_ID_MAX_LENGTH} characters"

    if not _PLAYER_ID_PATTERN.match(value):
        return False, None, "Player ID contains invalid characters"

    return True, value, None


def validate_game_kind(value: Any) -> tuple[bool, GameKind | None, str | None]:
    """
    Validate game kind name.

    Examples:
        >>> validate_game_kind("pokematch")
        (True, <GameKind.MATCH: 'match'>, None)
        >>> validate_game_kind("chess")
        (False, None, "Unknown game kind: 'chess'")
    """
    try:
        return True, GameKind(value), None
    except ValueError:
        return False, None, f"Unknown game kind: {value!r}"


def _format_validation_error(error: ValidationError) -> str:
    parts = []
    for item in error.errors():
        location = ".".join(str(loc) for loc in item["loc"]) or "payload"
        parts.append(f"{location}: {item['msg']}")
    return "; ".join(parts)


def decode_player_id(value: Any) -> str:
    """
    Decode player ID or raise.

    Raises:
        EventValidationError: If the player ID is invalid
    """
    is_valid, player_id, error = validate_player_id(value)
    if not is_valid:
        raise EventValidationError(error)
    return player_id


def decode_event_data(
    model: type[EventDataT],
    event_data: EventDataT | Mapping[str, Any] | None,
) -> EventDataT:
    """
    Decode a game payload into its typed model.

    Args:
        model: Payload model class
        event_data: Already-typed payload or raw mapping

    Returns:
        Typed payload

    Raises:
        EventValidationError: If the payload does not match the schema
    """
    if isinstance(event_data, model):
        return event_data
    if event_data is None:
        event_data = {}
    if not isinstance(event_data, Mapping):
        raise EventValidationError(
            f"{model.__name__} payload must be an object, got {type(event_data).__name__}"
        )
    try:
        return model.model_validate(dict(event_data))
    except ValidationError as e:
        raise EventValidationError(
            f"Invalid {model.__name__}: {_format_validation_error(e)}"
        ) from e


def decode_game_event(raw: GameEvent | Mapping[str, Any]) -> tuple[GameEvent, EventData]:
    """
    Decode a kind-tagged event envelope and its payload.

    The game kind is checked first so an unknown kind is reported as
    such rather than as a generic validation failure.

    Args:
        raw: Event model or raw mapping with player_id, game, event_data

    Returns:
        Tuple of (event, typed_payload)

    Raises:
        UnknownGameKindError: If the game kind is not recognized
        EventValidationError: If the envelope or payload is malformed
    """
    if isinstance(raw, GameEvent):
        event = raw
    else:
        if not isinstance(raw, Mapping):
            raise EventValidationError(
                f"Event must be an object, got {type(raw).__name__}"
            )
        if "game" not in raw:
            raise EventValidationError("Event is missing 'game'")

        is_valid, game, _ = validate_game_kind(raw["game"])
        if not is_valid:
            raise UnknownGameKindError(raw["game"])

        try:
            event = GameEvent.model_validate({**raw, "game": game})
        except ValidationError as e:
            raise EventValidationError(
                f"Invalid event: {_format_validation_error(e)}"
            ) from e

    player_id = decode_player_id(event.player_id)
    if player_id != event.player_id:
        event = event.model_copy(update={"player_id": player_id})

    payload = decode_event_data(EVENT_DATA_MODELS[event.game], event.event_data)
    return event, payload
