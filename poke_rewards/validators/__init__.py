"""
Validators package.

Decoding and validation of incoming game events.
"""

from poke_rewards.validators.events import (
    decode_event_data,
    decode_game_event,
    decode_player_id,
    validate_game_kind,
    validate_player_id,
)


__all__ = [
    "validate_player_id",
    "validate_game_kind",
    "decode_player_id",
    "decode_event_data",
    "decode_game_event",
]
