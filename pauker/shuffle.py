"""Per-game-type randomization of content payloads.

Each game type names the nested arrays that get a fresh random order on every
play. The payload is deep-copied first; anything not named in the table is
carried over unchanged.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum

from .errors import PayloadError

logger = logging.getLogger(__name__)

DISCRIMINATOR_KEYS = ("game_type", "gameType")


class GameType(str, Enum):
    """Known payload schemas; ``UNKNOWN`` covers everything else."""

    ESCAPE_GAME = "escape_game"
    MATCHING_PUZZLE = "matching_puzzle"
    SORTIER_SPIEL = "sortier_spiel"
    QUICK_QUIZ = "quick_quiz"
    WER_BIN_ICH = "wer_bin_ich"
    WHAT_AND_WHY = "what_and_why"
    UNKNOWN = "unknown"

    @classmethod
    def from_payload(cls, payload: object) -> GameType:
        raw = discriminator_of(payload)
        if raw is None:
            return cls.UNKNOWN
        try:
            member = cls(raw)
        except ValueError:
            return cls.UNKNOWN
        return member


@dataclass(frozen=True)
class ShuffleRule:
    """Shuffle ``field`` of an object, then apply ``each`` to every element.

    ``when`` restricts the rule to objects whose ``key`` equals ``value``.
    """

    field: str
    each: tuple["ShuffleRule", ...] = ()
    when: tuple[str, str] | None = None

    def applies_to(self, obj: Mapping[str, object]) -> bool:
        if self.when is None:
            return True
        key, value = self.when
        return obj.get(key) == value


SHUFFLE_TABLE: dict[GameType, tuple[ShuffleRule, ...]] = {
    GameType.ESCAPE_GAME: (
        ShuffleRule(
            "sections",
            each=(
                ShuffleRule("questions", when=("type", "quiz"), each=(ShuffleRule("options"),)),
                ShuffleRule("sortCards", when=("type", "sort")),
                ShuffleRule("rows", when=("type", "capital"), each=(ShuffleRule("options"),)),
            ),
        ),
    ),
    GameType.MATCHING_PUZZLE: (ShuffleRule("sets"),),
    GameType.SORTIER_SPIEL: (ShuffleRule("cards"), ShuffleRule("columns")),
    GameType.QUICK_QUIZ: (ShuffleRule("questions"), ShuffleRule("answerLabels")),
    GameType.WER_BIN_ICH: (ShuffleRule("legalForms"), ShuffleRule("questions")),
    GameType.WHAT_AND_WHY: (
        ShuffleRule("cases", each=(ShuffleRule("options", each=(ShuffleRule("whys"),)),)),
    ),
}


def discriminator_of(payload: object) -> str | None:
    """Return the non-empty game-type string of ``payload`` or ``None``."""
    if not isinstance(payload, Mapping):
        return None
    for key in DISCRIMINATOR_KEYS:
        value = payload.get(key)
        if isinstance(value, str) and value:
            return value
    return None


def clone_payload(value: object) -> object:
    """Structural deep copy of a JSON value (dicts, lists, scalars)."""
    if isinstance(value, Mapping):
        return {key: clone_payload(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [clone_payload(item) for item in value]
    return value


def _apply_rules(obj: dict[str, object], rules: tuple[ShuffleRule, ...]) -> None:
    for rule in rules:
        if not rule.applies_to(obj):
            continue
        items = obj.get(rule.field)
        if not isinstance(items, list):
            continue
        random.shuffle(items)
        if not rule.each:
            continue
        for item in items:
            if isinstance(item, dict):
                _apply_rules(item, rule.each)


def randomize_payload(payload: object) -> object:
    """Return a shuffled deep copy of ``payload``; the input is never mutated.

    Payloads of unknown or missing game type come back as a plain copy.
    """
    result = clone_payload(payload)
    if not isinstance(result, dict):
        return result
    rules = SHUFFLE_TABLE.get(GameType.from_payload(result), ())
    _apply_rules(result, rules)
    return result


def check_payload_header(payload: object, expected_type: str | None = None) -> str:
    """Validate the payload header and return its game-type string.

    Only the discriminator is checked; the rest of the schema is trusted.
    """
    if not isinstance(payload, Mapping):
        raise PayloadError("payload is empty or not a JSON object")
    actual = discriminator_of(payload)
    if actual is None:
        raise PayloadError("payload has no 'game_type' field")
    if expected_type is not None and actual != expected_type:
        raise PayloadError(f"unexpected game_type: expected {expected_type!r}, found {actual!r}")
    schema_version = payload.get("schema_version")
    if schema_version is not None and not isinstance(schema_version, str):
        logger.warning("schema_version is present but not a string: %r", schema_version)
    return actual


def payload_title(payload: object) -> str | None:
    if not isinstance(payload, Mapping):
        return None
    title = payload.get("title")
    if isinstance(title, str) and title.strip():
        return title.strip()
    return None


__all__ = [
    "DISCRIMINATOR_KEYS",
    "GameType",
    "ShuffleRule",
    "SHUFFLE_TABLE",
    "discriminator_of",
    "clone_payload",
    "randomize_payload",
    "check_payload_header",
    "payload_title",
]
