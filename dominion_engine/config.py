"""Runtime configuration read from the environment (and a ``.env`` file)."""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv


@dataclass(frozen=True)
class EngineConfig:
    """Settings for the CLI and simulation runner.

    Attributes:
        seed: Default random seed, or None for a fresh one each game.
        kingdom: Fixed kingdom card ids, or None to pick at random.
        log_level: Name of the ``logging`` level to configure.
        max_turns: Turn cap before a simulated game is abandoned.
    """

    seed: int | None = None
    kingdom: tuple[str, ...] | None = None
    log_level: str = "WARNING"
    max_turns: int = 200


def _int_or_none(value: str | None) -> int | None:
    if value is None or value.strip() == "":
        return None
    return int(value)


def load_config() -> EngineConfig:
    """Build an EngineConfig from ``DOMINION_*`` environment variables."""
    load_dotenv()

    kingdom = os.environ.get("DOMINION_KINGDOM")
    max_turns = _int_or_none(os.environ.get("DOMINION_MAX_TURNS"))
    return EngineConfig(
        seed=_int_or_none(os.environ.get("DOMINION_SEED")),
        kingdom=tuple(k.strip() for k in kingdom.split(",") if k.strip()) if kingdom else None,
        log_level=os.environ.get("DOMINION_LOG_LEVEL", "WARNING").upper(),
        max_turns=max_turns if max_turns is not None else EngineConfig.max_turns,
    )
