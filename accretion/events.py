from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

EventType = Literal[
    "SPAWNED",
    "SPAWN_DROPPED",
    "PURCHASED",
    "PURCHASE_DENIED",
    "ABSORBED",
    "MERGED",
    "AUTO_PLAY_TOGGLED",
    "VIEWPORT_RESIZED",
]


@dataclass(frozen=True, slots=True)
class GameEvent:
    """Outbox entry for the presentation layer.

    Events only describe what already happened; the renderer may flash a denial,
    pulse the center on absorption and so on, but never feeds anything back.
    """

    type: EventType
    tick: int
    payload: dict[str, Any]
    ts: float

    @staticmethod
    def at(*, type: EventType, tick: int, ts: float, payload: dict[str, Any] | None = None) -> "GameEvent":
        return GameEvent(type=type, tick=tick, payload=dict(payload or {}), ts=float(ts))
