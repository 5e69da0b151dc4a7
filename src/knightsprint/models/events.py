"""Events emitted by resolution and evaluation.

Events describe what happened in a round so the presentation layer can
animate and announce it. They are outputs only; nothing in the engine reads
them back.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import Field, TypeAdapter

from knightsprint.models.board import Cell
from knightsprint.models.state import CamelModel


class MoveEvent(CamelModel):
    """A player moved from one cell to another."""

    type: Literal["move"] = "move"
    player_id: int
    from_: Cell = Field(alias="from")
    to: Cell


class CollisionEvent(CamelModel):
    """Two or more players targeted the same square; all of them stayed put."""

    type: Literal["collision"] = "collision"
    square: Cell
    player_ids: list[int] = Field(default_factory=list)


class BlockedEvent(CamelModel):
    """A destination was no longer empty when the player's move was processed."""

    type: Literal["blocked"] = "blocked"
    player_id: int
    square: Cell


class EliminationEvent(CamelModel):
    """A player ran out of legal moves. score is frozen at its final value."""

    type: Literal["elimination"] = "elimination"
    player_id: int
    score: int


class WinnerEvent(CamelModel):
    type: Literal["winner"] = "winner"
    player_id: int


GameEvent = Annotated[
    Union[MoveEvent, CollisionEvent, BlockedEvent, EliminationEvent, WinnerEvent],
    Field(discriminator="type"),
]

_EVENT_LIST_ADAPTER = TypeAdapter(list[GameEvent])


def events_to_dicts(events: list) -> list[dict]:
    """Dump events to JSON-safe dicts with camelCase keys."""
    return [event.model_dump(mode="json", by_alias=True) for event in events]


def events_from_dicts(payload: list[dict]) -> list:
    """Parse dumped events back into event models."""
    return _EVENT_LIST_ADAPTER.validate_python(payload)
