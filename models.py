#!/usr/bin/env python3
"""
models.py

Snapshot model for one polled scoreboard response. Every type is immutable
and built from the provider's JSON with ``from_dict``; absent or malformed
optional fields fall back to ``None`` (or an empty value) instead of failing.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Optional, Tuple


def _mapping(value: Any) -> dict:
    return value if isinstance(value, dict) else {}


def _text(value: Any, default: str = "") -> str:
    if value is None:
        return default
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return default


def _opt_text(value: Any) -> Optional[str]:
    text = _text(value)
    return text if text else None


def _opt_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    if isinstance(value, str):
        try:
            return int(float(value.strip()))
        except ValueError:
            return None
    return None


def _opt_float(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return None
    return None


class GameState(enum.Enum):
    PRE = "pre"
    IN = "in"
    POST = "post"

    @classmethod
    def parse(cls, value: Any) -> "GameState":
        text = _text(value).strip().lower()
        for member in cls:
            if member.value == text:
                return member
        return cls.PRE

    @property
    def rank(self) -> int:
        return _STATE_ORDER.index(self)


_STATE_ORDER = (GameState.PRE, GameState.IN, GameState.POST)


@dataclass(frozen=True)
class Team:
    abbreviation: str
    display_name: str = ""
    short_display_name: str = ""
    id: Optional[str] = None
    color: Optional[str] = None
    alternate_color: Optional[str] = None
    logo: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> "Team":
        data = _mapping(data)
        abbreviation = _text(data.get("abbreviation")).strip()
        display_name = _text(data.get("displayName"))
        return cls(
            abbreviation=abbreviation or display_name[:3].upper(),
            display_name=display_name,
            short_display_name=_text(data.get("shortDisplayName")),
            id=_opt_text(data.get("id")),
            color=_opt_text(data.get("color")),
            alternate_color=_opt_text(data.get("alternateColor")),
            logo=_opt_text(data.get("logo")),
        )


@dataclass(frozen=True)
class Competitor:
    team: Team
    home_away: str
    score: Optional[str] = None
    winner: Optional[bool] = None

    @classmethod
    def from_dict(cls, data: Any) -> "Competitor":
        data = _mapping(data)
        winner = data.get("winner")
        return cls(
            team=Team.from_dict(data.get("team")),
            home_away=_text(data.get("homeAway")).strip().lower(),
            score=_opt_text(data.get("score")),
            winner=winner if isinstance(winner, bool) else None,
        )

    @property
    def score_text(self) -> str:
        return self.score if self.score else "0"


@dataclass(frozen=True)
class LastPlay:
    text: str

    @classmethod
    def from_dict(cls, data: Any) -> Optional["LastPlay"]:
        data = _mapping(data)
        text = _text(data.get("text")).strip()
        return cls(text=text) if text else None


@dataclass(frozen=True)
class Situation:
    down: Optional[int] = None
    distance: Optional[int] = None
    yard_line: Optional[int] = None
    short_down_distance_text: Optional[str] = None
    possession: Optional[str] = None
    last_play: Optional[LastPlay] = None

    @classmethod
    def from_dict(cls, data: Any) -> Optional["Situation"]:
        if not isinstance(data, dict):
            return None
        return cls(
            down=_opt_int(data.get("down")),
            distance=_opt_int(data.get("distance")),
            yard_line=_opt_int(data.get("yardLine")),
            short_down_distance_text=_opt_text(data.get("shortDownDistanceText")),
            possession=_opt_text(data.get("possession")),
            last_play=LastPlay.from_dict(data.get("lastPlay")),
        )


@dataclass(frozen=True)
class StatusType:
    state: GameState = GameState.PRE
    short_detail: str = ""
    description: str = ""
    detail: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> "StatusType":
        data = _mapping(data)
        return cls(
            state=GameState.parse(data.get("state")),
            short_detail=_text(data.get("shortDetail")),
            description=_text(data.get("description")),
            detail=_text(data.get("detail")),
        )


@dataclass(frozen=True)
class Status:
    period: int = 0
    display_clock: str = ""
    clock: Optional[float] = None
    type: StatusType = StatusType()

    @classmethod
    def from_dict(cls, data: Any) -> "Status":
        data = _mapping(data)
        return cls(
            period=_opt_int(data.get("period")) or 0,
            display_clock=_text(data.get("displayClock")),
            clock=_opt_float(data.get("clock")),
            type=StatusType.from_dict(data.get("type")),
        )

    @property
    def state(self) -> GameState:
        return self.type.state


@dataclass(frozen=True)
class Broadcast:
    names: Tuple[str, ...] = ()
    market: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> "Broadcast":
        data = _mapping(data)
        names = data.get("names")
        if not isinstance(names, list):
            names = []
        return cls(
            names=tuple(name for name in (_text(n).strip() for n in names) if name),
            market=_opt_text(data.get("market")),
        )


@dataclass(frozen=True)
class Competition:
    competitors: Tuple[Competitor, ...] = ()
    status: Status = Status()
    situation: Optional[Situation] = None
    broadcasts: Optional[Tuple[Broadcast, ...]] = None

    @classmethod
    def from_dict(cls, data: Any) -> "Competition":
        data = _mapping(data)
        competitors = data.get("competitors")
        broadcasts = data.get("broadcasts")
        return cls(
            competitors=tuple(
                Competitor.from_dict(c) for c in competitors if isinstance(c, dict)
            ) if isinstance(competitors, list) else (),
            status=Status.from_dict(data.get("status")),
            situation=Situation.from_dict(data.get("situation")),
            broadcasts=tuple(
                Broadcast.from_dict(b) for b in broadcasts if isinstance(b, dict)
            ) if isinstance(broadcasts, list) else None,
        )

    def _side(self, side: str) -> Optional[Competitor]:
        for competitor in self.competitors:
            if competitor.home_away == side:
                return competitor
        return None

    @property
    def home(self) -> Optional[Competitor]:
        return self._side("home")

    @property
    def away(self) -> Optional[Competitor]:
        return self._side("away")

    @property
    def broadcast_names(self) -> list[str]:
        names: list[str] = []
        for broadcast in self.broadcasts or ():
            names.extend(broadcast.names)
        return names


@dataclass(frozen=True)
class Event:
    short_name: str
    competitions: Tuple[Competition, ...] = ()
    status: Status = Status()
    id: Optional[str] = None
    date: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> "Event":
        data = _mapping(data)
        competitions = data.get("competitions")
        return cls(
            short_name=_text(data.get("shortName")) or _text(data.get("name")),
            competitions=tuple(
                Competition.from_dict(c) for c in competitions if isinstance(c, dict)
            ) if isinstance(competitions, list) else (),
            status=Status.from_dict(data.get("status")),
            id=_opt_text(data.get("id")),
            date=_opt_text(data.get("date")),
        )

    @property
    def key(self) -> str:
        return self.id or self.short_name

    @property
    def competition(self) -> Optional[Competition]:
        return self.competitions[0] if self.competitions else None


@dataclass(frozen=True)
class ScoreboardResponse:
    events: Tuple[Event, ...] = ()

    @classmethod
    def from_dict(cls, data: Any) -> "ScoreboardResponse":
        if not isinstance(data, dict):
            raise ValueError("scoreboard payload is not an object")
        events = data.get("events")
        if not isinstance(events, list):
            raise ValueError("scoreboard payload has no events list")
        return cls(events=tuple(Event.from_dict(e) for e in events if isinstance(e, dict)))
