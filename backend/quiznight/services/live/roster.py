"""Teams and players of a live session.

The roster only grows: teams and players are never removed. Scores are
changed by scoring during the results transition, never from here.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List
from uuid import uuid4

from .errors import NotFound

if TYPE_CHECKING:
    from .session import Session


@dataclass(eq=False)
class Player:
    name: str
    team: 'Team' = field(repr=False)
    score: int = 0
    id: str = field(default_factory=lambda: uuid4().hex)

    @property
    def team_id(self) -> str:
        return self.team.id

    def to_dict(self) -> dict:
        return {'id': self.id, 'name': self.name, 'score': self.score}


@dataclass(eq=False)
class Team:
    name: str
    players: List[Player] = field(default_factory=list)
    id: str = field(default_factory=lambda: uuid4().hex)

    @property
    def score(self) -> int:
        return sum(p.score for p in self.players)

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'name': self.name,
            'score': self.score,
            'players': [p.to_dict() for p in self.players],
        }

    def to_public_dict(self) -> dict:
        return {'id': self.id, 'name': self.name, 'player_count': len(self.players)}


def create_team(session: 'Session', name: str) -> Team:
    with session.lock:
        team = Team(name=name)
        session.teams.append(team)
    return team


def find_team(session: 'Session', team_id: str) -> Team:
    for team in session.teams:
        if team.id == team_id:
            return team
    raise NotFound('Team not found')


def join_team(session: 'Session', team_id: str, player_name: str) -> Player:
    with session.lock:
        team = find_team(session, team_id)
        player = Player(name=player_name, team=team)
        team.players.append(player)
    return player


def find_player(session: 'Session', player_id: str) -> Player:
    for team in session.teams:
        for player in team.players:
            if player.id == player_id:
                return player
    raise NotFound('Player not found')


def iter_players(session: 'Session'):
    for team in session.teams:
        yield from team.players


def teams_snapshot(session: 'Session') -> List[dict]:
    """Score snapshot of every team and its players, as sent in events."""
    return [team.to_dict() for team in session.teams]
