from espn_ffl.models.base import BuildContext, EntityBuilder
from espn_ffl.models.boxscore import Boxscore, BoxscoreSide
from espn_ffl.models.draft_player import DraftPlayer
from espn_ffl.models.free_agent_player import FreeAgentPlayer
from espn_ffl.models.league import League
from espn_ffl.models.nfl_game import NFLGame, NFLGameTeam
from espn_ffl.models.team import Team, TeamOwner

__all__ = [
    "BuildContext",
    "Boxscore",
    "BoxscoreSide",
    "DraftPlayer",
    "EntityBuilder",
    "FreeAgentPlayer",
    "League",
    "NFLGame",
    "NFLGameTeam",
    "Team",
    "TeamOwner",
]
