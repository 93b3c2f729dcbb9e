"""
Community leaderboard and impact totals.
"""

from pydantic import BaseModel, Field
from typing import List


class LeaderboardEntry(BaseModel):
    name: str
    score: int
    missions_joined: int = 0
    sightings: int = 0
    stories: int = 0


class LeaderboardResponse(BaseModel):
    total_reports: int = Field(..., description="Active reports on file")
    total_missions: int
    total_trees: int = Field(..., description="Sum of trees_planted across missions")
    total_sightings: int
    top3: List[LeaderboardEntry] = Field(default_factory=list)
    others: List[LeaderboardEntry] = Field(default_factory=list, description="Everyone after the top three")
