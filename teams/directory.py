from __future__ import annotations

"""Team label lookups, including the fixed labels for sentinel team ids."""

from typing import Dict, Iterable, Optional

from league_context import PLAYER_FREE_AGENT, PLAYER_RETIRED, PLAYER_UNDRAFTED

from .types import Team


SENTINEL_ABBREVS: Dict[int, str] = {
    PLAYER_FREE_AGENT: "FA",
    PLAYER_UNDRAFTED: "DP",
    PLAYER_RETIRED: "RET",
}

SENTINEL_NAMES: Dict[int, str] = {
    PLAYER_FREE_AGENT: "Free Agent",
    PLAYER_UNDRAFTED: "Draft Prospect",
    PLAYER_RETIRED: "Retired",
}


class TeamDirectory:
    """Read-only tid -> Team index."""

    def __init__(self, teams: Iterable[Team] = ()) -> None:
        self._teams: Dict[int, Team] = {int(t.tid): t for t in teams}

    def __len__(self) -> int:
        return len(self._teams)

    def get(self, tid: int) -> Optional[Team]:
        return self._teams.get(int(tid))

    def teams(self) -> list[Team]:
        return [self._teams[k] for k in sorted(self._teams)]

    def abbrev(self, tid: Optional[int]) -> Optional[str]:
        if tid is None:
            return None
        t = self.get(tid)
        if t is not None:
            return t.abbrev
        return SENTINEL_ABBREVS.get(int(tid))

    def region(self, tid: Optional[int]) -> str:
        if tid is None:
            return ""
        t = self.get(tid) if int(tid) >= 0 else None
        return t.region if t is not None else ""

    def name(self, tid: Optional[int]) -> Optional[str]:
        if tid is None:
            return None
        if int(tid) < 0:
            return SENTINEL_NAMES.get(int(tid))
        t = self.get(tid)
        return t.name if t is not None else None
