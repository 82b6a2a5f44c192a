"""
Central data model definitions used across the scrapers.

Every record knows how to turn itself into the exact dict that ends up in the
JSON output files, so field names (including the camelCase ones) are defined
in one place.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class CourseRecord:
    """
    One upper-division course from the bulletin, e.g. COMP-3705 "Compilers".
    """

    course: str
    title: str

    def to_dict(self) -> Dict[str, Any]:
        return {"course": self.course, "title": self.title}


@dataclass
class AthleticEvent:
    """
    The event currently shown in the athletics homepage scoreboard carousel.

    Fields are raw page text and may be empty when a selector did not match.
    """

    du_team: str
    opponent: str
    date: str

    def to_dict(self) -> Dict[str, Any]:
        return {"duTeam": self.du_team, "opponent": self.opponent, "date": self.date}


@dataclass
class CalendarEvent:
    """
    One entry of the university events calendar.

    time and description are omitted from the output when empty.
    """

    title: str
    date: str
    time: Optional[str] = None
    description: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"title": self.title, "date": self.date}
        if self.time:
            out["time"] = self.time
        if self.description:
            out["description"] = self.description
        return out


@dataclass(frozen=True)
class MonthWindow:
    """
    Date filter for one calendar month: start inclusive, end exclusive (YYYY-MM-DD).
    """

    start: str
    end: str
