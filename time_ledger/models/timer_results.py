"""
Result types returned by the timer operations.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class StartResult:
    """
    Outcome of starting a timer.

    Attributes:
        segment: Period segment the entry was appended to
        date: Entry date (YYYY-MM-DD, document timezone)
        start: Start wall-clock time as written to the segment
        description: Description stored with the entry, if any
    """

    segment: str
    date: str
    start: str
    description: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        result = {'segment': self.segment, 'date': self.date, 'start': self.start}
        if self.description:
            result['description'] = self.description
        return result


@dataclass(frozen=True)
class StopResult:
    """
    Outcome of stopping a timer.

    Attributes:
        segment: Period segment holding the closed entry
        end: End instant in the document timezone
        end_time: End wall-clock time as written to the segment
        duration: Elapsed time as HH:MM:SS
        row_number: Segment row that was closed
    """

    segment: str
    end: datetime
    end_time: str
    duration: str
    row_number: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            'segment': self.segment,
            'end': self.end.isoformat(),
            'endTime': self.end_time,
            'duration': self.duration,
        }
