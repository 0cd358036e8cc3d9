from datetime import datetime
from enum import Enum
from typing import Any, Iterable, Mapping

EVENT_CSV_HEADERS = [
    "Title",
    "Description",
    "Start Date",
    "End Date",
    "Event Type",
    "Location Type",
    "Physical Address",
    "Virtual URL",
    "Attendees Count",
    "Is Public",
]


def _field(event: Any, name: str) -> Any:
    if isinstance(event, Mapping):
        return event.get(name)
    return getattr(event, name, None)


def _quoted(value: Any) -> str:
    text = "" if value is None else str(value)
    return '"' + text.replace('"', '""') + '"'


def _raw(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)


def export_events_to_csv(events: Iterable[Any]) -> str:
    """
    이벤트 목록을 CSV 문자열로 변환
    - 빈 목록이면 "" 반환
    - Title/Description/Physical Address만 따옴표로 감싸고 내부 따옴표는 두 번
    - 나머지 필드는 그대로, Attendees Count 기본 0, Is Public은 Yes/No
    """
    events = list(events)
    if not events:
        return ""

    lines = [",".join(EVENT_CSV_HEADERS)]
    for event in events:
        row = [
            _quoted(_field(event, "title")),
            _quoted(_field(event, "description")),
            _raw(_field(event, "start_datetime")),
            _raw(_field(event, "end_datetime")),
            _raw(_field(event, "event_type")),
            _raw(_field(event, "location_type")),
            _quoted(_field(event, "physical_address")),
            _raw(_field(event, "virtual_meeting_url")),
            str(_field(event, "attendees_count") or 0),
            "Yes" if _field(event, "is_public") else "No",
        ]
        lines.append(",".join(row))
    return "\n".join(lines)
