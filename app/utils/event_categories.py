from typing import Any, Mapping

EVENT_TYPES = [
    {"id": "general", "label": "General", "description": "General community events"},
    {"id": "workshop", "label": "Workshop", "description": "Hands-on learning sessions"},
    {"id": "networking", "label": "Networking", "description": "Meet founders, investors and peers"},
    {"id": "pitch", "label": "Pitch", "description": "Startup pitch events and demo days"},
    {"id": "hackathon", "label": "Hackathon", "description": "Build something in a limited time"},
    {"id": "mentorship", "label": "Mentorship", "description": "Sessions with experienced mentors"},
    {"id": "conference", "label": "Conference", "description": "Large multi-speaker events"},
    {"id": "seminar", "label": "Seminar", "description": "Talks on a focused topic"},
    {"id": "webinar", "label": "Webinar", "description": "Online presentations"},
]

LOCATION_TYPES = [
    {"id": "virtual", "label": "Virtual"},
    {"id": "physical", "label": "In-person"},
    {"id": "hybrid", "label": "Hybrid"},
]

EVENT_TYPE_IDS = frozenset(t["id"] for t in EVENT_TYPES)


def format_location(event: Any) -> str:
    """이벤트 장소 표시 문자열"""
    if isinstance(event, Mapping):
        location_type = event.get("location_type")
        address = event.get("physical_address")
    else:
        location_type = getattr(event, "location_type", None)
        address = getattr(event, "physical_address", None)

    location_type = getattr(location_type, "value", location_type)
    if location_type == "virtual":
        return "Virtual Event"
    if location_type == "physical":
        return address or "In-person Event"
    return "Hybrid Event"
