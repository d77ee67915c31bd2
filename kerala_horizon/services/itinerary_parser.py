"""
Itinerary Parser - turns free-form AI itinerary text into itinerary items.

Expected shape (markdown decorations are tolerated):

    Day 1: Kochi
    - 09:00 Walk the Chinese fishing nets (₹0)
    - 2 PM Kathakali show by boat, Rs 500

Lines that are neither day headers nor bullets are ignored.
"""
import logging
import re
from typing import Optional

from ..models.trip import ItineraryItem, TransportMode
from .catalog import mentioned_destinations

logger = logging.getLogger(__name__)

DEFAULT_TIME = "09:00"
DEFAULT_LOCATION = "Kerala"
DEFAULT_DURATION = "2 hours"

DAY_HEADER = re.compile(r"^[#*_\s]*day\s*(\d+)\b", re.IGNORECASE)
BULLET = re.compile(r"^\s*(?:[-•*]|\d+[.)])\s+(.+)$")
CLOCK_TIME = re.compile(r"\b(\d{1,2}):(\d{2})\s*(am|pm)?\b", re.IGNORECASE)
MERIDIEM_TIME = re.compile(r"\b(\d{1,2})\s*(am|pm)\b", re.IGNORECASE)
COST = re.compile(r"(?:₹|\brs\.?|\binr)\s*([\d,]+(?:\.\d+)?)", re.IGNORECASE)
COST_SUFFIX = re.compile(r"\b([\d,]+(?:\.\d+)?)\s*(?:inr|rupees)\b", re.IGNORECASE)
COST_PARENTHETICAL = re.compile(r"\(\s*(?:₹|rs\.?|inr)[^)]*\)", re.IGNORECASE)
LEADING_TIME = re.compile(r"^(?:\d{1,2}(?::\d{2})?\s*(?:am|pm)?)\s*[-:–]?\s*", re.IGNORECASE)

# Checked in order; the first keyword found decides
TRANSPORT_KEYWORDS = [
    (re.compile(r"\bwalk", re.IGNORECASE), TransportMode.WALKING),
    (re.compile(r"\btrain\b", re.IGNORECASE), TransportMode.TRAIN),
    (re.compile(r"\b(?:flight|fly)", re.IGNORECASE), TransportMode.FLIGHT),
    (re.compile(r"boat|\bship\b|\bferry\b|\bcruise", re.IGNORECASE), TransportMode.SHIP),
]


def _to_24h(hour: int, minute: int, meridiem: Optional[str]) -> Optional[str]:
    if meridiem:
        if not 1 <= hour <= 12:
            return None
        meridiem = meridiem.lower()
        if meridiem == "pm" and hour != 12:
            hour += 12
        elif meridiem == "am" and hour == 12:
            hour = 0
    if hour > 23 or minute > 59:
        return None
    return f"{hour:02d}:{minute:02d}"


def extract_time(text: str) -> str:
    """First clock time in the text as HH:MM, else 09:00."""
    match = CLOCK_TIME.search(text)
    if match:
        parsed = _to_24h(int(match.group(1)), int(match.group(2)), match.group(3))
        if parsed:
            return parsed
    match = MERIDIEM_TIME.search(text)
    if match:
        parsed = _to_24h(int(match.group(1)), 0, match.group(2))
        if parsed:
            return parsed
    return DEFAULT_TIME


def extract_cost(text: str) -> float:
    """First rupee amount in the text, else 0."""
    match = COST.search(text) or COST_SUFFIX.search(text)
    if not match:
        return 0.0
    try:
        return float(match.group(1).replace(",", ""))
    except ValueError:
        return 0.0


def detect_transport(text: str) -> TransportMode:
    for pattern, mode in TRANSPORT_KEYWORDS:
        if pattern.search(text):
            return mode
    return TransportMode.CAR


def detect_location(text: str) -> str:
    destinations = mentioned_destinations(text)
    return destinations[0] if destinations else DEFAULT_LOCATION


def clean_activity(text: str) -> str:
    """Strip markdown, the leading time and any price note from a bullet."""
    activity = text.replace("**", "").replace("__", "").strip()
    activity = COST_PARENTHETICAL.sub("", activity)
    if CLOCK_TIME.match(activity) or MERIDIEM_TIME.match(activity):
        activity = LEADING_TIME.sub("", activity, count=1)
    return activity.strip(" -:,") or text.strip()


def parse_ai_itinerary(text: str, duration: Optional[int] = None) -> list[ItineraryItem]:
    """
    Parse itinerary text into day-tagged items.

    Args:
        text: Free-form itinerary as written by the LLM
        duration: Trip length in days; items for later days are dropped

    Returns:
        Items in the order they appear, with sequential ids
    """
    items: list[ItineraryItem] = []
    current_day = 1
    dropped = 0

    for raw_line in (text or "").splitlines():
        line = raw_line.strip()
        if not line:
            continue

        header = DAY_HEADER.match(line)
        if header:
            current_day = max(int(header.group(1)), 1)
            continue

        bullet = BULLET.match(line)
        if not bullet:
            continue

        if duration is not None and current_day > duration:
            dropped += 1
            continue

        body = bullet.group(1).strip()
        items.append(ItineraryItem(
            id=f"item_{len(items) + 1}",
            day=current_day,
            time=extract_time(body),
            activity=clean_activity(body),
            location=detect_location(body),
            duration=DEFAULT_DURATION,
            cost=extract_cost(body),
            transport=detect_transport(body),
        ))

    if dropped:
        logger.info(f"Dropped {dropped} itinerary items beyond day {duration}")
    return items
