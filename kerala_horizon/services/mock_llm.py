"""
Mock LLM Client - offline stand-in for the chat providers.
Answers are built from the Kerala catalog so that every place it mentions
is one the rest of the API also knows about.
"""
import json
import logging
import re
from typing import Optional

from .catalog import DESTINATIONS, SIGHTS, mentioned_destinations

logger = logging.getLogger(__name__)

DEFAULT_ROUTE = ["Kochi", "Munnar", "Thekkady", "Alleppey", "Varkala"]
SLOT_TIMES = ["09:00", "13:00", "17:00"]


class MockLLMClient:
    """Deterministic chat client grounded in the catalog."""

    def __init__(self):
        self.model = "mock-kerala"

    async def chat(
        self,
        messages: list[dict],
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        json_mode: bool = False
    ) -> str:
        user_msg = next((m["content"] for m in reversed(messages) if m["role"] == "user"), "")
        system_msg = next((m["content"] for m in messages if m["role"] == "system"), "")

        if "concierge" in system_msg.lower() or "concierge" in user_msg.lower():
            return json.dumps(self._recommendations(user_msg))

        if "itinerary" in system_msg.lower() or "itinerary" in user_msg.lower():
            return self._itinerary(user_msg)

        return self._answer(user_msg)

    def _itinerary(self, prompt: str) -> str:
        """Write a day-by-day plan in the bullet format travellers expect."""
        match = re.search(r"(\d+)\s*days?", prompt.lower())
        days = int(match.group(1)) if match else 3

        route = [d for d in mentioned_destinations(prompt) if d in SIGHTS] or DEFAULT_ROUTE
        lines = []
        for day in range(1, days + 1):
            destination = route[(day - 1) % len(route)]
            lines.append(f"Day {day}: {destination}")
            for time, (activity, cost, _hint) in zip(SLOT_TIMES, SIGHTS[destination]):
                price = f" (₹{cost})" if cost else ""
                lines.append(f"- {time} {activity} in {destination}{price}")
            lines.append("")

        logger.debug(f"Mock itinerary generated for {days} days over {route}")
        return "\n".join(lines).strip()

    def _recommendations(self, prompt: str) -> dict:
        route = mentioned_destinations(prompt) or ["Kochi"]
        base = route[0]
        sights = SIGHTS.get(base, SIGHTS["Kochi"])
        return {
            "attractions": [
                {"name": activity, "location": base, "price": f"₹{cost}" if cost else "Free"}
                for activity, cost, _hint in sights
            ],
            "restaurants": [
                {"name": "Paragon Restaurant", "cuisine": "Kerala", "price_range": "₹200-500"},
                {"name": "Kayees Rahmathulla Cafe", "cuisine": "Malabar", "price_range": "₹150-300"},
            ],
            "accommodations": [
                {"name": "KTDC Hotel Kochi", "type": "Government Hotel", "price": "₹2000-3000"},
                {"name": "Kerala Homestay", "type": "Homestay", "price": "₹1500-2500"},
            ],
            "transportation": [
                "Use KSRTC buses for inter-city travel",
                f"Local autos and cabs are easy to find in {base}",
            ],
            "cultural_experiences": ["Kathakali performance", "Spice plantation visit"],
            "budget_tips": ["Try local street food", "Travel by public transport"],
        }

    def _answer(self, question: str) -> str:
        lower = question.lower()
        destinations = mentioned_destinations(question)
        place = destinations[0] if destinations else "Kerala"

        if re.search(r"food|eat|restaurant|dining", lower):
            return f"In {place}, try appam with stew, Kerala fish curry and a banana-leaf sadya."
        if re.search(r"weather|rain|monsoon|season", lower):
            return "October to March is the most pleasant season; the monsoon runs from June to September."
        if place in DESTINATIONS and place in SIGHTS:
            highlights = ", ".join(activity for activity, _cost, _hint in SIGHTS[place])
            return f"Highlights in {place}: {highlights}."
        return "Kerala offers backwaters, hill stations, beaches and rich cultural traditions. Where are you headed?"
