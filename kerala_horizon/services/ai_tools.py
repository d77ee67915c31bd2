"""
AI Tools - concierge recommendations, surprise itineraries, translation,
packing lists, budget splits, safety alerts and weather-based suggestions.
"""
import json
import logging
from datetime import datetime, timedelta
from typing import Optional

from .llm_client import get_llm_client

logger = logging.getLogger(__name__)

CONCIERGE_SYSTEM_PROMPT = """You are an AI travel concierge for Kerala, India.
Reply with a single JSON object with the keys: attractions, restaurants,
accommodations, transportation, cultural_experiences, budget_tips."""

RECOMMENDATION_KEYS = [
    "attractions",
    "restaurants",
    "accommodations",
    "transportation",
    "cultural_experiences",
    "budget_tips",
]

CURATED_RECOMMENDATIONS = {
    "attractions": [
        {"name": "Backwaters of Alleppey", "description": "Experience the serene backwaters on a houseboat",
         "price": "₹2000-5000", "duration": "4-8 hours", "rating": 4.8, "category": "nature"},
        {"name": "Munnar Tea Gardens", "description": "Visit the tea plantations and enjoy scenic views",
         "price": "₹500-1000", "duration": "2-4 hours", "rating": 4.6, "category": "nature"},
        {"name": "Kochi Fort Area", "description": "Explore the historic fort area with colonial architecture",
         "price": "₹200-500", "duration": "3-5 hours", "rating": 4.4, "category": "culture"},
    ],
    "restaurants": [
        {"name": "Paragon Restaurant", "cuisine": "Kerala", "price_range": "₹200-500", "rating": 4.5,
         "specialties": ["Fish Curry", "Appam", "Biryani"]},
        {"name": "Grand Hotel Restaurant", "cuisine": "Multi-cuisine", "price_range": "₹500-1000", "rating": 4.3,
         "specialties": ["Seafood", "Traditional Thali"]},
    ],
    "accommodations": [
        {"name": "KTDC Hotel Kochi", "type": "Government Hotel", "price": "₹2000-3000", "rating": 4.2},
        {"name": "Kerala Homestay", "type": "Homestay", "price": "₹1500-2500", "rating": 4.6},
    ],
    "transportation": [
        "Use KSRTC buses for inter-city travel",
        "Local autos and cabs available for city transport",
        "Houseboats for backwater experiences",
        "Trains connect major cities efficiently",
    ],
    "cultural_experiences": [
        "Kathakali performance at Kerala Kathakali Centre",
        "Traditional cooking class",
        "Visit to spice plantations",
        "Ayurvedic spa treatment",
    ],
    "budget_tips": [
        "Stay in PWD rest houses for affordable accommodation",
        "Use public transport for cost-effective travel",
        "Try local street food for authentic flavors",
        "Visit free attractions like beaches and temples",
    ],
}

SURPRISE_ITINERARIES = {
    "adventure": {
        "morning": "Early morning trek to hill station",
        "afternoon": "White water rafting or kayaking",
        "evening": "Campfire and stargazing",
    },
    "relaxation": {
        "morning": "Ayurvedic spa treatment",
        "afternoon": "Beach relaxation or backwater cruise",
        "evening": "Sunset meditation session",
    },
    "cultural": {
        "morning": "Temple visit and traditional breakfast",
        "afternoon": "Museum and art gallery tour",
        "evening": "Kathakali performance",
    },
    "family": {
        "morning": "Wildlife sanctuary visit",
        "afternoon": "Theme park or beach activities",
        "evening": "Family dinner at traditional restaurant",
    },
}

LANGUAGE_NAMES = {
    "en": "English",
    "hi": "Hindi",
    "ml": "Malayalam",
    "ta": "Tamil",
    "ar": "Arabic",
    "de": "German",
}

# Supported source -> target pairs
TRANSLATION_PAIRS = {
    "en": {"hi", "ml", "ta", "ar", "de"},
    "hi": {"en", "ml"},
    "ml": {"en", "hi"},
}

PHRASEBOOK = {
    "hello": {"hi": "नमस्ते", "ml": "നമസ്കാരം", "ta": "வணக்கம்", "ar": "مرحبا", "de": "Hallo"},
    "thank you": {"hi": "धन्यवाद", "ml": "നന്ദി", "ta": "நன்றி", "ar": "شكرا", "de": "Danke"},
    "how much": {"hi": "कितना", "ml": "എത്ര", "ta": "எவ்வளவு", "ar": "كم", "de": "Wie viel"},
    "water": {"hi": "पानी", "ml": "വെള്ളം", "ta": "தண்ணீர்", "ar": "ماء", "de": "Wasser"},
}

TRANSLATION_CONFIDENCE = 0.95

BASE_PACKING_ITEMS = [
    "Clothes (light cotton recommended)",
    "Comfortable walking shoes",
    "Sunscreen (SPF 30+)",
    "Mosquito repellent",
    "Basic first aid kit",
    "Camera/phone charger",
    "Water bottle",
]

SEASONAL_ITEMS = {
    "summer": ["Light cotton clothes", "Hat", "Sunglasses"],
    "monsoon": ["Raincoat", "Umbrella", "Waterproof bags"],
    "winter": ["Light jacket", "Long sleeves"],
}

ACTIVITY_ITEMS = {
    "trekking": ["Hiking boots", "Backpack", "Trekking poles"],
    "beach": ["Swimwear", "Beach towel", "Flip flops"],
    "temple": ["Modest clothing", "Scarf for covering head"],
    "backwater": ["Light clothes", "Camera", "Binoculars"],
}

RECOMMENDED_ITEMS = ["Kerala guidebook", "Power bank", "Universal adapter", "Snacks for travel"]

PACKING_TIPS = [
    "Pack light, Kerala weather is warm and humid",
    "Bring rain gear during monsoon season (June-September)",
    "Comfortable walking shoes are essential",
    "Modest clothing for temple visits",
    "Sunscreen and mosquito repellent recommended",
]


def build_concierge_prompt(
    location: str,
    interests: list[str],
    budget: Optional[str],
    duration: Optional[str],
    group_size: int,
    preferences: dict,
) -> str:
    return "\n".join([
        "Provide personalized concierge recommendations for this traveller:",
        f"Location: {location}",
        f"Interests: {', '.join(interests) or 'Not specified'}",
        f"Budget: {budget or 'Not specified'}",
        f"Duration: {duration or 'Not specified'}",
        f"Group Size: {group_size}",
        f"Preferences: {json.dumps(preferences)}",
    ])


async def concierge_recommendations(
    location: str,
    interests: Optional[list[str]] = None,
    budget: Optional[str] = None,
    duration: Optional[str] = None,
    group_size: int = 1,
    preferences: Optional[dict] = None,
) -> tuple[dict, str]:
    """
    Recommendations from the LLM, or the curated set when it fails.

    Returns:
        (recommendations, source) where source is "ai" or "curated"
    """
    prompt = build_concierge_prompt(location, interests or [], budget, duration, group_size, preferences or {})
    try:
        response = await get_llm_client().chat_json([
            {"role": "system", "content": CONCIERGE_SYSTEM_PROMPT},
            {"role": "user", "content": prompt},
        ])
    except Exception as e:
        logger.warning(f"AI concierge failed, using curated recommendations: {e}")
        return CURATED_RECOMMENDATIONS, "curated"

    if not any(response.get(key) for key in RECOMMENDATION_KEYS):
        logger.warning("AI concierge returned no recommendations, using curated set")
        return CURATED_RECOMMENDATIONS, "curated"

    return {key: response.get(key, []) for key in RECOMMENDATION_KEYS}, "ai"


def surprise_itinerary(mood: str) -> dict:
    """Morning/afternoon/evening plan for a mood; unknown moods get adventure."""
    return SURPRISE_ITINERARIES.get(mood, SURPRISE_ITINERARIES["adventure"])


def translate(text: str, from_lang: str = "auto", to_lang: str = "en") -> dict:
    """
    Phrase-level translation between the supported languages.

    Unsupported pairs return the text unchanged.
    """
    translated = text
    if to_lang in TRANSLATION_PAIRS.get(from_lang, set()):
        phrase = PHRASEBOOK.get(text.strip().lower().rstrip("!?."))
        if from_lang == "en" and phrase and to_lang in phrase:
            translated = phrase[to_lang]
        else:
            translated = f"{LANGUAGE_NAMES[to_lang]}: {text}"
    return {
        "original_text": text,
        "translated_text": translated,
        "from_lang": from_lang,
        "to_lang": to_lang,
        "confidence": TRANSLATION_CONFIDENCE,
    }


def packing_list(season: Optional[str] = None, activities: Optional[list[str]] = None) -> dict:
    activity_items = []
    for activity in activities or []:
        for item in ACTIVITY_ITEMS.get(activity, []):
            if item not in activity_items:
                activity_items.append(item)
    return {
        "essentials": list(BASE_PACKING_ITEMS),
        "seasonal": list(SEASONAL_ITEMS.get(season or "", [])),
        "activities": activity_items,
        "recommended": list(RECOMMENDED_ITEMS),
    }


# Share of the budget and ways to save in each spending category
EXPENSE_SPLIT = {
    "accommodation": (0.4, ["Budget hotels", "Homestays", "Hostels"]),
    "food": (0.3, ["Local restaurants", "Street food", "Cooking classes"]),
    "transport": (0.2, ["Public transport", "Shared cabs", "Bicycle rental"]),
    "activities": (0.1, ["Free walking tours", "Museum visits", "Nature trails"]),
}

EXPENSE_TIPS = [
    "Book accommodation in advance for better rates",
    "Try local street food for authentic experience",
    "Use public transport to save money",
    "Look for free activities and attractions",
]


def optimize_expenses(budget: float, duration: int, destination: str, travelers: int = 1) -> dict:
    """
    Split a trip budget across accommodation, food, transport and activities.

    Each category gets a fixed share of the total along with its per-day and
    per-person amounts.
    """
    categories = {}
    for name, (share, suggestions) in EXPENSE_SPLIT.items():
        amount = round(budget * share, 2)
        categories[name] = {
            "budget": amount,
            "per_day": round(amount / duration, 2),
            "per_person": round(amount / travelers, 2),
            "suggestions": list(suggestions),
        }
    return {
        "destination": destination,
        "total_budget": budget,
        "daily_budget": round(budget / duration, 2),
        "categories": categories,
        "tips": list(EXPENSE_TIPS),
    }


SAFETY_ALERTS = [
    {"id": "safety_001", "type": "weather", "severity": "high", "offset": (0.0, 0.0), "valid_hours": 6,
     "message": "Heavy rainfall expected in the area",
     "recommendations": ["Avoid outdoor activities", "Carry umbrella"]},
    {"id": "safety_002", "type": "traffic", "severity": "medium", "offset": (0.01, 0.01), "valid_hours": 2,
     "message": "Road construction causing delays",
     "recommendations": ["Use alternative route", "Allow extra time"]},
]


def safety_alerts(lat: float, lng: float, now: Optional[datetime] = None) -> list[dict]:
    now = now or datetime.now()
    alerts = []
    for entry in SAFETY_ALERTS:
        d_lat, d_lng = entry["offset"]
        alerts.append({
            "id": entry["id"],
            "type": entry["type"],
            "severity": entry["severity"],
            "message": entry["message"],
            "location": {"lat": round(lat + d_lat, 6), "lng": round(lng + d_lng, 6)},
            "valid_until": (now + timedelta(hours=entry["valid_hours"])).isoformat(),
            "recommendations": list(entry["recommendations"]),
        })
    return alerts


WEATHER_PLANS = {
    "dry": {
        "activities": [
            {"activity": "Beach visit", "reason": "Perfect weather for beach activities",
             "time": "Morning (9 AM - 12 PM)", "location": "Kovalam Beach"},
            {"activity": "Indoor museum tour", "reason": "Avoid afternoon heat",
             "time": "Afternoon (2 PM - 5 PM)", "location": "Napier Museum"},
            {"activity": "Evening walk", "reason": "Cooler temperature in the evening",
             "time": "Evening (6 PM - 8 PM)", "location": "Marine Drive"},
        ],
        "clothing": ["Light cotton clothes", "Sunglasses", "Hat", "Sunscreen"],
        "precautions": ["Stay hydrated", "Avoid direct sun exposure", "Use sunscreen"],
    },
    "wet": {
        "activities": [
            {"activity": "Ayurvedic massage", "reason": "Monsoon is the traditional season for treatments",
             "time": "Morning (9 AM - 12 PM)", "location": "Kottakkal Arya Vaidya Sala"},
            {"activity": "Kathakali performance", "reason": "Indoor show away from the rain",
             "time": "Evening (5 PM - 7 PM)", "location": "Kerala Kathakali Centre, Fort Kochi"},
            {"activity": "Spice market visit", "reason": "Covered market, easy to duck out of showers",
             "time": "Afternoon (2 PM - 4 PM)", "location": "Jew Town, Mattancherry"},
        ],
        "clothing": ["Raincoat", "Quick-dry clothes", "Waterproof sandals", "Umbrella"],
        "precautions": ["Avoid waterfalls and beaches during heavy rain", "Watch for landslide warnings in the hills"],
    },
}


def weather_recommendations(condition: str) -> dict:
    """Activities, clothing and precautions suited to a weather condition."""
    plan = WEATHER_PLANS["wet" if condition in ("Rainy", "Stormy") else "dry"]
    return {
        "condition": condition,
        "recommendations": [dict(item) for item in plan["activities"]],
        "clothing": list(plan["clothing"]),
        "precautions": list(plan["precautions"]),
    }
