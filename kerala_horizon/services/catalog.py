"""
Kerala listings used where no live data source is wired up.

Listings near a point are placed at small offsets from the query coordinates
so that clients can render them on a map.
"""
import math
from datetime import datetime, timedelta
from typing import Optional

from ..models.places import CommunityPost, CulturalEvent, GeoPoint, HotelData

# Known destinations with their coordinates
DESTINATIONS = {
    "Kochi": (9.9312, 76.2673),
    "Fort Kochi": (9.9658, 76.2421),
    "Munnar": (10.0889, 77.0595),
    "Alleppey": (9.4981, 76.3388),
    "Kumarakom": (9.6175, 76.4301),
    "Thekkady": (9.6031, 77.1615),
    "Varkala": (8.7379, 76.7163),
    "Kovalam": (8.4004, 76.9787),
    "Thiruvananthapuram": (8.5241, 76.9366),
    "Wayanad": (11.6854, 76.1320),
    "Kozhikode": (11.2588, 75.7804),
    "Thrissur": (10.5276, 76.2144),
    "Kannur": (11.8745, 75.3704),
    "Athirappilly": (10.2851, 76.5698),
    "Vagamon": (9.6862, 76.9052),
}

# Aliases that should resolve to a destination
DESTINATION_ALIASES = {
    "cochin": "Kochi",
    "ernakulam": "Kochi",
    "alappuzha": "Alleppey",
    "trivandrum": "Thiruvananthapuram",
    "calicut": "Kozhikode",
    "periyar": "Thekkady",
}

# Sights per destination: (activity, typical cost in INR, transport hint)
SIGHTS = {
    "Kochi": [
        ("Walk the Chinese fishing nets at Fort Kochi beach", 0, "walk"),
        ("Tour Mattancherry Palace and the Jew Town spice market", 50, "car"),
        ("Watch a Kathakali performance at the Kerala Kathakali Centre", 500, "car"),
    ],
    "Munnar": [
        ("Visit the Tata tea museum and estates", 200, "car"),
        ("Trek to Eravikulam National Park", 300, "car"),
        ("Sunset at Top Station viewpoint", 0, "car"),
    ],
    "Alleppey": [
        ("Overnight houseboat cruise on the backwaters", 8000, "boat"),
        ("Canoe through the village canals", 800, "boat"),
        ("Relax at Alleppey beach", 0, "walk"),
    ],
    "Thekkady": [
        ("Bamboo rafting in Periyar Tiger Reserve", 2000, "car"),
        ("Spice plantation tour", 400, "car"),
        ("Kalaripayattu martial arts show", 300, "car"),
    ],
    "Varkala": [
        ("Cliff walk and sunset at Varkala beach", 0, "walk"),
        ("Ayurvedic massage session", 1500, "walk"),
        ("Visit Janardhana Swamy temple", 0, "walk"),
    ],
    "Wayanad": [
        ("Hike to Chembra Peak", 500, "car"),
        ("Explore the Edakkal caves", 100, "car"),
        ("Boat ride on Pookode lake", 200, "boat"),
    ],
}

TRIP_TEMPLATES = [
    {
        "id": "template_1",
        "name": "Kerala Backwaters Experience",
        "duration": "3 days",
        "budget": "medium",
        "destinations": ["Alleppey", "Kumarakom", "Kochi"],
        "highlights": ["Houseboat stay", "Backwater cruise", "Local cuisine"],
        "estimated_cost": 15000,
        "difficulty": "easy",
    },
    {
        "id": "template_2",
        "name": "Hill Station Adventure",
        "duration": "4 days",
        "budget": "high",
        "destinations": ["Munnar", "Thekkady", "Vagamon"],
        "highlights": ["Tea plantations", "Wildlife safari", "Trekking"],
        "estimated_cost": 25000,
        "difficulty": "moderate",
    },
    {
        "id": "template_3",
        "name": "Cultural Heritage Tour",
        "duration": "5 days",
        "budget": "medium",
        "destinations": ["Kochi", "Thrissur", "Thiruvananthapuram"],
        "highlights": ["Temples", "Museums", "Traditional arts"],
        "estimated_cost": 20000,
        "difficulty": "easy",
    },
]

# Sample activities for the first days of a generated plan
TEMPLATE_DAY_ACTIVITIES = {
    1: [
        ("09:00", "Arrival and check-in", "Kochi", "1 hour", 0, "car"),
        ("11:00", "Explore Fort Kochi heritage walk", "Fort Kochi", "3 hours", 200, "walking"),
        ("18:00", "Kathakali performance", "Kochi", "2 hours", 500, "car"),
    ],
    2: [
        ("08:00", "Drive to Munnar tea gardens", "Munnar", "4 hours", 1500, "car"),
        ("14:00", "Tea museum visit", "Munnar", "2 hours", 200, "car"),
    ],
    3: [
        ("10:00", "Houseboat cruise on the backwaters", "Alleppey", "6 hours", 8000, "ship"),
    ],
}

ACCOMMODATIONS = [
    {
        "id": "acc_001",
        "name": "KTDC Hotel Kochi",
        "type": "hotel",
        "category": "government",
        "rating": 4.2,
        "price": 2500,
        "offset": (0.001, 0.001),
        "city": "Kochi",
        "address": "Near Marine Drive, Kochi",
        "amenities": ["WiFi", "Parking", "Restaurant", "AC"],
        "distance": "0.5 km",
    },
    {
        "id": "acc_002",
        "name": "PWD Rest House Munnar",
        "type": "rest_house",
        "category": "government",
        "rating": 3.8,
        "price": 1200,
        "offset": (0.002, -0.001),
        "city": "Munnar",
        "address": "Munnar Hill Station",
        "amenities": ["WiFi", "Parking", "Garden"],
        "distance": "2.1 km",
    },
    {
        "id": "acc_003",
        "name": "Kerala Homestay",
        "type": "homestay",
        "category": "private",
        "rating": 4.5,
        "price": 1800,
        "offset": (-0.001, 0.002),
        "city": "Alleppey",
        "address": "Backwater View, Alleppey",
        "amenities": ["WiFi", "Breakfast", "Boat Ride", "Traditional Food"],
        "distance": "1.8 km",
    },
    {
        "id": "acc_004",
        "name": "Spice Village Eco Resort",
        "type": "resort",
        "category": "luxury",
        "rating": 4.7,
        "price": 4800,
        "offset": (-0.003, -0.002),
        "city": "Thekkady",
        "address": "Kumily Road, Thekkady",
        "amenities": ["WiFi", "Pool", "Spa", "Restaurant", "Nature Walks"],
        "distance": "3.4 km",
    },
]

STAY_FILTERS = {
    "price_range": {"min": 800, "max": 5000},
    "categories": ["government", "private", "luxury"],
    "amenities": ["WiFi", "Parking", "Restaurant", "AC", "Pool", "Spa"],
}

RESTAURANTS = [
    {
        "id": "rest_001",
        "name": "Paragon Restaurant",
        "rating": 4.5,
        "price_level": 2,
        "offset": (0.001, 0.001),
        "address": "Near Marine Drive, Kochi",
        "types": ["restaurant", "food", "kerala"],
        "open_now": True,
    },
    {
        "id": "rest_002",
        "name": "Grand Hotel Restaurant",
        "rating": 4.2,
        "price_level": 3,
        "offset": (-0.001, 0.002),
        "address": "Fort Kochi",
        "types": ["restaurant", "seafood", "fine_dining"],
        "open_now": True,
    },
    {
        "id": "rest_003",
        "name": "Kayees Rahmathulla Cafe",
        "rating": 4.4,
        "price_level": 1,
        "offset": (0.002, -0.001),
        "address": "Mattancherry, Kochi",
        "types": ["restaurant", "malabar", "biryani"],
        "open_now": True,
    },
]

CUISINE_GUIDE = {
    "kerala": {
        "name": "Kerala Cuisine",
        "description": "Traditional South Indian cuisine with coconut, rice, and seafood",
        "popular_dishes": [
            {"name": "Appam", "description": "Rice pancakes with coconut milk", "price": "₹50-80"},
            {"name": "Fish Curry", "description": "Traditional Kerala fish curry with coconut", "price": "₹150-250"},
            {"name": "Puttu", "description": "Steamed rice cake with coconut", "price": "₹40-60"},
            {"name": "Sadya", "description": "Vegetarian feast served on a banana leaf", "price": "₹200-400"},
        ],
        "ingredients": ["Coconut", "Rice", "Fish", "Curry Leaves", "Mustard Seeds"],
        "cooking_methods": ["Steaming", "Currying", "Frying", "Boiling"],
        "spice_level": "Medium to Hot",
        "best_time": "Lunch and Dinner",
        "regions": ["Kochi", "Thiruvananthapuram", "Kozhikode", "Kannur"],
    },
    "malabar": {
        "name": "Malabar Cuisine",
        "description": "Northern Kerala cuisine with Arabic influences",
        "popular_dishes": [
            {"name": "Malabar Biryani", "description": "Aromatic rice with meat and spices", "price": "₹180-300"},
            {"name": "Pathiri", "description": "Rice flour flatbread", "price": "₹30-50"},
            {"name": "Kozhikode Halwa", "description": "Sweet confectionery", "price": "₹100-150"},
        ],
        "ingredients": ["Rice", "Meat", "Ghee", "Saffron", "Cardamom"],
        "cooking_methods": ["Dum Cooking", "Grilling", "Roasting"],
        "spice_level": "Medium",
        "best_time": "Dinner",
        "regions": ["Kozhikode", "Kannur", "Malappuram"],
    },
}

COOKING_CLASSES = [
    {
        "id": "cc_001",
        "name": "Traditional Kerala Cooking",
        "instructor": "Chef Rajesh",
        "cuisine": "kerala",
        "duration": "3 hours",
        "max_participants": 8,
        "price": 1500,
        "offset": (0.002, 0.001),
        "address": "Kochi Cooking School",
        "dishes": ["Appam", "Fish Curry", "Vegetable Stew"],
        "includes": ["Ingredients", "Recipe Book", "Certificate"],
        "rating": 4.7,
        "reviews": 156,
    },
    {
        "id": "cc_002",
        "name": "Malabar Biryani Masterclass",
        "instructor": "Chef Amina",
        "cuisine": "malabar",
        "duration": "4 hours",
        "max_participants": 6,
        "price": 2000,
        "offset": (-0.001, -0.002),
        "address": "Kozhikode Culinary Center",
        "dishes": ["Malabar Biryani", "Raita", "Pickle"],
        "includes": ["Premium Ingredients", "Takeaway Portion", "Certificate"],
        "rating": 4.9,
        "reviews": 89,
    },
]

EXPERIENCES = [
    {
        "id": "exp_001",
        "name": "Kathakali Performance",
        "type": "performance",
        "category": "traditional_arts",
        "description": "Traditional Kerala dance-drama performance",
        "offset": (0.001, 0.001),
        "address": "Kerala Kathakali Centre, Kochi",
        "duration": "2 hours",
        "price": 500,
        "rating": 4.7,
        "show_hour": 18,
        "includes": ["Performance", "Makeup Session", "Cultural Explanation"],
    },
    {
        "id": "exp_002",
        "name": "Ayurvedic Treatment",
        "type": "wellness",
        "category": "ayurveda",
        "description": "Traditional Ayurvedic massage and treatment",
        "offset": (-0.002, 0.002),
        "address": "Ayurvedic Resort, Munnar",
        "duration": "3 hours",
        "price": 2500,
        "rating": 4.8,
        "show_hour": 10,
        "includes": ["Consultation", "Treatment", "Herbal Tea"],
    },
    {
        "id": "exp_003",
        "name": "Kalaripayattu Demonstration",
        "type": "performance",
        "category": "martial_arts",
        "description": "Kerala's ancient martial art performed by a local kalari",
        "offset": (0.003, -0.001),
        "address": "Kadathanadan Kalari Centre, Thekkady",
        "duration": "1 hour",
        "price": 300,
        "rating": 4.6,
        "show_hour": 17,
        "includes": ["Performance", "Q&A with performers"],
    },
]

FESTIVALS = [
    {"id": "fest_001", "name": "Attukal Pongala", "category": "temple_festival", "month": 2,
     "city": "Thiruvananthapuram", "description": "Lakhs of women cook pongala offerings around the Attukal temple"},
    {"id": "fest_002", "name": "Vishu", "category": "harvest_festival", "month": 4,
     "city": "Kochi", "description": "Malayalam new year with the Vishukkani and fireworks"},
    {"id": "fest_003", "name": "Thrissur Pooram", "category": "temple_festival", "month": 5,
     "city": "Thrissur", "description": "Caparisoned elephants and percussion ensembles at Vadakkunnathan temple"},
    {"id": "fest_004", "name": "Nehru Trophy Boat Race", "category": "boat_race", "month": 8,
     "city": "Alleppey", "description": "Snake boat race on Punnamada lake"},
    {"id": "fest_005", "name": "Onam", "category": "harvest_festival", "month": 9,
     "city": "Thiruvananthapuram", "description": "Harvest festival with sadya feasts, pookalam and Pulikali"},
    {"id": "fest_006", "name": "Theyyam Season", "category": "ritual_art", "month": 12,
     "city": "Kannur", "description": "Ritual dance performances at village shrines across North Malabar"},
]

STORES = [
    {
        "id": "store_001",
        "name": "Kerala Handicrafts Emporium",
        "category": "handicrafts",
        "offset": (0.001, 0.001),
        "address": "Marine Drive, Kochi",
        "rating": 4.5,
        "specialties": ["Wooden sculptures", "Coir products", "Traditional jewelry"],
        "price_range": "₹500-5000",
        "timings": "10:00 AM - 8:00 PM",
    },
    {
        "id": "store_002",
        "name": "Spice Market Kochi",
        "category": "spices",
        "offset": (-0.002, 0.002),
        "address": "Jew Town, Fort Kochi",
        "rating": 4.7,
        "specialties": ["Black pepper", "Cardamom", "Cinnamon", "Turmeric"],
        "price_range": "₹200-2000",
        "timings": "9:00 AM - 7:00 PM",
    },
    {
        "id": "store_003",
        "name": "Kairali Handloom Store",
        "category": "textiles",
        "offset": (0.002, -0.002),
        "address": "MG Road, Thiruvananthapuram",
        "rating": 4.3,
        "specialties": ["Kasavu sarees", "Mundu", "Handloom fabric"],
        "price_range": "₹800-8000",
        "timings": "10:00 AM - 9:00 PM",
    },
]

EMERGENCY_CONTACTS = [
    {"name": "Police", "number": "100", "type": "police"},
    {"name": "Ambulance", "number": "108", "type": "medical"},
    {"name": "Fire Service", "number": "101", "type": "fire"},
    {"name": "Tourist Helpline", "number": "1800-425-4747", "type": "tourist"},
    {"name": "Women Helpline", "number": "1091", "type": "women_safety"},
]

NEARBY_SERVICES = [
    {"name": "Kochi General Hospital", "type": "hospital", "distance": "2.1 km",
     "phone": "+91-484-2358001", "offset": (0.01, 0.01)},
    {"name": "Ernakulam Police Station", "type": "police", "distance": "1.5 km",
     "phone": "+91-484-2361000", "offset": (-0.005, 0.005)},
]

TRANSPORT_HUBS = {
    "bus_stations": [{
        "id": "bs_001", "name": "KSRTC Bus Station", "type": "bus_station",
        "offset": (0.001, 0.001), "distance": "0.5 km",
        "routes": ["Kochi-Thiruvananthapuram", "Kochi-Kozhikode"],
    }],
    "train_stations": [{
        "id": "ts_001", "name": "Ernakulam Junction", "type": "train_station",
        "offset": (-0.002, 0.002), "distance": "1.2 km", "code": "ERS",
    }],
    "airports": [{
        "id": "ap_001", "name": "Cochin International Airport", "type": "airport",
        "offset": (-0.01, -0.01), "distance": "25 km", "code": "COK",
    }],
    "ev_stations": [{
        "id": "ev_001", "name": "EV Charging Station - Kochi", "type": "ev_station",
        "offset": (0.003, -0.003), "distance": "0.8 km",
        "connectors": ["Type 2", "CHAdeMO"], "available": True,
    }],
    "parking_spots": [{
        "id": "ps_001", "name": "Marine Drive Parking", "type": "parking",
        "offset": (-0.001, -0.001), "distance": "0.3 km", "available": True, "rate": "₹20/hour",
    }],
}

BUS_ROUTES = [
    {"id": "1", "route_number": "KSRTC-001", "departure_time": "06:00", "arrival_time": "10:30",
     "fare": 150, "available_seats": 25, "bus_type": "fast", "operator": "KSRTC",
     "status": "on-time", "distance": "180 km", "duration": "4h 30m"},
    {"id": "2", "route_number": "SWIFT-002", "departure_time": "08:30", "arrival_time": "12:45",
     "fare": 200, "available_seats": 15, "bus_type": "ac", "operator": "KSRTC",
     "status": "on-time", "distance": "180 km", "duration": "4h 15m"},
]

TRAIN_SCHEDULES = [
    {"train_number": "12625", "train_name": "Kerala Express", "departure_time": "11:30",
     "arrival_time": "06:00+1", "fare": 450, "available_seats": 120, "status": "on-time",
     "duration": "18h 30m", "class": "SL"},
    {"train_number": "12623", "train_name": "Mangala Express", "departure_time": "22:45",
     "arrival_time": "16:30+1", "fare": 520, "available_seats": 85, "status": "on-time",
     "duration": "17h 45m", "class": "3A"},
]

FLIGHTS = [
    {"flight_number": "AI-501", "airline": "Air India", "from": "Mumbai", "to": "Kochi",
     "departure_airport": "BOM", "scheduled_departure": "14:30", "actual_departure": "14:45",
     "scheduled_arrival": "16:45", "actual_arrival": "17:00", "status": "delayed",
     "gate": "A12", "terminal": "T1", "delay": 15},
    {"flight_number": "6E-682", "airline": "IndiGo", "from": "Bengaluru", "to": "Kochi",
     "departure_airport": "BLR", "scheduled_departure": "09:10", "actual_departure": "09:10",
     "scheduled_arrival": "10:20", "actual_arrival": "10:20", "status": "on-time",
     "gate": "B4", "terminal": "T1", "delay": 0},
]

CAB_SERVICES = [
    {"service": "Uber", "estimates": [
        {"type": "Go", "price": "₹150", "duration": "15 min"},
        {"type": "Premier", "price": "₹200", "duration": "15 min"},
    ]},
    {"service": "Ola", "estimates": [
        {"type": "Mini", "price": "₹120", "duration": "12 min"},
        {"type": "Sedan", "price": "₹180", "duration": "12 min"},
    ]},
    {"service": "Local Cab", "estimates": [
        {"type": "Auto", "price": "₹80", "duration": "20 min"},
        {"type": "Cab", "price": "₹160", "duration": "18 min"},
    ]},
]

WATER_SCHEDULES = [
    {"service": "Kochi Water Metro", "departure": "08:00", "arrival": "08:30", "fare": 20,
     "status": "available", "capacity": 100, "occupied": 60},
    {"service": "SWTD Ferry", "departure": "09:00", "arrival": "09:20", "fare": 15,
     "status": "available", "capacity": 50, "occupied": 30},
    {"service": "Kochi Water Metro", "departure": "17:30", "arrival": "18:00", "fare": 20,
     "status": "available", "capacity": 100, "occupied": 85},
]

EV_STATIONS = [
    {"id": "ev_001", "name": "Kochi EV Charging Station", "offset": (0.003, -0.003),
     "connector_types": ["CCS", "CHAdeMO", "Type 2"], "power": "50 kW", "available": 2, "total": 4,
     "price": "₹15/kWh", "amenities": ["Restroom", "Cafe", "WiFi"]},
    {"id": "ev_002", "name": "KSEB Fast Charger", "offset": (-0.006, 0.004),
     "connector_types": ["CCS", "Type 2"], "power": "30 kW", "available": 1, "total": 2,
     "price": "₹12/kWh", "amenities": ["Restroom", "Parking"]},
]

PARKING_SPOTS = [
    {"id": "park_001", "name": "MG Road Parking", "offset": (0.001, 0.001), "type": "paid",
     "price": "₹20/hour", "available": 15, "total": 50, "amenities": ["Security", "CCTV"]},
    {"id": "park_002", "name": "Marine Drive Parking", "offset": (-0.001, -0.001), "type": "free",
     "price": "Free", "available": 8, "total": 20, "amenities": ["Security"]},
]

TRAFFIC_ALERTS = [
    {"id": "traffic_001", "type": "congestion", "severity": "medium", "offset": (0.002, 0.001),
     "message": "Heavy traffic on MG Road due to construction",
     "estimated_delay": "15 minutes", "alternative_route": "Use Marine Drive"},
    {"id": "traffic_002", "type": "accident", "severity": "high", "offset": (0.1, 0.08),
     "message": "Accident on NH66 near Aluva",
     "estimated_delay": "30 minutes", "alternative_route": "Use State Highway 1"},
]

# Average door-to-door speeds used for offline route estimates
ROUTE_SPEEDS_KMH = {
    "driving": 40,
    "transit": 30,
    "bicycling": 15,
    "walking": 5,
}
# Roads wind; straight-line distance times this is closer to the real trip
ROAD_FACTOR = 1.3

SEED_POSTS = [
    {
        "id": "post_001",
        "author_id": "seed",
        "author": "Traveler123",
        "title": "Amazing Backwater Experience in Alleppey",
        "content": "Just spent an incredible day on the backwaters...",
        "category": "travel_tips",
        "likes": 45,
        "comments": 12,
        "location": "Alleppey",
        "created_at": datetime(2024, 1, 10, 14, 30),
    },
    {
        "id": "post_002",
        "author_id": "seed",
        "author": "FoodieExplorer",
        "title": "Best Street Food in Kochi",
        "content": "Found some amazing local delicacies...",
        "category": "food",
        "likes": 32,
        "comments": 8,
        "location": "Kochi",
        "created_at": datetime(2024, 1, 9, 16, 45),
    },
]

APP_SETTINGS = {
    "languages": [
        {"code": "en", "name": "English"},
        {"code": "hi", "name": "Hindi"},
        {"code": "ml", "name": "Malayalam"},
        {"code": "ta", "name": "Tamil"},
        {"code": "ar", "name": "Arabic"},
        {"code": "de", "name": "German"},
    ],
    "currencies": [
        {"code": "INR", "name": "Indian Rupee", "symbol": "₹"},
        {"code": "USD", "name": "US Dollar", "symbol": "$"},
        {"code": "EUR", "name": "Euro", "symbol": "€"},
    ],
    "themes": ["light", "dark", "auto"],
    "accessibility": {
        "font_size": ["small", "medium", "large"],
        "contrast": ["normal", "high"],
        "voice_navigation": True,
    },
}


def _place(entry: dict, lat: float, lng: float) -> dict:
    """Copy a listing, swapping its offset for a location near (lat, lng)."""
    listing = {k: v for k, v in entry.items() if k not in ("offset", "address", "city")}
    d_lat, d_lng = entry.get("offset", (0.0, 0.0))
    listing["location"] = {
        "lat": round(lat + d_lat, 6),
        "lng": round(lng + d_lng, 6),
    }
    if "address" in entry:
        listing["location"]["address"] = entry["address"]
    if "city" in entry:
        listing["location"]["city"] = entry["city"]
    return listing


def resolve_destination(name: str) -> Optional[str]:
    """Match a free-text place name against the known destinations."""
    lower = name.strip().lower()
    if lower in DESTINATION_ALIASES:
        return DESTINATION_ALIASES[lower]
    for destination in DESTINATIONS:
        if destination.lower() == lower:
            return destination
    return None


def accommodations_near(lat: float, lng: float) -> list[HotelData]:
    return [HotelData.model_validate(_place(entry, lat, lng)) for entry in ACCOMMODATIONS]


def find_accommodation(accommodation_id: str) -> Optional[dict]:
    return next((a for a in ACCOMMODATIONS if a["id"] == accommodation_id), None)


def restaurants_near(lat: float, lng: float) -> list[dict]:
    return [_place(entry, lat, lng) for entry in RESTAURANTS]


def cooking_classes_near(lat: float, lng: float, cuisine: str = "all") -> list[dict]:
    classes = [c for c in COOKING_CLASSES if cuisine == "all" or c["cuisine"] == cuisine]
    upcoming = datetime.now().replace(hour=10, minute=0, second=0, microsecond=0) + timedelta(days=3)
    return [{**_place(c, lat, lng), "next_class": upcoming.isoformat()} for c in classes]


def experiences_near(lat: float, lng: float, category: str = "all") -> list[CulturalEvent]:
    tomorrow = datetime.now() + timedelta(days=1)
    results = []
    for entry in EXPERIENCES:
        if category != "all" and entry["category"] != category:
            continue
        listing = _place(entry, lat, lng)
        listing["next_show"] = tomorrow.replace(hour=listing.pop("show_hour"), minute=0, second=0, microsecond=0)
        results.append(CulturalEvent.model_validate(listing))
    return results


def festival_calendar(month: Optional[int] = None) -> list[CulturalEvent]:
    events = []
    for festival in FESTIVALS:
        if month is not None and festival["month"] != month:
            continue
        lat, lng = DESTINATIONS[festival["city"]]
        events.append(CulturalEvent(
            id=festival["id"],
            name=festival["name"],
            type="festival",
            category=festival["category"],
            description=festival["description"],
            location=GeoPoint(lat=lat, lng=lng, city=festival["city"]),
            duration="1 day",
            price=0,
            rating=4.8,
            month=festival["month"],
        ))
    return events


def stores_near(lat: float, lng: float, category: str = "all") -> list[dict]:
    return [_place(s, lat, lng) for s in STORES if category == "all" or s["category"] == category]


def nearby_emergency_services(lat: float, lng: float) -> list[dict]:
    return [_place(s, lat, lng) for s in NEARBY_SERVICES]


def transport_hubs_near(lat: float, lng: float) -> dict:
    return {kind: [_place(h, lat, lng) for h in hubs] for kind, hubs in TRANSPORT_HUBS.items()}


def ev_stations_near(lat: float, lng: float, connector: str = "all") -> list[dict]:
    stations = [s for s in EV_STATIONS if connector == "all" or connector in s["connector_types"]]
    return [_place(s, lat, lng) for s in stations]


def parking_near(lat: float, lng: float, kind: str = "all") -> list[dict]:
    return [_place(p, lat, lng) for p in PARKING_SPOTS if kind == "all" or p["type"] == kind]


def traffic_alerts_near(lat: float, lng: float) -> list[dict]:
    return [_place(a, lat, lng) for a in TRAFFIC_ALERTS]


def distance_km(origin: tuple[float, float], destination: tuple[float, float]) -> float:
    """Great-circle distance between two (lat, lng) points."""
    lat1, lng1 = map(math.radians, origin)
    lat2, lng2 = map(math.radians, destination)
    a = math.sin((lat2 - lat1) / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin((lng2 - lng1) / 2) ** 2
    return 6371 * 2 * math.asin(math.sqrt(a))


def estimate_route(origin: str, destination: str, mode: str = "driving") -> Optional[dict]:
    """
    Rough distance and travel time between two known destinations.

    Returns None when either place is not a known destination.
    """
    start = resolve_destination(origin)
    end = resolve_destination(destination)
    if start is None or end is None:
        return None
    km = round(distance_km(DESTINATIONS[start], DESTINATIONS[end]) * ROAD_FACTOR, 1)
    minutes = round(km / ROUTE_SPEEDS_KMH.get(mode, ROUTE_SPEEDS_KMH["driving"]) * 60)
    return {
        "from": start,
        "to": end,
        "mode": mode,
        "distance": {"text": f"{km} km", "value": round(km * 1000)},
        "duration": {"text": f"{minutes // 60}h {minutes % 60}m", "value": minutes * 60},
        "steps": [{
            "instruction": f"Head from {start} to {end}",
            "distance": {"text": f"{km} km", "value": round(km * 1000)},
            "coordinates": dict(zip(("lat", "lng"), DESTINATIONS[start])),
        }],
    }


def seed_posts() -> list[CommunityPost]:
    return [CommunityPost.model_validate(post) for post in SEED_POSTS]


def mentioned_destinations(text: str) -> list[str]:
    """Destinations named in the text, in order of first mention."""
    lower = text.lower()
    hits = []
    for name in [*DESTINATIONS, *DESTINATION_ALIASES]:
        position = lower.find(name.lower())
        if position != -1:
            hits.append((position, resolve_destination(name)))
    found = []
    for _position, destination in sorted(hits):
        if destination not in found:
            found.append(destination)
    return found
