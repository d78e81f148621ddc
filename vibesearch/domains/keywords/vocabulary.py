"""
Vocabulary - Static keyword lists, synonym groups, and location tables.

All lists are ordered; keyword matching and query expansion depend on that
order to stay reproducible.
"""

from __future__ import annotations

import re

__all__ = [
    "AMBIANCE_KEYWORDS",
    "TIME_KEYWORDS",
    "OCCASION_KEYWORDS",
    "WEATHER_KEYWORDS",
    "SEASON_KEYWORDS",
    "GROUP_SIZE_KEYWORDS",
    "BUDGET_KEYWORDS",
    "VOCABULARY_SOURCES",
    "AMBIANCE_MAP",
    "COZY_TRIGGERS",
    "CAFE_TERMS",
    "CAFE_BIAS_SUFFIX",
    "LOCATION_PATTERNS",
    "LOCATION_MAP",
    "CITY_PATTERNS",
    "CATEGORY_MAP",
    "EXPLICIT_CATEGORY_TERMS",
]

# Core ambiance keywords for location search
AMBIANCE_KEYWORDS = [
    "cozy", "intimate", "romantic", "quiet", "peaceful", "calm",
    "lively", "energetic", "vibrant", "bustling", "crowded", "busy",
    "trendy", "hip", "modern", "traditional", "classic",
    "outdoor", "patio", "rooftop", "garden", "terrace",
    "dim", "bright", "warm", "cool", "ambient", "atmospheric",
]

TIME_KEYWORDS = [
    "morning", "afternoon", "evening", "night", "dawn", "dusk",
    "breakfast", "lunch", "dinner", "brunch", "happy hour",
]

OCCASION_KEYWORDS = [
    "business", "meeting", "work", "professional",
    "date", "romantic", "anniversary", "valentine",
    "family", "kids", "children", "group", "friends",
    "solo", "alone", "personal", "leisure", "vacation",
]

WEATHER_KEYWORDS = ["sunny", "rainy", "cloudy", "snowy", "hot", "cold", "warm", "cool"]

SEASON_KEYWORDS = ["spring", "summer", "fall", "autumn", "winter"]

GROUP_SIZE_KEYWORDS = ["solo", "alone", "couple", "group", "family", "friends", "team", "party"]

BUDGET_KEYWORDS = ["cheap", "budget", "affordable", "expensive", "luxury", "high-end", "mid-range"]

# Order here is the enumeration order of KeywordIndex
VOCABULARY_SOURCES = (
    AMBIANCE_KEYWORDS,
    TIME_KEYWORDS,
    OCCASION_KEYWORDS,
    WEATHER_KEYWORDS,
    SEASON_KEYWORDS,
    GROUP_SIZE_KEYWORDS,
    BUDGET_KEYWORDS,
)

# Query expansion: token -> full synonym group
AMBIANCE_MAP: dict[str, list[str]] = {
    "cozy": ["cozy", "warm", "intimate", "comfortable", "relaxing"],
    "cafe": ["coffee", "cafe", "coffeeshop", "coffeehouse", "espresso"],
    "quiet": ["quiet", "peaceful", "serene", "calm", "tranquil"],
    "lively": ["lively", "energetic", "vibrant", "bustling", "active"],
    "romantic": ["romantic", "intimate", "cozy", "candlelit", "date"],
    "work": ["work", "laptop", "wifi", "quiet", "productive"],
    "study": ["study", "quiet", "focused", "academic", "library-like"],
}

# Cafe bias rule inputs
COZY_TRIGGERS = frozenset({"cozy", "cute", "warm", "intimate", "comfortable", "relaxing"})
CAFE_TERMS = frozenset({"cafe", "coffee", "coffeeshop"})
CAFE_BIAS_SUFFIX = "coffee cafe"

_CITY_NAMES = (
    r"washington\s+dc|san\s+francisco|new\s+york|los\s+angeles|"
    r"chicago|boston|seattle|miami|denver"
)

# Checked in order; first match wins
LOCATION_PATTERNS = [
    # "trip: washington dc jun 25 - 27" -> "trip: washington dc"
    re.compile(rf"trip:\s*(?:{_CITY_NAMES})\b", re.IGNORECASE),
    # standalone full names
    re.compile(rf"\b(?:{_CITY_NAMES})\b", re.IGNORECASE),
    # abbreviations
    re.compile(r"\b(?:dc|sf|nyc|la|chi|boston|seattle|miami|denver)\b", re.IGNORECASE),
]

# Canonical display names, keyed by whitespace-collapsed lower-case text
LOCATION_MAP: dict[str, str] = {
    "dc": "Washington DC",
    "sf": "San Francisco, CA",
    "nyc": "New York, NY",
    "la": "Los Angeles, CA",
    "chi": "Chicago, IL",
    "boston": "Boston, MA",
    "seattle": "Seattle, WA",
    "miami": "Miami, FL",
    "denver": "Denver, CO",
    "washington dc": "Washington DC",
    "san francisco": "San Francisco, CA",
    "new york": "New York, NY",
    "los angeles": "Los Angeles, CA",
    "chicago": "Chicago, IL",
}

# City aliases used when parsing a place-search request: (pattern, display name)
CITY_PATTERNS = [
    (re.compile(r"\b(?:washington dc|washington|dc)\b", re.IGNORECASE), "Washington DC"),
    (re.compile(r"\b(?:san francisco|sf|bay area)\b", re.IGNORECASE), "San Francisco, CA"),
    (re.compile(r"\b(?:new york|nyc|manhattan)\b", re.IGNORECASE), "New York, NY"),
    (re.compile(r"\b(?:los angeles|la|hollywood)\b", re.IGNORECASE), "Los Angeles, CA"),
    (re.compile(r"\b(?:chicago|chi)\b", re.IGNORECASE), "Chicago, IL"),
    (re.compile(r"\b(?:boston|beantown)\b", re.IGNORECASE), "Boston, MA"),
    (re.compile(r"\b(?:seattle|emerald city)\b", re.IGNORECASE), "Seattle, WA"),
    (re.compile(r"\b(?:miami|south beach)\b", re.IGNORECASE), "Miami, FL"),
    (re.compile(r"\b(?:denver|mile high)\b", re.IGNORECASE), "Denver, CO"),
]

# Business-search category aliases
CATEGORY_MAP: dict[str, str] = {
    # Coffee
    "coffee": "coffee",
    "cafe": "coffee",
    "coffeeshop": "coffee",
    "coffeehouse": "coffee",
    "espresso": "coffee",
    "cappuccino": "coffee",
    "latte": "coffee",
    "mocha": "coffee",
    "americano": "coffee",
    # Food
    "restaurant": "restaurants",
    "food": "restaurants",
    "dining": "restaurants",
    "meal": "restaurants",
    "lunch": "restaurants",
    "dinner": "restaurants",
    "breakfast": "restaurants",
    "brunch": "restaurants",
    # Drinks
    "bar": "bars",
    "pub": "bars",
    "brewery": "breweries",
    "wine": "wine_bars",
    "cocktail": "cocktailbars",
    "drinks": "bars",
    "alcohol": "bars",
    # Tea and other beverages
    "tea": "tea_rooms",
    "teahouse": "tea_rooms",
    "matcha": "tea_rooms",
    "boba": "bubble_tea",
    "bubbletea": "bubble_tea",
    "smoothie": "juice_bars",
    "juice": "juice_bars",
    # Study and work
    "study": "study_spaces",
    "work": "coworking",
    "coworking": "coworking",
    "workspace": "coworking",
    "library": "libraries",
    "quiet": "libraries",
    # Books and culture
    "bookstore": "bookstores",
    "books": "bookstores",
    "reading": "bookstores",
    "record": "music_stores",
    "vinyl": "music_stores",
    "music": "music_venues",
    # Nightlife
    "club": "nightlife",
    "nightlife": "nightlife",
    "karaoke": "karaoke",
    "pool": "billiards",
    "arcade": "arcades",
    "bowling": "bowling",
    "casino": "casinos",
    # Wellness
    "massage": "massage",
    "wellness": "wellness",
    "meditation": "wellness",
    "yoga": "yoga",
    "pilates": "fitness",
    # Food specialties
    "pizza": "pizza",
    "sushi": "sushi",
    "ice_cream": "ice_cream",
    "icecream": "ice_cream",
    "dessert": "desserts",
    "bakery": "bakeries",
    "pastry": "bakeries",
    "deli": "delis",
    "sandwich": "delis",
    # Outdoors
    "hiking": "hiking",
    "trail": "hiking",
    "garden": "gardens",
    "botanical": "gardens",
    "zoo": "zoos",
    "aquarium": "aquariums",
    "mini_golf": "mini_golf",
    "golf": "golf",
    # Services
    "laundry": "laundromats",
    "dry_cleaning": "dry_cleaning",
    "auto": "auto_services",
    "mechanic": "auto_services",
    "pet": "pet_services",
    "veterinarian": "veterinarians",
    "vet": "veterinarians",
    # Transportation
    "airport": "airports",
    "train": "train_stations",
    "subway": "train_stations",
    "metro": "train_stations",
    "bus": "bus_stations",
    "taxi": "transportation",
    "uber": "transportation",
    # Ambiance
    "cozy": "cozy_spaces",
    "romantic": "romantic",
    "date": "date_spots",
    "family": "family_friendly",
    "kids": "family_friendly",
    "outdoor": "outdoor_dining",
    "rooftop": "rooftop",
    "view": "scenic_views",
    "waterfront": "waterfront",
    "historic": "historic",
    "modern": "modern",
    "vintage": "vintage",
    "hipster": "trendy",
    "trendy": "trendy",
    "upscale": "upscale",
    "casual": "casual",
    # Other
    "hotel": "hotels",
    "shopping": "shopping",
    "retail": "shopping",
    "store": "shopping",
    "market": "shopping",
    "grocery": "grocery",
    "gas": "gas_stations",
    "parking": "parking",
    "bank": "banks",
    "atm": "banks",
    "pharmacy": "pharmacy",
    "hospital": "hospitals",
    "doctor": "hospitals",
    "dentist": "dentists",
    "gym": "fitness",
    "fitness": "fitness",
    "spa": "beautysvc",
    "salon": "beautysvc",
    "beauty": "beautysvc",
    "movie": "movietheaters",
    "theater": "movietheaters",
    "cinema": "movietheaters",
    "museum": "museums",
    "art": "museums",
    "park": "parks",
    "beach": "beaches",
    "school": "education",
    "university": "education",
    "college": "education",
}

# Stripped from the business-search term; descriptive words are kept
EXPLICIT_CATEGORY_TERMS = [
    "coffee", "cafe", "coffeeshop", "coffeehouse", "espresso",
    "restaurant", "food", "dining",
    "bar", "pub", "brewery", "wine", "cocktail",
    "hotel", "shopping", "store", "market",
]
