"""
Rule-based travel helpers: packing lists, activity suggestions and chat replies.

No model is called; every answer is derived from the request and simple
weather flags.
"""

import math
from datetime import date
from typing import Any, Dict, List, Optional

from app.core.errors import ValidationError

DEFAULT_TEMP = 25
COLD_BELOW = 15
HOT_ABOVE = 30


def weather_flags(temp: Optional[float], description: Optional[str]) -> Dict[str, Any]:
    temp = DEFAULT_TEMP if temp is None else temp
    return {
        "temp": temp,
        "is_rainy": "rain" in (description or "").lower(),
        "is_cold": temp < COLD_BELOW,
        "is_hot": temp > HOT_ABOVE,
    }


def trip_length(start_date: date, end_date: date) -> int:
    return max(1, (end_date - start_date).days)


def build_packing_list(
    destination: Optional[str],
    start_date: Optional[date],
    end_date: Optional[date],
    temp: Optional[float] = None,
    description: Optional[str] = None,
):
    """Returns ``(items, flags)``; items are dicts with category/item/packed."""
    if not destination or not start_date or not end_date:
        raise ValidationError("destination, startDate and endDate are required")

    days = trip_length(start_date, end_date)
    flags = weather_flags(temp, description)
    is_cold, is_hot, is_rainy = flags["is_cold"], flags["is_hot"], flags["is_rainy"]

    if is_cold:
        jacket = "Warm jacket"
    elif is_hot:
        jacket = "Light jacket"
    else:
        jacket = "Medium jacket"

    clothing = [
        f"{days + 2} Underwear",
        f"{days} Pairs of socks",
        jacket,
        f"{math.ceil(days / 2)} Pants/jeans",
        f"{days} Shirts/tops",
    ]
    if is_hot:
        clothing += ["Shorts", "Sunglasses"]
    if is_cold:
        clothing += ["Gloves", "Scarf"]
    if is_rainy:
        clothing += ["Raincoat", "Umbrella"]

    categories = {
        "Clothing": clothing,
        "Toiletries": [
            "Toothbrush & toothpaste",
            "Shampoo & conditioner",
            "Deodorant",
            "Sunscreen (SPF 50+)",
            "Medications",
        ],
        "Electronics": ["Phone charger", "Power bank", "Universal adapter", "Camera"],
        "Documents": [
            "Passport/ID",
            "Travel tickets",
            "Hotel confirmations",
            "Travel insurance",
        ],
        "Essentials": [
            "Wallet & cards",
            "Cash (local currency)",
            "Hand sanitizer",
            "Face masks",
            "Water bottle",
        ],
    }

    items = [
        {"category": category, "item": item, "packed": False}
        for category, names in categories.items()
        for item in names
    ]
    return items, flags


def suggest_activities(
    destination: Optional[str] = None, weather: Optional[str] = None
) -> List[Dict[str, str]]:
    destination = destination or "your destination"
    weather = weather or ""
    good_weather = "rain" not in weather.lower()

    if good_weather:
        first = {
            "title": "🏞️ Outdoor Exploration",
            "description": f"Perfect {weather} weather for exploring {destination}'s natural beauty.",
        }
        third = {
            "title": "📸 Photography Walk",
            "description": f"Capture stunning photos around {destination}.",
        }
    else:
        first = {
            "title": "🏛️ Indoor Attractions",
            "description": f"Visit museums and indoor attractions in {destination}.",
        }
        third = {
            "title": "☕ Cozy Café Hopping",
            "description": f"Explore local cafés in {destination}.",
        }

    return [
        {**first, "time": "Morning to Afternoon", "weather_suitability": "Ideal"},
        {
            "title": "🍽️ Local Cuisine Tour",
            "description": f"Discover authentic restaurants in {destination}.",
            "time": "Lunch/Dinner",
            "weather_suitability": "Perfect",
        },
        {**third, "time": "Flexible", "weather_suitability": "Excellent"},
        {
            "title": "🛍️ Shopping & Markets",
            "description": f"Browse local markets in {destination}.",
            "time": "Afternoon",
            "weather_suitability": "Good",
        },
    ]


GENERIC_REPLY = """I'm your travel assistant! I can help you with:
- Weather forecasts
- Route planning
- Packing lists
- Activity suggestions
- Accommodation finding

What would you like to know?"""


def chat_reply(
    message: Optional[str],
    weather_temp: Optional[float] = None,
    weather_location: Optional[str] = None,
) -> str:
    if not message:
        raise ValidationError("message is required")

    text = message.lower()

    def mentions(*words):
        return any(word in text for word in words)

    # Order matters: the first matching topic wins
    if mentions("weather", "temperature"):
        reply = "I can help you check the weather! Go to the Weather tab and enter your destination."
        if weather_temp is not None and weather_location:
            reply += f" Currently it's {weather_temp}°C in {weather_location}."
        return reply
    if mentions("pack", "bring"):
        return (
            "I can generate a packing list for you! Use the Trip Planner tab and "
            "I'll suggest items based on your destination's weather."
        )
    if mentions("route", "how to get"):
        return "I can help you plan your route! Go to the Maps tab and enter your source and destination."
    if mentions("activity", "things to do", "do"):
        return (
            "Looking for things to do? Use the Trip Planner's AI suggest feature "
            "to get weather-based activity recommendations!"
        )
    if mentions("hotel", "accommodation"):
        return (
            "I can help you find accommodations! Check the Itinerary tab where you "
            "can search for hotels near your destination."
        )
    if mentions("hi", "hello", "hey"):
        return (
            "Hey there! I'm your travel assistant. I can help with weather, routes, "
            "packing lists and suggestions. What would you like to do?"
        )
    return GENERIC_REPLY
