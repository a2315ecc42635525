# Static listings until a real places provider is wired in.


def accommodations(location: str = "Unknown"):
    return [
        {
            "name": f"Grand Hotel {location}",
            "address": f"123 Main St, {location}",
            "rating": 4.5,
            "price": "$120/night",
            "amenities": ["WiFi", "Pool", "Breakfast"],
            "image": "https://images.unsplash.com/photo-1566073771259-6a8506099945?w=400",
        },
        {
            "name": f"Budget Inn {location}",
            "address": f"456 Side St, {location}",
            "rating": 3.8,
            "price": "$65/night",
            "amenities": ["WiFi", "Parking"],
            "image": "https://images.unsplash.com/photo-1551882547-ff40c63fe5fa?w=400",
        },
        {
            "name": f"Luxury Resort {location}",
            "address": f"789 Beach Rd, {location}",
            "rating": 4.9,
            "price": "$280/night",
            "amenities": ["WiFi", "Pool", "Spa", "Restaurant", "Gym"],
            "image": "https://images.unsplash.com/photo-1582719478250-c89cae4dc85b?w=400",
        },
    ]


def restaurants(location: str = "Unknown"):
    return [
        {
            "name": "Local Flavors",
            "cuisine": "Traditional",
            "rating": 4.6,
            "priceRange": "$$",
            "address": f"101 Food St, {location}",
            "image": "https://images.unsplash.com/photo-1517248135467-4c7edcad34c4?w=400",
        },
        {
            "name": "Seafood Paradise",
            "cuisine": "Seafood",
            "rating": 4.8,
            "priceRange": "$$$",
            "address": f"202 Harbor View, {location}",
            "image": "https://images.unsplash.com/photo-1559339352-11d035aa65de?w=400",
        },
        {
            "name": "Street Food Corner",
            "cuisine": "Street Food",
            "rating": 4.3,
            "priceRange": "$",
            "address": f"303 Market Square, {location}",
            "image": "https://images.unsplash.com/photo-1555939594-58d7cb561ad1?w=400",
        },
    ]


def events(location: str = "Unknown"):
    return [
        {
            "name": f"{location} Music Festival",
            "date": "2025-02-15",
            "time": "18:00",
            "location": f"Central Park, {location}",
            "category": "Music",
            "price": "$35",
            "image": "https://images.unsplash.com/photo-1470229722913-7c0e2dbbafd3?w=400",
        },
        {
            "name": "Food & Wine Expo",
            "date": "2025-02-20",
            "time": "12:00",
            "location": f"Convention Center, {location}",
            "category": "Food",
            "price": "Free",
            "image": "https://images.unsplash.com/photo-1555244162-803834f70033?w=400",
        },
        {
            "name": "Art Gallery Opening",
            "date": "2025-02-18",
            "time": "19:00",
            "location": f"Downtown Gallery, {location}",
            "category": "Art",
            "price": "$15",
            "image": "https://images.unsplash.com/photo-1460661419201-fd4cecdf8a8b?w=400",
        },
    ]
