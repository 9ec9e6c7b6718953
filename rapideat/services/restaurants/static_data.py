"""
Built-in restaurant catalog.

Served whenever the database is not configured, unreachable or empty, and
used by scripts/seed_restaurants.py as the default seed.
"""

from typing import Any, Dict, List

IMAGE_BASE = "https://images.unsplash.com/"

SAMPLE_RESTAURANTS: List[Dict[str, Any]] = [
    {
        "slug": "spice-route-indiranagar",
        "name": "Spice Route",
        "description": "Slow-cooked North Indian curries and tandoor breads.",
        "cuisines": ["North Indian", "Mughlai"],
        "locality": "Indiranagar",
        "city": "Bengaluru",
        "area_name": "100 Feet Road",
        "rating": 4.6,
        "review_count": 2310,
        "delivery_time": 32,
        "cost_for_two": 700,
        "distance": 2.4,
        "image_url": IMAGE_BASE + "photo-1585937421612-70a008356fbe",
        "offer": {
            "title": "20% OFF",
            "description": "Up to ₹120 on orders above ₹499",
            "coupon_code": "SPICE20",
            "discount_percentage": 20,
            "max_discount": 120,
        },
        "promoted": True,
        "tags": ["bestseller"],
        "eta_description": "30-35 mins",
    },
    {
        "slug": "dosa-corner-jayanagar",
        "name": "Dosa Corner",
        "description": "Crisp dosas, idlis and filter coffee since 1978.",
        "cuisines": ["South Indian"],
        "locality": "Jayanagar",
        "city": "Bengaluru",
        "area_name": "4th Block",
        "rating": 4.7,
        "review_count": 5120,
        "delivery_time": 22,
        "cost_for_two": 250,
        "distance": 1.1,
        "image_url": IMAGE_BASE + "photo-1668236543090-82eba5ee5976",
        "is_pure_veg": True,
        "tags": ["breakfast", "pure veg"],
        "eta_description": "20-25 mins",
    },
    {
        "slug": "dragon-bowl-koramangala",
        "name": "Dragon Bowl",
        "description": "Wok-tossed noodles, dim sum and Sichuan specials.",
        "cuisines": ["Chinese", "Asian"],
        "locality": "Koramangala",
        "city": "Bengaluru",
        "area_name": "5th Block",
        "rating": 4.2,
        "review_count": 1480,
        "delivery_time": 35,
        "cost_for_two": 600,
        "distance": 3.2,
        "image_url": IMAGE_BASE + "photo-1563245372-f21724e3856d",
        "offer": {"title": "Free delivery", "description": "On your first order"},
        "tags": ["spicy"],
        "eta_description": "35-40 mins",
    },
    {
        "slug": "napoli-slice-hsr",
        "name": "Napoli Slice",
        "description": "Wood-fired Neapolitan pizza and fresh pasta.",
        "cuisines": ["Italian", "Pizza"],
        "locality": "HSR Layout",
        "city": "Bengaluru",
        "area_name": "Sector 2",
        "rating": 4.5,
        "review_count": 980,
        "delivery_time": 40,
        "cost_for_two": 1100,
        "distance": 4.8,
        "image_url": IMAGE_BASE + "photo-1513104890138-7c749659a591",
        "offer": {
            "title": "Buy 1 Get 1",
            "description": "On medium pizzas",
            "coupon_code": "BOGO",
        },
        "tags": ["wood fired"],
        "eta_description": "40-45 mins",
    },
    {
        "slug": "biryani-house-btm",
        "name": "Biryani House",
        "description": "Dum biryani in the Hyderabadi style with mirchi ka salan.",
        "cuisines": ["Biryani", "Hyderabadi"],
        "locality": "BTM Layout",
        "city": "Bengaluru",
        "area_name": "2nd Stage",
        "rating": 4.4,
        "review_count": 3890,
        "delivery_time": 30,
        "cost_for_two": 500,
        "distance": 2.9,
        "image_url": IMAGE_BASE + "photo-1563379091339-03b21ab4a4f8",
        "promoted": True,
        "tags": ["bestseller"],
        "eta_description": "25-30 mins",
    },
    {
        "slug": "green-leaf-whitefield",
        "name": "Green Leaf",
        "description": "Salads, grain bowls and cold-pressed juices.",
        "cuisines": ["Healthy Food", "Salads"],
        "locality": "Whitefield",
        "city": "Bengaluru",
        "area_name": "ITPL Main Road",
        "rating": 4.1,
        "review_count": 410,
        "delivery_time": 28,
        "cost_for_two": 450,
        "distance": 6.5,
        "image_url": IMAGE_BASE + "photo-1512621776951-a57141f2eefd",
        "is_pure_veg": True,
        "tags": ["healthy", "pure veg"],
        "eta_description": "25-30 mins",
    },
    {
        "slug": "burger-yard-mg-road",
        "name": "Burger Yard",
        "description": "Smash burgers, loaded fries and thick shakes.",
        "cuisines": ["Burgers", "American", "Fast Food"],
        "locality": "MG Road",
        "city": "Bengaluru",
        "area_name": "Church Street",
        "rating": 4.3,
        "review_count": 1760,
        "delivery_time": 25,
        "cost_for_two": 400,
        "distance": 3.7,
        "image_url": IMAGE_BASE + "photo-1568901346375-23c9450c58cd",
        "offer": {
            "title": "₹100 OFF",
            "description": "On orders above ₹399",
            "coupon_code": "YARD100",
            "max_discount": 100,
        },
        "eta_description": "20-25 mins",
    },
    {
        "slug": "sakura-sushi-ub-city",
        "name": "Sakura Sushi",
        "description": "Nigiri, maki and ramen from a Tokyo-trained chef.",
        "cuisines": ["Japanese", "Sushi", "Asian"],
        "locality": "UB City",
        "city": "Bengaluru",
        "area_name": "Vittal Mallya Road",
        "rating": 4.8,
        "review_count": 620,
        "delivery_time": 45,
        "cost_for_two": 1800,
        "distance": 5.1,
        "image_url": IMAGE_BASE + "photo-1579871494447-9811cf80d66c",
        "tags": ["premium"],
        "eta_description": "45-50 mins",
    },
    {
        "slug": "chaat-street-malleshwaram",
        "name": "Chaat Street",
        "description": "Pani puri, pav bhaji and Mumbai street snacks.",
        "cuisines": ["Street Food", "North Indian"],
        "locality": "Malleshwaram",
        "city": "Bengaluru",
        "area_name": "Sampige Road",
        "rating": 4.0,
        "review_count": 2240,
        "delivery_time": 20,
        "cost_for_two": 200,
        "distance": 1.8,
        "image_url": IMAGE_BASE + "photo-1601050690597-df0568f70950",
        "is_pure_veg": True,
        "tags": ["snacks", "pure veg"],
        "eta_description": "15-20 mins",
    },
    {
        "slug": "sweet-tooth-electronic-city",
        "name": "Sweet Tooth",
        "description": "Cakes, brownies and Indian mithai.",
        "cuisines": ["Desserts", "Bakery"],
        "locality": "Electronic City",
        "city": "Bengaluru",
        "area_name": "Phase 1",
        "rating": 4.5,
        "review_count": 870,
        "delivery_time": 26,
        "cost_for_two": 350,
        "distance": 7.2,
        "image_url": IMAGE_BASE + "photo-1551024601-bec78aea704b",
        "is_pure_veg": True,
        "offer": {"title": "10% OFF", "discount_percentage": 10, "max_discount": 50},
        "tags": ["desserts"],
        "eta_description": "25-30 mins",
    },
    {
        "slug": "coastal-catch-marathahalli",
        "name": "Coastal Catch",
        "description": "Mangalorean fish curry, ghee roast and neer dosa.",
        "cuisines": ["Seafood", "South Indian"],
        "locality": "Marathahalli",
        "city": "Bengaluru",
        "area_name": "Outer Ring Road",
        "rating": 4.3,
        "review_count": 1130,
        "delivery_time": 38,
        "cost_for_two": 900,
        "distance": 5.6,
        "image_url": IMAGE_BASE + "photo-1559847844-5315695dadae",
        "tags": ["seafood"],
        "eta_description": "35-40 mins",
    },
    {
        "slug": "taco-loco-bellandur",
        "name": "Taco Loco",
        "description": "Street tacos, burritos and nachos.",
        "cuisines": ["Mexican"],
        "locality": "Bellandur",
        "city": "Bengaluru",
        "area_name": "Sarjapur Road",
        "rating": 3.9,
        "review_count": 350,
        "delivery_time": 33,
        "cost_for_two": 550,
        "distance": 4.3,
        "image_url": IMAGE_BASE + "photo-1565299585323-38d6b0865b47",
        "eta_description": "30-35 mins",
    },
]
