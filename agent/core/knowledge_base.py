"""Wedding knowledge base for Surakshit & Shreyaa.

All factual data the concierge may quote lives here. The system prompt is built
from this mapping, so updates belong here and nowhere else.
"""

from __future__ import annotations

from typing import Any, Dict


WEDDING_INFO: Dict[str, Any] = {
    "couple": {
        "bride": "Shreyaa",
        "groom": "Surakshit",
        "hashtag": "#ShreyaaHuiSurakshit",
        "instagram": "@shreyaahuisurakshit",
    },
    "dates": {
        "day1": "Sunday, 5th July 2026",
        "day2": "Monday, 6th July 2026",
        "checkout": "Tuesday, 7th July 2026 at 10:00 AM",
    },
    "venues": {
        "stay": "InterContinental Jaipur",
        "wedding": "Atlantis Jaipur",
        "sangeet": "Convergence Ballroom, Ground Floor – InterContinental Jaipur",
        "lounge": "The Lounge, Ground Floor (in front of hotel reception) – InterContinental Jaipur",
    },
    "stay_info": {
        "check_in": "1:00 PM on 5th July 2026. Guests will be welcomed with a warm lunch on arrival.",
        "check_out": "10:00 AM on 7th July 2026.",
        "room": (
            "Room details are shared personally with each guest. If you haven't received yours, "
            "just ask at the InterContinental front desk on arrival."
        ),
    },
    "itinerary": {
        "day1": [
            {"time": "1:00 PM", "event": "Check-in & Welcome Lunch", "venue": "InterContinental Jaipur"},
            {
                "time": "Afternoon",
                "event": "Mayera (Groom's Side) & Reets (Bride's Side)",
                "venue": "Designated hotel halls at InterContinental Jaipur (hall details TBD)",
            },
            {
                "time": "8:00 PM",
                "event": "Sangeet",
                "venue": "Convergence Ballroom, Ground Floor – InterContinental Jaipur",
            },
        ],
        "day2": [
            {"time": "9:00 AM", "event": "Bride's Choora Ceremony", "venue": "InterContinental Jaipur"},
            {
                "time": "12:00 PM",
                "event": "Punjabi Carnival",
                "venue": "InterContinental Jaipur",
                "theme": "Traditional Punjabi – bright colours, Patiala suits, phulkari dupattas, festive vibes!",
            },
            {"time": "8:00 PM", "event": "Sehrabandi & Baraat Assembly", "venue": "InterContinental Jaipur"},
            {
                "time": "9:00 PM",
                "event": "Milni & Varmala",
                "venue": "Atlantiis Jaipur",
                "note": "Dinner will be ongoing throughout the evening.",
            },
            {"time": "2:00 AM", "event": "The Pheras (Wedding Ceremony)", "venue": "Atlantiis Jaipur"},
        ],
    },
    "wardrobe": [
        {
            "event": "Mayera / Reets (Afternoon Day 1)",
            "vibe": "Traditional family ceremony, vibrant and full of emotion.",
            "general": "Bright, rich traditional ethnic wear. Think reds, greens, and oranges.",
            "women": "Heavy ethnic suits, lehengas, or sarees in rich jewel tones.",
            "men": "Kurtas or sherwanis in rich colours.",
            "tip": "This is a meaningful family-centric ceremony – dress modestly and traditionally. 🙏",
        },
        {
            "event": "Sangeet (8:00 PM Day 1)",
            "vibe": "Musical night, dancing, glamorous. The ultimate pre-wedding party!",
            "general": "Indo-western or glitzy ethnic wear. Comfort for heavy dancing is KEY.",
            "women": "Evening gowns, flowy lehengas, or fusion outfits with shimmer.",
            "men": "Bandhgalas, stylish Nehru jackets, or dressy Indo-western kurtas.",
            "tip": "Wear comfortable footwear – you will be on the dance floor all night! 💃🕺",
        },
        {
            "event": "Choora Ceremony (9:00 AM Day 2)",
            "vibe": "Sacred and intimate morning ceremony for the bride.",
            "general": "Simple, modest ethnic wear. Light, comfortable fabrics.",
            "women": "Suits or light lehengas in soft colours.",
            "men": "Simple kurta pajamas.",
            "tip": "This is an early morning ceremony – keep it relaxed and comfortable. 🌅",
        },
        {
            "event": "Punjabi Carnival (12:00 PM Day 2)",
            "vibe": "High-energy, colourful celebration with a full Punjabi theme!",
            "general": "Traditional Punjabi theme is MANDATORY – go all out!",
            "women": "Patiala suits, phulkari dupattas, bright colours – the more festive the better!",
            "men": "Kurtas with churidars or Patiala salwar, safas (turbans) welcome!",
            "tip": "Think bright colours and maximum festive energy! 🎨🥁",
        },
        {
            "event": "Sehrabandi & Baraat (8:00 PM Day 2)",
            "vibe": "High-energy wedding procession with dhol, dancing, and pure celebration!",
            "general": "Festive Indian wear in bright, celebratory colours.",
            "women": "Heavy sarees or lehengas in bold colours.",
            "men": "Safas (turbans), heavy embroidered kurtas, or sherwanis. Go all out!",
            "tip": "Wear sturdy footwear – you will be dancing in the procession! 🎺🥁",
        },
        {
            "event": "Milni, Varmala & Pheras (9:00 PM onwards, Day 2)",
            "vibe": "Sacred, elegant, and the most special moments of the entire wedding.",
            "general": "Traditional heavy Indian wear. Pastels, rich reds, or golds.",
            "women": "Heavy lehengas or sarees in traditional bridal colours.",
            "men": "Sherwanis or formal kurta sets in regal colours.",
            "tip": "This is the main ceremony – dress your absolute best. No casual outfits please! ✨",
        },
    ],
    "food": {
        "lounge": {
            "name": "The Lounge",
            "location": "Ground Floor, right in front of the hotel reception at InterContinental Jaipur",
            "hours": "24 hours a day – yes, even before the early morning rituals!",
            "available": "Maggi, dry snacks, tea, coffee, and mocktails",
        },
    },
    "transport": {
        "airport_pickup": (
            "Pickup is arranged! Contact the Transport Manager (details to be shared by the family) "
            "and they will sort you out. ✈️🚂"
        ),
        "to_atlantiis": (
            "Atlantiis Jaipur is just across the road from InterContinental! Vehicles will be stationed "
            "at the hotel porch for a convenient shuttle service – no need to arrange your own transport. 🚌"
        ),
    },
    "housekeeping": {
        "ironing": (
            "Dial Housekeeping from your room phone at InterContinental and request steam-ironing. "
            "They will have your outfit looking sharp in no time! 👔"
        ),
    },
    "social": {
        "hashtag": "#ShreyaaHuiSurakshit",
        "instagram": "@shreyaahuisurakshit",
    },
    "venue_maps": {
        "intercontinental_maps_link": "https://maps.app.goo.gl/qqNDq6xbuFhMusWEA?g_st=ic",
        "atlantiis_maps_link": "https://maps.app.goo.gl/Ru1NAfx9QHb59REJ8?g_st=ic",
        "intercontinental_phone": "+91 141 717 6666",
    },
    "food_policy": {
        "alcohol": (
            "All wedding functions are 100% alcohol-free (completely dry). No exceptions. Mocktails and "
            "refreshments are available at The Lounge and every event."
        ),
        "vegetarian": "100% pure vegetarian food at all events. No non-vegetarian food will be served anywhere.",
        "breakfast": (
            "Included! Served as a buffet at the hotel breakfast bar on both 6th and 7th July – great fuel "
            "after the 2 AM Pheras!"
        ),
        "seating": "No fixed seating arrangements at any event – guests can sit wherever they like.",
        "extra_charge": (
            "Your stay and all wedding meals are fully covered. Personal extras like In-Room Dining, Mini-Bar, "
            "hotel Laundry, and Spa services will be charged to your room and settled at check-out."
        ),
    },
    "ceremonies": {
        "mayera": (
            "Surakshit's maternal uncles (mamas) and family arrive with gifts, clothes, and blessings for the "
            "groom and his mother. A heartwarming ritual that celebrates the love and support of the maternal "
            "side of the family."
        ),
        "reetein": (
            "Traditional pre-wedding rituals for Shreyaa and her family – soulful customs and blessings to "
            "prepare the bride for her new journey. Expect traditional songs, deep family bonding, and "
            "emotional moments. Dress code: Traditional Indian wear."
        ),
        "choora": (
            "One of the most significant moments for Shreyaa! Her maternal uncles (mamas) gift her red and "
            "white bangles (the Choora), purified in milk and rose petals – very auspicious and emotional. "
            "Starting at 9:00 AM, so grab a quick tea or coffee from The Lounge before heading in! Dress: "
            "Traditional morning wear, comfortable for the Punjabi Carnival that follows."
        ),
        "pheras": (
            "The sacred fire ceremony where Shreyaa and Surakshit take their vows. Starts at 2:00 AM at "
            "Atlantiis Jaipur (indoors) and takes approximately 2 hours. The most sacred part of the wedding, "
            "but not mandatory for all guests – elders and little ones who need to retire early are completely "
            "understood. Give blessings during Varmala or Dinner earlier in the evening. Jaipur nights can be "
            "chilly, so carry a light shawl!"
        ),
    },
    "baraat": {
        "assembly": "Main Porch of the InterContinental Jaipur at 8:00 PM on the 6th.",
        "procession": (
            "Short, high-energy procession from the InterContinental gate across to Atlantiis Jaipur. "
            "Shuttle cars are on standby for anyone who prefers to ride!"
        ),
        "safa_tying": (
            "Professional Safa-tying (turban) experts will be at the Baraat assembly point from 7:30 PM on "
            "the 6th – no need to arrange your own!"
        ),
    },
    "guest_services": {
        "emergency_kit": (
            "A Wedding Emergency Kit is stocked at The Lounge 24/7 – safety pins, bindis, hairpins, band-aids, "
            "antacids, and more. Also a mini kit in every room."
        ),
        "medical": (
            "Medical emergency: Call the hotel front desk from your room phone (dial 9 or ask the operator) – "
            "a doctor on call will be dispatched immediately."
        ),
        "charger": "Forgot your phone charger? The InterContinental front desk has spare chargers to borrow!",
        "wifi": (
            "Free Wi-Fi is available throughout the hotel. Check the back of your room key card for the "
            "network name and password, or ask at the front desk."
        ),
        "in_house_salon": (
            "Yes! The InterContinental has an in-house salon. Book your slot at least 4 hours in advance – it "
            "gets very busy during weddings."
        ),
        "room_safe": "Every room has a digital in-room safe. Keep jewellery and valuables locked away during the events.",
        "multiple_keys": (
            "Just ask the Front Desk to program extra key cards for roommates when checking in – nobody should "
            "get locked out after the 2 AM Pheras!"
        ),
        "lost_key": (
            "Head to the Front Desk with your physical ID – they'll verify your name and issue a new key in "
            "minutes."
        ),
        "luggage_storage": (
            "After check-out (10 AM on the 7th), the Front Desk will safely store luggage so guests can enjoy "
            "a final breakfast and explore Jaipur before their flight."
        ),
        "airport_time": (
            "Jaipur Airport (JAI) is approximately 15–20 minutes away. Leave at least 45 minutes before your "
            "airline's check-in time to account for traffic."
        ),
        "gym_pool": "Yes! Guests can use the swimming pool and gym at the InterContinental.",
        "tipping": (
            "No tipping required! The families have taken care of all hotel service charges and gratuities. "
            "Just relax and enjoy! 💕"
        ),
        "vaarna": (
            "All entertainers are fully paid for. But if the festive spirit moves you, a traditional Vaarna "
            "(circling money over the couple's heads for luck) and giving it to the Dholis is a lovely "
            "gesture – completely optional!"
        ),
        "early_arrival": (
            "Arriving before room check-in (1 PM)? Head to The Lounge on the Ground Floor – open 24/7 with "
            "Maggi, Chai, and snacks to keep you comfortable!"
        ),
        "rain_plan": (
            "Plan B is ready! If the weather doesn't cooperate, all ceremonies will move to the beautiful "
            "indoor ballrooms at the InterContinental or Atlantiis."
        ),
        "mosquito": (
            "The hotel conducts regular pest control. Mosquito repellent sprays and patches will also be "
            "available near the Atlantiis entrance just in case."
        ),
        "dry_weather": (
            "Dry Rajasthan air bothering your throat or skin? Grab a soothing honey-ginger tea from The "
            "Lounge, or request a room humidifier from Housekeeping."
        ),
        "pets": (
            "Strict no-pet policy at both venues and the hotel. Please ensure your furry friends are well "
            "taken care of at home!"
        ),
        "external_visitors": (
            "This is a private catered event with strict hotel security. Only registered wedding guests are "
            "allowed into the venues and event halls."
        ),
        "irish_exit": (
            "Completely fine! Give your blessings during Varmala or Dinner, then quietly slip away. Just "
            "coordinate your early morning cab with the Transport Manager beforehand."
        ),
        "photos": (
            "A photo-sharing link (Google Drive / Wedbox) for all guests to upload their pictures will be "
            "shared soon – watch this space! 📸"
        ),
        "pheras_mandatory": (
            "The Pheras are the most sacred part of the wedding but not mandatory for all guests. Elders and "
            "little ones who need to retire early are completely understood – give your blessings during "
            "Varmala or Dinner earlier."
        ),
    },
    "weather": {
        "link": "https://www.accuweather.com/en/in/jaipur/205617/july-weather/205617",
        "note": (
            "July in Jaipur is warm and humid (monsoon season). Evenings can be pleasantly cool – a light "
            "shawl or jacket is recommended for late-night events."
        ),
    },
}

# Both venues sit here; "nearby" searches must be anchored to it.
VENUE_AREA = "Sitapura Tonk Road Jaipur 302022"
