"""Static reference data backing the farm tools.

Seed varieties, topic suggestions, mandi base prices and the district list
per state. Stands in for the external data providers a real deployment
would call.
"""

WEATHER_CONDITIONS = (
    "Sunny",
    "Partly Cloudy",
    "Clear Skies",
    "Light Rain",
    "Thunderstorms",
    "Overcast",
    "Scattered Showers",
)

SUGGESTIONS: dict[str, list[str]] = {
    "pest control": [
        "Introduce beneficial insects like ladybugs to control aphids.",
        "Use neem oil as a natural pesticide.",
        "Practice crop rotation to disrupt pest life cycles.",
    ],
    "crop rotation": [
        "Alternate between legumes (like beans) and heavy feeders (like corn).",
        "Avoid planting crops from the same family in the same spot year after year.",
        "Plant cover crops like clover or rye during the off-season to improve soil.",
    ],
    "soil health": [
        "Add compost to increase organic matter.",
        "Test your soil pH and amend as needed.",
        "Minimize tilling to protect soil structure and microbial life.",
    ],
    "irrigation": [
        "Use drip irrigation to deliver water directly to the plant roots and reduce waste.",
        "Water early in the morning to minimize evaporation.",
        "Mulch around plants to retain soil moisture.",
    ],
    "harvesting": [
        "Harvest during the coolest part of the day, usually early morning, to keep produce fresh.",
        "Check for visual cues of ripeness, such as color, size, and firmness.",
        "Use clean, sharp tools to avoid damaging the plant and the produce.",
        "Handle harvested produce gently to prevent bruising.",
        "Store produce in a cool, shaded, and well-ventilated area immediately after harvesting.",
    ],
}

NO_SUGGESTIONS = "No suggestions available for this topic."

# Insertion order is the lookup order for variety and crop matching.
SEED_DATABASE: dict[str, dict] = {
    "rice": {
        "varieties": [
            {"name": "IR-64", "yield": "20-25 quintals/acre", "duration": "120-130 days",
             "characteristics": ["Good cooking quality", "Susceptible to blast disease"]},
            {"name": "Sona Masuri", "yield": "25-30 quintals/acre", "duration": "130-140 days",
             "characteristics": ["Premium fine grain", "Lower yield but higher market price"]},
            {"name": "Basmati-370", "yield": "15-20 quintals/acre", "duration": "140-150 days",
             "characteristics": ["Aromatic long grain", "Requires careful water management"]},
            {"name": "Pusa Basmati-1121", "yield": "18-22 quintals/acre", "duration": "145-155 days",
             "characteristics": ["World's longest rice grain", "High demand in export markets"]},
        ],
        "sowingSeason": "Kharif (June-July) and Rabi (Nov-Dec)",
        "averagePricePerKg": 45,
        "commonPests": ["Stem Borer", "Leaf Folder", "Brown Plant Hopper"],
        "commonDiseases": ["Blast", "Bacterial Blight", "Sheath Blight"],
    },
    "wheat": {
        "varieties": [
            {"name": "HD-2967", "yield": "20-22 quintals/acre", "duration": "150-155 days",
             "characteristics": ["High yield potential", "Good resistance to rust"]},
            {"name": "PBW-550", "yield": "19-21 quintals/acre", "duration": "145-150 days",
             "characteristics": ["Widely adapted", "Good chapati making quality"]},
            {"name": "WH-1105", "yield": "22-24 quintals/acre", "duration": "155-160 days",
             "characteristics": ["Excellent yield", "Requires timely irrigation"]},
        ],
        "sowingSeason": "Rabi (October-December)",
        "averagePricePerKg": 30,
        "commonPests": ["Aphids", "Termites"],
        "commonDiseases": ["Rust", "Smut", "Powdery Mildew"],
    },
    "corn": {
        "varieties": [
            {"name": "Pioneer 3396", "yield": "35-40 quintals/acre", "duration": "110-115 days",
             "characteristics": ["High yield hybrid", "Good drought tolerance", "Excellent stay-green trait"]},
            {"name": "Syngenta NK30", "yield": "30-35 quintals/acre", "duration": "105-110 days",
             "characteristics": ["Early maturity", "Good resistance to stalk rot",
                                 "Suitable for both grain and fodder"]},
            {"name": "DEKALB 900M Gold", "yield": "38-42 quintals/acre", "duration": "115-120 days",
             "characteristics": ["High shelling percentage", "Strong plant structure",
                                 "Tolerant to major diseases"]},
        ],
        "sowingSeason": "Kharif (June-July)",
        "averagePricePerKg": 250,
        "commonPests": ["Fall Armyworm", "Corn Earworm", "Stem Borer"],
        "commonDiseases": ["Maydis Leaf Blight", "Common Rust"],
    },
    "tomato": {
        "varieties": [
            {"name": "Pusa Ruby", "yield": "10-12 tons/acre", "duration": "60-70 days after transplanting",
             "characteristics": ["Determinate variety", "Good for processing", "Early maturing"]},
            {"name": "Arka Rakshak", "yield": "35-40 tons/acre", "duration": "120-130 days",
             "characteristics": ["High yield hybrid", "Triple disease resistance (ToLCV, BW, EB)",
                                 "Good shelf life"]},
            {"name": "Heirloom Guntur Sannam", "yield": "8-10 tons/acre", "duration": "80-90 days",
             "characteristics": ["Spicy and tangy taste", "Prized for local markets and traditional cooking",
                                 "Lower yield but unique flavor"]},
        ],
        "sowingSeason": "Year-round, with peaks in Jan-Feb, June-July, and Sept-Oct",
        "averagePricePerKg": 900,
        "commonPests": ["Fruit Borer", "Whitefly", "Thrips"],
        "commonDiseases": ["Early Blight", "Late Blight", "Tomato Mosaic Virus"],
    },
}

# INR per quintal
CROP_BASE_PRICES: dict[str, int] = {
    "tomato": 2500,
    "corn": 2100,
    "wheat": 2300,
    "soybean": 4500,
    "cotton": 6000,
}
DEFAULT_BASE_PRICE = 2000

STATE_DISTRICTS: dict[str, list[str]] = {
    "Andhra Pradesh": [
        "Anantapur", "Chittoor", "East Godavari", "Guntur", "Krishna", "Kurnool",
        "Nellore", "Prakasam", "Srikakulam", "Visakhapatnam", "Vizianagaram",
        "West Godavari", "YSR Kadapa",
    ],
    "Telangana": [
        "Adilabad", "Hyderabad", "Karimnagar", "Khammam", "Mahabubnagar", "Medak",
        "Nalgonda", "Nizamabad", "Rangareddy", "Warangal",
    ],
    "Karnataka": [
        "Belagavi", "Bengaluru Rural", "Bidar", "Dharwad", "Hassan", "Kalaburagi",
        "Mandya", "Mysuru", "Raichur", "Shivamogga", "Tumakuru",
    ],
    "Maharashtra": [
        "Ahmednagar", "Akola", "Aurangabad", "Jalgaon", "Kolhapur", "Latur",
        "Nagpur", "Nashik", "Pune", "Solapur", "Satara",
    ],
    "Punjab": [
        "Amritsar", "Bathinda", "Firozpur", "Jalandhar", "Ludhiana", "Moga",
        "Patiala", "Sangrur",
    ],
    "Uttar Pradesh": [
        "Agra", "Aligarh", "Bareilly", "Gorakhpur", "Kanpur Nagar", "Lucknow",
        "Meerut", "Varanasi",
    ],
    "Madhya Pradesh": [
        "Bhopal", "Gwalior", "Hoshangabad", "Indore", "Jabalpur", "Sagar", "Ujjain",
    ],
    "Tamil Nadu": [
        "Coimbatore", "Erode", "Madurai", "Salem", "Thanjavur", "Tiruchirappalli",
        "Tirunelveli", "Vellore",
    ],
}
