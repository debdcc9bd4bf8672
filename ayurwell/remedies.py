"""
remedies.py
===========
Static wellness content: the home-remedy catalog and general Ayurvedic
health guidance. Read-only; nothing here touches the database.
"""

from typing import Any, Dict, List

from .errors import NotFoundError

# ---------------------------------------------------------------------------
# REMEDY CATALOG
# ---------------------------------------------------------------------------

REMEDIES = [
    {
        "id": 1,
        "title": "Ginger Tea for Headache",
        "description": "Natural remedy for tension headaches and migraines",
        "category": "Neurological",
        "instructions": [
            "Grate 1 inch of fresh ginger",
            "Boil 2 cups of water and add grated ginger",
            "Add 2-3 tulsi leaves (optional)",
            "Steep for 5-10 minutes",
            "Strain and add honey and lemon if desired",
            "Drink while warm, 2-3 times a day",
        ],
        "ingredients": [
            "Fresh ginger root (1 inch)",
            "Water (2 cups)",
            "Honey (to taste)",
            "Lemon (optional)",
            "Tulsi leaves (optional)",
        ],
        "benefits": [
            "Reduces inflammation",
            "Relieves headache pain",
            "Improves circulation",
            "Natural pain relief",
            "Boosts immunity",
            "Reduces nausea",
        ],
    },
    {
        "id": 2,
        "title": "Turmeric Milk for Joint Pain",
        "description": "Anti-inflammatory golden milk for joint health and immunity",
        "category": "Musculoskeletal",
        "instructions": [
            "Heat 1 cup of milk (preferably organic)",
            "Add 1 teaspoon turmeric powder",
            "Add 1/4 teaspoon black pepper",
            "Add 1/2 teaspoon ginger powder",
            "Add 1/2 teaspoon cinnamon powder",
            "Simmer for 5-7 minutes on low heat",
            "Add honey to taste",
            "Drink warm before bedtime",
        ],
        "ingredients": [
            "Organic milk (1 cup)",
            "Turmeric powder (1 tsp)",
            "Black pepper (1/4 tsp)",
            "Ginger powder (1/2 tsp)",
            "Cinnamon powder (1/2 tsp)",
            "Honey (to taste)",
        ],
        "benefits": [
            "Reduces joint inflammation",
            "Improves flexibility",
            "Boosts immunity",
            "Natural pain management",
            "Promotes better sleep",
            "Improves digestion",
        ],
    },
    {
        "id": 3,
        "title": "Triphala for Digestion",
        "description": "Traditional herbal blend for digestive health and detoxification",
        "category": "Digestive",
        "instructions": [
            "Take 1/2-1 teaspoon Triphala powder",
            "Mix with warm water or honey",
            "Consume before bedtime or early morning",
            "Start with smaller dose and increase gradually",
            "Take on empty stomach for best results",
            "Maintain 2-hour gap from meals",
        ],
        "ingredients": ["Triphala powder", "Warm water", "Honey (optional)"],
        "benefits": [
            "Improves digestion",
            "Cleanses digestive tract",
            "Reduces bloating",
            "Supports gut health",
            "Natural detoxification",
            "Promotes regular bowel movements",
        ],
    },
    {
        "id": 4,
        "title": "Ashwagandha for Stress",
        "description": "Powerful adaptogenic herb for stress relief and mental wellness",
        "category": "Mental Health",
        "instructions": [
            "Take 1/2 teaspoon Ashwagandha powder",
            "Mix with warm milk or water",
            "Add honey if desired",
            "Consume twice daily after meals",
            "Best taken regularly for 2-3 months",
            "Can be combined with other adaptogens",
        ],
        "ingredients": ["Ashwagandha powder", "Warm milk or water", "Honey (optional)"],
        "benefits": [
            "Reduces stress and anxiety",
            "Improves sleep quality",
            "Boosts energy levels",
            "Enhances mental clarity",
            "Supports immune system",
            "Balances hormones",
        ],
    },
    {
        "id": 5,
        "title": "Neem for Skin Health",
        "description": "Natural antibacterial and anti-inflammatory remedy for skin conditions",
        "category": "Dermatological",
        "instructions": [
            "Boil neem leaves in water for 10 minutes",
            "Let it cool and strain",
            "Apply directly to affected areas",
            "Can be used as face wash or bath water",
            "For internal use, take 2-3 neem leaves",
            "Chew fresh leaves or make tea",
        ],
        "ingredients": ["Fresh neem leaves", "Water", "Neem powder (alternative)"],
        "benefits": [
            "Treats acne and pimples",
            "Reduces skin inflammation",
            "Natural blood purifier",
            "Antibacterial properties",
            "Improves skin complexion",
            "Treats various skin conditions",
        ],
    },
    {
        "id": 6,
        "title": "Brahmi for Memory",
        "description": "Cognitive enhancer for better memory and mental performance",
        "category": "Neurological",
        "instructions": [
            "Take 1/2 teaspoon Brahmi powder",
            "Mix with warm water or honey",
            "Consume twice daily after meals",
            "Can be taken with milk at bedtime",
            "Regular use recommended for best results",
            "Avoid on empty stomach",
        ],
        "ingredients": ["Brahmi powder", "Warm water or milk", "Honey (optional)"],
        "benefits": [
            "Improves memory",
            "Enhances concentration",
            "Reduces anxiety",
            "Promotes mental clarity",
            "Supports brain health",
            "Reduces stress",
        ],
    },
    {
        "id": 7,
        "title": "Amla for Immunity",
        "description": "Vitamin C-rich superfood for immune system and overall health",
        "category": "Immune System",
        "instructions": [
            "Take fresh Amla juice (30ml)",
            "Mix with water if needed",
            "Add honey for taste",
            "Consume on empty stomach",
            "Can be taken as powder with honey",
            "Best taken in the morning",
        ],
        "ingredients": ["Fresh Amla or Amla powder", "Water", "Honey (optional)"],
        "benefits": [
            "Boosts immunity",
            "Rich in Vitamin C",
            "Improves digestion",
            "Enhances skin health",
            "Promotes hair growth",
            "Anti-aging properties",
        ],
    },
    {
        "id": 8,
        "title": "Tulsi for Respiratory Health",
        "description": "Sacred herb for respiratory wellness and immunity",
        "category": "Respiratory",
        "instructions": [
            "Boil 5-6 Tulsi leaves in water",
            "Add ginger and black pepper",
            "Steep for 5-10 minutes",
            "Strain and add honey",
            "Drink warm 2-3 times daily",
            "Can be chewed fresh for quick relief",
        ],
        "ingredients": ["Fresh Tulsi leaves", "Ginger (optional)", "Black pepper", "Honey", "Water"],
        "benefits": [
            "Relieves cough and cold",
            "Improves respiratory health",
            "Boosts immunity",
            "Anti-inflammatory properties",
            "Reduces stress",
            "Natural expectorant",
        ],
    },
]

# ---------------------------------------------------------------------------
# HEALTH GUIDANCE
# ---------------------------------------------------------------------------

HEALTH_TIPS = [
    {
        "id": 1,
        "title": "Daily Routine (Dinacharya)",
        "content": [
            "Wake up before 6 AM",
            "Drink water in the morning",
            "Practice yoga/exercise",
            "Eat meals at proper times",
            "Sleep before 10 PM",
        ],
    },
    {
        "id": 2,
        "title": "Diet Guidelines (Ahara)",
        "content": [
            "Eat foods suitable for your constitution",
            "Drink warm water",
            "Take adequate time for meals",
            "Keep dinner light",
            "Avoid excessive oily and fried foods",
        ],
    },
    {
        "id": 3,
        "title": "Seasonal Routine (Ritucharya)",
        "content": [
            "Eat foods appropriate for the season",
            "Wear clothes suitable for the season",
            "Adjust lifestyle according to environmental temperature",
            "Protect yourself from seasonal diseases",
            "Take special care during seasonal transitions",
        ],
    },
    {
        "id": 4,
        "title": "Mental Health (Manas Swasthya)",
        "content": [
            "Practice meditation",
            "Maintain positive thinking",
            "Get adequate rest",
            "Maintain healthy social relationships",
            "Manage stress effectively",
        ],
    },
    {
        "id": 5,
        "title": "Immunity (Vyadhikshamatva)",
        "content": [
            "Use Rasayana herbs (e.g., Ashwagandha)",
            "Proper exercise",
            "Adequate sleep",
            "Consume fruits and vegetables",
            "Include grains in your diet",
        ],
    },
    {
        "id": 6,
        "title": "Lifestyle (Jeevan Shaili)",
        "content": [
            "Follow a Sattvic lifestyle",
            "Proper time management",
            "Eco-friendly lifestyle",
            "Balanced meals",
            "Proper rest and work balance",
        ],
    },
]


def search_remedies(query: str = None) -> List[Dict[str, Any]]:
    """Case-insensitive substring match on title, description or category."""
    needle = (query or "").strip().lower()
    if not needle:
        return list(REMEDIES)
    return [
        r for r in REMEDIES
        if needle in r["title"].lower()
        or needle in r["description"].lower()
        or needle in r["category"].lower()
    ]


def get_remedy(remedy_id: int) -> Dict[str, Any]:
    for remedy in REMEDIES:
        if remedy["id"] == remedy_id:
            return remedy
    raise NotFoundError("Remedy not found")
