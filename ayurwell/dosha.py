"""
dosha.py
========
Rule-based symptom checker.

Six questionnaire answers are weighed against fixed lookup tables to produce
VATA / PITTA / KAPHA scores. The dominant dosha selects a static description
and remedy list. Unknown answers simply add nothing.
"""

from dataclasses import dataclass
from functools import reduce
from typing import Dict, List, Optional, Sequence, Tuple

VATA = "VATA"
PITTA = "PITTA"
KAPHA = "KAPHA"
UNKNOWN = "UNKNOWN"

# ---------------------------------------------------------------------------
# QUESTIONNAIRE
# ---------------------------------------------------------------------------

QUESTIONS = [
    {
        "id": 1,
        "key": "primary",
        "text": "What is your primary symptom?",
        "description": "Select the most prominent symptom you're experiencing right now.",
        "options": [
            {"text": "Headache", "description": "Including tension, migraine, or general head discomfort"},
            {"text": "Fever", "description": "Elevated body temperature with or without chills"},
            {"text": "Fatigue", "description": "Persistent tiredness or lack of energy"},
            {"text": "Digestive Issues", "description": "Including bloating, indigestion, or irregular bowel movements"},
        ],
    },
    {
        "id": 2,
        "key": "duration",
        "text": "How long have you been experiencing this symptom?",
        "description": "This helps determine if the condition is acute or chronic.",
        "options": [
            {"text": "Less than a day", "description": "Symptoms started recently"},
            {"text": "1-3 days", "description": "Short-term acute condition"},
            {"text": "4-7 days", "description": "Extended acute condition"},
            {"text": "More than a week", "description": "Potentially chronic condition"},
        ],
    },
    {
        "id": 3,
        "key": "time_of_day",
        "text": "What time of day do you feel worse?",
        "description": "Different doshas are more active at different times of the day.",
        "options": [
            {"text": "Morning", "description": "6 AM - 10 AM (Kapha time)"},
            {"text": "Afternoon", "description": "10 AM - 2 PM (Pitta time)"},
            {"text": "Evening", "description": "2 PM - 6 PM (Vata time)"},
            {"text": "Night", "description": "6 PM - 10 PM (Kapha time)"},
        ],
    },
    {
        "id": 4,
        "key": "trigger",
        "text": "Have you noticed any triggers?",
        "description": "Understanding triggers helps identify the root cause.",
        "options": [
            {"text": "Food", "description": "Certain foods or eating habits"},
            {"text": "Weather", "description": "Changes in temperature or climate"},
            {"text": "Stress", "description": "Emotional or mental pressure"},
            {"text": "Physical Activity", "description": "Exercise or physical strain"},
        ],
    },
    {
        "id": 5,
        "key": "sleep",
        "text": "How would you describe your sleep pattern?",
        "description": "Sleep patterns can indicate dosha imbalances.",
        "options": [
            {"text": "Light and interrupted", "description": "Difficulty staying asleep, waking up frequently"},
            {"text": "Moderate but intense dreams", "description": "Sleep through the night but with vivid dreams"},
            {"text": "Heavy and prolonged", "description": "Deep sleep, difficulty waking up"},
            {"text": "Variable and inconsistent", "description": "Sleep pattern changes frequently"},
        ],
    },
    {
        "id": 6,
        "key": "energy",
        "text": "What is your typical energy level throughout the day?",
        "description": "Energy patterns can reveal your dominant dosha.",
        "options": [
            {"text": "Variable and unpredictable", "description": "Energy comes in bursts, then crashes"},
            {"text": "Strong but burns out quickly", "description": "Intense focus but may exhaust easily"},
            {"text": "Steady but slow to start", "description": "Takes time to get going but maintains energy"},
            {"text": "Low and needs stimulation", "description": "Often feels lethargic and needs motivation"},
        ],
    },
]

# ---------------------------------------------------------------------------
# WEIGHT TABLES
# One table per question, in answer order. Each option maps to (vata, pitta, kapha).
# ---------------------------------------------------------------------------

WEIGHTS: Tuple[Dict[str, Tuple[int, int, int]], ...] = (
    # Primary symptom
    {
        "Headache": (2, 1, 0),
        "Fever": (0, 2, 0),
        "Fatigue": (1, 0, 2),
        "Digestive Issues": (1, 2, 0),
    },
    # Duration
    {
        "Less than a day": (2, 0, 0),
        "1-3 days": (0, 2, 0),
        "4-7 days": (0, 1, 1),
        "More than a week": (0, 0, 2),
    },
    # Time of day
    {
        "Morning": (0, 0, 2),
        "Afternoon": (0, 2, 0),
        "Evening": (1, 0, 0),
        "Night": (2, 0, 0),
    },
    # Trigger
    {
        "Food": (0, 2, 0),
        "Weather": (2, 0, 0),
        "Stress": (2, 0, 0),
        "Physical Activity": (0, 0, 2),
    },
    # Sleep pattern (optional)
    {
        "Light and interrupted": (3, 0, 0),
        "Moderate but intense dreams": (0, 3, 0),
        "Heavy and prolonged": (0, 0, 3),
        "Variable and inconsistent": (2, 1, 0),
    },
    # Energy level (optional)
    {
        "Variable and unpredictable": (3, 0, 0),
        "Strong but burns out quickly": (0, 3, 0),
        "Steady but slow to start": (0, 0, 3),
        "Low and needs stimulation": (1, 0, 2),
    },
)

RECOMMENDATIONS = {
    VATA: {
        "description": (
            "You show signs of Vata imbalance. Vata is associated with movement, cold, and irregularity. "
            "This dosha governs all movement in the mind and body. Vata types are typically creative, "
            "quick-thinking, and energetic when balanced."
        ),
        "remedies": [
            "Maintain regular daily routines",
            "Favor warm, cooked, and easily digestible foods",
            "Practice gentle yoga and meditation",
            "Use warm oil massage (abhyanga)",
            "Stay warm and avoid cold, dry environments",
            "Get adequate rest and avoid excessive stimulation",
        ],
    },
    PITTA: {
        "description": (
            "You show signs of Pitta imbalance. Pitta is associated with heat, metabolism, and transformation. "
            "This dosha governs digestion and metabolism. Pitta types are typically focused, determined, "
            "and intelligent when balanced."
        ),
        "remedies": [
            "Avoid spicy and hot foods",
            "Practice cooling breathing exercises",
            "Engage in moderate exercise during cooler times",
            "Use coconut or sunflower oil for massage",
            "Include sweet, bitter, and astringent tastes in diet",
            "Take time to relax and avoid excessive competition",
        ],
    },
    KAPHA: {
        "description": (
            "You show signs of Kapha imbalance. Kapha is associated with structure, stability, and moisture. "
            "This dosha maintains body resistance. Kapha types are typically calm, grounded, and loyal "
            "when balanced."
        ),
        "remedies": [
            "Exercise regularly, especially in the morning",
            "Favor light, warm, and spicy foods",
            "Practice stimulating breathing exercises",
            "Use dry massage with powder",
            "Stay active and avoid daytime napping",
            "Embrace change and new experiences",
        ],
    },
}

_UNKNOWN_RECOMMENDATION = {
    "description": "Unable to determine dosha balance.",
    "remedies": [
        "Consult with an Ayurvedic practitioner",
        "Maintain a balanced lifestyle",
        "Follow a regular daily routine",
        "Practice mindful eating",
        "Get adequate rest and exercise",
    ],
}


# ---------------------------------------------------------------------------
# SCORING
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class DoshaScore:
    vata: int = 0
    pitta: int = 0
    kapha: int = 0

    def add(self, points: Tuple[int, int, int]) -> "DoshaScore":
        return DoshaScore(self.vata + points[0], self.pitta + points[1], self.kapha + points[2])

    def as_dict(self) -> Dict[str, int]:
        return {VATA: self.vata, PITTA: self.pitta, KAPHA: self.kapha}


@dataclass(frozen=True)
class ClassificationResult:
    dosha: str
    description: str
    remedies: Tuple[str, ...]
    score: DoshaScore


def score_answers(answers: Sequence[str]) -> DoshaScore:
    """
    Fold the answers over the weight tables.
    Missing trailing answers and unrecognised options contribute nothing.
    """
    pairs = zip(WEIGHTS, answers)
    return reduce(
        lambda score, pair: score.add(pair[0].get(pair[1], (0, 0, 0))),
        pairs,
        DoshaScore(),
    )


def dominant_dosha(score: DoshaScore) -> str:
    # VATA wins every tie, then PITTA; KAPHA only when strictly ahead.
    if score.vata >= score.pitta and score.vata >= score.kapha:
        return VATA
    if score.pitta >= score.vata and score.pitta >= score.kapha:
        return PITTA
    return KAPHA


def recommendations_for(dosha: str) -> Dict[str, object]:
    """Static description + remedies for a dosha; anything unrecognised gets the generic advice."""
    rec = RECOMMENDATIONS.get(dosha, _UNKNOWN_RECOMMENDATION)
    return {"description": rec["description"], "remedies": list(rec["remedies"])}


def classify(answers: Sequence[str]) -> ClassificationResult:
    """
    Map questionnaire answers to a dominant dosha and its recommendations.
    Pure: no state is shared between calls.
    """
    score = score_answers(answers)
    dosha = dominant_dosha(score)
    rec = recommendations_for(dosha)
    return ClassificationResult(
        dosha=dosha,
        description=rec["description"],
        remedies=tuple(rec["remedies"]),
        score=score,
    )


def question_options(index: int) -> Optional[List[str]]:
    """Option texts for the question at ``index`` (0-based), or None when out of range."""
    if not 0 <= index < len(QUESTIONS):
        return None
    return [opt["text"] for opt in QUESTIONS[index]["options"]]
