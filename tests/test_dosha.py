"""
test_dosha.py
=============
Symptom checker scoring and recommendations.
"""

from ayurwell.dosha import (
    KAPHA, PITTA, QUESTIONS, VATA, WEIGHTS, DoshaScore, classify, dominant_dosha,
    question_options, recommendations_for, score_answers,
)


def test_consistent_vata_answers():
    answers = ["Headache", "Less than a day", "Night", "Stress", "Light and interrupted", "Variable and unpredictable"]
    assert classify(answers).dosha == VATA


def test_consistent_pitta_answers():
    answers = ["Fever", "1-3 days", "Afternoon", "Food"]
    assert classify(answers).dosha == PITTA


def test_consistent_kapha_answers():
    answers = ["Fatigue", "More than a week", "Morning", "Physical Activity", "Heavy and prolonged", "Steady but slow to start"]
    result = classify(answers)
    assert result.dosha == KAPHA
    assert result.score == DoshaScore(vata=1, pitta=0, kapha=14)


def test_exact_scores_for_mixed_answers():
    answers = ["Headache", "4-7 days", "Evening", "Food", "Variable and inconsistent", "Low and needs stimulation"]
    assert score_answers(answers) == DoshaScore(vata=6, pitta=5, kapha=3)


def test_three_way_tie_goes_to_vata():
    # Fever -> P2, Less than a day -> V2, Morning -> K2
    answers = ["Fever", "Less than a day", "Morning", "Something else"]
    result = classify(answers)
    assert result.score == DoshaScore(2, 2, 2)
    assert result.dosha == VATA


def test_pitta_kapha_tie_goes_to_pitta():
    answers = ["Fever", "More than a week"]
    result = classify(answers)
    assert result.score == DoshaScore(vata=0, pitta=2, kapha=2)
    assert result.dosha == PITTA


def test_kapha_only_when_strictly_ahead():
    assert dominant_dosha(DoshaScore(1, 1, 2)) == KAPHA
    assert dominant_dosha(DoshaScore(2, 1, 2)) == VATA


def test_unknown_answers_contribute_nothing():
    result = classify(["Toothache", "Forever", "Dawn", "Noise", "None", "Zero"])
    assert result.score == DoshaScore()
    assert result.dosha == VATA


def test_optional_answers_may_be_omitted():
    four = ["Fatigue", "4-7 days", "Morning", "Food"]
    assert classify(four).score == classify(four + ["Not listed", "Not listed"]).score
    assert classify([]).score == DoshaScore()


def test_classify_is_pure():
    answers = ["Headache", "1-3 days", "Night", "Weather", "Heavy and prolonged"]
    snapshot = list(answers)
    first = classify(answers)
    second = classify(answers)
    assert first == second
    assert answers == snapshot


def test_result_carries_recommendations():
    result = classify(["Fever", "1-3 days", "Afternoon", "Food"])
    assert result.description.startswith("You show signs of Pitta imbalance")
    assert len(result.remedies) == 6
    assert result.remedies[0] == "Avoid spicy and hot foods"


def test_unknown_dosha_gets_generic_advice():
    rec = recommendations_for("AKASHA")
    assert rec["description"] == "Unable to determine dosha balance."
    assert len(rec["remedies"]) == 5


def test_every_question_option_has_weights():
    assert len(QUESTIONS) == len(WEIGHTS) == 6
    for index, table in enumerate(WEIGHTS):
        assert set(question_options(index)) == set(table)
    assert question_options(6) is None
