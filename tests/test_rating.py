"""Rating decision list."""

from content_moderation.moderation.rating import RatingThresholds, determine_content_rating
from content_moderation.moderation.schema import (
    Analysis,
    Category,
    ContentRating,
    Detection,
    SensitivityStatus,
)


def make_analysis(**detections):
    analysis = Analysis()
    for name, (detected, confidence) in detections.items():
        analysis[Category(name)] = Detection(detected=detected, confidence=confidence)
    return analysis


def test_clean_analysis_is_public():
    decision = determine_content_rating(Analysis())

    assert decision.content_rating == ContentRating.PUBLIC
    assert decision.sensitivity_status == SensitivityStatus.SAFE
    assert decision.reason == "No sensitive content detected"


def test_nudity_reason_wins_over_gore():
    decision = determine_content_rating(make_analysis(nudity=(True, 0.7), gore=(True, 0.9)))

    assert decision.content_rating == ContentRating.ADULT
    assert decision.sensitivity_status == SensitivityStatus.ADULT
    assert decision.reason == "Adult/NSFW content detected"


def test_gore_alone_is_adult():
    decision = determine_content_rating(make_analysis(gore=(True, 0.45)))

    assert decision.sensitivity_status == SensitivityStatus.ADULT
    assert decision.reason == "Gore content detected"


def test_adult_rule_precedes_horror_and_violence():
    decision = determine_content_rating(
        make_analysis(nudity=(True, 0.9), horror=(True, 0.8), violence=(True, 0.8))
    )
    assert decision.sensitivity_status == SensitivityStatus.ADULT


def test_horror_needs_confidence():
    assert determine_content_rating(make_analysis(horror=(True, 0.4))).content_rating == ContentRating.PUBLIC

    decision = determine_content_rating(make_analysis(horror=(True, 0.5)))
    assert decision.content_rating == ContentRating.ADULT
    assert decision.sensitivity_status == SensitivityStatus.HORROR
    assert decision.reason == "Horror/scary content detected"


def test_horror_precedes_violence():
    decision = determine_content_rating(make_analysis(horror=(True, 0.6), violence=(True, 0.8)))
    assert decision.sensitivity_status == SensitivityStatus.HORROR


def test_violence_needs_higher_confidence():
    assert determine_content_rating(make_analysis(violence=(True, 0.5))).content_rating == ContentRating.PUBLIC

    decision = determine_content_rating(make_analysis(violence=(True, 0.6)))
    assert decision.sensitivity_status == SensitivityStatus.VIOLENCE
    assert decision.reason == "Violent content detected"


def test_low_confidence_drugs_and_weapons_stay_public():
    decision = determine_content_rating(make_analysis(drugs=(True, 0.6), weapons=(True, 0.5)))
    assert decision.content_rating == ContentRating.PUBLIC


def test_drugs_or_weapons_flagged():
    decision = determine_content_rating(make_analysis(weapons=(True, 0.7)))

    assert decision.content_rating == ContentRating.ADULT
    assert decision.sensitivity_status == SensitivityStatus.FLAGGED
    assert decision.reason == "Drug or weapon content detected"


def test_flag_uses_either_confidence_once_one_is_detected():
    # drugs is the detected one, weapons carries the confidence
    decision = determine_content_rating(make_analysis(drugs=(True, 0.55), weapons=(False, 0.75)))
    assert decision.sensitivity_status == SensitivityStatus.FLAGGED


def test_confidence_without_detected_flag_is_ignored():
    decision = determine_content_rating(
        make_analysis(horror=(False, 0.9), violence=(False, 0.9), drugs=(False, 0.9))
    )
    assert decision.content_rating == ContentRating.PUBLIC


def test_custom_thresholds():
    strict = RatingThresholds(violence_min_confidence=0.4)
    decision = determine_content_rating(make_analysis(violence=(True, 0.45)), strict)
    assert decision.sensitivity_status == SensitivityStatus.VIOLENCE


def test_rating_is_pure():
    analysis = make_analysis(horror=(True, 0.6))
    snapshot = analysis.to_dict()

    first = determine_content_rating(analysis)
    second = determine_content_rating(analysis)

    assert first == second
    assert analysis.to_dict() == snapshot
