from datetime import date

from app.services.duplicate_detector import (
    confidence_score,
    find_duplicates,
    normalize_text,
    similarity,
)


def person(id, last, first, birth_date, middle=None, extension=None):
    return {
        "id": id,
        "last_name": last,
        "first_name": first,
        "middle_name": middle,
        "extension_name": extension,
        "birth_date": birth_date,
    }


def test_normalize_text():
    assert normalize_text("  De La-Cruz, ") == "de lacruz"
    assert normalize_text(None) == ""


def test_similarity_bounds():
    assert similarity("", "") == 100.0
    assert similarity("abc", "abc") == 100.0
    assert similarity("abc", "xyz") == 0.0
    assert similarity("santos", "santo") == 5 / 6 * 100


def test_identical_records_score_100():
    a = person(1, "Reyes", "Maria", date(1944, 6, 15), middle="Lopez")
    b = person(2, "REYES", "maria", date(1944, 6, 15), middle="Lopez")
    result = confidence_score(a, b)
    assert result["confidence_score"] == 100
    assert result["match_details"]["birth_date_score"] == 100
    assert result["match_details"]["name_score"] == 100


def test_different_birth_year_costs_one_field():
    a = person(1, "Reyes", "Maria", date(1944, 6, 15))
    b = person(2, "Reyes", "Maria", date(1945, 6, 15))
    result = confidence_score(a, b)
    assert result["confidence_score"] == 86
    assert result["match_details"]["birth_year_match"] is False


def test_find_duplicates_sorted_and_thresholded():
    encoded = [person(1, "Reyes", "Maria", date(1944, 6, 15))]
    existing = [
        person(10, "Reyes", "Mario", date(1944, 6, 15)),
        person(11, "Reyes", "Maria", date(1944, 6, 15)),
        person(12, "Garcia", "Jose", date(1950, 1, 2)),
    ]
    matches = find_duplicates(encoded, existing, 70)

    assert [m["match_id"] for m in matches] == [11, 10]
    assert all(m["citizen_id"] == 1 for m in matches)
    scores = [m["confidence_score"] for m in matches]
    assert scores == sorted(scores, reverse=True)
    assert all(s >= 70 for s in scores)


def test_find_duplicates_high_threshold_drops_near_matches():
    encoded = [person(1, "Reyes", "Maria", date(1944, 6, 15))]
    existing = [person(10, "Reyes", "Mario", date(1944, 6, 15))]
    assert find_duplicates(encoded, existing, 100) == []
