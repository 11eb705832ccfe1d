"""
Duplicate detection - compares newly encoded citizens against existing ones.

Seven fields carry equal weight: last, first, middle and extension name
(Levenshtein similarity after normalization) and birth month, day and year
(exact match).
"""
import re
from typing import Any, Dict, Iterable, List

FIELD_WEIGHT = 100 / 7


def normalize_text(text: str) -> str:
    """Lowercase, drop punctuation, collapse whitespace."""
    text = (text or "").lower()
    text = re.sub(r"[^\w\s]", "", text)
    return re.sub(r"\s+", " ", text).strip()


def levenshtein_distance(a: str, b: str) -> int:
    if len(a) < len(b):
        a, b = b, a
    previous = list(range(len(b) + 1))
    for i, ca in enumerate(a, 1):
        current = [i]
        for j, cb in enumerate(b, 1):
            current.append(min(
                previous[j] + 1,
                current[j - 1] + 1,
                previous[j - 1] + (ca != cb),
            ))
        previous = current
    return previous[-1]


def similarity(a: str, b: str) -> float:
    """0-100 similarity; two empty strings are identical."""
    longest = max(len(a), len(b))
    if longest == 0:
        return 100.0
    return (longest - levenshtein_distance(a, b)) / longest * 100


def _get(record: Any, name: str):
    if isinstance(record, dict):
        return record.get(name)
    return getattr(record, name, None)


def confidence_score(first: Any, second: Any) -> Dict[str, Any]:
    """
    Score how likely two citizen records describe the same person.

    Returns:
        Dict with confidence_score (0-100) and per-field match details
    """
    name_scores = {}
    for name in ("last_name", "first_name", "middle_name", "extension_name"):
        name_scores[name] = similarity(
            normalize_text(_get(first, name)),
            normalize_text(_get(second, name)),
        )

    d1, d2 = _get(first, "birth_date"), _get(second, "birth_date")
    month_match = d1.month == d2.month
    day_match = d1.day == d2.day
    year_match = d1.year == d2.year

    field_scores = list(name_scores.values()) + [
        100 if month_match else 0,
        100 if day_match else 0,
        100 if year_match else 0,
    ]
    score = sum(s * FIELD_WEIGHT / 100 for s in field_scores)

    return {
        "confidence_score": round(score),
        "match_details": {
            "last_name_score": round(name_scores["last_name"]),
            "first_name_score": round(name_scores["first_name"]),
            "middle_name_score": round(name_scores["middle_name"]),
            "extension_score": round(name_scores["extension_name"]),
            "name_score": round(sum(name_scores.values()) / 4),
            "birth_month_match": month_match,
            "birth_day_match": day_match,
            "birth_year_match": year_match,
            "birth_date_score": round(sum(field_scores[4:]) / 3),
        },
    }


def find_duplicates(
    candidates: Iterable[Any],
    existing: Iterable[Any],
    min_confidence: int,
) -> List[Dict[str, Any]]:
    """
    Pair every candidate with every existing record scoring at least
    min_confidence, highest score first.
    """
    existing = list(existing)
    matches = []
    for candidate in candidates:
        for other in existing:
            result = confidence_score(candidate, other)
            if result["confidence_score"] >= min_confidence:
                matches.append({
                    "citizen_id": _get(candidate, "id"),
                    "match_id": _get(other, "id"),
                    **result,
                })

    matches.sort(key=lambda m: m["confidence_score"], reverse=True)
    return matches
