"""
Règles de notation pures (aucun accès base).

- grade_for_score : note /100 -> (lettre, grade point)
- classify_cgpa   : CGPA -> mention
- trend_direction / advise : tendance + niveau de risque + recommandations

Seule implémentation des barèmes : modèles, vues et services passent tous par ici.
"""
from decimal import Decimal, ROUND_HALF_UP

# (seuil inclusif, lettre, grade point), premier seuil atteint gagne
GRADE_BANDS = (
    (Decimal("70"), "A", Decimal("4.00")),
    (Decimal("60"), "B", Decimal("3.00")),
    (Decimal("50"), "C", Decimal("2.00")),
    (Decimal("45"), "D", Decimal("1.00")),
    (Decimal("40"), "E", Decimal("0.00")),
)
FAIL_GRADE = ("F", Decimal("0.00"))

CLASSIFICATION_BANDS = (
    (Decimal("3.7"), "First Class Honours"),
    (Decimal("3.3"), "Second Class Honours (Upper Division)"),
    (Decimal("2.7"), "Second Class Honours (Lower Division)"),
    (Decimal("2.0"), "Third Class Honours"),
)
PASS_CLASSIFICATION = "Pass"

RISK_HIGH, RISK_MEDIUM, RISK_LOW = "high", "medium", "low"
TREND_UP, TREND_DOWN, TREND_STABLE = "up", "down", "stable"

# (borne supérieure exclusive, risque, recommandations) ; None = au-delà
ADVISORY_TIERS = (
    (Decimal("2.0"), RISK_HIGH, (
        "Seek academic counseling immediately",
        "Consider reducing course load to focus on improving grades",
        "Utilize tutoring services and study groups",
        "Meet with academic advisor to discuss academic standing",
    )),
    (Decimal("2.7"), RISK_MEDIUM, (
        "Improve study habits and time management",
        "Seek help from professors during office hours",
        "Consider forming study groups with classmates",
        "Focus on courses with higher credit values",
    )),
    (Decimal("3.3"), RISK_LOW, (
        "Maintain consistent study schedule",
        "Challenge yourself with advanced courses",
        "Consider research opportunities or internships",
    )),
    (None, RISK_LOW, (
        "Excellent performance! Keep up the good work",
        "Consider pursuing honors programs or research",
        "Explore leadership opportunities",
        "Prepare for graduate school applications if interested",
    )),
)

TREND_THRESHOLD = Decimal("0.2")
DECLINE_WARNING = "Address declining performance - identify problem areas"
IMPROVEMENT_NOTE = "Great improvement! Continue with current strategies"


def to_decimal(x) -> Decimal:
    # float -> str d'abord, sinon 69.99999 parasites
    return x if isinstance(x, Decimal) else Decimal(str(x))

def q2(x) -> Decimal:
    """Arrondi à 2 décimales en Decimal."""
    return to_decimal(x).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def grade_for_score(score):
    """
    Retourne (grade, grade_point) pour une note dans [0,100].
    La validation de l'intervalle est à la charge de l'appelant.
    """
    value = to_decimal(score)
    for threshold, letter, point in GRADE_BANDS:
        if value >= threshold:
            return letter, point
    return FAIL_GRADE


def classify_cgpa(cgpa) -> str:
    value = to_decimal(cgpa)
    for threshold, label in CLASSIFICATION_BANDS:
        if value >= threshold:
            return label
    return PASS_CLASSIFICATION


def _cumulative(record) -> Decimal:
    if isinstance(record, dict):
        return to_decimal(record["cumulative_gpa"])
    return to_decimal(record.cumulative_gpa)

def trend_direction(records) -> str:
    """Compare les deux derniers CGPA cumulés (ordre chronologique)."""
    records = list(records)
    if len(records) < 2:
        return TREND_STABLE
    previous, latest = _cumulative(records[-2]), _cumulative(records[-1])
    if latest > previous:
        return TREND_UP
    if latest < previous:
        return TREND_DOWN
    return TREND_STABLE


def advise(cgpa, records=()):
    """
    Niveau de risque + recommandations ordonnées.
    records: CGPARecord (ou dicts avec 'cumulative_gpa') en ordre chronologique.
    Retour: {"risk_level": ..., "recommendations": [...], "trend": ...}
    """
    value = to_decimal(cgpa)
    records = list(records)

    risk_level, recommendations = RISK_LOW, []
    for upper, risk, texts in ADVISORY_TIERS:
        if upper is None or value < upper:
            risk_level, recommendations = risk, list(texts)
            break

    if len(records) >= 2:
        delta = _cumulative(records[-1]) - _cumulative(records[-2])
        if delta < -TREND_THRESHOLD:
            recommendations.append(DECLINE_WARNING)
        elif delta > TREND_THRESHOLD:
            recommendations.append(IMPROVEMENT_NOTE)

    return {
        "risk_level": risk_level,
        "recommendations": recommendations,
        "trend": trend_direction(records),
    }
