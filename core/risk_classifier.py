"""Risk tier classification and the static per-tier presentation tables."""

from typing import Dict, Tuple

from core.utils import (
    AnalysisResult,
    Classification,
    RawAnalysisOutput,
    RecommendationIcon,
    RecommendationItem,
    RiskTier,
    TierStyle,
)

HIGH_CONFIDENCE_THRESHOLD = 85.0

PREDICTION_NEGATIVE = "No significant abnormalities detected"
PREDICTION_POSITIVE = "Potential abnormality detected"


def _items(*pairs) -> Tuple[RecommendationItem, ...]:
    return tuple(RecommendationItem(icon, text) for icon, text in pairs)


RECOMMENDATIONS: Dict[RiskTier, Tuple[RecommendationItem, ...]] = {
    RiskTier.LOW: _items(
        (RecommendationIcon.HEART, "Maintain a healthy lifestyle with regular exercise"),
        (RecommendationIcon.APPLE, "Eat a balanced diet rich in fruits and vegetables"),
        (RecommendationIcon.CIGARETTE, "Avoid smoking and secondhand smoke exposure"),
        (RecommendationIcon.STETHOSCOPE, "Schedule annual health checkups"),
        (RecommendationIcon.WIND, "Practice breathing exercises for lung health"),
    ),
    RiskTier.MEDIUM: _items(
        (RecommendationIcon.STETHOSCOPE, "Consult with a healthcare professional immediately"),
        (RecommendationIcon.CIGARETTE, "Quit smoking if you are a smoker - seek cessation programs"),
        (RecommendationIcon.WIND, "Avoid exposure to air pollution and harmful chemicals"),
        (RecommendationIcon.DUMBBELL, "Engage in moderate physical activity daily"),
        (RecommendationIcon.APPLE, "Increase intake of antioxidant-rich foods"),
        (RecommendationIcon.HEART, "Monitor symptoms and schedule follow-up tests"),
    ),
    RiskTier.HIGH: _items(
        (RecommendationIcon.STETHOSCOPE, "URGENT: Schedule an appointment with an oncologist immediately"),
        (RecommendationIcon.ALERT, "Get a comprehensive medical evaluation and biopsy"),
        (RecommendationIcon.CIGARETTE, "Stop smoking immediately and avoid all tobacco products"),
        (RecommendationIcon.HEART, "Inform family members about potential genetic risk factors"),
        (RecommendationIcon.WIND, "Avoid all environmental pollutants and carcinogens"),
        (RecommendationIcon.APPLE, "Follow a cancer-prevention diet as recommended by your doctor"),
        (RecommendationIcon.ACTIVITY, "Stay physically active as advised by your healthcare team"),
    ),
}

TIER_STYLES: Dict[RiskTier, TierStyle] = {
    RiskTier.LOW: TierStyle(
        label="LOW",
        text_color="#16A34A",        # green-600
        background_color="#F0FDF4",  # green-50
        border_color="#BBF7D0",      # green-200
        badge_color="#22C55E",       # green-500
        badge_hover_color="#16A34A",
        status_icon="check",
    ),
    RiskTier.MEDIUM: TierStyle(
        label="MEDIUM",
        text_color="#CA8A04",
        background_color="#FEFCE8",
        border_color="#FEF08A",
        badge_color="#EAB308",
        badge_hover_color="#CA8A04",
        status_icon="alert",
    ),
    RiskTier.HIGH: TierStyle(
        label="HIGH",
        text_color="#DC2626",
        background_color="#FEF2F2",
        border_color="#FECACA",
        badge_color="#EF4444",
        badge_hover_color="#DC2626",
        status_icon="alert",
    ),
}


def classify(raw: RawAnalysisOutput) -> Classification:
    """Map a raw simulated output to its risk tier and recommendations.

    Negative outputs are always LOW. Positive outputs are HIGH only when
    confidence is strictly above 85, otherwise MEDIUM.
    """
    if not raw.is_positive:
        tier = RiskTier.LOW
        prediction = PREDICTION_NEGATIVE
    else:
        if raw.confidence_pct > HIGH_CONFIDENCE_THRESHOLD:
            tier = RiskTier.HIGH
        else:
            tier = RiskTier.MEDIUM
        prediction = PREDICTION_POSITIVE

    return Classification(
        risk_tier=tier,
        prediction_text=prediction,
        recommendations=RECOMMENDATIONS[tier],
    )


def tier_style(tier: RiskTier) -> TierStyle:
    """Presentation data for a risk tier."""
    return TIER_STYLES[tier]


def build_result(raw: RawAnalysisOutput) -> AnalysisResult:
    """Combine a raw output with its classification into a view-model."""
    classification = classify(raw)
    return AnalysisResult(
        accuracy_pct=raw.accuracy_pct,
        confidence_pct=raw.confidence_pct,
        prediction_text=classification.prediction_text,
        risk_tier=classification.risk_tier,
        recommendations=classification.recommendations,
        style=tier_style(classification.risk_tier),
    )
