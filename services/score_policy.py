"""
Score Policy - combine match ratio and imbalance into the FinalScore
"""

from typing import Tuple

# (lower bound, label), highest first
SCORE_BANDS: Tuple[Tuple[float, str], ...] = (
    (80.0, "Excellent"),
    (60.0, "Good"),
    (40.0, "Moderate"),
    (0.0, "Poor"),
)


class ScorePolicy:
    """
    FinalScore = weighted mean of alignment and balance, scaled to 0-100

    alignment = match ratio (0-1)
    balance = 1 - aggregate_variance / variance_ceiling, floored at 0

    Swapping this class is enough to change how the score is combined;
    the sub-components are computed elsewhere.
    """

    def __init__(self, match_weight: float = 0.6, balance_weight: float = 0.4,
                 variance_ceiling: float = 100.0):
        if match_weight < 0 or balance_weight < 0 or match_weight + balance_weight <= 0:
            raise ValueError("Score weights must be non-negative and not both zero")
        if variance_ceiling <= 0:
            raise ValueError("variance_ceiling must be positive")
        self.match_weight = match_weight
        self.balance_weight = balance_weight
        self.variance_ceiling = variance_ceiling

    @classmethod
    def from_settings(cls, settings) -> "ScorePolicy":
        return cls(
            match_weight=settings.final_score_match_weight,
            balance_weight=settings.final_score_balance_weight,
            variance_ceiling=settings.final_score_variance_ceiling,
        )

    def balance(self, aggregate_variance: float) -> float:
        return max(0.0, 1.0 - aggregate_variance / self.variance_ceiling)

    def final_score(self, match_ratio: float, aggregate_variance: float) -> float:
        """
        Args:
            match_ratio: fraction of scored questions that match (0-1)
            aggregate_variance: imbalance in percentage points (>= 0)

        Returns:
            Score clamped to [0, 100]
        """
        total_weight = self.match_weight + self.balance_weight
        score = 100.0 * (
            self.match_weight * match_ratio
            + self.balance_weight * self.balance(aggregate_variance)
        ) / total_weight
        return round(max(0.0, min(100.0, score)), 2)

    @staticmethod
    def band(score: float) -> str:
        """Qualitative label of a FinalScore"""
        for lower, label in SCORE_BANDS:
            if score >= lower:
                return label
        return SCORE_BANDS[-1][1]
