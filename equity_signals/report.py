"""Report formatting for analysis and prediction results.

Outputs results to console (formatted text) and JSON-ready dicts.
"""

from __future__ import annotations

from equity_signals.indicators.numeric import format_decimal
from equity_signals.models import AnalysisResult, PredictionResult

WIDTH = 70


class ReportFormatter:
    """Format results for display and export."""

    @staticmethod
    def format_analysis(result: AnalysisResult) -> str:
        lines = [
            "=" * WIDTH,
            f"  TECHNICAL ANALYSIS — {result.symbol} ({result.input_length} bars)",
            "=" * WIDTH,
            f"  Recommendation: {result.recommendation.value}",
            f"  Confidence:     {format_decimal(result.confidence)}%",
        ]

        if result.strategies:
            lines += [
                "-" * WIDTH,
                f"  {'Strategy':<18} {'Signal':<8} {'Conf%':>6}  Interpretation",
            ]
            for s in result.strategies:
                lines.append(
                    f"  {s.name:<18} {s.signal.value:<8} "
                    f"{format_decimal(s.confidence, 0):>6}  {s.interpretation}"
                )
            lines.append(
                f"  Passed: {result.strategies_passed}/{result.total_strategies}"
            )

        if result.notes:
            lines += ["-" * WIDTH] + [f"  {line}" for line in result.notes.splitlines()]
        return "\n".join(lines)

    @staticmethod
    def format_prediction(result: PredictionResult) -> str:
        return "\n".join([
            "-" * WIDTH,
            f"  PREDICTION — {result.symbol}",
            "-" * WIDTH,
            f"  Direction:   {result.direction.value}",
            f"  Target:      {format_decimal(result.target_price)}",
            f"  Confidence:  {format_decimal(result.confidence)}%",
            f"  {result.interpretation}",
            "=" * WIDTH,
        ])

    @classmethod
    def print_console(cls, analysis: AnalysisResult, prediction: PredictionResult) -> None:
        """Print formatted report to console."""
        print("\n" + cls.format_analysis(analysis))
        print(cls.format_prediction(prediction))

    @staticmethod
    def to_dict(analysis: AnalysisResult, prediction: PredictionResult) -> dict:
        """Convert both results to a JSON-serializable dict."""
        return {
            "analysis": analysis.model_dump(mode="json"),
            "prediction": prediction.model_dump(mode="json"),
        }
