from .score_aggregator import ResultSetShapeError, ScoreAggregator

__all__ = ["ResultSetShapeError", "ScoreAggregator"]
