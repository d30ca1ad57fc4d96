"""Contracts module - protocols for cross-layer communication.

Example:
    ```python
    from vastu.contracts import CoverageEstimatorProtocol

    def measure(estimator: CoverageEstimatorProtocol, circle, boundary):
        return estimator.estimate_all(circle, boundary)
    ```
"""

from .protocols import (
    CoverageEstimatorProtocol as CoverageEstimatorProtocol,
    RecommendationRendererProtocol as RecommendationRendererProtocol,
)

__all__ = ["CoverageEstimatorProtocol", "RecommendationRendererProtocol"]
