"""
Ramer-Douglas-Peucker (RDP) simplification plugin for funscript transformations.

This plugin reduces the number of points in a funscript by removing points
that lie within a distance tolerance of the line through their retained
neighbours, preserving the overall shape of the motion.
"""

import logging
from typing import Any, Dict, List

import numpy as np

from config.constants import DEFAULT_RDP_EPSILON, RDP_EPSILON_MIN, RDP_PLUGIN_VERSION
from .base_plugin import FunscriptTransformationPlugin

logger = logging.getLogger(__name__)


def _actions_to_points(actions) -> np.ndarray:
    """(at, pos) pairs as float64 so distances do not depend on integer storage."""
    return np.array([(action.at, action.pos) for action in actions], dtype=np.float64).reshape(-1, 2)


def _effective_epsilon(epsilon) -> float:
    epsilon = float(epsilon)
    if np.isnan(epsilon) or epsilon < 0.0:
        return 0.0
    return epsilon


def rdp_keep_mask(points: np.ndarray, epsilon: float) -> np.ndarray:
    """
    Return a boolean mask of the points retained by RDP.

    Iterative stack over ``[start, end]`` index ranges. Both endpoints of the
    whole polyline are always kept; an interior point is kept only when its
    distance to the chord of its enclosing range is strictly greater than
    ``epsilon``.
    """
    n = len(points)
    keep = np.zeros(n, dtype=bool)
    if n == 0:
        return keep
    keep[0] = True
    keep[-1] = True
    if n < 3:
        return keep

    stack = [(0, n - 1)]
    while stack:
        start_idx, end_idx = stack.pop()
        if end_idx - start_idx <= 1:
            continue

        start = points[start_idx]
        line_vec = points[end_idx] - start
        line_length = np.hypot(line_vec[0], line_vec[1])

        point_vecs = points[start_idx + 1:end_idx] - start
        if line_length == 0:
            # Chord collapsed to a point: fall back to distance from it
            distances = np.hypot(point_vecs[:, 0], point_vecs[:, 1])
        else:
            cross_products = line_vec[0] * point_vecs[:, 1] - line_vec[1] * point_vecs[:, 0]
            distances = np.abs(cross_products) / line_length

        max_local_idx = int(np.argmax(distances))
        if distances[max_local_idx] > epsilon:
            max_global_idx = start_idx + max_local_idx + 1
            keep[max_global_idx] = True
            stack.append((start_idx, max_global_idx))
            stack.append((max_global_idx, end_idx))

    return keep


def simplify(document, epsilon: float) -> None:
    """
    Simplify ``document.actions`` in place with RDP.

    The list object and the retained point objects are kept, only dropped
    points are removed. ``document.raw_actions`` is not touched. Negative
    tolerances and NaN behave like 0. Never raises for empty or short action lists.
    """
    actions = document.actions
    if len(actions) < 3:
        logger.debug(f"Not enough points for RDP simplification ({len(actions)})")
        return

    epsilon = _effective_epsilon(epsilon)
    keep = rdp_keep_mask(_actions_to_points(actions), epsilon)

    original_count = len(actions)
    actions[:] = [action for action, kept in zip(actions, keep) if kept]

    simplified_count = len(actions)
    reduction_pct = ((original_count - simplified_count) / original_count) * 100
    logger.info(
        f"Applied RDP simplification: {original_count} -> {simplified_count} points "
        f"({reduction_pct:.1f}% reduction, epsilon={epsilon})"
    )


class RdpSimplifyPlugin(FunscriptTransformationPlugin):
    """
    RDP (Ramer-Douglas-Peucker) simplification plugin.

    Reduces funscript complexity by removing redundant points while
    preserving the overall shape and the first and last points.
    """

    @property
    def name(self) -> str:
        return "Simplify (RDP)"

    @property
    def description(self) -> str:
        return "Simplifies funscript by removing redundant points using RDP algorithm"

    @property
    def version(self) -> str:
        return RDP_PLUGIN_VERSION

    @property
    def parameters_schema(self) -> Dict[str, Any]:
        return {
            'epsilon': {
                'type': float,
                'required': False,
                'default': DEFAULT_RDP_EPSILON,
                'description': 'Distance tolerance for point removal (higher = more aggressive)',
                'constraints': {'min': RDP_EPSILON_MIN}
            },
        }

    def transform(self, document, **parameters) -> None:
        """Apply RDP simplification to the document's actions."""
        validated_params = self.validate_parameters(parameters)
        simplify(document, validated_params['epsilon'])
        return None  # Modifies in-place

    def get_preview(self, document, **parameters) -> Dict[str, Any]:
        """Report how many points RDP would keep, without modifying the document."""
        try:
            validated_params = self.validate_parameters(parameters)
        except ValueError as e:
            return {"error": str(e)}

        actions: List = document.actions
        total_points = len(actions)
        epsilon = _effective_epsilon(validated_params['epsilon'])
        remaining = int(np.count_nonzero(rdp_keep_mask(_actions_to_points(actions), epsilon)))
        reduction_pct = ((total_points - remaining) / total_points) * 100 if total_points else 0.0

        return {
            "filter_type": "RDP Simplification",
            "parameters": validated_params,
            "total_points": total_points,
            "points_after": remaining,
            "reduction_percent": reduction_pct,
            "can_apply": total_points >= 3,
        }
