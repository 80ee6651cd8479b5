"""Support and resistance detection.

Pivot points, Fibonacci ratios, volume profile, fractal swings, price
clusters, round numbers and moving averages each propose candidate levels;
``consolidate_levels`` merges and ranks them.
"""

from folioscope.levels.consolidate import consolidate_levels, merge_levels, score_level
from folioscope.levels.engine import (
    ComprehensiveSRAnalysis,
    calculate_support_resistance,
    comprehensive_sr_analysis,
    fibonacci_price_levels,
    pivot_levels,
)
from folioscope.levels.fibonacci import (
    fibonacci_extension,
    fibonacci_retracement,
    find_swing_range,
)
from folioscope.levels.pivots import (
    all_pivots,
    camarilla_pivots,
    demark_pivots,
    fibonacci_pivots,
    standard_pivots,
    woodie_pivots,
)
from folioscope.levels.reference import (
    moving_average_levels,
    psychological_levels,
    round_number_interval,
)
from folioscope.levels.swings import (
    cluster_price_levels,
    detect_swing_points,
    swing_points_to_levels,
)
from folioscope.levels.volume_profile import volume_profile, volume_profile_levels

__all__ = [
    # Engine
    "calculate_support_resistance",
    "comprehensive_sr_analysis",
    "ComprehensiveSRAnalysis",
    "consolidate_levels",
    "merge_levels",
    "score_level",
    # Pivots
    "all_pivots",
    "standard_pivots",
    "fibonacci_pivots",
    "camarilla_pivots",
    "woodie_pivots",
    "demark_pivots",
    "pivot_levels",
    # Fibonacci
    "find_swing_range",
    "fibonacci_retracement",
    "fibonacci_extension",
    "fibonacci_price_levels",
    # Price action and volume
    "volume_profile",
    "volume_profile_levels",
    "detect_swing_points",
    "swing_points_to_levels",
    "cluster_price_levels",
    "psychological_levels",
    "moving_average_levels",
    "round_number_interval",
]
