"""
Local heuristic analyzers. Pure, deterministic and offline.
"""

from .ai_detector import detect_ai_content
from .bias_analyzer import analyze_bias
from .credibility_scorer import calculate_credibility
from .safety_analyzer import analyze_safety
from .sustainability_scorer import calculate_sustainability

__all__ = [
    "analyze_bias",
    "analyze_safety",
    "calculate_credibility",
    "calculate_sustainability",
    "detect_ai_content",
]
