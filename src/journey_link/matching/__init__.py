"""Ranking of stop finder candidates."""

from journey_link.matching.normalizers import normalize_text, remove_accents
from journey_link.matching.stop_selector import name_similarity, select_best_stop

__all__ = [
    # Selection
    "select_best_stop",
    "name_similarity",
    # Normalizers
    "normalize_text",
    "remove_accents",
]
