# ==============================================
# TOPIC 2: ANALYSIS & CLASSIFICATION
# ==============================================
#
# This package handles inferring what a batch of raw records IS,
# from heuristics over file paths and record shape.
#
# Two questions per batch:
#   Which platform?   PlatformDetector (path rules, then shape rules)
#   Which kind?       RecordTypeClassifier (content vs comment)
#
# Modules:
# --------
# - rules.py              → Rule data class + predicate builders
# - platform_detector.py  → Priority-ordered platform rules
# - record_classifier.py  → Content / comment classification
#
# ==============================================

from .rules import Rule, first_match
from .platform_detector import PlatformDetector
from .record_classifier import RecordTypeClassifier

__all__ = ["Rule", "first_match", "PlatformDetector", "RecordTypeClassifier"]
