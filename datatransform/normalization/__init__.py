# ==============================================
# TOPIC 1: NORMALIZATION
# ==============================================
#
# This package handles everything related to coercing raw field
# values and mapping platform records onto the unified shapes
# BEFORE they are serialized.
#
# Modules:
# --------
# - value_coercer.py    → Counts ("1.5万") and timestamps (s / ms) to plain numbers
# - field_normalizer.py → Map platform records onto UnifiedContent / UnifiedComment
#
# ==============================================

from .value_coercer import ValueCoercer
from .field_normalizer import FieldNormalizer, FieldRule, CONTENT_FIELD_MAP, COMMENT_FIELD_MAP

__all__ = ["ValueCoercer", "FieldNormalizer", "FieldRule", "CONTENT_FIELD_MAP", "COMMENT_FIELD_MAP"]
