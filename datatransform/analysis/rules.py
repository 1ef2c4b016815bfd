# ==============================================
# Rules (Data Classes)
# ==============================================
#
# PURPOSE:
#   A detection heuristic expressed as data: a predicate plus the
#   result it yields. Detectors hold ordered lists of these and
#   evaluate them top to bottom, first match wins.
#
# CLASSES:
# --------
# - Rule (dataclass)
#     name: str                      → Human-readable label, used in logs
#     predicate: Callable[..., bool] → Test against the detector's input
#     result: Any                    → Returned when the predicate holds
#
# FUNCTIONS:
# ----------
# - first_match(rules, subject) -> Rule | None
# - has_key(name) / has_value(name) / path_contains(*needles)
#     Predicate builders used by the detectors.
#
# ==============================================

from dataclasses import dataclass
from typing import Any, Callable, Iterable, Optional


@dataclass(frozen=True)
class Rule:
    name: str
    predicate: Callable[[Any], bool]
    result: Any

    def matches(self, subject: Any) -> bool:
        return bool(self.predicate(subject))


def first_match(rules: Iterable[Rule], subject: Any) -> Optional[Rule]:
    """Return the first rule whose predicate holds for subject."""
    for rule in rules:
        if rule.matches(subject):
            return rule
    return None


def has_key(name: str) -> Callable[[dict], bool]:
    """Key is present, whatever its value (null included)."""
    return lambda record: name in record


def has_value(name: str) -> Callable[[dict], bool]:
    """Key is present with a non-empty value."""
    def predicate(record: dict) -> bool:
        value = record.get(name)
        if isinstance(value, (list, dict)):
            return True
        return bool(value)
    return predicate


def path_contains(*needles: str) -> Callable[[str], bool]:
    """Lower-cased path contains any of the needles."""
    return lambda path: any(needle in path for needle in needles)


def all_of(*predicates: Callable[[Any], bool]) -> Callable[[Any], bool]:
    return lambda subject: all(p(subject) for p in predicates)


def any_of(*predicates: Callable[[Any], bool]) -> Callable[[Any], bool]:
    return lambda subject: any(p(subject) for p in predicates)
