from typing import List

from datatransform.models import DataKind, RawRecord
from .rules import Rule, any_of, first_match, has_value


class RecordTypeClassifier:
    """
    Decides whether a batch holds content records or comment records,
    from the first record only. Ambiguous batches count as content.
    """

    RULES: List[Rule] = [
        Rule("comment_id", has_value("comment_id"), DataKind.COMMENT),
        Rule(
            "content_id",
            any_of(has_value("note_id"), has_value("aweme_id"), has_value("video_id")),
            DataKind.CONTENT,
        ),
    ]

    DEFAULT = DataKind.CONTENT

    @classmethod
    def classify(cls, records: List[RawRecord]) -> DataKind:
        if not records or not isinstance(records[0], dict):
            return cls.DEFAULT

        rule = first_match(cls.RULES, records[0])
        if rule is None:
            return cls.DEFAULT
        return rule.result
