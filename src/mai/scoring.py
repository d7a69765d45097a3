"""
Per-category scoring.

Scoring is a tally of affirmative self-endorsement. There is no answer
key: a True answer counts towards every category the question belongs
to, False and unset answers count towards nothing.
"""

from typing import List, Sequence

from mai.model import Answer, CategoryMap, ScoreEntry


def compute_scores(answers: Sequence[Answer], category_map: CategoryMap) -> List[ScoreEntry]:
    """
    Tally True answers per category, in the category map's declared order.

    Member ids were validated against the bank when the inventory was
    built, so every lookup is in range.

    Returns:
        One ScoreEntry per category with 0 <= score <= total
    """
    scores = []
    for category in category_map:
        score = sum(1 for i in category.member_ids if answers[i] is True)
        scores.append(ScoreEntry(label=category.label, score=score, total=category.total))
    return scores
