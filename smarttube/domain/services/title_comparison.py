from __future__ import annotations

import random
import re

from smarttube.domain.entities.content import TitleComparison, TitleFeedback


DEFAULT_REASON = "Analysis not available. Please try again."
TRUNCATION_LENGTH = 60

_BEST_TITLE = re.compile(r"Best Title:\s*([AB])", re.IGNORECASE)
_REASON = re.compile(r"Reason:\s*(.+?)(?:\n|$)", re.IGNORECASE | re.DOTALL)


def parse_title_comparison(content: str) -> tuple[str, str]:
    best_match = _BEST_TITLE.search(content)
    reason_match = _REASON.search(content)
    winner = best_match.group(1).upper() if best_match else "A"
    reason = reason_match.group(1).strip() if reason_match else DEFAULT_REASON
    return winner, reason


def build_title_comparison(
    *,
    title_a: str,
    title_b: str,
    content: str,
    rng: random.Random,
) -> TitleComparison:
    """Scores are cosmetic: the winner gets 60-79 and both add up to 100."""
    winner, reason = parse_title_comparison(content)
    loser = "B" if winner == "A" else "A"

    winner_score = rng.randint(60, 79)
    loser_score = 100 - winner_score

    feedback = [
        TitleFeedback(title=winner, point=reason, positive=True),
        TitleFeedback(title=winner, point="More likely to attract clicks", positive=True),
        TitleFeedback(title=loser, point="Could be improved for better CTR", positive=False),
    ]
    if len(title_a) > TRUNCATION_LENGTH:
        feedback.append(
            TitleFeedback(title="A", point="Length may cause truncation in search results", positive=False)
        )
    if len(title_b) > TRUNCATION_LENGTH:
        feedback.append(
            TitleFeedback(title="B", point="Length may cause truncation in search results", positive=False)
        )

    return TitleComparison(
        winner=winner,
        score_a=winner_score if winner == "A" else loser_score,
        score_b=winner_score if winner == "B" else loser_score,
        reason=reason,
        feedback=feedback,
    )
