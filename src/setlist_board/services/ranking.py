"""Hot-score ranking formula.

The feed query evaluates this inside the database. PostgreSQL gets an
equivalent SQL expression; SQLite has no ``POW`` in every build, so the Python
function itself is registered on each new connection.
"""

from __future__ import annotations

from typing import Any

REPLY_WEIGHT = 2
AGE_OFFSET_HOURS = 2.0
DECAY_EXPONENT = 1.5

SQLITE_HOT_SCORE_FUNCTION = "hot_score"


def hot_score(upvote_count: int, reply_count: int, age_hours: float) -> float:
    """Return the time-decayed engagement score of a post.

    ``(upvotes + replies * 2) / (age_hours + 2) ** 1.5``

    Negative ages (clock skew between app and database) count as zero.
    """
    age = max(float(age_hours or 0.0), 0.0)
    engagement = (upvote_count or 0) + (reply_count or 0) * REPLY_WEIGHT
    return float(engagement) / ((age + AGE_OFFSET_HOURS) ** DECAY_EXPONENT)


def register_sqlite_functions(dbapi_connection: Any, connection_record: Any) -> None:
    """``connect`` event hook that exposes ``hot_score`` to SQLite queries."""
    create_function = getattr(dbapi_connection, "create_function", None)
    if create_function is None:
        return
    create_function(SQLITE_HOT_SCORE_FUNCTION, 3, hot_score, deterministic=True)
