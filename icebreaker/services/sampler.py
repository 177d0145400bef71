# icebreaker/services/sampler.py
"""
Deterministic per-match question sampling.

Each match sees a stable subset of every category's pool. The subset is
chosen by sorting the pool on a 32-bit rolling hash of
``"{match_id}_{category_id}_{role}_{question_id}"`` and keeping the head,
so the same match always gets the same questions and no random state is
involved.
"""

from typing import Protocol, Sequence, TypeVar

DEFAULT_LIMIT = 3

_MASK_32 = 0xFFFFFFFF
_SIGN_32 = 0x80000000


class HasId(Protocol):
    id: int


Q = TypeVar("Q", bound=HasId)


def _to_int32(value: int) -> int:
    value &= _MASK_32
    return value - (1 << 32) if value & _SIGN_32 else value


def rolling_hash(value: str) -> int:
    """
    31-multiplier rolling hash over UTF-16 code units, wrapped to a signed
    32-bit integer after every step.

    Matches ``hash = ((hash << 5) - hash) + charCode; hash |= 0`` as used by
    browser clients, so selections agree byte for byte across services.
    """
    h = 0
    data = value.encode("utf-16-le", "surrogatepass")
    for i in range(0, len(data), 2):
        code_unit = data[i] | (data[i + 1] << 8)
        h = _to_int32((h << 5) - h + code_unit)
    return h


def sort_key(match_id: str, category_id: int, role: str, question_id: int) -> int:
    return abs(rolling_hash(f"{match_id}_{category_id}_{role}_{question_id}"))


def sample_questions(
    pool: Sequence[Q],
    match_id: str,
    category_id: int,
    role: str,
    *,
    limit: int = DEFAULT_LIMIT,
) -> list[Q]:
    """
    Pick ``min(limit, len(pool))`` questions for one category of one match.

    The sort is stable, so questions with equal keys keep pool order; callers
    pass pools ordered by id.
    """
    ranked = sorted(
        pool,
        key=lambda q: sort_key(match_id, category_id, role, q.id),
    )
    return ranked[:limit]
