"""
Deterministic question sampling.

Expected values were produced with the reference rolling hash
(``hash = ((hash << 5) - hash) + charCode; hash |= 0``).
"""

from dataclasses import dataclass
from itertools import combinations

import pytest

from icebreaker.services.sampler import rolling_hash, sample_questions, sort_key


@dataclass(frozen=True)
class FakeQuestion:
    id: int


def make_pool(*ids):
    return [FakeQuestion(i) for i in ids]


POOL_10 = make_pool(*range(1, 11))


def ids(questions):
    return [q.id for q in questions]


class TestRollingHash:
    @pytest.mark.parametrize(
        "value, expected",
        [
            ("", 0),
            ("a", 97),
            ("hello", 99162322),
            ("m-001_5_teacher_1", 322584860),
            ("m-001_5_teacher_10", 1410196116),
            ("m-001_5_student_1", -1196243659),
            ("cme3pm38d0000ic0452pzppk8_1_student_42", -18171053),
            ("선생님", 49088187),
        ],
    )
    def test_known_values(self, value, expected):
        assert rolling_hash(value) == expected

    def test_lone_surrogate_hashed_as_code_unit(self):
        assert rolling_hash("m\ud800") == 109 * 31 + 0xD800 == 58675

    def test_stays_within_signed_32_bits(self):
        value = rolling_hash("x" * 500)
        assert -(2 ** 31) <= value < 2 ** 31

    def test_sort_key_is_absolute_hash_of_joined_seed(self):
        assert sort_key("m-001", 5, "student", 1) == 1196243659


class TestSampleQuestions:
    def test_reference_scenario(self):
        picked = sample_questions(POOL_10, "m-001", 5, "teacher")
        assert ids(picked) == [1, 2, 3]

    @pytest.mark.parametrize(
        "match_id, category_id, role, expected",
        [
            ("m-001", 5, "student", [9, 8, 7]),
            ("cme3pm38d0000ic0452pzppk8", 1, "student", [10, 9, 8]),
        ],
    )
    def test_other_reference_vectors(self, match_id, category_id, role, expected):
        assert ids(sample_questions(POOL_10, match_id, category_id, role)) == expected

    def test_returns_three_distinct_pool_members(self):
        picked = sample_questions(POOL_10, "any-match", 2, "student")
        assert len(picked) == 3
        assert len(set(ids(picked))) == 3
        assert all(q in POOL_10 for q in picked)

    def test_stable_across_calls(self):
        first = sample_questions(POOL_10, "abc123", 7, "teacher")
        for _ in range(5):
            assert sample_questions(POOL_10, "abc123", 7, "teacher") == first

    def test_independent_of_pool_order(self):
        forward = sample_questions(POOL_10, "abc123", 7, "teacher")
        backward = sample_questions(list(reversed(POOL_10)), "abc123", 7, "teacher")
        assert forward == backward

    def test_small_pool_returned_whole(self):
        pool = make_pool(4, 9)
        picked = sample_questions(pool, "m-001", 5, "teacher")
        assert ids(picked) == [4, 9]

    def test_match_id_with_lone_surrogate(self):
        picked = sample_questions(POOL_10, "m\ud800", 5, "teacher")
        assert len(picked) == 3
        assert picked == sample_questions(POOL_10, "m\ud800", 5, "teacher")

    def test_empty_pool(self):
        assert sample_questions([], "m-001", 5, "teacher") == []

    def test_custom_limit(self):
        assert len(sample_questions(POOL_10, "m-001", 5, "teacher", limit=5)) == 5

    def test_role_and_category_change_the_seed(self):
        teacher = ids(sample_questions(POOL_10, "m-001", 5, "teacher"))
        student = ids(sample_questions(POOL_10, "m-001", 5, "student"))
        assert teacher != student

    def test_diversity_across_matches(self):
        """Different matches should usually not get the exact same subset."""
        picks = [
            set(ids(sample_questions(POOL_10, f"match-{i}", 5, "teacher")))
            for i in range(60)
        ]
        overlaps = [len(a & b) for a, b in combinations(picks, 2)]

        mean_overlap = sum(overlaps) / len(overlaps)
        differing = sum(1 for o in overlaps if o < 3) / len(overlaps)

        assert mean_overlap < 2.5
        assert differing > 0.5
