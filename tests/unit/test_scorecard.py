"""Unit tests for scorecard models."""

import json

import pytest

from kube_score.models import (
    Check,
    CheckResult,
    Comment,
    Grade,
    Outcome,
    Scorecard,
    TargetShape,
)
from kube_score.models.kube import ObjectMeta, TypeMeta


def make_check(check_id: str = "test-check") -> Check:
    return Check(
        id=check_id,
        name="Test Check",
        target=TargetShape.METADATA,
        evaluate=lambda resource, index: CheckResult.ok(),
    )


def identity(name: str = "web", kind: str = "Pod", namespace: str = "default"):
    return TypeMeta(api_version="v1", kind=kind), ObjectMeta(name=name, namespace=namespace)


class TestGrade:
    """Tests for Grade."""

    def test_rank_order(self):
        """Critical ranks below Warning, which ranks below AllOK."""
        assert Grade.SKIPPED.rank < Grade.CRITICAL.rank < Grade.WARNING.rank < Grade.ALL_OK.rank

    def test_values(self):
        assert Grade.ALL_OK.value == "AllOK"
        assert Grade("Critical") == Grade.CRITICAL


class TestCheckResult:
    """Tests for CheckResult helpers."""

    def test_worst_of_without_comments(self):
        assert CheckResult.worst_of([], Grade.CRITICAL).grade == Grade.ALL_OK

    def test_worst_of_with_comments(self):
        result = CheckResult.worst_of([Comment(summary="bad")], Grade.WARNING)

        assert result.grade == Grade.WARNING
        assert result.comments[0].summary == "bad"


class TestScorecard:
    """Tests for Scorecard."""

    def test_groups_by_identity(self):
        """Outcomes for the same identity land on one scored object."""
        scorecard = Scorecard()
        type_meta, object_meta = identity()

        scorecard.add(type_meta, object_meta, Outcome(check=make_check("a"), grade=Grade.ALL_OK))
        scorecard.add(type_meta, object_meta, Outcome(check=make_check("b"), grade=Grade.WARNING))

        assert len(scorecard) == 1
        scored = scorecard.get("Pod", "web")
        assert [o.check.id for o in scored.checks] == ["a", "b"]

    def test_duplicate_identity_gets_own_entry(self):
        """Two resources with the same identity are reported separately."""
        scorecard = Scorecard()
        type_meta, object_meta = identity()

        scorecard.add_all(type_meta, object_meta, [Outcome(check=make_check(), grade=Grade.ALL_OK)])
        scorecard.add_all(type_meta, object_meta, [Outcome(check=make_check(), grade=Grade.CRITICAL)])

        assert len(scorecard) == 2
        assert [[o.grade for o in s.checks] for s in scorecard] == [[Grade.ALL_OK], [Grade.CRITICAL]]

    def test_add_never_repeats_a_check(self):
        """A second outcome for the same check starts a new entry."""
        scorecard = Scorecard()
        type_meta, object_meta = identity()

        scorecard.add(type_meta, object_meta, Outcome(check=make_check("a"), grade=Grade.ALL_OK))
        scorecard.add(type_meta, object_meta, Outcome(check=make_check("b"), grade=Grade.ALL_OK))
        scorecard.add(type_meta, object_meta, Outcome(check=make_check("a"), grade=Grade.WARNING))

        assert [[o.check.id for o in s.checks] for s in scorecard] == [["a", "b"], ["a"]]

    def test_add_all_rejects_repeated_check(self):
        scorecard = Scorecard()
        outcomes = [
            Outcome(check=make_check(), grade=Grade.ALL_OK),
            Outcome(check=make_check(), grade=Grade.WARNING),
        ]

        with pytest.raises(ValueError, match="Duplicate outcomes"):
            scorecard.add_all(*identity(), outcomes)
        assert len(scorecard) == 0

    def test_first_appearance_order(self):
        scorecard = Scorecard()
        for name in ["b", "a", "c"]:
            scorecard.add_all(*identity(name), [])
        scorecard.add(*identity("a"), Outcome(check=make_check(), grade=Grade.ALL_OK))

        assert [s.object_meta.name for s in scorecard] == ["b", "a", "c"]

    def test_namespace_is_part_of_identity(self):
        scorecard = Scorecard()
        scorecard.add_all(*identity(namespace="a"), [])
        scorecard.add_all(*identity(namespace="b"), [])

        assert len(scorecard) == 2
        assert scorecard.get("Pod", "web", "b") is not None
        assert scorecard.get("Pod", "web") is None

    def test_worst_grade_ignores_skipped(self):
        scorecard = Scorecard()
        scorecard.add(*identity(), Outcome(check=make_check("a"), grade=Grade.SKIPPED, skipped=True))
        scorecard.add(*identity(), Outcome(check=make_check("b"), grade=Grade.WARNING))

        assert scorecard.worst_grade() == Grade.WARNING

    def test_worst_grade(self):
        scorecard = Scorecard()
        scorecard.add(*identity("a"), Outcome(check=make_check(), grade=Grade.WARNING))
        scorecard.add(*identity("b"), Outcome(check=make_check(), grade=Grade.CRITICAL))

        assert scorecard.worst_grade() == Grade.CRITICAL

    def test_human_name(self):
        scorecard = Scorecard()
        scorecard.add_all(*identity(), [])

        assert scorecard.get("Pod", "web").human_name == "v1/Pod web in default"

    def test_to_dict_is_json_serializable(self):
        """The evaluation function is not part of the serialized form."""
        scorecard = Scorecard()
        scorecard.add(
            *identity(),
            Outcome(
                check=make_check(),
                grade=Grade.CRITICAL,
                comments=[Comment(path="app", summary="bad", description="fix it")],
            ),
        )

        data = json.loads(json.dumps(scorecard.to_dict()))

        assert data[0]["typeMeta"] == {"apiVersion": "v1", "kind": "Pod"}
        check = data[0]["checks"][0]
        assert check["grade"] == "Critical"
        assert check["skipped"] is False
        assert check["check"]["id"] == "test-check"
        assert "evaluate" not in check["check"]
        assert check["comments"] == [{"path": "app", "summary": "bad", "description": "fix it"}]

    def test_outcome_is_frozen(self):
        outcome = Outcome(check=make_check(), grade=Grade.ALL_OK)
        with pytest.raises(Exception):
            outcome.grade = Grade.CRITICAL
