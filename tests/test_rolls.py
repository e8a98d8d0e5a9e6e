"""Tests for Roll resolution and advantage / disadvantage rules."""

import random
import statistics

import pytest

from engine.errors import FormatError
from models.rolls import Roll, RollKind


def _scripted(*values: int):
    """Fake evaluator that returns the given totals in order and records calls."""
    remaining = list(values)
    calls: list[str] = []

    def evaluator(formula: str) -> int:
        calls.append(formula)
        return remaining.pop(0)

    evaluator.calls = calls
    return evaluator


class TestRollKindTransitions:
    """Tests for Roll.with_kind()."""

    def test_starts_normal(self):
        assert Roll.from_formula("d20").kind == RollKind.NORMAL

    def test_advantage(self):
        r = Roll.from_formula("d20").with_kind(RollKind.ADVANTAGE)
        assert r.kind == RollKind.ADVANTAGE

    def test_disadvantage(self):
        r = Roll.from_formula("d20").with_kind(RollKind.DISADVANTAGE)
        assert r.kind == RollKind.DISADVANTAGE

    @pytest.mark.parametrize(
        "first,second",
        [
            (RollKind.ADVANTAGE, RollKind.DISADVANTAGE),
            (RollKind.DISADVANTAGE, RollKind.ADVANTAGE),
        ],
    )
    def test_opposites_cancel(self, first, second):
        r = Roll.from_formula("d20").with_kind(first).with_kind(second)
        assert r.kind == RollKind.CANCELLED

    @pytest.mark.parametrize("kind", [RollKind.ADVANTAGE, RollKind.DISADVANTAGE])
    def test_same_modifier_is_idempotent(self, kind):
        r = Roll.from_formula("d20").with_kind(kind)
        r.with_kind(kind)
        assert r.kind == kind

    def test_cancelled_stays_cancelled(self):
        r = Roll.from_formula("d20")
        r.with_kind(RollKind.ADVANTAGE).with_kind(RollKind.DISADVANTAGE)
        r.with_kind(RollKind.ADVANTAGE)
        assert r.kind == RollKind.CANCELLED

    def test_normal_is_noop(self):
        r = Roll.from_formula("d20").with_kind(RollKind.ADVANTAGE)
        r.with_kind(RollKind.NORMAL)
        assert r.kind == RollKind.ADVANTAGE

    def test_returns_self(self):
        r = Roll.from_formula("d20")
        assert r.with_kind(RollKind.ADVANTAGE) is r


class TestResolve:
    """Tests for Roll.resolve()."""

    @pytest.mark.parametrize("n", [0, 1, 20, -3, 123])
    def test_plain_integer_bypasses_evaluator(self, n):
        evaluator = _scripted()
        assert Roll.from_formula(str(n)).resolve(evaluator) == n
        assert evaluator.calls == []

    def test_plain_integer_ignores_advantage(self):
        r = Roll.from_formula(" 20 ").with_kind(RollKind.ADVANTAGE)
        assert r.resolve() == 20

    def test_bad_plain_integer(self):
        with pytest.raises(FormatError):
            Roll.from_formula("twelve").resolve()

    @pytest.mark.parametrize("literal", ["1_000", "\u0663", "\uff17", "+", "4.5"])
    def test_only_ascii_integers_are_plain(self, literal):
        """Underscored and non-ASCII digits are not plain integers."""
        with pytest.raises(FormatError):
            Roll.from_formula(literal).resolve()

    def test_signed_plain_integer(self):
        assert Roll.from_formula("+7").resolve() == 7
        assert Roll.from_formula("-2").resolve() == -2

    def test_bad_dice_formula(self):
        with pytest.raises(FormatError):
            Roll.from_formula("2d").resolve()

    def test_no_validation_at_construction(self):
        r = Roll.from_formula("nonsense")
        assert r.formula == "nonsense"

    def test_normal_single_draw(self):
        evaluator = _scripted(7)
        assert Roll.from_formula("d20").resolve(evaluator) == 7
        assert evaluator.calls == ["d20"]

    def test_advantage_takes_higher(self):
        evaluator = _scripted(4, 15)
        r = Roll.from_formula("d20+2").with_kind(RollKind.ADVANTAGE)
        assert r.resolve(evaluator) == 15
        assert evaluator.calls == ["d20+2", "d20+2"]

    def test_disadvantage_takes_lower(self):
        evaluator = _scripted(4, 15)
        r = Roll.from_formula("d20+2").with_kind(RollKind.DISADVANTAGE)
        assert r.resolve(evaluator) == 4
        assert len(evaluator.calls) == 2

    def test_cancelled_is_single_draw(self):
        evaluator = _scripted(9)
        r = Roll.from_formula("d20")
        r.with_kind(RollKind.ADVANTAGE).with_kind(RollKind.DISADVANTAGE)
        assert r.resolve(evaluator) == 9
        assert evaluator.calls == ["d20"]

    def test_real_advantage_stays_in_bounds(self):
        r = Roll.from_formula("1d20").with_kind(RollKind.ADVANTAGE)
        for _ in range(100):
            assert 1 <= r.resolve() <= 20

    def test_advantage_mean_higher_than_disadvantage(self):
        """Advantage averages above a normal roll, disadvantage below."""
        random.seed(1234)
        normal = Roll.from_formula("1d20")
        adv = Roll.from_formula("1d20").with_kind(RollKind.ADVANTAGE)
        dis = Roll.from_formula("1d20").with_kind(RollKind.DISADVANTAGE)

        normal_mean = statistics.mean(normal.resolve() for _ in range(2000))
        adv_mean = statistics.mean(adv.resolve() for _ in range(2000))
        dis_mean = statistics.mean(dis.resolve() for _ in range(2000))

        assert adv_mean > normal_mean > dis_mean


class TestCheck:
    """Tests for Roll.check()."""

    def test_meets_dc(self):
        assert Roll.from_formula("15").check(15)

    def test_below_dc(self):
        assert not Roll.from_formula("14").check(15)

    def test_uses_evaluator(self):
        assert Roll.from_formula("d20").check(10, _scripted(12))


class TestSerialization:
    """Roll JSON shape."""

    def test_kind_serialized_by_name(self):
        r = Roll.from_formula("d20").with_kind(RollKind.ADVANTAGE)
        assert r.model_dump(mode="json") == {"formula": "d20", "kind": "Advantage"}

    def test_missing_kind_defaults_normal(self):
        assert Roll.model_validate({"formula": "d20"}).kind == RollKind.NORMAL
