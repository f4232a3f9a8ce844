"""Unit tests for the suppression field."""

import pytest

from wildfire.suppression import SuppressionEffect, SuppressionField, SuppressionKind


@pytest.fixture
def field():
    return SuppressionField(5, 5)


class TestSuppressionEffect:

    def test_modifier_weights(self):
        assert SuppressionEffect(water_level=0.5).modifier == pytest.approx(0.4)
        assert SuppressionEffect(retardant_level=0.5).modifier == pytest.approx(0.45)

    def test_modifier_is_capped(self):
        assert SuppressionEffect(water_level=1.0, retardant_level=1.0).modifier == 1.0

    def test_deposit_refreshes_instead_of_stacking(self):
        effect = SuppressionEffect()
        effect.deposit(SuppressionKind.Water, 0.5, 10.0)
        effect.deposit(SuppressionKind.Water, 0.5, 5.0)
        assert effect.water_level == 0.5
        assert effect.remaining_time == 10.0

    def test_kinds_are_tracked_separately(self):
        effect = SuppressionEffect()
        effect.deposit(SuppressionKind.Water, 0.3, 10.0)
        effect.deposit(SuppressionKind.Retardant, 0.6, 10.0)
        assert effect.water_level == 0.3
        assert effect.retardant_level == 0.6


class TestSuppressionField:
    """Test cases for SuppressionField class."""

    def test_apply_falls_off_with_distance(self, field):
        touched = field.apply((2, 2), 2, SuppressionKind.Water, 1.0, 10.0)

        assert field.snapshot((2, 2)).water_level == 1.0
        assert field.snapshot((3, 2)).water_level == pytest.approx(0.5)
        # On the rim: touched but at zero strength
        assert field.snapshot((4, 2)).water_level == 0.0
        assert field.snapshot((4, 2)).remaining_time == 10.0
        # Outside the disc
        assert field.snapshot((4, 4)).remaining_time == 0.0
        assert touched == 13

    def test_levels_never_decrease_on_reapplication(self, field):
        before = [field.snapshot((x, 2)).water_level for x in range(5)]
        for effectiveness in (0.3, 0.9, 0.6):
            field.apply((2, 2), 2, SuppressionKind.Water, effectiveness, 10.0)
            after = [field.snapshot((x, 2)).water_level for x in range(5)]
            assert all(a >= b for a, b in zip(after, before))
            before = after
        assert field.snapshot((2, 2)).water_level == 0.9

    def test_zero_radius_covers_only_center(self, field):
        assert field.apply((1, 1), 0, SuppressionKind.Retardant, 0.7, 10.0) == 1
        assert field.snapshot((1, 1)).retardant_level == 0.7
        assert not field.has_effect((1, 2))

    def test_negative_radius_covers_nothing(self, field):
        assert field.apply((1, 1), -1, SuppressionKind.Water, 1.0, 10.0) == 0
        assert not field.has_effect((1, 1))

    def test_effectiveness_is_clamped(self, field):
        field.apply((1, 1), 0, SuppressionKind.Water, 3.0, 10.0)
        assert field.snapshot((1, 1)).water_level == 1.0

    def test_out_of_bounds_positions_are_skipped(self, field):
        touched = field.apply((-1, 0), 2, SuppressionKind.Water, 1.0, 10.0)
        # Only (0, 0), (0, 1) and (1, 0) fall inside both the disc and the field
        assert touched == 3
        assert field.snapshot((0, 0)).water_level == pytest.approx(0.5)
        assert field.snapshot((-1, 0)) is None

    def test_decay_expires_levels(self, field):
        field.apply((2, 2), 1, SuppressionKind.Water, 1.0, 1.0)
        field.decay(0.4)
        field.decay(0.4)
        assert field.snapshot((2, 2)).water_level == 1.0

        field.decay(0.4)
        snapshot = field.snapshot((2, 2))
        assert snapshot.water_level == 0.0
        assert snapshot.retardant_level == 0.0
        assert not field.has_effect((2, 2))

    def test_firebreak_survives_decay(self, field):
        field.mark_firebreak((0, 0))
        field.apply((0, 0), 0, SuppressionKind.Water, 1.0, 1.0)
        field.decay(5.0)
        assert field.is_firebreak((0, 0))
        assert field.snapshot((0, 0)).water_level == 0.0

    def test_mark_firebreak_clears_deposit(self, field):
        field.apply((3, 3), 1, SuppressionKind.Retardant, 1.0, 100.0)
        field.mark_firebreak((3, 3))
        snapshot = field.snapshot((3, 3))
        assert snapshot.is_firebreak
        assert snapshot.retardant_level == 0.0
        assert snapshot.remaining_time == 0.0

    def test_off_grid_queries(self, field):
        field.mark_firebreak((9, 9))
        assert not field.is_firebreak((9, 9))
        assert field.modifier((9, 9)) == 0.0
        assert not field.has_effect((-1, -1))
