"""Tests for odometer cycle reconciliation."""

from datetime import date

from drivetrack.domain.cycles import (
    distance_by_day,
    find_dangling,
    reconcile_cycles,
    total_distance,
)
from drivetrack.domain.periods import resolve_period

from conftest import at, odometer


class TestPairing:
    """Tests for pair-id and chronological pairing."""

    def test_events_sharing_a_pair_id_form_a_cycle(self):
        events = [
            odometer(1, "open", at(2024, 3, 10, 8, 0), 1000, "a"),
            odometer(2, "close", at(2024, 3, 10, 18, 0), 1120, "a"),
        ]
        cycles = reconcile_cycles(events)

        assert len(cycles) == 1
        assert cycles[0].open.id == 1
        assert cycles[0].close.id == 2
        assert cycles[0].distance == 120

    def test_order_of_input_does_not_matter(self):
        events = [
            odometer(2, "close", at(2024, 3, 10, 18, 0), 1120, "a"),
            odometer(1, "open", at(2024, 3, 10, 8, 0), 1000, "a"),
        ]
        assert reconcile_cycles(events) == reconcile_cycles(list(reversed(events)))

    def test_cycle_crossing_midnight_is_attributed_to_the_open_day(self):
        events = [
            odometer(1, "open", at(2024, 3, 10, 23, 50), 5000, "night"),
            odometer(2, "close", at(2024, 3, 11, 0, 10), 5015, "night"),
        ]
        cycles = reconcile_cycles(events)

        assert len(cycles) == 1
        assert cycles[0].day == date(2024, 3, 10)
        assert distance_by_day(cycles) == {"2024-03-10": 15}

    def test_events_without_pair_id_pair_chronologically_within_a_day(self):
        events = [
            odometer(1, "open", at(2024, 3, 10, 8, 0), 1000),
            odometer(2, "close", at(2024, 3, 10, 12, 0), 1040),
            odometer(3, "open", at(2024, 3, 10, 14, 0), 1040),
            odometer(4, "close", at(2024, 3, 10, 19, 0), 1100),
        ]
        cycles = reconcile_cycles(events)

        assert [(c.open.id, c.close.id) for c in cycles] == [(1, 2), (3, 4)]
        assert sum(c.distance for c in cycles) == 100

    def test_chronological_pairing_does_not_cross_days(self):
        events = [
            odometer(1, "open", at(2024, 3, 10, 23, 50), 5000),
            odometer(2, "close", at(2024, 3, 11, 0, 10), 5015),
        ]
        cycles = reconcile_cycles(events)

        assert len(cycles) == 1
        assert cycles[0].is_dangling
        assert cycles[0].open.id == 1

    def test_close_referencing_an_open_id_pairs_with_it(self):
        events = [
            odometer(7, "open", at(2024, 3, 10, 8, 0), 1000),
            odometer(8, "close", at(2024, 3, 10, 18, 0), 1050, "7"),
        ]
        cycles = reconcile_cycles(events)

        assert [(c.open.id, c.close.id) for c in cycles] == [(7, 8)]
        assert distance_by_day(cycles) == {"2024-03-10": 50}

    def test_close_referencing_an_open_id_pairs_across_midnight(self):
        events = [
            odometer(7, "open", at(2024, 3, 10, 23, 50), 5000),
            odometer(8, "close", at(2024, 3, 11, 0, 10), 5020, "7"),
        ]
        cycles = reconcile_cycles(events)

        assert find_dangling(cycles) == []
        assert distance_by_day(cycles) == {"2024-03-10": 20}

    def test_open_followed_by_open_leaves_the_first_dangling(self):
        events = [
            odometer(1, "open", at(2024, 3, 10, 8, 0), 1000),
            odometer(2, "open", at(2024, 3, 10, 9, 0), 1010),
            odometer(3, "close", at(2024, 3, 10, 18, 0), 1110),
        ]
        cycles = reconcile_cycles(events)

        assert [c.open.id for c in find_dangling(cycles)] == [1]
        closed = [c for c in cycles if c.is_closed]
        assert [(c.open.id, c.close.id) for c in closed] == [(2, 3)]

    def test_orphan_close_is_dropped(self):
        events = [
            odometer(1, "close", at(2024, 3, 10, 8, 0), 1000),
            odometer(2, "open", at(2024, 3, 10, 9, 0), 1000),
            odometer(3, "close", at(2024, 3, 10, 10, 0), 1030),
        ]
        cycles = reconcile_cycles(events)

        assert len(cycles) == 1
        assert cycles[0].open.id == 2

    def test_close_only_pair_group_is_dropped(self):
        events = [odometer(1, "close", at(2024, 3, 10, 8, 0), 1000, "lost")]
        assert reconcile_cycles(events) == []

    def test_ambiguous_pair_group_falls_back_to_chronological_pairing(self):
        events = [
            odometer(1, "open", at(2024, 3, 10, 8, 0), 1000, "dup"),
            odometer(2, "close", at(2024, 3, 10, 9, 0), 1020, "dup"),
            odometer(3, "open", at(2024, 3, 10, 10, 0), 1020, "dup"),
            odometer(4, "close", at(2024, 3, 10, 11, 0), 1050, "dup"),
        ]
        cycles = reconcile_cycles(events)

        assert [(c.open.id, c.close.id) for c in cycles] == [(1, 2), (3, 4)]

    def test_multiple_dangling_cycles_are_all_kept(self):
        events = [
            odometer(1, "open", at(2024, 3, 10, 8, 0), 1000, "a"),
            odometer(2, "open", at(2024, 3, 11, 8, 0), 1200, "b"),
        ]
        cycles = reconcile_cycles(events)

        assert len(find_dangling(cycles)) == 2
        assert distance_by_day(cycles) == {}

    def test_every_event_is_used_at_most_once(self):
        events = [
            odometer(1, "open", at(2024, 3, 10, 8, 0), 1000, "a"),
            odometer(2, "close", at(2024, 3, 10, 9, 0), 1010, "a"),
            odometer(3, "open", at(2024, 3, 10, 10, 0), 1010),
            odometer(4, "close", at(2024, 3, 10, 11, 0), 1020),
            odometer(5, "close", at(2024, 3, 10, 12, 0), 1030),
        ]
        used = []
        for cycle in reconcile_cycles(events):
            used.append(cycle.open.id)
            if cycle.close:
                used.append(cycle.close.id)
        assert len(used) == len(set(used))


class TestDistance:
    """Tests for distance aggregation."""

    def test_negative_distance_is_clamped_to_zero(self):
        events = [
            odometer(1, "open", at(2024, 3, 10, 8, 0), 1000, "a"),
            odometer(2, "close", at(2024, 3, 10, 18, 0), 990, "a"),
        ]
        cycle = reconcile_cycles(events)[0]

        assert cycle.raw_distance == -10
        assert cycle.distance == 0

    def test_total_distance_counts_cycles_by_open_day(self):
        events = [
            odometer(1, "open", at(2024, 3, 9, 23, 0), 900, "a"),
            odometer(2, "close", at(2024, 3, 10, 1, 0), 950, "a"),
            odometer(3, "open", at(2024, 3, 10, 8, 0), 1000, "b"),
            odometer(4, "close", at(2024, 3, 10, 18, 0), 1080, "b"),
        ]
        cycles = reconcile_cycles(events)
        period = resolve_period("custom", "2024-03-10", "2024-03-10")

        assert total_distance(cycles, period) == 80

    def test_dangling_cycle_contributes_no_distance(self):
        events = [odometer(1, "open", at(2024, 3, 10, 8, 0), 1000, "a")]
        period = resolve_period("custom", "2024-03-10", "2024-03-10")
        assert total_distance(reconcile_cycles(events), period) == 0
