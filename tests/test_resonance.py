"""
Test suite for mean-motion resonance detection.
"""

import pytest
import numpy as np

from orrery import OE, find_resonances, ResonanceRecord, COMMON_RESONANCES, temp_config
from orrery.resonance import (
    resonance_strength, classify_resonance, resonances_to_dataframe,
)


def body(period, name):
    """Circular orbit with the given period."""
    return OE(a=1.0, period=period, e=0.0, i=0.0, name=name)


@pytest.fixture
def chain():
    """Three bodies in a 1:2:4 period chain."""
    return [body(10.0, 'A'), body(20.0, 'B'), body(40.0, 'C')]


class TestStrength:

    def test_exact_commensurability_is_finite(self):
        strength = resonance_strength(2.0, 1, 2)
        assert np.isfinite(strength)
        assert strength == pytest.approx(1e12)

    def test_near_miss(self):
        assert resonance_strength(2.1, 1, 2) == pytest.approx(10.0)

    def test_closer_is_stronger(self):
        assert resonance_strength(1.51, 2, 3) > resonance_strength(1.53, 2, 3)

    def test_floor_follows_config(self):
        with temp_config(RESONANCE_MIN_OFFSET=1e-6):
            assert resonance_strength(2.0, 1, 2) == pytest.approx(1e6)

    def test_classification(self):
        assert classify_resonance(1, 2) == 'mean-motion'
        with pytest.raises(ValueError):
            classify_resonance(0, 2)


class TestFindResonances:

    def test_exact_two_to_one(self):
        records = find_resonances([body(10.0, 'inner'), body(20.0, 'outer')])
        assert len(records) == 1
        record = records[0]
        assert isinstance(record, ResonanceRecord)
        assert record.body_a == 'inner'
        assert record.body_b == 'outer'
        assert record.ratio == '1:2'
        assert (record.q, record.p) == (1, 2)
        assert record.order == 1
        assert record.classification == 'mean-motion'
        assert record.strength == pytest.approx(1e12)

    def test_near_miss_outside_default_tolerance(self):
        assert find_resonances([body(10.0, 'a'), body(21.0, 'b')]) == []

    def test_near_miss_with_wider_tolerance(self):
        records = find_resonances([body(10.0, 'a'), body(21.0, 'b')], tolerance=0.15)
        assert len(records) == 1
        assert records[0].strength == pytest.approx(10.0)
        assert records[0].offset == pytest.approx(0.1)

    def test_exact_beats_near_miss(self):
        exact = find_resonances([body(10.0, 'a'), body(20.0, 'b')])[0]
        near = find_resonances([body(10.0, 'a'), body(21.0, 'b')], tolerance=0.15)[0]
        assert exact.strength > near.strength

    def test_discovery_order(self, chain):
        records = find_resonances(chain)
        assert [(r.body_a, r.body_b) for r in records] == [('A', 'B'), ('B', 'C')]

    def test_multiple_matches_for_one_pair(self):
        """A ratio between 5/4 and 6/5 matches both, in table order."""
        records = find_resonances([body(10.0, 'a'), body(12.25, 'b')])
        assert [r.ratio for r in records] == ['4:5', '5:6']

    def test_retrograde_uses_period_magnitude(self):
        records = find_resonances([body(10.0, 'a'), body(-20.0, 'b')])
        assert [r.ratio for r in records] == ['1:2']

    def test_ratio_below_one_not_matched(self):
        """Only outer/inner ratios above one are in the table."""
        assert find_resonances([body(20.0, 'outer'), body(10.0, 'inner')]) == []

    def test_mapping_input(self):
        records = find_resonances({'x': body(10.0, None), 'y': body(15.0, None)})
        assert records[0].body_a == 'x'
        assert records[0].ratio == '2:3'
        assert records[0].order == 1

    def test_unnamed_sequence_uses_index(self):
        records = find_resonances([body(10.0, None), body(20.0, None)])
        assert (records[0].body_a, records[0].body_b) == ('0', '1')

    def test_second_order(self):
        records = find_resonances([body(30.0, 'a'), body(50.0, 'b')])
        assert records[0].ratio == '3:5'
        assert records[0].order_name == 'second-order'

    def test_table_contents(self):
        assert COMMON_RESONANCES == ((1, 2), (2, 3), (3, 4), (3, 5), (4, 5), (5, 6))

    def test_fewer_than_two_bodies(self):
        assert find_resonances([body(10.0, 'solo')]) == []
        assert find_resonances([]) == []


class TestOutput:

    def test_dataframe(self, chain):
        df = resonances_to_dataframe(find_resonances(chain))
        assert len(df) == 2
        assert list(df['ratio']) == ['1:2', '1:2']
        assert 'strength' in df.columns

    def test_empty_dataframe(self):
        df = resonances_to_dataframe([])
        assert df.empty
        assert 'ratio' in df.columns

    def test_str(self):
        record = find_resonances([body(10.0, 'a'), body(20.0, 'b')])[0]
        assert str(record).startswith('a-b 1:2')
