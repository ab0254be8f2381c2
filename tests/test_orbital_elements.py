"""
Test suite for the OrbitalElements class.

Tests include:
1. Construction from arrays, short names and long-form names
2. Validation (strict and warning modes)
3. Derived orbital quantities
4. Batch operations and pandas conversion
5. Equality, hashing and immutability
"""

import pytest
import numpy as np
import pandas as pd

from orrery import OrbitalElements, OE, temp_config, compute_position


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def miranda():
    """Miranda-like orbit in km and hours."""
    return OE(a=129900.0, period=33.923, e=0.0013, i=np.radians(4.34),
              w=0.3, omega=1.1, M0=2.0, name='Miranda')


@pytest.fixture
def orbit_list():
    """Three named orbits."""
    return [
        OE(a=10.0, period=10.0, e=0.1, i=0.1, name='A'),
        OE(a=20.0, period=20.0, e=0.2, i=0.2, name='B'),
        OE(a=30.0, period=-30.0, e=0.3, i=0.3, name='C'),
    ]


# =============================================================================
# Construction
# =============================================================================

class TestConstruction:
    """Different ways of building OrbitalElements."""

    def test_array_construction(self):
        """7-element array in canonical order."""
        oe = OE([1.0, 2.0, 0.1, 0.2, 0.3, 0.4, 0.5])
        assert oe.a == 1.0
        assert oe.period == 2.0
        assert oe.e == 0.1
        assert oe.i == 0.2
        assert oe.w == 0.3
        assert oe.omega == 0.4
        assert oe.M0 == 0.5

    def test_named_defaults(self):
        """w, omega and M0 default to zero."""
        oe = OE(a=5.0, period=3.0, e=0.0, i=0.0)
        assert oe.w == 0.0
        assert oe.omega == 0.0
        assert oe.M0 == 0.0

    def test_long_form_names(self, miranda):
        """Long-form aliases are interchangeable with short names."""
        oe = OE(semi_major_axis=129900.0, orbital_period=33.923,
                eccentricity=0.0013, inclination=np.radians(4.34),
                argument_of_periapsis=0.3, longitude_of_ascending_node=1.1,
                mean_anomaly_at_epoch=2.0, name='Miranda')
        assert oe == miranda
        assert oe.semi_major_axis == oe.a
        assert oe.orbital_period == oe.period
        assert oe.longitude_of_ascending_node == oe.omega

    def test_array_and_kwargs_rejected(self):
        """Cannot mix the two construction styles."""
        with pytest.raises(ValueError, match="not both"):
            OE([1.0, 2.0, 0.1, 0.2, 0.3, 0.4, 0.5], a=1.0)

    def test_no_input_rejected(self):
        with pytest.raises(ValueError, match="Must provide"):
            OE()

    def test_missing_required_element(self):
        with pytest.raises(ValueError, match="Missing orbital elements"):
            OE(a=1.0, e=0.1, i=0.0)

    def test_unknown_element_name(self):
        with pytest.raises(ValueError, match="Unknown orbital element"):
            OE(a=1.0, period=1.0, e=0.1, i=0.0, nu=1.0)

    def test_from_numpy(self):
        arr = np.array([[1.0, 2.0, 0.1, 0.2, 0.0, 0.0, 0.0],
                        [3.0, 4.0, 0.2, 0.1, 0.0, 0.0, 1.0]])
        orbits = OE.from_numpy(arr, names=['x', 'y'])
        assert len(orbits) == 2
        assert orbits[1].name == 'y'
        assert orbits[1].M0 == 1.0

    def test_from_numpy_bad_shape(self):
        with pytest.raises(ValueError, match="shape"):
            OE.from_numpy(np.zeros((2, 6)))

    def test_from_numpy_name_count(self):
        with pytest.raises(ValueError):
            OE.from_numpy(np.ones((2, 7)) * 0.1, names=['only one'])


# =============================================================================
# Validation
# =============================================================================

class TestValidation:
    """Invalid elements raise in strict mode and warn otherwise."""

    @pytest.mark.parametrize("kwargs, message", [
        (dict(a=-1.0, period=1.0, e=0.0, i=0.0), "Semi-major axis"),
        (dict(a=0.0, period=1.0, e=0.0, i=0.0), "Semi-major axis"),
        (dict(a=1.0, period=0.0, e=0.0, i=0.0), "period"),
        (dict(a=1.0, period=1.0, e=1.0, i=0.0), "Eccentricity"),
        (dict(a=1.0, period=1.0, e=-0.1, i=0.0), "Eccentricity"),
    ])
    def test_strict_raises(self, kwargs, message):
        with pytest.raises(ValueError, match=message):
            OE(**kwargs)

    def test_nan_rejected(self):
        with pytest.raises(ValueError, match="NaN"):
            OE(a=np.nan, period=1.0, e=0.0, i=0.0)

    def test_name_in_message(self):
        with pytest.raises(ValueError, match="Puck"):
            OE(a=-1.0, period=1.0, e=0.0, i=0.0, name='Puck')

    def test_non_strict_warns(self):
        """STRICT_VALIDATION=False downgrades errors to warnings."""
        with temp_config(STRICT_VALIDATION=False):
            with pytest.warns(UserWarning, match="Semi-major axis"):
                oe = OE(a=-1.0, period=1.0, e=0.0, i=0.0)
        assert oe.a == -1.0

    def test_validate_false_skips_checks(self):
        oe = OE(a=-1.0, period=1.0, e=0.0, i=0.0, validate=False)
        assert oe.a == -1.0

    def test_mean_anomaly_unrestricted(self):
        """M0 may take any finite value."""
        oe = OE(a=1.0, period=1.0, e=0.0, i=0.0, M0=25.0)
        assert oe.M0 == 25.0

    def test_angles_accept_any_radians(self):
        """Negative inclination and ω beyond 2π match their wrapped equivalents."""
        raw = OE(a=2.0, period=5.0, e=0.2, i=-0.1, w=7.0, omega=-7.0, M0=0.5)
        wrapped = OE(a=2.0, period=5.0, e=0.2, i=2 * np.pi - 0.1,
                     w=7.0 - 2 * np.pi, omega=2 * np.pi - 7.0, M0=0.5)
        for t in (0.0, 1.3, 3.9):
            np.testing.assert_allclose(compute_position(raw, t),
                                       compute_position(wrapped, t), atol=1e-12)

    def test_nan_angle_rejected(self):
        with pytest.raises(ValueError, match="NaN"):
            OE(a=1.0, period=1.0, e=0.0, i=np.inf)


# =============================================================================
# Derived quantities
# =============================================================================

class TestOrbitalProperties:
    """Quantities derived from the element set."""

    def test_mean_motion_sign(self):
        prograde = OE(a=1.0, period=10.0, e=0.0, i=0.0)
        retrograde = prograde.replace(period=-10.0)
        assert np.isclose(prograde.mean_motion(), 2 * np.pi / 10.0)
        assert np.isclose(retrograde.mean_motion(), -2 * np.pi / 10.0)
        assert retrograde.is_retrograde
        assert not prograde.is_retrograde

    def test_mean_anomaly_wraps(self):
        oe = OE(a=1.0, period=10.0, e=0.0, i=0.0, M0=1.0)
        assert np.isclose(oe.mean_anomaly(0.0), 1.0)
        assert np.isclose(oe.mean_anomaly(10.0), 1.0)
        M = oe.mean_anomaly(7.3)
        assert 0.0 <= M < 2 * np.pi

    def test_retrograde_mean_anomaly_decreases(self):
        oe = OE(a=1.0, period=-10.0, e=0.0, i=0.0, M0=1.0)
        assert np.isclose(oe.mean_anomaly(1.0), 1.0 - 2 * np.pi / 10.0)

    def test_mu_from_third_law(self):
        """A unit orbit with period 2π has μ = 1."""
        oe = OE(a=1.0, period=2 * np.pi, e=0.0, i=0.0)
        assert np.isclose(oe.mu, 1.0)

    def test_apsides(self):
        oe = OE(a=10.0, period=1.0, e=0.2, i=0.0)
        assert np.isclose(oe.periapsis(), 8.0)
        assert np.isclose(oe.apoapsis(), 12.0)

    def test_energy_and_angular_momentum(self):
        oe = OE(a=1.0, period=2 * np.pi, e=0.6, i=0.0)
        assert np.isclose(oe.specific_energy(), -0.5)
        assert np.isclose(oe.specific_angular_momentum(), 0.8)


# =============================================================================
# Immutability, copies and equality
# =============================================================================

class TestImmutability:

    def test_elements_read_only(self, miranda):
        with pytest.raises(ValueError):
            miranda.elements[0] = 1.0

    def test_replace_returns_new_object(self, miranda):
        moved = miranda.replace(M0=0.0)
        assert moved.M0 == 0.0
        assert miranda.M0 == 2.0
        assert moved.name == 'Miranda'

    def test_replace_accepts_aliases_and_name(self, miranda):
        renamed = miranda.replace(eccentricity=0.1, name='Other')
        assert renamed.e == 0.1
        assert renamed.name == 'Other'

    def test_replace_unknown_key(self, miranda):
        with pytest.raises(ValueError):
            miranda.replace(nu=1.0)

    def test_replace_validates(self, miranda):
        with pytest.raises(ValueError):
            miranda.replace(e=1.5)

    def test_copy_equal_but_independent(self, miranda):
        dup = miranda.copy()
        assert dup == miranda
        assert dup is not miranda
        assert dup.elements is not miranda.elements


class TestEqualityAndHash:

    def test_equal_within_tolerance(self, miranda):
        nudged = OE(miranda.elements + 1e-16, name='Miranda')
        assert nudged == miranda
        assert hash(nudged) == hash(miranda)

    def test_name_participates(self, miranda):
        assert miranda.replace(name='Ariel') != miranda

    def test_not_equal_to_other_types(self, miranda):
        assert miranda != miranda.elements

    def test_usable_in_sets(self, orbit_list):
        assert len(set(orbit_list + [o.copy() for o in orbit_list])) == 3

    def test_sequence_protocol(self, miranda):
        assert len(miranda) == 7
        assert miranda[0] == miranda.a
        assert list(miranda)[1] == miranda.period

    def test_string_forms(self, miranda):
        assert 'Miranda' in repr(miranda)
        assert 'Orbital Elements (Miranda)' in str(miranda)
        assert 'retrograde' in str(miranda.replace(period=-33.923))


# =============================================================================
# Batch operations
# =============================================================================

class TestBatch:

    def test_vector_accessors(self, orbit_list):
        np.testing.assert_allclose(OE.Batch.a(orbit_list), [10.0, 20.0, 30.0])
        np.testing.assert_allclose(OE.Batch.e(orbit_list), [0.1, 0.2, 0.3])
        np.testing.assert_allclose(OE.Batch.period(orbit_list), [10.0, 20.0, -30.0])
        assert OE.Batch.mean_motion(orbit_list)[2] < 0

    def test_positions_shape(self, orbit_list):
        positions = OE.Batch.positions(orbit_list, 1.0)
        assert positions.shape == (3, 3)

    def test_to_numpy(self, orbit_list):
        arr = OE.Batch.to_numpy(orbit_list)
        assert arr.shape == (3, 7)

    def test_batch_copy(self, orbit_list):
        copies = OE.Batch.copy(orbit_list)
        assert copies == orbit_list

    def test_to_dataframe_indexed_by_name(self, orbit_list):
        df = OE.Batch.to_dataframe(orbit_list)
        assert list(df.columns) == list(OE.FIELDS)
        assert list(df.index) == ['A', 'B', 'C']

    def test_to_dataframe_unnamed(self):
        orbits = [OE(a=1.0, period=1.0, e=0.0, i=0.0)] * 2
        df = OE.Batch.to_dataframe(orbits)
        assert list(df.index) == [0, 1]

    def test_to_dataframe_empty(self):
        df = OE.Batch.to_dataframe([])
        assert df.empty
        assert list(df.columns) == list(OE.FIELDS)

    def test_to_dataframe_index_length(self, orbit_list):
        with pytest.raises(ValueError, match="Index length"):
            OE.Batch.to_dataframe(orbit_list, index=[1, 2])

    def test_dataframe_roundtrip(self, orbit_list):
        df = OE.Batch.to_dataframe(orbit_list)
        restored = OE.from_dataframe(df)
        assert restored == orbit_list

    def test_from_dataframe_missing_columns(self):
        df = pd.DataFrame({'a': [1.0], 'e': [0.0]})
        with pytest.raises(ValueError, match="missing required columns"):
            OE.from_dataframe(df)
