"""Smoke tests to verify package imports work."""

def test_package_imports():
    """Test that all main classes can be imported."""
    from orrery import OrbitalElements, Catalog, BodyParams, StateVector
    assert OrbitalElements is not None
    assert Catalog is not None
    assert BodyParams is not None
    assert StateVector is not None

def test_version_exists():
    """Test that version is defined."""
    import orrery
    assert hasattr(orrery, '__version__')
    assert orrery.__version__ == "0.1.0"

def test_can_create_orbital_elements():
    """Test basic OrbitalElements creation."""
    from orrery import OrbitalElements
    oe = OrbitalElements(a=129900, period=33.923, e=0.0013, i=0.0757)
    assert oe.a == 129900

def test_can_build_default_catalog():
    """Test the Uranian moon catalog builds."""
    from orrery import uranian_moons
    moons = uranian_moons(seed=0)
    assert list(moons) == ['Miranda', 'Ariel', 'Umbriel', 'Titania', 'Oberon']

def test_can_create_body_params():
    """Test basic BodyParams creation."""
    from orrery import BodyParams
    body = BodyParams(mass=1e21, radius=500.0, density=1.5)
    assert body.mass == 1e21
