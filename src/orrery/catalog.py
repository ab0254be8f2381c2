'''Read-only registry of body orbits, validated once at construction
Catalog class definition'''

from collections.abc import Mapping
from typing import Dict, Iterable, List, Optional, Union

import numpy as np
import plotly.graph_objects as go

from .config import config
from .events import EventSearchResult, find_conjunctions_and_oppositions, phase_angle
from .orbital_elements import OrbitalElements
from .resonance import ResonanceRecord, find_resonances
from .state import StateVector, compute_position, compute_state


class Catalog(Mapping):
    """
    Orbital elements keyed by body name.

    Built once at startup from static data and read-only afterwards. Every
    entry is validated on construction, so per-frame calls never re-check
    static data.

    Parameters
    ----------
    bodies : mapping of name -> OrbitalElements, or iterable of OrbitalElements
        Iterable entries must carry a name
    """
    # ========== CONSTRUCTION ==========
    def __init__(self, bodies: Union[Mapping, Iterable[OrbitalElements]]):
        if isinstance(bodies, Mapping):
            items = list(bodies.items())
        else:
            items = []
            for elems in bodies:
                if not isinstance(elems, OrbitalElements):
                    raise TypeError(
                        f"Catalog entries must be OrbitalElements, got {type(elems)}")
                if elems.name is None:
                    raise ValueError(
                        "Catalog entries given as a sequence must be named")
                items.append((elems.name, elems))

        self._bodies: Dict[str, OrbitalElements] = {}
        for name, elems in items:
            if not isinstance(elems, OrbitalElements):
                raise TypeError(
                    f"Catalog entry '{name}' must be OrbitalElements, "
                    f"got {type(elems)}")
            if name in self._bodies:
                raise ValueError(f"Duplicate body name '{name}'")
            if elems.name != name:
                elems = OrbitalElements(elems.elements, name=name, validate=False)
            # construction-time validation, even for elements built with
            # validate=False
            elems._validate()
            self._bodies[name] = elems

    # ========== MAPPING INTERFACE ==========
    def __getitem__(self, name: str) -> OrbitalElements:
        return self._bodies[name]

    def __iter__(self):
        return iter(self._bodies)

    def __len__(self):
        return len(self._bodies)

    def __repr__(self):
        return f"Catalog({list(self._bodies)})"

    # ========== PER-FRAME QUERIES ==========
    def positions(self, time: float, scale: float = 1.0) -> Dict[str, np.ndarray]:
        """Position of every body at ``time``"""
        return {name: compute_position(elems, time, scale)
                for name, elems in self._bodies.items()}

    def states(self, time: float, scale: float = 1.0) -> Dict[str, StateVector]:
        """Position and velocity of every body at ``time``"""
        return {name: compute_state(elems, time, scale)
                for name, elems in self._bodies.items()}

    # ========== ON-DEMAND DIAGNOSTICS ==========
    def resonances(self, tolerance: Optional[float] = None) -> List[ResonanceRecord]:
        """Resonant pairs in catalog order (see orrery.resonance.find_resonances)"""
        return find_resonances(self._bodies, tolerance=tolerance)

    def phase_angle(self, body_a: str, body_b: str, time: float) -> float:
        """Phase angle from ``body_a`` to ``body_b`` at ``time``"""
        return phase_angle(self[body_a], self[body_b], time)

    def events(self, body_a: str, body_b: str, start_time: float,
               end_time: float, step_size: Optional[float] = None
               ) -> EventSearchResult:
        """Conjunctions and oppositions of two catalog bodies"""
        return find_conjunctions_and_oppositions(
            self[body_a], self[body_b], start_time, end_time, step_size)

    def to_dataframe(self):
        """Elements of every body as a DataFrame indexed by name"""
        return OrbitalElements.Batch.to_dataframe(list(self._bodies.values()))

    # ========== PLOTTING ==========
    def plot_3d(self, time: float = 0.0, scale: float = 1.0,
                n_points: Optional[int] = None,
                primary_radius: Optional[float] = None,
                body_color: Optional[str] = None,
                orbit_color: Optional[str] = None,
                body_opacity: Optional[float] = None) -> go.Figure:
        """
        Create 3D plot of every orbit with each body's position at ``time``.

        Parameters:
            time: Simulation time for the body markers (default: 0)
            scale: Display scale factor applied to all positions (default: 1)
            n_points: Points per orbit (default: config.DEFAULT_PLOT_POINTS)
            primary_radius: Radius of the central sphere, already scaled;
                no sphere is drawn if None
            body_color: Color of central body (default: config.DEFAULT_BODY_COLOR)
            orbit_color: Color of orbit lines (default: config.DEFAULT_ORBIT_COLOR)
            body_opacity: Opacity of central body (default: config.DEFAULT_BODY_OPACITY)

        Returns:
            Plotly Figure object
        """
        n_points = config.DEFAULT_PLOT_POINTS if n_points is None else n_points
        body_color = config.DEFAULT_BODY_COLOR if body_color is None else body_color
        orbit_color = config.DEFAULT_ORBIT_COLOR if orbit_color is None else orbit_color
        body_opacity = (config.DEFAULT_BODY_OPACITY if body_opacity is None
                        else body_opacity)
        if n_points < 2:
            raise ValueError("n_points must be at least 2")

        fig = go.Figure()

        if primary_radius is not None:
            self._add_sphere_to_plot(fig, center=(0, 0, 0), radius=primary_radius,
                                     color=body_color, opacity=body_opacity,
                                     name="Primary")

        for name, elems in self._bodies.items():
            # one full revolution, sampled uniformly in time
            times = np.linspace(0.0, abs(elems.period), n_points)
            path = np.array([compute_position(elems, t, scale) for t in times])
            fig.add_trace(go.Scatter3d(
                x=path[:, 0], y=path[:, 1], z=path[:, 2],
                mode='lines',
                line=dict(color=orbit_color, width=2),
                name=f'{name} orbit',
                hoverinfo='skip'
            ))
            pos = compute_position(elems, time, scale)
            fig.add_trace(go.Scatter3d(
                x=[pos[0]], y=[pos[1]], z=[pos[2]],
                mode='markers',
                marker=dict(size=4),
                name=name,
                hovertemplate='x: %{x:.3f}<br>y: %{y:.3f}<br>z: %{z:.3f}<extra></extra>'
            ))

        fig.update_layout(
            scene=dict(
                xaxis_title='X',
                yaxis_title='Y (normal)',
                zaxis_title='Z',
                aspectmode='data'
            ),
            title=f'Orbits at t = {time:g}',
            showlegend=True
        )
        return fig

    @staticmethod
    def _add_sphere_to_plot(fig, center, radius, color, opacity, name):
        """Helper to add a sphere to the plot at specified center."""
        u = np.linspace(0, 2 * np.pi, 30)
        v = np.linspace(0, np.pi, 20)

        x = center[0] + radius * np.outer(np.cos(u), np.sin(v))
        y = center[1] + radius * np.outer(np.sin(u), np.sin(v))
        z = center[2] + radius * np.outer(np.ones(np.size(u)), np.cos(v))

        fig.add_trace(go.Surface(
            x=x, y=y, z=z,
            colorscale=[[0, color], [1, color]],
            showscale=False,
            opacity=opacity,
            name=name,
            hoverinfo='name'
        ))
