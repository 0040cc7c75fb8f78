"""Resolved session configuration."""

from __future__ import annotations

import attrs

from .persona import PersonaType
from .scenario import Identity, Scenario


@attrs.frozen
class SessionConfig:
    """The immutable plan for one roleplay session.

    ``scenarios`` is already shuffled into presentation order and is a private
    snapshot; edits to the global settings never reach a running session.
    """

    scenarios: tuple[Scenario, ...] = attrs.field(converter=tuple)
    persona_type: PersonaType
    identity: Identity

    @scenarios.validator
    def _check_scenarios(self, attribute: attrs.Attribute, value: tuple[Scenario, ...]) -> None:
        if not value:
            raise ValueError("A session needs at least one scenario")

    @property
    def primary_scenario(self) -> Scenario:
        """The first scenario in presentation order; it drives persona and identity."""
        return self.scenarios[0]

    @property
    def images(self) -> tuple[str, ...]:
        """All scenario images flattened in presentation order (the global image index)."""
        return tuple(image for scenario in self.scenarios for image in scenario.images)

    def __str__(self) -> str:
        titles = ", ".join(s.title for s in self.scenarios)
        return f"Session with {self.identity} as {self.persona_type}: {titles}"
