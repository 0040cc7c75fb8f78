"""Application settings: scenarios, persona types and the global identity."""

from __future__ import annotations

import attrs

from .persona import PersonaType
from .scenario import Scenario


@attrs.frozen
class IdentitySettings:
    """Global custom identity fields. Blank fields fall through to other sources."""

    display_name: str = ""
    signature_name: str = ""
    phone_number: str = ""
    city: str = ""


@attrs.frozen
class AppSettings:
    """Full settings object as persisted by the settings store.

    Instances are immutable; editing methods return updated copies.
    """

    scenarios: tuple[Scenario, ...] = attrs.field(default=(), converter=tuple)
    persona_types: tuple[PersonaType, ...] = attrs.field(default=(), converter=tuple)
    identity_settings: IdentitySettings = attrs.field(factory=IdentitySettings)

    @property
    def active_scenarios(self) -> tuple[Scenario, ...]:
        return tuple(s for s in self.scenarios if s.is_active)

    @property
    def categories(self) -> tuple[str, ...]:
        """Distinct scenario categories in first-seen order."""
        return tuple(dict.fromkeys(s.category for s in self.scenarios))

    def find_persona_type(self, persona_type_id: str | None) -> PersonaType | None:
        return next((p for p in self.persona_types if p.id == persona_type_id), None)

    def with_scenario(self, scenario: Scenario) -> AppSettings:
        """Replace the scenario with the same id, or append it."""
        return attrs.evolve(self, scenarios=_upsert(self.scenarios, scenario))

    def without_scenario(self, scenario_id: str) -> AppSettings:
        return attrs.evolve(self, scenarios=tuple(s for s in self.scenarios if s.id != scenario_id))

    def toggle_scenario(self, scenario_id: str) -> AppSettings:
        return attrs.evolve(self, scenarios=tuple(
            attrs.evolve(s, is_active=not s.is_active) if s.id == scenario_id else s
            for s in self.scenarios
        ))

    def with_persona_type(self, persona_type: PersonaType) -> AppSettings:
        """Replace the persona type with the same id, or append it."""
        return attrs.evolve(self, persona_types=_upsert(self.persona_types, persona_type))

    def without_persona_type(self, persona_type_id: str) -> AppSettings:
        return attrs.evolve(
            self, persona_types=tuple(p for p in self.persona_types if p.id != persona_type_id)
        )

    def with_identity_settings(self, identity_settings: IdentitySettings) -> AppSettings:
        return attrs.evolve(self, identity_settings=identity_settings)


def _upsert[T: (Scenario, PersonaType)](items: tuple[T, ...], item: T) -> tuple[T, ...]:
    if any(existing.id == item.id for existing in items):
        return tuple(item if existing.id == item.id else existing for existing in items)
    return items + (item,)
