"""Scenario and identity models."""

from __future__ import annotations

import attrs

RANDOM_PERSONA = "random"
"""Persona id sentinel meaning "pick any persona type"."""


@attrs.frozen
class Identity:
    """Consumer identity used for one session.

    When used as a scenario's fixed identity, blank fields mean "not fixed".
    """

    name: str
    phone: str
    city: str
    signature_name: str | None = None

    def __str__(self) -> str:
        return f"{self.name}, {self.phone} ({self.city})"


@attrs.frozen
class Scenario:
    """A problem the simulated consumer can raise.

    Images are referenced by position elsewhere, so their order is part of the
    scenario's identity and never changes once a session starts.
    """

    id: str
    category: str
    title: str
    description: str
    script: str | None = None
    is_active: bool = True
    persona_type_id: str | None = RANDOM_PERSONA
    images: tuple[str, ...] = attrs.field(default=(), converter=tuple)
    fixed_identity: Identity | None = None

    @property
    def wants_random_persona(self) -> bool:
        """True unless the scenario names a concrete persona type."""
        return not self.persona_type_id or self.persona_type_id == RANDOM_PERSONA

    def __str__(self) -> str:
        return f"Scenario {self.id}: [{self.category}] {self.title}"
