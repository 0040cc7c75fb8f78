"""Session configuration resolver.

Turns the full settings into one concrete ``SessionConfig``: which scenarios
are raised and in what order, which persona plays the consumer, and who the
consumer is.
"""

from __future__ import annotations

import copy
import logging
import random
from collections.abc import MutableSequence, Sequence
from typing import Protocol

import attrs

from ..defaults import CITY_POOL, NAME_POOL, PHONE_PREFIX, PHONE_RANDOM_DIGITS
from ..errors import NoActiveScenariosError, NoPersonaTypesError
from ..models.persona import PersonaType
from ..models.scenario import Identity, Scenario
from ..models.session import SessionConfig
from ..models.settings import AppSettings, IdentitySettings

logger = logging.getLogger(__name__)


class RandomSource(Protocol):
    """The subset of ``random.Random`` used for session resolution.

    Tests inject a seeded ``random.Random`` (or any other implementation) to
    get reproducible permutations and choices.
    """

    def shuffle(self, x: MutableSequence) -> None: ...

    def choice[T](self, seq: Sequence[T]) -> T: ...

    def randint(self, a: int, b: int) -> int: ...


@attrs.frozen
class SessionResolver:
    """Resolves settings into a session configuration.

    Args:
        rng: Source of randomness for shuffling and random picks
    """

    rng: RandomSource = attrs.field(factory=random.Random)

    def resolve(self, settings: AppSettings) -> SessionConfig:
        """Resolve a fresh session configuration.

        Raises:
            NoActiveScenariosError: No scenario is active
            NoPersonaTypesError: No persona type is defined
        """
        active = settings.active_scenarios
        if not active:
            raise NoActiveScenariosError()
        if not settings.persona_types:
            raise NoPersonaTypesError()

        # Snapshot so later settings edits cannot reach the running session
        scenarios = [copy.deepcopy(scenario) for scenario in active]
        self.rng.shuffle(scenarios)
        primary = scenarios[0]

        persona_type = self._resolve_persona(primary, settings)
        identity = self._resolve_identity(primary, settings.identity_settings)

        config = SessionConfig(scenarios=tuple(scenarios), persona_type=persona_type, identity=identity)
        logger.info(f"Resolved session: {config}")
        return config

    def _resolve_persona(self, primary: Scenario, settings: AppSettings) -> PersonaType:
        if not primary.wants_random_persona:
            found = settings.find_persona_type(primary.persona_type_id)
            if found is not None:
                return found
            logger.warning(
                f"Scenario {primary.id} refers to unknown persona type {primary.persona_type_id!r}, picking at random"
            )
        return self.rng.choice(settings.persona_types)

    def _resolve_identity(self, primary: Scenario, custom: IdentitySettings) -> Identity:
        fixed = primary.fixed_identity
        return Identity(
            name=_first_filled(custom.display_name, fixed and fixed.name) or self.rng.choice(NAME_POOL),
            city=_first_filled(custom.city, fixed and fixed.city) or self.rng.choice(CITY_POOL),
            phone=_first_filled(custom.phone_number, fixed and fixed.phone) or self._random_phone(),
            signature_name=_first_filled(custom.signature_name),
        )

    def _random_phone(self) -> str:
        low = 10 ** (PHONE_RANDOM_DIGITS - 1)
        return f"{PHONE_PREFIX}{self.rng.randint(low, 10 * low - 1)}"


def resolve_session(settings: AppSettings, rng: RandomSource | None = None) -> SessionConfig:
    """Resolve a session configuration; see ``SessionResolver.resolve``."""
    resolver = SessionResolver(rng) if rng is not None else SessionResolver()
    return resolver.resolve(settings)


def _first_filled(*values: str | None) -> str | None:
    """First value that is neither None nor blank."""
    return next((v for v in values if v and v.strip()), None)
