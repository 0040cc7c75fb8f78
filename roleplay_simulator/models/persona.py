"""Persona (consumer type) models."""

from __future__ import annotations

from enum import Enum

import attrs


class Difficulty(str, Enum):
    """Difficulty tier of a persona."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    RANDOM = "random"


@attrs.frozen
class PersonaType:
    """A reusable behavioural profile for the simulated consumer."""

    id: str
    name: str
    description: str  # handed to the backend verbatim as character guidance
    difficulty: Difficulty = Difficulty.RANDOM
    is_custom: bool = False

    def __str__(self) -> str:
        return f"{self.name} ({self.difficulty.value})"
