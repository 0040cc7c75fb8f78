"""Instruction assembly for the dialogue backend."""

from __future__ import annotations

from collections.abc import Sequence
from itertools import accumulate

import attrs

from ..delivery.markers import BREAK_MARKER, IMAGE_TAG, format_image_marker
from ..models.scenario import Scenario
from ..models.session import SessionConfig

ISSUE_SEPARATOR = "\n\n----------------\n\n"


@attrs.frozen
class Instruction:
    """Instruction payload for one session.

    Attributes:
        text: System instruction handed to the backend
        images: Every scenario image flattened in presentation order; the
            ``[SEND_IMAGE: n]`` marker addresses this sequence
    """

    text: str
    images: tuple[str, ...]


def image_offsets(scenarios: Sequence[Scenario]) -> tuple[int, ...]:
    """Global index of each scenario's first image.

    The offset of a scenario is the number of images owned by every scenario
    placed before it.
    """
    return tuple(accumulate((len(s.images) for s in scenarios[:-1]), initial=0)) if scenarios else ()


def image_indices(scenarios: Sequence[Scenario]) -> tuple[tuple[int, ...], ...]:
    """Global indices of each scenario's images."""
    return tuple(
        tuple(range(offset, offset + len(scenario.images)))
        for scenario, offset in zip(scenarios, image_offsets(scenarios))
    )


@attrs.define
class InstructionBuilder:
    """Builds the backend instruction from a resolved session configuration."""

    def build(self, config: SessionConfig) -> Instruction:
        """Build the instruction for a session.

        Args:
            config: Resolved session configuration

        Returns:
            Instruction text and the flattened image sequence
        """
        images = config.images
        parts = [
            "You are simulating a consumer who contacts the Kontak OJK 157 contact centre through WhatsApp chat. "
            "A trainee agent is practising with you.",
            "",
            self._identity_block(config),
            "",
            self._persona_block(config),
            "",
            f"YOU HAVE {len(config.scenarios)} ISSUE(S) TO RAISE TODAY:",
            "",
            self._issues_block(config.scenarios),
            "",
            self._images_block(len(images)),
            "",
            self._sequencing_rules(),
            "",
            self._style_rules(),
        ]
        return Instruction(text="\n".join(parts), images=images)

    @staticmethod
    def _identity_block(config: SessionConfig) -> str:
        identity = config.identity
        lines = ["YOUR IDENTITY (always use it):", f"Profile name: {identity.name}"]
        if identity.signature_name:
            lines.append(f"Short name: {identity.signature_name} (use this when introducing yourself)")
        lines.extend([f"City: {identity.city}", f"Phone number: {identity.phone}"])
        return "\n".join(lines)

    @staticmethod
    def _persona_block(config: SessionConfig) -> str:
        persona = config.persona_type
        return "\n".join([
            "YOUR CHARACTER:",
            f"Consumer type: {persona.name}",
            f"Behaviour: {persona.description}",
        ])

    @staticmethod
    def _issues_block(scenarios: Sequence[Scenario]) -> str:
        issues = []
        for number, (scenario, indices) in enumerate(zip(scenarios, image_indices(scenarios)), start=1):
            lines = [
                f"ISSUE {number}:",
                f"Category: {scenario.category}",
                f"Title: {scenario.title}",
                f"Details: {scenario.description}",
            ]
            if scenario.script:
                lines.append(
                    f"Reference script (paraphrase it in your character's voice, do not read it verbatim): {scenario.script}"
                )
            if indices:
                lines.append(f"Image evidence available at index: [{', '.join(str(i) for i in indices)}]")
            issues.append("\n".join(lines))
        return ISSUE_SEPARATOR.join(issues)

    @staticmethod
    def _images_block(image_count: int) -> str:
        if not image_count:
            return "No image evidence is available in this session."
        return "\n".join([
            "IMAGE EVIDENCE:",
            f"{image_count} image(s) are stored for this session.",
            "When the agent asks for proof, or the issue calls for showing an image, put this tag in your reply: "
            f"[{IMAGE_TAG}: index_number].",
            f'Example: "Ini bukti transfernya {format_image_marker(0)}"',
            "Only send images that belong to the issue currently being discussed (see the indices listed per issue).",
        ])

    @staticmethod
    def _sequencing_rules() -> str:
        return "\n".join([
            "ORDER OF ISSUES:",
            "1. Never start the conversation. Wait for the agent's first message.",
            "2. Raise ISSUE 1 first and stay on it. Do not mix in the other issues.",
            "3. Move to the next issue only after the agent has resolved the current one "
            "or asks whether there is anything else they can help with.",
            "4. Raise the remaining issues one at a time, in the order listed, with a natural transition "
            '(e.g. "Oh iya mbak/mas, ada satu lagi kendala saya...").',
        ])

    @staticmethod
    def _style_rules() -> str:
        return "\n".join([
            "GENERAL RULES:",
            "- In your first reply, introduce yourself (short name if given) and state the first issue.",
            "- Write in casual Indonesian, the way people chat on WhatsApp: abbreviations and emoticons "
            "as fits your character.",
            f'- Split long replies into several short chat messages separated by "{BREAK_MARKER}".',
            "- Stay in character until every issue has been raised or the agent ends the session.",
        ])
