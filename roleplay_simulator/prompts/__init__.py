"""Instruction assembly for the dialogue backend."""

from .instruction import Instruction, InstructionBuilder, image_indices, image_offsets

__all__ = ["Instruction", "InstructionBuilder", "image_indices", "image_offsets"]
