from cattrs.preconf.json import make_converter

from ..models.persona import Difficulty

# This converter instance should be used to un/structure all classes from this library.
# If custom hooks are needed in the future, they will be added here.

converter = make_converter()

# Labels written by earlier versions of the settings screen.
_LEGACY_DIFFICULTY_LABELS = {
    "Mudah": Difficulty.EASY,
    "Sedang": Difficulty.MEDIUM,
    "Sulit": Difficulty.HARD,
    "Random": Difficulty.RANDOM,
}


@converter.register_structure_hook
def _structure_difficulty(value: str, _) -> Difficulty:
    return _LEGACY_DIFFICULTY_LABELS.get(value) or Difficulty(value)


@converter.register_structure_hook
def _structure_str(value: object, _) -> str:
    # Older documents store blank text fields as null.
    return "" if value is None else str(value)
