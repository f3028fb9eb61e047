"""Architecture feature resolution for instruction encodings."""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from .models.nodes import ArchVariant


# instr-class docvar → feature implied by that kind of instruction.
# None means the kind carries no architecture requirement.
INSTR_CLASS_FEATURE_MAP: dict[str, str | None] = {
    "general": None,
    "system": None,
    "float": "FEAT_FP",
    "fpsimd": "FEAT_FP",
    "advsimd": "FEAT_AdvSIMD",
    "sve": "FEAT_SVE",
    "sve2": "FEAT_SVE2",
    "mortlach": "FEAT_SME",
    "mortlach2": "FEAT_SME2",
}


def _variant_features(variants: Sequence[ArchVariant]) -> list[str]:
    # A variant without a feature is dropped instead of kept as an empty
    # entry, so a step whose variants all lack one falls through.
    return [v.feature for v in variants if v.feature]


def _kind_features(kind: str | None) -> list[str]:
    if not kind:
        return []
    feature = INSTR_CLASS_FEATURE_MAP.get(kind)
    return [feature] if feature else []


def resolve_features(
    own_variants: Sequence[ArchVariant],
    class_variants: Sequence[ArchVariant],
    own_kind: str | None,
    class_kind: str | None,
) -> list[str]:
    """Resolve the features an encoding requires.

    First non-empty result wins:
    1. features of the encoding's own arch variants
    2. features of the owning class's arch variants
    3. feature implied by the encoding's instr-class
    4. feature implied by the class's instr-class

    An empty list means the encoding is not gated on any feature.

    Examples:
        resolve_features([], [], "fpsimd", None) → ["FEAT_FP"]
        resolve_features([], [], "general", "general") → []
    """
    for features in (
        _variant_features(own_variants),
        _variant_features(class_variants),
        _kind_features(own_kind),
        _kind_features(class_kind),
    ):
        if features:
            return features
    return []
