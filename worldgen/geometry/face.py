"""Cube face identification and enumeration."""

from __future__ import annotations

from enum import IntEnum


class CubeFaceId(IntEnum):
    """Identifies which face of the cube a point belongs to."""

    POS_X = 0
    NEG_X = 1
    POS_Y = 2
    NEG_Y = 3
    POS_Z = 4
    NEG_Z = 5

    @classmethod
    def all(cls) -> tuple[CubeFaceId, ...]:
        """Return all six cube faces in index order."""
        return tuple(cls)

    @classmethod
    def from_index(cls, index: int) -> CubeFaceId:
        """Return the face with the given index (0-5)."""
        try:
            return cls(index)
        except ValueError:
            raise ValueError(f"cube face index out of range: {index}") from None

    @property
    def index(self) -> int:
        """The face index (0-5)."""
        return int(self)

    def short_name(self) -> str:
        """Return the short name of the face, such as "posx" or "negy"."""
        return _SHORT_NAMES[self]


_SHORT_NAMES = {
    CubeFaceId.POS_X: "posx",
    CubeFaceId.NEG_X: "negx",
    CubeFaceId.POS_Y: "posy",
    CubeFaceId.NEG_Y: "negy",
    CubeFaceId.POS_Z: "posz",
    CubeFaceId.NEG_Z: "negz",
}