from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class CastlingRights:
    """Castling rights of one side. Rights are only ever revoked during play."""

    kingside: bool = True
    queenside: bool = True

    def revoke(self, *, kingside: bool = False, queenside: bool = False) -> "CastlingRights":
        return replace(
            self,
            kingside=self.kingside and not kingside,
            queenside=self.queenside and not queenside,
        )

    def any(self) -> bool:
        return self.kingside or self.queenside


@dataclass(frozen=True)
class RuleSet:
    """Rule variations the engine can be configured with.

    Attributes:
        castling_transit_check (bool): When True, the square the king passes
            over while castling must not be attacked (standard chess). When
            False only the king's origin is checked before castling; the
            destination is still covered by the legality filter.
    """

    castling_transit_check: bool = False


DEFAULT_RULES = RuleSet()
