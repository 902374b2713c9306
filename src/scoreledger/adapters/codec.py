"""Byte codec for stored entities, backed by pydantic type adapters.

Records are stored as compact JSON. An absent ``eliminated_team_id`` is
written as ``null`` so it can never collide with a real team id.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from pydantic import TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError

from scoreledger.domain.errors import CodecError
from scoreledger.domain.model import EntityKind, League, Match, Team

if TYPE_CHECKING:
    from scoreledger.domain.model import Entity
    from scoreledger.domain.ports import EntityCodec

type _EntityAdapter = TypeAdapter[Team] | TypeAdapter[Match] | TypeAdapter[League]

_ADAPTERS: Final[dict[EntityKind, _EntityAdapter]] = {
    EntityKind.TEAM: TypeAdapter(Team),
    EntityKind.MATCH: TypeAdapter(Match),
    EntityKind.LEAGUE: TypeAdapter(League),
}


class JsonEntityCodec:
    """Encode and decode teams, matches and leagues."""

    def encode(self, entity: Entity) -> bytes:
        if entity is None:
            raise CodecError("Cannot encode a missing entity")
        adapter = self._adapter(entity.KIND)
        try:
            return adapter.dump_json(entity)  # type: ignore[arg-type]
        except PydanticSerializationError as exc:
            raise CodecError(f"Cannot encode {entity.KIND} {entity.id}: {exc}") from exc

    def decode(self, kind: EntityKind, data: bytes) -> Entity:
        if not data:
            raise CodecError(f"Cannot decode {kind} from empty data")
        adapter = self._adapter(kind)
        try:
            return adapter.validate_json(data)
        except ValidationError as exc:
            raise CodecError(f"Malformed {kind} record: {exc}") from exc

    @staticmethod
    def _adapter(kind: EntityKind) -> _EntityAdapter:
        try:
            return _ADAPTERS[kind]
        except KeyError:
            raise CodecError(f"No codec for {kind}") from None


if TYPE_CHECKING:
    _codec_check: EntityCodec = JsonEntityCodec()
