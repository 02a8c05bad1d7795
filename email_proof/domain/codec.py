from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable

from pydantic import BaseModel, ConfigDict, Field, StrictInt, TypeAdapter, ValidationError

from email_proof.domain.entities import ProofItem
from email_proof.domain.errors import ProofItemsDecodeError


class _ProofRecord(BaseModel):
    """Wire shape of one item: {"email", "code", "createdAt"}."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    email: str
    code: StrictInt
    created_at: datetime = Field(alias="createdAt")


_RECORDS = TypeAdapter(list[_ProofRecord])


def encode_items(items: Iterable[ProofItem]) -> str:
    records = [
        _ProofRecord(email=item.email, code=item.code, created_at=item.created_at)
        for item in items
    ]
    return _RECORDS.dump_json(records, by_alias=True).decode("utf-8")


def decode_items(raw: str) -> list[ProofItem]:
    """
    Parse a stored collection. Raises ProofItemsDecodeError on anything that
    is not a JSON array of well-formed records. Naive timestamps are UTC.
    """
    try:
        records = _RECORDS.validate_json(raw)
    except ValidationError as exc:
        raise ProofItemsDecodeError(str(exc)) from exc

    items: list[ProofItem] = []
    for record in records:
        created_at = record.created_at
        if created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)
        items.append(
            ProofItem(
                email=record.email,
                code=record.code,
                created_at=created_at.astimezone(timezone.utc),
            )
        )
    return items
