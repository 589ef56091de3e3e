#!/usr/bin/env python3
"""
Share Tokens

A share token is the expense list, reduced to four short-keyed fields and
wrapped in a versioned envelope, serialized as compact JSON and encoded as
unpadded URL-safe base64:

    {"v": 1, "ts": <epoch millis>, "data": [{"d": date, "c": category, "a": amount, "n": description}]}
"""

import base64
import binascii
import json
import time
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from ..core.json_utils import compact_json
from ..core.models import Expense
from .generators import json_amount

SHARE_TOKEN_VERSION = 1
SHARE_PATH_PREFIX_LENGTH = 12


@dataclass(frozen=True)
class SharedRecord:
    date: str
    category: str
    amount: float
    description: str


@dataclass(frozen=True)
class SharePayload:
    version: int
    generated_at_ms: int
    records: list[SharedRecord]


def encode_share_token(
    expenses: Sequence[Expense], generated_at_ms: int | None = None, version: int = SHARE_TOKEN_VERSION
) -> str:
    """Encode expenses as an opaque URL-safe token."""
    envelope: dict[str, Any] = {
        "v": version,
        "ts": generated_at_ms if generated_at_ms is not None else int(time.time() * 1000),
        "data": [
            {"d": e.date, "c": e.category.value, "a": json_amount(e.amount), "n": e.description}
            for e in expenses
        ],
    }
    encoded = base64.urlsafe_b64encode(compact_json(envelope).encode("utf-8")).decode("ascii")
    return encoded.rstrip("=")


def decode_share_token(token: str) -> SharePayload:
    """
    Decode a token produced by encode_share_token.

    Raises:
        ValueError: If the token is not a well-formed share token
    """
    padded = token + "=" * (-len(token) % 4)
    try:
        raw = base64.urlsafe_b64decode(padded.encode("ascii"))
        envelope = json.loads(raw.decode("utf-8"))
        return SharePayload(
            version=int(envelope["v"]),
            generated_at_ms=int(envelope["ts"]),
            records=[
                SharedRecord(date=r["d"], category=r["c"], amount=float(r["a"]), description=r["n"])
                for r in envelope["data"]
            ],
        )
    except (binascii.Error, UnicodeError, json.JSONDecodeError, KeyError, TypeError) as e:
        raise ValueError(f"Malformed share token: {e}") from e


def build_share_url(token: str, origin: str) -> str:
    """Shareable URL keyed by the token's first 12 characters."""
    return f"{origin.rstrip('/')}/shared/{token[:SHARE_PATH_PREFIX_LENGTH]}"
