"""
cep_weather.domain.cep

Postal-code (CEP) validation shared by the edge and the orchestrator.

Responsibilities:
- Decide whether a candidate is a syntactically valid CEP.
- Decode a raw request body into a `CepRequest`.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError

from cep_weather.errors import InvalidZipcode

CEP_LENGTH = 8
_DIGITS = frozenset("0123456789")


class CepRequest(BaseModel):
    """Wire shape of both the public request and the edge -> orchestrator hop."""

    model_config = ConfigDict(strict=True, frozen=True)

    cep: str


def is_valid_cep(candidate: Any) -> bool:
    # str.isdigit() accepts non-ASCII digits ("٣", "²"); only 0-9 count here.
    if not isinstance(candidate, str) or len(candidate) != CEP_LENGTH:
        return False
    return all(ch in _DIGITS for ch in candidate)


def decode_cep_request(raw: bytes | str) -> CepRequest:
    # Malformed JSON, a non-object payload, a missing `cep` or a non-string value.
    try:
        return CepRequest.model_validate_json(raw)
    except ValidationError as exc:
        raise InvalidZipcode(f"undecodable request body: {exc.error_count()} error(s)") from exc


def parse_cep_request(raw: bytes | str) -> CepRequest:
    """
    Decode and validate a request body.

    Every decoding failure and a syntactically invalid CEP raise `InvalidZipcode`.
    """

    request = decode_cep_request(raw)
    if not is_valid_cep(request.cep):
        raise InvalidZipcode(f"malformed cep of length {len(request.cep)}")
    return request


# --- Module Notes -----------------------------------------------------------
# `is_valid_cep` is total: it never raises, whatever it is handed.
