"""msgspec base struct and JSON helpers for cleaner records."""

from __future__ import annotations

import re
from pathlib import Path

import msgspec


class StructBaseStrict(
    msgspec.Struct,
    frozen=True,
    kw_only=True,
    omit_defaults=True,
    repr_omit_defaults=True,
    forbid_unknown_fields=True,
):
    """Immutable record that rejects unknown fields when decoded."""


# msgspec reports the failing location as "... - at `$.clean.preview-limit`"
_LOCATION_SUFFIX = re.compile(r"\s+-\s+at\s+`(?P<path>[^`]+)`$")


def _enc_hook(obj: object) -> object:
    if isinstance(obj, Path):
        return obj.as_posix()
    msg = f"Cannot encode {type(obj).__name__} as JSON"
    raise NotImplementedError(msg)


def _dec_hook(type_hint: object, obj: object) -> object:
    if type_hint is Path and isinstance(obj, str):
        return Path(obj)
    msg = f"Cannot decode {type(obj).__name__} as {type_hint!r}"
    raise NotImplementedError(msg)


JSON_ENCODER = msgspec.json.Encoder(enc_hook=_enc_hook)


def validation_error_payload(exc: msgspec.ValidationError) -> dict[str, str]:
    """Split a msgspec validation message into summary and location.

    Returns
    -------
    dict[str, str]
        ``type`` and ``summary`` keys, plus ``path`` when msgspec names one.
    """
    message = str(exc).strip()
    payload = {"type": exc.__class__.__name__}
    match = _LOCATION_SUFFIX.search(message)
    if match is None:
        payload["summary"] = message
        return payload
    payload["summary"] = message[: match.start()].strip()
    payload["path"] = match.group("path")
    return payload


def dumps_json(obj: object, *, pretty: bool = False) -> bytes:
    """Encode ``obj`` as JSON, indented when ``pretty`` is set.

    Returns
    -------
    bytes
        UTF-8 JSON document.
    """
    raw = JSON_ENCODER.encode(obj)
    return msgspec.json.format(raw, indent=2) if pretty else raw


def loads_json[T](buf: bytes | str, *, target_type: type[T], strict: bool = True) -> T:
    """Decode and validate a JSON document as ``target_type``.

    Returns
    -------
    T
        Decoded value.
    """
    return msgspec.json.decode(buf, type=target_type, dec_hook=_dec_hook, strict=strict)


def convert[T](obj: object, *, target_type: type[T], strict: bool = True) -> T:
    """Validate builtin values (such as parsed TOML) as ``target_type``.

    Returns
    -------
    T
        Converted value.
    """
    return msgspec.convert(obj, type=target_type, dec_hook=_dec_hook, strict=strict)


__all__ = [
    "JSON_ENCODER",
    "StructBaseStrict",
    "convert",
    "dumps_json",
    "loads_json",
    "validation_error_payload",
]
