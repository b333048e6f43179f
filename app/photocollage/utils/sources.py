from __future__ import annotations

import base64
import binascii
import os
from pathlib import Path
from typing import Any, Optional

import requests

from app.photocollage.errors import InvalidConfiguration, SourceUnavailable

DEFAULT_TIMEOUT = 20.0


def is_url(ref: Any) -> bool:
    return isinstance(ref, str) and ref.lower().startswith(("http://", "https://"))


def is_data_uri(ref: Any) -> bool:
    return isinstance(ref, str) and ref.lower().startswith("data:")


def describe_source(ref: Any) -> str:
    """Short human label for a source reference (logs and error messages)."""
    if isinstance(ref, (bytes, bytearray, memoryview)):
        return f"<{len(ref)} bytes>"
    if is_data_uri(ref):
        return ref[:32] + "..." if len(ref) > 32 else ref
    if isinstance(ref, (str, os.PathLike)):
        return str(ref)
    name = getattr(ref, "name", None)
    if isinstance(name, str):
        return name
    return f"<{type(ref).__name__}>"


def _fetch_url(url: str, timeout: float, session: Optional[requests.Session]) -> bytes:
    getter = session.get if session is not None else requests.get
    try:
        resp = getter(url, timeout=timeout)
        resp.raise_for_status()
    except requests.RequestException as exc:
        raise SourceUnavailable(f"failed to fetch {url}: {exc}") from exc
    return resp.content


def _decode_data_uri(uri: str) -> bytes:
    header, sep, payload = uri.partition(",")
    if not sep:
        raise SourceUnavailable("malformed data URI")
    if not header.lower().endswith(";base64"):
        raise SourceUnavailable("only base64 data URIs are supported")
    try:
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise SourceUnavailable(f"invalid base64 payload in data URI: {exc}") from exc


def _read_path(ref: str | os.PathLike) -> bytes:
    path = Path(ref).expanduser()
    try:
        return path.read_bytes()
    except OSError as exc:
        raise SourceUnavailable(f"cannot read {path}: {exc}") from exc


def resolve_source(
    ref: Any,
    *,
    timeout: float = DEFAULT_TIMEOUT,
    session: Optional[requests.Session] = None,
) -> bytes:
    """Turn a source reference into raw image bytes.

    Accepted references:
    - bytes / bytearray / memoryview (returned as bytes)
    - binary file-like objects (anything with ``read()``)
    - ``http://`` / ``https://`` URLs, fetched with requests
    - base64 ``data:`` URIs
    - filesystem paths (str or PathLike, ``~`` expanded)
    """

    if isinstance(ref, (bytes, bytearray, memoryview)):
        data = bytes(ref)
    elif hasattr(ref, "read"):
        try:
            data = ref.read()
        except OSError as exc:
            raise SourceUnavailable(f"cannot read {describe_source(ref)}: {exc}") from exc
        if isinstance(data, str):
            raise InvalidConfiguration(f"{describe_source(ref)} is opened in text mode")
    elif is_url(ref):
        data = _fetch_url(ref, timeout, session)
    elif is_data_uri(ref):
        data = _decode_data_uri(ref)
    elif isinstance(ref, (str, os.PathLike)):
        data = _read_path(ref)
    else:
        raise InvalidConfiguration(f"unsupported source type: {type(ref).__name__}")

    if not data:
        raise SourceUnavailable(f"{describe_source(ref)} is empty")
    return bytes(data)
