"""FramePro JSON export loading.

Functions
---------
parse_session
    Decode FramePro JSON text into a :class:`ProfileSession`.
load_session
    Resolve a path, read it, and parse it.
"""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Optional

from cattrs import ClassValidationError, transform_error

from framepro_analyzer.contracts.convert import pascal_case, structure_session
from framepro_analyzer.data.models import ProfileSession
from framepro_analyzer.errors import InputMalformedError, InputUnavailableError
from framepro_analyzer.utils.paths import resolve_profile_path

logger = logging.getLogger(__name__)

_ATTRIBUTE_SEGMENT = re.compile(r"\.([a-z][a-z0-9_]*)")


def _reject_constant(name: str) -> float:
    raise ValueError(f"non-finite number {name} is not valid JSON")


def _framepro_path(line: str) -> str:
    """Rewrite ``$.functions[0].thread_id`` as ``$.Functions[0].ThreadId``."""

    message, sep, path = line.rpartition(" @ ")
    if not sep:
        return line
    return message + sep + _ATTRIBUTE_SEGMENT.sub(lambda m: "." + pascal_case(m.group(1)), path)


def parse_session(text: str, source: str = "<memory>") -> ProfileSession:
    """Parse FramePro JSON text into a session.

    Parameters
    ----------
    text : str
        JSON document with at least a ``Functions`` array.
    source : str, optional
        Label used in error messages.

    Raises
    ------
    InputMalformedError
        If the text is not JSON, is not an object, lacks ``Functions`` or
        carries values of the wrong type/sign. Diagnostics name the FramePro
        keys (``$.Functions[0].ThreadId``).
    """

    try:
        payload = json.loads(text, parse_constant=_reject_constant)
    except ValueError as exc:
        raise InputMalformedError(source, str(exc)) from exc
    if not isinstance(payload, dict):
        raise InputMalformedError(source, f"expected a JSON object, got {type(payload).__name__}")

    try:
        return structure_session(payload)
    except ClassValidationError as exc:
        lines = transform_error(exc, path="$")
        raise InputMalformedError(source, "; ".join(_framepro_path(line) for line in lines)) from exc
    except (TypeError, ValueError, KeyError) as exc:
        raise InputMalformedError(source, str(exc)) from exc


def load_session(path: str, data_dir: Optional[str] = None) -> ProfileSession:
    """Load a FramePro export from ``path``.

    Relative paths are looked up under ``data_dir`` first and then relative
    to the working directory.

    Raises
    ------
    InputUnavailableError
        If no candidate file can be read.
    InputMalformedError
        If the file content cannot be decoded into a session.
    """

    resolved, tried = resolve_profile_path(path, data_dir)
    try:
        text = Path(resolved).read_text(encoding="utf-8")
    except OSError as exc:
        raise InputUnavailableError(path, tried, exc.strerror or str(exc)) from exc
    except UnicodeDecodeError as exc:
        raise InputMalformedError(resolved, str(exc)) from exc

    session = parse_session(text, source=resolved)
    logger.info(
        "Loaded session | name=%s functions=%d frames=%d path=%s",
        session.session_name,
        session.function_count,
        session.total_frames,
        resolved,
    )
    return session
