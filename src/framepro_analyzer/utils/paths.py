"""Path utilities.

Helpers to resolve profile file paths against the configured data directory
and to locate the packaged Hydra config directory.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional


def normalize_data_dir(value: Optional[str]) -> Optional[str]:
    """
    Return a usable data directory string or ``None``.

    ``None``, empty/whitespace-only strings and the literal ``"null"`` (as
    produced by unset config interpolations) all yield ``None``.
    """

    if value is None:
        return None
    s = str(value).strip()
    if not s or s.lower() == "null":
        return None
    return s


def resolve_profile_path(value: str, data_dir: Optional[str]) -> tuple[str, list[str]]:
    """
    Resolve a profile path the way the analysis tools look files up.

    Parameters
    ----------
    value : str
        Path as supplied by the caller. May be absolute or relative.
    data_dir : str or None
        Directory that relative paths are tried against first.

    Returns
    -------
    tuple[str, list[str]]
        The path to read, and every candidate that was considered (in order),
        for error reporting.

    Examples
    --------
    >>> resolve_profile_path("/abs/capture.json", None)
    ('/abs/capture.json', ['/abs/capture.json'])
    """

    p = Path(value)
    if p.is_absolute():
        return str(p), [str(p)]

    base = normalize_data_dir(data_dir)
    if base is None:
        return str(p), [str(p)]

    candidate = Path(base) / p
    if candidate.exists():
        return str(candidate), [str(candidate)]
    return str(p), [str(candidate), str(p)]


def config_dir() -> str:
    """
    Return the absolute path of the packaged Hydra config directory.
    """

    return str((Path(__file__).resolve().parents[1] / "conf").resolve())
