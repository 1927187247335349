"""Configuration loading (Hydra compose over the packaged ``conf/``).

Functions
---------
load_config
    Compose ``conf/config.yaml`` with optional dotted overrides.
configure_logging
    Install a stream handler using the configured level/format.

Classes
-------
AnalyzerSettings
    Typed view of the composed config consumed by the tool layer.
"""

from __future__ import annotations

import logging
import sys
from typing import IO, Iterable, Optional

from attrs import define, field
from attrs.validators import instance_of
from hydra import compose, initialize_config_dir
from omegaconf import DictConfig, OmegaConf

from framepro_analyzer.utils.paths import config_dir, normalize_data_dir


def load_config(overrides: Optional[Iterable[str]] = None, *, config_name: str = "config") -> DictConfig:
    """Compose the analyzer config.

    Parameters
    ----------
    overrides : iterable of str, optional
        Hydra override strings such as ``"tool_defaults.top_n=20"``.
    config_name : str, default='config'
        Config file name inside the packaged ``conf`` directory.
    """

    with initialize_config_dir(config_dir=config_dir(), version_base=None):
        cfg: DictConfig = compose(config_name=str(config_name), overrides=list(overrides or []))
    return cfg


@define(kw_only=True)
class AnalyzerSettings:
    """Settings used when serving or running the analysis tools."""

    data_dir: Optional[str] = field(default=None)
    server_name: str = field(default="FramePro Performance Analyzer", validator=[instance_of(str)])
    server_version: str = field(default="1.0.0", validator=[instance_of(str)])
    default_focus: str = field(default="all", validator=[instance_of(str)])
    default_top_n: int = field(default=10, converter=int)
    default_target_fps: float = field(default=60.0, converter=float)

    @classmethod
    def from_config(cls, cfg: DictConfig) -> "AnalyzerSettings":
        """Build settings from a composed config, resolving interpolations."""

        data_dir = OmegaConf.select(cfg, "data_dir", default=None)
        return cls(
            data_dir=normalize_data_dir(data_dir),
            server_name=str(OmegaConf.select(cfg, "server.name", default="FramePro Performance Analyzer")),
            server_version=str(OmegaConf.select(cfg, "server.version", default="1.0.0")),
            default_focus=str(OmegaConf.select(cfg, "tool_defaults.focus", default="all")),
            default_top_n=OmegaConf.select(cfg, "tool_defaults.top_n", default=10),
            default_target_fps=OmegaConf.select(cfg, "tool_defaults.target_fps", default=60.0),
        )


_DEFAULT_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_installed_handler: Optional[logging.Handler] = None


def configure_logging(cfg: Optional[DictConfig] = None, stream: Optional[IO[str]] = None) -> None:
    """Attach a stream handler to the root logger.

    Logs always go to ``stream`` (stderr by default) so stdout stays free for
    tool output and the MCP stdio transport. Calling this again replaces the
    handler installed by the previous call.
    """

    global _installed_handler

    level_name = "WARNING"
    fmt = _DEFAULT_LOG_FORMAT
    if cfg is not None:
        level_name = str(OmegaConf.select(cfg, "logging.level", default="WARNING"))
        fmt = str(OmegaConf.select(cfg, "logging.format", default=_DEFAULT_LOG_FORMAT))

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter(fmt))
    root_logger = logging.getLogger()
    if _installed_handler is not None:
        root_logger.removeHandler(_installed_handler)
    root_logger.setLevel(getattr(logging, level_name.upper(), logging.WARNING))
    root_logger.addHandler(handler)
    _installed_handler = handler
    logging.captureWarnings(True)
