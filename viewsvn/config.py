from __future__ import annotations

import configparser
import logging
import os
import platform
from dataclasses import dataclass
from pathlib import Path

from viewsvn.dispatch import DEFAULT_VIEWER
from viewsvn.protocol_handler.windows import REGISTRY_ROOTS

CONFIG_ENV_VAR = "VIEWSVN_CONFIG"
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


@dataclass(frozen=True)
class ViewSvnConfig:
    viewer: str
    log_level: str
    log_file: Path
    registry_root: str
    launch_timeout_seconds: int
    config_path: Path | None


def default_config_dir() -> Path:
    if platform.system() == "Windows":
        appdata = os.getenv("APPDATA", "").strip()
        if appdata:
            return Path(appdata) / "viewsvn"
    xdg_config_home = os.getenv("XDG_CONFIG_HOME", "").strip()
    base = Path(xdg_config_home).expanduser() if xdg_config_home else Path.home() / ".config"
    return base / "viewsvn"


def default_config_paths() -> list[Path]:
    return [default_config_dir() / "config", Path("~/.viewsvn/config").expanduser()]


def _load_config_parser(config_path: Path | None) -> configparser.ConfigParser:
    """Load the INI config file from disk, if there is one.

    Values are read literally, so Windows paths like %ProgramFiles% survive.
    A file that cannot be parsed is reported and treated as empty.
    """
    parser = configparser.ConfigParser(
        strict=False, inline_comment_prefixes=("#", ";"), interpolation=None
    )
    if config_path is not None and config_path.exists():
        try:
            parser.read(config_path, encoding="utf-8")
        except configparser.Error as exc:
            logging.getLogger(__name__).warning(
                "Config file %s could not be parsed (%s); using defaults.",
                config_path,
                exc,
            )
            return configparser.ConfigParser(interpolation=None)
    return parser


def _get_string_value(
    section: configparser.SectionProxy | dict,
    key: str,
    default: str,
    config_path: Path | None,
) -> str:
    if key not in section:
        return default
    value = str(section[key]).strip()
    if not value:
        logging.getLogger(__name__).warning(
            "Config value for %s is blank in %s; using default %s.", key, config_path, default
        )
        return default
    return value


def _get_choice_value(
    section: configparser.SectionProxy | dict,
    key: str,
    default: str,
    choices: tuple[str, ...],
    config_path: Path | None,
) -> str:
    value = _get_string_value(section, key, default, config_path)
    if value not in choices:
        logging.getLogger(__name__).warning(
            "Config value for %s (%s) in %s is not one of %s; using default %s.",
            key,
            value,
            config_path,
            ", ".join(choices),
            default,
        )
        return default
    return value


def _get_seconds_value(
    section: configparser.SectionProxy | dict,
    key: str,
    default: int,
    config_path: Path | None,
) -> int:
    raw_value = _get_string_value(section, key, str(default), config_path)
    if not (raw_value.isascii() and raw_value.isdigit()):
        logging.getLogger(__name__).warning(
            "Config value for %s (%s) in %s is not a whole number of seconds; using default %s.",
            key,
            raw_value,
            config_path,
            default,
        )
        return default
    return int(raw_value)


def find_config_path() -> Path | None:
    env_override = os.getenv(CONFIG_ENV_VAR, "").strip()
    if env_override:
        return Path(env_override).expanduser()
    return next((path for path in default_config_paths() if path.exists()), None)


def load_config(config_path: Path | None = None) -> ViewSvnConfig:
    """Load settings from $VIEWSVN_CONFIG or the first default path that exists.

    No file is created; a missing file yields the defaults.
    """
    if config_path is None:
        config_path = find_config_path()

    parser = _load_config_parser(config_path)
    section = parser["viewsvn"] if parser.has_section("viewsvn") else {}

    viewer = _get_string_value(section, "viewer", DEFAULT_VIEWER, config_path)
    log_level = _get_choice_value(
        {"log_level": section["log_level"].upper()} if "log_level" in section else {},
        "log_level",
        "INFO",
        LOG_LEVELS,
        config_path,
    )
    log_file = Path(
        os.path.expanduser(
            _get_string_value(
                section, "log_file", str(default_config_dir() / "viewsvn.log"), config_path
            )
        )
    )
    registry_root = _get_choice_value(
        section, "registry_root", "classes_root", REGISTRY_ROOTS, config_path
    )
    launch_timeout_seconds = _get_seconds_value(section, "launch_timeout_seconds", 0, config_path)

    return ViewSvnConfig(
        viewer=viewer,
        log_level=log_level,
        log_file=log_file,
        registry_root=registry_root,
        launch_timeout_seconds=launch_timeout_seconds,
        config_path=config_path,
    )
