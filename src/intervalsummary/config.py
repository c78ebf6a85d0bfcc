"""
Summary settings and their JSON persistence (platformdirs + JSON).

Persisted items (schema v1):
- settings: SummarySettings dict representation

Behavior:
- If config file missing or unreadable -> defaults are used
- If schema_version mismatches:
  - default: reset to defaults
  - optional: keep loaded but update version
- Unknown keys in loaded JSON are ignored with warnings

Design:
- SummarySettings dataclass holds the options consumed by the pipeline
- SummaryConfig manager provides explicit API for load/save
"""

from __future__ import annotations

import json
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional

from platformdirs import user_config_dir

from intervalsummary.utils.logging import get_logger

logger = get_logger(__name__)

# Increment when you make a breaking change to the on-disk JSON schema.
SCHEMA_VERSION: int = 1

APP_NAME = "intervalsummary"
CONFIG_FILENAME = "intervalsummary.json"


@dataclass
class SummarySettings:
    """Options for one summary run.

    header: None writes the default header line, "" writes no header line,
    anything else is written with its commas replaced by the separator.
    separator: any text ("; " works too); the two-character escape "\\t" means TAB.
    """
    data_path: Optional[str] = None
    times_path: Optional[str] = None
    out_path: Optional[str] = None      # None/"" -> standard output
    scale: float = 1.0                  # duration scaling (e.g. 1/60 = minutes)
    scale_prop: float = 1.0             # proportion scaling (e.g. 100 = percent)
    count_offset: int = 0               # added to Count (e.g. -1 = count-1)
    header: Optional[str] = None
    separator: str = ","

    def to_dict(self) -> Dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "SummarySettings":
        """
        Tolerant loader:
        - ignores unknown keys (with a warning)
        - tolerates missing values (defaults are used)
        - bad numeric values fall back to defaults with a warning
        """
        defaults = cls()
        known = {f.name for f in fields(cls)}
        for key in d.keys():
            if key not in known:
                logger.warning(f"Unknown key '{key}' in summary settings, ignoring")

        def _number(key: str, conv):
            default = getattr(defaults, key)
            if key not in d or d[key] is None:
                return default
            try:
                return conv(d[key])
            except (TypeError, ValueError):
                logger.warning(f"Invalid value for '{key}': {d[key]!r}, using {default!r}")
                return default

        def _text(key: str) -> Optional[str]:
            v = d.get(key, getattr(defaults, key))
            return None if v is None else str(v)

        return cls(
            data_path=_text("data_path"),
            times_path=_text("times_path"),
            out_path=_text("out_path"),
            scale=_number("scale", float),
            scale_prop=_number("scale_prop", float),
            count_offset=_number("count_offset", int),
            header=_text("header"),
            separator=_text("separator") or defaults.separator,
        )

    def with_overrides(self, **overrides: Any) -> "SummarySettings":
        """Copy with every non-None override applied (e.g. from the command line)."""
        unknown = set(overrides) - {f.name for f in fields(self)}
        if unknown:
            raise ValueError(f"Unknown settings: {sorted(unknown)}")
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


class SummaryConfig:
    """
    Manager for loading/saving SummarySettings to disk.
    """

    def __init__(self, *, path: Path, settings: Optional[SummarySettings] = None,
                 schema_version: int = SCHEMA_VERSION):
        self.path = path
        self.settings = settings if settings is not None else SummarySettings()
        self.schema_version = schema_version

    # -----------------------------
    # Construction / persistence
    # -----------------------------
    @staticmethod
    def default_config_path(
        app_name: str = APP_NAME,
        filename: str = CONFIG_FILENAME,
        app_author: str | None = None,
    ) -> Path:
        """
        Determine OS-appropriate per-user config path.

        macOS:   ~/Library/Application Support/intervalsummary/intervalsummary.json
        Linux:   ~/.config/intervalsummary/intervalsummary.json
        Windows: %APPDATA%\\intervalsummary\\intervalsummary.json
        """
        return Path(user_config_dir(app_name, app_author)) / filename

    @classmethod
    def load(
        cls,
        *,
        config_path: Optional[Path] = None,
        schema_version: int = SCHEMA_VERSION,
        reset_on_version_mismatch: bool = True,
    ) -> "SummaryConfig":
        """
        Load config from disk.

        If file doesn't exist or is unreadable -> defaults.
        If schema mismatch:
          - reset_on_version_mismatch=True -> defaults
          - else -> keep loaded but overwrite schema_version
        """
        path = Path(config_path) if config_path is not None else cls.default_config_path()

        if not path.exists():
            logger.debug(f"No summary config at {path}, using defaults")
            return cls(path=path, schema_version=schema_version)

        try:
            parsed = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning(f"Could not read summary config at {path} ({exc}), using defaults")
            return cls(path=path, schema_version=schema_version)

        if not isinstance(parsed, dict):
            logger.warning(f"Summary config file at {path} does not contain a dict, using defaults")
            return cls(path=path, schema_version=schema_version)

        loaded_version = parsed.get("schema_version", -1)
        if loaded_version != schema_version:
            if reset_on_version_mismatch:
                logger.warning(
                    f"Summary config schema version mismatch: loaded={loaded_version}, "
                    f"expected={schema_version}, resetting to defaults"
                )
                return cls(path=path, schema_version=schema_version)
            logger.info(f"Summary config schema version {loaded_version} updated to {schema_version}")

        settings_raw = parsed.get("settings", {})
        if not isinstance(settings_raw, dict):
            logger.warning("settings is not a dict, using defaults")
            settings_raw = {}
        for key in parsed.keys():
            if key not in ("schema_version", "settings"):
                logger.warning(f"Unknown key '{key}' in summary config, ignoring")

        return cls(
            path=path,
            settings=SummarySettings.from_dict(settings_raw),
            schema_version=schema_version,
        )

    def to_json_dict(self) -> Dict[str, Any]:
        return {
            "schema_version": self.schema_version,
            "settings": self.settings.to_dict(),
        }

    def save(self) -> None:
        """Write the config as pretty JSON, creating parent folders as needed."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(self.to_json_dict(), indent=2), encoding="utf-8")
        logger.info(f"Saved summary config to {self.path}")
