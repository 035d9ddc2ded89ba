"""
elfsize Configuration Management
=================================

Dataclass configuration with TOML persistence.  A config file is optional:
every setting has a default, missing keys fall back to it and unknown keys
are ignored so newer files keep working with older releases.

Example ``elfsize.toml``::

    [global]
    log_level = "DEBUG"
    log_file = "elfsize.log"
    log_json = true

    [elfsize]
    zero_on_error = false
    json_indent = 2

References:
    - TOML v1.0.0 Specification. https://toml.io/en/v1.0.0
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Any, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib


_DEFAULT_CONFIG_PATH: Path = Path(__file__).resolve().parent.parent / "elfsize.toml"


@dataclass(frozen=False, slots=True)
class SizeConfig:
    """Settings of the ``elfsize`` command.

    ``zero_on_error`` restores the historical behaviour of printing ``0``
    and exiting successfully when the header cannot be decoded.  It is off
    by default because it makes corrupt input indistinguishable from an ELF
    without a section header table.
    """

    zero_on_error: bool = False
    json_indent: Optional[int] = 2


@dataclass(frozen=False, slots=True)
class GlobalConfig:
    """Logging settings shared by every component."""

    log_level: str = "WARNING"
    log_file: Optional[str] = None
    log_json: bool = False


@dataclass(frozen=False, slots=True)
class ElfSizeConfig:
    """Master configuration.

    Usage:
        >>> config = ElfSizeConfig.load()                 # from default path
        >>> config = ElfSizeConfig.load("custom.toml")    # from custom path
        >>> config.elfsize.zero_on_error
        False
    """

    global_settings: GlobalConfig = field(default_factory=GlobalConfig)
    elfsize: SizeConfig = field(default_factory=SizeConfig)

    @classmethod
    def load(cls, path: str | Path | None = None) -> ElfSizeConfig:
        """Load configuration from a TOML file.

        If *path* is ``None`` the loader looks for ``elfsize.toml`` in the
        project root and falls back to defaults when it is absent.

        Raises:
            FileNotFoundError: If *path* was given explicitly and does not exist.
            tomllib.TOMLDecodeError: If the file is not valid TOML.
        """
        config_path = Path(path) if path is not None else _DEFAULT_CONFIG_PATH

        if not config_path.exists():
            if path is not None:
                raise FileNotFoundError(
                    f"Configuration file not found: {config_path}"
                )
            return cls()

        with open(config_path, "rb") as fh:
            raw: dict[str, Any] = tomllib.load(fh)

        return cls(
            global_settings=cls._build_section(GlobalConfig, raw.get("global", {})),
            elfsize=cls._build_section(SizeConfig, raw.get("elfsize", {})),
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialise the entire configuration tree to a plain dictionary."""
        return asdict(self)

    @staticmethod
    def _build_section(cls: type, data: dict[str, Any]) -> Any:
        """Instantiate dataclass *cls* using only the keys it declares."""
        valid_keys = {f.name for f in cls.__dataclass_fields__.values()}  # type: ignore[attr-defined]
        filtered = {k: v for k, v in data.items() if k in valid_keys}
        return cls(**filtered)
