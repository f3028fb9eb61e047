"""Configuration management for the A64 instruction explorer.

Config resolution order (highest priority first):
1. Programmatic (ExplorerConfig constructed in code, installed with configure())
2. Environment variables (A64_XML_DIR, A64_INSTR_SETS, ...)
3. Config file (~/.config/a64explorer/config.json, managed by `a64explorer config`)
4. Hardcoded defaults
"""

import json
import logging
import os
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Any

from .catalog.export import CatalogFormat
from .core.models import INSTR_SET_IDS, InstrSetId


logger = logging.getLogger(__name__)


# =============================================================================
# Config file location
# =============================================================================

CONFIG_DIR = Path.home() / ".config" / "a64explorer"
CONFIG_FILE = CONFIG_DIR / "config.json"


# =============================================================================
# Value parsing
# =============================================================================


def parse_instr_sets(value: str | list[str]) -> list[InstrSetId]:
    """Parse a comma-separated (or list) set selection.

    Examples:
        "base,sve" → [InstrSetId.BASE, InstrSetId.SVE]
        ["sme"] → [InstrSetId.SME]

    Raises:
        ValueError: If an entry is not a known instruction set id.
    """
    items = value.split(",") if isinstance(value, str) else value
    names = [item.strip() for item in items if item and item.strip()]
    if not names:
        raise ValueError("Instruction set list is empty")
    try:
        return [InstrSetId(name) for name in names]
    except ValueError:
        valid = ", ".join(s.value for s in INSTR_SET_IDS)
        raise ValueError(
            f"Invalid instruction set list: {value!r}. Expected any of: {valid}"
        ) from None


def parse_output_format(value: str) -> CatalogFormat:
    try:
        return CatalogFormat(value)
    except ValueError:
        valid = ", ".join(f.value for f in CatalogFormat)
        raise ValueError(
            f"Invalid output format: {value!r}. Expected one of: {valid}"
        ) from None


# =============================================================================
# Config dataclass
# =============================================================================


@dataclass
class ExplorerConfig:
    """Top-level explorer configuration.

    Examples:
        # Package use, no files needed
        config = ExplorerConfig(xml_dir="/data/ISA_A64_xml", instr_sets=[InstrSetId.SVE])

        # CLI use: loads from ~/.config/a64explorer/config.json + env
        config = ExplorerConfig.load()
    """

    xml_dir: str = "xml"
    instr_sets: list[InstrSetId] = field(default_factory=lambda: list(INSTR_SET_IDS))
    output_format: CatalogFormat = CatalogFormat.JS
    output_path: str = "instrs.js"

    @classmethod
    def load(cls) -> "ExplorerConfig":
        """Load config from file + env vars.

        Priority: env var values > config.json values > defaults.
        """
        config = cls()

        # Layer 1: config file
        if CONFIG_FILE.exists():
            try:
                with open(CONFIG_FILE) as f:
                    data = json.load(f)
                _apply_dict(config, data)
            except (json.JSONDecodeError, OSError) as exc:
                logger.warning("Failed to load config from %s: %s", CONFIG_FILE, exc)

        # Layer 2: env var overrides
        if val := os.environ.get("A64_XML_DIR"):
            config.xml_dir = val
        if val := os.environ.get("A64_INSTR_SETS"):
            try:
                config.instr_sets = parse_instr_sets(val)
            except ValueError:
                logger.warning("Invalid A64_INSTR_SETS=%r, ignoring", val)
        if val := os.environ.get("A64_OUTPUT_FORMAT"):
            try:
                config.output_format = parse_output_format(val)
            except ValueError:
                logger.warning("Invalid A64_OUTPUT_FORMAT=%r, ignoring", val)
        if val := os.environ.get("A64_OUTPUT_PATH"):
            config.output_path = val

        return config

    def save(self) -> None:
        """Save config to ~/.config/a64explorer/config.json."""
        CONFIG_DIR.mkdir(parents=True, exist_ok=True)
        with open(CONFIG_FILE, "w") as f:
            json.dump(self.to_dict(), f, indent=2)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-friendly dict."""
        data = asdict(self)
        data["instr_sets"] = [s.value for s in self.instr_sets]
        data["output_format"] = self.output_format.value
        return data

    @property
    def xml_dir_path(self) -> Path:
        return Path(self.xml_dir)


def _apply_dict(config: ExplorerConfig, data: dict) -> None:
    """Apply config-file values, skipping (with a warning) any that don't parse."""
    if isinstance(data.get("xml_dir"), str):
        config.xml_dir = data["xml_dir"]
    if "instr_sets" in data:
        try:
            config.instr_sets = parse_instr_sets(data["instr_sets"])
        except (ValueError, TypeError, AttributeError):
            logger.warning("Invalid instr_sets in %s, ignoring", CONFIG_FILE)
    if "output_format" in data:
        try:
            config.output_format = parse_output_format(data["output_format"])
        except ValueError:
            logger.warning("Invalid output_format in %s, ignoring", CONFIG_FILE)
    if isinstance(data.get("output_path"), str):
        config.output_path = data["output_path"]


# =============================================================================
# Global config singleton
# =============================================================================

_config: ExplorerConfig | None = None


def get_config() -> ExplorerConfig:
    """Get the global ExplorerConfig instance.

    First call loads from file + env vars. Subsequent calls return cached instance.
    """
    global _config
    if _config is None:
        _config = ExplorerConfig.load()
    return _config


def configure(config: ExplorerConfig) -> None:
    """Set the global ExplorerConfig programmatically."""
    global _config
    _config = config


def reset_config() -> None:
    """Reset the global config (forces reload on next get_config())."""
    global _config
    _config = None
