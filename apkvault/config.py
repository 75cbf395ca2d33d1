"""Configuration management for apkvault."""

from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator
from ruamel.yaml import YAML

DEFAULT_CONFIG_PATH = Path.home() / ".config/apkvault/config.yaml"


class ApkVaultConfig(BaseModel):
    """Main configuration for apkvault."""

    backup_root: Path = Field(
        default=Path("backup"),
        description="Directory holding one subdirectory per backup"
    )

    # Runtime settings
    adb_path: str = Field(default="adb", description="Path to ADB binary")
    command_timeout: Optional[int] = Field(
        default=None,
        description="Seconds before an ADB command is abandoned (None waits for exit)"
    )
    installer_extensions: List[str] = Field(
        default=[".apk"],
        description="File suffixes treated as installer files on install"
    )
    show_progress: bool = Field(default=True, description="Show progress bars")
    log_level: str = Field(default="INFO", description="Logging level")
    log_file: Optional[Path] = Field(default=None, description="Optional debug log file")

    class Config:
        """Pydantic configuration."""

        validate_assignment = True

    @field_validator("installer_extensions")
    @classmethod
    def _normalize_extensions(cls, value: List[str]) -> List[str]:
        return [ext.lower() if ext.startswith(".") else f".{ext.lower()}" for ext in value]

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        if value.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {value}")
        return value.upper()


def load_config(config_path: Optional[Path] = None) -> ApkVaultConfig:
    """Load configuration from file or create default."""

    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH

    if config_path.exists():
        yaml = YAML(typ="safe")
        with open(config_path, "r") as f:
            data = yaml.load(f) or {}
        return ApkVaultConfig(**data)
    else:
        config = ApkVaultConfig()
        save_config(config, config_path)
        return config


def save_config(config: ApkVaultConfig, config_path: Optional[Path] = None) -> None:
    """Save configuration to file."""

    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH

    config_path.parent.mkdir(parents=True, exist_ok=True)

    yaml = YAML()
    yaml.default_flow_style = False

    with open(config_path, "w") as f:
        yaml.dump(config.model_dump(mode="json"), f)


def get_config() -> ApkVaultConfig:
    """Get the global configuration instance."""

    if not hasattr(get_config, "_config"):
        get_config._config = load_config()

    return get_config._config
