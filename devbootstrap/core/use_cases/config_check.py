"""
Config check use case — validate bootstrap.yml and report issues.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from devbootstrap.core.config.loader import ConfigError, find_settings_file, load_settings
from devbootstrap.core.models.settings import HOMEBREW_INSTALL_URL, BootstrapSettings


@dataclass
class ConfigCheckResult:
    """Result of settings validation."""

    valid: bool = False
    settings: BootstrapSettings | None = None
    config_path: Path | None = None
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "config_path": str(self.config_path) if self.config_path else None,
            "errors": self.errors,
            "warnings": self.warnings,
            "settings": self.settings.model_dump() if self.settings else None,
        }


def check_config(config_path: Path | None = None) -> ConfigCheckResult:
    """Validate settings and report issues.

    Args:
        config_path: Optional explicit path to bootstrap.yml.

    Returns:
        ConfigCheckResult with validation status and any issues.
        No file at all is valid: the built-in defaults apply.
    """
    result = ConfigCheckResult()

    if config_path is None:
        config_path = find_settings_file()
    result.config_path = config_path

    try:
        settings = load_settings(config_path, search=False)
    except ConfigError as e:
        result.errors.append(str(e))
        return result
    result.settings = settings

    if config_path is None:
        result.warnings.append("No bootstrap.yml found. Using built-in defaults.")

    # Semantic checks
    if not settings.probe_repository.startswith(settings.ssh_url_base):
        result.warnings.append(
            f"probe_repository '{settings.probe_repository}' is not an SSH URL on "
            f"{settings.git_host}; the probe will not exercise SSH access."
        )

    if not settings.tool_module.startswith(settings.module_privacy_pattern.rstrip("*")):
        result.warnings.append(
            f"tool_module '{settings.tool_module}' is outside {settings.module_privacy_pattern}; "
            "GOPRIVATE will not cover it."
        )

    if not settings.default_key_path.strip():
        result.errors.append("default_key_path must not be empty.")

    if settings.homebrew_install_url != HOMEBREW_INSTALL_URL:
        result.warnings.append(f"Using a custom Homebrew installer: {settings.homebrew_install_url}")

    result.valid = len(result.errors) == 0
    return result
