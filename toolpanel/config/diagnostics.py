"""Diagnostics routines for the configuration subsystem."""

from __future__ import annotations

from pathlib import Path

import yaml

from toolpanel.config.controller import BUNDLED_CONFIG_DIR, default_config_dir
from toolpanel.diagnostics.models import DiagnosticResult, DiagnosticStatus


def probe(config_dir: Path | None = None) -> DiagnosticResult:
    """Check that the config files exist and parse as YAML mappings.

    Args:
        config_dir: Directory to check; defaults to the active config directory.

    Returns:
        Diagnostic result indicating config readiness.
    """

    name = "config"
    config_dir = config_dir if config_dir is not None else default_config_dir()
    default_config = config_dir / "default.yaml"
    override_config = config_dir / "override.yaml"
    facts: dict[str, object] = {"config_dir": str(config_dir)}

    status = DiagnosticStatus.PASS
    details = f"Config files readable at {config_dir}"
    if not default_config.exists():
        default_config = BUNDLED_CONFIG_DIR / "default.yaml"
        if not default_config.exists():
            return DiagnosticResult(
                name=name,
                status=DiagnosticStatus.FAIL,
                details=f"No default.yaml in {config_dir} or {BUNDLED_CONFIG_DIR}",
                facts=facts,
            )
        status = DiagnosticStatus.WARN
        details = f"No default.yaml in {config_dir}; bundled defaults apply"

    checked = [default_config]
    if override_config.exists():
        checked.append(override_config)
    facts["files"] = [str(path) for path in checked]

    for path in checked:
        try:
            loaded = yaml.safe_load(path.read_text(encoding="utf-8"))
        except (OSError, yaml.YAMLError) as exc:
            return DiagnosticResult(
                name=name,
                status=DiagnosticStatus.FAIL,
                details=f"Config {path.name} unreadable: {exc}",
                facts=facts,
            )
        if loaded is not None and not isinstance(loaded, dict):
            return DiagnosticResult(
                name=name,
                status=DiagnosticStatus.FAIL,
                details=f"Config {path.name} must be a mapping",
                facts=facts,
            )
        panel = (loaded or {}).get("tool_panel")
        if panel is not None and not isinstance(panel, dict):
            return DiagnosticResult(
                name=name,
                status=DiagnosticStatus.WARN,
                details=f"tool_panel in {path.name} is not a mapping; defaults apply",
                facts=facts,
            )

    return DiagnosticResult(name=name, status=status, details=details, facts=facts)
