"""Diagnostics routines for the tool panel."""

from __future__ import annotations

import importlib.util

from toolpanel.catalog import ToolCatalog, default_catalog
from toolpanel.diagnostics.models import DiagnosticResult, DiagnosticStatus
from toolpanel.prediction_client import validate_endpoint
from toolpanel.settings import ToolPanelSettings


def probe(
    settings: ToolPanelSettings | None = None,
    catalog: ToolCatalog | None = None,
    require_websockets: bool = True,
) -> DiagnosticResult:
    """Validate the catalog, prediction endpoint and transport dependency.

    Args:
        settings: Settings to check; defaults to the loaded configuration.
        catalog: Catalog to check; defaults to the built-in tools.
        require_websockets: Whether to require websockets availability.

    Returns:
        Diagnostic result indicating tool panel readiness.
    """

    name = "toolpanel"
    settings = settings or ToolPanelSettings.from_config()
    catalog = default_catalog if catalog is None else catalog

    if len(catalog) == 0:
        return DiagnosticResult(
            name=name,
            status=DiagnosticStatus.FAIL,
            details="Tool catalog is empty",
        )

    try:
        validate_endpoint(settings.prediction_endpoint)
    except ValueError as exc:
        return DiagnosticResult(
            name=name,
            status=DiagnosticStatus.FAIL,
            details=str(exc),
        )

    if require_websockets and importlib.util.find_spec("websockets") is None:
        return DiagnosticResult(
            name=name,
            status=DiagnosticStatus.FAIL,
            details="Missing websockets dependency",
        )

    return DiagnosticResult(
        name=name,
        status=DiagnosticStatus.PASS,
        details=f"{len(catalog)} tools ready",
        facts={
            "tools": catalog.names,
            "prediction_endpoint": settings.prediction_endpoint,
            "prediction_timeout_s": settings.prediction_timeout_s,
            "log_capacity": settings.log_capacity,
            "realtime_url": settings.realtime_url,
        },
    )
