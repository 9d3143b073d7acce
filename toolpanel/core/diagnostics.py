"""Diagnostics routines for the core subsystem."""

from __future__ import annotations

from rich.logging import RichHandler

from toolpanel.diagnostics.models import DiagnosticResult, DiagnosticStatus


def probe() -> DiagnosticResult:
    """Check that the shared logger is wired to a rich console handler.

    Returns:
        Diagnostic result indicating core readiness.
    """

    name = "core"
    from toolpanel.core import logging as core_logging

    logger = core_logging.logger
    if logger is None:
        return DiagnosticResult(
            name=name,
            status=DiagnosticStatus.FAIL,
            details="Core logger failed to initialize",
        )
    if not any(isinstance(handler, RichHandler) for handler in logger.handlers):
        return DiagnosticResult(
            name=name,
            status=DiagnosticStatus.WARN,
            details=f"Logger {logger.name} has no rich handler attached",
        )
    return DiagnosticResult(
        name=name,
        status=DiagnosticStatus.PASS,
        details=f"Rich logging enabled on {logger.name}",
    )
