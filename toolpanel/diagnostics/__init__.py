"""Readiness checks for the tool panel; run them with ``python -m toolpanel.diagnostics.run``."""

from toolpanel.diagnostics.models import DiagnosticResult, DiagnosticStatus

__all__ = ["DiagnosticResult", "DiagnosticStatus"]
