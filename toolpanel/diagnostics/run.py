"""Command-line entry point for the tool panel readiness checks."""

from __future__ import annotations

import argparse
from collections.abc import Callable, Iterable
from pathlib import Path
import tempfile

from toolpanel.config.diagnostics import probe as config_probe
from toolpanel.core.diagnostics import probe as core_probe
from toolpanel.core.logging import logger as LOGGER
from toolpanel.diagnostics.models import DiagnosticResult, DiagnosticStatus
from toolpanel.diagnostics.panel import probe as toolpanel_probe
from toolpanel.settings import ToolPanelSettings

Check = Callable[[], DiagnosticResult]


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""

    parser = argparse.ArgumentParser(description="Check tool panel readiness.")
    parser.add_argument(
        "--offline",
        action="store_true",
        help="Check a throwaway config directory and skip the websockets import check.",
    )
    parser.add_argument(
        "--config-dir",
        type=Path,
        default=None,
        help="Config directory to check (defaults to the active one).",
    )
    return parser.parse_args(argv)


def build_checks(config_dir: Path | None, *, offline: bool) -> list[Check]:
    def config_check():
        return config_probe(config_dir=config_dir)

    def core_check():
        return core_probe()

    def toolpanel_check():
        if offline:
            return toolpanel_probe(settings=ToolPanelSettings(), require_websockets=False)
        return toolpanel_probe()

    return [config_check, core_check, toolpanel_check]


def run_checks(checks: Iterable[Check]) -> list[DiagnosticResult]:
    """Run every check; one that raises is reported as a failure."""

    results: list[DiagnosticResult] = []
    for check in checks:
        try:
            result = check()
        except Exception as exc:  # noqa: BLE001 - remaining checks still run
            LOGGER.exception("Diagnostic check %s raised", getattr(check, "__name__", check))
            result = DiagnosticResult(
                name=getattr(check, "__name__", "unknown_check"),
                status=DiagnosticStatus.FAIL,
                details=f"Check raised {type(exc).__name__}: {exc}",
            )
        results.append(result)
    return results


def format_report(results: Iterable[DiagnosticResult]) -> str:
    lines = ["Tool panel diagnostics", "-" * 60]
    for result in results:
        lines.extend(result.summary_lines())
    lines.append("-" * 60)
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> int:
    """Run the checks and return an exit code."""

    args = parse_args(argv)

    if args.offline and args.config_dir is None:
        with tempfile.TemporaryDirectory() as tmp_dir:
            config_dir = Path(tmp_dir)
            (config_dir / "default.yaml").write_text("{}", encoding="utf-8")
            results = run_checks(build_checks(config_dir, offline=True))
    else:
        results = run_checks(build_checks(args.config_dir, offline=args.offline))

    print(format_report(results))
    return 1 if any(result.failed for result in results) else 0


if __name__ == "__main__":
    raise SystemExit(main())
