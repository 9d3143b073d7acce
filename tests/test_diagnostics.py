"""Tests for the readiness checks and their command-line report."""

from __future__ import annotations

from toolpanel.catalog import ToolCatalog
from toolpanel.config.diagnostics import probe as config_check
from toolpanel.core.diagnostics import probe as core_check
from toolpanel.diagnostics.models import DiagnosticResult, DiagnosticStatus
from toolpanel.diagnostics.panel import probe as toolpanel_check
from toolpanel.diagnostics.run import build_checks, format_report, main, run_checks
from toolpanel.settings import ToolPanelSettings


def test_config_check_offline(tmp_path) -> None:
    """Config check should pass with a default config present."""

    (tmp_path / "default.yaml").write_text("{}", encoding="utf-8")

    result = config_check(config_dir=tmp_path)
    assert result.status is DiagnosticStatus.PASS
    assert result.facts["config_dir"] == str(tmp_path)
    assert result.facts["files"] == [str(tmp_path / "default.yaml")]


def test_config_check_rejects_non_mapping(tmp_path) -> None:
    (tmp_path / "default.yaml").write_text("- just\n- a list\n", encoding="utf-8")

    assert config_check(config_dir=tmp_path).status is DiagnosticStatus.FAIL


def test_config_check_rejects_non_mapping_override(tmp_path) -> None:
    (tmp_path / "default.yaml").write_text("{}", encoding="utf-8")
    (tmp_path / "override.yaml").write_text("[1, 2]\n", encoding="utf-8")

    result = config_check(config_dir=tmp_path)
    assert result.status is DiagnosticStatus.FAIL
    assert "override.yaml" in result.details


def test_config_check_falls_back_to_bundled_default(tmp_path) -> None:
    result = config_check(config_dir=tmp_path)

    assert result.status is DiagnosticStatus.WARN
    assert result.facts["files"][0].endswith("default.yaml")
    assert str(tmp_path) not in result.facts["files"][0]


def test_core_check_reports_rich_logging() -> None:
    assert core_check().status is DiagnosticStatus.PASS


def test_toolpanel_check_reports_tools_and_endpoint() -> None:
    settings = ToolPanelSettings(prediction_endpoint="https://flows.example.com/api/v1/prediction/x")

    result = toolpanel_check(settings=settings, require_websockets=False)

    assert result.status is DiagnosticStatus.PASS
    assert result.facts["tools"] == ["display_color_palette", "foreign_worker_enquiry"]
    assert result.facts["prediction_endpoint"] == "https://flows.example.com/api/v1/prediction/x"
    assert result.facts["log_capacity"] == 50


def test_toolpanel_check_flags_bad_endpoint() -> None:
    settings = ToolPanelSettings(prediction_endpoint="ftp://flows.example.com/x")

    result = toolpanel_check(settings=settings, require_websockets=False)
    assert result.status is DiagnosticStatus.FAIL


def test_toolpanel_check_flags_empty_catalog() -> None:
    result = toolpanel_check(
        settings=ToolPanelSettings(),
        catalog=ToolCatalog([]),
        require_websockets=False,
    )

    assert result.status is DiagnosticStatus.FAIL
    assert "empty" in result.details


def test_run_checks_survives_raising_check() -> None:
    def broken_check() -> DiagnosticResult:
        raise RuntimeError("boom")

    def ok_check() -> DiagnosticResult:
        return DiagnosticResult(name="ok", status=DiagnosticStatus.PASS, details="fine")

    results = run_checks([broken_check, ok_check])

    assert [result.status for result in results] == [DiagnosticStatus.FAIL, DiagnosticStatus.PASS]
    assert results[0].failed is True
    assert "[FAIL] broken_check: Check raised RuntimeError: boom" in format_report(results)


def test_report_lists_facts_under_each_result() -> None:
    result = DiagnosticResult(
        name="toolpanel",
        status=DiagnosticStatus.PASS,
        details="2 tools ready",
        facts={"tools": ["a", "b"], "log_capacity": 50},
    )

    report = format_report([result])

    assert "[PASS] toolpanel: 2 tools ready" in report
    assert "    tools: a, b" in report
    assert "    log_capacity: 50" in report


def test_offline_checks_pass(tmp_path) -> None:
    (tmp_path / "default.yaml").write_text("{}", encoding="utf-8")

    results = run_checks(build_checks(tmp_path, offline=True))

    assert [result.name for result in results] == ["config", "core", "toolpanel"]
    assert not any(result.failed for result in results)


def test_offline_cli_exit_code(capsys) -> None:
    assert main(["--offline"]) == 0
    assert "Tool panel diagnostics" in capsys.readouterr().out
