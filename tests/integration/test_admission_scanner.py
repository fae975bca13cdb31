from __future__ import annotations

import json
import textwrap
from pathlib import Path

from structlog.testing import capture_logs

from modgate.core import exclude_names, has_attributes
from modgate.pipeline import AdmissionScanner, ModuleDiscovery, ReportWriter


def write_module(directory: Path, name: str, source: str) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / name
    path.write_text(textwrap.dedent(source), encoding="utf-8")
    return path


def build_plugin_dir(root: Path) -> Path:
    plugins = root / "plugins"
    write_module(
        plugins,
        "good.py",
        """
        class Greeter:
            def activate(self):
                return "hello"
        """,
    )
    write_module(
        plugins,
        "plain.py",
        """
        class Helper:
            pass
        """,
    )
    write_module(plugins, "needs_dep.py", "import modgate_scan_missing_dep\n")
    write_module(plugins, "broken.py", "raise RuntimeError('boom at import')\n")
    write_module(plugins, "test_skip.py", "class Activate:\n    activate = None\n")
    write_module(plugins, "_private.py", "class Hidden:\n    activate = None\n")
    write_module(plugins / "nested", "deep.py", "class Deep:\n    activate = None\n")
    return plugins


def test_discovery_sorted_and_skips_private(tmp_path: Path):
    plugins = build_plugin_dir(tmp_path)

    flat = [path.name for path in ModuleDiscovery([plugins]).discover()]
    deep = [path.name for path in ModuleDiscovery([plugins], recursive=True).discover()]

    assert flat == ["broken.py", "good.py", "needs_dep.py", "plain.py", "test_skip.py"]
    assert "deep.py" in deep
    assert "_private.py" not in deep


def test_discovery_ignores_missing_directory(tmp_path: Path):
    with capture_logs() as logs:
        found = list(ModuleDiscovery([tmp_path / "absent"]).discover())

    assert found == []
    assert logs[0]["event"] == "discovery.missing_directory"


def test_scanner_classifies_every_module(tmp_path: Path):
    plugins = build_plugin_dir(tmp_path)
    scanner = AdmissionScanner(
        load_criteria=[has_attributes("activate")],
        exclusion_criteria=[exclude_names(["test_*.py"])],
        discovery=ModuleDiscovery([plugins]),
    )

    with capture_logs() as logs:
        report = scanner.scan()

    statuses = {Path(outcome.path).name: outcome.status for outcome in report.outcomes}
    assert statuses == {
        "broken.py": "failed",
        "good.py": "admitted",
        "needs_dep.py": "rejected",
        "plain.py": "rejected",
        "test_skip.py": "excluded",
    }
    by_name = {Path(outcome.path).name: outcome for outcome in report.outcomes}
    assert by_name["good.py"].criterion == "has_attributes:activate"
    assert by_name["plain.py"].complaints == ["No exported class provides activate."]
    assert "modgate_scan_missing_dep" in by_name["needs_dep.py"].complaints[0]
    assert "boom at import" in by_name["broken.py"].error
    assert report.counts() == {"admitted": 1, "rejected": 2, "excluded": 1, "failed": 1}
    assert {log["event"] for log in logs} == {
        "admission.admitted",
        "admission.rejected",
        "admission.excluded",
        "admission.failed",
    }


def test_rejection_collects_complaints_from_every_load_criterion(tmp_path: Path):
    plugins = build_plugin_dir(tmp_path)
    scanner = AdmissionScanner(
        load_criteria=[has_attributes("activate"), has_attributes("deactivate")],
    )

    outcome = scanner.check(plugins / "plain.py")

    assert outcome.status == "rejected"
    assert outcome.complaints == [
        "No exported class provides activate.",
        "No exported class provides deactivate.",
    ]


def test_report_writer_persists_outcomes(tmp_path: Path):
    plugins = build_plugin_dir(tmp_path)
    scanner = AdmissionScanner(load_criteria=[has_attributes("activate")])
    report = scanner.scan([plugins / "good.py", plugins / "plain.py"])
    output = tmp_path / "out" / "report.json"

    ReportWriter().write(output, report)

    rendered = json.loads(output.read_text(encoding="utf-8"))
    assert rendered["metadata"]["counts"]["admitted"] == 1
    assert rendered["metadata"]["app_version"]
    assert [Path(item["path"]).name for item in rendered["results"]] == ["good.py", "plain.py"]
    assert rendered["results"][1]["status"] == "rejected"


def test_recursive_discovery_skips_private_directories(tmp_path: Path):
    plugins = build_plugin_dir(tmp_path)
    write_module(plugins / "_internal", "helper.py", "class Helper:\n    activate = None\n")

    deep = [path.name for path in ModuleDiscovery([plugins], recursive=True).discover()]
    everything = [
        path.name
        for path in ModuleDiscovery([plugins], recursive=True, include_private=True).discover()
    ]

    assert "helper.py" not in deep
    assert "helper.py" in everything


def test_module_calling_sys_exit_fails_without_stopping_scan(tmp_path: Path):
    plugins = tmp_path / "scripts"
    write_module(plugins, "a_script.py", "import sys\n\nsys.exit(2)\n")
    write_module(plugins, "b_good.py", "class Good:\n    activate = None\n")
    scanner = AdmissionScanner(
        load_criteria=[has_attributes("activate")],
        discovery=ModuleDiscovery([plugins]),
    )

    report = scanner.scan()

    statuses = {Path(outcome.path).name: outcome.status for outcome in report.outcomes}
    assert statuses == {"a_script.py": "failed", "b_good.py": "admitted"}
    assert "ModuleExitError" in report.outcomes[0].error
