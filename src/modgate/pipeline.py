"""Module discovery, admission scanning and report output."""

from __future__ import annotations

import json
from collections import Counter
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Callable, Iterable, Iterator, Literal, Sequence

import pendulum
import structlog

from . import __version__
from .core import Criterion
from .loading import CandidateModule, ModuleHandle

StatusType = Literal["admitted", "rejected", "excluded", "failed"]


@dataclass(slots=True)
class ModuleOutcome:
    """Admission decision for one discovered module."""

    path: str
    status: StatusType
    criterion: str | None = None
    complaints: list[str] = field(default_factory=list)
    error: str | None = None


@dataclass(slots=True)
class ScanReport:
    """Every outcome produced by one scan, in discovery order."""

    outcomes: list[ModuleOutcome] = field(default_factory=list)

    @property
    def failed(self) -> list[ModuleOutcome]:
        return [outcome for outcome in self.outcomes if outcome.status == "failed"]

    def counts(self) -> dict[str, int]:
        counter = Counter(outcome.status for outcome in self.outcomes)
        return {status: counter.get(status, 0) for status in ("admitted", "rejected", "excluded", "failed")}


class ModuleDiscovery:
    """Locate candidate ``.py`` files under a set of directories."""

    def __init__(
        self,
        directories: Iterable[str | Path] = (),
        *,
        recursive: bool = False,
        include_private: bool = False,
    ) -> None:
        self._directories = [Path(directory) for directory in directories]
        self._recursive = recursive
        self._include_private = include_private
        self._logger = structlog.get_logger(__name__)

    def discover(self) -> Iterator[Path]:
        seen: set[Path] = set()
        pattern = "**/*.py" if self._recursive else "*.py"
        for directory in self._directories:
            if not directory.is_dir():
                self._logger.warning("discovery.missing_directory", directory=str(directory))
                continue
            for path in sorted(directory.glob(pattern)):
                if not self._include_private and _is_private(path.relative_to(directory)):
                    continue
                resolved = path.resolve()
                if resolved in seen:
                    continue
                seen.add(resolved)
                yield path


def _is_private(relative: Path) -> bool:
    return any(part.startswith("_") for part in relative.parts)


class AdmissionScanner:
    """Apply exclusion and load criteria to every discovered module.

    Exclusion criteria must all admit a module before the load criteria
    are consulted. A module is admitted by the first load criterion that
    accepts it.
    """

    def __init__(
        self,
        *,
        load_criteria: Sequence[Criterion],
        exclusion_criteria: Sequence[Criterion] = (),
        discovery: ModuleDiscovery | None = None,
        module_factory: Callable[[Path], ModuleHandle] = CandidateModule,
    ) -> None:
        self._load_criteria = list(load_criteria)
        self._exclusion_criteria = list(exclusion_criteria)
        self._discovery = discovery or ModuleDiscovery()
        self._module_factory = module_factory
        self._logger = structlog.get_logger(__name__)

    def scan(self, paths: Iterable[str | Path] | None = None) -> ScanReport:
        report = ScanReport()
        candidates = self._discovery.discover() if paths is None else (Path(p) for p in paths)
        for path in candidates:
            outcome = self.check(path)
            report.outcomes.append(outcome)
            self._log_outcome(outcome)
        return report

    def check(self, path: str | Path) -> ModuleOutcome:
        """Evaluate a single module file."""
        module = self._module_factory(Path(path))
        try:
            return self._decide(str(path), module)
        except Exception as exc:  # noqa: BLE001
            return ModuleOutcome(path=str(path), status="failed", error=_describe_error(exc))

    def _decide(self, path: str, module: ModuleHandle) -> ModuleOutcome:
        for criterion in self._exclusion_criteria:
            result = criterion.evaluate(module)
            if not result.admit:
                return ModuleOutcome(
                    path=path,
                    status="excluded",
                    criterion=criterion.name,
                    complaints=list(result.complaints),
                )

        complaints: list[str] = []
        for criterion in self._load_criteria:
            result = criterion.evaluate(module)
            if result.admit:
                return ModuleOutcome(path=path, status="admitted", criterion=criterion.name)
            complaints.extend(result.complaints)
        return ModuleOutcome(path=path, status="rejected", complaints=complaints)

    def _log_outcome(self, outcome: ModuleOutcome) -> None:
        event = f"admission.{outcome.status}"
        if outcome.status == "failed":
            self._logger.error(event, path=outcome.path, error=outcome.error)
        elif outcome.status == "admitted":
            self._logger.info(event, path=outcome.path, criterion=outcome.criterion)
        else:
            self._logger.info(
                event,
                path=outcome.path,
                criterion=outcome.criterion,
                complaints=outcome.complaints,
            )


class ReportWriter:
    """Persist scan reports as JSON."""

    def write(self, path: Path, report: ScanReport) -> dict:
        payload = {
            "metadata": {
                "counts": report.counts(),
                "timestamp": pendulum.now().to_iso8601_string(),
                "app_version": __version__,
            },
            "results": [asdict(outcome) for outcome in report.outcomes],
        }
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
        return payload


def _describe_error(exc: BaseException) -> str:
    if isinstance(exc, ExceptionGroup):
        details = "; ".join(_describe_error(inner) for inner in exc.exceptions)
        return f"{exc.message}: {details}"
    return f"{type(exc).__name__}: {exc}"
