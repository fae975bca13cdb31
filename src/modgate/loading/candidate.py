"""File-backed candidate modules."""

from __future__ import annotations

import importlib.util
import inspect
import re
import sys
import threading
from pathlib import Path
from types import ModuleType

from ..core.errors import ModuleExitError, TypeEnumerationError

MODULE_PREFIX = "modgate_candidate_"


class CandidateModule:
    """A ``.py`` file that has been located but not yet admitted.

    The file is executed at most once per handle. Exports are ``__all__``
    when the module defines it, otherwise the public classes defined in the
    module itself.
    """

    def __init__(self, path: str | Path, *, module_name: str | None = None):
        self.path = Path(path)
        self.name = module_name or MODULE_PREFIX + _sanitize(self.path.stem)
        self._lock = threading.Lock()
        self._loaded = False
        self._types: list[type] = []
        self._faults: list[Exception] = []

    def __repr__(self) -> str:
        return f"CandidateModule({str(self.path)!r})"

    def exported_types(self) -> list[type]:
        with self._lock:
            if not self._loaded:
                self._types, self._faults = self._load()
                self._loaded = True
        if self._faults:
            raise TypeEnumerationError(self.name, self._faults, self._types)
        return list(self._types)

    def _load(self) -> tuple[list[type], list[Exception]]:
        try:
            module = self._execute()
        except Exception as exc:  # noqa: BLE001
            return [], [exc]
        except SystemExit as exc:
            return [], [_exit_fault(self.name, exc)]
        else:
            return _collect_exports(module)
        finally:
            sys.modules.pop(self.name, None)

    def _execute(self) -> ModuleType:
        spec = importlib.util.spec_from_file_location(self.name, self.path)
        if spec is None or spec.loader is None:
            raise ImportError(f"Could not create module spec for {self.path}", path=str(self.path))
        module = importlib.util.module_from_spec(spec)
        sys.modules[self.name] = module
        spec.loader.exec_module(module)
        return module


def _collect_exports(module: ModuleType) -> tuple[list[type], list[Exception]]:
    exported = getattr(module, "__all__", None)
    if exported is None:
        return [
            obj
            for attr_name, obj in vars(module).items()
            if not attr_name.startswith("_")
            and inspect.isclass(obj)
            and obj.__module__ == module.__name__
        ], []

    types: list[type] = []
    faults: list[Exception] = []
    for attr_name in exported:
        try:
            obj = getattr(module, attr_name)
        except Exception as exc:  # noqa: BLE001
            faults.append(exc)
            continue
        except SystemExit as exc:
            faults.append(_exit_fault(module.__name__, exc))
            continue
        if inspect.isclass(obj):
            types.append(obj)
    return types, faults


def _exit_fault(module_name: str, exc: SystemExit) -> ModuleExitError:
    fault = ModuleExitError(module_name, exc.code)
    fault.__cause__ = exc
    return fault


def _sanitize(stem: str) -> str:
    return re.sub(r"\W", "_", stem)


__all__ = ["CandidateModule", "MODULE_PREFIX"]
