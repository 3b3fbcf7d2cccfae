"""Importing test modules so that their cases register themselves.

Targets are either dotted module names (``tests.math_cases``) or paths to
``.py`` files. Importing a target runs its module-level ``@case``
declarations; nothing else is searched for.
"""

from __future__ import annotations

import importlib
import importlib.util
import logging
import sys
from pathlib import Path
from types import ModuleType

from .errors import ModuleLoadError

logger = logging.getLogger(__name__)


def _load_path(path: Path) -> ModuleType:
    path = path.resolve()
    name = f"tally_cases_{path.stem}"
    spec = importlib.util.spec_from_file_location(name, path)
    if spec is None or spec.loader is None:
        raise ModuleLoadError(str(path), "not an importable Python file")
    module = importlib.util.module_from_spec(spec)
    # The file's directory is importable so that sibling helpers resolve.
    if (parent := str(path.parent)) not in sys.path:
        sys.path.insert(0, parent)
    sys.modules[name] = module
    try:
        spec.loader.exec_module(module)
    except BaseException:
        sys.modules.pop(name, None)
        raise
    return module


def load_target(target: str) -> ModuleType:
    """Import one test module by dotted name or file path.

    Args:
        target: Dotted module name, or path to a ``.py`` file.

    Returns:
        The imported module.

    Raises:
        ModuleLoadError: If the module cannot be found or fails to import.
    """
    logger.debug("Loading test module %s", target)
    try:
        if target.endswith(".py") or Path(target).is_file():
            path = Path(target)
            if not path.is_file():
                raise ModuleLoadError(target, "no such file")
            return _load_path(path)
        return importlib.import_module(target)
    except ModuleLoadError:
        raise
    except Exception as e:  # pylint: disable=broad-except
        logger.debug("Import of %s failed", target, exc_info=True)
        raise ModuleLoadError(target, f"{type(e).__name__}: {e}") from e


def load_targets(targets: list[str] | tuple[str, ...]) -> list[ModuleType]:
    """Import every target in order; see :func:`load_target`."""
    return [load_target(target) for target in targets]
