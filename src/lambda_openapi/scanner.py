"""Handler discovery — imports handler files and collects documented callables."""

import hashlib
import importlib.util
import logging
import sys
from pathlib import Path
from types import ModuleType
from typing import Any, Iterable

from lambda_openapi.errors import HandlerImportError
from lambda_openapi.metadata.store import MetadataStore, handler_key
from lambda_openapi.metadata.store import store as default_store

logger = logging.getLogger(__name__)

SKIP_DIRS = {"__pycache__", ".venv", "venv", "node_modules", ".git"}


def iter_python_files(paths: Iterable[Path]) -> list[Path]:
    """Expand files and directories into a sorted, de-duplicated list of .py files."""
    files: list[Path] = []
    seen: set[Path] = set()
    for path in paths:
        if path.is_dir():
            candidates = sorted(
                p for p in path.rglob("*.py") if not SKIP_DIRS.intersection(p.relative_to(path).parts)
            )
        elif path.suffix == ".py":
            candidates = [path]
        else:
            logger.warning("Ignoring %s: not a Python file or directory", path)
            continue
        for candidate in candidates:
            resolved = candidate.resolve()
            if resolved not in seen:
                seen.add(resolved)
                files.append(candidate)
    return files


def import_module_from_path(file_path: Path) -> ModuleType:
    """Import a Python file under a private module name.

    The file's directory is on sys.path during the import so that sibling
    modules can be imported by the handler file.
    """
    resolved = file_path.resolve()
    digest = hashlib.sha1(str(resolved).encode("utf-8")).hexdigest()[:10]
    module_name = f"lambda_openapi_handlers_{resolved.stem}_{digest}"

    spec = importlib.util.spec_from_file_location(module_name, resolved)
    if spec is None or spec.loader is None:
        raise HandlerImportError(f"Cannot load {file_path}")

    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    parent = str(resolved.parent)
    sys.path.insert(0, parent)
    try:
        spec.loader.exec_module(module)
    except Exception as e:
        sys.modules.pop(module_name, None)
        raise HandlerImportError(f"Failed to import {file_path}: {e}") from e
    finally:
        sys.path.remove(parent)
    return module


def collect_handlers(
    module: ModuleType,
    exported_only: bool = True,
    store: MetadataStore | None = None,
) -> list[Any]:
    """Return module-level callables defined in the module that carry metadata."""
    target_store = store or default_store
    handlers = []
    for name, obj in vars(module).items():
        if exported_only and name.startswith("_"):
            continue
        if not callable(obj) or getattr(handler_key(obj), "__module__", None) != module.__name__:
            continue
        if target_store.has_any_metadata(obj):
            handlers.append(obj)
    return handlers


def discover_handlers(
    paths: Iterable[Path],
    exported_only: bool = True,
    store: MetadataStore | None = None,
) -> list[Any]:
    """Import every handler file under the given paths and return documented handlers.

    Order: files sorted by path, then definition order within each file.
    """
    handlers: list[Any] = []
    seen: set[int] = set()
    for file_path in iter_python_files(paths):
        module = import_module_from_path(file_path)
        found = collect_handlers(module, exported_only=exported_only, store=store)
        logger.debug("%s: %d documented handlers", file_path, len(found))
        for handler in found:
            if id(handler_key(handler)) not in seen:
                seen.add(id(handler_key(handler)))
                handlers.append(handler)
    return handlers
