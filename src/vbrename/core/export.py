"""Report exporters for recorded references and planned edits.

The exporters turn the engine's collections into JSON or CSV files consumed
by reporting and diffing tools and by the file-rewriting stage:

- ``<project>.references.json``: every symbol with its usages, records sorted
  by module then procedure, fields in a stable order
- ``<project>.linereplace.json``: per module, the planned edits in safe
  application order (line descending, column descending)
- ``<project>.startchar.csv``: one audit row per planned edit

Files are written atomically: content goes to a temporary file in the target
directory, which is then renamed over the destination.

Example:
    >>> export_replaces_json(Path("out/project.linereplace.json"), engine)
    >>> export_start_char_checks(Path("out/project.startchar.csv"),
    ...                          engine.start_char_checks())
"""

from __future__ import annotations

import csv
import io
import json
import os
import shutil
import tempfile
from pathlib import Path
from typing import Any, Iterable

from vbrename.core.engine import RenameEngine, StartCharCheck
from vbrename.core.references import SymbolReference
from vbrename.core.replacements import LineReplace, sort_for_application
from vbrename.core.symbol_table import SymbolTable
from vbrename.utils.logger import get_logger
from vbrename.utils.path_utils import PathLike, ensure_directory, ensure_extension, normalize_path

logger = get_logger("vbrename.core.export")

START_CHAR_CHECK_HEADER = [
    "Module",
    "Procedure",
    "LineNumber",
    "StartChar",
    "OccurrenceIndex",
    "OldName",
    "NewName",
    "Category",
]


# ---------------------------------------------------------------------------
# Dictionary builders
# ---------------------------------------------------------------------------

def references_to_dict(references: Iterable[SymbolReference]) -> list[dict[str, Any]]:
    """Serialize references sorted by module, then procedure (case-insensitive)."""
    ordered = sorted(
        references,
        key=lambda r: (r.module.casefold(), (r.procedure or "").casefold()),
    )
    return [ref.to_dict() for ref in ordered]


def symbols_to_dict(symbols: SymbolTable) -> dict[str, Any]:
    """Serialize a symbol table with sorted references for every entry."""
    data = symbols.to_dict()
    for entry, item in zip(symbols.entries(), data["symbols"]):
        item["references"] = references_to_dict(entry.references)
    return data


def replaces_to_dict(module: str, replaces: Iterable[LineReplace]) -> dict[str, Any]:
    """Serialize one module's edits in safe application order."""
    return {
        "module": module,
        "replaces": [r.to_dict() for r in sort_for_application(replaces)],
    }


# ---------------------------------------------------------------------------
# Writers
# ---------------------------------------------------------------------------

def _write_atomic(output_path: Path, content: str) -> None:
    """Write ``content`` to ``output_path`` through a temporary sibling file.

    Raises:
        OSError: On file-system errors, after removing the temporary file
    """
    ensure_directory(output_path.parent)
    temp_path: str | None = None

    try:
        with tempfile.NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            newline="",
            delete=False,
            dir=str(output_path.parent),
            suffix=output_path.suffix,
        ) as fd:
            temp_path = fd.name
            fd.write(content)
            fd.flush()
            os.fsync(fd.fileno())

        shutil.move(temp_path, str(output_path))
        logger.debug(f"Atomic write: renamed {temp_path} -> {output_path}")

    except OSError as exc:
        logger.error(f"Atomic write failed for {output_path}: {exc}")
        if temp_path is not None and os.path.exists(temp_path):
            try:
                os.unlink(temp_path)
            except OSError:
                logger.error(f"Failed to clean up temp file: {temp_path}")
        raise


def export_references_json(output_path: PathLike, symbols: SymbolTable, indent: int = 2) -> Path:
    """Write every symbol and its usages to ``output_path``.

    Returns:
        The absolute path written, with a ``.json`` suffix added if missing
    """
    output_path = ensure_extension(normalize_path(output_path), ".json")
    data = symbols_to_dict(symbols)
    _write_atomic(output_path, json.dumps(data, indent=indent, ensure_ascii=False))
    logger.info(f"Exported references of {data['symbol_count']} symbols to {output_path}")
    return output_path


def export_replaces_json(output_path: PathLike, engine: RenameEngine, indent: int | None = None) -> Path:
    """Write the planned edits of every module to ``output_path``.

    Modules are listed by name (case-insensitive); within a module the edits
    are in safe application order.
    """
    output_path = ensure_extension(normalize_path(output_path), ".json")
    if indent is None:
        indent = engine.config.get("export_indent")

    modules = sorted(engine.modules(), key=str.casefold)
    data = {
        "replace_count": engine.total_replaces(),
        "modules": [replaces_to_dict(m, engine.replaces_for(m)) for m in modules],
    }
    _write_atomic(output_path, json.dumps(data, indent=indent, ensure_ascii=False))
    logger.info(
        f"Exported {data['replace_count']} edits for {len(modules)} modules to {output_path}"
    )
    return output_path


def export_start_char_checks(output_path: PathLike, checks: Iterable[StartCharCheck]) -> Path:
    """Write the start-column audit report as ``;``-separated CSV."""
    output_path = ensure_extension(normalize_path(output_path), ".csv")
    ordered = sorted(
        checks,
        key=lambda c: (
            c.module.casefold(),
            c.procedure.casefold(),
            c.line_number,
            c.start_char,
        ),
    )

    buffer = io.StringIO()
    writer = csv.writer(buffer, delimiter=";", lineterminator="\n")
    writer.writerow(START_CHAR_CHECK_HEADER)
    for check in ordered:
        writer.writerow([
            check.module,
            check.procedure,
            check.line_number,
            check.start_char,
            check.occurrence_index,
            check.old_name,
            check.new_name,
            check.category,
        ])

    _write_atomic(output_path, buffer.getvalue())
    logger.info(f"Exported {len(ordered)} start-char checks to {output_path}")
    return output_path
