# topmark:header:start
#
#   project      : CommentFlow
#   file         : io.py
#   file_relpath : src/commentflow/config/io.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""TOML I/O helpers for CommentFlow configuration.

Pure helpers for reading TOML documents and coercing their values. They never
mutate configuration objects, which keeps `commentflow.config.model` focused on
merge policy.

Notes:
    - Reading uses `toml`.
    - `tomlkit` is only used by `nest_toml_under_section()`, which wraps the
      bundled defaults under ``[tool.commentflow]`` for inclusion in a
      ``pyproject.toml`` while preserving comments.
"""

from __future__ import annotations

from importlib.resources import files
from typing import TYPE_CHECKING, Any, TypeGuard

import toml
import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError
from tomlkit.items import Table

from commentflow.config.logging import get_logger
from commentflow.constants import DEFAULT_TOML_CONFIG_NAME, DEFAULT_TOML_CONFIG_PACKAGE

if TYPE_CHECKING:
    from pathlib import Path

    from commentflow.config.logging import CommentflowLogger

logger: CommentflowLogger = get_logger(__name__)

TomlTable = dict[str, Any]


def is_toml_table(val: Any) -> TypeGuard[TomlTable]:
    """Type guard for a TOML table-like mapping."""
    return isinstance(val, dict)


def get_table_value(table: TomlTable, key: str) -> TomlTable:
    """Extract a sub-table from a TOML table, or an empty dict when missing."""
    value: Any | None = table.get(key)
    return value if is_toml_table(value) else {}


def get_string_value_or_none(table: TomlTable, key: str) -> str | None:
    """Extract an optional string value from a TOML table.

    Numbers and booleans are coerced with ``str()``. Missing keys and values of
    any other type yield ``None``.

    Args:
        table (TomlTable): Table to query.
        key (str): Key to extract.

    Returns:
        str | None: The extracted or coerced string, or ``None``.
    """
    value: Any | None = table.get(key)
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float, bool)):
        return str(value)
    return None


def get_int_value_or_none(table: TomlTable, key: str) -> int | None:
    """Extract an optional integer value from a TOML table.

    Booleans are rejected (``True`` is an ``int`` in Python but never a valid
    width). Integral floats and digit strings are accepted.

    Args:
        table (TomlTable): Table to query.
        key (str): Key to extract.

    Returns:
        int | None: The integer value, or ``None`` when absent or not coercible.
    """
    value: Any | None = table.get(key)
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and value.strip().lstrip("-").isdigit():
        return int(value.strip())
    return None


def get_float_value_or_none(table: TomlTable, key: str) -> float | None:
    """Extract an optional float value (ints are widened, booleans rejected)."""
    value: Any | None = table.get(key)
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        return float(value)
    return None


def get_bool_value_or_none(table: TomlTable, key: str) -> bool | None:
    """Extract an optional boolean value, coercing integers via ``bool()``."""
    value: Any | None = table.get(key)
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return bool(value)
    return None


def get_list_value(table: TomlTable, key: str) -> list[Any]:
    """Extract a list value from a TOML table (empty list when missing or not a list)."""
    value: Any | None = table.get(key)
    if isinstance(value, list):
        return list(value)
    return []


def load_defaults_text() -> str:
    """Return the bundled ``commentflow-default.toml`` verbatim, comments included.

    Raises:
        RuntimeError: If the package resource cannot be read.
    """
    resource = files(DEFAULT_TOML_CONFIG_PACKAGE).joinpath(DEFAULT_TOML_CONFIG_NAME)
    try:
        return resource.read_text(encoding="utf-8")
    except OSError as exc:
        raise RuntimeError(
            f"Cannot read bundled defaults {DEFAULT_TOML_CONFIG_NAME}: {exc}"
        ) from exc


def load_defaults_dict() -> TomlTable:
    """Return the bundled defaults parsed into a table.

    Raises:
        RuntimeError: If the resource cannot be read or is not valid TOML.
    """
    logger.debug("Parsing bundled defaults %s", DEFAULT_TOML_CONFIG_NAME)
    try:
        return toml.loads(load_defaults_text())
    except toml.TomlDecodeError as exc:
        raise RuntimeError(
            f"Bundled defaults {DEFAULT_TOML_CONFIG_NAME} are not TOML: {exc}"
        ) from exc


def load_toml_dict(path: Path) -> TomlTable:
    """Parse the TOML file at ``path`` (UTF-8).

    A file that cannot be opened or parsed is logged as an error and yields an
    empty table, so that one broken config does not stop discovery.
    """
    try:
        return toml.load(path)
    except (OSError, toml.TomlDecodeError) as exc:
        logger.error("Ignoring config %s: %s", path, exc)
        return {}


def nest_toml_under_section(toml_doc: str, section_keys: str) -> str:
    r"""Return a new TOML document nested under a dotted section path.

    ``nest_toml_under_section("a = 1\n", "tool.commentflow")`` yields a
    document equivalent to::

        [tool.commentflow]
        a = 1

    Leading comments of the original document are kept above the new section,
    and tomlkit nodes are re-used so inline comments survive.

    Args:
        toml_doc (str): Original TOML document to nest.
        section_keys (str): Dotted section path such as ``"tool.commentflow"``.

    Returns:
        str: The nested TOML document.

    Raises:
        ValueError: If ``section_keys`` has no non-empty component.
        RuntimeError: If the TOML document cannot be parsed.
    """
    keys: list[str] = [k for k in section_keys.split(".") if k]
    if not keys:
        raise ValueError("section_keys must contain at least one non-empty component")

    try:
        doc: tomlkit.TOMLDocument = tomlkit.parse(toml_doc)
    except TomlkitParseError as exc:
        raise RuntimeError(f"Error parsing TOML document: {exc}") from exc

    # Unkeyed items (comments, blank lines) before the first key form the preamble.
    preamble = []
    for key, item in doc.body:
        if key is not None:
            break
        preamble.append((key, item))

    new_doc: tomlkit.TOMLDocument = tomlkit.document()
    new_doc.body.extend(preamble)

    section: Table = tomlkit.table()
    for item_key, item_value in doc.items():
        section.add(item_key, item_value)

    # Build the chain innermost-first: [tool.commentflow] -> [tool]
    nested: Table = section
    for key in reversed(keys[1:]):
        parent: Table = tomlkit.table(is_super_table=True)
        parent.add(key, nested)
        nested = parent
    new_doc.add(keys[0], nested)

    return new_doc.as_string()
