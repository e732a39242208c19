# topmark:header:start
#
#   project      : CommentFlow
#   file         : model.py
#   file_relpath : src/commentflow/config/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration model and merge policy.

This module defines:
    - `Config`: an immutable, runtime snapshot used by the engine and the
      pipeline steps.
    - `MutableConfig`: a mutable builder used during discovery and merging;
      it can be frozen into `Config` and thawed back for edits.

Layering (lowest to highest precedence):
    1. Bundled defaults (``commentflow-default.toml``).
    2. Discovered project files, root-most first (``pyproject.toml`` with
       ``[tool.commentflow]``, then ``commentflow.toml`` in the same directory).
    3. Extra ``--config`` files, in the order given.
    4. CLI overrides (`MutableConfig.apply_cli_args`).

Scalars from a later layer replace earlier ones; ``exclude_patterns``
accumulate; ``extensions`` and ``files`` are replaced when a layer sets them.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Any

from commentflow.config.io import (
    get_bool_value_or_none,
    get_float_value_or_none,
    get_int_value_or_none,
    get_list_value,
    get_string_value_or_none,
    get_table_value,
    load_defaults_dict,
    load_toml_dict,
)
from commentflow.config.logging import get_logger
from commentflow.constants import (
    COMMENTFLOW_TOML_NAME,
    DEFAULT_BLOCK_DELIMITER,
    DEFAULT_BREAK_CHARS,
    DEFAULT_COMMENT_MARKER,
    DEFAULT_ENCODING,
    DEFAULT_EXCLUDED_PREFIX,
    DEFAULT_EXTENSIONS,
    DEFAULT_FORMATTER_COMMAND,
    DEFAULT_LINE_LENGTH,
    DEFAULT_STATEMENT_PREFIX,
    PYPROJECT_TOML_NAME,
)

if TYPE_CHECKING:
    from commentflow.config.io import TomlTable
    from commentflow.config.logging import CommentflowLogger

# ArgsLike: generic mapping accepted by config loaders (works for CLI namespaces and API dicts).
ArgsLike = Mapping[str, Any]

logger: CommentflowLogger = get_logger(__name__)


class WriteStrategy(str, Enum):
    """How the writer step commits a rewritten file."""

    ATOMIC = "atomic"
    INPLACE = "inplace"

    @classmethod
    def from_name(cls, name: str | None) -> WriteStrategy | None:
        """Return the member whose value matches ``name`` (case-insensitive), or None."""
        if name is None:
            return None
        key: str = name.strip().lower().replace("-", "").replace("_", "")
        for member in cls:
            if member.value == key:
                return member
        return None


# ------------------ Immutable runtime config ------------------


@dataclass(frozen=True, slots=True)
class Config:
    """Immutable runtime configuration for CommentFlow.

    Attributes:
        line_length (int): Maximum column width for rewritten lines.
        break_chars (str): Characters the wrapper may break on.
        block_delimiter (str): Marker that opens and closes comment blocks.
        comment_marker (str): Line comment marker.
        statement_prefix (str): Prefix of commented-out statements handed to
            the external formatter.
        excluded_prefix (str): Comment prefix that is never handed to the
            external formatter.
        formatter_enabled (bool): Whether the commented-statement rule may run.
        formatter_command (str): Executable of the external formatter.
        formatter_timeout (float | None): Per-call timeout in seconds, or None.
        extensions (tuple[str, ...]): File suffixes scanned inside directories.
        exclude_patterns (tuple[str, ...]): gitignore-style exclusion patterns.
        encoding (str): Text encoding used to read and write files.
        write_strategy (WriteStrategy): Atomic or in-place writer.
        apply_changes (bool): Write changes (True) or preview only (False).
        stdout (bool): Emit rewritten content on stdout instead of writing files.
        files (tuple[str, ...]): Input paths (files or directories).
        config_files (tuple[Path | str, ...]): Config sources merged into this snapshot.
    """

    line_length: int = DEFAULT_LINE_LENGTH
    break_chars: str = DEFAULT_BREAK_CHARS
    block_delimiter: str = DEFAULT_BLOCK_DELIMITER
    comment_marker: str = DEFAULT_COMMENT_MARKER
    statement_prefix: str = DEFAULT_STATEMENT_PREFIX
    excluded_prefix: str = DEFAULT_EXCLUDED_PREFIX

    formatter_enabled: bool = True
    formatter_command: str = DEFAULT_FORMATTER_COMMAND
    formatter_timeout: float | None = None

    extensions: tuple[str, ...] = DEFAULT_EXTENSIONS
    exclude_patterns: tuple[str, ...] = ()
    encoding: str = DEFAULT_ENCODING

    write_strategy: WriteStrategy = WriteStrategy.ATOMIC
    apply_changes: bool = False
    stdout: bool = False

    files: tuple[str, ...] = ()
    config_files: tuple[Path | str, ...] = ()

    def thaw(self) -> MutableConfig:
        """Return a mutable copy of this frozen configuration."""
        return MutableConfig(
            line_length=self.line_length,
            break_chars=self.break_chars,
            block_delimiter=self.block_delimiter,
            comment_marker=self.comment_marker,
            statement_prefix=self.statement_prefix,
            excluded_prefix=self.excluded_prefix,
            formatter_enabled=self.formatter_enabled,
            formatter_command=self.formatter_command,
            formatter_timeout=self.formatter_timeout,
            extensions=list(self.extensions),
            exclude_patterns=list(self.exclude_patterns),
            encoding=self.encoding,
            write_strategy=self.write_strategy,
            apply_changes=self.apply_changes,
            stdout=self.stdout,
            files=list(self.files),
            config_files=list(self.config_files),
        )


# ------------------ Mutable builder ------------------


@dataclass
class MutableConfig:
    """Mutable configuration used during discovery and merging.

    Every field is optional: ``None`` (or an empty list for collections)
    means "inherit from the previous layer". `freeze` fills the gaps with the
    built-in defaults and validates the result.
    """

    line_length: int | None = None
    break_chars: str | None = None
    block_delimiter: str | None = None
    comment_marker: str | None = None
    statement_prefix: str | None = None
    excluded_prefix: str | None = None

    formatter_enabled: bool | None = None
    formatter_command: str | None = None
    formatter_timeout: float | None = None

    extensions: list[str] = field(default_factory=lambda: [])
    exclude_patterns: list[str] = field(default_factory=lambda: [])
    encoding: str | None = None

    write_strategy: WriteStrategy | None = None
    apply_changes: bool | None = None
    stdout: bool | None = None

    files: list[str] = field(default_factory=lambda: [])
    config_files: list[Path | str] = field(default_factory=lambda: [])

    # Discovery stops at a config that sets ``root = true``.
    root: bool = False

    # ---------------------------- Build/freeze ----------------------------
    def freeze(self) -> Config:
        """Validate this builder and freeze it into an immutable `Config`.

        Raises:
            ValueError: If a value is out of range or empty where it must not be.
        """
        line_length: int = DEFAULT_LINE_LENGTH if self.line_length is None else self.line_length
        if line_length < 1:
            raise ValueError(f"line_length must be >= 1 (got {line_length})")

        for name in ("break_chars", "block_delimiter", "comment_marker"):
            value: str | None = getattr(self, name)
            if value is not None and value == "":
                raise ValueError(f"{name} must not be empty")

        timeout: float | None = self.formatter_timeout
        if timeout is not None and timeout < 0:
            raise ValueError(f"formatter timeout must be >= 0 (got {timeout})")

        extensions: tuple[str, ...] = tuple(
            ext if ext.startswith(".") else f".{ext}" for ext in self.extensions if ext
        )

        return Config(
            line_length=line_length,
            break_chars=self.break_chars or DEFAULT_BREAK_CHARS,
            block_delimiter=self.block_delimiter or DEFAULT_BLOCK_DELIMITER,
            comment_marker=self.comment_marker or DEFAULT_COMMENT_MARKER,
            statement_prefix=(
                DEFAULT_STATEMENT_PREFIX
                if self.statement_prefix is None
                else self.statement_prefix
            ),
            excluded_prefix=(
                DEFAULT_EXCLUDED_PREFIX if self.excluded_prefix is None else self.excluded_prefix
            ),
            formatter_enabled=True if self.formatter_enabled is None else self.formatter_enabled,
            formatter_command=self.formatter_command or DEFAULT_FORMATTER_COMMAND,
            # A zero timeout in TOML means "no timeout".
            formatter_timeout=timeout or None,
            extensions=extensions or DEFAULT_EXTENSIONS,
            exclude_patterns=tuple(dict.fromkeys(self.exclude_patterns)),
            encoding=self.encoding or DEFAULT_ENCODING,
            write_strategy=self.write_strategy or WriteStrategy.ATOMIC,
            apply_changes=bool(self.apply_changes),
            stdout=bool(self.stdout),
            files=tuple(self.files),
            config_files=tuple(self.config_files),
        )

    # --------------------------- Loaders/parsers --------------------------
    @classmethod
    def from_defaults(cls) -> MutableConfig:
        """Load the default configuration from the bundled TOML resource."""
        draft: MutableConfig = cls.from_toml_dict(load_defaults_dict())
        draft.config_files = ["<defaults>"]
        return draft

    @classmethod
    def from_toml_file(cls, path: Path) -> MutableConfig | None:
        """Load configuration from a single TOML file.

        For ``pyproject.toml`` the ``[tool.commentflow]`` table is extracted;
        any other file is read from its top level.

        Args:
            path (Path): Path to the TOML file.

        Returns:
            MutableConfig | None: The parsed builder, or None when a
                ``pyproject.toml`` has no ``[tool.commentflow]`` section.
        """
        logger.debug("Creating MutableConfig from TOML config: %s", path)

        toml_data: TomlTable = load_toml_dict(path)

        if path.name == PYPROJECT_TOML_NAME:
            tool_table: TomlTable = get_table_value(toml_data, "tool")
            tool_section: TomlTable = get_table_value(tool_table, "commentflow")
            if not tool_section:
                logger.debug("No [tool.commentflow] section in %s", path)
                return None
            toml_data = tool_section

        draft: MutableConfig = cls.from_toml_dict(toml_data)
        draft.config_files = [path]
        logger.debug("Generated MutableConfig: %s", draft)
        return draft

    @classmethod
    def from_toml_dict(cls, data: TomlTable) -> MutableConfig:
        """Build a `MutableConfig` from a parsed TOML table.

        Unknown keys are ignored; values of the wrong type are treated as
        unset (and logged).
        """
        formatting: TomlTable = get_table_value(data, "formatting")
        formatter: TomlTable = get_table_value(data, "formatter")
        files: TomlTable = get_table_value(data, "files")
        writer: TomlTable = get_table_value(data, "writer")

        strategy_name: str | None = get_string_value_or_none(writer, "strategy")
        strategy: WriteStrategy | None = WriteStrategy.from_name(strategy_name)
        if strategy_name is not None and strategy is None:
            logger.warning("Ignoring unknown writer strategy %r", strategy_name)

        return cls(
            line_length=get_int_value_or_none(formatting, "line_length"),
            break_chars=get_string_value_or_none(formatting, "break_chars"),
            block_delimiter=get_string_value_or_none(formatting, "block_delimiter"),
            comment_marker=get_string_value_or_none(formatting, "comment_marker"),
            statement_prefix=get_string_value_or_none(formatting, "statement_prefix"),
            excluded_prefix=get_string_value_or_none(formatting, "excluded_prefix"),
            formatter_enabled=get_bool_value_or_none(formatter, "enabled"),
            formatter_command=get_string_value_or_none(formatter, "command"),
            formatter_timeout=get_float_value_or_none(formatter, "timeout"),
            extensions=[str(e) for e in get_list_value(files, "extensions")],
            exclude_patterns=[str(p) for p in get_list_value(files, "exclude_patterns")],
            encoding=get_string_value_or_none(files, "encoding"),
            write_strategy=strategy,
            root=bool(get_bool_value_or_none(data, "root")),
        )

    @classmethod
    def discover_local_config_files(cls, start: Path) -> list[Path]:
        """Return config files found walking upward from ``start``, root-most first.

        In each directory both ``pyproject.toml`` (only when it carries a
        ``[tool.commentflow]`` table) and ``commentflow.toml`` are considered,
        in that order, so that ``commentflow.toml`` wins a same-directory merge.
        A config with ``root = true`` stops the walk after its directory.
        """
        found: list[list[Path]] = []
        current: Path = start.resolve()
        if current.is_file():
            current = current.parent

        for directory in (current, *current.parents):
            level: list[Path] = []
            stop: bool = False
            for name in (PYPROJECT_TOML_NAME, COMMENTFLOW_TOML_NAME):
                candidate: Path = directory / name
                if not candidate.is_file():
                    continue
                draft: MutableConfig | None = cls.from_toml_file(candidate)
                if draft is None:
                    continue
                level.append(candidate)
                stop = stop or draft.root
            if level:
                found.append(level)
            if stop:
                break

        ordered: list[Path] = [p for level in reversed(found) for p in level]
        logger.debug("Discovered config files: %s", ordered)
        return ordered

    @classmethod
    def load_merged(
        cls,
        *,
        start: Path | None = None,
        extra_config_files: list[Path] | None = None,
        no_config: bool = False,
    ) -> MutableConfig:
        """Merge defaults, discovered configs and explicit config files.

        Args:
            start (Path | None): Directory to start discovery from (default: CWD).
            extra_config_files (list[Path] | None): Additional files merged last.
            no_config (bool): Skip discovery (explicit files are still merged).

        Returns:
            MutableConfig: The merged builder (not yet frozen).
        """
        merged: MutableConfig = cls.from_defaults()

        sources: list[Path] = []
        if not no_config:
            sources.extend(cls.discover_local_config_files(start or Path.cwd()))
        sources.extend(extra_config_files or [])

        for path in sources:
            draft: MutableConfig | None = cls.from_toml_file(path)
            if draft is None:
                logger.warning("Config file %s has no CommentFlow settings; ignored", path)
                continue
            merged = merged.merge_with(draft)
        return merged

    def merge_with(self, other: MutableConfig) -> MutableConfig:
        """Return a new builder where ``other`` overrides this one.

        Scalars set in ``other`` replace ours; ``exclude_patterns`` are
        appended; ``extensions`` and ``files`` are replaced when ``other``
        sets them.
        """

        def pick(mine: Any, theirs: Any) -> Any:
            return mine if theirs is None else theirs

        return MutableConfig(
            line_length=pick(self.line_length, other.line_length),
            break_chars=pick(self.break_chars, other.break_chars),
            block_delimiter=pick(self.block_delimiter, other.block_delimiter),
            comment_marker=pick(self.comment_marker, other.comment_marker),
            statement_prefix=pick(self.statement_prefix, other.statement_prefix),
            excluded_prefix=pick(self.excluded_prefix, other.excluded_prefix),
            formatter_enabled=pick(self.formatter_enabled, other.formatter_enabled),
            formatter_command=pick(self.formatter_command, other.formatter_command),
            formatter_timeout=pick(self.formatter_timeout, other.formatter_timeout),
            extensions=list(other.extensions or self.extensions),
            exclude_patterns=[*self.exclude_patterns, *other.exclude_patterns],
            encoding=pick(self.encoding, other.encoding),
            write_strategy=pick(self.write_strategy, other.write_strategy),
            apply_changes=pick(self.apply_changes, other.apply_changes),
            stdout=pick(self.stdout, other.stdout),
            files=list(other.files or self.files),
            config_files=[*self.config_files, *other.config_files],
            root=other.root,
        )

    def apply_cli_args(self, args: ArgsLike) -> MutableConfig:
        """Apply CLI (or API) overrides in place and return ``self``.

        Recognized keys: ``files``, ``apply_changes``, ``stdout``,
        ``line_length``, ``exclude_patterns``, ``extensions``,
        ``formatter_command``, ``no_formatter``, ``write_mode``.
        Missing or ``None`` values leave the current setting untouched.
        """
        files = args.get("files")
        if files:
            self.files = [str(f) for f in files]

        if args.get("apply_changes") is not None:
            self.apply_changes = bool(args["apply_changes"])
        if args.get("stdout") is not None:
            self.stdout = bool(args["stdout"])

        if args.get("line_length") is not None:
            self.line_length = int(args["line_length"])

        exclude_patterns = args.get("exclude_patterns")
        if exclude_patterns:
            self.exclude_patterns.extend(str(p) for p in exclude_patterns)

        extensions = args.get("extensions")
        if extensions:
            self.extensions = [str(e) for e in extensions]

        if args.get("formatter_command"):
            self.formatter_command = str(args["formatter_command"])
        if args.get("no_formatter"):
            self.formatter_enabled = False

        write_mode = args.get("write_mode")
        if write_mode is not None:
            strategy: WriteStrategy | None = WriteStrategy.from_name(str(write_mode))
            if strategy is None:
                raise ValueError(f"Unknown write mode: {write_mode!r}")
            self.write_strategy = strategy

        return self
