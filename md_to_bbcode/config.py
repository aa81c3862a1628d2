"""Configuration loading and management."""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
import tomllib

ORDERED_LIST_TYPES = ("1", "a", "A", "i", "I")


@dataclass
class ConverterConfig:
    """Configuration for converting Markdown to BBCode markup.

    Attributes:
        heading_sizes: Font sizes for heading levels 1 through 6, in order.
        quote_prefix: Text emitted at the start of a block quote.
        rule_markup: Markup emitted for a thematic break; an empty string
            drops thematic breaks from the output.
        ordered_list_type: Numbering style for ordered lists (``"1"``,
            ``"a"``, ``"A"``, ``"i"`` or ``"I"``).
        max_file_size: Maximum file size in bytes that will be converted.

    Examples:
        ConverterConfig(heading_sizes=(40, 32, 24, 16, 12, 10), rule_markup="")
    """

    # Markup
    heading_sizes: tuple[int, ...] = (36, 24, 18, 12, 10, 8)
    quote_prefix: str = "> "
    rule_markup: str = "[center]* * *[/center]"
    ordered_list_type: str = "1"

    # Limits
    max_file_size: int = 10 * 1024 * 1024


class ConfigError(ValueError):
    """Exception raised when configuration values are invalid.

    Attributes:
        args: Arguments provided to the underlying `ValueError`.

    Examples:
        raise ConfigError("`heading_sizes` must contain exactly 6 entries")
    """


def load_config(search_path: Path) -> ConverterConfig:
    """Load configuration from the nearest config file.

    Walks parent directories from `search_path` to the filesystem root, reading
    the ``[tool.md-to-bbcode]`` table from `pyproject.toml` and the
    ``[md-to-bbcode]`` or ``[tool.md-to-bbcode]`` table from
    `.md-to-bbcode.toml` when present. Returns default values when no
    configuration is found. TOML files that cannot be read or decoded are
    skipped.

    Args:
        search_path: Directory used as the starting point for configuration lookup.

    Returns:
        ConverterConfig: Loaded configuration with defaults applied when necessary.

    Raises:
        ConfigError: If a matching table is present but is not a mapping or
            contains unsupported keys.

    Examples:
        load_config(Path("docs"))
    """
    current = search_path.resolve()

    while True:
        pyproject_config = _load_from_file(
            current / "pyproject.toml", table_paths=[("tool", "md-to-bbcode")]
        )
        if pyproject_config is not None:
            return normalize_config(pyproject_config)

        dotfile_config = _load_from_file(
            current / ".md-to-bbcode.toml",
            table_paths=[("md-to-bbcode",), ("tool", "md-to-bbcode")],
        )
        if dotfile_config is not None:
            return normalize_config(dotfile_config)

        parent = current.parent
        if parent == current:
            break
        current = parent

    return ConverterConfig()


_MISSING = object()


def _load_from_file(
    config_file: Path, table_paths: list[tuple[str, ...]]
) -> ConverterConfig | None:
    if not config_file.exists():
        return None

    try:
        with open(config_file, "rb") as stream:
            data = tomllib.load(stream)
    except (OSError, tomllib.TOMLDecodeError):
        return None

    for table_path in table_paths:
        raw_config = _extract_table(data, table_path)
        if raw_config is _MISSING:
            continue
        return _build_config_from_raw(raw_config, config_file, table_path)

    return None


def _extract_table(data: object, table_path: tuple[str, ...]) -> object:
    current = data
    for key in table_path:
        if not isinstance(current, dict) or key not in current:
            return _MISSING
        current = current[key]
    return current


def _build_config_from_raw(
    raw_config: object, config_file: Path, table_path: tuple[str, ...]
) -> ConverterConfig:
    table_display = ".".join(table_path)

    if not isinstance(raw_config, dict):
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}")

    if not raw_config:
        return ConverterConfig()

    try:
        return ConverterConfig(**raw_config)
    except TypeError as error:
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}") from error


def normalize_config(config: ConverterConfig) -> ConverterConfig:
    """Coerce values read from TOML or the CLI into their canonical types.

    TOML arrays arrive as lists and CLI values as comma-separated strings;
    both become a tuple for `heading_sizes`.
    """
    heading_sizes = config.heading_sizes
    if isinstance(heading_sizes, str):
        try:
            heading_sizes = tuple(int(part) for part in heading_sizes.split(","))
        except ValueError as error:
            raise ConfigError("`heading_sizes` must be a comma-separated list of integers") from error
    elif isinstance(heading_sizes, list):
        heading_sizes = tuple(heading_sizes)

    return replace(config, heading_sizes=heading_sizes)


def validate_config(config: ConverterConfig) -> None:
    """Validate a `ConverterConfig` instance.

    Args:
        config: Configuration to validate.

    Returns:
        None.

    Raises:
        ConfigError: If heading sizes are not six positive integers, string
            fields have the wrong type, the ordered list type is unsupported,
            or the file size limit is non-positive.

    Examples:
        validate_config(ConverterConfig(ordered_list_type="i"))
    """
    config = normalize_config(config)

    if not isinstance(config.heading_sizes, tuple) or len(config.heading_sizes) != 6:
        raise ConfigError("`heading_sizes` must contain exactly 6 entries")
    _ensure_integers(
        {
            **{f"heading_sizes[{index}]": size for index, size in enumerate(config.heading_sizes)},
            "max_file_size": config.max_file_size,
        }
    )

    if not isinstance(config.quote_prefix, str):
        raise ConfigError("`quote_prefix` must be a string")
    if not isinstance(config.rule_markup, str):
        raise ConfigError("`rule_markup` must be a string")
    if config.ordered_list_type not in ORDERED_LIST_TYPES:
        raise ConfigError(
            f"`ordered_list_type` must be one of: {', '.join(ORDERED_LIST_TYPES)}"
        )

    _ensure_positive(
        {
            **{f"heading_sizes[{index}]": size for index, size in enumerate(config.heading_sizes)},
            "max_file_size": config.max_file_size,
        }
    )


def apply_overrides(config: ConverterConfig, **overrides: object) -> ConverterConfig:
    """Apply override values to a `ConverterConfig`.

    Args:
        config: Base configuration to update.
        overrides: Override values keyed by configuration field name; values set to
            None are ignored.

    Returns:
        ConverterConfig: New configuration with the provided overrides applied. The
        original configuration is returned when no changes are supplied.

    Raises:
        TypeError: If an override name is not defined on `ConverterConfig`.

    Examples:
        updated = apply_overrides(config, rule_markup="", ordered_list_type="a")
    """
    changes = {key: value for key, value in overrides.items() if value is not None}
    if not changes:
        return config
    return replace(config, **changes)


def build_config(search_path: Path, **overrides: object) -> ConverterConfig:
    """Load, override, and validate configuration.

    Args:
        search_path: Directory where configuration files are resolved.
        overrides: Override values keyed by configuration attributes; None values
            are ignored.

    Returns:
        ConverterConfig: Validated configuration ready for conversion.

    Raises:
        ConfigError: If configuration loading or validation fails.

    Examples:
        config = build_config(Path.cwd(), heading_sizes="40,30,20,16,12,10")
    """
    config = load_config(search_path)
    config = apply_overrides(config, **overrides)
    config = normalize_config(config)
    validate_config(config)
    return config


def _ensure_positive(values: dict[str, int]) -> None:
    for key, value in values.items():
        if value <= 0:
            raise ConfigError(f"`{key}` must be a positive integer")


def _ensure_integers(values: dict[str, object]) -> None:
    for key, value in values.items():
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigError(f"`{key}` must be an integer")
