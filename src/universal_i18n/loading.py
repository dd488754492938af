"""Locale message loading.

MessageLoader loads every available ``<locale>.json`` file into a mapping of
locale code to locale tree. The loading strategy depends on the detected
build tool:

    vite     - eager glob: every file matching ``locales/*.json`` under the
               project's ``src`` directory
    webpack  - context enumeration: every ``*.json`` resource of the host's
               locale package; falls back to probing when no package is
               configured or enumeration fails
    unknown  - probing: each code of a fixed base list (plus SUPPORTED_LOCALES
               from the environment) is tried against several candidate paths

Locale codes are taken from the filename stem. A file that cannot be read
or does not hold a JSON object makes its locale absent; it never fails the
load. If a strategy raises or finds nothing, the built-in two-locale message
set is returned, so load_messages() never raises.

Security:
    Locale codes coming from the environment are validated before they are
    used in a path, and every probed path is checked to stay inside the
    project root.

Python 3.13+.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import TYPE_CHECKING, Any

from universal_i18n.constants import (
    BASE_LOCALES,
    BUILTIN_MESSAGES,
    DEFAULT_DISCOVERED_LOCALES,
    DEFAULT_LOCALE,
    ENV_FALLBACK_LOCALE_KEY,
    ENV_LOCALE_KEY,
    ENV_SUPPORTED_LOCALES_KEY,
    LOCALE_FILE_SUFFIX,
    LOCALE_FILENAME_PATTERN,
    LOCALE_GLOB_PATTERN,
    LOCALE_GLOB_ROOT,
    LOCALE_PATH_CANDIDATES,
)
from universal_i18n.diagnostics import Diagnostic, DiagnosticCode, I18nError, LocaleFileError
from universal_i18n.enums import BuildTool, LoadStatus, LoadStrategy
from universal_i18n.environment import EnvironmentInfo, EnvironmentProbe
from universal_i18n.host import HostContext

if TYPE_CHECKING:
    from importlib.resources.abc import Traversable

    from universal_i18n.types import LocaleCode, LocaleTree

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Loader
    "MessageLoader",
    # Load tracking
    "LocaleLoadResult",
    "LoadSummary",
    # Helpers
    "builtin_messages",
    "locale_from_filename",
    "validate_locale_code",
]

logger = logging.getLogger(__name__)

# Exceptions a strategy may raise that degrade the load instead of failing it.
_STRATEGY_ERRORS = (OSError, ValueError, TypeError, ImportError, I18nError)

# Exceptions that reject a single locale file; nesting too deep to parse
# surfaces as RecursionError.
_FILE_ERRORS = (OSError, ValueError, RecursionError, LocaleFileError)


def _thaw(tree: Mapping[str, Any]) -> dict[str, Any]:
    """Deep-copy a (possibly read-only) tree into plain dicts."""
    return {
        key: _thaw(value) if isinstance(value, Mapping) else value
        for key, value in tree.items()
    }


def builtin_messages() -> dict[LocaleCode, dict[str, Any]]:
    """Return a fresh copy of the built-in minimal message set."""
    return _thaw(BUILTIN_MESSAGES)


def locale_from_filename(name: str) -> LocaleCode | None:
    """Derive a locale code from a locale file name or path.

    Example:
        >>> locale_from_filename("src/locales/en-US.json")
        'en-US'
        >>> locale_from_filename("README.md") is None
        True
    """
    matched = LOCALE_FILENAME_PATTERN.search(name.replace("\\", "/"))
    return matched.group(1) if matched else None


def validate_locale_code(locale: str) -> None:
    """Validate a locale code before it is used to build a file path.

    Raises:
        ValueError: If the code is empty, contains path separators or
            traversal sequences, or characters outside [A-Za-z0-9_-]
    """
    if not locale:
        msg = "Locale code cannot be empty"
        raise ValueError(msg)
    if ".." in locale:
        msg = f"Path traversal sequences not allowed in locale: '{locale}'"
        raise ValueError(msg)
    if "/" in locale or "\\" in locale:
        msg = f"Path separators not allowed in locale: '{locale}'"
        raise ValueError(msg)
    if locale_from_filename(f"{locale}{LOCALE_FILE_SUFFIX}") != locale:
        msg = f"Invalid characters in locale: '{locale}'"
        raise ValueError(msg)


def _is_safe_path(base_dir: Path, full_path: Path) -> bool:
    """Check that full_path resolves inside base_dir."""
    try:
        full_path.resolve().relative_to(base_dir.resolve())
        return True
    except ValueError:
        return False


def _parse_locale_tree(text: str, source_path: str) -> dict[str, Any]:
    """Parse locale file content; the top-level value must be an object.

    Raises:
        ValueError: If the content is not valid JSON
        RecursionError: If the content nests deeper than the parser allows
        LocaleFileError: If the top-level value is not an object
    """
    data = json.loads(text)
    if not isinstance(data, dict):
        diagnostic = Diagnostic(
            code=DiagnosticCode.LOCALE_FILE_INVALID,
            message=f"Locale file must contain a JSON object, got {type(data).__name__}",
            source_path=source_path,
        )
        raise LocaleFileError(diagnostic, source_path=source_path)
    return data


@dataclass(frozen=True, slots=True)
class LocaleLoadResult:
    """Result of loading one locale.

    Attributes:
        locale: Locale code
        status: Load status (success, not_found, error)
        source_path: Path or resource the tree was read from (if any)
        error: Exception if status is ERROR, None otherwise
    """

    locale: LocaleCode
    status: LoadStatus
    source_path: str | None = None
    error: Exception | None = None

    @property
    def is_success(self) -> bool:
        """Check if the locale loaded successfully."""
        return self.status == LoadStatus.SUCCESS

    @property
    def is_error(self) -> bool:
        """Check if loading failed with an error."""
        return self.status == LoadStatus.ERROR


@dataclass(frozen=True, slots=True)
class LoadSummary:
    """Immutable record of one load_messages() call.

    Attributes:
        strategy: Strategy that produced the messages (BUILTIN when the
            built-in message set was returned)
        results: Individual locale load results of the strategies attempted
    """

    strategy: LoadStrategy
    results: tuple[LocaleLoadResult, ...] = ()

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return (
            f"LoadSummary(strategy={self.strategy.value}, "
            f"ok={len(self.get_successful())}, errors={len(self.get_errors())})"
        )

    @property
    def used_builtin(self) -> bool:
        """Whether the built-in message set was returned."""
        return self.strategy == LoadStrategy.BUILTIN

    @property
    def loaded_locales(self) -> tuple[LocaleCode, ...]:
        """Locale codes loaded successfully, in load order."""
        return tuple(r.locale for r in self.results if r.is_success)

    def get_successful(self) -> tuple[LocaleLoadResult, ...]:
        """Get all successful load results."""
        return tuple(r for r in self.results if r.is_success)

    def get_errors(self) -> tuple[LocaleLoadResult, ...]:
        """Get all results with errors."""
        return tuple(r for r in self.results if r.is_error)


class MessageLoader:
    """Loads locale message trees with a build-tool-specific strategy.

    Example:
        >>> loader = MessageLoader(host=HostContext(project_root=Path("app")))
        >>> messages = loader.load_messages()
        >>> loader.get_load_summary().strategy
        <LoadStrategy.PROBING: 'probing'>
    """

    __slots__ = ("_environment", "_host", "_last_summary")

    def __init__(
        self,
        environment: EnvironmentInfo | None = None,
        host: HostContext | None = None,
    ) -> None:
        """Initialize the loader.

        Args:
            environment: Detected environment (default: probed from host)
            host: Host context (default: the current process)
        """
        self._host = host if host is not None else HostContext.from_process()
        self._environment = (
            environment
            if environment is not None
            else EnvironmentProbe(self._host).get_environment()
        )
        self._last_summary: LoadSummary | None = None

    @property
    def environment(self) -> EnvironmentInfo:
        """Environment the loader selects its strategy from."""
        return self._environment

    def get_load_summary(self) -> LoadSummary | None:
        """Return the summary of the most recent load_messages() call."""
        return self._last_summary

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def load_messages(self) -> dict[LocaleCode, LocaleTree]:
        """Load all available locale trees.

        Returns:
            Locale trees keyed by locale code; the built-in message set if
            the strategy fails or finds no locale file
        """
        results: list[LocaleLoadResult] = []
        strategy = LoadStrategy.BUILTIN
        messages: dict[LocaleCode, LocaleTree] = {}
        try:
            match self._environment.build_tool_id:
                case BuildTool.VITE:
                    strategy = LoadStrategy.EAGER_GLOB
                    messages = self._load_eager_glob(results)
                case BuildTool.WEBPACK:
                    strategy, messages = self._load_webpack(results)
                case _:
                    strategy = LoadStrategy.PROBING
                    messages = self._load_probing(results)
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.warning(
                "%s: failed to load locale messages, using fallback: %s",
                DiagnosticCode.MESSAGE_LOAD_FAILED.name,
                e,
            )
            self._last_summary = LoadSummary(LoadStrategy.BUILTIN, tuple(results))
            return builtin_messages()

        if not messages:
            logger.warning("No locale files found (%s), using built-in messages", strategy)
            self._last_summary = LoadSummary(LoadStrategy.BUILTIN, tuple(results))
            return builtin_messages()

        logger.info("Loaded %d locales via %s: %s", len(messages), strategy, list(messages))
        self._last_summary = LoadSummary(strategy, tuple(results))
        return messages

    def discover_available_locales(self) -> list[LocaleCode]:
        """List locale codes that have a locale file, without parsing them.

        Returns:
            Discovered locale codes; ``['ko', 'en']`` if none are found or
            discovery fails
        """
        locales: list[LocaleCode] = []
        try:
            match self._environment.build_tool_id:
                case BuildTool.VITE:
                    locales = [locale for locale, _ in self._iter_glob_files()]
                case BuildTool.WEBPACK if self._host.locale_package:
                    try:
                        locales = [locale for locale, _ in self._iter_context_entries()]
                    except _STRATEGY_ERRORS as e:
                        logger.warning("Locale context enumeration failed: %s", e)
                        locales = self._probe_existing()
                case _:
                    locales = self._probe_existing()
        except _STRATEGY_ERRORS as e:
            logger.warning("Failed to discover locales: %s", e)

        return locales if locales else list(DEFAULT_DISCOVERED_LOCALES)

    def get_available_locales(self) -> list[LocaleCode]:
        """Return the locale codes load_messages() produces.

        Falls back to discover_available_locales() if load_messages() raises,
        for example when a subclass overrides it.
        """
        try:
            return list(self.load_messages())
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.warning("Failed to get available locales: %s", e)
            return self.discover_available_locales()

    def get_default_locale(self) -> LocaleCode:
        """Return the configured default locale (I18N_LOCALE)."""
        return self._environment.env_vars.get(ENV_LOCALE_KEY) or DEFAULT_LOCALE

    def get_fallback_locale(self) -> LocaleCode:
        """Return the configured fallback locale (I18N_FALLBACK_LOCALE)."""
        return self._environment.env_vars.get(ENV_FALLBACK_LOCALE_KEY) or DEFAULT_LOCALE

    def get_candidate_locales(self) -> list[LocaleCode]:
        """Return the locale codes the probing strategy tries.

        The fixed base list followed by comma-separated SUPPORTED_LOCALES
        codes, duplicates removed in first-seen order.
        """
        raw = self._environment.env_vars.get(ENV_SUPPORTED_LOCALES_KEY, "")
        extra = [code.strip() for code in raw.split(",") if code.strip()]
        return list(dict.fromkeys([*BASE_LOCALES, *extra]))

    # ------------------------------------------------------------------
    # Eager glob strategy
    # ------------------------------------------------------------------

    def _glob_root(self) -> Path:
        return self._host.project_root / LOCALE_GLOB_ROOT

    def _iter_glob_files(self) -> Iterator[tuple[LocaleCode, Path]]:
        for path in sorted(self._glob_root().glob(LOCALE_GLOB_PATTERN)):
            locale = locale_from_filename(path.as_posix())
            if locale is not None:
                yield locale, path

    def _load_eager_glob(self, results: list[LocaleLoadResult]) -> dict[LocaleCode, LocaleTree]:
        messages: dict[LocaleCode, LocaleTree] = {}
        for locale, path in self._iter_glob_files():
            tree = self._read_file(locale, path, results)
            if tree is not None:
                messages[locale] = tree
        return messages

    # ------------------------------------------------------------------
    # Context enumeration strategy
    # ------------------------------------------------------------------

    def _iter_context_entries(self) -> Iterator[tuple[LocaleCode, Traversable]]:
        package = self._host.locale_package
        if not package:
            msg = "No locale package configured for context enumeration"
            raise LookupError(msg)
        entries = sorted(resources.files(package).iterdir(), key=lambda entry: entry.name)
        for entry in entries:
            locale = locale_from_filename(entry.name)
            if locale is not None and entry.is_file():
                yield locale, entry

    def _load_context(self, results: list[LocaleLoadResult]) -> dict[LocaleCode, LocaleTree]:
        messages: dict[LocaleCode, LocaleTree] = {}
        package = self._host.locale_package
        for locale, entry in list(self._iter_context_entries()):
            source_path = f"{package}/{entry.name}"
            try:
                tree = _parse_locale_tree(entry.read_text(encoding="utf-8"), source_path)
            except _FILE_ERRORS as e:
                logger.warning("Skipping locale resource %s: %s", source_path, e)
                results.append(LocaleLoadResult(locale, LoadStatus.ERROR, source_path, e))
                continue
            messages[locale] = tree
            results.append(LocaleLoadResult(locale, LoadStatus.SUCCESS, source_path))
            logger.debug("Loaded locale: %s from context", locale)
        return messages

    def _load_webpack(
        self,
        results: list[LocaleLoadResult],
    ) -> tuple[LoadStrategy, dict[LocaleCode, LocaleTree]]:
        if self._host.locale_package:
            try:
                return LoadStrategy.CONTEXT, self._load_context(results)
            except (*_STRATEGY_ERRORS, LookupError) as e:
                logger.warning("Locale context enumeration failed, trying fallback method: %s", e)
        return LoadStrategy.PROBING, self._load_probing(results)

    # ------------------------------------------------------------------
    # Probing strategy
    # ------------------------------------------------------------------

    def _candidate_paths(self, locale: LocaleCode) -> Iterator[Path]:
        root = self._host.project_root
        for pattern in LOCALE_PATH_CANDIDATES:
            path = root / pattern.replace("{locale}", locale)
            if _is_safe_path(root, path):
                yield path

    def _probe_locale(self, locale: LocaleCode) -> tuple[LocaleTree | None, LocaleLoadResult]:
        try:
            validate_locale_code(locale)
        except ValueError as e:
            logger.warning("%s: %s", DiagnosticCode.LOCALE_CODE_INVALID.name, e)
            return None, LocaleLoadResult(locale, LoadStatus.ERROR, error=e)

        last_error: LocaleLoadResult | None = None
        for path in self._candidate_paths(locale):
            try:
                tree = _parse_locale_tree(path.read_text(encoding="utf-8"), str(path))
            except FileNotFoundError:
                continue
            except _FILE_ERRORS as e:
                logger.debug("Rejected candidate %s: %s", path, e)
                last_error = LocaleLoadResult(locale, LoadStatus.ERROR, str(path), e)
                continue
            logger.debug("Loaded locale: %s from %s", locale, path)
            return tree, LocaleLoadResult(locale, LoadStatus.SUCCESS, str(path))

        if last_error is not None:
            return None, last_error
        return None, LocaleLoadResult(locale, LoadStatus.NOT_FOUND)

    def _load_probing(self, results: list[LocaleLoadResult]) -> dict[LocaleCode, LocaleTree]:
        messages: dict[LocaleCode, LocaleTree] = {}
        for locale in self.get_candidate_locales():
            tree, result = self._probe_locale(locale)
            results.append(result)
            if tree is not None:
                messages[locale] = tree
        return messages

    def _probe_existing(self) -> list[LocaleCode]:
        found: list[LocaleCode] = []
        for locale in self.get_candidate_locales():
            try:
                validate_locale_code(locale)
            except ValueError:
                continue
            if any(path.is_file() for path in self._candidate_paths(locale)):
                found.append(locale)
        return found

    # ------------------------------------------------------------------
    # File reading
    # ------------------------------------------------------------------

    @staticmethod
    def _read_file(
        locale: LocaleCode,
        path: Path,
        results: list[LocaleLoadResult],
    ) -> LocaleTree | None:
        try:
            tree = _parse_locale_tree(path.read_text(encoding="utf-8"), str(path))
        except _FILE_ERRORS as e:
            logger.warning("Skipping locale file %s: %s", path, e)
            results.append(LocaleLoadResult(locale, LoadStatus.ERROR, str(path), e))
            return None
        results.append(LocaleLoadResult(locale, LoadStatus.SUCCESS, str(path)))
        logger.debug("Loaded locale: %s from %s", locale, path)
        return tree
