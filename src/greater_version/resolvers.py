"""Find the declared version of a module in the source tree, the system and the registry.

Every resolver returns a Resolution. Lower level failures (missing files, I/O
errors, network errors, unparsable versions) are turned into absence results
here and never propagate to the caller.
"""

import ast
import logging
import re
import sys
from importlib import metadata
from pathlib import Path
from typing import Any, Optional, Sequence

import requests

from greater_version import constants
from greater_version.configuration import configuration
from greater_version.models.config import (
    Configuration,
    InstalledConfiguration,
    SourceConfiguration,
)
from greater_version.models.resolution import Resolution, VersionSource
from greater_version.utils.versions import InvalidVersionError, parse_version

logger = logging.getLogger(__name__)


def split_module_name(name: str) -> list[str]:
    """
    Split a module reference into its components.

    Both "pkg.module" and "Pkg::Module" are accepted.

    Raises:
        ValueError: If the name is empty or any component is not a valid
        Python identifier (this also rejects path tricks like "..").
    """
    components = re.split(constants.MODULE_SEPARATOR_PATTERN, name.strip())
    if not all(component.isidentifier() for component in components):
        raise ValueError(f"Invalid module name '{name}'")
    return components


def distribution_candidates(name: str) -> list[str]:
    """Return distribution names to try for a module, most specific first."""
    components = split_module_name(name)
    candidates = [".".join(components)]
    if components[0] not in candidates:
        candidates.append(components[0])
    return candidates


def module_to_file(
    name: str,
    project_root: Optional[Path] = None,
    source_root: str = constants.DEFAULT_SOURCE_ROOT,
    extension: str = constants.DEFAULT_SOURCE_EXTENSION,
) -> Path:
    """
    Convert a module reference to its file under the local source tree.

    `pkg.sub.module` becomes `<project_root>/<source_root>/pkg/sub/module.py`;
    the path is built with pathlib so it is correct on every platform.

    Parameters:
        name (str): Module reference.
        project_root (Optional[Path]): Project directory, the current working
        directory when not given.
        source_root (str): Source tree directory relative to the project root.
        extension (str): Extension appended to the last component.

    Returns:
        Path: Path of the module file, which may not exist.

    Raises:
        ValueError: If the module name is not valid.
    """
    components = split_module_name(name)
    root = project_root if project_root is not None else Path.cwd()
    path = root.joinpath(source_root, *components)
    return path.with_name(path.name + extension)


def candidate_source_files(name: str, source: SourceConfiguration) -> list[Path]:
    """Return the files that may declare the version of a module, in lookup order."""
    module_file = module_to_file(
        name,
        project_root=source.resolve_project_root(),
        source_root=source.source_root,
        extension=source.extension,
    )
    # a package is declared by a directory; its version usually lives in
    # __init__.py or a dedicated version module
    package_dir = module_file.with_name(module_file.name[: -len(source.extension)])
    return [module_file] + [
        package_dir / filename for filename in constants.PACKAGE_VERSION_FILES
    ]


def _literal_to_version(value: Any) -> Optional[str]:
    """Turn the value of a version literal into a version string."""
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, (tuple, list)) and value:
        if all(
            isinstance(part, (int, str)) and not isinstance(part, bool)
            for part in value
        ):
            return ".".join(str(part) for part in value)
    return None


def _declared_value(node: ast.stmt, identifiers: Sequence[str]) -> Optional[str]:
    """Return the version a module-level assignment declares, if any."""
    if isinstance(node, ast.Assign):
        targets = node.targets
    elif isinstance(node, ast.AnnAssign) and node.value is not None:
        targets = [node.target]
    else:
        return None

    # `__version__ = version = "1.0"` has two targets
    if not any(
        isinstance(target, ast.Name) and target.id in identifiers
        for target in targets
    ):
        return None

    try:
        value = ast.literal_eval(node.value)  # type: ignore[arg-type]
    except (ValueError, TypeError, SyntaxError, MemoryError, RecursionError):
        logger.debug("Version is not a literal: %s", ast.unparse(node))
        return None
    return _literal_to_version(value)


def _scan_lines(text: str, identifiers: Sequence[str]) -> Optional[str]:
    """Look for single line declarations in source that does not parse."""
    names = "|".join(re.escape(identifier) for identifier in identifiers)
    pattern = re.compile(rf"^(?:{names})\s*[:=]")
    for line in text.splitlines():
        if not pattern.match(line):
            continue
        try:
            node = ast.parse(line).body[0]
        except (SyntaxError, IndexError):
            logger.debug("Skipping line that does not parse: %s", line)
            continue
        declared = _declared_value(node, identifiers)
        if declared is not None:
            return declared
    return None


def extract_declared_version(text: str, identifiers: Sequence[str]) -> Optional[str]:
    """
    Extract the declared version from Python source text without executing it.

    Only module-level assignments to one of `identifiers` are considered,
    e.g. `__version__ = "1.2.3"`, `VERSION: str = '2.0'` or
    `__version__ = version = "1.0"`. The right hand side is evaluated with
    ast.literal_eval, so anything but a literal (a function call, a name) is
    ignored. Text inside docstrings and other string literals never counts.
    A file with a syntax error is scanned line by line instead.

    Parameters:
        text (str): Contents of the source file.
        identifiers (Sequence[str]): Recognized version variable names.

    Returns:
        Optional[str]: The first declared version found, or None.
    """
    try:
        tree = ast.parse(text)
    except (SyntaxError, ValueError) as e:
        logger.debug("Source does not parse, scanning lines: %s", e)
        return _scan_lines(text, identifiers)

    for node in tree.body:
        declared = _declared_value(node, identifiers)
        if declared is not None:
            return declared
    return None


def _to_resolution(
    source: VersionSource, declared: str, location: Optional[str]
) -> Resolution:
    """Parse a declared version into a found or an absence resolution."""
    try:
        return Resolution.found(source, parse_version(declared), location)
    except InvalidVersionError:
        logger.warning("Can not parse %s version '%s'", source.value, declared)
        return Resolution.absent(
            source, f"{constants.REASON_UNPARSABLE} '{declared}'", location
        )


def resolve_from_source(
    name: str, config: Optional[Configuration] = None
) -> Resolution:
    """
    Get the version of a module from the local source tree.

    The module file is located with module_to_file and the version is
    extracted from its text; the file is never imported.

    Parameters:
        name (str): Module reference.
        config (Optional[Configuration]): Configuration to use instead of the
        global one.

    Returns:
        Resolution: The declared version, or an absence result with one of
        "invalid module name", "file not found", "no version declared",
        "read failed" or "unparsable version" as its reason.
    """
    source = (config or configuration.configuration).source
    try:
        files = candidate_source_files(name, source)
    except ValueError:
        return Resolution.absent(
            VersionSource.SOURCE, constants.REASON_INVALID_MODULE_NAME
        )

    first_existing: Optional[Path] = None
    for path in files:
        if not path.is_file():
            continue
        if first_existing is None:
            first_existing = path
        logger.debug("Looking for version of %s in %s", name, path)
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Can not read %s: %s", path, e)
            return Resolution.absent(
                VersionSource.SOURCE,
                f"{constants.REASON_READ_FAILED}: {e}",
                str(path),
            )
        declared = extract_declared_version(text, source.version_identifiers)
        if declared is not None:
            return _to_resolution(VersionSource.SOURCE, declared, str(path))

    if first_existing is None:
        return Resolution.absent(
            VersionSource.SOURCE, constants.REASON_FILE_NOT_FOUND, str(files[0])
        )
    return Resolution.absent(
        VersionSource.SOURCE, constants.REASON_NO_VERSION, str(first_existing)
    )


def installed_search_path(
    installed: InstalledConfiguration,
    source: SourceConfiguration,
    search_path: Optional[Sequence[str]] = None,
) -> list[str]:
    """
    Return the search path used for the installed package lookup.

    Entries matching any excluded pattern (build output) and the local source
    tree itself are removed, so that neither can shadow the installed copy.
    """
    entries = list(sys.path if search_path is None else search_path)
    patterns = installed.compiled_patterns()
    source_dir = source.source_directory.resolve()

    kept = []
    for entry in entries:
        if any(pattern.search(entry) for pattern in patterns):
            logger.debug("Excluding %s from search path", entry)
            continue
        if Path(entry or ".").resolve() == source_dir:
            logger.debug("Excluding local source tree %s from search path", entry)
            continue
        kept.append(entry)
    return kept


def resolve_installed(
    name: str,
    config: Optional[Configuration] = None,
    search_path: Optional[Sequence[str]] = None,
) -> Resolution:
    """
    Get the version of the installed copy of a module.

    The version is read from the installed distribution metadata; the module
    itself is never imported, so no code of the package gets executed.

    Parameters:
        name (str): Module reference; the full dotted name and then its top
        level package are tried as distribution names.
        config (Optional[Configuration]): Configuration to use instead of the
        global one.
        search_path (Optional[Sequence[str]]): Search path to use instead of
        sys.path, before exclusions are applied.

    Returns:
        Resolution: The installed version or an absence result.
    """
    cfg = config or configuration.configuration
    try:
        candidates = distribution_candidates(name)
    except ValueError:
        return Resolution.absent(
            VersionSource.INSTALLED, constants.REASON_INVALID_MODULE_NAME
        )

    try:
        path = installed_search_path(cfg.installed, cfg.source, search_path)
        for candidate in candidates:
            dist = next(iter(metadata.distributions(name=candidate, path=path)), None)
            if dist is None:
                continue
            location = str(dist.locate_file(""))
            declared = dist.metadata.get("Version")
            logger.debug("Found installed %s %s in %s", candidate, declared, location)
            if not declared:
                return Resolution.absent(
                    VersionSource.INSTALLED, constants.REASON_NO_VERSION, location
                )
            return _to_resolution(VersionSource.INSTALLED, declared, location)
    except (OSError, ValueError) as e:
        logger.warning("Installed version lookup of %s failed: %s", name, e)
        return Resolution.absent(
            VersionSource.INSTALLED, f"{constants.REASON_LOOKUP_FAILED}: {e}"
        )

    return Resolution.absent(VersionSource.INSTALLED, constants.REASON_NOT_INSTALLED)


def resolve_from_registry(
    name: str,
    config: Optional[Configuration] = None,
    session: Optional[requests.Session] = None,
) -> Resolution:
    """
    Get the current published version of a module from the package registry.

    The PyPI JSON API is queried once per distribution candidate; there are
    no retries. The call blocks for at most the configured timeout per
    request.

    Parameters:
        name (str): Module reference.
        config (Optional[Configuration]): Configuration to use instead of the
        global one.
        session (Optional[requests.Session]): HTTP session to reuse.

    Returns:
        Resolution: The published version, or an absence result when the
        package is not on the registry or the lookup failed.
    """
    registry = (config or configuration.configuration).registry
    try:
        candidates = distribution_candidates(name)
    except ValueError:
        return Resolution.absent(
            VersionSource.REGISTRY, constants.REASON_INVALID_MODULE_NAME
        )

    get = session.get if session is not None else requests.get
    for candidate in candidates:
        url = registry.project_url(candidate)
        logger.debug("Querying %s for %s", registry.name, url)
        try:
            response = get(
                url,
                timeout=registry.timeout,
                headers={"Accept": "application/json"},
            )
            if response.status_code == 404:
                logger.debug("%s is not on %s", candidate, registry.name)
                continue
            response.raise_for_status()
            declared = response.json()["info"]["version"]
        except (
            requests.exceptions.RequestException,
            ValueError,
            KeyError,
            TypeError,
        ) as e:
            logger.warning("%s lookup of %s failed: %s", registry.name, candidate, e)
            return Resolution.absent(
                VersionSource.REGISTRY, f"{constants.REASON_LOOKUP_FAILED}: {e}", url
            )

        if not declared:
            return Resolution.absent(
                VersionSource.REGISTRY, constants.REASON_NO_VERSION, url
            )
        return _to_resolution(VersionSource.REGISTRY, str(declared), url)

    return Resolution.absent(VersionSource.REGISTRY, constants.REASON_NOT_ON_REGISTRY)
