"""Model with greater-version configuration."""

import re
from pathlib import Path
from typing import Optional, Pattern

from pydantic import (
    AnyHttpUrl,
    BaseModel,
    ConfigDict,
    DirectoryPath,
    Field,
    PositiveInt,
    model_validator,
)
from typing_extensions import Self

from greater_version import constants


class ConfigurationBase(BaseModel):
    """Base class for all configuration models that rejects unknown fields."""

    model_config = ConfigDict(extra="forbid")


class SourceConfiguration(ConfigurationBase):
    """Local source tree configuration.

    A module reference such as `pkg.module` is looked up as
    `<project_root>/<source_root>/pkg/module<extension>`. The declared version
    is extracted from that file textually, the file is never imported.
    """

    project_root: Optional[DirectoryPath] = Field(
        None,
        title="Project root",
        description="Directory containing the local source tree. When not set, "
        "the current working directory at the time of the check is used.",
    )

    source_root: str = Field(
        constants.DEFAULT_SOURCE_ROOT,
        title="Source root",
        description="Directory, relative to the project root, with the module sources.",
    )

    extension: str = Field(
        constants.DEFAULT_SOURCE_EXTENSION,
        title="Source file extension",
        description="Extension appended to the module path.",
    )

    version_identifiers: list[str] = Field(
        default_factory=lambda: list(constants.DEFAULT_VERSION_IDENTIFIERS),
        title="Version identifiers",
        description="Names of module-level assignments that declare the version, "
        "in order of preference.",
    )

    @model_validator(mode="after")
    def check_source_configuration(self) -> Self:
        """Check source tree configuration."""
        if not self.extension.startswith("."):
            raise ValueError(
                f"Source file extension must start with a dot, got '{self.extension}'"
            )
        if not self.version_identifiers:
            raise ValueError("At least one version identifier must be configured")
        for identifier in self.version_identifiers:
            if not identifier.isidentifier():
                raise ValueError(
                    f"Version identifier '{identifier}' is not a valid Python identifier"
                )
        return self

    def resolve_project_root(self) -> Path:
        """Return the configured project root or the current working directory."""
        if self.project_root is not None:
            return self.project_root
        return Path.cwd()

    @property
    def source_directory(self) -> Path:
        """Return the absolute path of the local source tree."""
        return self.resolve_project_root() / self.source_root


class InstalledConfiguration(ConfigurationBase):
    """Installed package lookup configuration."""

    excluded_path_patterns: list[str] = Field(
        default_factory=lambda: list(constants.DEFAULT_EXCLUDED_PATH_PATTERNS),
        title="Excluded path patterns",
        description="Regular expressions; search path entries matching any of them "
        "are skipped when looking for the installed package, so that build output "
        "sitting next to the sources cannot shadow the installed copy.",
    )

    @model_validator(mode="after")
    def check_installed_configuration(self) -> Self:
        """Check that all exclusion patterns are valid regular expressions."""
        for pattern in self.excluded_path_patterns:
            try:
                re.compile(pattern)
            except re.error as e:
                raise ValueError(
                    f"Invalid excluded path pattern '{pattern}': {e}"
                ) from e
        return self

    def compiled_patterns(self) -> list[Pattern[str]]:
        """Return the exclusion patterns compiled."""
        return [re.compile(pattern) for pattern in self.excluded_path_patterns]


class RegistryConfiguration(ConfigurationBase):
    """Package registry configuration.

    The registry has to provide the PyPI JSON API, i.e. answer
    `GET <url>/<distribution>/json` with a document containing
    `info.version`.

    Useful resources:

      - [PyPI JSON API](https://docs.pypi.org/api/json/)
    """

    name: str = Field(
        constants.DEFAULT_REGISTRY_NAME,
        title="Registry name",
        description="Human readable registry name used in assertion messages.",
    )

    url: AnyHttpUrl = Field(
        constants.DEFAULT_REGISTRY_URL,
        validate_default=True,
        title="Registry URL",
        description="Base URL of the PyPI compatible JSON API.",
    )

    timeout: PositiveInt = Field(
        constants.DEFAULT_REGISTRY_TIMEOUT,
        title="Timeout",
        description="Timeout in seconds for a single registry request.",
    )

    def project_url(self, distribution: str) -> str:
        """Return the JSON API URL for the given distribution."""
        return f"{str(self.url).rstrip('/')}/{distribution}/json"


class Configuration(ConfigurationBase):
    """Global greater-version configuration."""

    source: SourceConfiguration = Field(
        default_factory=SourceConfiguration,
        title="Local source tree configuration",
        description="Where the not-yet-installed module sources live.",
    )

    installed: InstalledConfiguration = Field(
        default_factory=InstalledConfiguration,
        title="Installed package configuration",
        description="How the installed copy of the package is looked up.",
    )

    registry: RegistryConfiguration = Field(
        default_factory=RegistryConfiguration,
        title="Registry configuration",
        description="Public package registry to compare against.",
    )

    def dump(self, filename: str = "configuration.json") -> None:
        """Dump actual configuration into JSON file."""
        with open(filename, "w", encoding="utf-8") as fout:
            fout.write(self.model_dump_json(indent=4))
