"""Bundle manifest and validation result models.

Defines the data models for the packaging engine:
- FileEntry: One packaged file (path, offset, length, hash)
- BundleManifest: The meta.cb document
- ValidationResult: Errors / warnings / infos from a validation pass
- BundleVerificationResult: ValidationResult plus hash-check counters

Wire names of the manifest are a contract with the game client and are
reproduced exactly through field aliases.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from arcbundle.core.bundle.errors import ManifestParseError

DETAIL_PATHS: tuple[str, ...] = ("songs/songlist", "songs/packlist", "songs/unlocks")
"""Root-relative paths of the three list files that carry HMAC details tags."""


class FileEntry(BaseModel):
    """One file of the packaged tree.

    Attributes:
        path: Root-relative, ``/``-separated path.
        byte_offset: Sum of the lengths of all preceding entries.
        length: Exact byte count of the file.
        sha256: Base64-encoded SHA-256 of the file contents.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    path: str = Field(min_length=1)
    byte_offset: int = Field(default=0, ge=0, alias="byteOffset")
    length: int = Field(default=0, ge=0)
    sha256: str = Field(default="", alias="sha256HashBase64Encoded")


class BundleManifest(BaseModel):
    """The meta.cb document.

    ``path_to_hash`` duplicates the hashes in ``added`` keyed by path, and
    ``path_to_details`` is restricted to :data:`DETAIL_PATHS`.
    """

    model_config = ConfigDict(populate_by_name=True)

    version_number: str = Field(default="", alias="versionNumber")
    previous_version_number: str | None = Field(default=None, alias="previousVersionNumber")
    application_version_number: str = Field(default="", alias="applicationVersionNumber")
    uuid: str = ""
    removed: list[str] = Field(default_factory=list)
    added: list[FileEntry] = Field(default_factory=list)
    path_to_hash: dict[str, str] = Field(default_factory=dict, alias="pathToHash")
    path_to_details: dict[str, str] = Field(default_factory=dict, alias="pathToDetails")

    def to_json(self, indent: int = 2) -> str:
        """Serialize with wire field names; ``previousVersionNumber`` is omitted when unset."""
        return self.model_dump_json(by_alias=True, exclude_none=True, indent=indent)

    @classmethod
    def from_json(cls, text: str | bytes) -> BundleManifest:
        """Parse a meta.cb document.

        Raises:
            ManifestParseError: If the text is not a valid manifest
        """
        try:
            return cls.model_validate_json(text)
        except ValidationError as e:
            raise ManifestParseError(f"Invalid meta.cb document: {e}") from e


class ValidationResult(BaseModel):
    """Outcome of a validation pass.

    Errors block downstream packaging; warnings and infos never do.
    """

    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    infos: list[str] = Field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return len(self.errors) > 0

    @property
    def has_warnings(self) -> bool:
        return len(self.warnings) > 0

    @property
    def has_infos(self) -> bool:
        return len(self.infos) > 0

    @property
    def is_valid(self) -> bool:
        return not self.has_errors

    def add_error(self, message: str) -> None:
        self.errors.append(message)

    def add_warning(self, message: str) -> None:
        self.warnings.append(message)

    def add_info(self, message: str) -> None:
        self.infos.append(message)

    def summary(self, limit: int = 5) -> str:
        """Render a human-readable report.

        Each category lists at most *limit* numbered entries followed by a
        count of the remainder.

        Args:
            limit: Maximum entries shown per category

        Returns:
            Multi-line summary text
        """
        lines: list[str] = []

        if self.has_errors:
            lines.extend(_section(f"Found {len(self.errors)} error(s):", self.errors, limit))
        else:
            lines.append("Validation passed, no errors found")

        if self.has_warnings:
            lines.extend(_section(f"Found {len(self.warnings)} warning(s):", self.warnings, limit))

        if self.has_infos:
            lines.extend(_section(f"{len(self.infos)} info message(s):", self.infos, limit))

        return "\n".join(lines)


class BundleVerificationResult(ValidationResult):
    """Validation result of a meta.cb check, with hash counters."""

    total_files: int = Field(default=0, ge=0)
    verified_files: int = Field(default=0, ge=0)
    mismatched_files: int = Field(default=0, ge=0)


def _section(header: str, items: list[str], limit: int) -> list[str]:
    lines = [header]
    lines.extend(f"{i}. {item}" for i, item in enumerate(items[:limit], start=1))
    if len(items) > limit:
        lines.append(f"... and {len(items) - limit} more")
    return lines
