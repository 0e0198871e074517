# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Domain model for parsed dependencies."""

from dataclasses import dataclass

DEFAULT_SCOPE = "compile"


class DependencyError(ValueError):
    """Represent a dependency that cannot be built from the derived fields."""


@dataclass(frozen=True)
class Dependency:
    """Represent one resolved Maven dependency.

    Attributes:
        group: Maven group id.
        artifact: Maven artifact id.
        version: Dependency version.
        scope: Maven scope; ``compile`` when the source line carries none.
        classifier: Optional artifact classifier.
        source_line: Verbatim input line the dependency was parsed from.
    """

    group: str
    artifact: str
    version: str
    scope: str = DEFAULT_SCOPE
    classifier: str | None = None
    source_line: str = ""

    def __post_init__(self) -> None:
        missing = [
            name
            for name in ("group", "artifact", "version")
            if not getattr(self, name).strip()
        ]
        if missing:
            raise DependencyError(
                f"Missing required dependency fields: {', '.join(missing)}"
            )
        if not self.scope.strip():
            object.__setattr__(self, "scope", DEFAULT_SCOPE)
        if self.classifier is not None and not self.classifier.strip():
            object.__setattr__(self, "classifier", None)

    @classmethod
    def from_fields(
        cls,
        source_line: str,
        *,
        group: str,
        artifact: str,
        version: str,
        scope: str = DEFAULT_SCOPE,
        classifier: str | None = None,
    ) -> "Dependency":
        """Build a dependency from parsed line fields.

        Args:
            source_line: Raw line the fields were derived from.
            group: Maven group id.
            artifact: Maven artifact id.
            version: Dependency version.
            scope: Maven scope.
            classifier: Optional classifier.

        Returns:
            Validated dependency.

        Raises:
            DependencyError: If group, artifact, or version is empty.
        """
        return cls(
            group=group,
            artifact=artifact,
            version=version,
            scope=scope,
            classifier=classifier,
            source_line=source_line,
        )

    @property
    def coordinates(self) -> str:
        """Return ``group:artifact[:classifier]:version``."""
        parts = [self.group, self.artifact]
        if self.classifier:
            parts.append(self.classifier)
        parts.append(self.version)
        return ":".join(parts)

    def __str__(self) -> str:
        return f"{self.coordinates} ({self.scope})"
