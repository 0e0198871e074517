# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Classify raw text lines and extract dependencies from them.

Two line formats are recognized and may be mixed freely in one input:

* ``mvn dependency:list`` output::

      [INFO]    org.mockito:mockito-core:jar:1.10.19:test

* Bazel WORKSPACE ``maven_jar`` entries::

      artifact = "org.slf4j:slf4j-api:1.6.2",

Any other line is ignored. A line holds at most one dependency.
"""

import logging
from dataclasses import dataclass
from typing import Literal

from depparse.arbiter import ArbiterRule, RuleRegistry
from depparse.model import DEFAULT_SCOPE, Dependency, DependencyError

logger = logging.getLogger(__name__)

RULE_PREFIX = "# RULE"
COMMENT_PREFIX = "#"
INFO_PREFIX = "[INFO]"
ARTIFACT_PREFIX = "artifact ="
NOISE_SUBSTRINGS = ("Finished at", "Download")
NOISE_PREFIXES = ("[INFO] ---",)
FIELD_DELIMITER = ":"
MIN_FIELD_COUNT = 3

MAVEN_SCOPES = frozenset(
    {"compile", "provided", "runtime", "test", "system", "import"}
)

IgnoreReason = Literal["noise", "comment", "blank", "not_a_dependency"]
RejectReason = Literal["invalid_dependency", "ambiguous_layout"]


@dataclass(frozen=True)
class RuleRegistered:
    """Line carried an arbiter rule.

    ``handle`` is ``None`` when no registry was configured and the rule was
    dropped.
    """

    rule_body: str
    handle: ArbiterRule | None


@dataclass(frozen=True)
class Ignored:
    """Line holds no dependency."""

    reason: IgnoreReason


@dataclass(frozen=True)
class DependencyFound:
    """Line yielded one dependency."""

    dependency: Dependency


@dataclass(frozen=True)
class Rejected:
    """Line looked like a dependency but could not be turned into one."""

    reason: RejectReason
    raw_line: str


ClassificationOutcome = RuleRegistered | Ignored | DependencyFound | Rejected


def classify_line(
    raw_line: str,
    registry: RuleRegistry | None = None,
    strict_layout: bool = False,
) -> ClassificationOutcome:
    """Classify one raw line and extract its dependency, if any.

    Checks run in a fixed order and the first match wins: rule marker, log
    noise, comment, then dependency coordinates.

    Args:
        raw_line: Line as read from the input, untrimmed.
        registry: Optional arbiter registry receiving ``# RULE`` bodies.
        strict_layout: Reject five-part dependency-list lines whose last
            field is not a Maven scope instead of only warning about them.

    Returns:
        The classification outcome for the line.
    """
    parsed_line = raw_line.strip()

    if parsed_line.startswith(RULE_PREFIX):
        return _register_rule(parsed_line[len(RULE_PREFIX) :], registry)

    # dependency:list emits log lines with enough colons to pass as coordinates
    if _is_noise(parsed_line):
        logger.debug(f"Ignoring build log line (line={parsed_line!r})")
        return Ignored(reason="noise")

    if parsed_line.startswith(COMMENT_PREFIX):
        logger.debug(f"Ignoring comment line (line={parsed_line!r})")
        return Ignored(reason="comment")

    if parsed_line.startswith(INFO_PREFIX):
        parsed_line = parsed_line[len(INFO_PREFIX) :]

    parsed_line = parsed_line.replace('"', "").replace(",", "")
    is_dependency_list_format = True
    if parsed_line.startswith(ARTIFACT_PREFIX):
        is_dependency_list_format = False
        parsed_line = parsed_line[len(ARTIFACT_PREFIX) :]

    parsed_line = parsed_line.strip()
    if not parsed_line:
        return Ignored(reason="blank")

    parts = split_fields(parsed_line)
    if len(parts) < MIN_FIELD_COUNT:
        return Ignored(reason="not_a_dependency")

    group, artifact, version = parts[0], parts[1], parts[2]
    scope = DEFAULT_SCOPE
    classifier: str | None = None

    if len(parts) == 5:
        if is_dependency_list_format:
            # group:artifact:type:version:scope
            version, scope = parts[3], parts[4]
            if _scope_token(scope) not in MAVEN_SCOPES:
                if strict_layout:
                    logger.warning(
                        f"Rejecting line with unrecognized scope (scope={scope} line={raw_line!r})"
                    )
                    return Rejected(reason="ambiguous_layout", raw_line=raw_line)
                logger.warning(
                    f"Five-part line has an unrecognized scope; parsed as group:artifact:type:version:scope (scope={scope} line={raw_line!r})"
                )
        else:
            # group:artifact:type:classifier:version
            classifier, version = parts[3], parts[4]
    elif len(parts) == 6:
        # group:artifact:type:classifier:version:scope
        classifier, version, scope = parts[3], parts[4], parts[5]

    try:
        dependency = Dependency.from_fields(
            source_line=raw_line,
            group=group,
            artifact=artifact,
            version=version,
            scope=scope,
            classifier=classifier,
        )
    except DependencyError as exc:
        logger.warning(
            f"Line has colons but is not a dependency; ignoring (line={raw_line!r} error={exc})"
        )
        return Rejected(reason="invalid_dependency", raw_line=raw_line)

    logger.info(f"Added dependency (dependency={dependency})")
    return DependencyFound(dependency=dependency)


def split_fields(text: str) -> list[str]:
    """Split coordinates on colons, dropping trailing empty fields.

    Args:
        text: Cleaned coordinate text.

    Returns:
        Field list; ``"a:b:c:"`` yields three fields.
    """
    parts = text.split(FIELD_DELIMITER)
    while parts and not parts[-1]:
        parts.pop()
    return parts


def _scope_token(scope: str) -> str:
    # dependency:list may annotate the scope, e.g. "compile (optional)"
    tokens = scope.split()
    return tokens[0] if tokens else ""


def _is_noise(line: str) -> bool:
    return any(marker in line for marker in NOISE_SUBSTRINGS) or line.startswith(
        NOISE_PREFIXES
    )


def _register_rule(
    rule_body: str, registry: RuleRegistry | None
) -> RuleRegistered:
    if registry is None:
        logger.warning(
            f"Found an arbiter rule but no arbiter is configured; dropping it (rule={rule_body.strip()})"
        )
        return RuleRegistered(rule_body=rule_body, handle=None)
    handle = registry.register_rule(rule_body)
    logger.info(f"Added arbiter rule (rule={handle})")
    return RuleRegistered(rule_body=rule_body, handle=handle)
