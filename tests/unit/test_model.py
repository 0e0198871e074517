# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
import dataclasses

import pytest

from depparse.arbiter import InMemoryRuleRegistry
from depparse.model import Dependency, DependencyError


@pytest.mark.parametrize(
    ("group", "artifact", "version"),
    [("", "a", "1"), ("g", " ", "1"), ("g", "a", "")],
)
def test_mod_001_missing_required_field_raises(
    group: str, artifact: str, version: str
) -> None:
    with pytest.raises(DependencyError):
        Dependency(group=group, artifact=artifact, version=version)


def test_mod_002_dependency_is_immutable() -> None:
    dep = Dependency(group="g", artifact="a", version="1")

    with pytest.raises(dataclasses.FrozenInstanceError):
        dep.version = "2"  # type: ignore[misc]


def test_mod_003_blank_scope_and_classifier_are_normalized() -> None:
    dep = Dependency.from_fields(
        "g:a:1", group="g", artifact="a", version="1", scope="", classifier=""
    )

    assert dep.scope == "compile"
    assert dep.classifier is None
    assert dep.source_line == "g:a:1"


def test_mod_004_coordinates_include_classifier() -> None:
    plain = Dependency(group="g", artifact="a", version="1")
    classified = Dependency(
        group="io.netty", artifact="epoll", version="4.1", classifier="linux"
    )

    assert plain.coordinates == "g:a:1"
    assert classified.coordinates == "io.netty:epoll:linux:4.1"
    assert str(classified) == "io.netty:epoll:linux:4.1 (compile)"


def test_mod_005_in_memory_registry_assigns_sequential_ids() -> None:
    registry = InMemoryRuleRegistry()

    first = registry.register_rule(" exclude com.foo:bar")
    second = registry.register_rule(" pin com.foo:baz:1.0")

    assert (first.rule_id, second.rule_id) == (1, 2)
    assert [rule.body for rule in registry.rules] == [
        " exclude com.foo:bar",
        " pin com.foo:baz:1.0",
    ]
    assert str(first) == "rule#1:exclude com.foo:bar"


def test_mod_006_from_fields_takes_coordinates_by_keyword_only() -> None:
    with pytest.raises(TypeError):
        Dependency.from_fields("l", "g", "a", "compile", "1.0")  # type: ignore[misc]

    dep = Dependency.from_fields(
        "l", group="g", artifact="a", scope="test", version="1.0"
    )

    assert (dep.version, dep.scope) == ("1.0", "test")
