# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Arbiter rule registry contracts."""

import logging
from dataclasses import dataclass
from typing import Protocol

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ArbiterRule:
    """Represent one registered arbiter rule.

    Attributes:
        rule_id: Registry-assigned identifier, starting at 1.
        body: Rule text following the ``# RULE`` marker.
    """

    rule_id: int
    body: str

    def __str__(self) -> str:
        return f"rule#{self.rule_id}:{self.body.strip()}"


class RuleRegistry(Protocol):
    """Define rule registration for a dependency arbiter."""

    def register_rule(self, rule_body: str) -> ArbiterRule:
        """Register one rule body.

        Args:
            rule_body: Text after the rule marker, separator included.

        Returns:
            Handle describing the stored rule.
        """


class InMemoryRuleRegistry:
    """Store arbiter rules in registration order.

    Rules are kept verbatim; resolving conflicts between dependency versions
    is left to the arbiter consuming them.
    """

    def __init__(self) -> None:
        self._rules: list[ArbiterRule] = []

    def register_rule(self, rule_body: str) -> ArbiterRule:
        rule = ArbiterRule(rule_id=len(self._rules) + 1, body=rule_body)
        self._rules.append(rule)
        logger.debug(f"Stored arbiter rule (rule_id={rule.rule_id})")
        return rule

    @property
    def rules(self) -> list[ArbiterRule]:
        """Return registered rules in registration order."""
        return list(self._rules)
