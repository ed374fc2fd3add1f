"""
RulesAware — the contract of a configuration entity that can be referred to.

A target entity declares the actions and caller types its directives may
mention, exposes its own rule set, and answers "may this caller refer to me?"
without consulting anything but its own rules.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from refguard.core.constants import REFER
from refguard.core.exceptions import DirectiveViolation
from refguard.core.rules.entities import EntityTypeRegistry, SupportedEntity
from refguard.core.rules.evaluator import ReferenceDecision, decide
from refguard.core.rules.model import Query, RuleSet
from refguard.core.rules.validation import validate_directives


class RulesAware(ABC):
    @abstractmethod
    def allowed_actions(self) -> frozenset[str]:
        """Actions this entity kind recognises in its own directives."""

    @abstractmethod
    def allowed_types(self) -> frozenset[str]:
        """Caller entity-type tags this entity kind's directives may name."""

    @abstractmethod
    def get_rules(self) -> RuleSet:
        """This entity's rule set; empty when no rules were configured."""

    def check_reference(
        self,
        entity_type: SupportedEntity | str,
        resource: str,
        action: str = REFER,
    ) -> ReferenceDecision:
        """Evaluate a reference and return the full decision, including the matched directive."""
        query = Query(action=action, entity_type=str(entity_type), resource=str(resource))
        return decide(self.get_rules(), query)

    def can_refer(self, entity_type: SupportedEntity | str, resource: str) -> bool:
        """Return True if an entity of ``entity_type`` named ``resource`` may refer to this one."""
        return self.check_reference(entity_type, resource).allowed

    def can_refer_as(
        self, descriptor: str | SupportedEntity, resource: str, registry: EntityTypeRegistry
    ) -> bool:
        """Like :meth:`can_refer`, resolving a caller descriptor through ``registry`` first.

        An unregistered descriptor resolves to ``unknown``, which only a ``*``
        type directive can match.
        """
        return self.can_refer(registry.resolve(descriptor), resource)

    def rules_errors(self, entity_kind: str, entity_id: str) -> list[DirectiveViolation]:
        """Validate this entity's directives against its own vocabulary."""
        return validate_directives(
            self.get_rules(),
            self.allowed_actions(),
            self.allowed_types(),
            entity_kind=entity_kind,
            entity_id=entity_id,
        )
