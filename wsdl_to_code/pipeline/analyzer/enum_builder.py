"""
Enum spec builder.

Normalizes raw enumeration facets into named cases and infers the single
backing kind of the enumeration. Validation is done in two phases: every
case value is classified first, then the set is validated as a whole so
that a conflict is reported with all the values involved.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from ...utils import make_case_name
from ..config import CaseCollisionPolicy
from ..errors import DuplicateEnumCaseError, InvalidEnumValueError, MixedEnumBackingError
from .ir_nodes import BackingKind, EnumCaseDescriptor, EnumCaseSpec, EnumDescriptor

logger = logging.getLogger(__name__)


class EnumSpecBuilder:
    """Builds enum descriptors from raw enumeration facets."""

    def __init__(
        self,
        case_collision: CaseCollisionPolicy = CaseCollisionPolicy.ERROR,
        empty_case_name: str = "EMPTY",
    ):
        """
        Initialize the builder.

        Args:
            case_collision: How to handle distinct values producing the same case name
            empty_case_name: Case name used for empty enumeration values
        """
        self.case_collision = case_collision
        self.empty_case_name = empty_case_name

    def build_enum(
        self,
        namespace: str,
        name: str,
        raw_cases: Iterable[EnumCaseSpec | dict],
        doc: str | None = None,
    ) -> EnumDescriptor:
        """
        Build an enum descriptor.

        Args:
            namespace: Code namespace of the enum
            name: Name of the enum
            raw_cases: Case specs, or ``{"value": ..., "doc": ...}`` records
            doc: Optional description of the enum

        Returns:
            EnumDescriptor with cases in input order

        Raises:
            InvalidEnumValueError: If a value is neither a string, an int nor absent
            MixedEnumBackingError: If string and int values are mixed
            DuplicateEnumCaseError: If case names collide under CaseCollisionPolicy.ERROR
        """
        specs = [case if isinstance(case, EnumCaseSpec) else EnumCaseSpec.from_dict(case) for case in raw_cases]

        case_names = [self.case_name(spec.raw_value if spec.label is None else spec.label) for spec in specs]

        # Phase 1: classify every value
        kinds = [self._classify(name, spec.raw_value, index) for index, spec in enumerate(specs)]

        # Phase 2: validate the whole set
        backing_kind = self._infer_backing_kind(name, specs, kinds)
        case_names = self._resolve_collisions(name, specs, case_names)

        cases = tuple(
            EnumCaseDescriptor(
                case_name=case_name,
                value=self._case_value(name, spec.raw_value, index, backing_kind),
                doc=spec.doc,
            )
            for index, (case_name, spec) in enumerate(zip(case_names, specs))
        )

        logger.debug("Built %s-backed enum %s with %d cases", backing_kind.value, name, len(cases))
        return EnumDescriptor(
            namespace=namespace,
            name=name,
            backing_kind=backing_kind,
            cases=cases,
            doc=doc or None,
        )

    def case_name(self, raw_value: Any) -> str:
        """Derive the case name of a raw value."""
        if raw_value is None:
            return self.empty_case_name
        return make_case_name(str(raw_value)) or self.empty_case_name

    def _classify(self, enum_name: str, value: Any, index: int) -> BackingKind | None:
        """Classify one value; None means the case carries no value."""
        if value is None or value == "":
            return None
        # bool is an int subclass but not a valid backing value
        if isinstance(value, bool):
            raise InvalidEnumValueError(enum_name, value, index)
        if isinstance(value, int):
            return BackingKind.INTEGER
        if isinstance(value, str):
            return BackingKind.STRING
        raise InvalidEnumValueError(enum_name, value, index)

    def _infer_backing_kind(
        self,
        enum_name: str,
        specs: list[EnumCaseSpec],
        kinds: list[BackingKind | None],
    ) -> BackingKind:
        """Infer the backing kind from all classified values."""
        values_by_kind: dict[str, list[Any]] = {}
        for spec, kind in zip(specs, kinds):
            if kind is not None:
                values_by_kind.setdefault(kind.value, []).append(spec.raw_value)

        if BackingKind.STRING.value in values_by_kind and BackingKind.INTEGER.value in values_by_kind:
            raise MixedEnumBackingError(enum_name, values_by_kind)

        if BackingKind.INTEGER.value in values_by_kind:
            return BackingKind.INTEGER
        if BackingKind.STRING.value in values_by_kind:
            return BackingKind.STRING
        return BackingKind.UNIT

    def _case_value(self, enum_name: str, raw_value: Any, index: int, backing_kind: BackingKind) -> str | int | None:
        """Get the backed value of a case."""
        if backing_kind == BackingKind.UNIT:
            return None
        if raw_value is None or (raw_value == "" and backing_kind == BackingKind.INTEGER):
            raise InvalidEnumValueError(
                enum_name,
                raw_value,
                index,
                reason=f"case has no value in a {backing_kind.value}-backed enumeration",
            )
        return raw_value

    def _resolve_collisions(self, enum_name: str, specs: list[EnumCaseSpec], case_names: list[str]) -> list[str]:
        """Apply the collision policy to the derived case names."""
        if self.case_collision == CaseCollisionPolicy.SUFFIX:
            used: set[str] = set()
            resolved = []
            for case_name in case_names:
                candidate = case_name
                counter = 1
                while candidate in used:
                    counter += 1
                    candidate = f"{case_name}_{counter}"
                if candidate != case_name:
                    logger.info("Enum %s: renamed duplicate case %s to %s", enum_name, case_name, candidate)
                used.add(candidate)
                resolved.append(candidate)
            return resolved

        raw_values_by_name: dict[str, list[Any]] = {}
        for case_name, spec in zip(case_names, specs):
            raw_values_by_name.setdefault(case_name, []).append(spec.raw_value)
        for case_name, raw_values in raw_values_by_name.items():
            if len(raw_values) > 1:
                raise DuplicateEnumCaseError(enum_name, case_name, raw_values)
        return case_names
