from .identifiers import (
    NOT_SPECIFIED,
    format_abn,
    format_acn,
    format_nzbn,
    validate_abn,
    validate_acn,
    validate_nzbn,
)
from .packs import (
    AUSTRALIA,
    COMPLIANCE_PACKS,
    DEFAULT_ENTITY_TYPES,
    NEW_ZEALAND,
    CompliancePack,
    EntityType,
    EntityTypeCategory,
    IdentifierType,
)
from .registry import CompliancePackRegistry, compliance_registry, lookup

__all__ = [
    "AUSTRALIA",
    "COMPLIANCE_PACKS",
    "DEFAULT_ENTITY_TYPES",
    "NEW_ZEALAND",
    "NOT_SPECIFIED",
    "CompliancePack",
    "CompliancePackRegistry",
    "EntityType",
    "EntityTypeCategory",
    "IdentifierType",
    "compliance_registry",
    "format_abn",
    "format_acn",
    "format_nzbn",
    "lookup",
    "validate_abn",
    "validate_acn",
    "validate_nzbn",
]
