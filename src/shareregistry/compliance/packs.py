from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable

from .identifiers import (
    format_abn,
    format_acn,
    format_nzbn,
    validate_abn,
    validate_acn,
    validate_nzbn,
)


class EntityTypeCategory(str, Enum):
    COMPANY = "COMPANY"
    PARTNERSHIP = "PARTNERSHIP"
    TRUST = "TRUST"
    OTHER = "OTHER"


@dataclass(frozen=True)
class EntityType:
    id: str
    short_code: str
    name: str
    category: EntityTypeCategory
    description: str | None = None


@dataclass(frozen=True)
class IdentifierType:
    abbreviation: str
    name: str
    description: str
    format_pattern: str
    placeholder: str
    validate: Callable[[str], bool]
    format: Callable[[str], str]


@dataclass(frozen=True)
class CompliancePack:
    id: str
    country: str
    name: str
    identifier_types: tuple[IdentifierType, ...]
    entity_types: tuple[EntityType, ...]


DEFAULT_ENTITY_TYPES: tuple[EntityType, ...] = (
    EntityType("default_company", "COMPANY", "Company", EntityTypeCategory.COMPANY),
    EntityType(
        "default_partnership", "PARTNERSHIP", "Partnership", EntityTypeCategory.PARTNERSHIP
    ),
    EntityType("default_trust", "TRUST", "Trust", EntityTypeCategory.TRUST),
    EntityType("default_other", "OTHER", "Other", EntityTypeCategory.OTHER),
)

# (short code, name, description stem) shared by both company law regimes
_COMPANY_TYPES = (
    ("LMGT_PROP", "Proprietary Company Limited by Guarantee", "A proprietary company limited by guarantee"),
    ("LMGT_PUBL", "Public Company Limited by Guarantee", "A public company limited by guarantee"),
    ("LMSG_PROP", "Proprietary Company Limited by Shares & Guarantee", "A proprietary company limited by both shares and guarantee"),
    ("LMSG_PUBL", "Public Company Limited by Shares & Guarantee", "A public company limited by both shares and guarantee"),
    ("LMSH_PROP", "Proprietary Company Limited by Shares", "A proprietary company limited by shares"),
    ("LMSH_PUBL", "Public Company Limited by Shares", "A public company limited by shares"),
    ("NLIA_PROP", "Proprietary Company with No Liability", "A proprietary no liability company"),
    ("NLIA_PUBL", "Public Company with No Liability", "A public no liability company"),
    ("UNLM_PROP", "Proprietary Company with Unlimited Liability", "A proprietary unlimited company"),
    ("UNLM_PUBL", "Public Company with Unlimited Liability", "A public unlimited company"),
)

_AU_TYPE_IDS = (
    "er5jloe6qnqhej7hnjylfc4r",
    "wfny64gez4jjcaejpd582sw0",
    "xw20i3uwyrj6spownpj9gcfc",
    "owlxc9879ho2o2q78v2ts3m7",
    "rptlh9fl9ncd3rd5pwa4cwbt",
    "d2013bnn9cl0u3uqkkz1748c",
    "qs8qalirraskoi3ua8d5s3z9",
    "aza2hg3z9pckgcfgas7xy50r",
    "dx6wudorqw7xyb65f4da2wl8",
    "dj12i0ncek113n6cm94mef89",
)

_NZ_TYPE_IDS = (
    "r1osdga1e2twxr2hoiu014hf",
    "noybk2mvgisthv2fuwjoncc4",
    "nkn5gu8fyve74gbul2q6pqc0",
    "qrd9i87vlz8yox3tuqbtrq87",
    "jw083ub2061h453kq1jl058t",
    "rhh1g8soumrmiraxvqhit0va",
    "sj2a4e4buu0sxsq6bw3g2h61",
    "s58zqdjzvbsadbfe8q60ggdv",
    "hg1yjl4nbncvmhc3sf1wp6w1",
    "n5zmsmuz36ztb55sdk48f0ee",
)


def _company_types(ids: tuple[str, ...], suffix: str) -> tuple[EntityType, ...]:
    return tuple(
        EntityType(
            id=type_id,
            short_code=code,
            name=name,
            category=EntityTypeCategory.COMPANY,
            description=f"{stem}{suffix}",
        )
        for type_id, (code, name, stem) in zip(ids, _COMPANY_TYPES)
    )


AUSTRALIA = CompliancePack(
    id="australia",
    country="Australia",
    name="Australia Compliance Pack",
    identifier_types=(
        IdentifierType(
            abbreviation="ACN",
            name="Australian Company Number",
            description="A unique 9-digit identifier for companies registered with ASIC",
            format_pattern="XXX XXX XXX",
            placeholder="123 456 789",
            validate=validate_acn,
            format=format_acn,
        ),
        IdentifierType(
            abbreviation="ABN",
            name="Australian Business Number",
            description=(
                "A unique 11-digit identifier for all entities registered in the "
                "Australian Business Register"
            ),
            format_pattern="XX XXX XXX XXX",
            placeholder="12 345 678 901",
            validate=validate_abn,
            format=format_abn,
        ),
    ),
    entity_types=_company_types(_AU_TYPE_IDS, " under the Corporations Act 2001"),
)

NEW_ZEALAND = CompliancePack(
    id="new_zealand",
    country="New Zealand",
    name="New Zealand Compliance Pack",
    identifier_types=(
        IdentifierType(
            abbreviation="NZBN",
            name="New Zealand Business Number",
            description=(
                "A unique 13-digit identifier for entities registered with the "
                "New Zealand Business Register"
            ),
            format_pattern="XXXXXXXXXXXXX",
            placeholder="1234567891234",
            validate=validate_nzbn,
            format=format_nzbn,
        ),
    ),
    entity_types=_company_types(_NZ_TYPE_IDS, ""),
)

COMPLIANCE_PACKS: dict[str, CompliancePack] = {
    AUSTRALIA.id: AUSTRALIA,
    NEW_ZEALAND.id: NEW_ZEALAND,
}
