from __future__ import annotations

import logging
from typing import Mapping, Optional

from .packs import (
    COMPLIANCE_PACKS,
    DEFAULT_ENTITY_TYPES,
    CompliancePack,
    EntityType,
    IdentifierType,
)

logger = logging.getLogger(__name__)


def _norm(value: str) -> str:
    return value.strip().casefold().replace("_", " ")


class CompliancePackRegistry:
    """Country-specific identifier and entity-type lookups.

    Every lookup tolerates unknown countries and codes: it returns None, the
    default entity types, or the raw value, and never raises.
    """

    def __init__(self, packs: Optional[Mapping[str, CompliancePack]] = None) -> None:
        self._packs: dict[str, CompliancePack] = dict(
            packs if packs is not None else COMPLIANCE_PACKS
        )
        # Countries resolve by display name ("New Zealand") or pack id ("new_zealand")
        self._by_country: dict[str, CompliancePack] = {}
        for pack in self._packs.values():
            self._by_country[_norm(pack.country)] = pack
            self._by_country.setdefault(_norm(pack.id), pack)

    def get_by_country(self, country: Optional[str]) -> Optional[CompliancePack]:
        if not country:
            return None
        return self._by_country.get(_norm(country))

    def all_packs(self) -> list[CompliancePack]:
        return list(self._packs.values())

    def get_identifier_type(
        self, country: Optional[str], type_code: Optional[str]
    ) -> Optional[IdentifierType]:
        pack = self.get_by_country(country)
        if pack is None or not type_code:
            return None
        code = type_code.strip().upper()
        for identifier_type in pack.identifier_types:
            if identifier_type.abbreviation == code:
                return identifier_type
        return None

    lookup = get_identifier_type

    def identifier_label(self, country: Optional[str], type_code: str) -> str:
        identifier_type = self.get_identifier_type(country, type_code)
        return identifier_type.name if identifier_type is not None else type_code

    def validate_identifier(
        self, country: Optional[str], type_code: Optional[str], value: str
    ) -> bool:
        identifier_type = self.get_identifier_type(country, type_code)
        if identifier_type is None:
            return False
        return identifier_type.validate(value)

    def format_identifier(
        self, country: Optional[str], type_code: Optional[str], value: str
    ) -> str:
        identifier_type = self.get_identifier_type(country, type_code)
        if identifier_type is None:
            return value
        return identifier_type.format(value)

    def get_entity_types(self, country: Optional[str]) -> list[EntityType]:
        pack = self.get_by_country(country)
        if pack is None:
            return list(DEFAULT_ENTITY_TYPES)
        return list(pack.entity_types)

    def get_entity_type(
        self, country: Optional[str], type_id: str
    ) -> Optional[EntityType]:
        for entity_type in self.get_entity_types(country):
            if entity_type.id == type_id:
                return entity_type
        return None

    def get_entity_type_by_short_code(
        self, country: Optional[str], short_code: str
    ) -> Optional[EntityType]:
        for entity_type in self.get_entity_types(country):
            if entity_type.short_code == short_code:
                return entity_type
        return None

    def entity_type_label(self, country: Optional[str], code: str) -> str:
        """Entity type name by id or short code, else the raw code."""
        entity_type = self.get_entity_type(country, code) or (
            self.get_entity_type_by_short_code(country, code)
        )
        if entity_type is None:
            logger.debug("Unknown entity type %r for country %r", code, country)
            return code
        return entity_type.name


compliance_registry = CompliancePackRegistry()


def lookup(country: Optional[str], type_code: Optional[str]) -> Optional[IdentifierType]:
    """Identifier type for a country, or None when either is unknown."""
    return compliance_registry.get_identifier_type(country, type_code)
