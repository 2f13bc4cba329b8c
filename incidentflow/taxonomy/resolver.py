"""
Taxonomy resolution for IncidentFlow.

The resolvers validate configured taxonomy collections and answer lookups
against them. Two kinds of lookup exist:

    - Strict: ``find_by_id`` returns a copy of the entry or None, so
      callers such as the LLM analysis collaborator can reject IDs that
      are not configured.
    - Lenient: ``find_by_id_with_fallback`` always returns an entry,
      synthesizing a placeholder when the ID is unknown. This is used for
      display, since incidents may reference entries that were removed
      from configuration after the incident was recorded.

Lookups never hand out the stored objects; every result is a copy.
"""

import copy
import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any, Protocol, TypeVar

from incidentflow.exceptions import TaxonomyError, ValidationError
from incidentflow.models.identifiers import AssetID
from incidentflow.taxonomy.models import UNKNOWN_ID, Asset, Category, Severity

logger = logging.getLogger("incidentflow.taxonomy.resolver")


class _Entry(Protocol):
    id: str

    def validate(self) -> None: ...


E = TypeVar("E", bound=_Entry)


def _validate_entries(entries: Sequence[_Entry], kind: str) -> set[str]:
    """
    Validate each entry and reject duplicate IDs.

    Returns:
        The set of IDs seen.

    Raises:
        TaxonomyError: On the first invalid or duplicate entry.
    """
    seen: set[str] = set()
    for index, entry in enumerate(entries):
        try:
            entry.validate()
        except TaxonomyError as e:
            raise TaxonomyError(
                f"invalid {kind} at index {index}: {e.message}",
                details={"index": index, "id": entry.id, **e.details},
            ) from e

        if entry.id in seen:
            raise TaxonomyError(f"duplicate {kind} ID", details={"id": entry.id})
        seen.add(entry.id)
    return seen


def _find(entries: Iterable[E], entry_id: str) -> E | None:
    for entry in entries:
        if entry.id == entry_id:
            return copy.deepcopy(entry)
    return None


@dataclass
class CategoriesConfig:
    """
    Configured incident categories.

    A valid configuration always contains a category with ID "unknown";
    collaborators rely on it as the deterministic default when a
    category cannot be determined.
    """

    categories: list[Category] = field(default_factory=list)

    def validate(self) -> None:
        """
        Validate the category collection.

        Raises:
            TaxonomyError: If the collection is empty, an entry is invalid,
                an ID is duplicated, or the "unknown" category is missing.
        """
        if not self.categories:
            raise TaxonomyError("at least one category is required")

        ids = _validate_entries(self.categories, "category")

        if UNKNOWN_ID not in ids:
            raise TaxonomyError(
                f"'{UNKNOWN_ID}' category is required",
                details={"ids": sorted(ids)},
            )

    def find_by_id(self, category_id: str) -> Category | None:
        """Return a copy of the category with the given ID, or None."""
        return _find(self.categories, category_id)

    def is_valid_id(self, category_id: str) -> bool:
        """Check if the category ID is configured."""
        return self.find_by_id(category_id) is not None

    def find_by_id_with_fallback(self, category_id: str) -> Category:
        """
        Return the category with the given ID or a display placeholder.

        The placeholder keeps the requested ID so the reference stays
        visible. It is synthesized even when no "unknown" category is
        configured.
        """
        category = self.find_by_id(category_id)
        if category is not None:
            return category

        logger.debug(f"Category not configured, using placeholder: {category_id!r}")
        return Category(
            id=category_id,
            name=f"Unknown Category (ID: {category_id})",
            description="This category does not exist in current configuration",
        )


@dataclass
class SeveritiesConfig:
    """Configured severity levels."""

    severities: list[Severity] = field(default_factory=list)

    def validate(self) -> None:
        """
        Validate the severity collection.

        Raises:
            TaxonomyError: If the collection is empty, an entry is invalid
                (including levels outside 0-99), or an ID is duplicated.
        """
        if not self.severities:
            raise TaxonomyError("at least one severity is required")

        _validate_entries(self.severities, "severity")

    def find_by_id(self, severity_id: str) -> Severity | None:
        """Return a copy of the severity with the given ID, or None."""
        return _find(self.severities, severity_id)

    def is_valid_id(self, severity_id: str) -> bool:
        """Check if the severity ID is configured."""
        return self.find_by_id(severity_id) is not None

    def find_by_id_with_fallback(self, severity_id: str) -> Severity:
        """
        Return the severity with the given ID or the unknown severity.

        Empty and unresolved IDs both map to the configured "unknown"
        severity when there is one, and to a synthesized severity with
        level -1 otherwise.
        """
        if severity_id:
            severity = self.find_by_id(severity_id)
            if severity is not None:
                return severity
            logger.debug(f"Severity not configured, using unknown: {severity_id!r}")

        unknown = self.find_by_id(UNKNOWN_ID)
        if unknown is not None:
            return unknown
        return Severity.unknown()


@dataclass
class AssetsConfig:
    """Configured assets. Unlike categories, no sentinel entry is required."""

    assets: list[Asset] = field(default_factory=list)

    def validate(self) -> None:
        """
        Validate the asset collection.

        Raises:
            TaxonomyError: If an entry is invalid or an ID is duplicated.
        """
        _validate_entries(self.assets, "asset")

    def find_by_id(self, asset_id: str) -> Asset | None:
        """Return a copy of the asset with the given ID, or None."""
        return _find(self.assets, asset_id)

    def find_by_ids(self, asset_ids: Iterable[str]) -> list[Asset]:
        """
        Return copies of the assets that resolve, in request order.

        IDs that are not configured are skipped.
        """
        result = []
        for asset_id in asset_ids:
            asset = self.find_by_id(asset_id)
            if asset is not None:
                result.append(asset)
        return result

    def is_valid_id(self, asset_id: str) -> bool:
        """Check if the asset ID is configured."""
        return self.find_by_id(asset_id) is not None

    def validate_ids(self, asset_ids: Iterable[str]) -> None:
        """
        Check that every asset ID is configured.

        Raises:
            ValidationError: Listing every ID that does not resolve.
        """
        invalid = [asset_id for asset_id in asset_ids if not self.is_valid_id(asset_id)]
        if invalid:
            raise ValidationError(
                f"invalid asset ID(s): {', '.join(invalid)}",
                details={"invalid_ids": invalid},
            )

    def find_by_id_with_fallback(self, asset_id: str) -> Asset:
        """Return the asset with the given ID or a display placeholder."""
        asset = self.find_by_id(asset_id)
        if asset is not None:
            return asset
        return Asset(
            id=AssetID(asset_id),
            name="Unknown Asset",
            description="This asset does not exist in current configuration",
        )


@dataclass
class TaxonomyConfig:
    """
    The site taxonomy: categories, severities and assets.

    Categories are mandatory. Severities and assets are optional and only
    validated when present, so older configurations that predate them
    remain loadable.

    Example:
        Building from parsed YAML::

            taxonomy = TaxonomyConfig.from_dict(yaml.safe_load(text))
            taxonomy.validate()
            label = taxonomy.find_category_by_id_with_fallback("db").name
    """

    categories: list[Category] = field(default_factory=list)
    severities: list[Severity] = field(default_factory=list)
    assets: list[Asset] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TaxonomyConfig":
        """
        Create a taxonomy from plain data.

        Args:
            data: Mapping with optional "categories", "severities" and
                "assets" lists of entry mappings.

        Raises:
            TaxonomyError: If a section is not a list of mappings.
        """
        return cls(
            categories=[Category.from_dict(d) for d in _section(data, "categories")],
            severities=[Severity.from_dict(d) for d in _section(data, "severities")],
            assets=[Asset.from_dict(d) for d in _section(data, "assets")],
        )

    def validate(self) -> None:
        """
        Validate the whole taxonomy.

        Raises:
            TaxonomyError: Naming the failing section.
        """
        sections: list[tuple[str, Any]] = [("categories", self.categories_config())]
        if self.severities:
            sections.append(("severities", self.severities_config()))
        if self.assets:
            sections.append(("assets", self.assets_config()))

        for name, section in sections:
            try:
                section.validate()
            except TaxonomyError as e:
                raise TaxonomyError(
                    f"invalid {name}: {e.message}",
                    details={"section": name, **e.details},
                ) from e

    def categories_config(self) -> CategoriesConfig:
        """Return a category resolver over this taxonomy."""
        return CategoriesConfig(categories=self.categories)

    def severities_config(self) -> SeveritiesConfig:
        """Return a severity resolver over this taxonomy."""
        return SeveritiesConfig(severities=self.severities)

    def assets_config(self) -> AssetsConfig:
        """Return an asset resolver over this taxonomy."""
        return AssetsConfig(assets=self.assets)

    def find_category_by_id(self, category_id: str) -> Category | None:
        return self.categories_config().find_by_id(category_id)

    def find_category_by_id_with_fallback(self, category_id: str) -> Category:
        return self.categories_config().find_by_id_with_fallback(category_id)

    def is_valid_category_id(self, category_id: str) -> bool:
        return self.categories_config().is_valid_id(category_id)

    def find_severity_by_id(self, severity_id: str) -> Severity | None:
        return self.severities_config().find_by_id(severity_id)

    def find_severity_by_id_with_fallback(self, severity_id: str) -> Severity:
        return self.severities_config().find_by_id_with_fallback(severity_id)

    def is_valid_severity_id(self, severity_id: str) -> bool:
        return self.severities_config().is_valid_id(severity_id)

    def find_asset_by_id(self, asset_id: str) -> Asset | None:
        return self.assets_config().find_by_id(asset_id)

    def find_assets_by_ids(self, asset_ids: Iterable[str]) -> list[Asset]:
        return self.assets_config().find_by_ids(asset_ids)

    def find_asset_by_id_with_fallback(self, asset_id: str) -> Asset:
        return self.assets_config().find_by_id_with_fallback(asset_id)

    def is_valid_asset_id(self, asset_id: str) -> bool:
        return self.assets_config().is_valid_id(asset_id)

    def validate_asset_ids(self, asset_ids: Iterable[str]) -> None:
        self.assets_config().validate_ids(asset_ids)

    def to_dict(self) -> dict[str, Any]:
        """Convert the taxonomy to plain data."""
        return {
            "categories": [c.to_dict() for c in self.categories],
            "severities": [s.to_dict() for s in self.severities],
            "assets": [a.to_dict() for a in self.assets],
        }


def _section(data: dict[str, Any], name: str) -> list[dict[str, Any]]:
    entries = data.get(name) or []
    if not isinstance(entries, list) or not all(isinstance(e, dict) for e in entries):
        raise TaxonomyError(
            f"'{name}' must be a list of mappings",
            details={"section": name},
        )
    return entries
