"""
Taxonomy entries for IncidentFlow.

Categories, severities and assets are defined per site in configuration
and referenced from incidents by ID. An incident may outlive the entry it
references, so lookups go through the resolvers in
``incidentflow.taxonomy.resolver`` which know how to fall back.
"""

from dataclasses import dataclass, field
from typing import Any

from incidentflow.exceptions import TaxonomyError
from incidentflow.models.base import model_to_dict
from incidentflow.models.identifiers import AssetID, SeverityID

UNKNOWN_ID = "unknown"

MIN_SEVERITY_LEVEL = 0
MAX_SEVERITY_LEVEL = 99

# Reserved for the synthesized fallback severity; never valid in configuration.
UNKNOWN_SEVERITY_LEVEL = -1


@dataclass
class Category:
    """
    An incident category.

    Attributes:
        id: Unique identifier (e.g. "security_incident").
        name: Display name.
        description: Help text shown when picking a category.
        invite_users: User IDs or @usernames to invite into the incident
            channel. Consumed by the invitation collaborator.
        invite_groups: Group IDs or @group handles to invite.
    """

    id: str
    name: str
    description: str = ""
    invite_users: list[str] = field(default_factory=list)
    invite_groups: list[str] = field(default_factory=list)

    def validate(self) -> None:
        """
        Check that the category is usable.

        Raises:
            TaxonomyError: If the ID or name is empty.
        """
        if not self.id:
            raise TaxonomyError("category ID is required", details={"name": self.name})
        if not self.name:
            raise TaxonomyError("category name is required", details={"id": self.id})

    def has_invitees(self) -> bool:
        """Check if the category names anyone to invite."""
        return bool(self.invite_users or self.invite_groups)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Category":
        """Create a category from parsed configuration data."""
        return cls(
            id=str(data.get("id") or ""),
            name=str(data.get("name") or ""),
            description=str(data.get("description") or ""),
            invite_users=[str(u) for u in data.get("invite_users") or []],
            invite_groups=[str(g) for g in data.get("invite_groups") or []],
        )

    def to_dict(self, exclude_none: bool = False) -> dict[str, Any]:
        """Convert the category to a dictionary."""
        return model_to_dict(self, exclude_none)


@dataclass
class Severity:
    """
    A severity level.

    Attributes:
        id: Unique identifier (e.g. "high").
        name: Display name.
        description: Help text shown when picking a severity.
        level: Importance from 0 (ignorable) to 99. The value -1 marks
            the synthesized unknown severity.
    """

    id: SeverityID
    name: str
    description: str = ""
    level: int = 0

    def validate(self) -> None:
        """
        Check that the severity is usable as configuration.

        Raises:
            TaxonomyError: If the ID or name is empty or the level is
                outside 0-99.
        """
        if not self.id:
            raise TaxonomyError("severity ID is required", details={"name": self.name})
        if not self.name:
            raise TaxonomyError("severity name is required", details={"id": self.id})
        if not MIN_SEVERITY_LEVEL <= self.level <= MAX_SEVERITY_LEVEL:
            raise TaxonomyError(
                f"severity level must be between {MIN_SEVERITY_LEVEL} "
                f"and {MAX_SEVERITY_LEVEL}",
                details={"id": self.id, "level": self.level},
            )

    def is_ignorable(self) -> bool:
        """Check if the severity is level 0 (no response needed)."""
        return self.level == 0

    def is_unknown(self) -> bool:
        """Check if this is the synthesized unknown severity."""
        return self.level == UNKNOWN_SEVERITY_LEVEL

    @classmethod
    def unknown(cls) -> "Severity":
        """Build the placeholder used when no "unknown" severity is configured."""
        return cls(
            id=SeverityID(UNKNOWN_ID),
            name="Unknown",
            description="Unknown severity",
            level=UNKNOWN_SEVERITY_LEVEL,
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Severity":
        """
        Create a severity from parsed configuration data.

        Raises:
            TaxonomyError: If the level is not an integer.
        """
        raw_level = data.get("level", 0)
        if isinstance(raw_level, bool) or not isinstance(raw_level, int):
            raise TaxonomyError(
                "severity level must be an integer",
                details={"id": data.get("id"), "level": raw_level},
            )
        return cls(
            id=SeverityID(data.get("id") or ""),
            name=str(data.get("name") or ""),
            description=str(data.get("description") or ""),
            level=raw_level,
        )

    def to_dict(self, exclude_none: bool = False) -> dict[str, Any]:
        """Convert the severity to a dictionary."""
        return model_to_dict(self, exclude_none)


@dataclass
class Asset:
    """
    An infrastructure component or service that an incident can affect.

    Attributes:
        id: Unique identifier (e.g. "web_frontend").
        name: Display name.
        description: Help text shown when picking assets.
    """

    id: AssetID
    name: str
    description: str = ""

    def validate(self) -> None:
        """
        Check that the asset is usable.

        Raises:
            TaxonomyError: If the ID or name is empty.
        """
        if not self.id:
            raise TaxonomyError("asset ID is required", details={"name": self.name})
        if not self.name:
            raise TaxonomyError("asset name is required", details={"id": self.id})

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Asset":
        """Create an asset from parsed configuration data."""
        return cls(
            id=AssetID(data.get("id") or ""),
            name=str(data.get("name") or ""),
            description=str(data.get("description") or ""),
        )

    def to_dict(self, exclude_none: bool = False) -> dict[str, Any]:
        """Convert the asset to a dictionary."""
        return model_to_dict(self, exclude_none)
