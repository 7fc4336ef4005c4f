"""Domain models for listing records and the entity kinds that hold them."""

from dataclasses import dataclass, field
from datetime import datetime

from listings_admin.domain.errors import UnknownEntityKindError

NEW_RECORD_KEY = "new"
COMMON_TEXT_FIELDS = ("builder_name", "project", "location")


@dataclass(frozen=True)
class EntityKind:
    """Configuration for one managed collection of listings."""

    key: str
    title: str
    noun: str
    table: str
    bucket: str
    folder_prefix: str | None
    text_fields: tuple[str, ...]
    numeric_fields: tuple[str, ...]
    price_field: str
    optional_fields: tuple[str, ...] = ()
    rate_field: str | None = None

    @property
    def form_fields(self) -> tuple[str, ...]:
        """Return every form field in display order."""
        return self.text_fields + self.optional_fields + self.numeric_fields

    def owner_key(self, record_id: str | None) -> str:
        """Return the storage folder for a record's images."""
        owner = record_id or NEW_RECORD_KEY
        if self.folder_prefix:
            return f"{self.folder_prefix}/{owner}"
        return owner


@dataclass(frozen=True)
class ListingRecord:
    """A plot or property row as stored in the backend."""

    id: str
    builder_name: str
    project: str
    location: str
    images: tuple[str, ...] = ()
    created_at: datetime | None = None
    attributes: dict[str, object] = field(default_factory=dict)

    def value(self, name: str) -> object | None:
        """Return a common or kind-specific field value."""
        if name in COMMON_TEXT_FIELDS:
            return getattr(self, name)
        return self.attributes.get(name)


@dataclass
class EditDraft:
    """Working copy of a record while its form is open."""

    record_id: str | None
    values: dict[str, object] = field(default_factory=dict)
    images: list[str] = field(default_factory=list)

    @classmethod
    def blank(cls) -> "EditDraft":
        """Return an empty draft for a new record."""
        return cls(record_id=None)

    @classmethod
    def from_record(cls, kind: EntityKind, record: ListingRecord) -> "EditDraft":
        """Return a draft seeded from an existing record."""
        values = {name: record.value(name) for name in kind.form_fields}
        return cls(record_id=record.id, values=values, images=list(record.images))


def property_kind(property_type: str, title: str) -> EntityKind:
    """Build the configuration for a property category."""
    return EntityKind(
        key=property_type,
        title=title,
        noun="property",
        table=f"{property_type}_properties",
        bucket="properties",
        folder_prefix=property_type,
        text_fields=COMMON_TEXT_FIELDS,
        numeric_fields=("price",),
        price_field="price",
        optional_fields=("size",),
    )


PLOTS = EntityKind(
    key="plots",
    title="Plots",
    noun="plot",
    table="plots",
    bucket="plots",
    folder_prefix=None,
    text_fields=COMMON_TEXT_FIELDS,
    numeric_fields=("price_per_sqft", "total_price"),
    price_field="total_price",
    rate_field="price_per_sqft",
)
RESALE = property_kind("resale", "Resale Properties")
PRIMARY_SALE = property_kind("primary-sale", "Primary Sale Properties")
RENTAL = property_kind("rental", "Rental Properties")

ENTITY_KINDS: dict[str, EntityKind] = {
    kind.key: kind for kind in (PLOTS, RESALE, PRIMARY_SALE, RENTAL)
}


def get_entity_kind(key: str) -> EntityKind:
    """Return the entity kind registered under a key."""
    kind = ENTITY_KINDS.get(key)
    if kind is None:
        raise UnknownEntityKindError(key)
    return kind
