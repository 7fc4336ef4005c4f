"""Tests for entity kind configuration."""

import pytest

from listings_admin.domain.errors import UnknownEntityKindError
from listings_admin.domain.listings import (
    ENTITY_KINDS,
    PLOTS,
    PRIMARY_SALE,
    EditDraft,
    ListingRecord,
    get_entity_kind,
)


def test_property_tables_follow_type_pattern() -> None:
    assert {kind.table for kind in ENTITY_KINDS.values()} == {
        "plots",
        "resale_properties",
        "primary-sale_properties",
        "rental_properties",
    }


def test_owner_keys() -> None:
    assert PLOTS.owner_key("p-1") == "p-1"
    assert PLOTS.owner_key(None) == "new"
    assert PRIMARY_SALE.owner_key("r-1") == "primary-sale/r-1"
    assert PRIMARY_SALE.owner_key(None) == "primary-sale/new"


def test_unknown_kind() -> None:
    with pytest.raises(UnknownEntityKindError):
        get_entity_kind("offices")


def test_draft_copies_images() -> None:
    record = ListingRecord(
        id="p-1",
        builder_name="Acme",
        project="Skyview",
        location="Lakeview",
        images=("a", "b"),
        attributes={"price_per_sqft": 10, "total_price": 100},
    )

    draft = EditDraft.from_record(PLOTS, record)
    draft.images.append("c")

    assert record.images == ("a", "b")
    assert draft.values["builder_name"] == "Acme"
    assert draft.values["total_price"] == 100
