import pytest

from galaxy_api.api.services.category_service import CategoryService
from galaxy_api.api.services.component_service import ComponentService
from galaxy_api.database import models as orm

from conftest import new_id, seed


@pytest.fixture
async def odd_categories(database, catalog):
    rows = [
        orm.Category(id=new_id(), name="100% Uptime"),
        orm.Category(id=new_id(), name="1000 Series"),
        orm.Category(id=new_id(), name="HL7_Inbound"),
        orm.Category(id=new_id(), name="HL7 Inbound"),
        orm.Category(id=new_id(), name="[Legacy] Feeds"),
    ]
    await seed(database, *rows)
    return rows


async def search_categories(database, contains):
    async with database.session() as session:
        return [c.name for c in await CategoryService(session).search_categories(contains)]


@pytest.mark.parametrize(
    "contains, expected",
    [
        ("100%", ["100% Uptime"]),
        ("7_i", ["HL7_Inbound"]),
        ("[legacy]", ["[Legacy] Feeds"]),
        ("  lab ", ["Lab"]),
        ("", ["100% Uptime", "1000 Series", "[Legacy] Feeds", "HL7 Inbound", "HL7_Inbound", "Lab", "Pharmacy"]),
    ],
)
async def test_category_search_treats_wildcards_literally(database, odd_categories, contains, expected):
    assert sorted(await search_categories(database, contains)) == sorted(expected)


async def test_category_search_orders_by_name(database, catalog):
    assert await search_categories(database, "a") == ["Lab", "Pharmacy"]


async def search_components(database, contains, **filters):
    async with database.session() as session:
        return await ComponentService(session).search_components(contains, **filters)


async def test_component_search_includes_type_and_category(database, catalog):
    [adt] = await search_components(database, "adt")

    assert adt.id == catalog.adt_feed.id
    assert adt.type == "Interface"
    assert adt.category.name == "Lab"
    assert adt.to_json_dict()["stageStatus"] is False


async def test_component_search_filters(database, catalog):
    assert [c.name for c in await search_components(database, "feed")] == ["ADT Feed", "Orders Feed"]
    assert [c.name for c in await search_components(database, "feed", no_category=True)] == ["Orders Feed"]
    assert [c.name for c in await search_components(database, "feed", stage_only=True)] == ["Orders Feed"]
    assert await search_components(database, "feed%") == []
