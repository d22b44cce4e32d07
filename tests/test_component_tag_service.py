import pytest
from sqlalchemy import select

from galaxy_api.api.services.component_tag_service import ComponentTagService
from galaxy_api.database import models as orm
from galaxy_api.types.models.tag import ComponentRef, Tag
from galaxy_api.types.response.exceptions import HandledException
from galaxy_api.types.response.response_code import ResponseCode

from conftest import new_id, seed


async def linked_components(database, tag_id):
    async with database.session() as session:
        result = await session.execute(select(orm.TagComponent.component_id).where(orm.TagComponent.tag_id == tag_id))
        return sorted(result.scalars().all())


async def test_update_tags_replaces_component_links(database, catalog):
    tag = orm.Tag(id=new_id(), name="Interfaces", tag_type_id=catalog.component_tag_type.id)
    await seed(database, tag, orm.TagComponent(tag_id=tag.id, component_id=catalog.adt_feed.id))

    async with database.session() as session:
        [saved] = await ComponentTagService(session).update_tags([
            Tag(id=tag.id, name="Interfaces v2", components=[ComponentRef(id=catalog.orders_feed.id)]),
        ])

    assert saved.id == tag.id
    assert saved.type == "Component"
    assert await linked_components(database, tag.id) == [catalog.orders_feed.id]
    async with database.session() as session:
        stored = await session.get(orm.Tag, tag.id)
    assert stored.name == "Interfaces v2"


async def test_update_tags_rolls_back_all_tags_on_failure(database, catalog):
    first = Tag(name="First", components=[ComponentRef(id=catalog.adt_feed.id)])
    broken = Tag.model_construct(id=None, name=None, description=None, type=None, components=[])

    with pytest.raises(HandledException) as exc_info:
        async with database.session() as session:
            await ComponentTagService(session).update_tags([first, broken])

    assert exc_info.value.resp_code is ResponseCode.DATABASE_TRANSACTION_ERROR
    async with database.session() as session:
        assert (await session.execute(select(orm.Tag).where(orm.Tag.name == "First"))).first() is None


async def test_update_tags_requires_at_least_one_tag(database, catalog):
    async with database.session() as session:
        with pytest.raises(HandledException) as exc_info:
            await ComponentTagService(session).update_tags([])

    assert exc_info.value.resp_code is ResponseCode.REQUIRED_FIELD_MISSING


async def test_missing_component_tag_type(database):
    async with database.session() as session:
        with pytest.raises(HandledException) as exc_info:
            await ComponentTagService(session).update_tag(Tag(name="Orphan"))

    assert exc_info.value.resp_code is ResponseCode.TAG_TYPE_NOT_FOUND


async def test_search_returns_component_tags_with_links(database, catalog):
    lab = orm.Tag(id=new_id(), name="Lab Feeds", tag_type_id=catalog.component_tag_type.id)
    queue = orm.Tag(id=new_id(), name="Lab Queue", tag_type_id=catalog.other_tag_type.id)
    await seed(
        database, lab, queue,
        orm.TagComponent(tag_id=lab.id, component_id=catalog.orders_feed.id),
        orm.TagComponent(tag_id=lab.id, component_id=catalog.adt_feed.id),
    )

    async with database.session() as session:
        tags = await ComponentTagService(session).search_component_tags("  LAB ")

    assert [t.name for t in tags] == ["Lab Feeds"]
    assert [(c.name, c.type) for c in tags[0].components] == [("ADT Feed", "Interface"), ("Orders Feed", "Interface")]
