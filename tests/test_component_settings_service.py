import itertools

import pytest
from sqlalchemy import select

from galaxy_api.api.services.component_settings_service import ComponentSettingsService
from galaxy_api.database import models as orm
from galaxy_api.database.crud.alert_crud import AlertCRUD
from galaxy_api.types.models.component import AlertType, ComponentSettings
from galaxy_api.types.response.exceptions import HandledException
from galaxy_api.types.response.response_code import ResponseCode

from conftest import new_id, seed

SCHEDULE = [
    {"day": "Mon", "start": "08:00", "end": "17:00", "contacts": ["oncall@example.com"]},
    {"day": "Sat", "start": None, "end": None, "contacts": []},
]


def settings_payload(component_id, tags=(), enabled=(), help_record=None, category_id=None):
    alerts = {"alertEmail": "ops@example.com", "alertPhone": "555-0199"}
    for alert_type, slot in (
        (AlertType.CONNECTION, "connection"),
        (AlertType.DATA_TIMEOUT, "dataTimeout"),
        (AlertType.QUEUE_DEPTH, "queueDepth"),
        (AlertType.NEGATIVE_ACK, "negativeAck"),
    ):
        alerts[slot] = {
            "enabled": alert_type in enabled,
            "severity": "High",
            "messageThreshold": 250,
            "retryWaitTime": 30,
            "schedule": SCHEDULE,
            "notify": alert_type is AlertType.QUEUE_DEPTH,
        }
    return ComponentSettings.model_validate({
        "id": component_id,
        "main": {"disableNotify": True, "stageStatus": True, "autoStart": False},
        "alerts": alerts,
        "category": {"id": category_id} if category_id else None,
        "help": help_record or {"supportGroup": "Integration", "helpSchedule": SCHEDULE},
        "tags": list(tags),
    })


async def update(database, payload):
    async with database.session() as session:
        return await ComponentSettingsService(session).update_component_settings(payload)


async def read(database, component_id):
    async with database.session() as session:
        return await ComponentSettingsService(session).get_component_settings(component_id)


async def rows(database, model, **filters):
    async with database.session() as session:
        query = select(model)
        for name, value in filters.items():
            query = query.where(getattr(model, name) == value)
        return list((await session.execute(query)).scalars().all())


async def linked_tag_names(database, component_id):
    async with database.session() as session:
        result = await session.execute(
            select(orm.Tag.name)
            .join(orm.TagComponent, orm.TagComponent.tag_id == orm.Tag.id)
            .where(orm.TagComponent.component_id == component_id)
        )
        return sorted(result.scalars().all())


ALERT_SUBSETS = [
    subset
    for size in range(len(AlertType) + 1)
    for subset in itertools.combinations(list(AlertType), size)
]


@pytest.mark.parametrize("enabled", ALERT_SUBSETS, ids=lambda s: "+".join(a.name for a in s) or "none")
async def test_alert_rows_match_enabled_set(database, catalog, enabled):
    component_id = catalog.adt_feed.id
    await update(database, settings_payload(component_id, enabled=list(AlertType)))

    await update(database, settings_payload(component_id, enabled=enabled))

    alerts = await rows(database, orm.Alert, component_id=component_id)
    assert sorted(a.type for a in alerts) == sorted(a.value for a in enabled)


async def test_update_writes_main_attributes_and_advances_mod_date(database, catalog):
    component_id = catalog.adt_feed.id

    result = await update(database, settings_payload(component_id, category_id=catalog.pharmacy.id))

    [component] = await rows(database, orm.Component, id=component_id)
    assert component.category_id == catalog.pharmacy.id
    assert component.alert_email == "ops@example.com"
    assert component.alert_phone == "555-0199"
    assert (component.disable_notify, component.stage_status, component.auto_start) == (True, True, False)
    assert component.mod_date is not None
    first_mod_date = component.mod_date

    await update(database, settings_payload(component_id, category_id=catalog.pharmacy.id))

    [component] = await rows(database, orm.Component, id=component_id)
    assert component.mod_date >= first_mod_date
    assert result.id == component_id


async def test_help_is_inserted_then_updated(database, catalog):
    component_id = catalog.adt_feed.id

    created = await update(database, settings_payload(component_id))

    assert created.help.id is not None
    assert created.help.component_id == component_id
    [help_row] = await rows(database, orm.ComponentHelp, component_id=component_id)
    assert help_row.support_group == "Integration"

    help_record = created.help.to_json_dict()
    help_record["supportGroup"] = "Interface Team"
    await update(database, settings_payload(component_id, help_record=help_record))

    help_rows = await rows(database, orm.ComponentHelp, component_id=component_id)
    assert [(h.id, h.support_group) for h in help_rows] == [(created.help.id, "Interface Team")]


async def test_schedules_round_trip_through_storage(database, catalog):
    component_id = catalog.adt_feed.id
    await update(database, settings_payload(component_id, enabled=[AlertType.CONNECTION]))

    settings = await read(database, component_id)

    assert settings.alerts.connection.schedule == SCHEDULE
    assert settings.help.help_schedule == SCHEDULE


async def test_tag_relink_replaces_links(database, catalog):
    component_id = catalog.adt_feed.id
    first = await update(database, settings_payload(component_id, tags=[{"name": "A"}, {"name": "B"}]))
    tag_b = next(t for t in first.tags if t.name == "B")

    await update(database, settings_payload(component_id, tags=[tag_b.to_json_dict(), {"name": "C"}]))

    assert await linked_tag_names(database, component_id) == ["B", "C"]
    links = await rows(database, orm.TagComponent, component_id=component_id)
    assert len(links) == 2
    assert len(await rows(database, orm.Tag, name="B")) == 1


async def test_new_tags_get_identifiers_and_component_type(database, catalog):
    result = await update(database, settings_payload(catalog.adt_feed.id, tags=[{"name": "Lab", "type": "Queue"}]))

    [tag] = result.tags
    assert tag.id is not None
    assert tag.type == "Component"
    [tag_row] = await rows(database, orm.Tag, id=tag.id)
    assert tag_row.tag_type_id == catalog.component_tag_type.id


async def test_repeated_tag_is_linked_once(database, catalog):
    component_id = catalog.adt_feed.id
    [lab] = (await update(database, settings_payload(component_id, tags=[{"name": "Lab"}]))).tags

    result = await update(database, settings_payload(
        component_id, tags=[lab.to_json_dict(), {"name": "Pharmacy"}, lab.to_json_dict()],
    ))

    assert [t.name for t in result.tags] == ["Lab", "Pharmacy"]
    assert result.tags[0].id == lab.id
    assert len(await rows(database, orm.TagComponent, component_id=component_id)) == 2
    assert await linked_tag_names(database, component_id) == ["Lab", "Pharmacy"]


async def test_help_of_another_component_is_left_alone(database, catalog):
    adt = await update(database, settings_payload(
        catalog.adt_feed.id, help_record={"supportGroup": "A-team", "helpSchedule": SCHEDULE},
    ))

    orders = await update(database, settings_payload(
        catalog.orders_feed.id, help_record={**adt.help.to_json_dict(), "supportGroup": "B-team"},
    ))

    assert orders.help.id != adt.help.id
    adt_after = await read(database, catalog.adt_feed.id)
    assert (adt_after.help.id, adt_after.help.support_group) == (adt.help.id, "A-team")
    [orders_help] = await rows(database, orm.ComponentHelp, component_id=catalog.orders_feed.id)
    assert (orders_help.id, orders_help.support_group) == (orders.help.id, "B-team")


async def test_help_without_identifier_updates_existing_row(database, catalog):
    component_id = catalog.adt_feed.id
    created = await update(database, settings_payload(component_id))

    result = await update(database, settings_payload(component_id, help_record={"supportGroup": "Second"}))

    assert result.help.id == created.help.id
    help_rows = await rows(database, orm.ComponentHelp, component_id=component_id)
    assert [(h.id, h.support_group) for h in help_rows] == [(created.help.id, "Second")]
    assert (await read(database, component_id)).help.support_group == "Second"


async def test_alert_failure_rolls_back_every_step(database, catalog, monkeypatch):
    component_id = catalog.adt_feed.id
    await update(database, settings_payload(component_id, tags=[{"name": "Night Shift"}], enabled=[AlertType.CONNECTION]))
    before = await read(database, component_id)
    [component_before] = await rows(database, orm.Component, id=component_id)

    async def failing_insert(self, **kwargs):
        raise HandledException(ResponseCode.DATABASE_QUERY_ERROR, msg="insert failed")

    monkeypatch.setattr(AlertCRUD, "insert_alert", failing_insert)
    changed = settings_payload(
        component_id,
        tags=[{"name": "Replacement"}],
        enabled=[AlertType.QUEUE_DEPTH],
        help_record={**before.help.to_json_dict(), "supportGroup": "Changed"},
        category_id=catalog.pharmacy.id,
    )

    with pytest.raises(HandledException) as exc_info:
        await update(database, changed)

    assert exc_info.value.resp_code is ResponseCode.DATABASE_TRANSACTION_ERROR
    after = await read(database, component_id)
    [component_after] = await rows(database, orm.Component, id=component_id)
    assert after == before
    assert component_after.mod_date == component_before.mod_date
    assert component_after.category_id == component_before.category_id
    assert await linked_tag_names(database, component_id) == ["Night Shift"]
    assert await rows(database, orm.Tag, name="Replacement") == []


async def test_missing_tag_type_rolls_back(database, catalog):
    component_id = catalog.orders_feed.id
    async with database.session() as session:
        tag_type = await session.get(orm.TagType, catalog.component_tag_type.id)
        await session.delete(tag_type)
        await session.commit()

    with pytest.raises(HandledException) as exc_info:
        await update(database, settings_payload(component_id, tags=[{"name": "Orphan"}]))

    assert exc_info.value.resp_code is ResponseCode.TAG_TYPE_NOT_FOUND
    assert await rows(database, orm.ComponentHelp, component_id=component_id) == []


async def test_unknown_component_is_not_found(database, catalog):
    with pytest.raises(HandledException) as exc_info:
        await update(database, settings_payload(new_id()))

    assert exc_info.value.resp_code is ResponseCode.COMPONENT_NOT_FOUND


@pytest.mark.parametrize("component_id", ["not-a-uuid", "", "1234"])
def test_payload_requires_valid_component_identifier(component_id):
    with pytest.raises(ValueError):
        settings_payload(component_id)


async def test_get_settings_without_help_or_alerts(database, catalog):
    settings = await read(database, catalog.orders_feed.id)

    assert settings.name == "Orders Feed"
    assert settings.type == "Interface"
    assert settings.category is None
    assert settings.help.id is None
    assert settings.help.component_id == catalog.orders_feed.id
    assert settings.tags == []
    assert not any(setting.enabled for setting in (
        settings.alerts.connection, settings.alerts.data_timeout,
        settings.alerts.queue_depth, settings.alerts.negative_ack,
    ))


async def test_get_settings_folds_alerts_into_slots(database, catalog):
    component_id = catalog.adt_feed.id
    await update(database, settings_payload(
        component_id, enabled=[AlertType.QUEUE_DEPTH, AlertType.NEGATIVE_ACK], category_id=catalog.lab.id,
    ))

    settings = await read(database, component_id)

    assert settings.category.name == "Lab"
    assert settings.alerts.queue_depth.enabled and settings.alerts.queue_depth.notify
    assert settings.alerts.queue_depth.message_threshold == 250
    assert settings.alerts.negative_ack.retry_wait_time == 30
    assert not settings.alerts.connection.enabled


async def test_get_settings_rejects_more_than_four_alerts(database, catalog):
    component_id = catalog.adt_feed.id
    await seed(database, *[
        orm.Alert(id=new_id(), component_id=component_id, type=alert_type.value, notify=False)
        for alert_type in list(AlertType) + [AlertType.CONNECTION]
    ])

    with pytest.raises(HandledException) as exc_info:
        await read(database, component_id)

    assert exc_info.value.resp_code is ResponseCode.COMPONENT_ALERT_LIMIT_EXCEEDED


async def test_get_settings_unknown_component(database, catalog):
    with pytest.raises(HandledException) as exc_info:
        await read(database, new_id())

    assert exc_info.value.resp_code is ResponseCode.COMPONENT_NOT_FOUND
