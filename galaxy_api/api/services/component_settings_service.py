# _*_ coding: utf-8 _*_
"""Component Settings Service for reading and updating the full settings of a component."""
import logging
from datetime import datetime
from typing import List

from galaxy_api.api.services.component_tag_service import ComponentTagService
from galaxy_api.database.crud.alert_crud import AlertCRUD
from galaxy_api.database.crud.component_crud import ComponentCRUD
from galaxy_api.database.crud.tag_crud import TagCRUD
from galaxy_api.database.models.component_models import Alert
from galaxy_api.database.transaction import transaction
from galaxy_api.types.models.component import (
    AlertSetting,
    AlertType,
    Category,
    ComponentAlerts,
    ComponentHelp,
    ComponentMain,
    ComponentSettings,
    default_help,
)
from galaxy_api.types.models.tag import Tag
from galaxy_api.types.response.exceptions import HandledException
from galaxy_api.types.response.response_code import ResponseCode
from galaxy_api.utils.uuid_gen import gen, is_uuid
from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)

MAX_ALERTS_PER_COMPONENT = len(AlertType)


class ComponentSettingsService:
    """컴포넌트 설정(주요 속성, 도움말, 태그, 알림) 조회/수정 서비스"""

    def __init__(self, db: AsyncSession):
        if db is None:
            raise ValueError("Database session is required")

        self.db = db
        self.component_crud = ComponentCRUD(db)
        self.alert_crud = AlertCRUD(db)
        self.tag_crud = TagCRUD(db)
        self.tag_service = ComponentTagService(db)

    @staticmethod
    def _fold_alerts(component_id: str, alerts: List[Alert], alert_email: str, alert_phone: str) -> ComponentAlerts:
        """저장된 알림 행을 네 개의 알림 슬롯으로 변환"""
        if len(alerts) > MAX_ALERTS_PER_COMPONENT:
            raise HandledException(
                ResponseCode.COMPONENT_ALERT_LIMIT_EXCEEDED,
                msg=f"component_id={component_id}, alerts={len(alerts)}",
            )

        slots = {}
        for alert in alerts:
            try:
                alert_type = AlertType(alert.type)
            except ValueError as e:
                raise HandledException(ResponseCode.INVALID_DATA_FORMAT, e=e, msg=f"alert_id={alert.id}")
            if alert_type in slots:
                raise HandledException(
                    ResponseCode.COMPONENT_ALERT_LIMIT_EXCEEDED,
                    msg=f"component_id={component_id}, duplicated type={alert.type}",
                )
            slots[alert_type] = AlertSetting(
                id=alert.id,
                enabled=True,
                severity=alert.severity,
                message_threshold=alert.message_threshold,
                retry_wait_time=alert.retry_wait_time,
                schedule=alert.alert_schedule,
                notify=alert.notify,
            )

        return ComponentAlerts(
            alert_email=alert_email,
            alert_phone=alert_phone,
            **{ComponentAlerts.SLOTS[alert_type]: setting for alert_type, setting in slots.items()},
        )

    async def get_component_settings(self, component_id: str) -> ComponentSettings:
        """
        컴포넌트 설정 조회

        도움말이 없으면 빈 기본 도움말, 알림은 유형별 슬롯으로 반환한다.
        저장된 알림이 네 개를 넘으면 데이터 오류로 처리한다.
        """
        if not is_uuid(component_id):
            raise HandledException(ResponseCode.VALIDATION_ERROR, msg=f'"{component_id}" is an invalid uuid.')

        try:
            found = await self.component_crud.get_component(component_id)
            if found is None:
                raise HandledException(ResponseCode.COMPONENT_NOT_FOUND, msg=f"component_id={component_id}")
            component, component_type, category = found

            help_record = await self.component_crud.get_help(component_id)
            alerts = await self.alert_crud.get_by_component(component_id)
            tag_rows = await self.tag_crud.get_tags_by_component(component_id)

            return ComponentSettings(
                id=component.id,
                name=component.name,
                type=component_type,
                main=ComponentMain(
                    disable_notify=component.disable_notify,
                    stage_status=component.stage_status,
                    auto_start=component.auto_start,
                ),
                alerts=self._fold_alerts(component_id, alerts, component.alert_email, component.alert_phone),
                category=Category.model_validate(category) if category is not None else None,
                help=ComponentHelp.model_validate(help_record) if help_record is not None else default_help(component_id),
                tags=[
                    Tag(id=tag.id, name=tag.name, description=tag.description, type=type_name)
                    for tag, type_name in tag_rows
                ],
            )
        except HandledException:
            raise
        except Exception as e:
            raise HandledException(ResponseCode.UNDEFINED_ERROR, e=e)

    async def _upsert_help(self, component_id: str, help_record: ComponentHelp) -> ComponentHelp:
        """컴포넌트당 도움말은 하나. 다른 컴포넌트의 도움말 id는 무시한다."""
        fields = help_record.model_dump(exclude={"id", "component_id"})
        if is_uuid(help_record.id) and await self.component_crud.update_help(help_record.id, component_id, **fields):
            return help_record.model_copy(update={"component_id": component_id})

        existing = await self.component_crud.get_help(component_id)
        if existing is not None:
            await self.component_crud.update_help(existing.id, component_id, **fields)
            return help_record.model_copy(update={"id": existing.id, "component_id": component_id})

        help_id = gen()
        await self.component_crud.insert_help(help_id, component_id, **fields)
        return help_record.model_copy(update={"id": help_id, "component_id": component_id})

    @staticmethod
    def _distinct_tags(tags: List[Tag]) -> List[Tag]:
        """같은 id의 태그는 처음 나온 것만 남긴다 (id 없는 새 태그는 그대로)"""
        seen = set()
        distinct: List[Tag] = []
        for tag in tags:
            if is_uuid(tag.id):
                if tag.id in seen:
                    continue
                seen.add(tag.id)
            distinct.append(tag)
        return distinct

    async def update_component_settings(self, payload: ComponentSettings) -> ComponentSettings:
        """
        컴포넌트 설정 전체 수정 (단일 트랜잭션, 순서대로 실행)

        1. 컴포넌트 주요 속성 수정 (수정 시각은 항상 현재 시각)
        2. 컴포넌트의 도움말 수정, 없으면 컴포넌트 id를 넣어 새로 저장
        3. 컴포넌트의 태그 연결 전체 삭제
        4. 태그를 하나씩 저장하고 다시 연결 (같은 태그는 한 번만)
        5. 컴포넌트의 알림 전체 삭제
        6. 활성화된 알림만 하나씩 저장

        어느 단계든 실패하면 전체 롤백된다.
        """
        component_id = payload.id
        result = payload.model_copy(deep=True)

        async with transaction(self.db, f"update_component_settings component_id={component_id}"):
            updated = await self.component_crud.update_settings(
                component_id=component_id,
                category_id=payload.category.id if payload.category is not None else None,
                mod_date=datetime.now(),
                alert_email=payload.alerts.alert_email,
                alert_phone=payload.alerts.alert_phone,
                disable_notify=payload.main.disable_notify,
                stage_status=payload.main.stage_status,
                auto_start=payload.main.auto_start,
            )
            if not updated:
                raise HandledException(ResponseCode.COMPONENT_NOT_FOUND, msg=f"component_id={component_id}")

            result.help = await self._upsert_help(component_id, payload.help)

            await self.tag_crud.unlink_by_component(component_id)
            result.tags = []
            for tag in self._distinct_tags(payload.tags):
                result.tags.append(await self.tag_service.upsert_tag_for_component(tag, component_id))

            await self.alert_crud.delete_by_component(component_id)
            for alert_type, setting in payload.alerts.enabled_alerts():
                alert_id = setting.id if is_uuid(setting.id) else gen()
                await self.alert_crud.insert_alert(
                    alert_id=alert_id,
                    component_id=component_id,
                    alert_type=alert_type.value,
                    severity=setting.severity,
                    message_threshold=setting.message_threshold,
                    retry_wait_time=setting.retry_wait_time,
                    alert_schedule=setting.schedule,
                    notify=setting.notify,
                )
                result.alerts.slot(alert_type).id = alert_id

        logger.info(f"컴포넌트 설정 수정 완료: component_id={component_id}, tags={len(result.tags)}")
        return result
