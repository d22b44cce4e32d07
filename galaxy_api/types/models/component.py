# _*_ coding: utf-8 _*_
"""Component settings value types."""
from enum import Enum
from typing import Any, ClassVar, Dict, List, Optional

from pydantic import Field, field_validator

from galaxy_api.utils.uuid_gen import is_uuid

from .base import CamelModel
from .tag import Tag


class AlertType(str, Enum):
    """컴포넌트당 유형별로 최대 한 개만 존재하는 알림 종류"""

    CONNECTION = "Connection"
    DATA_TIMEOUT = "Data Timeout"
    QUEUE_DEPTH = "Queue Depth"
    NEGATIVE_ACK = "Negative Ack"


def _none_to_empty(value):
    return "" if value is None else value


class Category(CamelModel):
    id: Optional[str] = None
    name: str = ""


class Component(CamelModel):
    """검색 결과용 컴포넌트 요약"""

    id: str
    name: str
    type: Optional[str] = None
    category: Optional[Category] = None
    stage_status: bool = False


class ComponentMain(CamelModel):
    disable_notify: bool = False
    stage_status: bool = False
    auto_start: bool = False


class AlertSetting(CamelModel):
    """한 알림 유형의 설정. `enabled`가 False이면 저장되지 않는다."""

    id: Optional[str] = None
    enabled: bool = False
    severity: str = ""
    message_threshold: int = 0
    retry_wait_time: int = 0
    schedule: List[Any] = Field(default_factory=list)
    notify: bool = False

    @field_validator("severity", mode="before")
    @classmethod
    def _severity_default(cls, value):
        return _none_to_empty(value)

    @field_validator("message_threshold", "retry_wait_time", mode="before")
    @classmethod
    def _number_default(cls, value):
        return 0 if value in (None, "") else value

    @field_validator("schedule", mode="before")
    @classmethod
    def _schedule_default(cls, value):
        return [] if value is None else value


class ComponentAlerts(CamelModel):
    SLOTS: ClassVar[Dict[AlertType, str]] = {
        AlertType.CONNECTION: "connection",
        AlertType.DATA_TIMEOUT: "data_timeout",
        AlertType.QUEUE_DEPTH: "queue_depth",
        AlertType.NEGATIVE_ACK: "negative_ack",
    }

    alert_email: str = ""
    alert_phone: str = ""
    connection: AlertSetting = Field(default_factory=AlertSetting)
    data_timeout: AlertSetting = Field(default_factory=AlertSetting)
    queue_depth: AlertSetting = Field(default_factory=AlertSetting)
    negative_ack: AlertSetting = Field(default_factory=AlertSetting)

    @field_validator("alert_email", "alert_phone", mode="before")
    @classmethod
    def _contact_default(cls, value):
        return _none_to_empty(value)

    def slot(self, alert_type: AlertType) -> AlertSetting:
        return getattr(self, self.SLOTS[AlertType(alert_type)])

    def enabled_alerts(self) -> List[tuple]:
        """(AlertType, AlertSetting) 목록 - 활성화된 알림만, 고정 순서"""
        return [(alert_type, self.slot(alert_type)) for alert_type in AlertType if self.slot(alert_type).enabled]


class ComponentHelp(CamelModel):
    id: Optional[str] = None
    component_id: Optional[str] = None
    support_group: str = ""
    contact_name: str = ""
    contact_phone: str = ""
    contact_email: str = ""
    description: str = ""
    probable_inactivity: str = ""
    resolution_notes: str = ""
    additional_info: str = ""
    help_schedule: List[Any] = Field(default_factory=list)

    @field_validator(
        "support_group", "contact_name", "contact_phone", "contact_email", "description",
        "probable_inactivity", "resolution_notes", "additional_info",
        mode="before",
    )
    @classmethod
    def _text_default(cls, value):
        return _none_to_empty(value)

    @field_validator("help_schedule", mode="before")
    @classmethod
    def _schedule_default(cls, value):
        return [] if value is None else value


def default_help(component_id: Optional[str] = None) -> ComponentHelp:
    """저장된 도움말이 없는 컴포넌트에 사용하는 빈 도움말 (id 없음)"""
    return ComponentHelp(component_id=component_id)


class ComponentSettings(CamelModel):
    """컴포넌트 설정 화면의 전체 페이로드 (조회/수정 공용)"""

    id: str
    name: Optional[str] = None
    type: Optional[str] = None
    main: ComponentMain = Field(default_factory=ComponentMain)
    alerts: ComponentAlerts = Field(default_factory=ComponentAlerts)
    category: Optional[Category] = None
    help: ComponentHelp = Field(default_factory=ComponentHelp)
    tags: List[Tag] = Field(default_factory=list)

    @field_validator("id")
    @classmethod
    def _validate_id(cls, value: str) -> str:
        if not is_uuid(value):
            raise ValueError(f'"{value}" is an invalid uuid.')
        return value

    @field_validator("main", "alerts", "help", mode="before")
    @classmethod
    def _section_default(cls, value):
        return {} if value is None else value

    @field_validator("tags", mode="before")
    @classmethod
    def _tags_default(cls, value):
        return [] if value is None else value
