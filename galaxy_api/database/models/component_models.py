# _*_ coding: utf-8 _*_
from sqlalchemy import Column, String, DateTime, Boolean, Integer, Text, ForeignKey
from sqlalchemy.sql.expression import false
from galaxy_api.database.base import Base, JsonText

__all__ = [
    "ComponentType",
    "Category",
    "Component",
    "ComponentHelp",
    "Alert",
]


class ComponentType(Base):
    __tablename__ = "CoMIT_ComponentType"

    id = Column('Id', String(36), primary_key=True)
    name = Column('Name', String(100), nullable=False)


class Category(Base):
    __tablename__ = "CoMIT_Category"

    id = Column('Id', String(36), primary_key=True)
    name = Column('Name', String(200), nullable=False)


class Component(Base):
    __tablename__ = "CoMIT_Component"

    id = Column('Id', String(36), primary_key=True)
    name = Column('Name', String(200), nullable=False)
    description = Column('Description', Text, nullable=True)
    component_type_id = Column('ComponentTypeId', String(36), ForeignKey('CoMIT_ComponentType.Id'), nullable=True)
    category_id = Column('CategoryId', String(36), ForeignKey('CoMIT_Category.Id'), nullable=True)
    mod_date = Column('ModDate', DateTime, nullable=True)  # 설정 수정 시각
    alert_email = Column('AlertEmail', String(500), nullable=True)
    alert_phone = Column('AlertPhone', String(100), nullable=True)
    disable_notify = Column('DisableNotify', Boolean, nullable=False, server_default=false())
    stage_status = Column('StageStatus', Boolean, nullable=False, server_default=false())
    auto_start = Column('AutoStart', Boolean, nullable=False, server_default=false())


class ComponentHelp(Base):
    __tablename__ = "CoMIT_ComponentHelp"

    id = Column('Id', String(36), primary_key=True)
    component_id = Column('ComponentId', String(36), ForeignKey('CoMIT_Component.Id'), nullable=False, index=True)
    support_group = Column('SupportGroup', String(200), nullable=True)
    contact_name = Column('ContactName', String(200), nullable=True)
    contact_phone = Column('ContactPhone', String(100), nullable=True)
    contact_email = Column('ContactEmail', String(200), nullable=True)
    description = Column('Description', Text, nullable=True)
    probable_inactivity = Column('ProbableInactivity', Text, nullable=True)
    resolution_notes = Column('ResolutionNotes', Text, nullable=True)
    additional_info = Column('AdditionalInfo', Text, nullable=True)
    help_schedule = Column('HelpSchedule', JsonText, nullable=True)  # JSON 문자열


class Alert(Base):
    __tablename__ = "CoMIT_Alert"

    id = Column('Id', String(36), primary_key=True)
    component_id = Column('ComponentId', String(36), ForeignKey('CoMIT_Component.Id'), nullable=False, index=True)
    type = Column('Type', String(50), nullable=False)  # Connection | Data Timeout | Queue Depth | Negative Ack
    severity = Column('Severity', String(50), nullable=True)
    message_threshold = Column('MessageThreshold', Integer, nullable=True)
    retry_wait_time = Column('RetryWaitTime', Integer, nullable=True)
    alert_schedule = Column('AlertSchedule', JsonText, nullable=True)  # JSON 문자열
    notify = Column('Notify', Boolean, nullable=False, server_default=false())
