# _*_ coding: utf-8 _*_
from sqlalchemy import Column, String, Text, ForeignKey
from galaxy_api.database.base import Base

__all__ = [
    "TagType",
    "Tag",
    "TagComponent",
]


class TagType(Base):
    __tablename__ = "TagType"

    id = Column('Id', String(36), primary_key=True)
    name = Column('Name', String(100), nullable=False)  # 예: Component
    system_name = Column('SystemName', String(50), nullable=True)


class Tag(Base):
    __tablename__ = "Tag"

    id = Column('Id', String(36), primary_key=True)
    name = Column('Name', String(200), nullable=False)
    description = Column('Description', Text, nullable=True)
    tag_type_id = Column('TagTypeId', String(36), ForeignKey('TagType.Id'), nullable=False)


class TagComponent(Base):
    """Tag <-> Component 연결 (조회 시점의 행이 곧 태그의 컴포넌트 목록)"""
    __tablename__ = "CoMIT_TagComponent"

    tag_id = Column('TagId', String(36), ForeignKey('Tag.Id'), primary_key=True)
    component_id = Column('ComponentId', String(36), ForeignKey('CoMIT_Component.Id'), primary_key=True)
