# _*_ coding: utf-8 _*_
from sqlalchemy import Column, String, Boolean, ForeignKey
from sqlalchemy.sql.expression import false
from galaxy_api.database.base import Base

__all__ = [
    "Group",
    "PermissionType",
    "Permission",
    "GroupSystemPermission",
    "GroupTagPermission",
]


class Group(Base):
    __tablename__ = "CoMIT_Group"

    id = Column('Id', String(36), primary_key=True)  # 디렉토리 그룹 ID
    name = Column('Name', String(200), nullable=False)  # 그룹명
    is_system_admin = Column('IsSystemAdmin', Boolean, nullable=False, server_default=false())  # 관리자 여부


class PermissionType(Base):
    __tablename__ = "PermissionType"

    id = Column('Id', String(36), primary_key=True)
    name = Column('Name', String(100), nullable=False)
    code = Column('Code', String(50), nullable=False)
    is_system_permission = Column('IsSystemPermission', Boolean, nullable=False, server_default=false())  # False: 태그 범위
    system_name = Column('SystemName', String(50), nullable=False)  # 호출 애플리케이션 (예: comit)


class Permission(Base):
    __tablename__ = "Permission"

    id = Column('Id', String(36), primary_key=True)
    permission_type_id = Column('PermissionTypeId', String(36), ForeignKey('PermissionType.Id'), nullable=False)
    value = Column('Value', Boolean, nullable=False, server_default=false())  # hasPermission


class GroupSystemPermission(Base):
    __tablename__ = "CoMIT_GroupSystemPermission"

    group_id = Column('GroupId', String(36), ForeignKey('CoMIT_Group.Id'), primary_key=True)
    permission_id = Column('PermissionId', String(36), ForeignKey('Permission.Id'), primary_key=True)


class GroupTagPermission(Base):
    __tablename__ = "CoMIT_GroupTagPermission"

    group_id = Column('GroupId', String(36), ForeignKey('CoMIT_Group.Id'), primary_key=True)
    tag_id = Column('TagId', String(36), ForeignKey('Tag.Id'), primary_key=True)
    permission_id = Column('PermissionId', String(36), ForeignKey('Permission.Id'), primary_key=True)
