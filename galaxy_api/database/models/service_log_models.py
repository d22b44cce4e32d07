# _*_ coding: utf-8 _*_
from sqlalchemy import Column, String, DateTime, Boolean, Text
from sqlalchemy.sql.expression import func, false
from galaxy_api.database.base import Base

__all__ = [
    "ServiceLog",
]


class ServiceLog(Base):
    __tablename__ = "ServiceLog"

    id = Column('Id', String(36), primary_key=True)
    system_name = Column('SystemName', String(100), nullable=False)  # 로그를 남긴 시스템
    system_token = Column('SystemToken', String(100), nullable=True)
    user_name = Column('UserName', String(200), nullable=True)
    log_type = Column('LogType', String(20), nullable=False)  # INFO, ERROR, ...
    is_fair_warning = Column('IsFairWarning', Boolean, nullable=False, server_default=false())
    message = Column('Message', Text, nullable=False)
    message_date = Column('MessageDate', DateTime, nullable=False, server_default=func.now())
