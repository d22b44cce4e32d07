# _*_ coding: utf-8 _*_
from sqlalchemy import Column, String
from galaxy_api.database.base import Base, JsonText

__all__ = [
    "MessageQuery",
]


class MessageQuery(Base):
    __tablename__ = "CoMIT_MessageQuery"

    id = Column('Id', String(36), primary_key=True)
    name = Column('Name', String(200), nullable=False)
    user_id = Column('UserId', String(200), nullable=False, index=True)  # 디렉토리 사용자 ID
    query_data = Column('QueryData', JsonText, nullable=True)
