# _*_ coding: utf-8 _*_
from galaxy_api.database.base import Base, Database

__all__ = [
    "Base",
    "Database",
]
