# _*_ coding: utf-8 _*_
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """snake_case 필드를 camelCase JSON으로 주고받는 기본 모델"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    def to_json_dict(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")
