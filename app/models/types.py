from enum import Enum as PyEnum
from typing import Type

from sqlalchemy import Enum


def enum_type(enum_cls: Type[PyEnum], name: str) -> Enum:
    """Python Enum의 value(소문자 문자열)를 그대로 저장하는 컬럼 타입"""
    return Enum(
        enum_cls,
        name=name,
        native_enum=False,
        length=32,
        values_callable=lambda members: [m.value for m in members],
    )
