# _*_ coding: utf-8 _*_
"""LIKE 검색용 유틸리티."""

__all__ = [
    "ESCAPE_CHARACTER",
    "escape_wildcard",
    "contains_pattern",
]

ESCAPE_CHARACTER = "\\"

# 패턴 매칭에서 특수 의미를 갖는 문자
_WILDCARDS = ("%", "_", "[")


def escape_wildcard(value: str, escape_character: str = ESCAPE_CHARACTER) -> str:
    """
    와일드카드 문자(%, _, [)를 모두 이스케이프한다.

    이스케이프 문자 자체도 이스케이프해야 입력에 포함된 이스케이프 문자가
    뒤따르는 문자를 리터럴로 바꾸지 않는다. 동일한 `escape_character`를
    LIKE ... ESCAPE 절에 함께 전달해야 한다.

    >>> escape_wildcard("100%")
    '100\\\\%'
    """
    escaped = value.replace(escape_character, escape_character * 2)
    for wildcard in _WILDCARDS:
        escaped = escaped.replace(wildcard, escape_character + wildcard)
    return escaped


def contains_pattern(value: str, escape_character: str = ESCAPE_CHARACTER) -> str:
    """부분 일치 검색 패턴 생성 (앞뒤 공백 제거, 소문자 변환)"""
    return "%" + escape_wildcard(value.strip().lower(), escape_character) + "%"
