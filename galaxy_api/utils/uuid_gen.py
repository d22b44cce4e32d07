import uuid


__all__ = [
    "gen",
    "is_uuid",
]


def gen() -> str:
    return str(uuid.uuid4())


def is_uuid(value) -> bool:
    """문자열이 UUID 형식인지 확인"""
    if not isinstance(value, str) or not value:
        return False
    try:
        uuid.UUID(value)
    except ValueError:
        return False
    return True
