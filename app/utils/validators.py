import re

# RFC 4122 version 4: 버전 니블 4, variant 니블 8~b
_UUID_V4_PATTERN = re.compile(
    r"[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}",
    re.IGNORECASE,
)


def is_valid_uuid(value) -> bool:
    """v4 UUID 문자열인지 확인 (빈 값/다른 버전은 False)"""
    if not value or not isinstance(value, str):
        return False
    return _UUID_V4_PATTERN.fullmatch(value) is not None
