from pydantic import BaseModel


def reject_explicit_nulls(model: BaseModel, fields: tuple[str, ...]) -> BaseModel:
    """
    PATCH 요청에서 NOT NULL 컬럼에 명시적으로 null을 보낸 경우 거부
    - 보내지 않은 필드(None 기본값)는 허용
    """
    nulled = [
        name for name in fields
        if name in model.model_fields_set and getattr(model, name) is None
    ]
    if nulled:
        raise ValueError(f"{', '.join(nulled)} cannot be null")
    return model
