from pydantic import BaseModel, ConfigDict, Field, field_validator

REQUIRED_PROPERTY_FIELDS = ("price", "size", "location")


class PropertyData(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    price: str
    size: str
    location: str
    selling_points: str | None = Field(None, alias="sellingPoints")

    @field_validator("selling_points")
    @classmethod
    def _empty_is_absent(cls, v):
        return v or None

    @classmethod
    def from_dict(cls, data) -> "PropertyData":
        """요청 body의 propertyData 객체 → PropertyData. 문제가 있으면 ValueError(ValidationError)."""
        if not isinstance(data, dict):
            raise ValueError("propertyData must be an object")
        return cls.model_validate(data)

    def to_dict(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


class AdOutput(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    short_hook: str
    ad_copy: str
    narration: str
    full_script: str
    key_points: list[str]
    cta: str

    @classmethod
    def from_arguments(cls, arguments) -> "AdOutput":
        """function call arguments(JSON 문자열 또는 dict) 검증. 실패 시 ValidationError."""
        if isinstance(arguments, (str, bytes)):
            return cls.model_validate_json(arguments)
        return cls.model_validate(arguments)

    def to_dict(self) -> dict:
        return self.model_dump()


def missing_fields(form, has_image: bool) -> list[str]:
    """폼 제출 가능 여부 판단. 이미지 + price/size/location 모두 비어있지 않아야 함."""
    missing = []
    if not has_image:
        missing.append("image")
    for name in REQUIRED_PROPERTY_FIELDS:
        if not form.get(name):
            missing.append(name)
    return missing
