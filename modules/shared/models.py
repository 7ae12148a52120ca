from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Wire format is camelCase; attributes stay snake_case."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_json(self, exclude=None) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True, exclude=exclude)
