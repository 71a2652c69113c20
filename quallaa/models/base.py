from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for persisted records.

    Attributes are snake_case in Python; the JSON form keeps the camelCase
    keys of the on-disk ``.quallaa`` files. Either spelling is accepted on
    input.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_json_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)
