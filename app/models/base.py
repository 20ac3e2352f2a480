from typing import Annotated, Any, Optional

from bson import ObjectId
from pydantic import BaseModel, BeforeValidator, ConfigDict, Field


def _stringify_id(value: Any) -> str:
    if isinstance(value, ObjectId):
        return str(value)
    return value


# Ids are kept as strings on the Python side; Mongo "_id" maps onto "id"
PyObjectId = Annotated[str, BeforeValidator(_stringify_id)]


class MongoBaseModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: Optional[PyObjectId] = Field(default=None, alias="_id")

    @classmethod
    def from_mongo(cls, doc: Optional[dict]):
        if doc is None:
            return None
        return cls.model_validate(doc)

    def to_mongo(self) -> dict:
        data = self.model_dump(exclude={"id"})
        if self.id is not None:
            data["_id"] = ObjectId(self.id)
        return data
