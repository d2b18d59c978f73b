from pydantic import BaseModel, ConfigDict


class CategoryCreate(BaseModel):
    name: str
    color: str = "blue"


class CategoryRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    name: str
    color: str
