from pydantic import BaseModel, Field


class PersonBase(BaseModel):
    nome: str = Field(..., min_length=1, max_length=255)
    email: str | None = None
    telefone: str | None = None


class PersonCreate(PersonBase):
    pass


class PersonUpdate(PersonBase):
    pass


class PersonResponse(PersonBase):
    id: int

    model_config = {"from_attributes": True}


class PersonDeleted(BaseModel):
    message: str
    data: PersonResponse
