from pydantic import BaseModel, Field

# ids are unsigned 32-bit integers
PERSON_ID_MAX = 2**32 - 1


class PersonBase(BaseModel):
    name: str
    age: int | None = Field(default=None, ge=0)
    date: str | None = None


class PersonCreate(PersonBase):
    id: int | None = Field(default=None, ge=0, le=PERSON_ID_MAX)


# an id in an update body only addresses the person, it never changes it
PersonUpdate = PersonCreate


class Person(PersonBase):
    id: int = Field(ge=0, le=PERSON_ID_MAX)
