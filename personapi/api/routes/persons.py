from typing import Annotated, List

from fastapi import APIRouter, Depends, HTTPException, Path, status

from personapi.api.deps import get_store
from personapi.schemas.person import PERSON_ID_MAX, Person, PersonCreate, PersonUpdate
from personapi.services.storage.person_store import PersonStore

router = APIRouter(prefix="/api", tags=["crud_person"])

PersonId = Annotated[int, Path(ge=0, le=PERSON_ID_MAX)]


@router.get(
    "/persons", response_model=List[Person], response_model_exclude_none=True
)
async def get_persons(store: PersonStore = Depends(get_store)):
    return await store.list()


@router.get(
    "/person/{person_id}", response_model=Person, response_model_exclude_none=True
)
async def get_person(person_id: PersonId, store: PersonStore = Depends(get_store)):
    return await store.get(person_id)


@router.post(
    "/person",
    status_code=status.HTTP_201_CREATED,
    response_model=Person,
    response_model_exclude_none=True,
)
async def add_person(person: PersonCreate, store: PersonStore = Depends(get_store)):
    return await store.add(person)


@router.put(
    "/person/{person_id}", response_model=Person, response_model_exclude_none=True
)
async def update_person(
    person_id: PersonId, person: PersonUpdate, store: PersonStore = Depends(get_store)
):
    return await store.update(person_id, person)


@router.put("/person", response_model=Person, response_model_exclude_none=True)
async def update_person_by_body(
    person: PersonUpdate, store: PersonStore = Depends(get_store)
):
    """
    Update a person identified by the id carried in the body.
    """
    if person.id is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Person id is required"
        )
    return await store.update(person.id, person)


@router.delete("/person/{person_id}")
async def delete_person(person_id: PersonId, store: PersonStore = Depends(get_store)):
    await store.delete(person_id)
    return {"message": f"Person with id {person_id} deleted successfully"}
