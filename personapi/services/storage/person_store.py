import logging
from typing import Iterable, List, Optional

from personapi.core.exceptions import (
    PersonConflictError,
    PersonIdExhaustedError,
    PersonNotFoundError,
    PersonStoreError,
)
from personapi.schemas.person import PERSON_ID_MAX, Person, PersonBase, PersonCreate
from personapi.services.storage.rwlock import ReadWriteLock

logger = logging.getLogger(__name__)

DEFAULT_SEED = (Person(id=1, name="Alice"),)


class PersonStore:
    def __init__(self, seed: Iterable[Person] = DEFAULT_SEED):
        self._persons: List[Person] = []
        self._next_id = 1
        self._lock = ReadWriteLock(passthrough=(PersonStoreError,))
        for person in seed:
            if self._index_of(person.id) is not None:
                raise PersonConflictError(person.id)
            self._persons.append(person.model_copy(deep=True))
            self._next_id = max(self._next_id, person.id + 1)

    @property
    def lock(self) -> ReadWriteLock:
        return self._lock

    def _index_of(self, person_id: int) -> Optional[int]:
        """Linear scan for the position of a person by id"""
        for index, person in enumerate(self._persons):
            if person.id == person_id:
                return index
        return None

    async def list(self) -> List[Person]:
        """Snapshot of all persons in insertion order"""
        async with self._lock.read():
            return [person.model_copy(deep=True) for person in self._persons]

    async def count(self) -> int:
        async with self._lock.read():
            return len(self._persons)

    async def get(self, person_id: int) -> Person:
        async with self._lock.read():
            index = self._index_of(person_id)
            if index is None:
                raise PersonNotFoundError(person_id)
            return self._persons[index].model_copy(deep=True)

    async def add(self, person: PersonCreate) -> Person:
        """
        Append a person to the end of the collection.

        Without an id the next unused one is assigned; ids of deleted persons
        are never handed out again. A caller-supplied id must not be taken.
        """
        async with self._lock.write():
            if person.id is None:
                if self._next_id > PERSON_ID_MAX:
                    raise PersonIdExhaustedError()
                person_id = self._next_id
            elif self._index_of(person.id) is not None:
                raise PersonConflictError(person.id)
            else:
                person_id = person.id

            stored = Person(id=person_id, **person.model_dump(exclude={"id"}))
            self._persons.append(stored)
            self._next_id = max(self._next_id, person_id + 1)

        logger.info(f"Added person {person_id}")
        return stored.model_copy(deep=True)

    async def update(self, person_id: int, person: PersonBase) -> Person:
        """Replace the fields of a stored person, keeping its id"""
        async with self._lock.write():
            index = self._index_of(person_id)
            if index is None:
                raise PersonNotFoundError(person_id)

            updated = Person(
                id=person_id, **person.model_dump(include=set(PersonBase.model_fields))
            )
            self._persons[index] = updated

        logger.info(f"Updated person {person_id}")
        return updated.model_copy(deep=True)

    async def delete(self, person_id: int) -> None:
        async with self._lock.write():
            index = self._index_of(person_id)
            if index is None:
                raise PersonNotFoundError(person_id)
            del self._persons[index]

        logger.info(f"Deleted person {person_id}")
