class PersonStoreError(Exception):
    """Base exception for person store errors"""

    status_code = 500
    detail = "Person store error"

    def __init__(self, detail: str | None = None):
        if detail is not None:
            self.detail = detail
        super().__init__(self.detail)


class PersonNotFoundError(PersonStoreError):
    status_code = 404
    detail = "Person not found"

    def __init__(self, person_id: int):
        self.person_id = person_id
        super().__init__(f"Person with id {person_id} not found")


class PersonConflictError(PersonStoreError):
    status_code = 409
    detail = "Person already exists"

    def __init__(self, person_id: int):
        self.person_id = person_id
        super().__init__(f"Person with id {person_id} already exists")


class StoreLockError(PersonStoreError):
    """Raised once a write section failed and left the collection unusable"""

    status_code = 500
    detail = "Person store lock is poisoned"


class PersonIdExhaustedError(PersonStoreError):
    status_code = 409
    detail = "No person ids left to assign"
