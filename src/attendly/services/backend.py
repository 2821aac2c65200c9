"""Document backend interface shared by the class and profile stores."""

from typing import Protocol

Row = dict[str, object]


class DocumentBackend(Protocol):
    """Access path to the hosted database.

    Implementations differ only in the credentials they run with. The
    privileged path bypasses row-level security; the constrained path is
    subject to it. Selection happens once when the container is built.
    """

    mode: str

    def get(self, collection: str, doc_id: str) -> Row | None:
        """Return one row by id, if present."""

    def find(self, collection: str, field: str, value: object) -> list[Row]:
        """Return rows whose field equals value."""

    def find_in(self, collection: str, field: str, values: list[str]) -> list[Row]:
        """Return rows whose field is one of values."""

    def find_containing(self, collection: str, field: str, value: str) -> list[Row]:
        """Return rows whose array field contains value."""

    def insert(self, collection: str, data: Row) -> Row:
        """Insert a row and return it with its generated id."""

    def update(self, collection: str, doc_id: str, data: Row) -> Row | None:
        """Update a row and return it, or None when it does not exist."""

    def upsert(self, collection: str, doc_id: str, data: Row) -> Row:
        """Merge data into the row with doc_id, creating it if needed."""

    def delete(self, collection: str, doc_id: str) -> bool:
        """Delete a row and return True if one was removed."""

    def add_to_set(
        self, collection: str, doc_id: str, field: str, value: str
    ) -> Row | None:
        """Atomically append value to an array field unless already present.

        Returns the updated row, or None when the row is missing or already
        holds the value.
        """

    def remove_from_set(
        self, collection: str, doc_id: str, field: str, value: str
    ) -> Row | None:
        """Atomically remove value from an array field.

        Returns the updated row, or None when the row is missing or does not
        hold the value.
        """
