from collections.abc import Iterator

from org_tidy.schemas import DecorationRecord


class DecorationRegistry:
    """
    Insertion-ordered record of every annotation a tidy session created.

    Records are only ever appended, and only drain_all() empties the registry.
    Callers must check exists() before adding a visual record.
    """

    def __init__(self):
        self._records: list[DecorationRecord] = []

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[DecorationRecord]:
        return iter(list(self._records))

    def exists(self, span: tuple[int, int]) -> bool:
        """
        Whether a visual annotation already covers `span`.

        An annotation matches when it currently starts at the same offset and
        ends at or after the candidate's end. Live offsets are compared, not
        the creation-time span, so edits made since the last pass are followed.

        >>> from org_tidy.buffer import TextBuffer
        >>> from org_tidy.schemas import HideAsEmpty
        >>> buffer = TextBuffer("x" * 200)
        >>> registry = DecorationRegistry()
        >>> handle = buffer.create_annotation(99, 129, HideAsEmpty())
        >>> registry.add(DecorationRecord("visual", (99, 129), handle))
        >>> registry.exists((99, 129)), registry.exists((99, 120)), registry.exists((99, 130))
        (True, True, False)
        >>> buffer.insert(0, "y")
        >>> registry.exists((99, 129)), registry.exists((100, 130))
        (False, True)
        """
        start, end = span
        return any(
            record.handle.start == start and end <= record.handle.end
            for record in self._records
            if record.kind == "visual"
        )

    def add(self, record: DecorationRecord) -> None:
        self._records.append(record)

    def drain_all(self) -> list[DecorationRecord]:
        records, self._records = self._records, []
        return records

    def visual_records(self) -> list[DecorationRecord]:
        return [r for r in self._records if r.kind == "visual"]

    def guard_records(self) -> list[DecorationRecord]:
        return [r for r in self._records if r.kind == "boundary-guard"]
