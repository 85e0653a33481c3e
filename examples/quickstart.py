"""cqlstruct Quickstart Example.

Demonstrates basic usage:
- Record definition with explicit keys
- Record → row mapping with wire values
- Column schema inference
- Row → record with JSON element decoding

Usage:
    python examples/quickstart.py
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Annotated
from uuid import UUID, uuid4

from pydantic import BaseModel

from cqlstruct import (
    Counter,
    Key,
    Record,
    fields_and_values,
    type_name,
    wire_values,
)


# =============================================================================
# Record Definitions
# =============================================================================

class Author(BaseModel):
    """Embedded value without a native column type (stored as JSON text)."""

    name: str
    email: str


class Article(Record):
    """Article stored in a wide-column table."""

    id: Annotated[UUID, Key("article_id")]
    title: str
    published_at: datetime
    views: Counter = Counter(0)
    authors: list[Author] = []
    ratings: dict[str, float] = {}


# =============================================================================
# Demo
# =============================================================================

def main() -> None:
    article = Article(
        id=uuid4(),
        title="Columns all the way down",
        published_at=datetime.now(timezone.utc),
        authors=[Author(name="Ada", email="ada@example.com")],
        ratings={"clarity": 4.5},
    )

    print("Schema:")
    for key, column_type in Article.column_schema().items():
        print(f"  {key:<14} {column_type}")

    keys, values, _ = fields_and_values(article)
    row = dict(zip(keys, wire_values(values)))
    print("\nRow to write:")
    for key, value in row.items():
        print(f"  {key:<14} {value!r}  ({type_name(value)})")

    restored = Article.from_mapping(row)
    print("\nRestored authors:", restored.authors)
    assert restored == article


if __name__ == "__main__":
    main()
