"""
Example 01: Basic Query Execution

This example demonstrates executing statements and fetching typed rows with a Dao.
"""

from row_mapper import ConnectionConfig, Dao
import tempfile
from pathlib import Path


class Person:
    """Person populated through its constructor and one setter"""

    def __init__(self, id: int, name: str):
        self.id = id
        self.name = name
        self.email = None

    def set_email(self, email: str):
        self.email = email

    def __repr__(self):
        return f"Person(id={self.id}, name={self.name!r}, email={self.email!r})"


def main():
    # Each call opens its own connection, so use a file database
    db_path = Path(tempfile.mkdtemp()) / "people.db"
    config = ConnectionConfig(driver="sqlite", database=str(db_path))
    people = Dao.from_config(Person, config)

    people.execute("CREATE TABLE person (id INTEGER PRIMARY KEY, name TEXT, email TEXT)")
    people.execute("INSERT INTO person VALUES (?, ?, ?)", 7, "Ann", "a@x.com")
    people.execute("INSERT INTO person VALUES (?, ?, ?)", 8, "Bob", "bob@x.com")
    people.execute("INSERT INTO person VALUES (?, ?, ?)", 9, "Charlie", "charlie@x.com")

    print("=== Basic Query Execution ===\n")

    # find_one: zero or one row
    person = people.find_one("SELECT id, name, email FROM person WHERE id = ?", 7)
    print(f"find_one result: {person}")
    print(f"find_one miss: {people.find_one('SELECT * FROM person WHERE id = ?', 99)}\n")

    # find_all: rows in result order
    rows = people.find_all("SELECT * FROM person WHERE id > ? ORDER BY name DESC", 7)
    print(f"find_all result ({len(rows)} rows):")
    for p in rows:
        print(f"  - {p.name} ({p.email})")
    print()

    # Clean up
    db_path.unlink()
    db_path.parent.rmdir()


if __name__ == "__main__":
    main()
