"""
Example 02: Model Mapping

This example demonstrates materializing rows into dataclasses and Pydantic models,
with value coercion, column aliases and explicit constructor parameter names.
"""

from row_mapper import (
    ConnectionConfig,
    ConnectionManager,
    Dao,
    DescriptorResolver,
    ExplicitParameterNameDiscoverer,
    RowMaterializer,
)
from dataclasses import dataclass
from decimal import Decimal
from pydantic import BaseModel
import tempfile
from pathlib import Path


@dataclass
class UserDataclass:
    """User model using dataclass"""
    id: int
    name: str
    active: bool


class UserPydantic(BaseModel):
    """User model using Pydantic"""
    id: int
    name: str
    balance: Decimal


class Badge:
    """Plain class whose constructor names differ from the columns"""

    def __init__(self, owner, label):
        self.owner = owner
        self.label = label


def main():
    db_path = Path(tempfile.mkdtemp()) / "users.db"
    manager = ConnectionManager(ConnectionConfig(driver="sqlite", database=str(db_path)))

    setup = Dao(UserDataclass, manager)
    setup.execute("CREATE TABLE users (id INTEGER PRIMARY KEY, name TEXT, active TEXT, balance TEXT)")
    setup.execute("INSERT INTO users VALUES (?, ?, ?, ?)", 1, "Alice", "yes", "10.50")
    setup.execute("INSERT INTO users VALUES (?, ?, ?, ?)", 2, "Bob", "no", "0")

    print("=== Model Mapping ===\n")

    # Map to dataclass; 'yes'/'no' text is coerced to bool
    print("1. Dataclass Mapping:")
    for user in setup.find_all("SELECT id, name, active FROM users ORDER BY id"):
        print(f"   {user}")
    print()

    # Map to Pydantic model; TEXT balance is coerced to Decimal
    print("2. Pydantic Model Mapping:")
    users = Dao(UserPydantic, manager)
    for u in users.find_all("SELECT id, name, balance FROM users ORDER BY id"):
        print(f"   - {u.name}: {u.balance!r}")
    print()

    # Explicit parameter names plus a column alias
    print("3. Explicit Names and Aliases:")
    resolver = DescriptorResolver(ExplicitParameterNameDiscoverer({Badge: ["owner", "label"]}))
    materializer = RowMaterializer(Badge, resolver=resolver, aliases={"name": "owner"})
    badges = Dao(Badge, manager, materializer=materializer)
    for b in badges.find_all("SELECT name, 'member' AS label FROM users ORDER BY id"):
        print(f"   - {b.owner}: {b.label}")
    print()

    # Clean up
    db_path.unlink()
    db_path.parent.rmdir()


if __name__ == "__main__":
    main()
