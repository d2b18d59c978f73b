from sqlmodel import SQLModel, Field
from sqlalchemy import UniqueConstraint
from typing import Optional


class Category(SQLModel, table=True):
    __tablename__ = "categories"

    # one name per user; default seeding relies on this to stay duplicate-free
    __table_args__ = (
        UniqueConstraint("user_id", "name", name="uq_categories_user_name"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True, nullable=False)
    name: str = Field(nullable=False)
    color: str = Field(default="blue")  # tailwind color name or hex code
