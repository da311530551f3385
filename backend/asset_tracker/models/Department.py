from typing import TYPE_CHECKING, ClassVar

from sqlmodel import Field, Relationship, SQLModel

from ..validation.validators import clean_department_name
from .base import ValidatedModel

if TYPE_CHECKING:
    from .Employee import Employee

class Department(ValidatedModel, table=True):
    __tablename__ = "departments"

    field_rules: ClassVar[dict] = {"name": clean_department_name}

    id: int | None = Field(default=None, primary_key=True)
    name: str = Field(max_length=64, unique=True, index=True)

    employees: list["Employee"] = Relationship(back_populates="department")

class DepartmentCreate(SQLModel):
    name: str
