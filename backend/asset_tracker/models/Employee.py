from typing import TYPE_CHECKING, ClassVar, Optional

from sqlmodel import Field, Relationship, SQLModel

from ..validation.validators import clean_email, clean_first_name, clean_last_name
from .base import ValidatedModel

if TYPE_CHECKING:
    from .Account import Account
    from .Department import Department
    from .HardwareAsset import HardwareAsset

class Employee(ValidatedModel, table=True):
    __tablename__ = "employees"

    field_rules: ClassVar[dict] = {
        "first_name": clean_first_name,
        "last_name": clean_last_name,
        "email": clean_email,
    }

    id: int | None = Field(default=None, primary_key=True)
    first_name: str = Field(max_length=64)
    last_name: str = Field(max_length=64)
    email: str = Field(max_length=64, index=True)
    # Required on persistence, checked by the service
    department_id: int | None = Field(default=None, foreign_key="departments.id", index=True)

    department: Optional["Department"] = Relationship(back_populates="employees")
    hardware_assets: list["HardwareAsset"] = Relationship(back_populates="employee")
    account: Optional["Account"] = Relationship(
        back_populates="employee", sa_relationship_kwargs={"uselist": False}
    )

    @property
    def name(self) -> str:
        return f"{self.first_name} {self.last_name}"

# ==========================================
# DTOs
# ==========================================

class EmployeeCreate(SQLModel):
    first_name: str
    last_name: str
    email: str
    department_id: int | None = None

class EmployeeUpdate(SQLModel):
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    department_id: int | None = None
