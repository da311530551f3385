from typing import TYPE_CHECKING, Any, ClassVar, Optional

from sqlmodel import Field, Relationship, SQLModel

from ..core.security import hash_password, verify_password
from ..core.result import Result
from ..core.errors import FieldValidationError
from ..validation.validators import check_password, clean_email
from .base import ValidatedModel

if TYPE_CHECKING:
    from .Employee import Employee

# ==========================================
# SQLModel (Database Entity)
# ==========================================
class Account(ValidatedModel, table=True):
    __tablename__ = "accounts"

    field_rules: ClassVar[dict] = {"email": clean_email}
    # is_admin only changes through promote_to_admin
    guarded_fields: ClassVar[frozenset[str]] = frozenset({"id", "is_admin", "password_hash"})

    id: int | None = Field(default=None, primary_key=True)
    email: str = Field(max_length=64, unique=True, index=True)
    password_hash: str
    employee_id: int | None = Field(default=None, foreign_key="employees.id", unique=True)
    is_admin: bool = Field(default=False)

    employee: Optional["Employee"] = Relationship(back_populates="account")

    @classmethod
    def clean(cls, partial: bool = False, **fields) -> dict[str, Any]:
        password_given = "password" in fields
        password = fields.pop("password", None)
        cleaned = super().clean(partial=partial, **fields)
        if password_given or not partial:
            cleaned["password_hash"] = hash_password(check_password(password))
        return cleaned

    def set_password(self, password: str) -> Result:
        try:
            self.password_hash = hash_password(check_password(password))
        except FieldValidationError as exc:
            return Result.failure(exc)
        return Result.success(self)

    def verify_password(self, password: str) -> bool:
        return verify_password(password, self.password_hash)

# ==========================================
# DTOs
# ==========================================

class AccountCreate(SQLModel):
    email: str
    password: str
    employee_id: int | None = None

class AccountUpdate(SQLModel):
    email: str | None = None
    password: str | None = None
    employee_id: int | None = None
