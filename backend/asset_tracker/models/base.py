from typing import Any, Callable, ClassVar

from sqlmodel import SQLModel

from ..core.errors import FieldValidationError
from ..core.result import Result


class ValidatedModel(SQLModel):
    """Base for entities whose fields are checked when they are set.

    ``build`` and ``apply`` validate every incoming value before anything is
    assigned, so an entity never holds a partially applied change.
    """

    field_rules: ClassVar[dict[str, Callable[[Any], Any]]] = {}
    guarded_fields: ClassVar[frozenset[str]] = frozenset({"id"})

    @classmethod
    def clean(cls, partial: bool = False, **fields) -> dict[str, Any]:
        """Return canonical values for ``fields`` or raise FieldValidationError.

        Unless ``partial`` is set, every ruled field is checked, so a missing
        required field fails the same way an empty one does.
        """
        if not partial:
            fields = {**{name: None for name in cls.field_rules}, **fields}

        cleaned = {}
        for name, value in fields.items():
            if name in cls.guarded_fields:
                raise FieldValidationError(name, f"{name} cannot be assigned directly.")
            if name not in cls.model_fields:
                raise FieldValidationError(name, f"Unknown field for {cls.__name__}.")
            rule = cls.field_rules.get(name)
            cleaned[name] = rule(value) if rule else value
        return cleaned

    @classmethod
    def build(cls, **fields) -> Result:
        try:
            cleaned = cls.clean(**fields)
        except FieldValidationError as exc:
            return Result.failure(exc)
        return Result.success(cls(**cleaned))

    def apply(self, **changes) -> Result:
        try:
            cleaned = self.clean(partial=True, **changes)
        except FieldValidationError as exc:
            return Result.failure(exc)
        for name, value in cleaned.items():
            setattr(self, name, value)
        return Result.success(self)
