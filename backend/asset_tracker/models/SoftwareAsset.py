from typing import TYPE_CHECKING, ClassVar

from pydantic import BaseModel
from sqlalchemy import UniqueConstraint
from sqlmodel import Field, Relationship, SQLModel

from ..validation.validators import (
    clean_software_manufacturer,
    clean_software_name,
    clean_software_version,
)
from .base import ValidatedModel

if TYPE_CHECKING:
    from .HardwareAsset import HardwareAsset

class SoftwareAsset(ValidatedModel, table=True):
    """One logical software package. ``(name, version)`` identifies it."""

    __tablename__ = "software_assets"
    __table_args__ = (UniqueConstraint("name", "version", name="uq_software_name_version"),)

    field_rules: ClassVar[dict] = {
        "name": clean_software_name,
        "version": clean_software_version,
        "manufacturer": clean_software_manufacturer,
    }

    id: int | None = Field(default=None, primary_key=True)
    name: str = Field(max_length=64, index=True)
    version: str = Field(max_length=64)
    manufacturer: str = Field(max_length=64)

    hardware_assets: list["HardwareAsset"] = Relationship(back_populates="software_asset")

    @property
    def key(self) -> tuple[str, str]:
        return (self.name, self.version)

# ==========================================
# DTOs
# ==========================================

class SoftwareAssetCreate(SQLModel):
    name: str
    version: str
    manufacturer: str
    hardware_asset_ids: list[int] = []

class SoftwareAssetUpdate(SQLModel):
    name: str | None = None
    version: str | None = None
    manufacturer: str | None = None
    hardware_asset_ids: list[int] | None = None

class Vulnerability(BaseModel):
    cve_id: str | None = None
    description: str | None = None
    severity: str | None = None
