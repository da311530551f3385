from datetime import date, datetime
from typing import TYPE_CHECKING, ClassVar, Optional

from sqlmodel import Field, Relationship, SQLModel

from ..validation import validators
from .SoftwareAsset import SoftwareAssetCreate
from .base import ValidatedModel

if TYPE_CHECKING:
    from .Employee import Employee
    from .SoftwareAsset import SoftwareAsset

class HardwareAsset(ValidatedModel, table=True):
    __tablename__ = "hardware_assets"

    field_rules: ClassVar[dict] = {
        "name": validators.clean_hardware_name,
        "model": validators.clean_hardware_model,
        "manufacturer": validators.clean_hardware_manufacturer,
        "type": validators.clean_hardware_type,
        "ip_address": validators.clean_ip_address,
        "purchase_date": validators.clean_purchase_date,
        "notes": validators.clean_notes,
    }
    # Software links are written by the SoftwareLinkResolver only
    guarded_fields: ClassVar[frozenset[str]] = frozenset(
        {"id", "software_asset_id", "software_link_date"}
    )

    id: int | None = Field(default=None, primary_key=True)
    name: str = Field(max_length=64)
    model: str = Field(max_length=64)
    manufacturer: str = Field(max_length=64)
    type: str = Field(max_length=64)
    ip_address: str = Field(max_length=64)
    purchase_date: date | None = Field(default=None, nullable=True)
    notes: str | None = Field(default=None, max_length=64, nullable=True)
    # Required on persistence, checked by the service
    employee_id: int | None = Field(default=None, foreign_key="employees.id", index=True)
    software_asset_id: int | None = Field(default=None, foreign_key="software_assets.id", index=True)
    software_link_date: datetime | None = Field(default=None, nullable=True)

    employee: Optional["Employee"] = Relationship(back_populates="hardware_assets")
    software_asset: Optional["SoftwareAsset"] = Relationship(back_populates="hardware_assets")

# ==========================================
# DTOs
# ==========================================

class HardwareAssetCreate(SQLModel):
    name: str
    model: str
    manufacturer: str
    type: str
    ip_address: str
    purchase_date: date | None = None
    notes: str | None = None
    employee_id: int | None = None
    software: SoftwareAssetCreate | None = None

class HardwareAssetUpdate(SQLModel):
    name: str | None = None
    model: str | None = None
    manufacturer: str | None = None
    type: str | None = None
    ip_address: str | None = None
    purchase_date: date | None = None
    notes: str | None = None
    employee_id: int | None = None
    software: SoftwareAssetCreate | None = None
    unlink_software: bool = False
