from datetime import datetime
from typing import Callable
import logging

from sqlalchemy.engine import Engine

from ..core import database
from ..core.errors import RelationshipPreconditionError
from ..core.gateway import Gateway
from ..core.result import returns_result
from ..models.Employee import Employee
from ..models.HardwareAsset import HardwareAsset, HardwareAssetCreate, HardwareAssetUpdate
from ..models.SoftwareAsset import SoftwareAsset, SoftwareAssetCreate
from ..software_assets.resolver import SoftwareLinkResolver

logger = logging.getLogger(__name__)

HARDWARE_FIELDS = ("name", "model", "manufacturer", "type", "ip_address", "purchase_date", "notes")

def _require_employee(gateway: Gateway, employee_id: int | None) -> Employee:
    if employee_id is None:
        raise RelationshipPreconditionError("A hardware asset must be assigned to an employee.")
    return gateway.get(Employee, employee_id)

def _build_software(software: SoftwareAssetCreate) -> SoftwareAsset:
    return SoftwareAsset.build(
        name=software.name,
        version=software.version,
        manufacturer=software.manufacturer,
    ).unwrap()

class HardwareAssetService:
    def __init__(self, engine: Engine | None = None, clock: Callable[[], datetime] | None = None):
        self.engine = engine or database.engine
        self.clock = clock

    @returns_result
    def add(self, hardware_asset: HardwareAssetCreate) -> HardwareAsset:
        """Add a hardware asset, optionally with the software it runs.

        The software is resolved against existing records by name and version,
        so a known package is linked rather than duplicated.
        """
        db_asset = HardwareAsset.build(
            **hardware_asset.model_dump(include=set(HARDWARE_FIELDS))
        ).unwrap()
        if hardware_asset.employee_id is None:
            raise RelationshipPreconditionError("A hardware asset must be assigned to an employee.")
        software = _build_software(hardware_asset.software) if hardware_asset.software else None

        def write(gateway):
            db_asset.employee_id = _require_employee(gateway, hardware_asset.employee_id).id
            gateway.insert(db_asset)
            if software is not None:
                SoftwareLinkResolver(gateway, self.clock).resolve(software, [db_asset])
            return db_asset

        with database.unit_of_work(self.engine) as gateway:
            created = gateway.transaction(write)
        logger.info("Hardware asset %s added for employee %s", created.id, created.employee_id)
        return created

    @returns_result
    def get_by_id(self, hardware_asset_id: int) -> HardwareAsset:
        with database.unit_of_work(self.engine) as gateway:
            return gateway.get(HardwareAsset, hardware_asset_id)

    @returns_result
    def get_all_for(self, employee_id: int) -> list[HardwareAsset]:
        with database.unit_of_work(self.engine) as gateway:
            return gateway.query(HardwareAsset, HardwareAsset.employee_id == employee_id,
                                 order_by=HardwareAsset.id)

    @returns_result
    def get_all(self) -> list[HardwareAsset]:
        with database.unit_of_work(self.engine) as gateway:
            return gateway.query(HardwareAsset, order_by=HardwareAsset.id)

    @returns_result
    def update(self, hardware_asset_id: int, hardware_asset: HardwareAssetUpdate) -> HardwareAsset:
        changes = hardware_asset.model_dump(exclude_unset=True, include=set(HARDWARE_FIELDS))
        employee_changed = "employee_id" in hardware_asset.model_fields_set
        HardwareAsset.clean(partial=True, **changes)
        software = _build_software(hardware_asset.software) if hardware_asset.software else None

        def write(gateway):
            db_asset = gateway.get(HardwareAsset, hardware_asset_id)
            if employee_changed:
                db_asset.employee_id = _require_employee(gateway, hardware_asset.employee_id).id
            db_asset.apply(**changes).unwrap()
            gateway.update(db_asset)

            resolver = SoftwareLinkResolver(gateway, self.clock)
            if software is not None:
                resolver.resolve(software, [db_asset])
            elif hardware_asset.unlink_software and db_asset.software_asset_id is not None:
                resolver.unlink(db_asset)
            return db_asset

        with database.unit_of_work(self.engine) as gateway:
            updated = gateway.transaction(write)
        logger.info("Hardware asset %s updated", hardware_asset_id)
        return updated

    @returns_result
    def delete(self, hardware_asset_id: int) -> bool:
        with database.unit_of_work(self.engine) as gateway:
            gateway.transaction(lambda gw: gw.delete(HardwareAsset, hardware_asset_id))
        logger.info("Hardware asset %s deleted", hardware_asset_id)
        return True
