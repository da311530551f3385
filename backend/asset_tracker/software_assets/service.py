from datetime import datetime
from typing import Callable
import logging

from sqlalchemy.engine import Engine

from ..core import database
from ..core.gateway import Gateway
from ..core.result import returns_result
from ..models.Employee import Employee
from ..models.HardwareAsset import HardwareAsset
from ..models.SoftwareAsset import (
    SoftwareAsset,
    SoftwareAssetCreate,
    SoftwareAssetUpdate,
    Vulnerability,
)
from .resolver import SoftwareLinkResolver
from .vulnerabilities import lookup_vulnerabilities

logger = logging.getLogger(__name__)

def _hardware(gateway: Gateway, hardware_asset_ids) -> list[HardwareAsset]:
    return [gateway.get(HardwareAsset, hardware_asset_id) for hardware_asset_id in hardware_asset_ids]

class SoftwareAssetService:
    def __init__(self, engine: Engine | None = None, clock: Callable[[], datetime] | None = None,
                 http=None):
        self.engine = engine or database.engine
        self.clock = clock
        self.http = http

    @returns_result
    def add(self, software_asset: SoftwareAssetCreate) -> SoftwareAsset:
        """Find or create the software package and link the listed hardware to it."""
        candidate = SoftwareAsset.build(
            name=software_asset.name,
            version=software_asset.version,
            manufacturer=software_asset.manufacturer,
        ).unwrap()

        def write(gateway):
            hardware_assets = _hardware(gateway, software_asset.hardware_asset_ids)
            return SoftwareLinkResolver(gateway, self.clock).resolve(candidate, hardware_assets)

        with database.unit_of_work(self.engine) as gateway:
            canonical = gateway.transaction(write)
        logger.info("Software asset %s linked to %d hardware assets",
                    canonical.id, len(software_asset.hardware_asset_ids))
        return canonical

    @returns_result
    def get_by_id(self, software_asset_id: int) -> SoftwareAsset:
        with database.unit_of_work(self.engine) as gateway:
            return gateway.get(SoftwareAsset, software_asset_id)

    @returns_result
    def get_existing(self, name: str, version: str) -> SoftwareAsset | None:
        with database.unit_of_work(self.engine) as gateway:
            return SoftwareLinkResolver(gateway).find_canonical(name.strip(), version.strip())

    @returns_result
    def get_all(self) -> list[SoftwareAsset]:
        with database.unit_of_work(self.engine) as gateway:
            return gateway.query(SoftwareAsset, order_by=SoftwareAsset.id)

    @returns_result
    def get_all_for(self, employee_id: int) -> list[SoftwareAsset]:
        """Software installed on any hardware held by the employee."""
        with database.unit_of_work(self.engine) as gateway:
            gateway.get(Employee, employee_id)
            software_ids = {
                hardware_asset.software_asset_id
                for hardware_asset in gateway.query(HardwareAsset, HardwareAsset.employee_id == employee_id)
                if hardware_asset.software_asset_id is not None
            }
            if not software_ids:
                return []
            return gateway.query(SoftwareAsset, SoftwareAsset.id.in_(software_ids),
                                 order_by=SoftwareAsset.id)

    @returns_result
    def update(self, software_asset_id: int, software_asset: SoftwareAssetUpdate) -> SoftwareAsset:
        """Update a software asset.

        Renaming onto an existing name and version merges this record into the
        existing one; its hardware links move over and the canonical record is
        returned.
        """
        changes = software_asset.model_dump(exclude_unset=True, exclude={"hardware_asset_ids"})
        cleaned = SoftwareAsset.clean(partial=True, **changes)

        def write(gateway):
            db_software = gateway.get(SoftwareAsset, software_asset_id)
            resolver = SoftwareLinkResolver(gateway, self.clock)
            hardware_assets = _hardware(gateway, software_asset.hardware_asset_ids or [])

            name = cleaned.get("name", db_software.name)
            version = cleaned.get("version", db_software.version)
            existing = resolver.find_canonical(name, version)
            if existing is not None and existing.id != db_software.id:
                descriptive = {k: v for k, v in cleaned.items() if k not in ("name", "version")}
                if descriptive:
                    existing.apply(**descriptive).unwrap()
                    gateway.update(existing)
                target = resolver.merge(db_software, existing)
            else:
                db_software.apply(**cleaned).unwrap()
                gateway.update(db_software)
                target = db_software

            for hardware_asset in hardware_assets:
                resolver.link(hardware_asset, target)
            return target

        with database.unit_of_work(self.engine) as gateway:
            updated = gateway.transaction(write)
        logger.info("Software asset %s updated (canonical %s)", software_asset_id, updated.id)
        return updated

    @returns_result
    def delete(self, software_asset_id: int) -> bool:
        def write(gateway):
            gateway.get(SoftwareAsset, software_asset_id)
            resolver = SoftwareLinkResolver(gateway, self.clock)
            for hardware_asset in gateway.query(HardwareAsset, HardwareAsset.software_asset_id == software_asset_id):
                resolver.unlink(hardware_asset)
            gateway.delete(SoftwareAsset, software_asset_id)

        with database.unit_of_work(self.engine) as gateway:
            gateway.transaction(write)
        logger.info("Software asset %s deleted", software_asset_id)
        return True

    @returns_result
    def get_vulnerabilities(self, software_asset_id: int) -> list[Vulnerability]:
        with database.unit_of_work(self.engine) as gateway:
            version = gateway.get(SoftwareAsset, software_asset_id).version
        return lookup_vulnerabilities(version, http=self.http)
