"""Find-or-create for software packages and hardware link synchronisation.

A software package is identified by its ``(name, version)`` pair. Every
hardware asset that reports the same pair is linked to the single canonical
record; the resolver never inserts a second row for a known pair.
"""
from datetime import datetime, timezone
from typing import Callable, Iterable
import logging

from ..core.gateway import Gateway
from ..models.HardwareAsset import HardwareAsset
from ..models.SoftwareAsset import SoftwareAsset

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SoftwareLinkResolver:
    def __init__(self, gateway: Gateway, clock: Callable[[], datetime] | None = None):
        self.gateway = gateway
        self.clock = clock or utcnow
        # Canonical records seen during this unit of work
        self._registry: dict[tuple[str, str], SoftwareAsset] = {}

    def find_canonical(self, name: str, version: str) -> SoftwareAsset | None:
        key = (name, version)
        if key in self._registry:
            return self._registry[key]
        match = self.gateway.first(
            SoftwareAsset,
            SoftwareAsset.name == name,
            SoftwareAsset.version == version,
        )
        if match is not None:
            self._registry[key] = match
        return match

    def resolve(self, candidate: SoftwareAsset,
                hardware_assets: Iterable[HardwareAsset] = ()) -> SoftwareAsset:
        """Return the canonical record for ``candidate`` and link the hardware to it."""
        canonical = self.find_canonical(candidate.name, candidate.version)
        if canonical is None:
            canonical = self.gateway.insert(candidate)
            self._registry[canonical.key] = canonical
            logger.info("Created software asset %s (%s %s)", canonical.id, canonical.name, canonical.version)
        else:
            logger.debug("Reusing software asset %s for %s %s", canonical.id, canonical.name, canonical.version)

        for hardware_asset in hardware_assets:
            self.link(hardware_asset, canonical)
        return canonical

    def link(self, hardware_asset: HardwareAsset, software_asset: SoftwareAsset) -> None:
        hardware_asset.software_asset_id = software_asset.id
        hardware_asset.software_link_date = self.clock()
        self.gateway.update(hardware_asset)

    def unlink(self, hardware_asset: HardwareAsset) -> None:
        hardware_asset.software_asset_id = None
        hardware_asset.software_link_date = None
        self.gateway.update(hardware_asset)

    def merge(self, duplicate: SoftwareAsset, canonical: SoftwareAsset) -> SoftwareAsset:
        """Move every hardware link from ``duplicate`` onto ``canonical`` and drop it."""
        linked = self.gateway.query(HardwareAsset, HardwareAsset.software_asset_id == duplicate.id)
        for hardware_asset in linked:
            self.link(hardware_asset, canonical)
        self._registry.pop(duplicate.key, None)
        self.gateway.delete(SoftwareAsset, duplicate.id)
        logger.info("Merged software asset %s into %s", duplicate.id, canonical.id)
        return canonical
