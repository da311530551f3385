import unittest
from unittest.mock import MagicMock

from asset_tracker.core.database import unit_of_work
from asset_tracker.models import HardwareAsset, SoftwareAsset
from asset_tracker.software_assets.resolver import SoftwareLinkResolver

from .fixtures import HOLDER_ID, LINK_TIME, fixed_clock, make_engine


def windows_10(**overrides) -> SoftwareAsset:
    fields = {"name": "Windows 10", "version": "22H2", "manufacturer": "Microsoft"}
    fields.update(overrides)
    return SoftwareAsset.build(**fields).unwrap()


def hardware(name="Laptop") -> HardwareAsset:
    return HardwareAsset.build(
        name=name, model="Latitude 7400", manufacturer="Dell", type="x64", ip_address="192.168.0.1",
    ).unwrap()


class TestResolverWithMockGateway(unittest.TestCase):

    def setUp(self):
        self.gateway = MagicMock()
        self.gateway.first.return_value = None

        def insert(entity):
            entity.id = 10
            return entity

        self.gateway.insert.side_effect = insert
        self.resolver = SoftwareLinkResolver(self.gateway, clock=fixed_clock)

    def test_new_software_is_inserted_and_linked(self):
        laptop = hardware()
        canonical = self.resolver.resolve(windows_10(), [laptop])

        self.gateway.insert.assert_called_once()
        self.assertEqual(canonical.id, 10)
        self.assertEqual(laptop.software_asset_id, 10)
        self.assertEqual(laptop.software_link_date, LINK_TIME)
        self.gateway.update.assert_called_once_with(laptop)

    def test_known_software_is_reused(self):
        existing = windows_10()
        existing.id = 3
        self.gateway.first.return_value = existing

        laptop = hardware()
        canonical = self.resolver.resolve(windows_10(manufacturer="Microsoft Corp."), [laptop])

        self.gateway.insert.assert_not_called()
        self.assertIs(canonical, existing)
        self.assertEqual(laptop.software_asset_id, 3)

    def test_registry_avoids_repeat_lookups(self):
        first = self.resolver.resolve(windows_10(), [hardware("Laptop")])
        second = self.resolver.resolve(windows_10(), [hardware("Desktop")])

        self.assertIs(first, second)
        self.gateway.first.assert_called_once()
        self.gateway.insert.assert_called_once()

    def test_unlink_clears_link(self):
        laptop = hardware()
        self.resolver.resolve(windows_10(), [laptop])
        self.resolver.unlink(laptop)
        self.assertIsNone(laptop.software_asset_id)
        self.assertIsNone(laptop.software_link_date)

    def test_merge_moves_links_and_drops_duplicate(self):
        duplicate = windows_10(version="22H2.1")
        duplicate.id = 4
        canonical = windows_10()
        canonical.id = 3
        laptop = hardware()
        laptop.software_asset_id = 4
        self.gateway.query.return_value = [laptop]

        result = self.resolver.merge(duplicate, canonical)

        self.assertIs(result, canonical)
        self.assertEqual(laptop.software_asset_id, 3)
        self.gateway.delete.assert_called_once_with(SoftwareAsset, 4)


class TestResolverWithDatabase(unittest.TestCase):

    def setUp(self):
        self.engine = make_engine()

    def _resolve_on_new_hardware(self, name):
        with unit_of_work(self.engine) as gateway:
            def write(gw):
                asset = hardware(name)
                asset.employee_id = HOLDER_ID
                gw.insert(asset)
                return SoftwareLinkResolver(gw, fixed_clock).resolve(windows_10(), [asset])
            return gateway.transaction(write)

    def test_one_record_per_name_and_version(self):
        first = self._resolve_on_new_hardware("Laptop")
        second = self._resolve_on_new_hardware("Desktop")

        self.assertEqual(first.id, second.id)
        with unit_of_work(self.engine) as gateway:
            self.assertEqual(len(gateway.query(SoftwareAsset)), 1)
            linked = gateway.query(HardwareAsset, HardwareAsset.software_asset_id == first.id)
            self.assertEqual(len(linked), 2)


if __name__ == "__main__":
    unittest.main()
