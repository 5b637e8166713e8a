"""Unit tests for default_device – single write attempt, failures as results."""

from default_device import DefaultDeviceController
from device_query import DeviceQueryEngine
from models import Direction


def test_accepted_write_is_seen_by_next_query(scenario_system):
    assert DefaultDeviceController(scenario_system).set_default(Direction.OUTPUT, 2) is True

    devices = DeviceQueryEngine(scenario_system).list_devices(Direction.OUTPUT)
    assert [d.id for d in devices if d.is_default] == [2]


def test_input_direction_is_passed_through(scenario_system):
    DefaultDeviceController(scenario_system).set_default(Direction.INPUT, 1)
    assert scenario_system.set_calls == [(Direction.INPUT, 1)]


def test_removed_device_write_fails_and_listing_reflects_truth(scenario_system):
    scenario_system.remove(2)

    assert DefaultDeviceController(scenario_system).set_default(Direction.OUTPUT, 2) is False

    devices = DeviceQueryEngine(scenario_system).list_devices(Direction.OUTPUT)
    assert 2 not in [d.id for d in devices]


def test_rejected_write_is_not_retried(scenario_system):
    scenario_system.rejected_writes.add(2)

    assert DefaultDeviceController(scenario_system).set_default(Direction.OUTPUT, 2) is False
    assert scenario_system.set_calls == [(Direction.OUTPUT, 2)]
    assert scenario_system.defaults[Direction.OUTPUT] == 1
