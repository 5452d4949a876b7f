"""
pytest configuration for the modbus_rtu_tcp test suite
"""

import sys
from pathlib import Path

import pytest

# Add src directory to Python path for imports
sys.path.insert(0, str(Path(__file__).parent / "src"))


# Custom markers
def pytest_configure(config):
    """Configure custom pytest markers"""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as requiring loopback TCP connections"
    )


def pytest_collection_modifyitems(config, items):
    """Mark every test without the integration marker as a unit test"""
    for item in items:
        if "loopback" in str(item.fspath).lower():
            item.add_marker(pytest.mark.integration)
        if item.get_closest_marker("integration") is None:
            item.add_marker(pytest.mark.unit)
