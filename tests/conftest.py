"""
Shared fixtures for the farmer registry tests
"""
import pytest


class FakeClock:
    """Settable clock returning epoch seconds"""

    def __init__(self, now: float = 1_700_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


def make_farmer(name, farm_type="Grains", farm_size="1", created_at="2025-01-01T00:00:00Z", **extra):
    farmer = {
        "name": name,
        "email": f"{name.lower().replace(' ', '.')}@example.com",
        "subcity": extra.pop("subcity", "Bole"),
        "phone": extra.pop("phone", "0911000000"),
        "farmName": extra.pop("farmName", f"{name} Farm"),
        "farmType": farm_type,
        "farmSize": farm_size,
        "createdAt": created_at,
    }
    farmer.update(extra)
    return farmer


@pytest.fixture
def farmers():
    return [
        make_farmer("Abebe Kebede", "Grains", "10", "2025-03-01T08:00:00Z", subcity="Yeka"),
        make_farmer("Sara Tesfaye", "Vegetables", "2.5", "2025-01-15T08:00:00Z", farmName="Green Acres"),
        make_farmer("Dawit Alemu", "Livestock", "abc", "2025-02-10T08:00:00Z"),
        make_farmer("Hana Girma", "Grains", "4", "2025-04-20T08:00:00Z", email="hana@farm.et"),
        make_farmer("Yonas Bekele", "Fruits", "7", "2024-12-31T08:00:00Z"),
    ]
