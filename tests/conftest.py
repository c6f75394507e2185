"""Pytest configuration and shared fixtures."""

import pytest

from idform import FormEngine, GeoPoint, UserRecord

VALID_VALUES = {
    "userInfo.firstName": "Juan",
    "userInfo.middleName": "Perez",
    "userInfo.curp": "GOMC800101HDFRRRA9",
    "userInfo.rfc": "GOMC800101ABC",
    "address.street": "Av. Reforma 100",
    "address.zipCode": "64000",
    "address.externalNumber": "123",
    "address.state": "NL",
    "address.province": "Monterrey",
    "address.neighborhood": "Centro",
}


@pytest.fixture
def valid_values():
    """Valid values for every required path of the identification form."""
    return dict(VALID_VALUES)


@pytest.fixture
def engine():
    return FormEngine()


@pytest.fixture
def filled_engine(engine, valid_values):
    """Engine with every required field valid and optional fields left empty."""
    for path, value in valid_values.items():
        engine.set_field(path, value)
    return engine


@pytest.fixture
def users():
    return [
        UserRecord(id=3, name="Clementine Bauch", email="nathan@yesenia.net",
                   website="ramiro.info", geo=GeoPoint(lat="-68.6102", lng="-47.0653")),
        UserRecord(id=1, name="Leanne Graham", email="sincere@april.biz",
                   website="hildegard.org", geo=GeoPoint(lat="-37.3159", lng="81.1496")),
        UserRecord(id=2, name="Ervin Howell", email="shanna@melissa.tv",
                   website="anastasia.net", geo=GeoPoint(lat="-43.9509", lng="-34.4618")),
    ]
