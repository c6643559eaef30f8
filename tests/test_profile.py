"""Tests for profile service."""

import pytest
from decimal import Decimal

from drivetrack.domain.errors import ValidationError

from conftest import USER


def test_new_user_has_empty_profile(profile_service):
    profile = profile_service.get_profile(USER)

    assert profile.user_id == USER
    assert profile.name is None
    assert not profile.has_fuel_consumption


def test_update_keeps_fields_not_given(profile_service):
    profile_service.update_profile(USER, name="Ana", vehicle_model="Onix")
    profile_service.update_profile(USER, fuel_consumption=Decimal("12.5"))

    profile = profile_service.get_profile(USER)
    assert profile.name == "Ana"
    assert profile.vehicle_model == "Onix"
    assert profile.fuel_consumption == Decimal("12.5")


@pytest.mark.parametrize("consumption", [Decimal("0"), Decimal("-3")])
def test_consumption_must_be_positive(profile_service, consumption):
    with pytest.raises(ValidationError):
        profile_service.update_profile(USER, fuel_consumption=consumption)
