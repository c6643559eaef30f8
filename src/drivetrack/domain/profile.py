"""User profile domain service."""

from decimal import Decimal
from typing import Optional

from drivetrack.database.base import Database
from drivetrack.domain.entities import UserProfile
from drivetrack.domain.errors import ValidationError


class ProfileService:
    """Service for the driver's vehicle profile."""

    def __init__(self, db: Database):
        """Initialize profile service.

        Args:
            db: Database instance
        """
        self.db = db

    def get_profile(self, user_id: str) -> UserProfile:
        """Stored profile, or an empty one for new users."""
        profile = self.db.get_user_profile(user_id)
        return profile if profile is not None else UserProfile(user_id=user_id)

    def update_profile(
        self,
        user_id: str,
        name: Optional[str] = None,
        vehicle_type: Optional[str] = None,
        vehicle_model: Optional[str] = None,
        fuel_consumption: Optional[Decimal] = None,
    ) -> UserProfile:
        """Update profile fields; fields left as None keep their value.

        Args:
            user_id: Owning user
            name: Driver name
            vehicle_type: Vehicle type (e.g. "car", "motorcycle")
            vehicle_model: Vehicle model
            fuel_consumption: Average consumption in km per liter

        Returns:
            The updated profile

        Raises:
            ValidationError: If fuel consumption is not positive
        """
        if fuel_consumption is not None and fuel_consumption <= 0:
            raise ValidationError("Fuel consumption must be greater than zero")

        current = self.get_profile(user_id)
        profile = UserProfile(
            user_id=user_id,
            name=name if name is not None else current.name,
            vehicle_type=vehicle_type if vehicle_type is not None else current.vehicle_type,
            vehicle_model=(
                vehicle_model if vehicle_model is not None else current.vehicle_model
            ),
            fuel_consumption=(
                fuel_consumption
                if fuel_consumption is not None
                else current.fuel_consumption
            ),
        )
        self.db.save_user_profile(profile)
        return profile
