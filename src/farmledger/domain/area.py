"""Area domain service."""

import logging
from datetime import date
from typing import Optional

from farmledger.database.base import Database
from farmledger.domain.aggregation import project_next_date, project_next_harvests
from farmledger.domain.entities import DEFAULT_CYCLE_MONTHS, Area, CoprasHarvest
from farmledger.domain.errors import ConflictError, NotFoundError, ValidationError, area_not_found

logger = logging.getLogger(__name__)


class AreaService:
    """Service for managing copra areas and their harvest cycles."""

    def __init__(self, db: Database):
        """Initialize area service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_area(
        self,
        area_name: str,
        cycle_months: int = DEFAULT_CYCLE_MONTHS,
        last_harvest_date: Optional[date] = None,
    ) -> int:
        """Create an area.

        Args:
            area_name: Unique area name
            cycle_months: Harvest cycle length in months
            last_harvest_date: Optional date of the most recent harvest

        Returns:
            Area ID

        Raises:
            ValidationError: If the name is blank or the cycle is not positive
            ConflictError: If an area with the same name exists
        """
        area_name = (area_name or "").strip()
        if not area_name:
            raise ValidationError("Area name is required")
        if cycle_months < 1:
            raise ValidationError("Cycle months must be at least 1")
        if self.db.get_area_by_name(area_name) is not None:
            raise ConflictError(f"Area with name '{area_name}' already exists")

        next_harvest_date = None
        if last_harvest_date is not None:
            next_harvest_date = project_next_date(last_harvest_date, cycle_months)

        area_id = self.db.create_area(
            area_name=area_name,
            cycle_months=cycle_months,
            last_harvest_date=last_harvest_date,
            next_harvest_date=next_harvest_date,
        )
        logger.info("Created area %s (%s)", area_id, area_name)
        return area_id

    def get_area(self, area_id: int) -> Optional[Area]:
        return self.db.get_area(area_id)

    def require_area(self, area_id: int) -> Area:
        """Get an area or raise NotFoundError."""
        area = self.db.get_area(area_id)
        if area is None:
            raise NotFoundError(area_not_found(area_id))
        return area

    def resolve_area(self, area: str | int) -> Area:
        """Resolve an area name or ID to an area.

        Names are matched first, so an area named "2025" is found by name.

        Raises:
            NotFoundError: If no area matches
        """
        if isinstance(area, int):
            return self.require_area(area)
        found = self.db.get_area_by_name(area)
        if found is not None:
            return found
        if area.strip().isdigit():
            return self.require_area(int(area))
        raise NotFoundError(f"Area '{area}' not found")

    def list_areas(self) -> list[Area]:
        return self.db.list_areas()

    def record_harvest(self, area_id: int, harvest_date: date) -> int:
        """Record a harvest and move the area's harvest cycle forward.

        The area's last/next harvest dates only change when the harvest is
        the most recent one recorded for the area.

        Returns:
            Harvest ID
        """
        area = self.require_area(area_id)
        harvest_id = self.db.create_harvest(area_id=area_id, harvest_date=harvest_date)

        if area.last_harvest_date is None or harvest_date >= area.last_harvest_date:
            self.db.update_area_harvest_dates(
                area_id,
                last_harvest_date=harvest_date,
                next_harvest_date=project_next_date(harvest_date, area.cycle_months),
            )
        logger.info("Recorded harvest %s for area %s on %s", harvest_id, area_id, harvest_date)
        return harvest_id

    def list_harvests(self, area_id: Optional[int] = None) -> list[CoprasHarvest]:
        return self.db.list_harvests(area_id=area_id)

    def next_harvest_projections(self, months: int = DEFAULT_CYCLE_MONTHS) -> dict[int, date]:
        """Project the next harvest per area from recorded harvests."""
        return project_next_harvests(self.db.list_harvests(), months)
