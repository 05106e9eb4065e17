"""Entry point to the check-in engine for a single request."""
import logging
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Tuple
from flask import current_app, has_app_context
from checkin import db
from checkin.models.area import CheckInArea
from checkin.models.campus import Campus, Kiosk
from checkin.models.group import CheckInGroup, GroupLocation
from checkin.models.location import Location
from checkin.models.template import CheckInTemplate
from checkin.services.configuration import ConfigurationData
from checkin.services.opportunities import OpportunityCollection
from checkin.services.opportunity_builder import Clock, OpportunityBuilder, campus_now
from checkin.services.search_provider import DEFAULT_MAX_RESULTS
from checkin.utils.validators import ConfigurationError

logger = logging.getLogger(__name__)

class CheckInDirector:
    """Owns the database session and clock used while resolving check-in."""

    def __init__(
        self,
        session=None,
        clock: Clock = campus_now,
        default_max_results: Optional[int] = None,
        grade_transition: Optional[Tuple[int, int]] = None
    ):
        self.session = session or db.session
        self.clock = clock

        settings = current_app.config if has_app_context() else {}
        self.default_max_results = (
            default_max_results if default_max_results is not None
            else settings.get('CHECKIN_DEFAULT_MAX_RESULTS', DEFAULT_MAX_RESULTS)
        )
        self.grade_transition = tuple(
            grade_transition or settings.get('GRADE_TRANSITION_DATE', (6, 1))
        )

    def now(self, campus: Optional[Campus] = None) -> datetime:
        return self.clock(campus)

    def get_configuration_summaries(self) -> List[CheckInTemplate]:
        """Active check-in templates ordered by name."""
        return self.session.query(CheckInTemplate).filter(
            CheckInTemplate.is_active.is_(True)
        ).order_by(CheckInTemplate.name, CheckInTemplate.id).all()

    def get_configuration_data(self, template: Optional[CheckInTemplate]) -> ConfigurationData:
        if template is None:
            raise ConfigurationError('Check-in configuration was not found.')
        return ConfigurationData.from_template(template)

    def get_kiosk_areas(self, kiosk: Kiosk) -> List[CheckInArea]:
        """Attendance taking areas with a group meeting at one of the kiosk's locations."""
        location_ids = kiosk.get_all_location_ids()
        if not location_ids:
            return []

        return self.session.query(CheckInArea).join(
            CheckInGroup, CheckInGroup.area_id == CheckInArea.id
        ).join(
            GroupLocation, GroupLocation.group_id == CheckInGroup.id
        ).filter(
            GroupLocation.location_id.in_(location_ids),
            CheckInArea.is_active.is_(True),
            CheckInArea.takes_attendance.is_(True)
        ).distinct().order_by(CheckInArea.name, CheckInArea.id).all()

    def get_check_in_area_summaries(
        self,
        kiosk: Optional[Kiosk] = None,
        template: Optional[CheckInTemplate] = None
    ) -> List[Dict]:
        """Areas of one template or of every active template.

        With a kiosk only the areas that can be used at that kiosk are
        returned.
        """
        templates = [template] if template is not None else self.get_configuration_summaries()

        areas: Dict[int, CheckInArea] = {}
        for item in templates:
            for area in item.areas.filter(
                CheckInArea.is_active.is_(True),
                CheckInArea.takes_attendance.is_(True)
            ).order_by(CheckInArea.name, CheckInArea.id):
                areas.setdefault(area.id, area)

        if kiosk is not None:
            kiosk_area_ids = {area.id for area in self.get_kiosk_areas(kiosk)}
            areas = {area_id: area for area_id, area in areas.items() if area_id in kiosk_area_ids}

        return [
            {
                'guid': area.guid,
                'name': area.name,
                'primary_template_guids': [area.template.guid] if area.template else []
            }
            for area in areas.values()
        ]

    def get_all_opportunities(
        self,
        areas: Iterable[CheckInArea],
        kiosk: Optional[Kiosk] = None,
        locations: Optional[Iterable[Location]] = None
    ) -> OpportunityCollection:
        """Every opportunity open now for anyone at the kiosk or locations."""
        builder = OpportunityBuilder(self.session, self.clock)
        opportunities = builder.build(list(areas), kiosk=kiosk, locations=locations)

        logger.debug(
            'Built opportunities with %d areas, %d groups, %d locations, %d schedules',
            len(opportunities.areas), len(opportunities.groups),
            len(opportunities.locations), len(opportunities.schedules)
        )

        return opportunities
