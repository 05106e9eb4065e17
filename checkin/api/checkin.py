"""Check-in API - kiosk facing endpoints."""
import logging
from flask import Blueprint, current_app, request
from checkin import db, limiter
from checkin.models.area import CheckInArea
from checkin.models.campus import Kiosk
from checkin.models.location import Location
from checkin.models.template import CheckInTemplate, FamilySearchMode
from checkin.services.director import CheckInDirector
from checkin.services.session import CheckInSession
from checkin.utils.helpers import success_response, error_response
from checkin.utils.decorators import require_fields
from checkin.utils.validators import CheckInError, ConfigurationError, ValidationError

logger = logging.getLogger(__name__)

checkin_bp = Blueprint('checkin', __name__)

def _search_rate_limit() -> str:
    return current_app.config.get('CHECKIN_SEARCH_RATE_LIMIT', '60 per minute')

def _get_by_guid(model, guid, label):
    if not guid:
        return None
    item = model.get_by_guid(guid)
    if item is None:
        raise ConfigurationError(f'{label} was not found.')
    return item

def _get_session(data):
    """Director, session and kiosk for a request body."""
    director = CheckInDirector(db.session)
    template = _get_by_guid(CheckInTemplate, data.get('template_guid'), 'Check-in configuration')
    configuration = director.get_configuration_data(template)
    kiosk = _get_by_guid(Kiosk, data.get('kiosk_guid'), 'Kiosk')
    return director, template, CheckInSession(director, configuration), kiosk

def _get_areas(data, template):
    area_guids = data.get('area_guids')
    if area_guids:
        return db.session.query(CheckInArea).filter(CheckInArea.guid.in_(area_guids)).all()
    return template.areas.filter(CheckInArea.is_active.is_(True)).all()

def _get_locations(data):
    location_guids = data.get('location_guids')
    if location_guids is None:
        return None
    return db.session.query(Location).filter(Location.guid.in_(location_guids)).all()

@checkin_bp.route('/health', methods=['GET'])
def health_check():
    """Health check endpoint."""
    return success_response(message='Check-in service is running')

@checkin_bp.route('/configurations', methods=['POST'])
def get_configurations():
    """List check-in configurations and the areas available to a kiosk."""
    try:
        data = request.get_json(silent=True) or {}
        director = CheckInDirector(db.session)
        kiosk = _get_by_guid(Kiosk, data.get('kiosk_guid'), 'Kiosk')

        return success_response(data={
            'templates': [t.to_dict() for t in director.get_configuration_summaries()],
            'areas': director.get_check_in_area_summaries(kiosk=kiosk)
        })

    except CheckInError as e:
        return error_response(str(e), 400)
    except Exception as e:
        logger.exception('Error loading check-in configurations')
        return error_response(f"Error loading configurations: {str(e)}", 500)

@checkin_bp.route('/areas', methods=['POST'])
def get_areas():
    """List the areas of a configuration, limited to a kiosk when given."""
    try:
        data = request.get_json(silent=True) or {}
        director = CheckInDirector(db.session)
        kiosk = _get_by_guid(Kiosk, data.get('kiosk_guid'), 'Kiosk')
        template = _get_by_guid(CheckInTemplate, data.get('template_guid'), 'Check-in configuration')

        return success_response(data=director.get_check_in_area_summaries(kiosk=kiosk, template=template))

    except CheckInError as e:
        return error_response(str(e), 400)
    except Exception as e:
        logger.exception('Error loading check-in areas')
        return error_response(f"Error loading areas: {str(e)}", 500)

@checkin_bp.route('/search', methods=['POST'])
@limiter.limit(_search_rate_limit)
@require_fields('template_guid')
def search_for_families():
    """Search for families to check in."""
    try:
        data = request.get_json(silent=True) or {}

        director, template, session, kiosk = _get_session(data)

        search_type = None
        if data.get('search_type'):
            try:
                search_type = FamilySearchMode(data['search_type'])
            except ValueError:
                raise ValidationError('Invalid search type specified.')

        sort_by_campus = None
        if kiosk is not None and data.get('prioritize_kiosk_campus'):
            sort_by_campus = kiosk.campus

        families = session.search_for_families(data.get('search_term', ''), search_type, sort_by_campus)

        return success_response(data=[f.to_dict() for f in families])

    except CheckInError as e:
        return error_response(str(e), 400)
    except Exception as e:
        logger.exception('Error searching for families')
        return error_response(f"Error searching for families: {str(e)}", 500)

@checkin_bp.route('/family-members', methods=['POST'])
@require_fields('template_guid', 'family_guid')
def get_family_members():
    """Family members with their check-in opportunities and open check-ins."""
    try:
        data = request.get_json(silent=True) or {}

        director, template, session, kiosk = _get_session(data)
        attendees = session.load_and_prepare_attendees_for_family(
            data['family_guid'],
            _get_areas(data, template),
            kiosk=kiosk,
            locations=_get_locations(data)
        )

        return success_response(data={
            'family_guid': data['family_guid'],
            'people': [a.to_dict() for a in attendees],
            'current_attendance': [c.to_dict() for c in session.get_current_attendance()]
        })

    except CheckInError as e:
        return error_response(str(e), 400)
    except Exception as e:
        logger.exception('Error loading family members')
        return error_response(f"Error loading family members: {str(e)}", 500)

@checkin_bp.route('/attendee-opportunities', methods=['POST'])
@require_fields('template_guid', 'person_guid')
def get_attendee_opportunities():
    """Opportunities for a single person."""
    try:
        data = request.get_json(silent=True) or {}

        director, template, session, kiosk = _get_session(data)
        attendees = session.load_and_prepare_attendees_for_person(
            data['person_guid'],
            data.get('family_guid'),
            _get_areas(data, template),
            kiosk=kiosk,
            locations=_get_locations(data)
        )

        return success_response(data=attendees[0].to_dict() if attendees else None)

    except CheckInError as e:
        return error_response(str(e), 400)
    except Exception as e:
        logger.exception('Error loading attendee opportunities')
        return error_response(f"Error loading attendee opportunities: {str(e)}", 500)
