"""Test the demo data seed."""
from checkin.models import CheckInGroup, CheckInTemplate, Kiosk
from checkin.services.director import CheckInDirector
from checkin.services.seed_service import SeedService
from checkin.services.session import CheckInSession

def test_seed_all(app):
    SeedService.seed_all()

    director = CheckInDirector()
    template = CheckInTemplate.query.one()
    kiosk = Kiosk.query.one()

    assert CheckInGroup.query.count() == 3
    assert [a['name'] for a in director.get_check_in_area_summaries(kiosk=kiosk)] == ['Kids']

    session = CheckInSession(director, director.get_configuration_data(template))
    families = session.search_for_families('1234')

    assert [f.name for f in families] == ['Smith Family']
    assert [m.person.first_name for m in families[0].members] == ['John', 'Jane', 'Emma']
