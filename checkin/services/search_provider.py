"""Family and person lookups for the kiosk."""
import logging
from collections import namedtuple
from typing import List, Optional
from sqlalchemy import or_
from checkin import db
from checkin.models.campus import Campus
from checkin.models.family import Family, FamilyMember, KnownRelationship, RelationshipRole
from checkin.models.person import Person, PersonSearchKey, PhoneNumber, RecordStatus, SearchKeyType
from checkin.models.template import FamilySearchMode, PhoneSearchMode
from checkin.services.configuration import ConfigurationData
from checkin.services.conversion_provider import ConversionProvider
from checkin.services.items import FamilySearchItem
from checkin.utils.validators import ValidationError, Validator

logger = logging.getLogger(__name__)

DEFAULT_MAX_RESULTS = 100

# A person reachable from a family and the order of the role that got them there
FamilyMemberRecord = namedtuple('FamilyMemberRecord', ['person', 'role_order'])

class SearchProvider:
    """Finds families by name, phone, scanned id or family id."""

    def __init__(
        self,
        configuration: ConfigurationData,
        session=None,
        default_max_results: int = DEFAULT_MAX_RESULTS,
        conversion: Optional[ConversionProvider] = None
    ):
        self.configuration = configuration
        self.session = session or db.session
        self.default_max_results = default_max_results
        self.conversion = conversion or ConversionProvider()

    # =================== FAMILY SEARCH ===================

    def get_family_ids(
        self,
        search_term: str,
        search_type: FamilySearchMode,
        sort_by_campus: Optional[Campus] = None
    ) -> List[int]:
        """Matching family ids, preferred campus first and capped.

        Raises:
            ValidationError: the term is not acceptable for this search.
        """
        query = self.get_family_search_query(search_term, search_type)
        rows = query.with_entities(Family.id, Family.campus_id).distinct().order_by(Family.id).all()

        if sort_by_campus is not None:
            # Stable sort keeps id order within each campus bucket
            rows.sort(key=lambda row: row.campus_id != sort_by_campus.id)

        family_ids = [row.id for row in rows]

        max_results = self.configuration.maximum_number_of_results
        if max_results is None:
            max_results = self.default_max_results
        if max_results > 0:
            family_ids = family_ids[:max_results]

        return family_ids

    def get_family_search_query(self, search_term: str, search_type: FamilySearchMode):
        allowed = self.configuration.family_search_type

        if search_type == FamilySearchMode.PHONE_NUMBER:
            if allowed not in (FamilySearchMode.PHONE_NUMBER, FamilySearchMode.NAME_AND_PHONE):
                raise ValidationError('Searching by phone number is not allowed by the check-in configuration.')
            return self._search_by_phone_number(search_term)

        if search_type == FamilySearchMode.NAME:
            if allowed not in (FamilySearchMode.NAME, FamilySearchMode.NAME_AND_PHONE):
                raise ValidationError('Searching by name is not allowed by the check-in configuration.')
            return self._search_by_name(search_term)

        if search_type == FamilySearchMode.NAME_AND_PHONE:
            if allowed != FamilySearchMode.NAME_AND_PHONE:
                raise ValidationError('Searching by name or phone number is not allowed by the check-in configuration.')
            if Validator.is_name_search(search_term):
                return self._search_by_name(search_term)
            return self._search_by_phone_number(search_term)

        if search_type == FamilySearchMode.SCANNED_ID:
            return self._search_by_scanned_id(search_term)

        if search_type == FamilySearchMode.FAMILY_ID:
            return self._search_by_family_id(search_term)

        raise ValidationError('Invalid search type specified.')

    def get_family_search_items(self, family_ids: List[int]) -> List[FamilySearchItem]:
        """Families in the order given, each with its members in display order."""
        if not family_ids:
            return []

        query = self._family_member_query().filter(
            FamilyMember.family_id.in_(family_ids),
            Person.nick_name.isnot(None),
            Person.nick_name != ''
        )
        if self.configuration.is_inactive_person_excluded:
            query = query.filter(Person.record_status != RecordStatus.INACTIVE)

        members_by_family = {}
        for member in query.all():
            members_by_family.setdefault(member.family_id, []).append(member)

        families = []
        for family_id in family_ids:
            members = members_by_family.get(family_id)
            if not members:
                continue

            family = members[0].family
            families.append(FamilySearchItem(
                guid=family.guid,
                name=family.name,
                campus_guid=family.campus.guid if family.campus else None,
                members=self.conversion.get_family_search_members(family, members)
            ))

        return families

    def _family_member_query(self):
        return self.session.query(FamilyMember).join(
            Person, FamilyMember.person_id == Person.id
        ).filter(Person.is_deceased.is_(False))

    def _families_for_people(self, person_query):
        person_ids = [row.id for row in person_query.with_entities(Person.id).distinct().all()]
        return self.session.query(Family).join(
            FamilyMember, FamilyMember.family_id == Family.id
        ).join(
            Person, FamilyMember.person_id == Person.id
        ).filter(
            Person.is_deceased.is_(False),
            FamilyMember.person_id.in_(person_ids)
        )

    def _search_by_name(self, search_term: str):
        """Match "Last, First" or "First Last" by name prefix."""
        term = search_term.strip()

        if ',' in term:
            last_name, first_name = (part.strip() for part in term.split(',', 1))
        else:
            parts = term.split()
            if len(parts) > 1:
                first_name, last_name = parts[0], ' '.join(parts[1:])
            else:
                first_name, last_name = '', term

        person_query = self.session.query(Person).filter(Person.last_name.ilike(f'{last_name}%'))
        if first_name:
            person_query = person_query.filter(or_(
                Person.first_name.ilike(f'{first_name}%'),
                Person.nick_name.ilike(f'{first_name}%')
            ))

        return self._families_for_people(person_query)

    def _search_by_phone_number(self, search_term: str):
        digits = Validator.digits_only(search_term)
        Validator.validate_phone_length(
            digits,
            self.configuration.minimum_phone_number_length,
            self.configuration.maximum_phone_number_length
        )

        if self.configuration.phone_search_type == PhoneSearchMode.ENDS_WITH:
            condition = PhoneNumber.number.endswith(digits)
        else:
            condition = PhoneNumber.number.contains(digits)

        person_query = self.session.query(Person).join(
            PhoneNumber, PhoneNumber.person_id == Person.id
        ).filter(condition)

        return self._families_for_people(person_query)

    def _search_by_scanned_id(self, search_term: str):
        person_query = self.session.query(Person).join(
            PersonSearchKey, PersonSearchKey.person_id == Person.id
        ).filter(
            PersonSearchKey.search_type == SearchKeyType.ALTERNATE_ID,
            PersonSearchKey.search_value == search_term.strip()
        )

        return self._families_for_people(person_query)

    def _search_by_family_id(self, search_term: str):
        family_ids = Validator.parse_id_list(search_term)
        return self.session.query(Family).join(
            FamilyMember, FamilyMember.family_id == Family.id
        ).join(
            Person, FamilyMember.person_id == Person.id
        ).filter(
            Person.is_deceased.is_(False),
            Family.id.in_(family_ids)
        )

    # =================== FAMILY MEMBERS ===================

    def get_family_members_for_family(self, family: Family) -> List[FamilyMemberRecord]:
        """Immediate family plus people the family may check in."""
        immediate = self._immediate_family_members(family)
        records = [FamilyMemberRecord(m.person, m.role_order) for m in immediate]

        role_guids = self.configuration.can_check_in_known_relationship_role_guids
        if not role_guids or not immediate:
            return records

        relationships = self.session.query(KnownRelationship).join(
            RelationshipRole, KnownRelationship.role_id == RelationshipRole.id
        ).join(
            Person, KnownRelationship.related_person_id == Person.id
        ).filter(
            KnownRelationship.owner_person_id.in_([m.person_id for m in immediate]),
            RelationshipRole.guid.in_(list(role_guids)),
            Person.is_deceased.is_(False)
        )
        if self.configuration.is_inactive_person_excluded:
            relationships = relationships.filter(Person.record_status != RecordStatus.INACTIVE)

        for relationship in relationships.order_by(RelationshipRole.order, KnownRelationship.id).all():
            records.append(FamilyMemberRecord(relationship.related_person, relationship.role.order))

        return records

    def get_person_for_family(self, person: Person, family: Optional[Family] = None) -> Optional[FamilyMember]:
        """The person's family membership, in the given family when one is supplied."""
        if person.is_deceased:
            return None

        query = self.session.query(FamilyMember).filter(FamilyMember.person_id == person.id)
        if family is not None:
            query = query.filter(FamilyMember.family_id == family.id)
        elif person.primary_family_id is not None:
            # Prefer the primary family when the person belongs to several
            query = query.order_by((FamilyMember.family_id != person.primary_family_id))

        return query.order_by(FamilyMember.id).first()

    def _immediate_family_members(self, family: Family) -> List[FamilyMember]:
        query = self._family_member_query().filter(FamilyMember.family_id == family.id)
        if self.configuration.is_inactive_person_excluded:
            query = query.filter(Person.record_status != RecordStatus.INACTIVE)
        return query.order_by(FamilyMember.id).all()
