"""Tests for contact service: ownership, listing, verification."""

import uuid

from internship_tracker.contacts.models import Contact, ContactType
from internship_tracker.contacts.service import (
    create_contact,
    delete_contact,
    get_own_contact,
    get_visible_contact,
    list_industries,
    list_user_contacts,
    update_contact,
    verify_contact,
)


def _contact(db_session, user, company, email=None, **details):
    contact = create_contact(db_session, user.id, company, email or f"hr@{company.lower()}.com", **details)
    db_session.commit()
    return contact


class TestCreateContact:
    def test_creates_contact_with_defaults(self, db_session, test_user):
        contact = _contact(db_session, test_user, "Acme", industry="Tech", notes="Met at fair")

        assert contact.company_name == "Acme"
        assert contact.industry == "Tech"
        assert contact.contact_type == ContactType.RECRUITER
        assert contact.is_public is True
        assert contact.is_verified is False
        assert contact.upvotes == 0
        assert contact.downvotes == 0

    def test_ignores_vote_counters_and_verification(self, db_session, test_user):
        contact = _contact(db_session, test_user, "Acme", upvotes=50, is_verified=True)

        assert contact.upvotes == 0
        assert contact.is_verified is False


class TestUpdateContact:
    def test_owner_can_update(self, db_session, test_user):
        contact = _contact(db_session, test_user, "Acme")
        updated = update_contact(db_session, contact.id, test_user.id, position="Talent Lead", contact_type="hr")
        db_session.commit()

        assert updated.position == "Talent Lead"
        assert updated.contact_type == ContactType.HR

    def test_derived_fields_not_writable(self, db_session, test_user):
        contact = _contact(db_session, test_user, "Acme")
        update_contact(db_session, contact.id, test_user.id, upvotes=10, downvotes=3, is_verified=True)
        db_session.commit()
        db_session.expire_all()

        stored = db_session.get(Contact, contact.id)
        assert stored.upvotes == 0
        assert stored.downvotes == 0
        assert stored.is_verified is False

    def test_other_user_cannot_update(self, db_session, test_user, other_user):
        contact = _contact(db_session, test_user, "Acme")
        assert update_contact(db_session, contact.id, other_user.id, notes="mine now") is None

    def test_null_for_required_column_keeps_value(self, db_session, test_user):
        contact = _contact(db_session, test_user, "Acme")
        update_contact(db_session, contact.id, test_user.id, company_name=None, is_public=None, notes="call back")
        db_session.commit()
        db_session.expire_all()

        stored = db_session.get(Contact, contact.id)
        assert stored.company_name == "Acme"
        assert stored.is_public is True
        assert stored.notes == "call back"

    def test_owner_cannot_be_reassigned(self, db_session, test_user, other_user):
        contact = _contact(db_session, test_user, "Acme", user_id=other_user.id)
        update_contact(db_session, contact.id, test_user.id, user_id=other_user.id)
        db_session.commit()

        assert contact.user_id == test_user.id


class TestVisibility:
    def test_public_contact_visible_to_everyone(self, db_session, test_user, other_user):
        contact = _contact(db_session, test_user, "Acme")
        assert get_visible_contact(db_session, contact.id, other_user.id) is not None

    def test_private_contact_visible_to_owner_only(self, db_session, test_user, other_user):
        contact = _contact(db_session, test_user, "Acme", is_public=False)
        assert get_visible_contact(db_session, contact.id, test_user.id) is not None
        assert get_visible_contact(db_session, contact.id, other_user.id) is None

    def test_own_lookup_rejects_other_users(self, db_session, test_user, other_user):
        contact = _contact(db_session, test_user, "Acme")
        assert get_own_contact(db_session, contact.id, other_user.id) is None

    def test_malformed_id(self, db_session, test_user):
        assert get_visible_contact(db_session, "nope", test_user.id) is None


class TestVerifyAndDelete:
    def test_verify_sets_verifier(self, db_session, test_user):
        contact = _contact(db_session, test_user, "Acme")
        verified = verify_contact(db_session, contact.id, test_user.id)
        db_session.commit()

        assert verified.is_verified is True
        assert verified.verified_by == test_user.id
        assert verified.verification_date is not None

    def test_delete_own_contact(self, db_session, test_user):
        contact = _contact(db_session, test_user, "Acme")
        assert delete_contact(db_session, contact.id, test_user.id) is True
        db_session.commit()
        assert db_session.query(Contact).count() == 0

    def test_delete_missing_contact(self, db_session, test_user):
        assert delete_contact(db_session, uuid.uuid4(), test_user.id) is False


class TestListUserContacts:
    def test_only_own_contacts(self, db_session, test_user, other_user):
        _contact(db_session, test_user, "Acme")
        _contact(db_session, other_user, "Globex")

        contacts, total = list_user_contacts(db_session, test_user.id)
        assert total == 1
        assert [c.company_name for c in contacts] == ["Acme"]

    def test_search_is_case_insensitive(self, db_session, test_user):
        _contact(db_session, test_user, "Acme", notes="Great SUMMER program")
        _contact(db_session, test_user, "Globex")

        contacts, total = list_user_contacts(db_session, test_user.id, search="summer")
        assert total == 1
        assert contacts[0].company_name == "Acme"

    def test_filter_by_industry(self, db_session, test_user):
        _contact(db_session, test_user, "Acme", industry="Tech")
        _contact(db_session, test_user, "Globex", industry="Finance")

        contacts, _ = list_user_contacts(db_session, test_user.id, industry="Finance")
        assert [c.company_name for c in contacts] == ["Globex"]

    def test_sort_and_paging(self, db_session, test_user):
        for name in ["Charlie", "Alpha", "Bravo"]:
            _contact(db_session, test_user, name)

        page1, total = list_user_contacts(
            db_session, test_user.id, sort_by="company_name", descending=False, page=1, per_page=2
        )
        page2, _ = list_user_contacts(
            db_session, test_user.id, sort_by="company_name", descending=False, page=2, per_page=2
        )
        assert total == 3
        assert [c.company_name for c in page1] == ["Alpha", "Bravo"]
        assert [c.company_name for c in page2] == ["Charlie"]

    def test_unknown_sort_key_falls_back(self, db_session, test_user):
        _contact(db_session, test_user, "Acme")
        contacts, total = list_user_contacts(db_session, test_user.id, sort_by="password_hash")
        assert total == 1


class TestListIndustries:
    def test_distinct_sorted_non_empty(self, db_session, test_user):
        _contact(db_session, test_user, "A", industry="Tech")
        _contact(db_session, test_user, "B", industry="Finance")
        _contact(db_session, test_user, "C", industry="Tech")
        _contact(db_session, test_user, "D")

        assert list_industries(db_session, test_user.id) == ["Finance", "Tech"]
