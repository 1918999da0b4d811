"""Tests for application service."""

from datetime import UTC, datetime, timedelta

import pytest

from internship_tracker.applications.models import Application, ApplicationStatus
from internship_tracker.applications.service import (
    ReferenceNotFound,
    create_application,
    delete_application,
    get_application,
    list_applications,
    record_send_result,
)
from internship_tracker.contacts.service import create_contact
from internship_tracker.posts.service import create_post
from internship_tracker.resumes.service import deactivate_resume, upload_resume


def _draft(db_session, user, **kwargs):
    application = create_application(
        db_session, user.id, "hr@acme.com", "Internship application", "Dear Acme...", **kwargs
    )
    db_session.commit()
    return application


class TestCreateApplication:
    def test_draft_with_active_resume(self, db_session, test_user):
        resume = upload_resume(db_session, test_user.id, f"{test_user.id}/cv.pdf")
        db_session.commit()

        application = _draft(db_session, test_user)
        assert application.status == ApplicationStatus.DRAFT
        assert application.resume_id == resume.id

    def test_resume_snapshot_survives_later_activation(self, db_session, test_user):
        first = upload_resume(db_session, test_user.id, f"{test_user.id}/first.pdf")
        db_session.commit()
        application = _draft(db_session, test_user)

        upload_resume(db_session, test_user.id, f"{test_user.id}/second.pdf")
        db_session.commit()

        assert db_session.get(Application, application.id).resume_id == first.id

    def test_no_active_resume(self, db_session, test_user):
        resume = upload_resume(db_session, test_user.id, f"{test_user.id}/cv.pdf")
        deactivate_resume(db_session, resume.id, test_user.id)
        db_session.commit()

        assert _draft(db_session, test_user).resume_id is None

    def test_scheduled_when_time_given(self, db_session, test_user):
        when = datetime.now(UTC) + timedelta(days=1)
        application = _draft(db_session, test_user, scheduled_for=when)
        assert application.status == ApplicationStatus.SCHEDULED

    def test_links_post_and_contact(self, db_session, test_user):
        post = create_post(db_session, test_user.id, "Acme", "Intern", "desc")
        contact = create_contact(db_session, test_user.id, "Acme", "hr@acme.com")
        application = _draft(db_session, test_user, post_id=str(post.id), contact_id=contact.id)

        assert application.post_id == post.id
        assert application.contact_id == contact.id

    def test_rejects_foreign_post(self, db_session, test_user, other_user):
        post = create_post(db_session, other_user.id, "Acme", "Intern", "desc")
        db_session.commit()

        with pytest.raises(ReferenceNotFound):
            create_application(db_session, test_user.id, "a@b.com", "s", "b", post_id=post.id)

    def test_rejects_hidden_contact(self, db_session, test_user, other_user):
        contact = create_contact(db_session, other_user.id, "Acme", "hr@acme.com", is_public=False)
        db_session.commit()

        with pytest.raises(ReferenceNotFound):
            create_application(db_session, test_user.id, "a@b.com", "s", "b", contact_id=contact.id)


class TestRecordSendResult:
    def test_success_marks_sent(self, db_session, test_user):
        application = _draft(db_session, test_user)
        result = record_send_result(db_session, application.id, test_user.id, success=True)
        db_session.commit()

        assert result.status == ApplicationStatus.SENT
        assert result.sent_at is not None
        assert result.error_message is None

    def test_failure_keeps_error(self, db_session, test_user):
        application = _draft(db_session, test_user)
        result = record_send_result(db_session, application.id, test_user.id, success=False, error_message="SMTP 550")

        assert result.status == ApplicationStatus.FAILED
        assert result.error_message == "SMTP 550"
        assert result.sent_at is None

    def test_other_user(self, db_session, test_user, other_user):
        application = _draft(db_session, test_user)
        assert record_send_result(db_session, application.id, other_user.id, success=True) is None


class TestListAndDelete:
    def test_filter_by_status(self, db_session, test_user):
        sent = _draft(db_session, test_user)
        _draft(db_session, test_user)
        record_send_result(db_session, sent.id, test_user.id, success=True)
        db_session.commit()

        assert len(list_applications(db_session, test_user.id)) == 2
        only_sent = list_applications(db_session, test_user.id, "sent")
        assert [a.id for a in only_sent] == [sent.id]

    def test_delete(self, db_session, test_user, other_user):
        application = _draft(db_session, test_user)
        assert delete_application(db_session, application.id, other_user.id) is False
        assert delete_application(db_session, application.id, test_user.id) is True
        db_session.commit()
        assert get_application(db_session, application.id, test_user.id) is None

    def test_deleting_post_keeps_application(self, db_session, test_user):
        post = create_post(db_session, test_user.id, "Acme", "Intern", "desc")
        application = _draft(db_session, test_user, post_id=post.id)

        db_session.delete(post)
        db_session.commit()
        db_session.expire_all()

        assert db_session.get(Application, application.id).post_id is None
