"""Integration tests for the scheduled maintenance jobs"""

from datetime import date, datetime, timedelta
from sqlalchemy.orm import Session, sessionmaker
from gym_admin import jobs
from gym_admin.infrastructure.database.models import MemberAttendance, Membership
from gym_admin.infrastructure.database.session import transaction
from gym_admin.jobs import JOBS, run_jobs
from gym_admin.services import MembershipService, PaymentPlanService


def _open_visit(db: Session, gym, member, membership, day: date) -> MemberAttendance:
    visit = MemberAttendance(
        gym_id=gym.id,
        member_id=member.id,
        membership_id=membership.id,
        date=day,
        check_in_time=datetime.combine(day, datetime.min.time()).replace(hour=19),
    )
    db.add(visit)
    db.commit()
    return visit


def test_auto_checkout_waits_for_overnight_window(db: Session, gym, member, membership):
    today = date.today()
    _open_visit(db, gym, member, membership, today - timedelta(days=1))

    afternoon = datetime.combine(today, datetime.min.time()).replace(hour=15)
    assert run_jobs(db, ["auto-checkout"], afternoon) == {"auto-checkout": 0}

    night = datetime.combine(today, datetime.min.time()).replace(hour=2)
    assert run_jobs(db, ["auto-checkout"], night) == {"auto-checkout": 1}


def test_force_checkout_ignores_window(db: Session, gym, member, membership):
    today = date.today()
    visit = _open_visit(db, gym, member, membership, today - timedelta(days=1))

    afternoon = datetime.combine(today, datetime.min.time()).replace(hour=15)
    assert run_jobs(db, ["auto-checkout"], afternoon, force_checkout=True) == {"auto-checkout": 1}

    db.refresh(visit)
    assert visit.auto_checkout is True
    assert visit.check_out_time.date() == today - timedelta(days=1)


def test_all_jobs(db: Session, gym, member, membership):
    with transaction(db):
        plan = MembershipService(db).create_payment_plan_for_membership(membership.id)
    first_due = PaymentPlanService(db).get_installments(plan.id)[0].due_date

    # one day past grace on the first installment, and past the membership end date
    later = max(first_due + timedelta(days=8), membership.end_date + timedelta(days=1))
    results = run_jobs(db, JOBS, datetime.combine(later, datetime.min.time()).replace(hour=12))

    assert results["auto-checkout"] == 0
    assert results["mark-overdue"] >= 1
    assert results["expire-memberships"] == 1
    assert db.get(Membership, membership.id).status == "expired"


def test_cli_runs_selected_jobs(db: Session, monkeypatch, membership):
    bind = db.get_bind()
    monkeypatch.setattr(jobs, "engine", bind)
    monkeypatch.setattr(jobs, "SessionLocal", sessionmaker(bind=bind))

    assert jobs.main(["--create-schema", "--job", "expire-memberships"]) == 0
    db.expire_all()
    assert db.get(Membership, membership.id).status == "active"
