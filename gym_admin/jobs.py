"""Scheduled maintenance: overnight auto checkout, overdue installments, lapsed memberships"""

import argparse
import logging
from datetime import datetime

from gym_admin.config import settings
from gym_admin.infrastructure.database.models import Base
from gym_admin.infrastructure.database.session import SessionLocal, engine, transaction
from gym_admin.infrastructure.observability.logging import setup_logging
from gym_admin.services import AttendanceService, MembershipService, PaymentPlanService

JOBS = ("auto-checkout", "mark-overdue", "expire-memberships")


def run_jobs(db, jobs, now: datetime, force_checkout: bool = False) -> dict:
    """Run the selected jobs in one transaction and return a count per job"""
    results = {}
    with transaction(db):
        if "auto-checkout" in jobs:
            attendance = AttendanceService(db)
            if force_checkout:
                results["auto-checkout"] = attendance.run_auto_checkout(now=now)["count"]
            else:
                results["auto-checkout"] = attendance.run_scheduled_auto_checkout(now)
        if "mark-overdue" in jobs:
            results["mark-overdue"] = PaymentPlanService(db).mark_overdue_installments(today=now.date())
        if "expire-memberships" in jobs:
            results["expire-memberships"] = MembershipService(db).expire_lapsed_memberships(today=now.date())
    return results


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog="gym-admin-jobs", description=__doc__)
    parser.add_argument(
        "--job",
        dest="jobs",
        action="append",
        choices=JOBS,
        help="job to run; repeat for several (default: all)",
    )
    parser.add_argument(
        "--force-checkout",
        action="store_true",
        help="close open visits even outside the overnight window",
    )
    parser.add_argument(
        "--create-schema",
        action="store_true",
        help="create missing tables before running the jobs",
    )
    args = parser.parse_args(argv)

    setup_logging(settings.log_level)
    if args.create_schema:
        Base.metadata.create_all(bind=engine)
        logging.info("Schema created", extra={"tables": len(Base.metadata.tables)})

    db = SessionLocal()
    try:
        results = run_jobs(db, args.jobs or JOBS, datetime.now(), force_checkout=args.force_checkout)
    finally:
        db.close()

    logging.info("Maintenance jobs finished", extra={"results": results})
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
