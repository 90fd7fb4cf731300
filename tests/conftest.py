"""Pytest fixtures for testing"""

import pytest
from datetime import date, timedelta
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, Session
from gym_admin.api.main import create_app
from gym_admin.infrastructure.database.models import Base, Gym, Member, Membership, MembershipPackage, Staff
from gym_admin.infrastructure.database.session import get_db, transaction
from gym_admin.services import MemberService, MembershipService, StaffService


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


# pysqlite defers BEGIN on its own; let SQLAlchemy emit it so SAVEPOINTs nest properly
@event.listens_for(engine, "connect")
def _disable_driver_transactions(dbapi_connection, connection_record):
    dbapi_connection.isolation_level = None


@event.listens_for(engine, "begin")
def _emit_begin(conn):
    conn.exec_driver_sql("BEGIN")


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db: Session) -> TestClient:
    """Create FastAPI test client with test database"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


@pytest.fixture
def gym(db: Session) -> Gym:
    gym = Gym(name="Iron Temple", phone="+91 98200 00000")
    db.add(gym)
    db.commit()
    return gym


@pytest.fixture
def package(db: Session, gym: Gym) -> MembershipPackage:
    """Monthly plan: 3000.00, 15 freeze days, 50% refundable"""
    package = MembershipPackage(
        gym_id=gym.id,
        name="Monthly Standard",
        package_type="general",
        duration_days=30,
        price_cents=300000,
        freeze_allowance=15,
        refund_percentage=50.0,
        transfer_fee_cents=50000,
    )
    db.add(package)
    db.commit()
    return package


@pytest.fixture
def pt_package(db: Session, gym: Gym) -> MembershipPackage:
    """Quarterly plan with 12 personal training sessions"""
    package = MembershipPackage(
        gym_id=gym.id,
        name="Quarterly PT",
        package_type="personal_training",
        duration_days=90,
        price_cents=1200000,
        pt_sessions_included=12,
        trainer_required=True,
    )
    db.add(package)
    db.commit()
    return package


@pytest.fixture
def member(db: Session, gym: Gym) -> Member:
    with transaction(db):
        member = MemberService(db).create_member(
            {
                "gym_id": gym.id,
                "first_name": "Asha",
                "last_name": "Rao",
                "phone": "+91 98201 11111",
                "date_of_birth": date(1994, 6, 12),
            }
        )
    return member


@pytest.fixture
def membership(db: Session, member: Member, package: MembershipPackage) -> Membership:
    """Active membership that started five days ago, nothing paid yet"""
    with transaction(db):
        membership = MembershipService(db).create_membership(
            {
                "member_id": member.id,
                "package_id": package.id,
                "start_date": date.today() - timedelta(days=5),
            }
        )
    return membership


@pytest.fixture
def trainer(db: Session, gym: Gym) -> Staff:
    with transaction(db):
        trainer = StaffService(db).create_staff(
            {
                "gym_id": gym.id,
                "first_name": "Vikram",
                "last_name": "Singh",
                "role": "trainer",
                "hire_date": date(2023, 1, 9),
                "max_clients": 2,
            }
        )
    return trainer


@pytest.fixture
def second_gym(db: Session) -> Gym:
    gym = Gym(name="Pulse Fitness", phone="+91 98200 22222")
    db.add(gym)
    db.commit()
    return gym


@pytest.fixture
def second_gym_member(db: Session, second_gym: Gym) -> Member:
    """First member of the second gym, so the same MEM000001 code as `member`"""
    package = MembershipPackage(gym_id=second_gym.id, name="Monthly Basic", duration_days=30, price_cents=200000)
    db.add(package)
    db.commit()

    with transaction(db):
        member = MemberService(db).create_member({"gym_id": second_gym.id, "first_name": "Ravi", "last_name": "Menon"})
        MembershipService(db).create_membership({"member_id": member.id, "package_id": package.id})
    return member
