"""SQLAlchemy ORM models for the gym back office"""

import uuid
from sqlalchemy import (
    JSON,
    BigInteger,
    Boolean,
    Column,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    Text,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.sql import func

Base = declarative_base()


def _pk():
    return Column(Uuid, primary_key=True, default=uuid.uuid4)


def _created_at():
    return Column(DateTime(timezone=True), nullable=False, server_default=func.now())


class Gym(Base):
    """Gym (tenant) owning members, staff, packages and money"""

    __tablename__ = "gyms"

    id = _pk()
    name = Column(Text, nullable=False)
    address = Column(Text, nullable=True)
    phone = Column(Text, nullable=True)
    email = Column(Text, nullable=True)
    created_at = _created_at()


class Profile(Base):
    """Personal details shared by members and staff"""

    __tablename__ = "profiles"

    id = _pk()
    user_id = Column(Text, nullable=True, index=True)
    first_name = Column(Text, nullable=False)
    last_name = Column(Text, nullable=False, default="")
    phone = Column(Text, nullable=True)
    email = Column(Text, nullable=True)
    date_of_birth = Column(Date, nullable=True)
    gender = Column(Text, nullable=True)
    address = Column(Text, nullable=True)
    emergency_contact_name = Column(Text, nullable=True)
    emergency_contact_phone = Column(Text, nullable=True)
    created_at = _created_at()

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


class Member(Base):
    """Gym customer"""

    __tablename__ = "members"
    __table_args__ = (UniqueConstraint("gym_id", "member_code", name="uq_members_gym_code"),)

    id = _pk()
    gym_id = Column(Uuid, ForeignKey("gyms.id"), nullable=False, index=True)
    profile_id = Column(Uuid, ForeignKey("profiles.id"), nullable=False, unique=True)
    member_code = Column(Text, nullable=False, index=True)
    assigned_trainer_id = Column(Uuid, ForeignKey("staff.id", ondelete="SET NULL"), nullable=True)
    joining_date = Column(Date, nullable=False)
    status = Column(Text, nullable=False, default="active")
    source = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)
    credit_balance_cents = Column(BigInteger, nullable=False, default=0)
    medical_clearance = Column(Boolean, nullable=False, default=False)
    waiver_signed = Column(Boolean, nullable=False, default=False)
    created_at = _created_at()

    profile = relationship("Profile")
    assigned_trainer = relationship("Staff", foreign_keys=[assigned_trainer_id], back_populates="clients")
    memberships = relationship(
        "Membership",
        back_populates="member",
        foreign_keys="Membership.member_id",
        cascade="all, delete-orphan",
    )
    payment_plans = relationship("PaymentPlan", back_populates="member", cascade="all, delete-orphan")
    payments = relationship("Payment", back_populates="member", cascade="all, delete-orphan")
    attendance = relationship("MemberAttendance", back_populates="member", cascade="all, delete-orphan")
    training_sessions = relationship("TrainingSession", back_populates="member", cascade="all, delete-orphan")
    refund_requests = relationship("RefundRequest", back_populates="member", cascade="all, delete-orphan")
    commission_rules = relationship("TrainerCommissionRule", back_populates="member", cascade="all, delete-orphan")
    membership_changes = relationship("MembershipChange", back_populates="member", cascade="all, delete-orphan")

    @property
    def current_membership(self):
        for membership in self.memberships:
            if membership.status in ("active", "trial"):
                return membership
        return None


class MembershipPackage(Base):
    """Sellable membership product"""

    __tablename__ = "membership_packages"

    id = _pk()
    gym_id = Column(Uuid, ForeignKey("gyms.id"), nullable=False, index=True)
    name = Column(Text, nullable=False)
    description = Column(Text, nullable=True)
    package_type = Column(Text, nullable=False, default="general")
    package_category = Column(Text, nullable=True)
    duration_days = Column(Integer, nullable=False)
    price_cents = Column(BigInteger, nullable=False)
    setup_fee_cents = Column(BigInteger, nullable=False, default=0)
    security_deposit_cents = Column(BigInteger, nullable=False, default=0)
    features = Column(JSON, nullable=False, default=list)
    restrictions = Column(JSON, nullable=False, default=list)
    is_trial = Column(Boolean, nullable=False, default=False)
    is_active = Column(Boolean, nullable=False, default=True)
    is_featured = Column(Boolean, nullable=False, default=False)
    trainer_required = Column(Boolean, nullable=False, default=False)
    pt_sessions_included = Column(Integer, nullable=False, default=0)
    max_sessions_per_day = Column(Integer, nullable=False, default=1)
    guest_passes = Column(Integer, nullable=False, default=0)
    freeze_allowance = Column(Integer, nullable=False, default=0)
    cancellation_period = Column(Integer, nullable=False, default=0)
    minimum_commitment_days = Column(Integer, nullable=False, default=0)
    refund_percentage = Column(Float, nullable=False, default=0.0)
    transfer_fee_cents = Column(BigInteger, nullable=False, default=0)
    upgrade_allowed = Column(Boolean, nullable=False, default=True)
    downgrade_allowed = Column(Boolean, nullable=False, default=False)
    display_order = Column(Integer, nullable=False, default=0)
    created_at = _created_at()


class Membership(Base):
    """A member's purchase of a package over a date range"""

    __tablename__ = "memberships"

    id = _pk()
    member_id = Column(Uuid, ForeignKey("members.id", ondelete="CASCADE"), nullable=False, index=True)
    package_id = Column(Uuid, ForeignKey("membership_packages.id"), nullable=False, index=True)
    payment_plan_id = Column(Uuid, ForeignKey("payment_plans.id", ondelete="SET NULL"), nullable=True)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    actual_end_date = Column(Date, nullable=True)
    status = Column(Text, nullable=False, default="active")

    original_amount_cents = Column(BigInteger, nullable=False, default=0)
    discount_applied_cents = Column(BigInteger, nullable=False, default=0)
    setup_fee_paid_cents = Column(BigInteger, nullable=False, default=0)
    security_deposit_paid_cents = Column(BigInteger, nullable=False, default=0)
    total_amount_due_cents = Column(BigInteger, nullable=False, default=0)
    amount_paid_cents = Column(BigInteger, nullable=False, default=0)
    amount_pending_cents = Column(BigInteger, nullable=False, default=0)

    is_trial = Column(Boolean, nullable=False, default=False)
    trial_converted_date = Column(Date, nullable=True)
    trial_conversion_discount_cents = Column(BigInteger, nullable=False, default=0)
    auto_renew = Column(Boolean, nullable=False, default=False)

    freeze_days_used = Column(Integer, nullable=False, default=0)
    freeze_start_date = Column(Date, nullable=True)
    freeze_end_date = Column(Date, nullable=True)
    freeze_reason = Column(Text, nullable=True)

    cancellation_date = Column(Date, nullable=True)
    cancellation_reason = Column(Text, nullable=True)
    cancellation_notice_period = Column(Integer, nullable=True)
    refund_eligible_amount_cents = Column(BigInteger, nullable=False, default=0)
    refund_processed_amount_cents = Column(BigInteger, nullable=False, default=0)

    transferred_from_member_id = Column(Uuid, ForeignKey("members.id", ondelete="SET NULL"), nullable=True)
    transferred_to_member_id = Column(Uuid, ForeignKey("members.id", ondelete="SET NULL"), nullable=True)
    transfer_fee_paid_cents = Column(BigInteger, nullable=False, default=0)

    pt_sessions_remaining = Column(Integer, nullable=False, default=0)
    pt_sessions_used = Column(Integer, nullable=False, default=0)
    created_at = _created_at()

    member = relationship("Member", back_populates="memberships", foreign_keys=[member_id])
    package = relationship("MembershipPackage")
    payment_plan = relationship("PaymentPlan", foreign_keys=[payment_plan_id])


class MembershipChange(Base):
    """Upgrade / downgrade / transfer history"""

    __tablename__ = "membership_changes"

    id = _pk()
    member_id = Column(Uuid, ForeignKey("members.id", ondelete="CASCADE"), nullable=False, index=True)
    from_membership_id = Column(Uuid, ForeignKey("memberships.id", ondelete="SET NULL"), nullable=True)
    to_membership_id = Column(Uuid, ForeignKey("memberships.id", ondelete="SET NULL"), nullable=True)
    change_type = Column(Text, nullable=False)
    change_date = Column(Date, nullable=False)
    amount_difference_cents = Column(BigInteger, nullable=False, default=0)
    adjustment_amount_cents = Column(BigInteger, nullable=False, default=0)
    additional_payment_cents = Column(BigInteger, nullable=False, default=0)
    refund_amount_cents = Column(BigInteger, nullable=False, default=0)
    prorated_amount_cents = Column(BigInteger, nullable=False, default=0)
    remaining_days = Column(Integer, nullable=True)
    new_trainer_id = Column(Uuid, ForeignKey("staff.id", ondelete="SET NULL"), nullable=True)
    reason = Column(Text, nullable=True)
    created_at = _created_at()

    member = relationship("Member", back_populates="membership_changes")


class PaymentPlan(Base):
    """Amortization schedule for a membership balance"""

    __tablename__ = "payment_plans"

    id = _pk()
    gym_id = Column(Uuid, ForeignKey("gyms.id"), nullable=False, index=True)
    member_id = Column(Uuid, ForeignKey("members.id", ondelete="CASCADE"), nullable=False, index=True)
    total_amount_cents = Column(BigInteger, nullable=False)
    down_payment_cents = Column(BigInteger, nullable=False, default=0)
    remaining_amount_cents = Column(BigInteger, nullable=False)
    number_of_installments = Column(Integer, nullable=False)
    installment_amount_cents = Column(BigInteger, nullable=False)
    installment_frequency = Column(Text, nullable=False, default="monthly")
    first_installment_date = Column(Date, nullable=False)
    last_installment_date = Column(Date, nullable=False)
    late_fee_percentage = Column(Float, nullable=False, default=0.0)
    grace_period_days = Column(Integer, nullable=False, default=0)
    status = Column(Text, nullable=False, default="active")
    created_at = _created_at()

    member = relationship("Member", back_populates="payment_plans")
    installments = relationship(
        "Installment",
        back_populates="plan",
        cascade="all, delete-orphan",
        order_by="Installment.installment_number",
    )


class Installment(Base):
    """Single dated payment within a payment plan"""

    __tablename__ = "installments"

    id = _pk()
    payment_plan_id = Column(Uuid, ForeignKey("payment_plans.id", ondelete="CASCADE"), nullable=False, index=True)
    installment_number = Column(Integer, nullable=False)
    amount_cents = Column(BigInteger, nullable=False)
    due_date = Column(Date, nullable=False)
    paid_date = Column(Date, nullable=True)
    paid_amount_cents = Column(BigInteger, nullable=False, default=0)
    late_fee_cents = Column(BigInteger, nullable=False, default=0)
    status = Column(Text, nullable=False, default="pending")
    payment_method = Column(Text, nullable=True)
    transaction_reference = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)
    created_at = _created_at()

    plan = relationship("PaymentPlan", back_populates="installments")


class Payment(Base):
    """Money received from (or returned to) a member"""

    __tablename__ = "payments"

    id = _pk()
    gym_id = Column(Uuid, ForeignKey("gyms.id"), nullable=False, index=True)
    member_id = Column(Uuid, ForeignKey("members.id", ondelete="CASCADE"), nullable=False, index=True)
    membership_id = Column(Uuid, ForeignKey("memberships.id", ondelete="SET NULL"), nullable=True, index=True)
    installment_id = Column(Uuid, ForeignKey("installments.id", ondelete="SET NULL"), nullable=True)
    payment_plan_id = Column(Uuid, ForeignKey("payment_plans.id", ondelete="SET NULL"), nullable=True)
    payment_type = Column(Text, nullable=False)
    amount_cents = Column(BigInteger, nullable=False)
    original_amount_cents = Column(BigInteger, nullable=False)
    payment_method = Column(Text, nullable=False)
    payment_date = Column(Date, nullable=False, index=True)
    due_date = Column(Date, nullable=True)
    status = Column(Text, nullable=False, default="paid")
    receipt_number = Column(Text, nullable=False)
    description = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)
    transaction_id = Column(Text, nullable=True)
    created_at = _created_at()

    member = relationship("Member", back_populates="payments")
    membership = relationship("Membership")


class RefundRequest(Base):
    """Member request for money back on a membership"""

    __tablename__ = "refund_requests"

    id = _pk()
    gym_id = Column(Uuid, ForeignKey("gyms.id"), nullable=False, index=True)
    member_id = Column(Uuid, ForeignKey("members.id", ondelete="CASCADE"), nullable=False, index=True)
    membership_id = Column(Uuid, ForeignKey("memberships.id", ondelete="CASCADE"), nullable=False)
    original_payment_id = Column(Uuid, ForeignKey("payments.id", ondelete="SET NULL"), nullable=True)
    refund_type = Column(Text, nullable=False)
    requested_amount_cents = Column(BigInteger, nullable=False)
    eligible_amount_cents = Column(BigInteger, nullable=False)
    approved_amount_cents = Column(BigInteger, nullable=True)
    processing_fee_cents = Column(BigInteger, nullable=False, default=0)
    final_refund_amount_cents = Column(BigInteger, nullable=True)
    reason = Column(Text, nullable=False)
    member_comments = Column(Text, nullable=True)
    admin_comments = Column(Text, nullable=True)
    request_date = Column(Date, nullable=False)
    processed_date = Column(Date, nullable=True)
    status = Column(Text, nullable=False, default="requested")
    refund_method = Column(Text, nullable=True)
    transaction_reference = Column(Text, nullable=True)
    created_at = _created_at()

    member = relationship("Member", back_populates="refund_requests")
    membership = relationship("Membership")


class Staff(Base):
    """Employee: manager, trainer, nutritionist, front desk, housekeeping"""

    __tablename__ = "staff"
    __table_args__ = (UniqueConstraint("gym_id", "employee_code", name="uq_staff_gym_code"),)

    id = _pk()
    gym_id = Column(Uuid, ForeignKey("gyms.id"), nullable=False, index=True)
    profile_id = Column(Uuid, ForeignKey("profiles.id"), nullable=False, unique=True)
    employee_code = Column(Text, nullable=False)
    role = Column(Text, nullable=False)
    status = Column(Text, nullable=False, default="active")
    salary_amount_cents = Column(BigInteger, nullable=False, default=0)
    salary_type = Column(Text, nullable=False, default="monthly")
    base_commission_rate = Column(Float, nullable=False, default=0.0)
    hourly_rate_cents = Column(BigInteger, nullable=True)
    hire_date = Column(Date, nullable=False)
    specializations = Column(JSON, nullable=False, default=list)
    max_clients = Column(Integer, nullable=True)
    schedule = Column(JSON, nullable=False, default=dict)
    created_at = _created_at()

    profile = relationship("Profile")
    clients = relationship("Member", foreign_keys="Member.assigned_trainer_id", back_populates="assigned_trainer")

    @property
    def display_name(self) -> str:
        return self.profile.full_name if self.profile else self.employee_code


class TrainerCommissionRule(Base):
    """How a trainer is paid for sessions with one member"""

    __tablename__ = "trainer_commission_rules"

    id = _pk()
    trainer_id = Column(Uuid, ForeignKey("staff.id", ondelete="CASCADE"), nullable=False, index=True)
    member_id = Column(Uuid, ForeignKey("members.id", ondelete="CASCADE"), nullable=False, index=True)
    package_id = Column(Uuid, ForeignKey("membership_packages.id"), nullable=True)
    commission_type = Column(Text, nullable=False)
    commission_value = Column(Float, nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = _created_at()

    member = relationship("Member", back_populates="commission_rules")


class TrainingSession(Base):
    """Personal training session"""

    __tablename__ = "training_sessions"

    id = _pk()
    member_id = Column(Uuid, ForeignKey("members.id", ondelete="CASCADE"), nullable=False, index=True)
    trainer_id = Column(Uuid, ForeignKey("staff.id", ondelete="CASCADE"), nullable=False, index=True)
    membership_id = Column(Uuid, ForeignKey("memberships.id", ondelete="SET NULL"), nullable=True)
    session_date = Column(Date, nullable=False)
    start_time = Column(Text, nullable=True)
    end_time = Column(Text, nullable=True)
    duration_minutes = Column(Integer, nullable=False, default=60)
    session_type = Column(Text, nullable=False, default="personal_training")
    session_focus = Column(Text, nullable=True)
    session_number = Column(Integer, nullable=False)
    total_sessions = Column(Integer, nullable=False)
    session_fee_cents = Column(BigInteger, nullable=False, default=0)
    trainer_fee_cents = Column(BigInteger, nullable=False, default=0)
    # True when booking took one session off the membership's remaining allowance
    allowance_deducted = Column(Boolean, nullable=False, default=False)
    completed = Column(Boolean, nullable=False, default=False)
    cancelled = Column(Boolean, nullable=False, default=False)
    cancellation_reason = Column(Text, nullable=True)
    cancelled_by = Column(Text, nullable=True)
    cancellation_fee_cents = Column(BigInteger, nullable=False, default=0)
    no_show = Column(Boolean, nullable=False, default=False)
    session_rating = Column(Integer, nullable=True)
    member_feedback = Column(Text, nullable=True)
    trainer_notes = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)
    created_at = _created_at()

    member = relationship("Member", back_populates="training_sessions")
    trainer = relationship("Staff")

    @property
    def trainer_name(self):
        return self.trainer.display_name if self.trainer else None

    @property
    def member_name(self):
        return self.member.profile.full_name if self.member and self.member.profile else None


class TrainerEarning(Base):
    """Commission owed to a trainer for a conducted session"""

    __tablename__ = "trainer_earnings"

    id = _pk()
    trainer_id = Column(Uuid, ForeignKey("staff.id", ondelete="CASCADE"), nullable=False, index=True)
    member_id = Column(Uuid, ForeignKey("members.id", ondelete="CASCADE"), nullable=False)
    training_session_id = Column(Uuid, ForeignKey("training_sessions.id", ondelete="CASCADE"), nullable=True)
    earning_type = Column(Text, nullable=False, default="session_conducted")
    base_amount_cents = Column(BigInteger, nullable=False, default=0)
    commission_rate = Column(Float, nullable=True)
    commission_amount_cents = Column(BigInteger, nullable=False, default=0)
    earning_date = Column(Date, nullable=False)
    earning_month = Column(Text, nullable=False, index=True)
    is_paid = Column(Boolean, nullable=False, default=False)
    created_at = _created_at()


class MemberAttendance(Base):
    """One gym visit: check-in and (eventually) check-out"""

    __tablename__ = "member_attendance"

    id = _pk()
    gym_id = Column(Uuid, ForeignKey("gyms.id"), nullable=False, index=True)
    member_id = Column(Uuid, ForeignKey("members.id", ondelete="CASCADE"), nullable=False, index=True)
    membership_id = Column(Uuid, ForeignKey("memberships.id", ondelete="SET NULL"), nullable=True)
    date = Column(Date, nullable=False, index=True)
    check_in_time = Column(DateTime, nullable=False)
    check_out_time = Column(DateTime, nullable=True)
    auto_checkout = Column(Boolean, nullable=False, default=False)
    notes = Column(Text, nullable=True)
    created_at = _created_at()

    member = relationship("Member", back_populates="attendance")
    membership = relationship("Membership")


class Expense(Base):
    """Operating cost"""

    __tablename__ = "expenses"

    id = _pk()
    gym_id = Column(Uuid, ForeignKey("gyms.id"), nullable=False, index=True)
    category = Column(Text, nullable=False)
    subcategory = Column(Text, nullable=True)
    description = Column(Text, nullable=False)
    amount_cents = Column(BigInteger, nullable=False)
    expense_date = Column(Date, nullable=False, index=True)
    vendor_name = Column(Text, nullable=True)
    is_recurring = Column(Boolean, nullable=False, default=False)
    created_by = Column(Text, nullable=True)
    created_at = _created_at()


class ActivityLog(Base):
    """Audit trail of changes made through the back office"""

    __tablename__ = "activity_logs"

    id = _pk()
    gym_id = Column(Uuid, ForeignKey("gyms.id"), nullable=False, index=True)
    actor_user_id = Column(Text, nullable=True)
    actor_profile_id = Column(Text, nullable=True)
    resource_type = Column(Text, nullable=False)
    resource_id = Column(Text, nullable=False)
    action = Column(Text, nullable=False)
    description = Column(Text, nullable=True)
    before_data = Column(JSON, nullable=True)
    after_data = Column(JSON, nullable=True)
    created_at = _created_at()
