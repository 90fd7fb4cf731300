"""Pydantic schemas for API request/response validation"""

import uuid
from datetime import date, datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

from gym_admin.domain.attendance import attendance_state

PaymentType = Literal[
    "membership_fee",
    "personal_training",
    "addon_service",
    "penalty",
    "refund",
    "adjustment",
    "upgrade_fee",
    "transfer_fee",
    "setup_fee",
]
PaymentMethod = Literal["cash", "card", "bank_transfer", "upi", "cheque", "emi", "wallet", "adjustment", "refund"]
PaymentStatus = Literal["paid", "partial", "pending", "overdue", "refunded", "cancelled"]
Frequency = Literal["weekly", "monthly", "quarterly"]
MemberStatus = Literal["active", "trial", "expired", "suspended", "pending_payment", "inactive"]


class ORMModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)


# Profiles / members


class ProfileFields(BaseModel):
    first_name: str = Field(..., min_length=1)
    last_name: str = ""
    phone: Optional[str] = None
    email: Optional[str] = None
    date_of_birth: Optional[date] = None
    gender: Optional[str] = None
    address: Optional[str] = None
    emergency_contact_name: Optional[str] = None
    emergency_contact_phone: Optional[str] = None
    user_id: Optional[str] = None


class ProfileUpdate(BaseModel):
    """Email is ignored on this path"""

    first_name: Optional[str] = Field(None, min_length=1)
    last_name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    date_of_birth: Optional[date] = None
    gender: Optional[str] = None
    address: Optional[str] = None
    emergency_contact_name: Optional[str] = None
    emergency_contact_phone: Optional[str] = None


class ProfileOut(ORMModel):
    id: uuid.UUID
    first_name: str
    last_name: str
    phone: Optional[str] = None
    email: Optional[str] = None
    date_of_birth: Optional[date] = None
    gender: Optional[str] = None
    address: Optional[str] = None
    emergency_contact_name: Optional[str] = None
    emergency_contact_phone: Optional[str] = None


class MemberCreate(ProfileFields):
    """Request body for POST /v1/members"""

    gym_id: uuid.UUID
    member_code: Optional[str] = None
    assigned_trainer_id: Optional[uuid.UUID] = None
    joining_date: Optional[date] = None
    status: MemberStatus = "active"
    source: Optional[str] = None
    notes: Optional[str] = None
    medical_clearance: bool = False
    waiver_signed: bool = False


class MemberUpdate(BaseModel):
    member_code: Optional[str] = None
    status: Optional[MemberStatus] = None
    joining_date: Optional[date] = None
    source: Optional[str] = None
    notes: Optional[str] = None
    credit_balance_cents: Optional[int] = None
    medical_clearance: Optional[bool] = None
    waiver_signed: Optional[bool] = None

    @field_validator(
        "member_code", "status", "joining_date", "credit_balance_cents", "medical_clearance", "waiver_signed"
    )
    @classmethod
    def reject_null(cls, value):
        # omit a field to leave it unchanged; these columns have no null state
        if value is None:
            raise ValueError("must not be null")
        return value


class TrainerBrief(ORMModel):
    id: uuid.UUID
    employee_code: str
    display_name: str


class MembershipOut(ORMModel):
    id: uuid.UUID
    member_id: uuid.UUID
    package_id: uuid.UUID
    payment_plan_id: Optional[uuid.UUID] = None
    start_date: date
    end_date: date
    actual_end_date: Optional[date] = None
    status: str
    original_amount_cents: int
    discount_applied_cents: int
    setup_fee_paid_cents: int
    security_deposit_paid_cents: int
    total_amount_due_cents: int
    amount_paid_cents: int
    amount_pending_cents: int
    is_trial: bool
    trial_converted_date: Optional[date] = None
    trial_conversion_discount_cents: int
    auto_renew: bool
    freeze_days_used: int
    freeze_start_date: Optional[date] = None
    freeze_end_date: Optional[date] = None
    freeze_reason: Optional[str] = None
    cancellation_date: Optional[date] = None
    cancellation_reason: Optional[str] = None
    refund_eligible_amount_cents: int
    refund_processed_amount_cents: int
    transferred_from_member_id: Optional[uuid.UUID] = None
    transferred_to_member_id: Optional[uuid.UUID] = None
    transfer_fee_paid_cents: int
    pt_sessions_remaining: int
    pt_sessions_used: int


class MemberOut(ORMModel):
    id: uuid.UUID
    gym_id: uuid.UUID
    member_code: str
    status: str
    joining_date: date
    assigned_trainer_id: Optional[uuid.UUID] = None
    source: Optional[str] = None
    notes: Optional[str] = None
    credit_balance_cents: int
    medical_clearance: bool
    waiver_signed: bool
    profile: ProfileOut
    current_membership: Optional[MembershipOut] = None


class MemberDetailOut(MemberOut):
    assigned_trainer: Optional[TrainerBrief] = None


class TrainerAssignment(BaseModel):
    trainer_id: uuid.UUID


class QRPayload(BaseModel):
    type: str
    member_id: str
    gym_id: str
    generated_at: str


# Packages


class PackageFields(BaseModel):
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    package_type: str = "general"
    package_category: Optional[str] = None
    duration_days: int = Field(..., gt=0)
    price_cents: int = Field(..., ge=0)
    setup_fee_cents: int = Field(0, ge=0)
    security_deposit_cents: int = Field(0, ge=0)
    features: List[str] = Field(default_factory=list)
    restrictions: List[str] = Field(default_factory=list)
    is_trial: bool = False
    is_active: bool = True
    is_featured: bool = False
    trainer_required: bool = False
    pt_sessions_included: int = Field(0, ge=0)
    max_sessions_per_day: int = Field(1, ge=1)
    guest_passes: int = Field(0, ge=0)
    freeze_allowance: int = Field(0, ge=0)
    cancellation_period: int = Field(0, ge=0)
    minimum_commitment_days: int = Field(0, ge=0)
    refund_percentage: float = Field(0.0, ge=0, le=100)
    transfer_fee_cents: int = Field(0, ge=0)
    upgrade_allowed: bool = True
    downgrade_allowed: bool = False
    display_order: int = 0


class PackageCreate(PackageFields):
    gym_id: uuid.UUID


class PackageUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    package_type: Optional[str] = None
    package_category: Optional[str] = None
    duration_days: Optional[int] = Field(None, gt=0)
    price_cents: Optional[int] = Field(None, ge=0)
    setup_fee_cents: Optional[int] = Field(None, ge=0)
    security_deposit_cents: Optional[int] = Field(None, ge=0)
    features: Optional[List[str]] = None
    restrictions: Optional[List[str]] = None
    is_trial: Optional[bool] = None
    is_active: Optional[bool] = None
    is_featured: Optional[bool] = None
    trainer_required: Optional[bool] = None
    pt_sessions_included: Optional[int] = Field(None, ge=0)
    max_sessions_per_day: Optional[int] = Field(None, ge=1)
    guest_passes: Optional[int] = Field(None, ge=0)
    freeze_allowance: Optional[int] = Field(None, ge=0)
    cancellation_period: Optional[int] = Field(None, ge=0)
    minimum_commitment_days: Optional[int] = Field(None, ge=0)
    refund_percentage: Optional[float] = Field(None, ge=0, le=100)
    transfer_fee_cents: Optional[int] = Field(None, ge=0)
    upgrade_allowed: Optional[bool] = None
    downgrade_allowed: Optional[bool] = None
    display_order: Optional[int] = None


class PackageOut(PackageFields, ORMModel):
    id: uuid.UUID
    gym_id: uuid.UUID


class PackageReorder(BaseModel):
    gym_id: uuid.UUID
    package_ids: List[uuid.UUID] = Field(..., min_length=1)


class PopularPackage(BaseModel):
    package: PackageOut
    member_count: int
    revenue_cents: int


class PackageAnalytics(BaseModel):
    total_packages: int
    active_packages: int
    trial_packages: int
    featured_packages: int
    average_price_cents: int
    price_range: Dict[str, int]
    packages_by_type: Dict[str, int]
    packages_by_category: Dict[str, int]
    popular_packages: List[PopularPackage]


# Memberships


class MembershipCreate(BaseModel):
    """Request body for POST /v1/memberships"""

    member_id: uuid.UUID
    package_id: uuid.UUID
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    original_amount_cents: Optional[int] = Field(None, ge=0)
    discount_applied_cents: int = Field(0, ge=0)
    setup_fee_paid_cents: int = Field(0, ge=0)
    security_deposit_paid_cents: int = Field(0, ge=0)
    total_amount_due_cents: Optional[int] = Field(None, ge=0)
    amount_paid_cents: int = Field(0, ge=0)
    is_trial: Optional[bool] = None
    auto_renew: bool = False
    status: Optional[str] = None
    pt_sessions_remaining: Optional[int] = Field(None, ge=0)


class MembershipUpdate(BaseModel):
    end_date: Optional[date] = None
    status: Optional[str] = None
    total_amount_due_cents: Optional[int] = Field(None, ge=0)
    amount_paid_cents: Optional[int] = Field(None, ge=0)
    discount_applied_cents: Optional[int] = Field(None, ge=0)
    auto_renew: Optional[bool] = None
    pt_sessions_remaining: Optional[int] = Field(None, ge=0)

    @field_validator(
        "end_date",
        "status",
        "total_amount_due_cents",
        "amount_paid_cents",
        "discount_applied_cents",
        "auto_renew",
        "pt_sessions_remaining",
    )
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("must not be null")
        return value


class MembershipCancel(BaseModel):
    cancellation_date: date = Field(default_factory=date.today)
    cancellation_reason: str = Field(..., min_length=1)
    cancellation_notice_period: Optional[int] = Field(None, ge=0)
    refund_eligible_amount_cents: Optional[int] = Field(None, ge=0)


class MembershipFreeze(BaseModel):
    freeze_start_date: date
    freeze_end_date: date
    freeze_reason: Optional[str] = None


class MembershipChangeRequest(BaseModel):
    new_package_id: uuid.UUID
    change_type: Literal["upgrade", "downgrade"]
    reason: Optional[str] = None
    amount_difference_cents: int = 0
    adjustment_amount_cents: int = 0
    additional_payment_cents: int = Field(0, ge=0)
    refund_amount_cents: int = Field(0, ge=0)
    prorated_amount_cents: int = 0
    remaining_days: Optional[int] = Field(None, ge=0)
    new_trainer_id: Optional[uuid.UUID] = None


class MembershipChangeOut(ORMModel):
    id: uuid.UUID
    member_id: uuid.UUID
    from_membership_id: Optional[uuid.UUID] = None
    to_membership_id: Optional[uuid.UUID] = None
    change_type: str
    change_date: date
    amount_difference_cents: int
    adjustment_amount_cents: int
    additional_payment_cents: int
    refund_amount_cents: int
    prorated_amount_cents: int
    remaining_days: Optional[int] = None
    new_trainer_id: Optional[uuid.UUID] = None
    reason: Optional[str] = None


class MembershipChangeResult(BaseModel):
    old_membership: MembershipOut
    new_membership: MembershipOut
    change: MembershipChangeOut


class MembershipTransfer(BaseModel):
    to_member_id: uuid.UUID
    transfer_fee_paid_cents: int = Field(0, ge=0)
    reason: Optional[str] = None


class TrialConversion(BaseModel):
    new_package_id: uuid.UUID
    trial_conversion_discount_cents: int = Field(0, ge=0)
    payment_plan_id: Optional[uuid.UUID] = None


# Payment plans


class InstallmentOut(ORMModel):
    id: uuid.UUID
    payment_plan_id: uuid.UUID
    installment_number: int
    amount_cents: int
    due_date: date
    paid_date: Optional[date] = None
    paid_amount_cents: int
    late_fee_cents: int
    status: str
    payment_method: Optional[str] = None
    transaction_reference: Optional[str] = None
    notes: Optional[str] = None


class PaymentPlanCreate(BaseModel):
    """Request body for POST /v1/payment-plans"""

    member_id: uuid.UUID
    total_amount_cents: int = Field(..., gt=0)
    down_payment_cents: int = Field(0, ge=0)
    number_of_installments: Optional[int] = Field(None, ge=1)
    installment_frequency: Optional[Frequency] = None
    first_installment_date: Optional[date] = None
    late_fee_percentage: Optional[float] = Field(None, ge=0)
    grace_period_days: Optional[int] = Field(None, ge=0)


class PaymentPlanOut(ORMModel):
    id: uuid.UUID
    gym_id: uuid.UUID
    member_id: uuid.UUID
    total_amount_cents: int
    down_payment_cents: int
    remaining_amount_cents: int
    number_of_installments: int
    installment_amount_cents: int
    installment_frequency: str
    first_installment_date: date
    last_installment_date: date
    late_fee_percentage: float
    grace_period_days: int
    status: str
    installments: List[InstallmentOut] = Field(default_factory=list)


class InstallmentPayment(BaseModel):
    paid_amount_cents: int = Field(..., gt=0)
    payment_method: PaymentMethod
    transaction_reference: Optional[str] = None
    notes: Optional[str] = None
    paid_on: Optional[date] = None


class PaymentSummaryOut(ORMModel):
    total_amount_cents: int
    down_payment_cents: int
    paid_amount_cents: int
    remaining_amount_cents: int
    overdue_amount_cents: int
    total_installments: int
    paid_installments: int
    pending_installments: int
    next_due_date: Optional[date] = None
    next_due_amount_cents: Optional[int] = None


# Payments


class PaymentCreate(BaseModel):
    """Request body for POST /v1/payments"""

    member_id: uuid.UUID
    membership_id: Optional[uuid.UUID] = None
    payment_type: PaymentType
    amount_cents: int = Field(..., gt=0)
    original_amount_cents: Optional[int] = Field(None, ge=0)
    payment_method: PaymentMethod
    payment_date: Optional[date] = None
    due_date: Optional[date] = None
    status: Optional[PaymentStatus] = None
    receipt_number: Optional[str] = None
    description: Optional[str] = None
    notes: Optional[str] = None
    transaction_id: Optional[str] = None


class PaymentUpdate(BaseModel):
    amount_cents: Optional[int] = Field(None, gt=0)
    payment_method: Optional[PaymentMethod] = None
    payment_date: Optional[date] = None
    status: Optional[PaymentStatus] = None
    description: Optional[str] = None
    notes: Optional[str] = None
    transaction_id: Optional[str] = None


class PaymentOut(ORMModel):
    id: uuid.UUID
    gym_id: uuid.UUID
    member_id: uuid.UUID
    membership_id: Optional[uuid.UUID] = None
    installment_id: Optional[uuid.UUID] = None
    payment_plan_id: Optional[uuid.UUID] = None
    payment_type: str
    amount_cents: int
    original_amount_cents: int
    payment_method: str
    payment_date: date
    due_date: Optional[date] = None
    status: str
    receipt_number: str
    description: Optional[str] = None
    notes: Optional[str] = None
    transaction_id: Optional[str] = None


# Attendance


class ScanRequest(BaseModel):
    code: str = Field(..., min_length=1, description="Member code or QR payload")
    gym_id: Optional[uuid.UUID] = Field(None, description="Gym of the scanning desk; scopes the member code lookup")


class AttendanceOut(ORMModel):
    id: uuid.UUID
    gym_id: uuid.UUID
    member_id: uuid.UUID
    membership_id: Optional[uuid.UUID] = None
    date: date
    check_in_time: datetime
    check_out_time: Optional[datetime] = None
    auto_checkout: bool
    notes: Optional[str] = None

    @computed_field
    @property
    def status(self) -> str:
        return attendance_state(self.check_out_time, self.auto_checkout)


class ScanMember(ORMModel):
    id: uuid.UUID
    member_code: str
    status: str
    profile: ProfileOut


class ScanResponse(ORMModel):
    success: bool
    message: str
    action: Optional[str] = None
    member: Optional[ScanMember] = None
    membership: Optional[MembershipOut] = None
    attendance: Optional[AttendanceOut] = None


class AttendanceStatsOut(ORMModel):
    today_total: int
    today_checked_in: int
    yesterday_total: int
    week_total: int
    month_total: int
    average_daily: int
    auto_checkouts: int
    peak_hour: str


class AutoCheckoutRequest(BaseModel):
    gym_id: Optional[uuid.UUID] = None


class AutoCheckoutResult(BaseModel):
    count: int
    message: str


class ManualCheckout(BaseModel):
    reason: Optional[str] = None


# Staff


class Shift(BaseModel):
    start: str
    end: str


class StaffCreate(ProfileFields):
    gym_id: uuid.UUID
    employee_code: Optional[str] = None
    role: Literal["manager", "trainer", "nutritionist", "receptionist", "housekeeping"]
    status: Literal["active", "inactive", "terminated", "on_leave", "probation"] = "active"
    salary_amount_cents: int = Field(0, ge=0)
    salary_type: Literal["monthly", "hourly", "commission"] = "monthly"
    base_commission_rate: float = Field(0.0, ge=0)
    hourly_rate_cents: Optional[int] = Field(None, ge=0)
    hire_date: date = Field(default_factory=date.today)
    specializations: List[str] = Field(default_factory=list)
    max_clients: Optional[int] = Field(None, ge=1)
    schedule: Dict[str, Optional[Shift]] = Field(default_factory=dict)


class StaffUpdate(BaseModel):
    role: Optional[Literal["manager", "trainer", "nutritionist", "receptionist", "housekeeping"]] = None
    salary_amount_cents: Optional[int] = Field(None, ge=0)
    salary_type: Optional[Literal["monthly", "hourly", "commission"]] = None
    base_commission_rate: Optional[float] = Field(None, ge=0)
    hourly_rate_cents: Optional[int] = Field(None, ge=0)
    specializations: Optional[List[str]] = None
    max_clients: Optional[int] = Field(None, ge=1)


class StaffStatusUpdate(BaseModel):
    status: str


class StaffOut(ORMModel):
    id: uuid.UUID
    gym_id: uuid.UUID
    employee_code: str
    role: str
    status: str
    salary_amount_cents: int
    salary_type: str
    base_commission_rate: float
    hourly_rate_cents: Optional[int] = None
    hire_date: date
    specializations: List[str]
    max_clients: Optional[int] = None
    schedule: Dict[str, Any]
    profile: ProfileOut


class TrainerOption(BaseModel):
    id: uuid.UUID
    name: str


class CommissionRuleCreate(BaseModel):
    member_id: uuid.UUID
    commission_type: Literal["per_session", "percentage", "fixed_amount"]
    commission_value: float = Field(..., ge=0)
    package_id: Optional[uuid.UUID] = None


class CommissionRuleOut(ORMModel):
    id: uuid.UUID
    trainer_id: uuid.UUID
    member_id: uuid.UUID
    package_id: Optional[uuid.UUID] = None
    commission_type: str
    commission_value: float
    is_active: bool


class EarningOut(ORMModel):
    id: uuid.UUID
    trainer_id: uuid.UUID
    member_id: uuid.UUID
    training_session_id: Optional[uuid.UUID] = None
    earning_type: str
    base_amount_cents: int
    commission_rate: Optional[float] = None
    commission_amount_cents: int
    earning_date: date
    earning_month: str
    is_paid: bool


class EarningsOut(BaseModel):
    earnings: List[EarningOut]
    total_cents: int
    paid_cents: int
    unpaid_cents: int


class EarningsMarkPaid(BaseModel):
    month: str = Field(..., pattern=r"^\d{4}-\d{2}$")


# Personal training


class PTSessionCreate(BaseModel):
    member_id: uuid.UUID
    trainer_id: uuid.UUID
    membership_id: Optional[uuid.UUID] = None
    session_date: date
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    duration_minutes: int = Field(60, gt=0)
    session_type: Optional[str] = None
    session_focus: Optional[str] = None
    total_sessions: Optional[int] = Field(None, ge=1)
    session_fee_cents: Optional[int] = Field(None, ge=0)
    trainer_fee_cents: Optional[int] = Field(None, ge=0)
    notes: Optional[str] = None


class PTSessionUpdate(BaseModel):
    session_date: Optional[date] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    duration_minutes: Optional[int] = Field(None, gt=0)
    session_focus: Optional[str] = None
    no_show: Optional[bool] = None
    notes: Optional[str] = None


class PTSessionComplete(BaseModel):
    session_rating: Optional[int] = Field(None, ge=1, le=5)
    member_feedback: Optional[str] = None
    trainer_notes: Optional[str] = None


class PTSessionCancel(BaseModel):
    cancellation_reason: str = Field(..., min_length=1)
    cancelled_by: Optional[str] = None
    cancellation_fee_cents: int = Field(0, ge=0)


class PTSessionOut(ORMModel):
    id: uuid.UUID
    member_id: uuid.UUID
    trainer_id: uuid.UUID
    membership_id: Optional[uuid.UUID] = None
    session_date: date
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    duration_minutes: int
    session_type: str
    session_focus: Optional[str] = None
    session_number: int
    total_sessions: int
    session_fee_cents: int
    trainer_fee_cents: int
    completed: bool
    cancelled: bool
    cancellation_reason: Optional[str] = None
    cancelled_by: Optional[str] = None
    cancellation_fee_cents: int
    no_show: bool
    session_rating: Optional[int] = None
    member_feedback: Optional[str] = None
    trainer_notes: Optional[str] = None
    notes: Optional[str] = None
    trainer_name: Optional[str] = None
    member_name: Optional[str] = None


# Refunds


class RefundCreate(BaseModel):
    membership_id: uuid.UUID
    requested_amount_cents: int = Field(..., gt=0)
    eligible_amount_cents: Optional[int] = Field(None, ge=0)
    original_payment_id: Optional[uuid.UUID] = None
    refund_type: Optional[str] = None
    reason: str = Field(..., min_length=1)
    member_comments: Optional[str] = None


class RefundUpdate(BaseModel):
    requested_amount_cents: Optional[int] = Field(None, gt=0)
    status: Optional[Literal["requested", "approved", "cancelled"]] = None
    reason: Optional[str] = None
    member_comments: Optional[str] = None
    admin_comments: Optional[str] = None


class RefundProcess(BaseModel):
    approved_amount_cents: Optional[int] = Field(None, ge=0)
    processing_fee_cents: int = Field(0, ge=0)
    refund_method: Optional[PaymentMethod] = None
    transaction_reference: Optional[str] = None
    admin_comments: Optional[str] = None


class RefundReject(BaseModel):
    admin_comments: Optional[str] = None


class RefundOut(ORMModel):
    id: uuid.UUID
    gym_id: uuid.UUID
    member_id: uuid.UUID
    membership_id: uuid.UUID
    original_payment_id: Optional[uuid.UUID] = None
    refund_type: str
    requested_amount_cents: int
    eligible_amount_cents: int
    approved_amount_cents: Optional[int] = None
    processing_fee_cents: int
    final_refund_amount_cents: Optional[int] = None
    reason: str
    member_comments: Optional[str] = None
    admin_comments: Optional[str] = None
    request_date: date
    processed_date: Optional[date] = None
    status: str
    refund_method: Optional[str] = None
    transaction_reference: Optional[str] = None


# Expenses


class ExpenseCreate(BaseModel):
    gym_id: uuid.UUID
    category: str = Field(..., min_length=1)
    subcategory: Optional[str] = None
    description: str = Field(..., min_length=1)
    amount_cents: int = Field(..., gt=0)
    expense_date: date = Field(default_factory=date.today)
    vendor_name: Optional[str] = None
    is_recurring: bool = False
    created_by: Optional[str] = None


class ExpenseUpdate(BaseModel):
    category: Optional[str] = Field(None, min_length=1)
    subcategory: Optional[str] = None
    description: Optional[str] = Field(None, min_length=1)
    amount_cents: Optional[int] = Field(None, gt=0)
    expense_date: Optional[date] = None
    vendor_name: Optional[str] = None
    is_recurring: Optional[bool] = None


class ExpenseOut(ORMModel):
    id: uuid.UUID
    gym_id: uuid.UUID
    category: str
    subcategory: Optional[str] = None
    description: str
    amount_cents: int
    expense_date: date
    vendor_name: Optional[str] = None
    is_recurring: bool


class ExpenseSummary(BaseModel):
    total_cents: int
    by_category: Dict[str, int]


# Dashboard


class IncomeRow(BaseModel):
    id: uuid.UUID
    amount_cents: int
    payment_type: str
    payment_method: str
    payment_date: date
    receipt_number: str
    member_id: uuid.UUID
    member_code: str
    member_name: str


class IncomeStatsOut(ORMModel):
    total_income_cents: int
    membership_income_cents: int
    pt_income_cents: int
    addon_income_cents: int
    penalty_income_cents: int
    setup_fee_income_cents: int
    transfer_fee_income_cents: int
    upgrade_fee_income_cents: int
    category_breakdown: Dict[str, int]
    daily_income: List[Dict[str, Any]]
    top_paying_members: List[Dict[str, Any]]


class MonthlyIncome(BaseModel):
    month: str
    income_cents: int
    expenses_cents: int
    profit_cents: int


class BirthdayOut(BaseModel):
    member_id: uuid.UUID
    member_code: str
    name: str
    phone: Optional[str] = None
    date_of_birth: date
    next_birthday: date
    days_until: int
    turning: int


# Audit


class ActivityLogOut(ORMModel):
    id: uuid.UUID
    gym_id: uuid.UUID
    actor_user_id: Optional[str] = None
    actor_profile_id: Optional[str] = None
    resource_type: str
    resource_id: str
    action: str
    description: Optional[str] = None
    before_data: Optional[Dict[str, Any]] = None
    after_data: Optional[Dict[str, Any]] = None
    created_at: datetime
