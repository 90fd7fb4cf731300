"""Repository package - expose all concrete repositories from one import"""
from .activity_logs import ActivityLogRepository
from .attendance import AttendanceRepository
from .expenses import ExpenseRepository
from .gyms import GymRepository
from .members import MemberRepository, ProfileRepository
from .memberships import MembershipChangeRepository, MembershipRepository
from .packages import PackageRepository
from .payment_plans import InstallmentRepository, PaymentPlanRepository
from .payments import PaymentRepository
from .refunds import RefundRequestRepository
from .staff import CommissionRuleRepository, StaffRepository, TrainerEarningRepository
from .training import TrainingSessionRepository

__all__ = [
    "ActivityLogRepository",
    "AttendanceRepository",
    "CommissionRuleRepository",
    "ExpenseRepository",
    "GymRepository",
    "InstallmentRepository",
    "MemberRepository",
    "MembershipChangeRepository",
    "MembershipRepository",
    "PackageRepository",
    "PaymentPlanRepository",
    "PaymentRepository",
    "ProfileRepository",
    "RefundRequestRepository",
    "StaffRepository",
    "TrainerEarningRepository",
    "TrainingSessionRepository",
]
