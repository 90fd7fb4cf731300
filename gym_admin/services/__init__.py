"""Services package - expose all concrete services from one import"""
from .activity_log_service import ActivityLogService
from .attendance_service import AttendanceService
from .dashboard_service import DashboardService
from .expense_service import ExpenseService
from .member_service import MemberService
from .membership_service import MembershipService
from .package_service import MembershipPackageService
from .payment_plan_service import PaymentPlanService
from .payment_service import PaymentService
from .refund_service import RefundService
from .staff_service import StaffService
from .training_service import PTService

__all__ = [
    "ActivityLogService",
    "AttendanceService",
    "DashboardService",
    "ExpenseService",
    "MemberService",
    "MembershipPackageService",
    "MembershipService",
    "PTService",
    "PaymentPlanService",
    "PaymentService",
    "RefundService",
    "StaffService",
]
