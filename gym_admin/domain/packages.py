"""Built-in membership package templates (amounts in cents)"""

from typing import Any, Dict, List

PACKAGE_TEMPLATES: List[Dict[str, Any]] = [
    {
        "name": "Basic Monthly",
        "description": "Essential gym access with basic amenities",
        "package_type": "general",
        "package_category": "Fitness",
        "duration_days": 30,
        "price_cents": 250_000,
        "setup_fee_cents": 50_000,
        "security_deposit_cents": 100_000,
        "features": ["Gym Access", "Locker", "Towel Service"],
        "restrictions": ["Peak hours only"],
        "is_trial": False,
        "is_featured": False,
        "trainer_required": False,
        "pt_sessions_included": 0,
        "max_sessions_per_day": 1,
        "guest_passes": 0,
        "freeze_allowance": 7,
        "cancellation_period": 30,
        "minimum_commitment_days": 0,
        "refund_percentage": 80,
        "transfer_fee_cents": 20_000,
        "upgrade_allowed": True,
        "downgrade_allowed": False,
    },
    {
        "name": "Premium Monthly",
        "description": "Full gym access with premium amenities and personal training",
        "package_type": "personal_training",
        "package_category": "Premium",
        "duration_days": 30,
        "price_cents": 500_000,
        "setup_fee_cents": 100_000,
        "security_deposit_cents": 200_000,
        "features": [
            "Gym Access",
            "Personal Training",
            "Nutrition Consultation",
            "Locker",
            "Towel Service",
            "Sauna Access",
        ],
        "restrictions": [],
        "is_trial": False,
        "is_featured": True,
        "trainer_required": True,
        "pt_sessions_included": 8,
        "max_sessions_per_day": 2,
        "guest_passes": 2,
        "freeze_allowance": 14,
        "cancellation_period": 30,
        "minimum_commitment_days": 0,
        "refund_percentage": 90,
        "transfer_fee_cents": 50_000,
        "upgrade_allowed": True,
        "downgrade_allowed": True,
    },
    {
        "name": "7-Day Trial",
        "description": "Try our gym for a week with full access",
        "package_type": "trial",
        "package_category": "Trial",
        "duration_days": 7,
        "price_cents": 100_000,
        "setup_fee_cents": 0,
        "security_deposit_cents": 0,
        "features": ["Gym Access", "Locker", "Towel Service"],
        "restrictions": ["One-time use only"],
        "is_trial": True,
        "is_featured": False,
        "trainer_required": False,
        "pt_sessions_included": 1,
        "max_sessions_per_day": 1,
        "guest_passes": 0,
        "freeze_allowance": 0,
        "cancellation_period": 0,
        "minimum_commitment_days": 0,
        "refund_percentage": 100,
        "transfer_fee_cents": 0,
        "upgrade_allowed": True,
        "downgrade_allowed": False,
    },
    {
        "name": "Annual Premium",
        "description": "Best value with 12 months of premium access",
        "package_type": "general",
        "package_category": "Premium",
        "duration_days": 365,
        "price_cents": 5_000_000,
        "setup_fee_cents": 0,
        "security_deposit_cents": 200_000,
        "features": [
            "Gym Access",
            "Personal Training",
            "Group Classes",
            "Locker",
            "Towel Service",
            "Sauna Access",
            "Guest Passes",
        ],
        "restrictions": [],
        "is_trial": False,
        "is_featured": True,
        "trainer_required": False,
        "pt_sessions_included": 12,
        "max_sessions_per_day": 2,
        "guest_passes": 12,
        "freeze_allowance": 30,
        "cancellation_period": 60,
        "minimum_commitment_days": 90,
        "refund_percentage": 85,
        "transfer_fee_cents": 100_000,
        "upgrade_allowed": True,
        "downgrade_allowed": False,
    },
]
