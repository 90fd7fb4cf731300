"""Data access for membership packages"""

import uuid
from typing import Dict, List, Optional, Tuple

from sqlalchemy import func, or_

from gym_admin.infrastructure.database.models import Membership, MembershipPackage
from gym_admin.infrastructure.database.repositories.base import BaseRepository


class PackageRepository(BaseRepository):
    model = MembershipPackage

    def list_packages(
        self,
        gym_id: uuid.UUID,
        is_active: Optional[bool] = None,
        package_type: Optional[str] = None,
        is_trial: Optional[bool] = None,
        is_featured: Optional[bool] = None,
        category: Optional[str] = None,
        min_price_cents: Optional[int] = None,
        max_price_cents: Optional[int] = None,
        search: Optional[str] = None,
    ) -> List[MembershipPackage]:
        query = self.db.query(MembershipPackage).filter(MembershipPackage.gym_id == gym_id)

        if is_active is not None:
            query = query.filter(MembershipPackage.is_active == is_active)
        if package_type:
            query = query.filter(MembershipPackage.package_type == package_type)
        if is_trial is not None:
            query = query.filter(MembershipPackage.is_trial == is_trial)
        if is_featured is not None:
            query = query.filter(MembershipPackage.is_featured == is_featured)
        if category:
            query = query.filter(MembershipPackage.package_category == category)
        if min_price_cents is not None:
            query = query.filter(MembershipPackage.price_cents >= min_price_cents)
        if max_price_cents is not None:
            query = query.filter(MembershipPackage.price_cents <= max_price_cents)
        if search:
            pattern = f"%{search}%"
            query = query.filter(
                or_(
                    MembershipPackage.name.ilike(pattern),
                    MembershipPackage.description.ilike(pattern),
                    MembershipPackage.package_type.ilike(pattern),
                )
            )

        return query.order_by(MembershipPackage.display_order.asc(), MembershipPackage.created_at.asc()).all()

    def membership_count(self, package_id: uuid.UUID) -> int:
        return (
            self.db.query(func.count(Membership.id))
            .filter(Membership.package_id == package_id)
            .scalar()
            or 0
        )

    def usage(self, gym_id: uuid.UUID) -> Dict[uuid.UUID, Tuple[int, int]]:
        """package id -> (membership count, amount paid cents)"""
        rows = (
            self.db.query(
                Membership.package_id,
                func.count(Membership.id),
                func.coalesce(func.sum(Membership.amount_paid_cents), 0),
            )
            .join(MembershipPackage, MembershipPackage.id == Membership.package_id)
            .filter(MembershipPackage.gym_id == gym_id)
            .group_by(Membership.package_id)
            .all()
        )
        return {package_id: (count, int(revenue)) for package_id, count, revenue in rows}
