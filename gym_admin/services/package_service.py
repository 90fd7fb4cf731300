"""Membership package catalogue"""

import copy
import uuid
from typing import Any, Dict, List

from sqlalchemy.orm import Session

from gym_admin.domain.analytics import package_analytics
from gym_admin.domain.exceptions import ConflictError, NotFoundError
from gym_admin.domain.packages import PACKAGE_TEMPLATES
from gym_admin.infrastructure.database.models import MembershipPackage
from gym_admin.infrastructure.database.repositories import GymRepository, PackageRepository

# Columns not carried over when a package is duplicated
_NOT_COPIED = ("id", "created_at", "name", "display_order")


class MembershipPackageService:
    def __init__(self, db: Session):
        self.db = db
        self.packages = PackageRepository(db)
        self.gyms = GymRepository(db)

    def get_packages(self, gym_id: uuid.UUID, **filters) -> List[MembershipPackage]:
        return self.packages.list_packages(gym_id, **filters)

    def get_package_by_id(self, package_id: uuid.UUID) -> MembershipPackage:
        package = self.packages.get(package_id)
        if not package:
            raise NotFoundError("Package", package_id)
        return package

    def create_package(self, data: Dict[str, Any]) -> MembershipPackage:
        if not self.gyms.get(data["gym_id"]):
            raise NotFoundError("Gym", data["gym_id"])
        return self.packages.add(**data)

    def update_package(self, package_id: uuid.UUID, updates: Dict[str, Any]) -> MembershipPackage:
        package = self.get_package_by_id(package_id)
        return self.packages.update(package, updates)

    def delete_package(self, package_id: uuid.UUID) -> None:
        package = self.get_package_by_id(package_id)
        in_use = self.packages.membership_count(package_id)
        if in_use:
            raise ConflictError(f"Package is used by {in_use} memberships; deactivate it instead")
        self.packages.delete(package)

    def duplicate_package(self, package_id: uuid.UUID) -> MembershipPackage:
        original = self.get_package_by_id(package_id)
        values = {
            column.key: copy.deepcopy(getattr(original, column.key))
            for column in MembershipPackage.__table__.columns
            if column.key not in _NOT_COPIED
        }
        return self.packages.add(name=f"{original.name} (Copy)", display_order=0, **values)

    def toggle_package_status(self, package_id: uuid.UUID) -> MembershipPackage:
        package = self.get_package_by_id(package_id)
        return self.packages.update(package, {"is_active": not package.is_active})

    def reorder_packages(self, gym_id: uuid.UUID, package_ids: List[uuid.UUID]) -> List[MembershipPackage]:
        """display_order follows the given order, starting at 1"""
        ordered = []
        for index, package_id in enumerate(package_ids):
            package = self.packages.get(package_id)
            if not package or package.gym_id != gym_id:
                raise NotFoundError("Package", package_id)
            package.display_order = index + 1
            ordered.append(package)
        self.db.flush()
        return ordered

    def get_package_analytics(self, gym_id: uuid.UUID) -> Dict[str, Any]:
        packages = self.packages.list_packages(gym_id)
        return package_analytics(packages, self.packages.usage(gym_id))

    @staticmethod
    def get_package_templates() -> List[Dict[str, Any]]:
        return copy.deepcopy(PACKAGE_TEMPLATES)
