"""/v1/packages - membership package catalogue"""

import uuid
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from starlette.responses import Response

from gym_admin.api.v1.schemas import (
    PackageAnalytics,
    PackageCreate,
    PackageOut,
    PackageReorder,
    PackageUpdate,
)
from gym_admin.infrastructure.database.session import get_db, transaction
from gym_admin.services import MembershipPackageService

router = APIRouter()


@router.get("/packages", response_model=List[PackageOut])
def list_packages(
    gym_id: uuid.UUID = Query(...),
    is_active: Optional[bool] = Query(None),
    package_type: Optional[str] = Query(None),
    is_trial: Optional[bool] = Query(None),
    is_featured: Optional[bool] = Query(None),
    category: Optional[str] = Query(None),
    min_price_cents: Optional[int] = Query(None, ge=0),
    max_price_cents: Optional[int] = Query(None, ge=0),
    search: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    return MembershipPackageService(db).get_packages(
        gym_id,
        is_active=is_active,
        package_type=package_type,
        is_trial=is_trial,
        is_featured=is_featured,
        category=category,
        min_price_cents=min_price_cents,
        max_price_cents=max_price_cents,
        search=search,
    )


@router.post("/packages", response_model=PackageOut, status_code=201)
def create_package(body: PackageCreate, db: Session = Depends(get_db)):
    with transaction(db):
        package = MembershipPackageService(db).create_package(body.model_dump())
    return package


@router.get("/packages/templates", response_model=List[Dict[str, Any]])
def package_templates():
    return MembershipPackageService.get_package_templates()


@router.get("/packages/analytics", response_model=PackageAnalytics)
def package_analytics(gym_id: uuid.UUID = Query(...), db: Session = Depends(get_db)):
    return MembershipPackageService(db).get_package_analytics(gym_id)


@router.post("/packages/reorder", response_model=List[PackageOut])
def reorder_packages(body: PackageReorder, db: Session = Depends(get_db)):
    with transaction(db):
        packages = MembershipPackageService(db).reorder_packages(body.gym_id, body.package_ids)
    return packages


@router.get("/packages/{package_id}", response_model=PackageOut)
def get_package(package_id: uuid.UUID, db: Session = Depends(get_db)):
    return MembershipPackageService(db).get_package_by_id(package_id)


@router.patch("/packages/{package_id}", response_model=PackageOut)
def update_package(package_id: uuid.UUID, body: PackageUpdate, db: Session = Depends(get_db)):
    with transaction(db):
        package = MembershipPackageService(db).update_package(package_id, body.model_dump(exclude_unset=True))
    return package


@router.delete("/packages/{package_id}", status_code=204)
def delete_package(package_id: uuid.UUID, db: Session = Depends(get_db)):
    with transaction(db):
        MembershipPackageService(db).delete_package(package_id)
    return Response(status_code=204)


@router.post("/packages/{package_id}/duplicate", response_model=PackageOut, status_code=201)
def duplicate_package(package_id: uuid.UUID, db: Session = Depends(get_db)):
    with transaction(db):
        package = MembershipPackageService(db).duplicate_package(package_id)
    return package


@router.post("/packages/{package_id}/toggle", response_model=PackageOut)
def toggle_package(package_id: uuid.UUID, db: Session = Depends(get_db)):
    with transaction(db):
        package = MembershipPackageService(db).toggle_package_status(package_id)
    return package
