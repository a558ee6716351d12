from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from taskportal.api.deps import db, require_admin
from taskportal.schemas.user import StaffCreate, StaffUpdate, StaffOut
from taskportal.services import staff as staff_service

router = APIRouter(prefix="/staff", tags=["staff"])

@router.get("", response_model=list[StaffOut])
def list_staff(s: Session = Depends(db), admin=Depends(require_admin)):
    return staff_service.list_staff(s)

@router.post("", response_model=StaffOut, status_code=201)
def create_staff(body: StaffCreate, s: Session = Depends(db), admin=Depends(require_admin)):
    return staff_service.create_staff(s, admin, body.username, body.password, body.position)

@router.put("/{staff_id}", response_model=StaffOut)
def update_staff(staff_id: int, body: StaffUpdate, s: Session = Depends(db), admin=Depends(require_admin)):
    return staff_service.update_staff(s, admin, staff_id, body.username, body.position, password=body.password)

@router.delete("/{staff_id}")
def delete_staff(staff_id: int, s: Session = Depends(db), admin=Depends(require_admin)):
    staff_service.delete_staff(s, admin, staff_id)
    return {"success": True}
