# app/routers/certificate.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.dependencies import get_current_user
from app.models.user import User
from app.schemas.certificate import CertificateListResponse
from app.services.certificate import CertificateService

router = APIRouter(prefix="/user/certificates", tags=["Certificates"])


@router.get("/", response_model=CertificateListResponse)
def list_my_certificates(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Certificates earned by the current user, newest first"""
    service = CertificateService(db)
    certificates = service.list_user_certificates(current_user.id)
    return {"certificates": certificates, "total": len(certificates)}
