# app/schemas/certificate.py
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class CertificateResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    quiz_id: int
    quiz_title: Optional[str] = None
    certificate_code: str
    file_url: str
    issued_at: datetime


class CertificateListResponse(BaseModel):
    certificates: List[CertificateResponse]
    total: int
