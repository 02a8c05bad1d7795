from datetime import datetime

from pydantic import BaseModel, Field


class ProofItemOut(BaseModel):
    email: str = Field(..., description="Address the code was issued for")
    code: int = Field(..., description="4-digit proof code")
    created_at: datetime = Field(..., description="Issuance time (UTC)")
