from pydantic import BaseModel, EmailStr, Field

from email_proof.domain.services import PROOF_CODE_MAX, PROOF_CODE_MIN


class ProofEmailIn(BaseModel):
    email: EmailStr = Field(..., description="Address to prove", max_length=255)


class ProofCodeIn(BaseModel):
    email: EmailStr = Field(..., description="Address being proven", max_length=255)
    proof_code: int = Field(..., ge=PROOF_CODE_MIN, le=PROOF_CODE_MAX)
