from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Response, status

from email_proof.application.issue_proof_code import issue_proof_code
from email_proof.application.validate_proof_code import validate_proof_code
from email_proof.domain.errors import (
    InvalidProofCode,
    ProofCodeAlreadyIssued,
    ProofStoreConflict,
)
from email_proof.domain.proof_store import ProofCodeStore
from email_proof.presentation.dependencies import get_proof_store
from email_proof.schemas.requests import ProofCodeIn, ProofEmailIn
from email_proof.schemas.responses import ProofItemOut

router = APIRouter(prefix="/email", tags=["Email"])

ProofStore = Annotated[ProofCodeStore, Depends(get_proof_store)]


def _busy() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="proof store busy"
    )


# TODO: restrict to admins once the gateway forwards roles
@router.get("/proof-codes", response_model=list[ProofItemOut])
async def get_proof_codes(store: ProofStore):
    items = await store.list_valid_proof_items()
    return [
        ProofItemOut(email=item.email, code=item.code, created_at=item.created_at)
        for item in items
    ]


@router.post("/proof_email", status_code=status.HTTP_204_NO_CONTENT)
async def post_proof_email(body: ProofEmailIn, store: ProofStore):
    try:
        await issue_proof_code(store, body.email)
    except ProofCodeAlreadyIssued:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="timeout")
    except ProofStoreConflict:
        raise _busy()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/validate_code", status_code=status.HTTP_204_NO_CONTENT)
async def post_validate_code(body: ProofCodeIn, store: ProofStore):
    try:
        await validate_proof_code(store, body.email, body.proof_code)
    except InvalidProofCode:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="invalid proof code"
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/proof-codes/{email}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_proof_code(email: str, store: ProofStore):
    try:
        await store.delete_proof_code(email)
    except ProofStoreConflict:
        raise _busy()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
