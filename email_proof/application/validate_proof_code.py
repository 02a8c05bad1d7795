from email_proof.domain.errors import InvalidProofCode
from email_proof.domain.proof_store import ProofCodeStore


async def validate_proof_code(store: ProofCodeStore, email: str, code: int) -> None:
    if not await store.validate_proof_code(email, code):
        raise InvalidProofCode()
