import logging

from email_proof.domain.errors import ProofCodeAlreadyIssued
from email_proof.domain.proof_store import ProofCodeStore

logger = logging.getLogger(__name__)


async def issue_proof_code(store: ProofCodeStore, email: str) -> int:
    if await store.contains(email):
        logger.warning("timeout limit for proof code", extra={"email": email})
        raise ProofCodeAlreadyIssued()

    code = await store.generate_proof_code(email)
    logger.info("proof code issued", extra={"email": email})
    return code
