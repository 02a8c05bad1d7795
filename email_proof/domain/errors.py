class DomainError(Exception):
    """Base class for all domain-level errors."""

    pass


class ProofCodeAlreadyIssued(DomainError):
    """An unexpired proof code already exists for this email (resend too soon)."""

    pass


class InvalidProofCode(DomainError):
    """Submitted proof code is missing, expired or does not match."""

    pass


class ProofStoreConflict(DomainError):
    """Concurrent writers kept changing the collection; compare-and-swap gave up."""

    pass


class ProofItemsDecodeError(DomainError):
    """Stored proof-item payload is corrupt or in an unknown format."""

    pass
