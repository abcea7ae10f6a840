"""Application interfaces (ports): repository and service protocols.

Define contracts for infrastructure implementations (DIP).
No runtime imports from app.infrastructure.
"""

from app.application.interfaces.repositories import (
    ICompanyMemberRepository,
    ICompanyRepository,
    IPasswordResetRepository,
    IStoreRepository,
    IUserRepository,
)
from app.application.interfaces.services import (
    ICredentialCipher,
    INotificationService,
    IStoreApiClient,
    IStoreApiClientFactory,
)

__all__ = [
    "ICompanyMemberRepository",
    "ICompanyRepository",
    "ICredentialCipher",
    "INotificationService",
    "IPasswordResetRepository",
    "IStoreApiClient",
    "IStoreApiClientFactory",
    "IStoreRepository",
    "IUserRepository",
]
