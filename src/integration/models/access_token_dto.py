from dataclasses import dataclass

from integration.models.user_dto import UserSummaryDto


@dataclass
class AccessTokenDto:
    access_token: str
    expires_in: int
    user: UserSummaryDto
    token_type: str = "bearer"
