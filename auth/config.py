"""Authentication configuration."""

from pydantic import BaseModel, Field


class AuthConfig(BaseModel):
    """
    Authentication configuration.

    The token signing secret is not part of this model; it comes from
    Vault (see clients.vault_client.get_jwt_secret).
    """

    # Token settings
    token_expiry_minutes: int = Field(
        default=60,
        description="Bearer token lifetime in minutes",
        ge=5,
        le=10080,  # 7 days
    )
    token_algorithm: str = Field(
        default="HS256",
        description="JWT signing algorithm",
        pattern=r"^HS(256|384|512)$",
    )
    token_issuer: str = Field(
        default="task-manager",
        description="Value of the iss claim; tokens from other issuers are rejected",
    )

    # Password settings
    password_min_length: int = Field(
        default=6,
        description="Minimum password length accepted at registration",
        ge=6,
        le=128,
    )
    bcrypt_rounds: int = Field(
        default=12,
        description="bcrypt work factor",
        ge=4,
        le=16,
    )
