from __future__ import annotations

from dataclasses import dataclass

import jwt

from ideahub.domain.errors import AuthenticationError
from ideahub.domain.models import Identity


@dataclass(frozen=True)
class BearerTokenVerifier:
    """Decodes JWT bearer tokens into identities.

    With a secret configured the HS256 signature is checked. Without one the
    payload is decoded unverified, which is only suitable for local mode where
    tokens are checked upstream.
    """

    secret: str | None = None
    algorithms: tuple[str, ...] = ("HS256",)

    def verify(self, token: str) -> Identity:
        if not token:
            raise AuthenticationError("Missing bearer token")
        try:
            if self.secret:
                claims = jwt.decode(token, self.secret, algorithms=list(self.algorithms))
            else:
                claims = jwt.decode(token, options={"verify_signature": False})
        except jwt.PyJWTError as exc:
            raise AuthenticationError("Invalid token") from exc

        subject_id = claims.get("sub")
        if not isinstance(subject_id, str) or not subject_id:
            raise AuthenticationError("Invalid token")
        email = claims.get("email")
        return Identity(subject_id=subject_id, email=email if isinstance(email, str) else None)


def parse_bearer_header(authorization: str | None) -> str:
    if not authorization or not authorization.startswith("Bearer "):
        raise AuthenticationError("Missing or invalid authorization header")
    return authorization[len("Bearer ") :].strip()
