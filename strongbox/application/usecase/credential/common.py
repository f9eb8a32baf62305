"""Response items shared by credential use cases."""

from pydantic import BaseModel

from strongbox.domain.model import CredentialEnvelope


class CredentialItem(BaseModel):
    """A stored credential as reported back to the caller."""

    credential_id: str
    name: str
    path: str
    state: str
    version: int

    @classmethod
    def from_envelope(cls, credential: CredentialEnvelope) -> "CredentialItem":
        body = credential.body
        return cls(
            credential_id=str(credential.id),
            name=body.name,
            path=str(body.path_exp),
            state=body.state.value,
            version=credential.version,
        )
