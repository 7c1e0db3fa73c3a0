"""Typed verification outcome, collapsed to a bool only at the public edge."""

from dataclasses import dataclass
from enum import Enum

from schemes import VerificationScheme


class FailureReason(str, Enum):
    MISSING_INPUT = "missing_input"
    MISSING_PREFIX = "missing_prefix"
    UNKNOWN_SCHEME = "unknown_scheme"
    SCHEME_DISABLED = "scheme_disabled"
    AMBIGUOUS_SCHEME = "ambiguous_scheme"
    IDENTITY_SHAPE = "identity_shape"
    MALFORMED_SIGNATURE = "malformed_signature"
    MALFORMED_DIGEST = "malformed_digest"
    INVALID_SIGNATURE = "invalid_signature"
    SIGNER_MISMATCH = "signer_mismatch"
    UNSUPPORTED = "unsupported"
    INTERNAL_ERROR = "internal_error"


@dataclass(frozen=True)
class VerificationResult:
    ok: bool
    scheme: VerificationScheme | None = None
    reason: FailureReason | None = None
    detail: str = ""

    def __bool__(self) -> bool:
        return self.ok

    @classmethod
    def success(cls, scheme: VerificationScheme) -> "VerificationResult":
        return cls(ok=True, scheme=scheme)

    @classmethod
    def failure(
        cls,
        reason: FailureReason,
        detail: str = "",
        scheme: VerificationScheme | None = None,
    ) -> "VerificationResult":
        return cls(ok=False, scheme=scheme, reason=reason, detail=detail)
