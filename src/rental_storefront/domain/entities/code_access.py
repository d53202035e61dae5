from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from rental_storefront.domain.entities.access_grant import AccessGrant
from rental_storefront.domain.entities.code_validation import CodeValidation


@dataclass(frozen=True)
class CodeAccess:
    code: str
    email: str
    validation: CodeValidation
    grant: AccessGrant
    added_at: datetime
